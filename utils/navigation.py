# utils/navigation.py
"""Step to the next or previous chapter, crossing book boundaries."""


def _chapter_sequence(translation):
    return [
        (book.canonical_name, chapter.number)
        for book in translation.books
        for chapter in book.chapters
    ]


def adjacent_chapter(translation, book_name, chapter, step):
    """Return (book, chapter) `step` chapters away, or None past either end."""
    sequence = _chapter_sequence(translation)
    try:
        position = sequence.index((book_name, chapter))
    except ValueError:
        return None
    target = position + step
    if 0 <= target < len(sequence):
        return sequence[target]
    return None


def next_chapter(translation, book_name, chapter):
    return adjacent_chapter(translation, book_name, chapter, 1)


def previous_chapter(translation, book_name, chapter):
    return adjacent_chapter(translation, book_name, chapter, -1)
