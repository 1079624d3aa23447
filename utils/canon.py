# utils/canon.py
"""Protestant canon: book order, three-letter codes, testament and chapter counts."""

# (canonical name, code, testament, chapter count)
CANON = [
    ('Genesis', 'GEN', 'old', 50),
    ('Exodus', 'EXO', 'old', 40),
    ('Leviticus', 'LEV', 'old', 27),
    ('Numbers', 'NUM', 'old', 36),
    ('Deuteronomy', 'DEU', 'old', 34),
    ('Joshua', 'JOS', 'old', 24),
    ('Judges', 'JDG', 'old', 21),
    ('Ruth', 'RUT', 'old', 4),
    ('1 Samuel', 'SA1', 'old', 31),
    ('2 Samuel', 'SA2', 'old', 24),
    ('1 Kings', 'KI1', 'old', 22),
    ('2 Kings', 'KI2', 'old', 25),
    ('1 Chronicles', 'CH1', 'old', 29),
    ('2 Chronicles', 'CH2', 'old', 36),
    ('Ezra', 'EZR', 'old', 10),
    ('Nehemiah', 'NEH', 'old', 13),
    ('Esther', 'EST', 'old', 10),
    ('Job', 'JOB', 'old', 42),
    ('Psalms', 'PSA', 'old', 150),
    ('Proverbs', 'PRO', 'old', 31),
    ('Ecclesiastes', 'ECC', 'old', 12),
    ('Song of Solomon', 'SNG', 'old', 8),
    ('Isaiah', 'ISA', 'old', 66),
    ('Jeremiah', 'JER', 'old', 52),
    ('Lamentations', 'LAM', 'old', 5),
    ('Ezekiel', 'EZK', 'old', 48),
    ('Daniel', 'DAN', 'old', 12),
    ('Hosea', 'HOS', 'old', 14),
    ('Joel', 'JOL', 'old', 3),
    ('Amos', 'AMO', 'old', 9),
    ('Obadiah', 'OBA', 'old', 1),
    ('Jonah', 'JON', 'old', 4),
    ('Micah', 'MIC', 'old', 7),
    ('Nahum', 'NAH', 'old', 3),
    ('Habakkuk', 'HAB', 'old', 3),
    ('Zephaniah', 'ZEP', 'old', 3),
    ('Haggai', 'HAG', 'old', 2),
    ('Zechariah', 'ZEC', 'old', 14),
    ('Malachi', 'MAL', 'old', 4),
    ('Matthew', 'MAT', 'new', 28),
    ('Mark', 'MRK', 'new', 16),
    ('Luke', 'LUK', 'new', 24),
    ('John', 'JHN', 'new', 21),
    ('Acts', 'ACT', 'new', 28),
    ('Romans', 'ROM', 'new', 16),
    ('1 Corinthians', 'CO1', 'new', 16),
    ('2 Corinthians', 'CO2', 'new', 13),
    ('Galatians', 'GAL', 'new', 6),
    ('Ephesians', 'EPH', 'new', 6),
    ('Philippians', 'PHP', 'new', 4),
    ('Colossians', 'COL', 'new', 4),
    ('1 Thessalonians', 'TH1', 'new', 5),
    ('2 Thessalonians', 'TH2', 'new', 3),
    ('1 Timothy', 'TI1', 'new', 6),
    ('2 Timothy', 'TI2', 'new', 4),
    ('Titus', 'TIT', 'new', 3),
    ('Philemon', 'PHM', 'new', 1),
    ('Hebrews', 'HEB', 'new', 13),
    ('James', 'JAS', 'new', 5),
    ('1 Peter', 'PE1', 'new', 5),
    ('2 Peter', 'PE2', 'new', 3),
    ('1 John', 'JO1', 'new', 5),
    ('2 John', 'JO2', 'new', 1),
    ('3 John', 'JO3', 'new', 1),
    ('Jude', 'JUD', 'new', 1),
    ('Revelation', 'REV', 'new', 22)
]

BOOK_NAMES = [name for name, _, _, _ in CANON]
CHAPTER_COUNTS = {name: chapters for name, _, _, chapters in CANON}


def canonical_index(name):
    """Position of a book in canonical order; unknown names sort last."""
    try:
        return BOOK_NAMES.index(name)
    except ValueError:
        return len(BOOK_NAMES)


def books_in_testament(testament):
    return [name for name, _, t, _ in CANON if t == testament]
