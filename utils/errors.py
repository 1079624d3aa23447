# utils/errors.py
"""
Error kinds raised while looking up Scripture.

ParseError, BookNotFoundError, ChapterNotFoundError and VerseNotFoundError are
user-correctable and end up in ResolvedPassage.error. TranslationLoadError is
the only one touching I/O and the only one worth retrying.
"""


class BibleLookupError(Exception):
    """Base class for reference lookup failures."""
    pass


class ParseError(BibleLookupError):
    """The reference string cannot be split into a book and a chapter."""
    pass


class BookNotFoundError(BibleLookupError):
    def __init__(self, token):
        self.token = token
        super().__init__(f'Book "{token}" not found')


class ChapterNotFoundError(BibleLookupError):
    def __init__(self, book, chapter):
        self.book = book
        self.chapter = chapter
        super().__init__(f"chapter {chapter} not found in {book}")


class VerseNotFoundError(BibleLookupError):
    def __init__(self, book, chapter, verse):
        self.book = book
        self.chapter = chapter
        self.verse = verse
        super().__init__(f"verse {verse} not found in {book} {chapter}")


class TranslationLoadError(Exception):
    """The content source failed or returned malformed data."""

    def __init__(self, translation_id, reason):
        self.translation_id = translation_id
        self.reason = reason
        super().__init__(f'Bible version "{translation_id}" could not be loaded: {reason}')


class TranslationLoadTimeout(TranslationLoadError):
    def __init__(self, translation_id, timeout):
        self.timeout = timeout
        super().__init__(translation_id, f"timed out after {timeout} seconds")


class TranslationNotFoundError(BibleLookupError):
    """The translation id is not one this service offers."""

    def __init__(self, translation_id):
        self.translation_id = translation_id
        super().__init__(f'Bible version "{translation_id}" not found')
