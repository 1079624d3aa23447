# utils/reference_parser.py
"""
Parse human-readable references into a Locator.

Handles:
- "Genesis 1" (chapter only)
- "John 3:16" (single verse)
- "John 3:16-21", "John 3:16 – 21" (verse range)
- "1 Corinthians 13", "1John 4:8", "Gen. 1:1"
- "Song of Solomon 2:1" (multi-word book names)

The book token is left exactly as typed (apart from whitespace and trailing
periods); matching it to a canonical name is the book resolver's job.
"""

import re

from models import Locator
from utils.errors import ParseError

# Optional leading digit, then one or more alphabetic words
BOOK_PATTERN = re.compile(r'^(\d\s*)?([^\W\d_]+\.?(?:\s+[^\W\d_]+\.?)*)')

CHAPTER_VERSE_PATTERN = re.compile(
    r'(?P<chapter>\d+)(?:\s*:\s*(?P<start>\d+)(?:\s*[-–—]\s*(?P<end>\d+))?)?'
)


def _to_int(value):
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ParseError("invalid number")
    if number < 1:
        raise ParseError("invalid number")
    return number


def _clean_book_token(prefix, words):
    token = f"{prefix.strip()} {words}" if prefix else words
    token = token.replace('.', '')
    return re.sub(r'\s+', ' ', token).strip()


def parse_reference(text):
    """Parse a reference like 'John 3:16-21' into a Locator.

    Raises ParseError when the text has no book token or no chapter, when a
    number is not a positive integer, or when a range runs backwards.
    """
    if text is None:
        raise ParseError("empty reference")
    text = text.strip()
    if not text:
        raise ParseError("empty reference")

    book_match = BOOK_PATTERN.match(text)
    if not book_match:
        raise ParseError("missing book")

    prefix, words = book_match.groups()
    book_token = _clean_book_token(prefix, words)

    remainder = text[book_match.end():]
    cv_match = CHAPTER_VERSE_PATTERN.search(remainder)
    if not cv_match:
        raise ParseError("missing chapter")

    chapter = _to_int(cv_match.group('chapter'))
    verse_start = None
    verse_end = None
    if cv_match.group('start') is not None:
        verse_start = _to_int(cv_match.group('start'))
    if cv_match.group('end') is not None:
        verse_end = _to_int(cv_match.group('end'))
        if verse_end < verse_start:
            raise ParseError("invalid range: start > end")

    return Locator(
        raw_book_token=book_token,
        chapter=chapter,
        verse_start=verse_start,
        verse_end=verse_end
    )


def format_reference(book, chapter, verse_start=None, verse_end=None):
    """Build 'Book C', 'Book C:V' or 'Book C:V-W'."""
    reference = f"{book} {chapter}"
    if verse_start is not None:
        reference += f":{verse_start}"
        if verse_end is not None:
            reference += f"-{verse_end}"
    return reference
