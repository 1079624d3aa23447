# utils/passage_resolver.py
import logging

from models import PassageVerse, ResolvedPassage
from utils.book_resolver import resolve_book_name
from utils.errors import (
    BibleLookupError,
    ChapterNotFoundError,
    ParseError,
    VerseNotFoundError,
)
from utils.reference_parser import format_reference, parse_reference

logger = logging.getLogger(__name__)


def _select_verses(locator, book, chapter):
    if locator.verse_start is None:
        return list(chapter.verses)

    if locator.verse_end is None:
        verse = chapter.verse(locator.verse_start)
        if verse is None:
            raise VerseNotFoundError(book.canonical_name, chapter.number, locator.verse_start)
        return [verse]

    # Walk the verses the chapter has; ranges may have gaps in some translations
    return [
        verse for verse in chapter.verses
        if locator.verse_start <= verse.number <= locator.verse_end
    ]


def resolve_passage(locator, translation):
    """Resolve a Locator against a loaded Translation.

    Never raises for lookup problems: a missing book, chapter or verse comes
    back as ResolvedPassage.error with an empty verse list.
    """
    reference = format_reference(
        locator.raw_book_token, locator.chapter, locator.verse_start, locator.verse_end
    )
    try:
        book_name = resolve_book_name(locator.raw_book_token, translation.canonical_names)
        reference = format_reference(
            book_name, locator.chapter, locator.verse_start, locator.verse_end
        )
        book = translation.book(book_name)
        chapter = book.chapter(locator.chapter)
        if chapter is None:
            raise ChapterNotFoundError(book_name, locator.chapter)
        verses = _select_verses(locator, book, chapter)
    except BibleLookupError as e:
        logger.info(f"Lookup of '{reference}' in {translation.id} failed: {e}")
        return ResolvedPassage(canonical_reference=reference, verses=(), error=str(e))

    if not verses:
        return ResolvedPassage(canonical_reference=reference, verses=(), error="no verses found")

    return ResolvedPassage(
        canonical_reference=reference,
        verses=tuple(
            PassageVerse(book=book_name, chapter=chapter.number, verse=v.number, text=v.text)
            for v in verses
        )
    )


def resolve_reference(text, translation):
    """Parse and resolve in one step; parse failures also land in .error."""
    try:
        locator = parse_reference(text)
    except ParseError as e:
        return ResolvedPassage(canonical_reference=(text or '').strip(), verses=(), error=str(e))
    return resolve_passage(locator, translation)
