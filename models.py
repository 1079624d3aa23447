# models.py
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple


@dataclass(frozen=True)
class Verse:
    number: int
    text: str


@dataclass(frozen=True)
class Chapter:
    number: int
    verses: Tuple[Verse, ...]
    _by_number: Dict[int, Verse] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, 'verses', tuple(sorted(self.verses, key=lambda v: v.number)))
        object.__setattr__(self, '_by_number', {v.number: v for v in self.verses})

    def verse(self, number: int) -> Optional[Verse]:
        return self._by_number.get(number)


@dataclass(frozen=True)
class Book:
    canonical_name: str
    chapters: Tuple[Chapter, ...]
    _by_number: Dict[int, Chapter] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, 'chapters', tuple(self.chapters))
        object.__setattr__(self, '_by_number', {c.number: c for c in self.chapters})

    def chapter(self, number: int) -> Optional[Chapter]:
        return self._by_number.get(number)


@dataclass(frozen=True)
class Translation:
    """A complete, read-only edition of Scripture (e.g. KJV)."""
    id: str
    display_name: str
    books: Tuple[Book, ...]

    def __post_init__(self):
        object.__setattr__(self, 'books', tuple(self.books))

    @property
    def canonical_names(self) -> List[str]:
        return [book.canonical_name for book in self.books]

    def book(self, canonical_name: str) -> Optional[Book]:
        for book in self.books:
            if book.canonical_name == canonical_name:
                return book
        return None


@dataclass(frozen=True)
class Locator:
    """Parsed form of a reference, before the book is resolved."""
    raw_book_token: str
    chapter: int
    verse_start: Optional[int] = None
    verse_end: Optional[int] = None


@dataclass(frozen=True)
class PassageVerse:
    book: str
    chapter: int
    verse: int
    text: str

    def to_json(self):
        return {
            "book": self.book,
            "chapter": self.chapter,
            "verse": self.verse,
            "text": self.text
        }


@dataclass(frozen=True)
class ResolvedPassage:
    canonical_reference: str
    verses: Tuple[PassageVerse, ...] = ()
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_json(self):
        return {
            "reference": self.canonical_reference,
            "verses": [v.to_json() for v in self.verses],
            "error": self.error
        }


@dataclass(frozen=True)
class CrossReference:
    """A link from one passage to a related one."""
    source: str
    target: str
    type: str
    description: Optional[str] = None

    def to_json(self):
        return {
            "source": self.source,
            "target": self.target,
            "type": self.type,
            "description": self.description
        }
