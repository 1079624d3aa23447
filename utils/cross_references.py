# utils/cross_references.py
"""
Cross-references between passages.

Every reference is normalized through the parser and the book resolver before
it is stored or looked up, so "jn 3:16", "John 3 : 16" and "John 3:16" all
find the same links. Links are typed:

- direct: the target speaks to the same statement
- parallel: the same event or teaching told elsewhere
- topical: a shared theme
"""

import logging
import threading
from collections import defaultdict

from models import CrossReference
from utils.book_resolver import resolve_book_name
from utils.canon import BOOK_NAMES
from utils.reference_parser import format_reference, parse_reference

logger = logging.getLogger(__name__)

LINK_TYPES = ('direct', 'parallel', 'topical')

# source -> [(target, type, description)]
DEFAULT_CROSS_REFERENCES = {
    'Genesis 1:1': [
        ('John 1:1-3', 'parallel', 'Creation through the Word'),
        ('Psalms 33:6', 'topical', "Creation by God's word"),
        ('Hebrews 11:3', 'direct', 'Creation by faith'),
    ],
    'Psalms 23:1': [
        ('John 10:11', 'parallel', 'The good shepherd'),
        ('Philippians 4:19', 'topical', 'God supplies every need'),
    ],
    'John 3:16': [
        ('1 John 4:9', 'parallel', "God's love demonstrated"),
        ('Romans 5:8', 'topical', "God's love for sinners"),
        ('Romans 8:32', 'direct', 'God giving His Son'),
    ],
    'Romans 8:28': [
        ('Genesis 50:20', 'topical', 'God working evil for good'),
    ],
    '1 John 4:8': [
        ('1 John 4:16', 'direct', 'God is love'),
        ('1 Corinthians 13:4', 'topical', 'What love is'),
    ],
}


def normalize_reference(reference):
    """Return the canonical form of a reference, e.g. 'jn 3:16' -> 'John 3:16'.

    Raises ParseError or BookNotFoundError.
    """
    locator = parse_reference(reference)
    book_name = resolve_book_name(locator.raw_book_token, BOOK_NAMES)
    return format_reference(book_name, locator.chapter, locator.verse_start, locator.verse_end)


class CrossReferenceIndex:
    def __init__(self, entries=None):
        self._lock = threading.Lock()
        self._by_source = defaultdict(list)

        if entries is None:
            entries = DEFAULT_CROSS_REFERENCES
        for source, links in entries.items():
            for target, link_type, description in links:
                self.add(source, target, link_type, description)

    def add(self, source, target, link_type, description=None):
        if link_type not in LINK_TYPES:
            raise ValueError(f"unknown cross-reference type '{link_type}'")

        cross_ref = CrossReference(
            source=normalize_reference(source),
            target=normalize_reference(target),
            type=link_type,
            description=description
        )
        with self._lock:
            self._by_source[cross_ref.source].append(cross_ref)
        logger.debug(f"Added {link_type} cross-reference {cross_ref.source} -> {cross_ref.target}")
        return cross_ref

    def lookup(self, reference):
        """Cross-references whose source is exactly this reference."""
        source = normalize_reference(reference)
        with self._lock:
            return list(self._by_source.get(source, ()))

    def search_by_topic(self, topic):
        """Cross-references whose description mentions the topic, case-insensitively."""
        topic = (topic or '').strip().lower()
        if not topic:
            return []
        with self._lock:
            return [
                cross_ref
                for links in self._by_source.values()
                for cross_ref in links
                if cross_ref.description and topic in cross_ref.description.lower()
            ]
