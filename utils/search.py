# utils/search.py
from collections import Counter, defaultdict
import logging
import re
import threading

from utils.reference_parser import format_reference

logger = logging.getLogger(__name__)


class BibleSearchEngine:
    def __init__(self):
        self.stop_words = {'the', 'and', 'of', 'to', 'in', 'a', 'that', 'for', 'is', 'was'}
        self._indexes = {}
        self._lock = threading.Lock()

    def tokenize(self, text):
        """Convert text to lowercase and split into words"""
        words = re.findall(r'\w+', text.lower())
        return [w for w in words if w not in self.stop_words]

    def calculate_similarity(self, query_tokens, verse_tokens, exact_phrase=None, verse_text=None):
        """Calculate similarity score between query and verse"""
        if not query_tokens or not verse_tokens:
            return 0

        # If there's an exact phrase, check if it exists in the verse
        if exact_phrase and verse_text and exact_phrase in verse_text.lower():
            return 1.0  # Give highest score for exact matches

        query_counter = Counter(query_tokens)
        verse_counter = Counter(verse_tokens)

        # Calculate overlap
        common_words = sum((query_counter & verse_counter).values())
        total_words = sum(query_counter.values())

        return common_words / total_words if total_words > 0 else 0

    def build_index(self, translation):
        """Inverted index: word -> set of positions into the verse list"""
        entries = []
        index = defaultdict(set)
        for book in translation.books:
            for chapter in book.chapters:
                for verse in chapter.verses:
                    tokens = self.tokenize(verse.text)
                    position = len(entries)
                    entries.append((book.canonical_name, chapter.number, verse, tokens))
                    for token in tokens:
                        index[token].add(position)
        logger.info(f"Indexed {len(entries)} verses, {len(index)} words for {translation.id}")
        return entries, index

    def _get_index(self, translation):
        with self._lock:
            if translation.id not in self._indexes:
                self._indexes[translation.id] = self.build_index(translation)
            return self._indexes[translation.id]

    def search(self, query, translation, limit=20):
        """Rank verses of a translation against a free-text query"""
        query = (query or '').strip()
        query_tokens = self.tokenize(query)
        if not query_tokens:
            return []
        exact_phrase = query.lower() if ' ' in query else None

        entries, index = self._get_index(translation)
        candidates = set()
        for token in query_tokens:
            candidates |= index.get(token, set())

        results = []
        for position in candidates:
            book, chapter, verse, tokens = entries[position]
            score = self.calculate_similarity(query_tokens, tokens, exact_phrase, verse.text)
            if score > 0:
                results.append((score, position))

        # Highest score first, canonical order within a score
        results.sort(key=lambda r: (-r[0], r[1]))
        return [self._to_result(entries[position], score) for score, position in results[:limit]]

    def _to_result(self, entry, score):
        book, chapter, verse, _ = entry
        return {
            "reference": format_reference(book, chapter, verse.number),
            "book": book,
            "chapter": chapter,
            "verse": verse.number,
            "text": verse.text,
            "score": round(score, 4)
        }

    def clear(self):
        with self._lock:
            self._indexes.clear()
