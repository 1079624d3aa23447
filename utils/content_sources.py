# utils/content_sources.py
"""
Content sources turn a translation id into a normalized Translation.

Each source adapts one place Scripture text lives:

- LocalJsonSource: bundled translation documents (bible_data/<id>.json)
- HttpJsonSource: the same documents served over HTTP
- SupabaseSource: rows of the bible_verses table

The core parser and resolver never see raw payloads, only Translation.
Every failure is raised as TranslationLoadError.
"""

import json
import logging
import re
from collections import defaultdict
from pathlib import Path

import requests
from pydantic import ValidationError

from models import Book, Chapter, Translation, Verse
from schemas.translation_schemas import TranslationDocument
from utils.canon import canonical_index
from utils.errors import TranslationLoadError

logger = logging.getLogger(__name__)

# Translation ids end up in file names and URLs
TRANSLATION_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")


def translation_from_document(data, translation_id):
    """Validate a translation document and build a Translation from it."""
    try:
        document = TranslationDocument.model_validate(data)
    except ValidationError as e:
        raise TranslationLoadError(translation_id, f"malformed translation data: {e.error_count()} errors")

    books = []
    seen_books = set()
    for book_doc in document.books:
        if book_doc.name in seen_books:
            raise TranslationLoadError(translation_id, f"duplicate book {book_doc.name}")
        seen_books.add(book_doc.name)

        chapters = []
        seen_chapters = set()
        for chapter_doc in book_doc.chapters:
            if chapter_doc.chapter in seen_chapters:
                raise TranslationLoadError(
                    translation_id, f"duplicate chapter {book_doc.name} {chapter_doc.chapter}"
                )
            seen_chapters.add(chapter_doc.chapter)

            numbers = [v.verse for v in chapter_doc.verses]
            if len(numbers) != len(set(numbers)):
                raise TranslationLoadError(
                    translation_id, f"duplicate verse in {book_doc.name} {chapter_doc.chapter}"
                )
            chapters.append(Chapter(
                number=chapter_doc.chapter,
                verses=tuple(Verse(number=v.verse, text=v.text.strip()) for v in chapter_doc.verses)
            ))
        books.append(Book(canonical_name=book_doc.name, chapters=tuple(chapters)))

    return Translation(
        id=translation_id,
        display_name=document.name or document.translation,
        books=tuple(books)
    )


class LocalJsonSource:
    name = 'local'

    def __init__(self, data_dir):
        self.data_dir = Path(data_dir)

    def fetch(self, translation_id):
        if not TRANSLATION_ID_PATTERN.match(translation_id or ''):
            raise TranslationLoadError(translation_id, "invalid translation id")
        data_dir = self.data_dir.resolve()
        path = (data_dir / f"{translation_id}.json").resolve()
        if data_dir not in path.parents:
            raise TranslationLoadError(translation_id, "translation file outside data directory")
        logger.info(f"Loading translation '{translation_id}' from {path}")
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except FileNotFoundError:
            raise TranslationLoadError(translation_id, "no such translation file")
        except (OSError, json.JSONDecodeError) as e:
            raise TranslationLoadError(translation_id, str(e))
        return translation_from_document(data, translation_id)


class HttpJsonSource:
    name = 'http'

    def __init__(self, base_url, timeout=30):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout

    def fetch(self, translation_id):
        if not TRANSLATION_ID_PATTERN.match(translation_id or ''):
            raise TranslationLoadError(translation_id, "invalid translation id")
        url = f"{self.base_url}/{translation_id}.json"
        logger.info(f"Fetching translation '{translation_id}' from {url}")
        try:
            response = requests.get(url, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.Timeout:
            raise TranslationLoadError(translation_id, f"request to {url} timed out")
        except requests.exceptions.RequestException as e:
            raise TranslationLoadError(translation_id, f"request to {url} failed: {e}")
        except ValueError as e:
            raise TranslationLoadError(translation_id, f"invalid JSON from {url}: {e}")
        return translation_from_document(data, translation_id)


class SupabaseSource:
    """Builds a translation from bible_verses rows (book_name, chapter, verse, text)."""
    name = 'supabase'

    def __init__(self, client_factory, table='bible_verses', page_size=1000):
        self.client_factory = client_factory
        self.table = table
        self.page_size = page_size

    def _fetch_rows(self, client, translation_id):
        rows = []
        start = 0
        while True:
            response = client.table(self.table)\
                             .select('book_name,chapter,verse,text')\
                             .eq('translation', translation_id.upper())\
                             .order('id')\
                             .range(start, start + self.page_size - 1)\
                             .execute()
            page = response.data or []
            rows.extend(page)
            if len(page) < self.page_size:
                return rows
            start += self.page_size

    def fetch(self, translation_id):
        logger.info(f"Loading translation '{translation_id}' from Supabase table {self.table}")
        try:
            client = self.client_factory()
            rows = self._fetch_rows(client, translation_id)
        except Exception as e:
            logger.error(f"Supabase query for '{translation_id}' failed: {str(e)}", exc_info=True)
            raise TranslationLoadError(translation_id, f"database query failed: {e}")

        if not rows:
            raise TranslationLoadError(translation_id, "no verses found in database")

        grouped = defaultdict(lambda: defaultdict(list))
        for row in rows:
            grouped[row['book_name']][row['chapter']].append({"verse": row['verse'], "text": row['text']})

        # Sort books in biblical order, then by name for anything outside the canon
        book_names = sorted(grouped, key=lambda name: (canonical_index(name), name))
        document = {
            "translation": translation_id.upper(),
            "books": [
                {
                    "name": name,
                    "chapters": [
                        {"chapter": number, "verses": grouped[name][number]}
                        for number in sorted(grouped[name])
                    ]
                }
                for name in book_names
            ]
        }
        return translation_from_document(document, translation_id)


def build_content_source(config):
    """Pick the content source named by config.CONTENT_SOURCE."""
    source = config.CONTENT_SOURCE.lower()
    if source == 'local':
        return LocalJsonSource(config.BIBLE_DATA_DIR)
    if source == 'http':
        if not config.BIBLE_API_URL:
            raise ValueError("BIBLE_API_URL must be set when BIBLE_CONTENT_SOURCE is 'http'")
        return HttpJsonSource(config.BIBLE_API_URL, timeout=config.TRANSLATION_LOAD_TIMEOUT)
    if source == 'supabase':
        from database import get_supabase
        return SupabaseSource(get_supabase, table=config.SUPABASE_VERSES_TABLE)
    raise ValueError(f"Unknown content source: {config.CONTENT_SOURCE}")
