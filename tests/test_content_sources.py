import json
from types import SimpleNamespace
from unittest import mock

import pytest
import requests

from utils.content_sources import (
    HttpJsonSource,
    LocalJsonSource,
    SupabaseSource,
    build_content_source,
    translation_from_document,
)
from utils.errors import TranslationLoadError

DOCUMENT = {
    "translation": "WEB",
    "name": "World English Bible",
    "books": [
        {"name": "Jude", "chapters": [
            {"chapter": 1, "verses": [{"verse": 1, "text": " Jude, a servant of Jesus Christ "}]}
        ]}
    ]
}


def test_translation_from_document():
    translation = translation_from_document(DOCUMENT, 'web')
    assert translation.id == 'web'
    assert translation.display_name == "World English Bible"
    assert translation.canonical_names == ["Jude"]
    assert translation.book("Jude").chapter(1).verse(1).text == "Jude, a servant of Jesus Christ"


@pytest.mark.parametrize("data", [
    {"books": []},
    {"translation": "X", "books": [{"name": "Jude", "chapters": [{"chapter": 0, "verses": []}]}]},
    {"translation": "X", "books": [{"name": "Jude", "chapters": [{"chapter": "one", "verses": []}]}]},
    ["not", "a", "document"],
])
def test_malformed_documents_are_rejected(data):
    with pytest.raises(TranslationLoadError, match="malformed"):
        translation_from_document(data, 'x')


def test_duplicate_verse_numbers_are_rejected():
    data = {"translation": "X", "books": [{"name": "Jude", "chapters": [
        {"chapter": 1, "verses": [{"verse": 1, "text": "a"}, {"verse": 1, "text": "b"}]}
    ]}]}
    with pytest.raises(TranslationLoadError, match="duplicate verse"):
        translation_from_document(data, 'x')


def test_duplicate_chapter_numbers_are_rejected():
    data = {"translation": "X", "books": [{"name": "Jude", "chapters": [
        {"chapter": 1, "verses": []}, {"chapter": 1, "verses": []}
    ]}]}
    with pytest.raises(TranslationLoadError, match="duplicate chapter"):
        translation_from_document(data, 'x')


def test_local_source_reads_file(tmp_path):
    (tmp_path / 'web.json').write_text(json.dumps(DOCUMENT), encoding='utf-8')
    translation = LocalJsonSource(tmp_path).fetch('web')
    assert translation.canonical_names == ["Jude"]


def test_local_source_missing_file(tmp_path):
    with pytest.raises(TranslationLoadError, match="no such translation file"):
        LocalJsonSource(tmp_path).fetch('nope')


def test_local_source_refuses_paths_outside_data_dir(tmp_path):
    data_dir = tmp_path / 'bible_data'
    outside = tmp_path / 'outside'
    data_dir.mkdir()
    outside.mkdir()
    (outside / 'secret.json').write_text(json.dumps(DOCUMENT), encoding='utf-8')

    with pytest.raises(TranslationLoadError, match="invalid translation id"):
        LocalJsonSource(data_dir).fetch('../outside/secret')


def test_local_source_refuses_symlink_out_of_data_dir(tmp_path):
    data_dir = tmp_path / 'bible_data'
    data_dir.mkdir()
    secret = tmp_path / 'secret.json'
    secret.write_text(json.dumps(DOCUMENT), encoding='utf-8')
    (data_dir / 'web.json').symlink_to(secret)

    with pytest.raises(TranslationLoadError, match="outside data directory"):
        LocalJsonSource(data_dir).fetch('web')


def test_http_source_refuses_unsafe_id():
    with mock.patch('utils.content_sources.requests.get') as get:
        with pytest.raises(TranslationLoadError, match="invalid translation id"):
            HttpJsonSource('https://example.org/bibles').fetch('../admin')
    get.assert_not_called()


def test_local_source_invalid_json(tmp_path):
    (tmp_path / 'bad.json').write_text("{not json", encoding='utf-8')
    with pytest.raises(TranslationLoadError):
        LocalJsonSource(tmp_path).fetch('bad')


def test_http_source_fetches_document():
    response = mock.Mock()
    response.json.return_value = DOCUMENT
    with mock.patch('utils.content_sources.requests.get', return_value=response) as get:
        translation = HttpJsonSource('https://example.org/bibles/', timeout=3).fetch('web')
    get.assert_called_once_with('https://example.org/bibles/web.json', timeout=3)
    assert translation.display_name == "World English Bible"


def test_http_source_timeout():
    with mock.patch('utils.content_sources.requests.get', side_effect=requests.exceptions.Timeout()):
        with pytest.raises(TranslationLoadError, match="timed out"):
            HttpJsonSource('https://example.org').fetch('web')


def test_http_source_http_error():
    response = mock.Mock()
    response.raise_for_status.side_effect = requests.exceptions.HTTPError("404 Client Error")
    with mock.patch('utils.content_sources.requests.get', return_value=response):
        with pytest.raises(TranslationLoadError, match="404"):
            HttpJsonSource('https://example.org').fetch('web')


class FakeQuery:
    def __init__(self, rows):
        self.rows = rows
        self.filters = {}
        self.bounds = None

    def select(self, columns):
        return self

    def eq(self, column, value):
        self.filters[column] = value
        return self

    def order(self, column):
        return self

    def range(self, start, end):
        self.bounds = (start, end)
        return self

    def execute(self):
        rows = [r for r in self.rows if r['translation'] == self.filters.get('translation')]
        start, end = self.bounds
        return SimpleNamespace(data=rows[start:end + 1])


class FakeSupabase:
    def __init__(self, rows):
        self.rows = rows
        self.tables = []

    def table(self, name):
        self.tables.append(name)
        return FakeQuery(self.rows)


def test_supabase_source_groups_rows_in_canonical_order():
    rows = [
        {"book_name": "John", "chapter": 3, "verse": 16, "text": "For God so loved", "translation": "KJV"},
        {"book_name": "Genesis", "chapter": 1, "verse": 2, "text": "And the earth", "translation": "KJV"},
        {"book_name": "Genesis", "chapter": 1, "verse": 1, "text": "In the beginning", "translation": "KJV"},
        {"book_name": "John", "chapter": 3, "verse": 16, "text": "other", "translation": "ASV"},
    ]
    client = FakeSupabase(rows)
    translation = SupabaseSource(lambda: client, page_size=2).fetch('kjv')

    assert translation.canonical_names == ["Genesis", "John"]
    assert [v.number for v in translation.book("Genesis").chapter(1).verses] == [1, 2]
    assert translation.book("John").chapter(3).verse(16).text == "For God so loved"
    assert set(client.tables) == {'bible_verses'}


def test_supabase_source_without_rows():
    with pytest.raises(TranslationLoadError, match="no verses"):
        SupabaseSource(lambda: FakeSupabase([])).fetch('kjv')


def test_supabase_source_client_failure():
    def factory():
        raise ValueError("SUPABASE_URL or SUPABASE_SERVICE_KEY not found")

    with pytest.raises(TranslationLoadError, match="database query failed"):
        SupabaseSource(factory).fetch('kjv')


def test_build_content_source(tmp_path):
    config = SimpleNamespace(CONTENT_SOURCE='local', BIBLE_DATA_DIR=str(tmp_path))
    assert isinstance(build_content_source(config), LocalJsonSource)

    config = SimpleNamespace(CONTENT_SOURCE='http', BIBLE_API_URL='https://example.org',
                             TRANSLATION_LOAD_TIMEOUT=10)
    assert isinstance(build_content_source(config), HttpJsonSource)

    config = SimpleNamespace(CONTENT_SOURCE='http', BIBLE_API_URL=None)
    with pytest.raises(ValueError):
        build_content_source(config)

    with pytest.raises(ValueError):
        build_content_source(SimpleNamespace(CONTENT_SOURCE='youversion'))
