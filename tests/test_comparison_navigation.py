import pytest

from config import BASE_DIR
from utils.comparison import compare_passage
from utils.content_sources import LocalJsonSource
from utils.errors import ParseError
from utils.navigation import next_chapter, previous_chapter
from utils.translation_loader import TranslationLoader


@pytest.fixture
def loader():
    return TranslationLoader(LocalJsonSource(f"{BASE_DIR}/bible_data"), timeout=5)


def test_compare_passage_across_versions(loader):
    comparison = compare_passage("John 3:16", ["kjv", "asv"], loader)
    assert comparison["reference"] == "John 3:16"
    kjv = comparison["versions"]["kjv"]
    asv = comparison["versions"]["asv"]
    assert kjv["version"] == "KJV"
    assert asv["name"] == "American Standard Version"
    assert "everlasting life" in kjv["verses"][0]["text"]
    assert "eternal life" in asv["verses"][0]["text"]
    assert comparison["errors"] == {}


def test_compare_reports_missing_verse_per_version(loader):
    comparison = compare_passage("Romans 8:28", ["kjv", "asv"], loader)
    assert comparison["versions"]["kjv"]["error"] is None
    assert comparison["versions"]["asv"]["error"] == 'Book "Romans" not found'


def test_compare_skips_translations_that_fail_to_load(loader):
    comparison = compare_passage("Psalm 23:1", ["kjv", "missing"], loader)
    assert list(comparison["versions"]) == ["kjv"]
    assert "missing" in comparison["errors"]


def test_compare_rejects_bad_reference(loader):
    with pytest.raises(ParseError):
        compare_passage("John", ["kjv"], loader)


def test_next_chapter_within_book(kjv):
    assert next_chapter(kjv, "Genesis", 1) == ("Genesis", 2)


def test_next_chapter_crosses_book_boundary(kjv):
    assert next_chapter(kjv, "Genesis", 2) == ("Psalms", 23)


def test_previous_chapter_crosses_book_boundary(kjv):
    assert previous_chapter(kjv, "Psalms", 23) == ("Genesis", 2)


def test_navigation_stops_at_the_ends(kjv):
    assert previous_chapter(kjv, "Genesis", 1) is None
    assert next_chapter(kjv, "1 John", 4) is None


def test_navigation_from_unknown_chapter(kjv):
    assert next_chapter(kjv, "Genesis", 50) is None
