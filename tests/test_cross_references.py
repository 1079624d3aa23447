import pytest

from utils.cross_references import CrossReferenceIndex, normalize_reference
from utils.errors import BookNotFoundError, ParseError


@pytest.fixture
def index():
    return CrossReferenceIndex()


def test_normalize_reference():
    assert normalize_reference("jn 3:16") == "John 3:16"
    assert normalize_reference("  1jn 4 : 8 ") == "1 John 4:8"
    assert normalize_reference("Gen. 1:1-3") == "Genesis 1:1-3"


def test_normalize_reference_errors():
    with pytest.raises(ParseError):
        normalize_reference("John")
    with pytest.raises(BookNotFoundError):
        normalize_reference("Hezekiah 1:1")


def test_abbreviated_lookup_finds_canonical_entry(index):
    links = index.lookup("jn 3:16")
    assert [(c.target, c.type) for c in links] == [
        ("1 John 4:9", "parallel"),
        ("Romans 5:8", "topical"),
        ("Romans 8:32", "direct"),
    ]
    assert all(c.source == "John 3:16" for c in links)


def test_lookup_without_links(index):
    assert index.lookup("John 3:17") == []


def test_lookup_does_not_match_a_range_containing_the_verse(index):
    assert index.lookup("John 3:16-18") == []


def test_targets_are_normalized(index):
    assert index.lookup("Ps 23:1")[0].target == "John 10:11"


def test_search_by_topic_is_case_insensitive(index):
    results = index.search_by_topic("LOVE")
    assert {(c.source, c.target) for c in results} == {
        ("John 3:16", "1 John 4:9"),
        ("John 3:16", "Romans 5:8"),
        ("1 John 4:8", "1 John 4:16"),
        ("1 John 4:8", "1 Corinthians 13:4"),
    }


def test_search_by_blank_topic(index):
    assert index.search_by_topic("   ") == []
    assert index.search_by_topic(None) == []


def test_add_custom_cross_reference(index):
    added = index.add("rom 12:2", "eph 4:23", "topical", "Renewing the mind")
    assert added.source == "Romans 12:2"
    assert added.target == "Ephesians 4:23"
    assert index.lookup("Romans 12:2") == [added]
    assert index.search_by_topic("renewing") == [added]


def test_add_rejects_unknown_type(index):
    with pytest.raises(ValueError, match="unknown cross-reference type"):
        index.add("John 3:16", "John 1:1", "thematic")


def test_custom_entries_replace_defaults():
    index = CrossReferenceIndex({"John 1:1": [("Genesis 1:1", "parallel", "In the beginning")]})
    assert index.lookup("John 3:16") == []
    assert index.lookup("jn 1:1")[0].target == "Genesis 1:1"
