# scripts/import_translation.py
"""
Convert a flat verse dump ({"Genesis 1:1": "# In the beginning..."}) into a
translation document that LocalJsonSource can load.

Usage: python scripts/import_translation.py <flat.json> <out.json> [translation_id] [--supabase]
"""
import json
import sys
from collections import defaultdict
from pathlib import Path

# Add the parent directory to the Python path properly
current_dir = Path(__file__).resolve().parent
backend_dir = current_dir.parent
sys.path.insert(0, str(backend_dir))

from config import Config
from utils.book_resolver import resolve_book_name
from utils.canon import BOOK_NAMES, CHAPTER_COUNTS, canonical_index
from utils.errors import BookNotFoundError, ParseError
from utils.reference_parser import parse_reference

BATCH_SIZE = 1000


def clean_verse_text(text):
    """Clean verse text by removing any leading '#' and trimming whitespace"""
    return text.lstrip('#').strip()


def build_document(verses_data, translation_id, name=None):
    """Group flat 'Book C:V' entries into a translation document.

    Returns (document, skipped_references).
    """
    books = defaultdict(lambda: defaultdict(dict))
    skipped = []

    for ref, text in verses_data.items():
        try:
            locator = parse_reference(ref)
            if locator.verse_start is None or locator.verse_end is not None:
                raise ParseError("expected a single verse")
            book_name = resolve_book_name(locator.raw_book_token, BOOK_NAMES)
        except (ParseError, BookNotFoundError) as e:
            print(f"Warning: skipping reference '{ref}': {e}")
            skipped.append(ref)
            continue
        books[book_name][locator.chapter][locator.verse_start] = clean_verse_text(text)

    document = {
        "translation": translation_id.upper(),
        "name": name or Config.AVAILABLE_VERSIONS.get(translation_id.lower(), translation_id.upper()),
        "books": [
            {
                "name": book_name,
                "chapters": [
                    {
                        "chapter": chapter,
                        "verses": [
                            {"verse": verse, "text": books[book_name][chapter][verse]}
                            for verse in sorted(books[book_name][chapter])
                        ]
                    }
                    for chapter in sorted(books[book_name])
                ]
            }
            for book_name in sorted(books, key=canonical_index)
        ]
    }
    return document, skipped


def chapter_count_mismatches(document):
    """Books whose chapter count differs from the standard canon"""
    mismatches = []
    for book in document["books"]:
        expected = CHAPTER_COUNTS.get(book["name"])
        actual = len(book["chapters"])
        if expected is not None and actual != expected:
            mismatches.append((book["name"], expected, actual))
    return mismatches


def upload_to_supabase(document):
    """Insert the document's verses into the bible_verses table in batches"""
    from database import get_db

    rows = [
        {
            "book_name": book["name"],
            "chapter": chapter["chapter"],
            "verse": verse["verse"],
            "text": verse["text"],
            "translation": document["translation"]
        }
        for book in document["books"]
        for chapter in book["chapters"]
        for verse in chapter["verses"]
    ]
    with get_db() as client:
        for start in range(0, len(rows), BATCH_SIZE):
            client.table(Config.SUPABASE_VERSES_TABLE).insert(rows[start:start + BATCH_SIZE]).execute()
            print(f"Uploaded {min(start + BATCH_SIZE, len(rows))} of {len(rows)} verses...")
    return len(rows)


def import_translation(json_path, out_path, translation_id='kjv', upload=False):
    print(f"Reading JSON file from: {json_path}")
    with open(json_path, 'r', encoding='utf-8') as f:
        verses_data = json.load(f)

    document, skipped = build_document(verses_data, translation_id)
    verse_count = sum(len(c["verses"]) for b in document["books"] for c in b["chapters"])

    with open(out_path, 'w', encoding='utf-8') as f:
        json.dump(document, f, ensure_ascii=False, indent=1)

    print(f"\nImport complete!")
    print(f"Wrote {verse_count} verses in {len(document['books'])} books to {out_path}")
    if skipped:
        print(f"Skipped {len(skipped)} references that could not be parsed or resolved")
    for name, expected, actual in chapter_count_mismatches(document):
        print(f"Warning: {name} has {actual} chapters, expected {expected}")

    if upload:
        uploaded = upload_to_supabase(document)
        print(f"Uploaded {uploaded} verses to Supabase")
    return document


if __name__ == '__main__':
    args = [a for a in sys.argv[1:] if a != '--supabase']
    if len(args) not in (2, 3):
        print("Usage: python import_translation.py <flat.json> <out.json> [translation_id] [--supabase]")
        sys.exit(1)

    import_translation(
        args[0],
        args[1],
        args[2] if len(args) == 3 else 'kjv',
        upload='--supabase' in sys.argv
    )
