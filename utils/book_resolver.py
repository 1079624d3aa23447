# utils/book_resolver.py
"""
Map user-typed book names onto a translation's canonical names.

Matching runs in tiers and stops at the first tier that finds something:

1. exact name, ignoring case
2. abbreviation table ("gen", "1cor", "ps", "psa", "psalm", ...)
3. substring, preferring the shortest canonical name

The first two tiers keep "John" from drifting to "1 John" and friends, which
plain substring matching would happily do.
"""

import logging
import re

from utils.canon import CANON, canonical_index
from utils.errors import BookNotFoundError

logger = logging.getLogger(__name__)

# Tokens shorter than this never match by "canonical name contains token"
MIN_SUBSTRING_LENGTH = 3

# Common abbreviations per book, written lowercase without spaces or periods.
# Full names, the canon's three-letter codes and Roman numeral prefixes
# ("iicor", "iiijohn") are added in _build_abbreviations.
_BOOK_ABBREVIATIONS = {
    'Genesis': ['gen', 'ge', 'gn'],
    'Exodus': ['exo', 'exod', 'ex'],
    'Leviticus': ['lev', 'le', 'lv'],
    'Numbers': ['num', 'nu', 'nm', 'nb'],
    'Deuteronomy': ['deut', 'deu', 'de', 'dt'],
    'Joshua': ['josh', 'jos', 'jsh'],
    'Judges': ['judg', 'jdg', 'jg', 'jdgs'],
    'Ruth': ['rth', 'ru'],
    '1 Samuel': ['1sam', '1sa', '1sm', '1s'],
    '2 Samuel': ['2sam', '2sa', '2sm', '2s'],
    '1 Kings': ['1kgs', '1ki', '1kin', '1k'],
    '2 Kings': ['2kgs', '2ki', '2kin', '2k'],
    '1 Chronicles': ['1chron', '1chr', '1ch'],
    '2 Chronicles': ['2chron', '2chr', '2ch'],
    'Ezra': ['ezr', 'ez'],
    'Nehemiah': ['neh', 'ne'],
    'Esther': ['esth', 'est', 'es'],
    'Job': ['jb'],
    'Psalms': ['ps', 'psa', 'psalm', 'pslm', 'psm', 'pss'],
    'Proverbs': ['prov', 'pro', 'prv', 'pr', 'proverb'],
    'Ecclesiastes': ['eccl', 'eccles', 'ecc', 'ec', 'qoh', 'qoheleth'],
    'Song of Solomon': ['song', 'songofsongs', 'sos', 'so', 'canticles', 'cant', 'sg'],
    'Isaiah': ['isa', 'is'],
    'Jeremiah': ['jer', 'je', 'jr'],
    'Lamentations': ['lam', 'la'],
    'Ezekiel': ['ezek', 'eze', 'ezk'],
    'Daniel': ['dan', 'da', 'dn'],
    'Hosea': ['hos', 'ho'],
    'Joel': ['joe', 'jl'],
    'Amos': ['am'],
    'Obadiah': ['obad', 'ob'],
    'Jonah': ['jnh', 'jon'],
    'Micah': ['mic', 'mc'],
    'Nahum': ['nah', 'na'],
    'Habakkuk': ['hab', 'hb'],
    'Zephaniah': ['zeph', 'zep', 'zp'],
    'Haggai': ['hag', 'hg'],
    'Zechariah': ['zech', 'zec', 'zc'],
    'Malachi': ['mal', 'ml'],
    'Matthew': ['matt', 'mat', 'mt'],
    'Mark': ['mrk', 'mar', 'mk', 'mr'],
    'Luke': ['luk', 'lk'],
    'John': ['joh', 'jhn', 'jn'],
    'Acts': ['act', 'ac'],
    'Romans': ['rom', 'ro', 'rm'],
    '1 Corinthians': ['1cor', '1co'],
    '2 Corinthians': ['2cor', '2co'],
    'Galatians': ['gal', 'ga'],
    'Ephesians': ['eph', 'ephes'],
    'Philippians': ['phil', 'php', 'pp'],
    'Colossians': ['col', 'co'],
    '1 Thessalonians': ['1thess', '1thes', '1th'],
    '2 Thessalonians': ['2thess', '2thes', '2th'],
    '1 Timothy': ['1tim', '1ti'],
    '2 Timothy': ['2tim', '2ti'],
    'Titus': ['tit', 'ti'],
    'Philemon': ['philem', 'phm', 'phlm', 'pm'],
    'Hebrews': ['heb'],
    'James': ['jas', 'jm'],
    '1 Peter': ['1pet', '1pe', '1pt', '1p'],
    '2 Peter': ['2pet', '2pe', '2pt', '2p'],
    '1 John': ['1jn', '1jo', '1joh', '1jhn'],
    '2 John': ['2jn', '2jo', '2joh', '2jhn'],
    '3 John': ['3jn', '3jo', '3joh', '3jhn'],
    'Jude': ['jud', 'jd'],
    'Revelation': ['rev', 're', 'rv', 'apoc', 'apocalypse', 'revelations']
}

_ROMAN_PREFIXES = {'1': 'i', '2': 'ii', '3': 'iii'}


def normalize_key(token):
    """Lowercase, drop whitespace and periods: '1 Cor.' -> '1cor'."""
    return re.sub(r'[\s.]+', '', token).lower()


def _build_abbreviations():
    table = {}
    numbered = []
    for name, code, _, _ in CANON:
        keys = [normalize_key(name), code.lower()] + _BOOK_ABBREVIATIONS.get(name, [])
        for key in keys:
            # First book to claim a key keeps it
            table.setdefault(key, name)
        if name[0] in _ROMAN_PREFIXES:
            numbered.append((name, keys))

    # Roman numeral forms never override a plain abbreviation ("isa" stays Isaiah)
    for name, keys in numbered:
        roman = _ROMAN_PREFIXES[name[0]]
        for key in keys:
            if key[0] == name[0]:
                table.setdefault(roman + key[1:], name)
    return table


ABBREVIATIONS = _build_abbreviations()


def _ordered_names(canonical_names):
    names = list(canonical_names)
    if isinstance(canonical_names, (set, frozenset)):
        names.sort(key=lambda n: (canonical_index(n), n))
    return names


def resolve_book_name(token, canonical_names):
    """Resolve a raw book token against a set of canonical names.

    Returns the matching canonical name, never a name outside
    canonical_names. Raises BookNotFoundError when no tier matches.
    """
    names = _ordered_names(canonical_names)
    cleaned = re.sub(r'\s+', ' ', (token or '')).strip()
    if not cleaned:
        raise BookNotFoundError(token)

    lowered = cleaned.lower()
    by_lower = {}
    for name in names:
        by_lower.setdefault(name.lower(), name)

    # Tier 1: exact
    if lowered in by_lower:
        return by_lower[lowered]

    # Tier 2: abbreviation table
    key = normalize_key(cleaned)
    mapped = ABBREVIATIONS.get(key)
    if mapped and mapped.lower() in by_lower:
        return by_lower[mapped.lower()]

    # Tier 3: substring, shortest canonical name wins
    candidates = []
    for position, name in enumerate(names):
        name_lower = name.lower()
        if (len(lowered) >= MIN_SUBSTRING_LENGTH and lowered in name_lower) or name_lower in lowered:
            candidates.append((len(name), position, name))
    if candidates:
        match = min(candidates)[2]
        logger.debug(f"Book token '{token}' matched '{match}' by substring")
        return match

    raise BookNotFoundError(token)
