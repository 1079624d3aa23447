# utils/comparison.py
import logging

from utils.errors import TranslationLoadError
from utils.passage_resolver import resolve_passage
from utils.reference_parser import parse_reference

logger = logging.getLogger(__name__)


def compare_passage(reference, translation_ids, loader):
    """Resolve one reference in several translations side by side.

    Raises ParseError for a bad reference. A translation that fails to load
    is reported under "errors" instead of failing the whole comparison.
    """
    locator = parse_reference(reference)

    comparison = {
        "reference": reference.strip(),
        "versions": {},
        "errors": {}
    }
    for translation_id in translation_ids:
        try:
            translation = loader.load(translation_id)
        except TranslationLoadError as e:
            logger.error(f"Error loading version {translation_id}: {str(e)}")
            comparison["errors"][translation_id] = str(e)
            continue

        passage = resolve_passage(locator, translation)
        comparison["versions"][translation_id] = {
            "version": translation.id.upper(),
            "name": translation.display_name,
            **passage.to_json()
        }
    return comparison
