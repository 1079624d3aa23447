# routes/bible.py
from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError
import logging

from models import Locator
from schemas.cross_reference_schemas import CrossReferenceCreate
from utils.book_resolver import resolve_book_name
from utils.canon import books_in_testament
from utils.comparison import compare_passage
from utils.cross_references import normalize_reference
from utils.errors import (
    BookNotFoundError,
    ChapterNotFoundError,
    ParseError,
    TranslationLoadError,
    TranslationLoadTimeout,
    TranslationNotFoundError,
)
from utils.navigation import adjacent_chapter
from utils.passage_resolver import resolve_passage
from utils.reference_parser import parse_reference

bible_bp = Blueprint('bible', __name__)
logger = logging.getLogger(__name__)


def _loader():
    return current_app.extensions['translation_loader']


def _search_engine():
    return current_app.extensions['search_engine']


def _cross_references():
    return current_app.extensions['cross_references']


def _check_translation_id(translation_id):
    translation_id = translation_id.strip().lower()
    if translation_id not in current_app.config['AVAILABLE_VERSIONS']:
        raise TranslationNotFoundError(translation_id)
    return translation_id


def _translation_id():
    return _check_translation_id(
        request.args.get('translation') or current_app.config['DEFAULT_TRANSLATION']
    )


def _verse_json(verse):
    return {
        "book": verse.book,
        "chapter": verse.chapter,
        "verse": verse.verse,
        "text": verse.text
    }


@bible_bp.errorhandler(TranslationLoadError)
def handle_translation_load_error(e):
    logger.error(f"Translation load error: {str(e)}")
    status = 504 if isinstance(e, TranslationLoadTimeout) else 503
    return jsonify({"error": str(e), "translation": e.translation_id}), status


@bible_bp.errorhandler(TranslationNotFoundError)
def handle_translation_not_found(e):
    logger.info(f"Unknown translation requested: {e.translation_id}")
    return jsonify({"error": str(e), "translation": e.translation_id}), 404


@bible_bp.route('/translations', methods=['GET'])
def get_translations():
    versions = current_app.config['AVAILABLE_VERSIONS']
    return jsonify([
        {"id": version_id, "name": name, "abbreviation": version_id.upper()}
        for version_id, name in versions.items()
    ])


@bible_bp.route('/books', methods=['GET'])
def get_books():
    translation = _loader().load(_translation_id())
    books = translation.canonical_names

    testament = request.args.get('testament')
    if testament:
        if testament not in ('old', 'new'):
            return jsonify({"error": "testament must be 'old' or 'new'"}), 400
        in_testament = set(books_in_testament(testament))
        books = [name for name in books if name in in_testament]

    return jsonify(books)


@bible_bp.route('/chapters/<book>', methods=['GET'])
def get_chapters(book):
    translation = _loader().load(_translation_id())
    try:
        book_name = resolve_book_name(book, translation.canonical_names)
    except BookNotFoundError as e:
        return jsonify({"error": str(e)}), 404

    chapters = [chapter.number for chapter in translation.book(book_name).chapters]
    return jsonify({"book": book_name, "chapters": sorted(chapters)})


@bible_bp.route('/verses/<book>/<int:chapter>', methods=['GET'])
def get_verses(book, chapter):
    translation = _loader().load(_translation_id())
    passage = resolve_passage(Locator(raw_book_token=book, chapter=chapter), translation)
    if passage.error:
        return jsonify({"error": passage.error}), 404
    return jsonify([_verse_json(v) for v in passage.verses])


@bible_bp.route('/verse/<book>/<int:chapter>/<int:verse>', methods=['GET'])
def get_single_verse(book, chapter, verse):
    translation = _loader().load(_translation_id())
    locator = Locator(raw_book_token=book, chapter=chapter, verse_start=verse)
    passage = resolve_passage(locator, translation)
    if passage.error:
        return jsonify({"error": passage.error}), 404
    return jsonify(_verse_json(passage.verses[0]))


@bible_bp.route('/passage', methods=['GET'])
def get_passage():
    reference = request.args.get('ref', '')
    try:
        locator = parse_reference(reference)
    except ParseError as e:
        logger.info(f"Could not parse reference '{reference}': {e}")
        return jsonify({
            "reference": reference,
            "verses": [],
            "error": f"Please check your reference: {e}"
        }), 400

    translation = _loader().load(_translation_id())
    passage = resolve_passage(locator, translation)
    payload = passage.to_json()
    payload["translation"] = translation.id
    return jsonify(payload), (404 if passage.error else 200)


@bible_bp.route('/search', methods=['GET'])
def search_bible():
    query_str = request.args.get('q', '')
    if not query_str.strip():
        return jsonify([])

    limit = request.args.get('limit', current_app.config['SEARCH_RESULT_LIMIT'], type=int)
    if limit is None or limit < 1:
        return jsonify({"error": "limit must be a positive integer"}), 400

    translation = _loader().load(_translation_id())
    results = _search_engine().search(query_str, translation, limit=limit)
    logger.info(f"Search for '{query_str}' in {translation.id} returned {len(results)} results")
    return jsonify(results)


@bible_bp.route('/compare', methods=['GET'])
def compare_versions():
    reference = request.args.get('ref', '')
    requested = request.args.get('translations', '')
    translation_ids = [_check_translation_id(t) for t in requested.split(',') if t.strip()]
    if not translation_ids:
        translation_ids = list(current_app.config['AVAILABLE_VERSIONS'])

    try:
        comparison = compare_passage(reference, translation_ids, _loader())
    except ParseError as e:
        return jsonify({"error": f"Please check your reference: {e}"}), 400
    return jsonify(comparison)


@bible_bp.route('/navigate/<book>/<int:chapter>', methods=['GET'])
def navigate(book, chapter):
    direction = request.args.get('direction', 'next')
    if direction not in ('next', 'previous'):
        return jsonify({"error": "direction must be 'next' or 'previous'"}), 400

    translation = _loader().load(_translation_id())
    try:
        book_name = resolve_book_name(book, translation.canonical_names)
        if translation.book(book_name).chapter(chapter) is None:
            raise ChapterNotFoundError(book_name, chapter)
    except (BookNotFoundError, ChapterNotFoundError) as e:
        return jsonify({"error": str(e)}), 404

    target = adjacent_chapter(translation, book_name, chapter, 1 if direction == 'next' else -1)
    if target is None:
        return jsonify({"error": f"{book_name} {chapter} has no {direction} chapter"}), 404

    return jsonify({"book": target[0], "chapter": target[1]})


@bible_bp.route('/cross-references', methods=['GET'])
def get_cross_references():
    reference = request.args.get('ref', '')
    try:
        source = normalize_reference(reference)
    except ParseError as e:
        return jsonify({"error": f"Please check your reference: {e}"}), 400
    except BookNotFoundError as e:
        return jsonify({"error": str(e)}), 404

    links = _cross_references().lookup(source)
    return jsonify({
        "reference": source,
        "cross_references": [cross_ref.to_json() for cross_ref in links]
    })


@bible_bp.route('/cross-references/search', methods=['GET'])
def search_cross_references():
    topic = request.args.get('topic', '')
    links = _cross_references().search_by_topic(topic)
    logger.info(f"Cross-reference search for '{topic}' returned {len(links)} results")
    return jsonify([cross_ref.to_json() for cross_ref in links])


@bible_bp.route('/cross-references', methods=['POST'])
def add_cross_reference():
    data = request.get_json(silent=True)
    if not data:
        return jsonify({"error": "Invalid JSON payload"}), 400

    try:
        payload = CrossReferenceCreate.model_validate(data)
    except ValidationError as e:
        return jsonify({"error": f"Invalid cross-reference: {e.error_count()} validation errors"}), 400

    try:
        cross_ref = _cross_references().add(
            payload.source, payload.target, payload.type, payload.description
        )
    except ParseError as e:
        return jsonify({"error": f"Please check your reference: {e}"}), 400
    except BookNotFoundError as e:
        return jsonify({"error": str(e)}), 404

    return jsonify(cross_ref.to_json()), 201
