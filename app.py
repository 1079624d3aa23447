# app.py
from flask import Flask, jsonify, request, g
from flask_cors import CORS
from routes.bible import bible_bp
from config import Config
from utils.content_sources import build_content_source
from utils.cross_references import CrossReferenceIndex
from utils.search import BibleSearchEngine
from utils.translation_loader import TranslationLoader
import os
import logging
import time
import sys
from werkzeug.middleware.proxy_fix import ProxyFix

# Configure logging to output to stdout
logging.basicConfig(
    level=getattr(logging, Config.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger(__name__)


def create_app(config_object=Config, content_source=None):
    app = Flask(__name__)
    app.config.from_object(config_object)

    # Use ProxyFix to handle proxy headers properly (important for Railway)
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1)

    app.json.sort_keys = False  # Preserve order of keys in JSON responses
    app.json.compact = True

    CORS(app, resources={
        r"/api/*": {
            "origins": "*",
            "methods": ["GET", "POST", "OPTIONS"],
            "allow_headers": ["Content-Type", "Authorization"]
        }
    })

    # Ensure URLs with or without trailing slashes are handled the same way
    app.url_map.strict_slashes = False

    source = content_source or build_content_source(config_object)
    logger.info(f"Using '{source.name}' content source for translations")
    app.extensions['translation_loader'] = TranslationLoader(
        source,
        timeout=app.config['TRANSLATION_LOAD_TIMEOUT']
    )
    app.extensions['search_engine'] = BibleSearchEngine()
    app.extensions['cross_references'] = CrossReferenceIndex()

    app.register_blueprint(bible_bp, url_prefix='/api/bible')

    @app.before_request
    def before_request():
        g.start_time = time.time()

    @app.after_request
    def after_request(response):
        duration = time.time() - g.get('start_time', time.time())
        logger.info(f"Request to {request.path} took {duration:.2f} seconds")
        return response

    @app.route('/health', methods=['GET'])
    def health():
        """Health check endpoint reporting the content source and loaded translations"""
        loader = app.extensions['translation_loader']
        return jsonify({
            'status': 'healthy',
            'content_source': loader.source.name,
            'loaded_translations': loader.loaded_ids(),
            'timestamp': time.time()
        })

    return app


app = create_app()

if __name__ == '__main__':
    print("Starting Flask server...")
    port = int(os.getenv('PORT', 5001))
    app.run(debug=True, port=port)
