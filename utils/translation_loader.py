# utils/translation_loader.py
"""
Loads translations through a content source, at most once per id.

Concurrent requests for the same id share one in-flight fetch. Loaded
translations go into a cache collaborator (anything with get/set) and are
shared read-only from then on.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError

from utils.errors import TranslationLoadError, TranslationLoadTimeout

logger = logging.getLogger(__name__)


class InMemoryTranslationCache:
    def __init__(self):
        self._translations = {}
        self._lock = threading.Lock()

    def get(self, key):
        with self._lock:
            return self._translations.get(key)

    def set(self, key, translation):
        with self._lock:
            self._translations[key] = translation

    def keys(self):
        with self._lock:
            return sorted(self._translations)

    def clear(self):
        with self._lock:
            self._translations.clear()


class TranslationLoader:
    def __init__(self, source, cache=None, timeout=None, max_workers=4):
        self.source = source
        self.cache = cache if cache is not None else InMemoryTranslationCache()
        self.timeout = timeout
        self._pending = {}
        self._lock = threading.Lock()
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix='translation-loader')

    def _fetch(self, key):
        try:
            translation = self.source.fetch(key)
            self.cache.set(key, translation)
            book_count = len(translation.books)
            logger.info(f"Loaded translation '{key}' ({translation.display_name}, {book_count} books)")
            return translation
        except TranslationLoadError:
            raise
        except Exception as e:
            logger.error(f"Unexpected error loading translation '{key}': {str(e)}", exc_info=True)
            raise TranslationLoadError(key, str(e))
        finally:
            with self._lock:
                self._pending.pop(key, None)

    def load(self, translation_id, timeout=None):
        """Return the Translation for an id, fetching it if needed.

        Raises TranslationLoadError when the source fails and
        TranslationLoadTimeout when the wait exceeds the timeout.
        """
        key = (translation_id or '').strip().lower()
        if not key:
            raise TranslationLoadError(translation_id, "translation id is required")

        translation = self.cache.get(key)
        if translation is not None:
            return translation

        with self._lock:
            translation = self.cache.get(key)
            if translation is not None:
                return translation
            future = self._pending.get(key)
            if future is None:
                future = self._executor.submit(self._fetch, key)
                self._pending[key] = future
            else:
                logger.debug(f"Joining in-flight load of translation '{key}'")

        wait = timeout if timeout is not None else self.timeout
        try:
            return future.result(timeout=wait)
        except FutureTimeoutError:
            logger.warning(f"Timed out after {wait}s waiting for translation '{key}'")
            raise TranslationLoadTimeout(key, wait)

    def loaded_ids(self):
        return self.cache.keys() if hasattr(self.cache, 'keys') else []

    def shutdown(self):
        self._executor.shutdown(wait=False)
