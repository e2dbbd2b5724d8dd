"""Thread-safe singleton I18nManager for CommentWall UI strings."""

import json
import logging
import threading
from pathlib import Path
from typing import Any, Dict

LOCALE_DIR = Path(__file__).resolve().parent.parent / "resources" / "locales"
DEFAULT_LOCALE = "en_US"

logger = logging.getLogger("commentwall")


class I18nManager:
    """Loads locale JSON files and resolves dot-notation keys
    (e.g., "form.submit") with {placeholder} substitution.
    """

    _instance = None
    _lock = threading.RLock()

    def __new__(cls):
        with cls._lock:
            if cls._instance is None:
                cls._instance = super().__new__(cls)
                cls._instance._initialized = False
            return cls._instance

    def __init__(self):
        if self._initialized:
            return
        self._data: Dict[str, Any] = {}
        self._locale: str = DEFAULT_LOCALE
        self._initialized = True

    def load_locale(self, locale: str) -> None:
        """Load LOCALE_DIR/{locale}.json.

        A missing or unparseable file logs a warning and keeps current data.
        """
        with self._lock:
            locale_file = LOCALE_DIR / f"{locale}.json"

            if not locale_file.exists():
                logger.warning(f"Locale file not found: {locale_file}")
                return

            try:
                with open(locale_file, "r", encoding="utf-8") as f:
                    data = json.load(f)
            except (json.JSONDecodeError, OSError) as e:
                logger.warning(f"Failed to load locale file {locale_file}: {e}")
                return

            self._data = data
            self._locale = locale
            logger.info(f"Loaded locale: {locale}")

    def get(self, key: str, **kwargs) -> str:
        """Translated string for key, or the key itself if not found. Never raises.

        Examples:
            get("form.counter", count=12, max=2000) -> "12/2000 characters"
        """
        with self._lock:
            template = self._resolve(key)

            if not kwargs:
                return template

            try:
                return template.format_map(kwargs)
            except (KeyError, ValueError) as e:
                logger.warning(f"Failed to format i18n string for key '{key}': {e}")
                return template

    def translate(self, key: str, fallback: str, **kwargs) -> str:
        """Like get(), but an unresolved key yields fallback instead of the key.

        Used for messages built outside the GUI, where the English text
        is the default when no locale is loaded.
        """
        with self._lock:
            template = self._resolve(key)
            if template == key:
                template = fallback

            if not kwargs:
                return template

            try:
                return template.format_map(kwargs)
            except (KeyError, ValueError) as e:
                logger.warning(f"Failed to format i18n string for key '{key}': {e}")
                return template

    @property
    def locale(self) -> str:
        with self._lock:
            return self._locale

    @classmethod
    def reset(cls) -> None:
        """Reset singleton instance (for testing)."""
        with cls._lock:
            cls._instance = None

    def _resolve(self, key: str) -> str:
        # Caller must hold lock
        node = self._data
        for part in key.split("."):
            if isinstance(node, dict) and part in node:
                node = node[part]
            else:
                return key
        return node if isinstance(node, str) else key
