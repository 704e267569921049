import json
import logging
import os
from typing import Any, Dict, Optional

from vidproxy.config.settings import config

logger = logging.getLogger(__name__)

LOCALES_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "locales")

# Client-facing error bodies are fixed English text regardless of the configured locale
ERROR_LOCALE = "en"


class I18n:
    """Message catalogue keyed by dotted names, e.g. "error.invalid_video_id" """

    def __init__(self, locales_dir: str = LOCALES_DIR):
        self.locales: Dict[str, Dict[str, Any]] = {}
        self.default_locale = config.i18n.default_locale
        self.load_locales(locales_dir)

    def load_locales(self, locales_dir: str):
        if not os.path.isdir(locales_dir):
            logger.warning(f"Locales directory not found at {locales_dir}")
            return

        for filename in sorted(os.listdir(locales_dir)):
            if not filename.endswith(".json"):
                continue
            locale_code = filename[:-5]
            try:
                with open(os.path.join(locales_dir, filename), "r", encoding="utf-8") as f:
                    self.locales[locale_code] = json.load(f)
            except (OSError, ValueError) as e:
                logger.error(f"Error loading locale {locale_code}: {e}")

    def _lookup(self, key: str, locale: str) -> Optional[str]:
        value: Any = self.locales.get(locale)
        for part in key.split("."):
            if not isinstance(value, dict) or part not in value:
                return None
            value = value[part]
        return value if isinstance(value, str) else None

    def get(self, key: str, locale: Optional[str] = None, **kwargs) -> str:
        """Translated message; falls back to the default locale, then to the key itself"""
        template = None
        if locale and locale != self.default_locale:
            template = self._lookup(key, locale)
        if template is None:
            template = self._lookup(key, self.default_locale)
        if template is None:
            return key

        try:
            return template.format(**kwargs)
        except KeyError:
            return template

    def error(self, name: str) -> str:
        """Message for an `{"error": true}` response body"""
        return self.get(f"error.{name}", locale=ERROR_LOCALE)


i18n = I18n()
