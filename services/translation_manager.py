# -*- coding: utf-8 -*-
"""
Translation Manager - user-facing strings of the wizards.

Lookup order: current language, then English, then the key itself.
"""

from typing import Dict, Set

from utils.logger import get_logger

logger = get_logger(__name__)

FALLBACK_LANGUAGE = "en"


class TranslationManager:
    """Singleton holding the active language and the loaded string tables."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            instance = super().__new__(cls)
            instance._tables = cls._load_tables()
            instance._missing = set()
            instance._current_language = FALLBACK_LANGUAGE
            instance.set_language(instance._default_language())
            cls._instance = instance
        return cls._instance

    @staticmethod
    def _load_tables() -> Dict[str, Dict[str, str]]:
        from services.translations.id import ID_TRANSLATIONS
        from services.translations.en import EN_TRANSLATIONS
        return {"id": ID_TRANSLATIONS, "en": EN_TRANSLATIONS}

    @staticmethod
    def _default_language() -> str:
        from app.config import Config
        return Config.DEFAULT_LANGUAGE

    def set_language(self, lang_code: str):
        from app.config import Config

        if lang_code not in Config.SUPPORTED_LANGUAGES or lang_code not in self._tables:
            logger.warning(f"Unsupported language '{lang_code}', keeping '{self._current_language}'")
            return
        if self._current_language != lang_code:
            self._current_language = lang_code
            logger.info(f"Language changed to: {lang_code}")

    def get_language(self) -> str:
        return self._current_language

    def tr(self, key: str, **kwargs) -> str:
        text = self._tables[self._current_language].get(key)
        if text is None:
            text = self._tables[FALLBACK_LANGUAGE].get(key)
        if text is None:
            self._report_missing(key)
            return key
        if not kwargs:
            return text
        try:
            return text.format(**kwargs)
        except (KeyError, IndexError, ValueError) as e:
            logger.warning(f"Bad placeholders for '{key}': {e}")
            return text

    def _report_missing(self, key: str):
        missing: Set[str] = self._missing
        if key not in missing:
            missing.add(key)
            logger.warning(f"Missing translation: {key}")


_translator = TranslationManager()


def tr(key: str, **kwargs) -> str:
    return _translator.tr(key, **kwargs)


def set_language(lang_code: str):
    _translator.set_language(lang_code)


def get_language() -> str:
    return _translator.get_language()
