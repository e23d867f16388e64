"""
Internationalization (i18n) Module

The storefront is written for an Italian school, so Italian is the default;
English is available for parents who prefer it.

Supported languages:
- Italiano (it)
- English (en)

Usage in templates:
    {{ _('catalog.title') }}
    {{ _('admin.deleted_all', count=3) }}

Usage in Python:
    manager = I18nManager()
    message = manager.get_translation('preorder.errors.required', lang='en')
"""

import json
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, List, Optional, Set

from flask import current_app, session

from logging_config import get_logger


logger = get_logger(__name__)

SUPPORTED_LANGUAGES = {
    'it': {'name': 'Italiano', 'flag_emoji': 'IT'},
    'en': {'name': 'English', 'flag_emoji': 'GB'},
}

DEFAULT_LANGUAGE = 'it'


class I18nManager:
    """Loads translation files and looks up dotted keys."""

    def __init__(self, translations_dir: Optional[Path] = None):
        """
        Initialize i18n manager.

        Args:
            translations_dir: Path to translations directory.
                            Defaults to ./translations in the project root.
        """
        if translations_dir is None:
            translations_dir = Path(__file__).parent.parent / 'translations'

        self.translations_dir = Path(translations_dir)
        self._translations: Dict[str, Dict[str, Any]] = {}
        self._load_all_translations()

    def _load_all_translations(self) -> None:
        if not self.translations_dir.exists():
            logger.warning(f"Translations directory not found: {self.translations_dir}")
            return

        for lang_code in SUPPORTED_LANGUAGES:
            self._load_translation(lang_code)

    def _load_translation(self, lang_code: str) -> None:
        translation_file = self.translations_dir / f'{lang_code}.json'

        if not translation_file.exists():
            logger.warning(
                f"Translation file not found: {translation_file}. "
                f"Using empty translations for {lang_code}."
            )
            self._translations[lang_code] = {}
            return

        try:
            with open(translation_file, 'r', encoding='utf-8') as f:
                self._translations[lang_code] = json.load(f)
            logger.info(
                f"Loaded {len(self._translations[lang_code])} translation sections "
                f"for language: {lang_code}"
            )
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse translation file {translation_file}: {e}")
            self._translations[lang_code] = {}

    def get_translation(self, key: str, lang: str = DEFAULT_LANGUAGE, **kwargs) -> str:
        """
        Get translated string for a key.

        Supports nested keys using dot notation and str.format variables.
        Falls back to the default language, then to the key itself.

        Args:
            key: Translation key (dot notation)
            lang: Language code
            **kwargs: Variables for string formatting

        Returns:
            Translated string, or key if translation not found
        """
        if lang not in self._translations:
            lang = DEFAULT_LANGUAGE

        value = self._lookup(key, lang)
        if value is None and lang != DEFAULT_LANGUAGE:
            value = self._lookup(key, DEFAULT_LANGUAGE)

        if value is None:
            logger.debug(f"Translation key not found: {key} (lang: {lang})")
            return key

        if kwargs:
            try:
                return value.format(**kwargs)
            except KeyError as e:
                logger.warning(f"Missing variable in translation: {e} (key: {key}, lang: {lang})")
        return value

    def _lookup(self, key: str, lang: str) -> Optional[str]:
        value: Any = self._translations.get(lang, {})
        for part in key.split('.'):
            if not isinstance(value, dict):
                return None
            value = value.get(part)
        return value if isinstance(value, str) else None

    def is_language_supported(self, lang_code: str) -> bool:
        return lang_code in SUPPORTED_LANGUAGES

    def keys(self, lang: str) -> Set[str]:
        """All dotted keys defined for a language."""
        return set(_flatten_keys(self._translations.get(lang, {})))

    def missing_keys(self, lang: str) -> List[str]:
        """
        Keys present in the default language but absent from lang.

        Those strings silently fall back to Italian at runtime.
        """
        return sorted(self.keys(DEFAULT_LANGUAGE) - self.keys(lang))


def _flatten_keys(tree: Dict[str, Any], prefix: str = '') -> Iterator[str]:
    for name, value in tree.items():
        key = f'{prefix}{name}'
        if isinstance(value, dict):
            yield from _flatten_keys(value, f'{key}.')
        else:
            yield key


def get_supported_languages() -> Dict[str, Dict[str, str]]:
    return SUPPORTED_LANGUAGES


def create_translation_filter(manager: I18nManager, current_language: str) -> Callable[..., str]:
    """
    Create a translation function bound to one language.

    Usage in Flask:
        @app.context_processor
        def inject_i18n():
            lang = session.get('language', DEFAULT_LANGUAGE)
            return {'_': create_translation_filter(manager, lang)}
    """
    def translation_filter(key: str, **kwargs) -> str:
        return manager.get_translation(key, lang=current_language, **kwargs)

    return translation_filter


def translate_current(key: str, **kwargs) -> str:
    """
    Translate for the current request's language.

    Used by routes for flashed and inline messages.
    """
    manager = current_app.config["I18N"]
    lang = session.get("language", DEFAULT_LANGUAGE)
    return manager.get_translation(key, lang=lang, **kwargs)
