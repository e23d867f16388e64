"""
Translation tests: lookups, fallbacks, and key coverage of the shipped files.
"""

import json
import re
from pathlib import Path

import pytest

from modules.i18n import DEFAULT_LANGUAGE, I18nManager


PROJECT_ROOT = Path(__file__).parent.parent

TEMPLATE_KEY = re.compile(r"_\('([a-z_.]+)'")
PYTHON_KEY = re.compile(r"(?:_t|translate_current)\(\s*\"([a-z_.]+)\"")


# Fixtures

@pytest.fixture(scope="module")
def manager():
    return I18nManager()


@pytest.fixture
def tiny_dir(tmp_path):
    (tmp_path / "it.json").write_text(
        json.dumps({"greet": "Ciao {name}", "only_it": "Solo italiano"}), encoding="utf-8"
    )
    (tmp_path / "en.json").write_text(json.dumps({"greet": "Hello {name}"}), encoding="utf-8")
    return tmp_path


def used_keys():
    keys = set()
    for path in (PROJECT_ROOT / "templates").glob("*.html"):
        keys.update(TEMPLATE_KEY.findall(path.read_text(encoding="utf-8")))
    for folder in ("routes", "modules"):
        for path in (PROJECT_ROOT / folder).glob("*.py"):
            keys.update(PYTHON_KEY.findall(path.read_text(encoding="utf-8")))
    keys.update(PYTHON_KEY.findall((PROJECT_ROOT / "app.py").read_text(encoding="utf-8")))
    return keys


# Tests

class TestLookup:

    def test_format_variables(self, tiny_dir):
        manager = I18nManager(tiny_dir)
        assert manager.get_translation("greet", "en", name="Anna") == "Hello Anna"

    def test_falls_back_to_italian(self, tiny_dir):
        manager = I18nManager(tiny_dir)
        assert manager.get_translation("only_it", "en") == "Solo italiano"
        assert manager.missing_keys("en") == ["only_it"]

    def test_unknown_key_returns_key(self, tiny_dir):
        assert I18nManager(tiny_dir).get_translation("nope.nothing", "it") == "nope.nothing"

    def test_unknown_language_uses_default(self, tiny_dir):
        assert I18nManager(tiny_dir).get_translation("greet", "fr", name="Luca") == "Ciao Luca"

    def test_missing_variable_returns_template(self, tiny_dir):
        assert I18nManager(tiny_dir).get_translation("greet", "it", other=1) == "Ciao {name}"


class TestShippedTranslations:

    def test_english_covers_italian(self, manager):
        assert manager.missing_keys("en") == []

    def test_every_used_key_is_defined(self, manager):
        keys = used_keys()
        assert "preorder.errors.required" in keys
        assert sorted(keys - manager.keys(DEFAULT_LANGUAGE)) == []

    def test_user_facing_messages(self, manager):
        assert manager.get_translation("preorder.errors.required") == (
            "Compila Nome e Cognome, Classe e Telefono/Email."
        )
        assert manager.get_translation("admin.confirm_delete_all") == "Eliminare TUTTI gli ordini?"
        assert manager.get_translation("admin.deleted_all", "en", count=4) == "Deleted 4 orders."
