"""
Unit tests for the product image naming conventions.
"""

import pytest

from models.product import Product
from modules.asset_paths import (
    canonical_color,
    expected_base_name,
    is_image_file,
    manifest_key,
    normalize_color_for_model,
    product_manifest_key,
)
from modules.catalog import find_product


class TestNormalizeColor:
    """Rename table for image file spellings."""

    def test_blu_navy_renamed_for_apparel(self):
        assert normalize_color_for_model("KANGAROO", "Blu-Navy") == "Blue-Navy"
        assert normalize_color_for_model("WHALE", "Blu-Navy") == "Blue-Navy"

    def test_tenerife_keeps_catalog_spelling(self):
        assert normalize_color_for_model("TENERIFE", "Blu-Navy") == "Blu-Navy"

    def test_unmapped_color_unchanged(self):
        assert normalize_color_for_model("KANGAROO", "Bordeaux") == "Bordeaux"


class TestCanonicalColor:
    """Manifest key color normalization."""

    @pytest.mark.parametrize("raw, expected", [
        ("Nero", "nero"),
        ("  Nero  ", "nero"),
        ("Verde Bosco", "verde-bosco"),
        ("Verde_Bosco", "verde-bosco"),
        ("Verde \t _ Bosco", "verde-bosco"),
        ("Grigio-Oxford", "grigio-oxford"),
    ])
    def test_normalization(self, raw, expected):
        assert canonical_color("WHALE", raw) == expected

    def test_rename_applied_before_lowercasing(self):
        assert canonical_color("KANGAROO", "Blu-Navy") == "blue-navy"
        assert canonical_color("TENERIFE", "Blu-Navy") == "blu-navy"


class TestManifestKey:
    """Key format MODEL__variant__color."""

    def test_format(self):
        assert manifest_key("KANGAROO", "kids", "Nero") == "KANGAROO__kids__nero"

    def test_variants_never_collide(self):
        adult = find_product("KANGAROO", "adult")
        kids = find_product("KANGAROO", "kids")
        assert product_manifest_key(adult, "Nero") != product_manifest_key(kids, "Nero")

    def test_same_after_normalization(self):
        assert manifest_key("WHALE", "adult", "Verde Bosco") == manifest_key("WHALE", "adult", "verde_bosco")


class TestExpectedBaseName:
    """Image file base names the manifest build looks for."""

    def test_adult_apparel(self):
        product = find_product("KANGAROO", "adult")
        assert expected_base_name(product, "Blu-Navy") == "KANGAROO-Blue-Navy"

    def test_kids_infix_for_hoodie_and_tee(self):
        assert expected_base_name(find_product("KANGAROO", "kids"), "Nero") == "KANGAROO-Kids-Nero"
        assert expected_base_name(find_product("WHALE", "kids"), "Bianco") == "WHALE-Kids-Bianco"

    def test_no_infix_for_other_models(self):
        product = Product(
            name="Test",
            model_key="VOLCANO",
            variant="kids",
            price=1,
            description="",
            colors=("Rosso",),
        )
        assert expected_base_name(product, "Rosso") == "VOLCANO-Rosso"

    def test_tenerife_exempt_from_rename(self):
        product = find_product("TENERIFE", "standard")
        assert expected_base_name(product, "Blu-Navy") == "TENERIFE-Blu-Navy"

    def test_single_color_standard_product(self):
        product = find_product("VOLCANO", "standard")
        assert expected_base_name(product, "Standard") == "VOLCANO-Standard"


class TestIsImageFile:

    @pytest.mark.parametrize("filename", [
        "KANGAROO-Nero.jpg",
        "KANGAROO-Nero.JPEG",
        "WHALE-Bianco.png",
        "x.webp",
        "logo.svg",
    ])
    def test_accepted(self, filename):
        assert is_image_file(filename)

    @pytest.mark.parametrize("filename", [
        "notes.txt",
        "KANGAROO-Nero",
        ".jpg",
        "archive.jpg.zip",
    ])
    def test_rejected(self, filename):
        assert not is_image_file(filename)
