"""
Unit tests for runtime image resolution.
"""

from models.manifest import ProductManifest
from modules.catalog import find_product
from modules.image_defaults import (
    ACCESSORY_DEFAULT_SVG,
    APPAREL_DEFAULT_SVG,
    UNAVAILABLE_SVG,
    get_default_image,
)
from modules.image_resolver import UNAVAILABLE_IMAGE, resolve_image, resolve_product_images


class TestResolveImage:
    """Fallback order: manifest entry, variant placeholder, default placeholder, unavailable."""

    def test_manifest_hit(self, sample_manifest):
        product = find_product("KANGAROO", "kids")
        image = resolve_image(product, "Nero", sample_manifest)

        assert image.src == "/products/KANGAROO-Kids-Nero.jpg"
        assert image.fallback_src == "/products/placeholder-kids.jpg"
        assert image.key == "KANGAROO__kids__nero"
        assert not image.is_placeholder

    def test_miss_uses_variant_placeholder(self, sample_manifest):
        product = find_product("KANGAROO", "kids")
        image = resolve_image(product, "Grigio", sample_manifest)

        assert image.src == "/products/placeholder-kids.jpg"
        assert image.is_placeholder
        assert image.fallback_src == APPAREL_DEFAULT_SVG

    def test_miss_uses_default_placeholder(self):
        manifest = ProductManifest(placeholders={"default": "/products/placeholder-adult.jpg"})
        product = find_product("WHALE", "kids")

        image = resolve_image(product, "Nero", manifest)

        assert image.src == "/products/placeholder-adult.jpg"

    def test_nothing_configured_is_unavailable(self):
        product = find_product("VOLCANO", "standard")
        image = resolve_image(product, "Standard", ProductManifest())

        assert image.src == UNAVAILABLE_IMAGE
        assert image.is_unavailable
        assert image.is_placeholder

    def test_hit_without_placeholders_falls_back_to_inline_svg(self):
        manifest = ProductManifest(entries={"VOLCANO__standard__standard": "/products/VOLCANO-Standard.jpg"})
        product = find_product("VOLCANO", "standard")

        image = resolve_image(product, "Standard", manifest)

        assert image.src == "/products/VOLCANO-Standard.jpg"
        assert image.fallback_src == ACCESSORY_DEFAULT_SVG

    def test_to_dict(self, sample_manifest):
        image = resolve_image(find_product("KANGAROO", "adult"), "Bianco", sample_manifest)
        assert image.to_dict() == {
            "src": "/products/KANGAROO-Bianco.jpg",
            "fallback": "/products/placeholder-adult.jpg",
        }


class TestResolveProductImages:

    def test_one_image_per_color(self, sample_manifest):
        product = find_product("KANGAROO", "adult")
        images = resolve_product_images(product, sample_manifest)

        assert list(images) == list(product.colors)
        assert images["Bianco"].src == "/products/KANGAROO-Bianco.jpg"
        assert images["Nero"].src == "/products/placeholder-adult.jpg"


class TestDefaultImages:

    def test_variant_mapping(self):
        assert get_default_image("adult") == APPAREL_DEFAULT_SVG
        assert get_default_image("kids") == APPAREL_DEFAULT_SVG
        assert get_default_image("standard") == ACCESSORY_DEFAULT_SVG
        assert get_default_image("other") == UNAVAILABLE_SVG
