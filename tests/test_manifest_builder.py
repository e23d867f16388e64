"""
Unit tests for the offline manifest build and the generate_manifest CLI.

Image directories are built in tmp_path with empty files; only names matter.
"""

import json

import pytest

import generate_manifest
from core.exceptions import ManifestConflictError, ManifestError, ManifestGenerationError
from models.manifest import ProductManifest
from models.product import Product
from modules.asset_paths import expected_base_name
from modules.catalog import get_products
from modules.manifest_builder import (
    DEFAULT_PLACEHOLDERS,
    build_manifest,
    index_image_files,
    write_manifest,
)


# Fixtures

@pytest.fixture
def tenerife():
    return Product(
        name="Cappellino TENERIFE",
        model_key="TENERIFE",
        variant="standard",
        price=10,
        description="",
        colors=("Blu-Navy", "Nero"),
    )


@pytest.fixture
def products_dir(tmp_path):
    """Directory holding the default placeholders only."""
    directory = tmp_path / "products"
    directory.mkdir()
    (directory / "placeholder-adult.jpg").write_bytes(b"")
    (directory / "placeholder-kids.jpg").write_bytes(b"")
    return directory


def touch(directory, *names):
    for name in names:
        (directory / name).write_bytes(b"")


# Tests

class TestIndexImageFiles:

    def test_indexes_images_by_lowercase_stem(self, products_dir):
        touch(products_dir, "WHALE-Nero.PNG", "readme.txt")
        index = index_image_files(products_dir)
        assert index["whale-nero"] == "WHALE-Nero.PNG"
        assert "readme" not in index

    def test_skips_directories(self, products_dir):
        (products_dir / "KANGAROO-Nero.jpg").mkdir()
        assert "kangaroo-nero" not in index_image_files(products_dir)


class TestBuildManifest:
    """Manifest build over a products directory."""

    def test_maps_every_color(self, products_dir, tenerife):
        touch(products_dir, "TENERIFE-Blu-Navy.jpg", "TENERIFE-Nero.png")

        manifest = build_manifest([tenerife], products_dir)

        assert manifest.entries == {
            "TENERIFE__standard__blu-navy": "/products/TENERIFE-Blu-Navy.jpg",
            "TENERIFE__standard__nero": "/products/TENERIFE-Nero.png",
        }
        assert manifest.placeholders == DEFAULT_PLACEHOLDERS
        assert manifest.generated_at

    def test_file_name_match_is_case_insensitive(self, products_dir, tenerife):
        touch(products_dir, "tenerife-blu-navy.webp", "TENERIFE-NERO.jpg")
        manifest = build_manifest([tenerife], products_dir)
        assert manifest.lookup("TENERIFE__standard__blu-navy") == "/products/tenerife-blu-navy.webp"

    def test_custom_url_prefix(self, products_dir, tenerife):
        touch(products_dir, "TENERIFE-Blu-Navy.jpg", "TENERIFE-Nero.jpg")
        placeholders = {"default": "/static/img/placeholder-adult.jpg"}
        manifest = build_manifest([tenerife], products_dir, placeholders, url_prefix="/static/img/")
        assert manifest.lookup("TENERIFE__standard__nero") == "/static/img/TENERIFE-Nero.jpg"

    def test_reports_every_missing_image(self, products_dir, tenerife):
        with pytest.raises(ManifestGenerationError) as exc_info:
            build_manifest([tenerife], products_dir)

        missing = exc_info.value.missing_assets
        assert [m.expected for m in missing] == ["TENERIFE-Blu-Navy", "TENERIFE-Nero"]
        assert exc_info.value.missing_placeholders == []
        assert 'TENERIFE (standard) color "Nero"' in missing[1].describe()

    def test_missing_placeholder_fails(self, products_dir, tenerife):
        touch(products_dir, "TENERIFE-Blu-Navy.jpg", "TENERIFE-Nero.jpg")
        (products_dir / "placeholder-kids.jpg").unlink()

        with pytest.raises(ManifestGenerationError) as exc_info:
            build_manifest([tenerife], products_dir)

        assert exc_info.value.missing_assets == []
        assert exc_info.value.missing_placeholders == ["/products/placeholder-kids.jpg"]

    def test_missing_directory_is_not_a_missing_placeholder(self, tmp_path, tenerife):
        with pytest.raises(ManifestError) as exc_info:
            build_manifest([tenerife], tmp_path / "nope")

        assert not isinstance(exc_info.value, ManifestGenerationError)
        assert exc_info.value.message == f"Products directory not found: {tmp_path / 'nope'}"

    def test_conflicting_files_for_one_key(self, products_dir):
        product = Product(
            name="Maglietta WHALE",
            model_key="WHALE",
            variant="adult",
            price=15,
            description="",
            colors=("Verde Bosco", "Verde_Bosco"),
        )
        touch(products_dir, "WHALE-Verde Bosco.jpg", "WHALE-Verde_Bosco.jpg")

        with pytest.raises(ManifestConflictError) as exc_info:
            build_manifest([product], products_dir)

        assert exc_info.value.key == "WHALE__adult__verde-bosco"
        assert exc_info.value.existing != exc_info.value.incoming

    def test_rebuild_differs_only_in_timestamp(self, products_dir, tenerife):
        touch(products_dir, "TENERIFE-Blu-Navy.jpg", "TENERIFE-Nero.jpg")

        first = build_manifest([tenerife], products_dir).to_dict()
        second = build_manifest([tenerife], products_dir).to_dict()
        first.pop("generatedAt")
        second.pop("generatedAt")

        assert first == second

    def test_full_catalog(self, products_dir):
        products = get_products()
        for product in products:
            for color in product.colors:
                touch(products_dir, f"{expected_base_name(product, color)}.jpg")

        manifest = build_manifest(products, products_dir)

        assert len(manifest.entries) == sum(len(p.colors) for p in products)
        assert manifest.lookup("KANGAROO__adult__blue-navy") == "/products/KANGAROO-Blue-Navy.jpg"
        assert manifest.lookup("KANGAROO__kids__nero") == "/products/KANGAROO-Kids-Nero.jpg"
        assert manifest.lookup("TENERIFE__standard__blu-navy") == "/products/TENERIFE-Blu-Navy.jpg"


class TestManifestFile:
    """Writing and loading the manifest JSON."""

    def test_write_then_load(self, products_dir, tenerife, tmp_path):
        touch(products_dir, "TENERIFE-Blu-Navy.jpg", "TENERIFE-Nero.jpg")
        manifest = build_manifest([tenerife], products_dir)

        path = write_manifest(manifest, tmp_path / "generated" / "products-manifest.json")
        loaded = ProductManifest.load(path)

        assert loaded == manifest
        raw = json.loads(path.read_text(encoding="utf-8"))
        assert set(raw) == {"generatedAt", "entries", "placeholders"}

    def test_load_missing_file_is_empty(self, tmp_path):
        manifest = ProductManifest.load(tmp_path / "missing.json")
        assert manifest.is_empty
        assert manifest.placeholder_for("kids") is None

    def test_load_invalid_json_raises(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ManifestError):
            ProductManifest.load(path)

    def test_load_non_object_raises(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[]", encoding="utf-8")
        with pytest.raises(ManifestError):
            ProductManifest.load(path)

    def test_placeholder_falls_back_to_default(self):
        manifest = ProductManifest(placeholders={"default": "/products/placeholder-adult.jpg"})
        assert manifest.placeholder_for("kids") == "/products/placeholder-adult.jpg"


class TestGenerateManifestCli:
    """generate_manifest.py exit codes."""

    def test_success_writes_file(self, products_dir, tmp_path, capsys):
        for product in get_products():
            for color in product.colors:
                touch(products_dir, f"{expected_base_name(product, color)}.jpg")
        output = tmp_path / "out" / "manifest.json"

        code = generate_manifest.main(["--products-dir", str(products_dir), "--output", str(output)])

        assert code == 0
        assert output.exists()
        assert "SUCCESS" in capsys.readouterr().out

    def test_missing_images_exit_nonzero(self, products_dir, tmp_path, capsys):
        output = tmp_path / "manifest.json"

        code = generate_manifest.main(["--products-dir", str(products_dir), "--output", str(output)])

        assert code == 1
        assert not output.exists()
        assert "KANGAROO-Kids-Nero" in capsys.readouterr().err

    def test_missing_products_dir_exit_nonzero(self, tmp_path, capsys):
        output = tmp_path / "manifest.json"

        code = generate_manifest.main(["--products-dir", str(tmp_path / "nope"), "--output", str(output)])

        err = capsys.readouterr().err
        assert code == 1
        assert not output.exists()
        assert "Products directory not found" in err
        assert "placeholder" not in err
