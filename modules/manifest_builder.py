"""
Offline product image manifest builder.

Scans the products image directory once and matches every catalog
product/color against the expected file naming convention. The build is a
gate: a missing image or placeholder fails the whole build and every miss is
reported together, so runtime never has to guess file names.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from core.exceptions import ManifestConflictError, ManifestError, ManifestGenerationError
from models.manifest import ProductManifest
from models.product import Product
from modules.asset_paths import expected_base_name, is_image_file, product_manifest_key
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)

DEFAULT_URL_PREFIX = "/products"

DEFAULT_PLACEHOLDERS = {
    "adult": "/products/placeholder-adult.jpg",
    "kids": "/products/placeholder-kids.jpg",
    "standard": "/products/placeholder-adult.jpg",
    "default": "/products/placeholder-adult.jpg",
}


@dataclass(frozen=True)
class MissingAsset:
    """A product color with no matching image file."""

    product: str
    model_key: str
    variant: str
    color: str
    expected: str

    def describe(self) -> str:
        return (
            f'{self.model_key} ({self.variant}) color "{self.color}" '
            f'expected file base "{self.expected}"'
        )


def index_image_files(products_dir: Path) -> Dict[str, str]:
    """
    Map lowercase base name -> actual file name for every image in a directory.

    Sorted so the result does not depend on directory listing order.
    """
    index: Dict[str, str] = {}
    for path in sorted(Path(products_dir).iterdir(), key=lambda p: p.name):
        if not path.is_file() or not is_image_file(path.name):
            continue
        index.setdefault(path.stem.lower(), path.name)
    return index


def _placeholder_on_disk(placeholder: str, products_dir: Path, url_prefix: str) -> Path:
    """Translate a public placeholder path back to a file in products_dir."""
    prefix = url_prefix.rstrip("/") + "/"
    relative = placeholder[len(prefix):] if placeholder.startswith(prefix) else placeholder.lstrip("/")
    return Path(products_dir) / relative


def build_manifest(
    products: Iterable[Product],
    products_dir: Path,
    placeholders: Optional[Dict[str, str]] = None,
    url_prefix: str = DEFAULT_URL_PREFIX,
) -> ProductManifest:
    """
    Build the manifest for a catalog.

    Args:
        products: Catalog products to resolve
        products_dir: Directory containing the product images
        placeholders: Variant -> public placeholder path (default: DEFAULT_PLACEHOLDERS)
        url_prefix: Public URL prefix of products_dir

    Returns:
        ProductManifest stamped with the current time

    Raises:
        ManifestError: products_dir is not a directory
        ManifestConflictError: Two different files resolve to one key
        ManifestGenerationError: Any image or placeholder is missing
    """
    products_dir = Path(products_dir)
    if placeholders is None:
        placeholders = DEFAULT_PLACEHOLDERS

    if not products_dir.is_dir():
        raise ManifestError(
            f"Products directory not found: {products_dir}",
            {"resolution": "Pass --products-dir or set PRODUCTS_DIR"},
        )

    files = index_image_files(products_dir)
    logger.debug(f"Indexed {len(files)} image files in {products_dir}")

    entries: Dict[str, str] = {}
    missing: List[MissingAsset] = []
    prefix = url_prefix.rstrip("/")

    for product in products:
        for color in product.colors:
            base_name = expected_base_name(product, color)
            key = product_manifest_key(product, color)
            match = files.get(base_name.lower())

            if match is None:
                missing.append(MissingAsset(
                    product=product.name,
                    model_key=product.model_key,
                    variant=product.variant,
                    color=color,
                    expected=base_name,
                ))
                continue

            asset_path = f"{prefix}/{match}"
            existing = entries.get(key)
            if existing is not None and existing != asset_path:
                raise ManifestConflictError(key, existing, asset_path)
            entries[key] = asset_path

    missing_placeholders = sorted({
        path for path in placeholders.values()
        if not _placeholder_on_disk(path, products_dir, url_prefix).is_file()
    })

    if missing or missing_placeholders:
        for miss in missing:
            logger.error(f"Missing product image: {miss.describe()}")
        for path in missing_placeholders:
            logger.error(f"Missing placeholder image: {path}")
        raise ManifestGenerationError(missing, missing_placeholders)

    logger.info(f"Manifest built with {len(entries)} entries")
    return ProductManifest.create(entries, placeholders)


def write_manifest(manifest: ProductManifest, output_path: Path) -> Path:
    """Write a manifest as JSON, creating parent directories."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(manifest.to_json(), encoding="utf-8")
    logger.info(f"Wrote manifest with {len(manifest.entries)} entries to {output_path}")
    return output_path
