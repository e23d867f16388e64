"""
Runtime product image resolution.

One fallback order for every card:

    manifest entry -> variant placeholder -> default placeholder -> unavailable

resolve_image() is a pure function of (product, color, manifest). A miss is
logged as a diagnostic and never raised: the catalog always renders.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from models.manifest import ProductManifest
from models.product import Product
from modules.asset_paths import normalize_color_for_model, product_manifest_key
from modules.image_defaults import UNAVAILABLE_SVG, get_default_image
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)

UNAVAILABLE_IMAGE = UNAVAILABLE_SVG


@dataclass(frozen=True)
class ProductImage:
    """Resolved image for one product color."""

    src: str
    """Path (or data URI) to render first."""

    fallback_src: str
    """Tried once by the browser if src fails to load."""

    key: str
    """Manifest key that was looked up."""

    is_placeholder: bool = False
    """True when the manifest had no entry for the key."""

    @property
    def is_unavailable(self) -> bool:
        return self.src == UNAVAILABLE_IMAGE

    def to_dict(self) -> Dict[str, str]:
        return {"src": self.src, "fallback": self.fallback_src}


def resolve_image(product: Product, color: str, manifest: ProductManifest) -> ProductImage:
    """
    Resolve the image for a product color.

    Args:
        product: Catalog product
        color: Selected color (catalog spelling)
        manifest: Loaded product manifest

    Returns:
        ProductImage with the path to render and a secondary fallback
    """
    key = product_manifest_key(product, color)
    placeholder = manifest.placeholder_for(product.variant)

    manifest_path = manifest.lookup(key)
    if manifest_path:
        return ProductImage(
            src=manifest_path,
            fallback_src=placeholder or get_default_image(product.variant),
            key=key,
        )

    logger.warning(
        f"[ProductImageMissing] modelKey={product.model_key} variant={product.variant} "
        f"color={color!r} normalizedColor={normalize_color_for_model(product.model_key, color)!r} "
        f"key={key}"
    )

    if placeholder:
        return ProductImage(
            src=placeholder,
            fallback_src=get_default_image(product.variant),
            key=key,
            is_placeholder=True,
        )

    return ProductImage(
        src=UNAVAILABLE_IMAGE,
        fallback_src=UNAVAILABLE_IMAGE,
        key=key,
        is_placeholder=True,
    )


def resolve_product_images(product: Product, manifest: ProductManifest) -> Dict[str, ProductImage]:
    """Resolve every color of a product, keyed by catalog color name."""
    return {color: resolve_image(product, color, manifest) for color in product.colors}
