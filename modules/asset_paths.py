"""
Product image naming conventions.

Shared by the offline manifest build and the runtime image lookup so both
compute exactly the same keys.

    manifest key:   KANGAROO__adult__blue-navy
    expected file:  KANGAROO-Blue-Navy.jpg
                    KANGAROO-Kids-Nero.png   (kids variants of hoodie and tee)
"""

import re

from models.product import Product, VARIANT_KIDS


# Catalog color name -> spelling used in image file names
COLOR_IMAGE_MAP = {
    "Blu-Navy": "Blue-Navy",
}

# Models whose image files use the catalog spelling as-is
RENAME_EXEMPT_MODELS = frozenset({"TENERIFE"})

# Models whose kids variant has its own photo set
KIDS_INFIX_MODELS = frozenset({"KANGAROO", "WHALE"})

ACCEPTED_EXTENSIONS = frozenset({".png", ".jpg", ".jpeg", ".webp", ".svg"})

_SEPARATOR_RUN = re.compile(r"[\s_]+")


def normalize_color_for_model(model_key: str, color: str) -> str:
    """Apply the image spelling rename table unless the model is exempt."""
    if model_key in RENAME_EXEMPT_MODELS:
        return color
    return COLOR_IMAGE_MAP.get(color, color)


def canonical_color(model_key: str, color: str) -> str:
    """
    Normalized color used in manifest keys.

    Example:
        >>> canonical_color("KANGAROO", " Blu-Navy ")
        'blue-navy'
        >>> canonical_color("WHALE", "Verde  Bosco")
        'verde-bosco'
    """
    renamed = normalize_color_for_model(model_key, color.strip())
    return _SEPARATOR_RUN.sub("-", renamed.strip().lower())


def manifest_key(model_key: str, variant: str, color: str) -> str:
    return f"{model_key}__{variant}__{canonical_color(model_key, color)}"


def product_manifest_key(product: Product, color: str) -> str:
    return manifest_key(product.model_key, product.variant, color)


def expected_base_name(product: Product, color: str) -> str:
    """File name (without extension) the build expects for a product color."""
    image_color = normalize_color_for_model(product.model_key, color)
    if product.variant == VARIANT_KIDS and product.model_key in KIDS_INFIX_MODELS:
        return f"{product.model_key}-Kids-{image_color}"
    return f"{product.model_key}-{image_color}"


def is_image_file(filename: str) -> bool:
    dot = filename.rfind(".")
    return dot > 0 and filename[dot:].lower() in ACCEPTED_EXTENSIONS
