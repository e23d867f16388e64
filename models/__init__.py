"""
Data models for PreorderWeb.

This module contains dataclasses for:
- Product: Immutable catalog item (model key, variant, colors, sizes)
- ProductManifest: Image lookup table produced by generate_manifest.py
- OrderRequest: Product selection carried in the confirmation URL
- CustomerDetails: Contact fields from the confirmation form
- Order: Persisted preorder record
"""

from .product import Product, SizeChart, VARIANTS, VARIANT_LABELS, MODEL_KEYS
from .manifest import ProductManifest
from .order import (
    Order,
    OrderRequest,
    OrderStatus,
    CustomerDetails,
    clamp_quantity,
    MIN_QUANTITY,
    MAX_QUANTITY,
)

__all__ = [
    # Catalog models
    "Product",
    "SizeChart",
    "VARIANTS",
    "VARIANT_LABELS",
    "MODEL_KEYS",
    # Manifest
    "ProductManifest",
    # Order models
    "Order",
    "OrderRequest",
    "OrderStatus",
    "CustomerDetails",
    "clamp_quantity",
    "MIN_QUANTITY",
    "MAX_QUANTITY",
]
