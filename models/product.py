"""
Product catalog models.

Products are defined once in modules/catalog.py and never mutated, so the
dataclasses here are frozen and hold tuples rather than lists.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


VARIANT_ADULT = "adult"
VARIANT_KIDS = "kids"
VARIANT_STANDARD = "standard"

VARIANTS = (VARIANT_ADULT, VARIANT_KIDS, VARIANT_STANDARD)

VARIANT_LABELS = {
    VARIANT_ADULT: "Adulto",
    VARIANT_KIDS: "Bambino",
    VARIANT_STANDARD: "Standard",
}

MODEL_KEYS = ("KANGAROO", "WHALE", "VOLCANO", "TENERIFE")


@dataclass(frozen=True)
class Product:
    """
    A preorderable catalog item.

    One model key (the physical template, e.g. the KANGAROO hoodie) can
    appear several times with different variants.
    """

    name: str
    """Display name shown on the card and stored as the order's productType."""

    model_key: str
    """Physical product template, one of MODEL_KEYS."""

    variant: str
    """Sub-population: 'adult', 'kids' or 'standard'."""

    price: float
    """Unit price in euro."""

    description: str

    colors: Tuple[str, ...]
    """Available colors; the first one is preselected."""

    sizes: Optional[Tuple[str, ...]] = None
    """Available sizes; None for one-size items."""

    details: Tuple[str, ...] = ()
    """Bullet points shown under the description."""

    def __post_init__(self):
        if not self.colors:
            raise ValueError(f"Product {self.name!r} must define at least one color")
        if self.variant not in VARIANTS:
            raise ValueError(f"Unknown variant {self.variant!r} for product {self.name!r}")
        if self.model_key not in MODEL_KEYS:
            raise ValueError(f"Unknown model key {self.model_key!r} for product {self.name!r}")

    @property
    def has_sizes(self) -> bool:
        return bool(self.sizes)

    @property
    def default_color(self) -> str:
        return self.colors[0]

    @property
    def default_size(self) -> Optional[str]:
        return self.sizes[0] if self.sizes else None

    @property
    def variant_label(self) -> str:
        return VARIANT_LABELS[self.variant]

    @property
    def slug(self) -> str:
        """Stable identifier for HTML ids and form lookups."""
        return f"{self.model_key.lower()}-{self.variant}"


@dataclass(frozen=True)
class SizeChart:
    """A size guide table shown above the catalog."""

    title: str
    rows: Tuple[str, ...]
