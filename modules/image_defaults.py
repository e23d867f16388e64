"""
SVG Default Images for Product Cards

Last-resort images used when neither the manifest nor any placeholder
provides a path, and when the browser fails to load every candidate.

Edit these SVG definitions to customize the default appearance.
"""

# Shown when no image path exists at all for a product color
UNAVAILABLE_SVG = (
    "data:image/svg+xml,%3Csvg xmlns='http://www.w3.org/2000/svg' "
    "width='320' height='220' viewBox='0 0 320 220'%3E"
    "%3Crect fill='%23e2e8f0' width='320' height='220'/%3E"
    "%3Crect x='120' y='60' width='80' height='70' rx='8' fill='none' stroke='%2394a3b8' stroke-width='3'/%3E"
    "%3Ccircle cx='145' cy='85' r='8' fill='%2394a3b8'/%3E"
    "%3Cpath d='M124 126 l26 -24 l16 14 l14 -10 l16 20 z' fill='%2394a3b8'/%3E"
    "%3Ctext x='160' y='165' font-family='Arial,sans-serif' font-size='14' "
    "fill='%23475569' text-anchor='middle'%3EImmagine non disponibile%3C/text%3E"
    "%3C/svg%3E"
)

# Per-variant silhouettes, used when a placeholder file is not configured
APPAREL_DEFAULT_SVG = (
    "data:image/svg+xml,%3Csvg xmlns='http://www.w3.org/2000/svg' "
    "width='320' height='220' viewBox='0 0 320 220'%3E"
    "%3Crect fill='%23f3f6fb' width='320' height='220'/%3E"
    "%3Cpath d='M120 50 l25 -12 h30 l25 12 l25 30 l-20 14 l-12 -12 v90 h-86 v-90 l-12 12 l-20 -14 z' "
    "fill='%23c8d4ea' stroke='%230b3d91' stroke-width='2'/%3E"
    "%3C/svg%3E"
)

ACCESSORY_DEFAULT_SVG = (
    "data:image/svg+xml,%3Csvg xmlns='http://www.w3.org/2000/svg' "
    "width='320' height='220' viewBox='0 0 320 220'%3E"
    "%3Crect fill='%23f3f6fb' width='320' height='220'/%3E"
    "%3Crect x='140' y='40' width='40' height='140' rx='14' fill='%23c8d4ea' stroke='%230b3d91' stroke-width='2'/%3E"
    "%3C/svg%3E"
)


def get_default_image(variant: str) -> str:
    """
    Get the inline default image for a product variant.

    Args:
        variant: Product variant ("adult", "kids", "standard")

    Returns:
        Data URI string for an SVG image

    Example:
        >>> get_default_image('standard')
        'data:image/svg+xml,...'
    """
    type_map = {
        'adult': APPAREL_DEFAULT_SVG,
        'kids': APPAREL_DEFAULT_SVG,
        'standard': ACCESSORY_DEFAULT_SVG,
    }

    return type_map.get(variant, UNAVAILABLE_SVG)
