"""Form input sanitizing shared by the public routes."""

from typing import Optional

import bleach


def sanitize_text(text: Optional[str], max_length: Optional[int] = None) -> str:
    """
    Sanitize user input text to prevent XSS and injection attacks.

    Args:
        text: Raw input text
        max_length: Optional maximum length to enforce

    Returns:
        Sanitized text safe for storage and display
    """
    if not text:
        return ""

    text = text.strip()

    # Strip all HTML tags and attributes
    text = bleach.clean(text, tags=[], strip=True)

    if max_length and len(text) > max_length:
        text = text[:max_length]

    return text
