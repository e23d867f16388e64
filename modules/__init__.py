"""Helper modules for the PreorderWeb application."""

__all__ = [
    "asset_paths",
    "catalog",
    "i18n",
    "image_defaults",
    "image_resolver",
    "manifest_builder",
    "sanitize",
]
