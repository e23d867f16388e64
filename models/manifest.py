"""
Product image manifest model.

The manifest is produced offline by generate_manifest.py and read once at
application startup. Wire format:

    {
      "generatedAt": "2026-10-19T08:00:00+00:00",
      "entries": {"KANGAROO__adult__nero": "/products/KANGAROO-Nero.jpg", ...},
      "placeholders": {"adult": "...", "kids": "...", "standard": "...", "default": "..."}
    }
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Any, Optional

from core.exceptions import ManifestError
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)

PLACEHOLDER_DEFAULT = "default"


@dataclass
class ProductManifest:
    """
    Lookup table from (model, variant, normalized color) to an image path.

    Attributes:
        generated_at: ISO 8601 timestamp of the build that produced it
        entries: manifest key -> public asset path
        placeholders: variant (or "default") -> public asset path
    """

    generated_at: str = ""
    entries: Dict[str, str] = field(default_factory=dict)
    placeholders: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def create(cls, entries: Dict[str, str], placeholders: Dict[str, str]) -> "ProductManifest":
        """Create a manifest stamped with the current UTC time."""
        return cls(
            generated_at=datetime.now(timezone.utc).isoformat(),
            entries=dict(entries),
            placeholders=dict(placeholders),
        )

    @property
    def is_empty(self) -> bool:
        return not self.entries

    def lookup(self, key: str) -> Optional[str]:
        return self.entries.get(key)

    def placeholder_for(self, variant: str) -> Optional[str]:
        """
        Placeholder for a variant.

        Falls back to the "default" placeholder, then to None.
        """
        return self.placeholders.get(variant) or self.placeholders.get(PLACEHOLDER_DEFAULT)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "generatedAt": self.generated_at,
            "entries": dict(self.entries),
            "placeholders": dict(self.placeholders),
        }

    def to_json(self) -> str:
        """
        Serialize with sorted keys.

        Two builds over the same inputs differ only in generatedAt.
        """
        return json.dumps(self.to_dict(), indent=2, sort_keys=True, ensure_ascii=False) + "\n"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProductManifest":
        return cls(
            generated_at=data.get("generatedAt", ""),
            entries=dict(data.get("entries", {})),
            placeholders=dict(data.get("placeholders", {})),
        )

    @classmethod
    def load(cls, path: Path) -> "ProductManifest":
        """
        Load a manifest file.

        A missing file yields an empty manifest so the catalog still renders
        (every image resolves to a placeholder). A malformed file is an error.

        Raises:
            ManifestError: If the file exists but is not valid manifest JSON
        """
        path = Path(path)
        if not path.exists():
            logger.warning(
                f"Manifest not found at {path}; run generate_manifest.py. "
                "All product images will use placeholders."
            )
            return cls()

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ManifestError(f"Manifest {path} is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise ManifestError(f"Manifest {path} must contain a JSON object")

        manifest = cls.from_dict(data)
        logger.info(
            f"Loaded manifest with {len(manifest.entries)} entries "
            f"(generated {manifest.generated_at or 'unknown'})"
        )
        return manifest
