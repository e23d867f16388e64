"""Build the product image manifest from the images in the products directory.

Run after adding or renaming product photos, before deploying:

    python generate_manifest.py
    python generate_manifest.py --products-dir static/products --output generated/products-manifest.json

Exits with status 1 and lists every missing image if any catalog color has
no matching file, so a broken catalog never reaches the web app.
"""

import argparse
import logging
import sys
from pathlib import Path

from config import Config
from core.exceptions import ManifestConflictError, ManifestError, ManifestGenerationError
from logging_config import setup_logging
from modules.catalog import get_products
from modules.manifest_builder import build_manifest, write_manifest


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Generate the product image manifest.")
    parser.add_argument(
        "--products-dir",
        type=Path,
        default=Path(Config.PRODUCTS_DIR),
        help=f"Directory with product images (default: {Config.PRODUCTS_DIR})",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=Path(Config.MANIFEST_PATH),
        help=f"Manifest file to write (default: {Config.MANIFEST_PATH})",
    )
    parser.add_argument("--verbose", action="store_true", help="Log every indexed file")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Build and write the manifest; return the process exit code."""
    args = parse_args(argv)
    setup_logging(
        log_level=logging.DEBUG if args.verbose else logging.WARNING,
        enable_file_logging=False,
    )

    print(f"Scanning {args.products_dir}...", file=sys.stderr)

    try:
        manifest = build_manifest(get_products(), args.products_dir)
    except ManifestConflictError as e:
        print(f"ERROR: {e.message}", file=sys.stderr)
        print(f"  {e.existing}", file=sys.stderr)
        print(f"  {e.incoming}", file=sys.stderr)
        return 1
    except ManifestGenerationError as e:
        print("ERROR: manifest not generated, missing files:", file=sys.stderr)
        for miss in e.missing_assets:
            print(f"  - {miss.describe()}", file=sys.stderr)
        for placeholder in e.missing_placeholders:
            print(f"  - placeholder {placeholder}", file=sys.stderr)
        return 1
    except ManifestError as e:
        print(f"ERROR: {e.message}", file=sys.stderr)
        if "resolution" in e.details:
            print(f"  {e.details['resolution']}", file=sys.stderr)
        return 1

    write_manifest(manifest, args.output)
    print(f"SUCCESS: {len(manifest.entries)} entries written to {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
