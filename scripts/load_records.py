"""
CLI script to load a directory of YAML records into a catalog store.

Validates and indexes every record file, then reports which files
were rejected. Useful to check a record collection before serving it.

Usage:
    python scripts/load_records.py data/records
    python scripts/load_records.py data/records --quiet
    python scripts/load_records.py data/records --config path/to/config.json
"""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from metacatalog.core import get_config, ConfigurationError  # noqa: E402
from metacatalog.core.config_loader import reload_config  # noqa: E402
from metacatalog.store import CatalogStore  # noqa: E402


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Validate and load YAML record files into a catalog store"
    )

    parser.add_argument(
        "directory",
        type=str,
        help="Directory containing .yaml / .yml record files"
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to custom config.json file"
    )

    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Only print the summary"
    )

    return parser.parse_args()


def main():
    """Main entry point for the loader CLI."""
    args = parse_args()

    if args.config:
        config_path = Path(args.config)
        if not config_path.exists():
            print(f"Error: Config file not found: {config_path}")
            sys.exit(1)
        reload_config(config_path)

    try:
        config = get_config()
    except ConfigurationError as e:
        print(f"Configuration error: {e.message}")
        sys.exit(1)

    directory = Path(args.directory)
    if not directory.is_dir():
        print(f"Error: Not a directory: {directory}")
        sys.exit(1)

    with CatalogStore(config) as store:
        report = store.load_directory(directory)

    print("=" * 60)
    print("Load Complete")
    print("=" * 60)
    print(f"Files read:        {report.total:,}")
    print(f"Records appended:  {report.appended:,}")
    print(f"Files rejected:    {len(report.rejected):,}")
    print("=" * 60)

    if report.rejected and not args.quiet:
        print(f"\nRejected ({len(report.rejected)}):")
        for label, message in report.rejected[:20]:
            print(f"  - {label}: {message}")
        if len(report.rejected) > 20:
            print(f"  ... and {len(report.rejected) - 20} more")

    sys.exit(1 if report.rejected else 0)


if __name__ == "__main__":
    main()
