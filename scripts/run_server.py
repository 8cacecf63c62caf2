"""
CLI script to serve the catalog HTTP API.

Usage:
    python scripts/run_server.py                       # Host/port from config
    python scripts/run_server.py --port 9000
    python scripts/run_server.py --records-dir data/records
    python scripts/run_server.py --config path/to/config.json
"""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import uvicorn  # noqa: E402

from metacatalog.api import create_app  # noqa: E402
from metacatalog.core import get_config, get_logger, ConfigurationError  # noqa: E402
from metacatalog.core.config_loader import reload_config  # noqa: E402
from metacatalog.store import CatalogStore  # noqa: E402


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Serve the metadata catalog HTTP API"
    )

    parser.add_argument(
        "--host",
        type=str,
        help="Host to bind to (default: server.host from config)"
    )

    parser.add_argument(
        "--port",
        type=int,
        help="Port to listen on (default: server.port from config)"
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to custom config.json file"
    )

    parser.add_argument(
        "--records-dir",
        type=str,
        help="Directory of YAML records to load before serving"
    )

    return parser.parse_args()


def main():
    """Main entry point for the API server."""
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

    logger = get_logger(__name__)

    store = CatalogStore(config)

    if args.records_dir:
        report = store.load_directory(args.records_dir)
        logger.info(
            f"Preloaded {report.appended} record(s), {len(report.rejected)} rejected"
        )

    host = args.host or config.server.host
    port = args.port or config.server.port

    print("=" * 60)
    print("Metadata Catalog - HTTP API")
    print("=" * 60)
    print(f"Listening on http://{host}:{port}")
    print(f"Records loaded:  {len(store):,}")
    print("Press Ctrl+C to stop")
    print("=" * 60)

    uvicorn.run(create_app(store), host=host, port=port)


if __name__ == "__main__":
    main()
