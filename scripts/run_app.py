"""
CLI script to launch the catalog's Streamlit interface.

Options after the Streamlit ones are forwarded to the UI script, so the
UI can use another config file or preload another records directory.

Usage:
    python scripts/run_app.py
    python scripts/run_app.py --records-dir data/records --port 8502
    python scripts/run_app.py --config path/to/config.json --no-browser
"""

import argparse
import importlib.util
import subprocess
import sys
from pathlib import Path
from typing import List

PROJECT_ROOT = Path(__file__).parent.parent
APP_PATH = PROJECT_ROOT / "metacatalog" / "gui" / "app.py"


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Launch the metadata catalog web interface"
    )
    parser.add_argument("--host", default="localhost", help="Address to bind (default: localhost)")
    parser.add_argument("--port", type=int, default=8501, help="Port to listen on (default: 8501)")
    parser.add_argument("--no-browser", action="store_true", help="Run headless")
    parser.add_argument("--config", type=Path, help="config.json for the UI")
    parser.add_argument("--records-dir", type=Path, help="Records to preload instead of paths.records_directory")
    return parser.parse_args()


def build_command(args) -> List[str]:
    """Assemble the streamlit invocation, forwarding catalog options to the app."""
    cmd = [
        sys.executable, "-m", "streamlit", "run", str(APP_PATH),
        "--server.port", str(args.port),
        "--server.address", args.host,
    ]
    if args.no_browser:
        cmd += ["--server.headless", "true"]

    app_args = []
    if args.config:
        app_args += ["--config", str(args.config.resolve())]
    if args.records_dir:
        app_args += ["--records-dir", str(args.records_dir.resolve())]
    if app_args:
        cmd += ["--"] + app_args

    return cmd


def main():
    """Main entry point for launching the app."""
    args = parse_args()

    if importlib.util.find_spec("streamlit") is None:
        print("Error: Streamlit not found. Install with: pip install streamlit")
        sys.exit(1)

    for label, path, check in (
        ("Config file", args.config, Path.is_file),
        ("Records directory", args.records_dir, Path.is_dir),
    ):
        if path is not None and not check(path):
            print(f"Error: {label} not found: {path}")
            sys.exit(1)

    print(f"Metadata Catalog UI on http://{args.host}:{args.port}")
    if args.records_dir:
        print(f"Preloading records from {args.records_dir}")

    try:
        subprocess.run(build_command(args), cwd=str(PROJECT_ROOT))
    except KeyboardInterrupt:
        print("\nShutting down...")


if __name__ == "__main__":
    main()
