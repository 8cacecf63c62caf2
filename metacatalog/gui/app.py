"""
Main Streamlit application for the metadata catalog.

Entry point that assembles the sidebar append form, the search form
and the results list around a shared catalog store.

Note: This file is run directly by Streamlit, so it needs to
set up the Python path before importing other modules.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

# Add project root to path for imports when run directly by Streamlit
_project_root = Path(__file__).parent.parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

import streamlit as st  # noqa: E402

from metacatalog.core import Config, get_config, get_logger, CatalogError, QueryShapeError  # noqa: E402
from metacatalog.store import CatalogStore  # noqa: E402

from metacatalog.gui.state import init_state, get_state, update_state, clear_search_state  # noqa: E402
from metacatalog.gui.components import (  # noqa: E402
    render_sidebar,
    render_search_bar,
    render_search_header,
    render_no_results,
    render_results,
)

logger = get_logger(__name__)


def parse_app_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Read the options forwarded after ``--`` by scripts/run_app.py.

    Unknown arguments are ignored so Streamlit's own flags pass through.
    """
    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument("--config", default=None)
    parser.add_argument("--records-dir", default=None)
    args, _ = parser.parse_known_args(sys.argv[1:] if argv is None else argv)
    return args


def load_app_config(config_path: Optional[str]) -> Config:
    """Return the config named on the command line, or the discovered one."""
    if config_path:
        return get_config(Path(config_path))
    return get_config()


@st.cache_resource
def get_store(config_path: Optional[str], records_dir: Optional[str]) -> CatalogStore:
    """
    Create the store once per server process and preload records.

    Args:
        config_path: Config file forwarded by the launcher, if any.
        records_dir: Records directory overriding paths.records_directory.
    """
    config = load_app_config(config_path)
    store = CatalogStore(config)

    directory = Path(records_dir) if records_dir else config.paths.records_directory
    if directory.is_dir():
        report = store.load_directory(directory)
        logger.info(f"Preloaded {report.appended} record(s) from {directory} for the UI")
    else:
        logger.warning(f"No records preloaded, not a directory: {directory}")

    return store


def main():
    """Main application entry point."""
    args = parse_app_args()
    config = load_app_config(args.config)

    st.set_page_config(
        page_title=config.gui.page_title,
        layout="wide",
        initial_sidebar_state="expanded"
    )

    init_state()

    store = get_store(args.config, args.records_dir)

    render_sidebar(store)

    st.title(config.gui.page_title)

    join_method, terms, submitted = render_search_bar(config.gui.max_terms)

    if submitted:
        _execute_search(store, join_method, terms)

    _render_results_section()


def _execute_search(store: CatalogStore, join_method: str, terms: list) -> None:
    """
    Execute search and store results in state.

    Args:
        store: Store to search.
        join_method: "and" or "or".
        terms: List of {"field", "query"} dicts.
    """
    clear_search_state()

    with st.spinner("Searching..."):
        try:
            records, stats = store.search_with_stats(join_method, terms)
        except QueryShapeError as e:
            update_state({"search_error": e.message})
            return
        except CatalogError as e:
            logger.error(f"Search error: {e.message}")
            update_state({"search_error": e.message})
            return

    update_state({
        "search_results": sorted(records, key=lambda r: (r.title, r.version)),
        "search_stats": stats,
    })
    logger.info(f"UI search ({join_method}): {stats.total_results} results")


def _render_results_section() -> None:
    """Render the search results section."""
    error = get_state("search_error")
    if error:
        st.error(error)
        return

    stats = get_state("search_stats")
    if not stats:
        st.markdown("Add records from the sidebar, then search them by field.")
        return

    render_search_header(stats)

    results = get_state("search_results", [])
    if not results:
        render_no_results()
        return

    st.divider()

    render_results(results)


if __name__ == "__main__":
    main()
