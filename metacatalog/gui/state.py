"""
Streamlit session state management.

Provides helpers for initializing, reading, and updating
session state values used across the application.
"""

import streamlit as st
from typing import Any, Dict, List


DEFAULT_STATE = {
    "join_method": "or",
    "term_count": 1,
    "search_results": [],
    "search_stats": None,
    "search_error": None,
    "append_message": None,
    "append_error": None,
    "append_fields": [],
}


def init_state() -> None:
    """
    Initialize session state with default values.

    Only sets values that don't already exist, preserving
    state across reruns.
    """
    for key, default_value in DEFAULT_STATE.items():
        if key not in st.session_state:
            st.session_state[key] = default_value


def get_state(key: str, default: Any = None) -> Any:
    """
    Get a value from session state.

    Args:
        key: State key to retrieve.
        default: Default value if key doesn't exist.

    Returns:
        The stored value or default.
    """
    return st.session_state.get(key, default)


def set_state(key: str, value: Any) -> None:
    """
    Set a value in session state.

    Args:
        key: State key to set.
        value: Value to store.
    """
    st.session_state[key] = value


def update_state(updates: Dict[str, Any]) -> None:
    """
    Update multiple state values at once.

    Args:
        updates: Dictionary of key-value pairs to update.
    """
    for key, value in updates.items():
        st.session_state[key] = value


def clear_search_state() -> None:
    """Reset search-related state to defaults."""
    update_state({
        "search_results": [],
        "search_stats": None,
        "search_error": None,
    })


def get_term_inputs(term_count: int) -> List[Dict[str, str]]:
    """
    Collect the term rows currently entered in the search form.

    Returns:
        List of {"field", "query"} dicts for rows with a query.
    """
    terms = []
    for i in range(term_count):
        query = get_state(f"term_query_{i}", "")
        if query and query.strip():
            terms.append({"field": get_state(f"term_field_{i}", "title"), "query": query})
    return terms
