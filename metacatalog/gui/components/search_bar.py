"""
Search form component for the metadata catalog.

Provides the join method selector and the editable list of terms.
"""

import streamlit as st
from typing import Dict, List, Tuple

from ...records import JoinMethod, SearchField
from ..state import get_state, get_term_inputs, set_state


FIELD_OPTIONS = [f.value for f in SearchField]


def render_search_bar(max_terms: int) -> Tuple[str, List[Dict[str, str]], bool]:
    """
    Render the search form.

    Args:
        max_terms: Maximum number of term rows.

    Returns:
        Tuple of (join_method, terms, was_submitted).
    """
    join_method = st.radio(
        "Join method",
        options=[m.value for m in JoinMethod],
        format_func=str.upper,
        horizontal=True,
        key="join_method"
    )

    term_count = st.number_input(
        "Terms",
        min_value=1,
        max_value=max_terms,
        value=min(get_state("term_count", 1), max_terms),
        step=1
    )
    set_state("term_count", int(term_count))

    for i in range(int(term_count)):
        col1, col2 = st.columns([1, 3])
        with col1:
            st.selectbox(
                "Field",
                options=FIELD_OPTIONS,
                key=f"term_field_{i}",
                label_visibility="collapsed"
            )
        with col2:
            st.text_input(
                "Query",
                placeholder="Search value...",
                key=f"term_query_{i}",
                label_visibility="collapsed"
            )

    submitted = st.button("Search", type="primary")

    return join_method, get_term_inputs(int(term_count)), submitted


def render_search_header(stats) -> None:
    """
    Render search results header with stats.

    Args:
        stats: SearchStats of the last search.
    """
    if not stats:
        return

    col1, col2, col3 = st.columns([2, 2, 1])

    with col1:
        st.markdown(f"**{stats.total_results:,}** records found")

    with col2:
        st.caption(f"{stats.join_method.upper()} over {stats.term_count} term(s)")

    with col3:
        st.caption(f"{stats.execution_time_ms:.0f} ms")

    if stats.errors:
        st.warning(
            f"{len(stats.errors)} term(s) failed and contributed no matches: "
            + "; ".join(stats.errors)
        )


def render_no_results() -> None:
    """Display no results message with suggestions."""
    st.info("No records match this search")

    with st.expander("Suggestions"):
        st.markdown("""
        - Exact-match fields compare the whole value, including case
        - Try OR instead of AND
        - Search `description` for single words
        """)
