"""
Sidebar component for the metadata catalog.

Displays store statistics, the record submission form, and help text.
"""

import streamlit as st

from ...core import RecordValidationError
from ...store import CatalogStore
from ..state import get_state, update_state


SAMPLE_RECORD = """title: Valid App 1
version: 0.0.1
maintainers:
- name: firstmaintainer app1
  email: firstmaintainer@hotmail.com
company: Random Inc.
website: https://website.com
source: https://github.com/random/repo
license: Apache-2.0
description: |
  Interesting title and description
"""


def render_sidebar(store: CatalogStore) -> None:
    """
    Render the sidebar with stats and the append form.

    Args:
        store: Store receiving submitted records.
    """
    with st.sidebar:
        st.title("Metadata Catalog")

        st.metric("Records", f"{len(store):,}")

        st.divider()

        st.subheader("Add a record")
        _render_append_form(store)

        st.divider()

        _render_help()


def _render_append_form(store: CatalogStore) -> None:
    """Render the YAML submission form and report the outcome."""
    with st.form("append_form", clear_on_submit=False):
        raw_record = st.text_area(
            "Record (YAML)",
            value=SAMPLE_RECORD,
            height=280,
            key="append_input"
        )
        submitted = st.form_submit_button("Append", type="primary")

    if submitted:
        try:
            record = store.append(raw_record)
            update_state({
                "append_message": f"Added '{record.title}' {record.version}",
                "append_error": None,
                "append_fields": [],
            })
        except RecordValidationError as e:
            update_state({
                "append_message": None,
                "append_error": e.message,
                "append_fields": e.fields,
            })

    if get_state("append_message"):
        st.success(get_state("append_message"))

    if get_state("append_error"):
        st.error(get_state("append_error"))
        for field in get_state("append_fields", []):
            st.caption(f"- {field}")


def _render_help() -> None:
    """Display search help text."""
    with st.expander("Search help"):
        st.markdown("""
        **Join methods:**
        - **OR**: records matching at least one term
        - **AND**: records matching every term

        **Fields:**
        - `description` matches any word, ignoring case
        - every other field must match the stored value exactly
        - `maintainerName` / `maintainerEmail` match any maintainer
        """)
