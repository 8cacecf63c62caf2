"""
Results list component for displaying matching records.
"""

import streamlit as st
from typing import List

from ...records import Record


def render_results(records: List[Record]) -> None:
    """
    Render the list of matching records.

    Args:
        records: Records to display, already sorted.
    """
    for record in records:
        _render_record_card(record)


def _render_record_card(record: Record) -> None:
    """Render a single record inside an expander."""
    header = f"**{record.title}** {record.version} - {record.company}"

    with st.expander(header, expanded=False):
        st.caption(f"{record.license} | {record.website}")

        maintainers = ", ".join(f"{m.name} <{m.email}>" for m in record.maintainers)
        st.markdown(f"Maintainers: {maintainers}")

        st.markdown("---")

        st.code(record.to_yaml(), language="yaml")
