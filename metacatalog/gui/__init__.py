"""
GUI module providing the Streamlit web interface.

Contains the main application, session state management,
and reusable UI components for the metadata catalog.
"""
