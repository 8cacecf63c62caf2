"""
API module serving the catalog store over HTTP.
"""

from .app import create_app

__all__ = [
    "create_app"
]
