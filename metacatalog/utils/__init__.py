"""
Utility module providing shared helpers.

Contains the reader/writer lock used by the catalog store.
Depends only on the standard library.
"""

from .concurrency import ReadWriteLock

__all__ = [
    "ReadWriteLock"
]
