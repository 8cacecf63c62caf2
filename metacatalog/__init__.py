"""
In-memory catalog of application metadata records.

Records are validated from YAML, fanned out into one index per
searchable field, and found again with multi-term AND/OR searches.
"""

__version__ = "0.1.0"
