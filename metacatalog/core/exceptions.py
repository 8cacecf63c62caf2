"""
Custom exception hierarchy for the metadata catalog.

Provides specific exception types for different failure modes:
configuration errors, record validation failures, index invariant
violations, and search problems.
"""

from typing import List


class CatalogError(Exception):
    """Base exception for all catalog errors."""

    def __init__(self, message: str, details: dict = None):
        """
        Initialize the exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary with additional context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(CatalogError):
    """Raised when configuration is invalid or missing."""
    pass


class RecordValidationError(CatalogError):
    """Raised when a raw record does not conform to the record schema."""

    def __init__(self, message: str, fields: List[str] = None, details: dict = None):
        """
        Initialize validation error.

        Args:
            message: Error description.
            fields: Paths of the missing or invalid fields.
            details: Additional context.
        """
        super().__init__(message, details)
        self.fields = list(fields or [])


class UnparsableRecordError(RecordValidationError):
    """Raised when raw input cannot be parsed into a record at all."""

    def __init__(self, message: str = "could not parse input into a record", details: dict = None):
        super().__init__(message, details=details)


class IndexingError(CatalogError):
    """Raised when an index rejects an entry or cannot be built."""
    pass


class SearchError(CatalogError):
    """Raised when search query execution fails."""

    def __init__(self, message: str, query: str = None, details: dict = None):
        """
        Initialize search error.

        Args:
            message: Error description.
            query: The problematic search query.
            details: Additional context.
        """
        super().__init__(message, details)
        self.query = query


class QueryShapeError(SearchError):
    """Raised when a search request is malformed before any index work."""
    pass


class SearchTimeoutError(SearchError):
    """Raised when term searches do not finish before the deadline."""
    pass
