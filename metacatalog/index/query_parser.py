"""
Query parser for FTS5 full-text matching.

Splits free-text queries into word tokens and turns them into FTS5
MATCH expressions that match any of the query's tokens.
"""

import re
from typing import List

from ..core import get_logger

logger = get_logger(__name__)


# unicode61 separates tokens on anything that is not a letter or digit
TOKEN_SEPARATOR = re.compile(r"[\W_]+")


class QueryParser:
    """
    Parses and sanitizes search queries for FTS5.

    Every letter/digit run becomes its own quoted FTS5 string, so
    operator keywords and punctuation are never interpreted as syntax
    and no two words are ever joined into a phrase.
    """

    def extract_terms(self, query: str) -> List[str]:
        """
        Split a raw query into word tokens.

        Args:
            query: Raw user input.

        Returns:
            List of tokens; punctuation and whitespace only separate them.
        """
        if not query or not query.strip():
            return []

        return [term for term in TOKEN_SEPARATOR.split(query) if term]

    def parse(self, query: str) -> str:
        """
        Build a MATCH expression matching any term of the query.

        Args:
            query: Raw user input.

        Returns:
            FTS5 expression, or an empty string when nothing is searchable.
        """
        terms = self.extract_terms(query)
        if not terms:
            return ""

        # dedupe, keep order
        unique_terms = list(dict.fromkeys(term.lower() for term in terms))

        logger.debug(f"FTS5 expression for {query!r}: {len(unique_terms)} token(s)")

        return " OR ".join(f'"{term}"' for term in unique_terms)
