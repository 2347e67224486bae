"""
Owner substring search.

Every strategy means the same thing, a case-insensitive "owner contains
text" test. They differ only in how much of it the storage backend can do
itself:

- ACCENT_FOLDING_PATTERN_MATCH: PostgreSQL with the unaccent extension.
  Both sides go through unaccent() so "Jose" finds "José".
- PLAIN_PATTERN_MATCH: any SQL backend, plain ILIKE. On PostgreSQL the
  pg_trgm GIN index on owner serves it.
- NAIVE_CONTAINMENT: no query language at all (in-memory store), the test
  runs in Python.

The strategy is chosen once from the backend's capabilities.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from sqlalchemy import String, func
from sqlalchemy.sql.elements import ColumnElement

# Backslash is not portable across dialects
LIKE_ESCAPE = "!"


class OwnerMatchStrategy(str, Enum):
    """How the owner filter is evaluated."""

    ACCENT_FOLDING_PATTERN_MATCH = "accent_folding_pattern_match"
    PLAIN_PATTERN_MATCH = "plain_pattern_match"
    NAIVE_CONTAINMENT = "naive_containment"


@dataclass(frozen=True)
class BackendCapabilities:
    """
    Substring matching features of a storage backend.

    Attributes:
        supports_accent_folding: Backend has an accent-removal function
        supports_pattern_match: Backend evaluates case-insensitive LIKE patterns
    """

    supports_accent_folding: bool = False
    supports_pattern_match: bool = False


def select_owner_strategy(capabilities: BackendCapabilities) -> OwnerMatchStrategy:
    """Pick the richest strategy the backend supports."""
    if capabilities.supports_pattern_match and capabilities.supports_accent_folding:
        return OwnerMatchStrategy.ACCENT_FOLDING_PATTERN_MATCH
    if capabilities.supports_pattern_match:
        return OwnerMatchStrategy.PLAIN_PATTERN_MATCH
    return OwnerMatchStrategy.NAIVE_CONTAINMENT


def escape_like(text: str) -> str:
    """Escape LIKE wildcards so the text only ever matches literally."""
    return (
        text.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )


@dataclass(frozen=True)
class OwnerFilter:
    """Owner substring filter bound to the strategy that evaluates it."""

    text: str
    strategy: OwnerMatchStrategy

    @property
    def pattern(self) -> str:
        """LIKE pattern for "contains text"."""
        return f"%{escape_like(self.text)}%"

    def to_clause(self, column) -> ColumnElement:
        """
        SQL predicate for the owner column.

        Raises:
            ValueError: For NAIVE_CONTAINMENT, which has no SQL form
        """
        if self.strategy is OwnerMatchStrategy.ACCENT_FOLDING_PATTERN_MATCH:
            return func.unaccent(column, type_=String).ilike(
                func.unaccent(self.pattern, type_=String), escape=LIKE_ESCAPE
            )
        if self.strategy is OwnerMatchStrategy.PLAIN_PATTERN_MATCH:
            return column.ilike(self.pattern, escape=LIKE_ESCAPE)
        raise ValueError(f"{self.strategy.value} cannot be expressed in SQL")

    def matches(self, owner: str) -> bool:
        """Evaluate the filter in Python."""
        return self.text.casefold() in owner.casefold()


def build_owner_filter(
    owner: Optional[str], strategy: OwnerMatchStrategy
) -> Optional[OwnerFilter]:
    """
    Build the owner filter for a listing request.

    Returns:
        OwnerFilter, or None when owner is missing or blank (match all)
    """
    if owner is None or not owner.strip():
        return None
    return OwnerFilter(text=owner, strategy=strategy)
