"""
Owner search and listing composition.
"""

from .listing import ListingPage, ListingQuery
from .owner_search import (
    BackendCapabilities,
    OwnerFilter,
    OwnerMatchStrategy,
    build_owner_filter,
    select_owner_strategy,
)

__all__ = [
    "BackendCapabilities",
    "ListingPage",
    "ListingQuery",
    "OwnerFilter",
    "OwnerMatchStrategy",
    "build_owner_filter",
    "select_owner_strategy",
]
