"""
Listing query composition.

Combines the owner filter, ascending-id ordering and offset/limit paging.
Ids are unique and never change, so the order is total and repeated page
requests with the same filter see records in the same sequence.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from sqlalchemy import Select, func, select

from ..domain.entities import PowerPlant
from ..pagination import Pagination, total_pages
from .owner_search import OwnerFilter


@dataclass(frozen=True)
class ListingQuery:
    """Normalized listing request: one page, optionally filtered by owner."""

    pagination: Pagination
    owner_filter: Optional[OwnerFilter] = None

    def _filtered(self, stmt: Select, record_model) -> Select:
        if self.owner_filter is None:
            return stmt
        return stmt.where(self.owner_filter.to_clause(record_model.owner))

    def count_statement(self, record_model) -> Select:
        """SELECT count(*) over the filtered set."""
        return self._filtered(select(func.count()).select_from(record_model), record_model)

    def page_statement(self, record_model) -> Select:
        """SELECT of the requested page, ordered by id."""
        return (
            self._filtered(select(record_model), record_model)
            .order_by(record_model.id.asc())
            .offset(self.pagination.skip)
            .limit(self.pagination.take)
        )

    def apply_to_records(
        self, records: Iterable[PowerPlant]
    ) -> Tuple[List[PowerPlant], int]:
        """
        Evaluate the query over records held in memory.

        Returns:
            Tuple of (page of records ordered by id, total filtered count)
        """
        matching = [
            record
            for record in records
            if self.owner_filter is None or self.owner_filter.matches(record.owner)
        ]
        matching.sort(key=lambda record: record.id)
        skip = self.pagination.skip
        return matching[skip : skip + self.pagination.take], len(matching)


@dataclass(frozen=True)
class ListingPage:
    """One page of power plants plus totals over the whole filtered set."""

    items: List[PowerPlant] = field(default_factory=list)
    total_count: int = 0
    total_pages: int = 0

    @classmethod
    def build(
        cls, items: List[PowerPlant], total_count: int, pagination: Pagination
    ) -> "ListingPage":
        return cls(
            items=items,
            total_count=total_count,
            total_pages=total_pages(total_count, pagination.count),
        )
