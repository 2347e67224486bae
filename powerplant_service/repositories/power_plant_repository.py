"""
Power plant repository interface (Abstract Base Class).

Defines the contract for power plant persistence and retrieval
independent of the underlying storage mechanism.
"""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from ..domain.entities import PowerPlant
from ..search.listing import ListingPage, ListingQuery
from ..search.owner_search import BackendCapabilities


class IPowerPlantRepository(ABC):
    """
    Abstract repository interface for power plant records.

    Records are only ever added and read; there is no update or delete.
    """

    @property
    @abstractmethod
    def capabilities(self) -> BackendCapabilities:
        """Substring matching features of the backing store."""
        pass

    @abstractmethod
    async def add(self, plant: PowerPlant) -> PowerPlant:
        """
        Persist a new power plant.

        Args:
            plant: Validated entity with its generated id

        Returns:
            The stored entity
        """
        pass

    @abstractmethod
    async def find_by_id(self, plant_id: UUID) -> Optional[PowerPlant]:
        """
        Find a power plant by identifier.

        Args:
            plant_id: Power plant identifier

        Returns:
            PowerPlant if found, None otherwise
        """
        pass

    @abstractmethod
    async def query(self, listing: ListingQuery) -> ListingPage:
        """
        Run a listing query.

        Args:
            listing: Normalized pagination and optional owner filter

        Returns:
            The requested page, ordered by id, with totals for the filtered set
        """
        pass
