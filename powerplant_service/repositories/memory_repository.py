"""
In-memory implementation of the power plant repository.

Used by the test suite and for running the API without a database. It has
no query language, so owner filtering falls back to naive containment.
"""

from typing import Dict, Iterable, Optional
from uuid import UUID

from ..domain.entities import PowerPlant
from ..search.listing import ListingPage, ListingQuery
from ..search.owner_search import BackendCapabilities
from .power_plant_repository import IPowerPlantRepository


class InMemoryPowerPlantRepository(IPowerPlantRepository):
    """Dict-backed power plant store."""

    def __init__(self, plants: Optional[Iterable[PowerPlant]] = None):
        self._plants: Dict[UUID, PowerPlant] = {}
        for plant in plants or ():
            self._plants[plant.id] = plant

    @property
    def capabilities(self) -> BackendCapabilities:
        return BackendCapabilities()

    def __len__(self) -> int:
        return len(self._plants)

    def clear(self) -> None:
        """Remove every record."""
        self._plants.clear()

    async def add(self, plant: PowerPlant) -> PowerPlant:
        if plant.id in self._plants:
            raise ValueError(f"Duplicate power plant id: {plant.id}")
        self._plants[plant.id] = plant
        return plant

    async def find_by_id(self, plant_id: UUID) -> Optional[PowerPlant]:
        return self._plants.get(plant_id)

    async def query(self, listing: ListingQuery) -> ListingPage:
        items, total_count = listing.apply_to_records(list(self._plants.values()))
        return ListingPage.build(items, total_count, listing.pagination)
