"""
Power plant service - business logic orchestration.

Creation requests go through the field validator before the repository is
touched. Listing requests go through the pagination normalizer and the
owner search strategy before one query is issued.
"""

from typing import Optional
from uuid import UUID

import structlog

from ..domain.entities import PowerPlant
from ..domain.exceptions import PowerPlantNotFoundException
from ..pagination import normalize_pagination
from ..repositories.power_plant_repository import IPowerPlantRepository
from ..search.listing import ListingPage, ListingQuery
from ..search.owner_search import build_owner_filter, select_owner_strategy
from ..validators import PowerPlantCreate, validate_creation_request

logger = structlog.get_logger(__name__)


class PowerPlantService:
    """Create, fetch and list power plants."""

    def __init__(self, repository: IPowerPlantRepository):
        """
        Initialize service.

        Args:
            repository: Power plant storage
        """
        self.repository = repository
        self.owner_strategy = select_owner_strategy(repository.capabilities)

    async def create_power_plant(self, request: PowerPlantCreate) -> PowerPlant:
        """
        Validate and store a new power plant.

        Raises:
            PowerPlantValidationException: If any field is invalid
        """
        plant = validate_creation_request(request)
        await self.repository.add(plant)
        logger.info("Power plant created", plant_id=str(plant.id), owner=plant.owner)
        return plant

    async def get_power_plant(self, plant_id: UUID) -> PowerPlant:
        """
        Fetch one power plant.

        Raises:
            PowerPlantNotFoundException: If no record has this id
        """
        plant = await self.repository.find_by_id(plant_id)
        if plant is None:
            raise PowerPlantNotFoundException(str(plant_id))
        return plant

    async def list_power_plants(
        self, owner: Optional[str] = None, page: int = 0, count: int = 10
    ) -> ListingPage:
        """
        List one page of power plants ordered by id.

        Args:
            owner: Optional case-insensitive owner substring
            page: Zero-based page index, negative values clamp to 0
            count: Page size, normalized to 1..200 (non-positive means 10)

        Returns:
            ListingPage with the page and totals over the filtered set
        """
        pagination = normalize_pagination(page, count)
        listing = ListingQuery(
            pagination=pagination,
            owner_filter=build_owner_filter(owner, self.owner_strategy),
        )
        result = await self.repository.query(listing)

        logger.info(
            "Power plants listed",
            page=pagination.page,
            count=pagination.count,
            owner_filter=owner,
            strategy=self.owner_strategy.value,
            returned=len(result.items),
            total_count=result.total_count,
        )
        return result
