"""Demo records for local development."""

from datetime import date
from decimal import Decimal
from typing import List, Optional

import structlog

from .domain.entities import PowerPlant
from .pagination import Pagination
from .repositories.power_plant_repository import IPowerPlantRepository
from .search.listing import ListingQuery
from .validators import PowerPlantCreate, validate_creation_request

logger = structlog.get_logger(__name__)

DEMO_PLANTS = [
    PowerPlantCreate(owner="Acme Energy", power=Decimal("150.0")),
    PowerPlantCreate(owner="North Grid", power=Decimal("175.5")),
]


async def seed_demo_data(
    repository: IPowerPlantRepository, valid_from: Optional[date] = None
) -> List[PowerPlant]:
    """
    Insert the demo records if the store is empty.

    Records go through the same validator as API requests.

    Args:
        repository: Target store
        valid_from: Validity start for the demo records (default: today)

    Returns:
        The records inserted, empty if the store already had data
    """
    existing = await repository.query(ListingQuery(pagination=Pagination(page=0, count=1)))
    if existing.total_count:
        logger.info("Skipping demo seed, store not empty", total_count=existing.total_count)
        return []

    valid_from = valid_from or date.today()
    inserted = []
    for template in DEMO_PLANTS:
        request = template.model_copy(update={"valid_from": valid_from})
        inserted.append(await repository.add(validate_creation_request(request)))

    logger.info("Demo data seeded", inserted=len(inserted))
    return inserted
