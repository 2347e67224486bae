"""
Shared dependencies for the application.

Provides dependency injection functions used by the routers. Tests swap the
storage by overriding get_power_plant_repository.
"""

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from .config import settings
from .database import detect_backend_capabilities, get_db, get_engine
from .repositories.power_plant_repository import IPowerPlantRepository
from .repositories.sqlalchemy_repository import SqlAlchemyPowerPlantRepository
from .search.owner_search import BackendCapabilities
from .services.power_plant_service import PowerPlantService


@lru_cache(maxsize=1)
def get_backend_capabilities() -> BackendCapabilities:
    """Capabilities of the configured database, computed once."""
    return detect_backend_capabilities(
        get_engine(), allow_unaccent=settings.OWNER_SEARCH_UNACCENT
    )


async def get_power_plant_repository(
    session: AsyncSession = Depends(get_db),
) -> IPowerPlantRepository:
    """SQL repository bound to the request's session."""
    return SqlAlchemyPowerPlantRepository(session, get_backend_capabilities())


async def get_power_plant_service(
    repository: IPowerPlantRepository = Depends(get_power_plant_repository),
) -> PowerPlantService:
    """Power plant service for the request."""
    return PowerPlantService(repository)
