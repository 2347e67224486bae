"""
SQLAlchemy implementation of the power plant repository.

Works against PostgreSQL in production and any other SQL backend
SQLAlchemy's async extension supports (SQLite in tests).
"""

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..domain.entities import PowerPlant
from ..domain.exceptions import RepositoryException
from ..models import PowerPlantRecord
from ..search.listing import ListingPage, ListingQuery
from ..search.owner_search import BackendCapabilities
from .power_plant_repository import IPowerPlantRepository

logger = logging.getLogger(__name__)


class SqlAlchemyPowerPlantRepository(IPowerPlantRepository):
    """SQL persistence for power plants."""

    def __init__(self, session: AsyncSession, capabilities: BackendCapabilities):
        """
        Initialize repository.

        Args:
            session: SQLAlchemy async session, one per request
            capabilities: Matching features of the session's backend

        Raises:
            ValueError: If the backend cannot evaluate LIKE patterns
        """
        if not capabilities.supports_pattern_match:
            raise ValueError("SQL repositories require pattern match support")
        self.session = session
        self._capabilities = capabilities

    @property
    def capabilities(self) -> BackendCapabilities:
        return self._capabilities

    async def add(self, plant: PowerPlant) -> PowerPlant:
        """Insert a new row and commit."""
        try:
            self.session.add(PowerPlantRecord.from_entity(plant))
            await self.session.commit()
            return plant
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Error saving power plant {plant.id}: {e}")
            raise RepositoryException("add", str(e)) from e

    async def find_by_id(self, plant_id: UUID) -> Optional[PowerPlant]:
        """Primary key lookup."""
        try:
            record = await self.session.get(PowerPlantRecord, plant_id)
        except SQLAlchemyError as e:
            logger.error(f"Error finding power plant {plant_id}: {e}")
            raise RepositoryException("find_by_id", str(e)) from e
        return record.to_entity() if record else None

    async def query(self, listing: ListingQuery) -> ListingPage:
        """Count the filtered set, then fetch the requested page."""
        try:
            total_count = await self.session.scalar(
                listing.count_statement(PowerPlantRecord)
            )
            result = await self.session.scalars(
                listing.page_statement(PowerPlantRecord)
            )
            items = [record.to_entity() for record in result]
        except SQLAlchemyError as e:
            logger.error(f"Error listing power plants: {e}")
            raise RepositoryException("query", str(e)) from e

        return ListingPage.build(items, total_count or 0, listing.pagination)
