"""
Database models for power plant service.

This module defines the SQLAlchemy ORM model backing the power plant
repository.
"""

from typing import Any

from sqlalchemy import Column, Date, Numeric, String, Uuid
from sqlalchemy.orm import declarative_base

from .domain.entities import OWNER_MAX_LENGTH, PowerPlant

Base: Any = declarative_base()

TRIGRAM_INDEX_NAME = "ix_power_plants_owner_trgm"


class PowerPlantRecord(Base):
    """
    Persisted power plant.

    Rows are only ever inserted; the validator guarantees owner and power are
    within range before a row is written.

    Attributes:
        id: UUID primary key, assigned by the service
        owner: Owner name (btree index; PostgreSQL adds a trigram GIN index)
        power: Rated power output
        valid_from: First day of validity
        valid_to: Optional last day of validity
    """

    __tablename__ = "power_plants"

    id = Column(Uuid, primary_key=True)
    owner = Column(String(OWNER_MAX_LENGTH), nullable=False, index=True)
    power = Column(Numeric, nullable=False)
    valid_from = Column(Date, nullable=False, index=True)
    valid_to = Column(Date, nullable=True)

    @classmethod
    def from_entity(cls, plant: PowerPlant) -> "PowerPlantRecord":
        """Map domain entity to database model."""
        return cls(
            id=plant.id,
            owner=plant.owner,
            power=plant.power,
            valid_from=plant.valid_from,
            valid_to=plant.valid_to,
        )

    def to_entity(self) -> PowerPlant:
        """Map database model to domain entity."""
        return PowerPlant(
            id=self.id,
            owner=self.owner,
            power=self.power,
            valid_from=self.valid_from,
            valid_to=self.valid_to,
        )
