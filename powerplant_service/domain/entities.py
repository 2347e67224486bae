"""
Domain entities for power plant records.

Core business objects. These entities are framework-agnostic: the HTTP
schemas and the ORM model both map to and from them.
"""

import uuid
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional

# Field limits enforced by the validator before anything is persisted
OWNER_MAX_LENGTH = 200
POWER_MIN = Decimal("0")
POWER_MAX = Decimal("200")


@dataclass(frozen=True)
class PowerPlant:
    """
    Power plant record.

    Immutable once created. The identifier is assigned by the service and
    never supplied by clients.

    Attributes:
        id: Server-generated unique identifier
        owner: Owner name, two words
        power: Rated power output in [0, 200]
        valid_from: First day the record is valid
        valid_to: Optional last day the record is valid
    """

    owner: str
    power: Decimal
    valid_from: date
    valid_to: Optional[date] = None
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    @classmethod
    def create(
        cls,
        owner: str,
        power: Decimal,
        valid_from: date,
        valid_to: Optional[date] = None,
    ) -> "PowerPlant":
        """Build a new record with a freshly generated identifier."""
        return cls(
            id=uuid.uuid4(),
            owner=owner,
            power=power,
            valid_from=valid_from,
            valid_to=valid_to,
        )
