"""
Response models for the power plant API.

JSON field names are camelCase; problem responses follow RFC 9457
(application/problem+json).
"""

from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel

from ..domain.entities import PowerPlant
from ..search.listing import ListingPage

PROBLEM_CONTENT_TYPE = "application/problem+json"
BAD_REQUEST_TYPE = "https://tools.ietf.org/html/rfc9110#section-15.5.1"
SERVER_ERROR_TYPE = "https://tools.ietf.org/html/rfc9110#section-15.6.1"


class CamelModel(BaseModel):
    """Base model serializing field names as camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PowerPlantResponse(CamelModel):
    """Power plant as returned by the API."""

    id: UUID
    owner: str
    power: Decimal
    valid_from: date
    valid_to: Optional[date] = None

    @classmethod
    def from_entity(cls, plant: PowerPlant) -> "PowerPlantResponse":
        return cls(
            id=plant.id,
            owner=plant.owner,
            power=plant.power,
            valid_from=plant.valid_from,
            valid_to=plant.valid_to,
        )

    @field_serializer("power", when_used="json")
    def serialize_power(self, power: Decimal) -> float:
        """Power as a JSON number."""
        return float(power)


class PowerPlantListResponse(CamelModel):
    """One page of power plants with totals over the filtered set."""

    power_plants: List[PowerPlantResponse]
    total_count: int
    total_pages: int

    @classmethod
    def from_page(cls, page: ListingPage) -> "PowerPlantListResponse":
        return cls(
            power_plants=[PowerPlantResponse.from_entity(p) for p in page.items],
            total_count=page.total_count,
            total_pages=page.total_pages,
        )


class ProblemDetails(BaseModel):
    """Generic problem response."""

    type: str = BAD_REQUEST_TYPE
    title: str
    status: int
    detail: Optional[str] = None
    hint: Optional[str] = None


class ValidationProblemDetails(BaseModel):
    """Field validation failure: field name to messages."""

    type: str = BAD_REQUEST_TYPE
    title: str = "One or more validation errors occurred."
    status: int = 400
    errors: Dict[str, List[str]] = Field(default_factory=dict)
