"""
Input validation and Pydantic models for power plant creation.

The request model only enforces JSON types: every field is optional so that
missing values reach the field rules below and are reported together with
every other failure in one response. Payloads that cannot be parsed into
this shape at all are rejected earlier by FastAPI as malformed input.
"""

import re
from collections.abc import Iterator, MutableMapping
from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .domain.entities import OWNER_MAX_LENGTH, POWER_MAX, POWER_MIN, PowerPlant
from .domain.exceptions import PowerPlantValidationException

# Two words separated by exactly one whitespace character. The first word
# starts with a letter; apostrophes and hyphens are allowed after that
# (O'Neil, Smith-Jones). [^\W\d_] is a unicode letter.
OWNER_PATTERN = re.compile(r"^[^\W\d_](?:[^\W\d_]|['-])*\s(?:[^\W\d_]|['-])+\Z")

# Error message templates
OWNER_EMPTY = "'owner' cannot be empty"
OWNER_FORMAT = (
    "'owner' must be two words (letters only) separated by a space, received: {owner}"
)
OWNER_TOO_LONG = f"'owner' must be at most {OWNER_MAX_LENGTH} characters long"
POWER_EMPTY = "'power' cannot be empty"
POWER_RANGE = (
    f"'power' must be between {POWER_MIN} and {POWER_MAX}, received: {{power}}"
)
VALID_FROM_EMPTY = "'validFrom' cannot be empty"
VALID_TO_PRECEDES = "'validTo' precedes 'validFrom', received: {valid_from} - {valid_to}"

DATE_FORMAT = "%Y-%m-%d"


class PowerPlantCreate(BaseModel):
    """
    Request model for creating a power plant.

    Attributes:
        owner: Owner name, two words
        power: Rated power output
        valid_from: First day of validity
        valid_to: Optional last day of validity
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    owner: Optional[str] = Field(None, description="Owner name, two words")
    power: Optional[Decimal] = Field(None, description="Rated power between 0 and 200")
    valid_from: Optional[date] = Field(None, description="Validity start (yyyy-MM-dd)")
    valid_to: Optional[date] = Field(None, description="Validity end (yyyy-MM-dd)")


class FieldErrors(MutableMapping):
    """
    Field name to error messages mapping.

    Keys compare case-insensitively ("validFrom" and "validfrom" are the same
    field) while iteration yields the spelling used when the key was added.
    """

    def __init__(self) -> None:
        self._entries: dict[str, tuple[str, list[str]]] = {}

    def __getitem__(self, key: str) -> list[str]:
        return self._entries[key.casefold()][1]

    def __setitem__(self, key: str, value: list[str]) -> None:
        existing = self._entries.get(key.casefold())
        name = existing[0] if existing else key
        self._entries[key.casefold()] = (name, list(value))

    def __delitem__(self, key: str) -> None:
        del self._entries[key.casefold()]

    def __iter__(self) -> Iterator[str]:
        return (name for name, _ in self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"FieldErrors({self.to_dict()!r})"

    def add(self, field: str, message: str) -> None:
        """Append a message to the field's list, creating it if needed."""
        key = field.casefold()
        if key not in self._entries:
            self._entries[key] = (field, [])
        self._entries[key][1].append(message)

    def to_dict(self) -> dict[str, list[str]]:
        """Plain dict copy, suitable for JSON."""
        return {name: list(messages) for name, messages in self._entries.values()}


def _check_owner(owner: Optional[str]) -> Optional[str]:
    if owner is None or not owner.strip():
        return OWNER_EMPTY
    if not OWNER_PATTERN.match(owner):
        return OWNER_FORMAT.format(owner=owner)
    if len(owner) > OWNER_MAX_LENGTH:
        return OWNER_TOO_LONG
    return None


def _check_power(power: Optional[Decimal]) -> Optional[str]:
    if power is None:
        return POWER_EMPTY
    if not power.is_finite() or not POWER_MIN <= power <= POWER_MAX:
        return POWER_RANGE.format(power=f"{power:f}")
    return None


def collect_field_errors(request: PowerPlantCreate) -> FieldErrors:
    """
    Check every field of a creation request.

    Each field is checked independently and the first failing rule of each
    field is recorded, so a request with several bad fields gets all of them
    reported at once.

    Args:
        request: Parsed creation request

    Returns:
        FieldErrors, empty when the request is valid
    """
    errors = FieldErrors()

    owner_error = _check_owner(request.owner)
    if owner_error:
        errors.add("owner", owner_error)

    power_error = _check_power(request.power)
    if power_error:
        errors.add("power", power_error)

    if request.valid_from is None:
        errors.add("validFrom", VALID_FROM_EMPTY)
    elif request.valid_to is not None and request.valid_to < request.valid_from:
        errors.add(
            "validTo",
            VALID_TO_PRECEDES.format(
                valid_from=request.valid_from.strftime(DATE_FORMAT),
                valid_to=request.valid_to.strftime(DATE_FORMAT),
            ),
        )

    return errors


def validate_creation_request(request: PowerPlantCreate) -> PowerPlant:
    """
    Turn a creation request into a new power plant entity.

    Args:
        request: Parsed creation request

    Returns:
        New PowerPlant with a generated identifier

    Raises:
        PowerPlantValidationException: If any field is invalid
    """
    errors = collect_field_errors(request)
    if errors:
        raise PowerPlantValidationException(errors)

    return PowerPlant.create(
        owner=request.owner,
        power=request.power,
        valid_from=request.valid_from,
        valid_to=request.valid_to,
    )
