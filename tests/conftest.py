"""
Test configuration and fixtures
"""

import asyncio
import uuid
from datetime import date
from decimal import Decimal
from typing import Optional

import pytest
from fastapi.testclient import TestClient

from powerplant_service.app import app
from powerplant_service.config import settings
from powerplant_service.dependencies import get_power_plant_repository
from powerplant_service.domain.entities import PowerPlant
from powerplant_service.repositories.memory_repository import (
    InMemoryPowerPlantRepository,
)


def make_id(value: int) -> uuid.UUID:
    """Deterministic id; ordering by id follows value."""
    return uuid.UUID(f"00000000-0000-0000-0000-{value + 1:012d}")


def make_plant(
    owner: str,
    power,
    valid_from: date,
    valid_to: Optional[date] = None,
    id: Optional[uuid.UUID] = None,
) -> PowerPlant:
    """Build a power plant without going through the validator."""
    return PowerPlant(
        id=id or uuid.uuid4(),
        owner=owner,
        power=Decimal(str(power)),
        valid_from=valid_from,
        valid_to=valid_to,
    )


def seed(repository: InMemoryPowerPlantRepository, *plants: PowerPlant) -> None:
    """Store plants in the repository from synchronous tests."""
    repository.clear()
    for plant in plants:
        asyncio.run(repository.add(plant))


@pytest.fixture(scope="function")
def repository():
    """Fresh in-memory store for each test"""
    return InMemoryPowerPlantRepository()


@pytest.fixture(scope="function")
def client(repository, monkeypatch):
    """Create a test client backed by the in-memory repository"""
    monkeypatch.setattr(settings, "DATABASE_AUTO_CREATE", False)
    monkeypatch.setattr(settings, "SEED_DEMO_DATA", False)

    app.dependency_overrides[get_power_plant_repository] = lambda: repository
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def valid_payload():
    """Creation payload that passes every rule"""
    return {
        "owner": "Jane Doe",
        "power": 125,
        "validFrom": "2025-01-01",
        "validTo": "2025-12-31",
    }
