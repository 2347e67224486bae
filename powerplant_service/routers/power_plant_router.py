"""
Power plant endpoints.

POST /powerplants, GET /powerplants/{id} and GET /powerplants. Error
responses are produced by the exception handlers registered in app.py.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, Response, status

from ..cancellation import run_until_disconnected
from ..config import settings
from ..dependencies import get_power_plant_service
from ..domain.exceptions import PowerPlantNotFoundException
from ..pagination import (
    DEFAULT_PAGE_SIZE,
    INT32_MAX,
    INT32_MIN,
    MAX_PAGE_SIZE,
)
from ..services.power_plant_service import PowerPlantService
from ..validators import PowerPlantCreate
from .schemas import (
    PowerPlantListResponse,
    PowerPlantResponse,
    ProblemDetails,
    ValidationProblemDetails,
)


router = APIRouter(prefix="/powerplants", tags=["Power Plants"])


@router.post(
    "",
    name="create_power_plant",
    response_model=PowerPlantResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {"description": "Power plant created"},
        400: {
            "description": "Field validation failed or payload malformed",
            "model": ValidationProblemDetails,
        },
    },
    summary="Create power plant",
)
async def create_power_plant(
    payload: PowerPlantCreate,
    request: Request,
    response: Response,
    service: PowerPlantService = Depends(get_power_plant_service),
) -> PowerPlantResponse:
    """
    Create a power plant.

    All field errors are reported together. On success the Location header
    points at the new record.
    """
    plant = await run_until_disconnected(
        request,
        service.create_power_plant(payload),
        operation="create_power_plant",
        poll_interval=settings.DISCONNECT_POLL_INTERVAL,
    )
    response.headers["Location"] = str(
        request.url_for("get_power_plant", plant_id=str(plant.id))
    )
    return PowerPlantResponse.from_entity(plant)


@router.get(
    "/{plant_id}",
    name="get_power_plant",
    response_model=PowerPlantResponse,
    responses={
        200: {"description": "Power plant found"},
        404: {"description": "No power plant with this id"},
    },
    summary="Get power plant by id",
)
async def get_power_plant(
    plant_id: str,
    request: Request,
    service: PowerPlantService = Depends(get_power_plant_service),
) -> PowerPlantResponse:
    """Get one power plant. Ids that are not UUIDs match nothing."""
    try:
        parsed_id = UUID(plant_id)
    except ValueError:
        raise PowerPlantNotFoundException(plant_id) from None

    plant = await run_until_disconnected(
        request,
        service.get_power_plant(parsed_id),
        operation="get_power_plant",
        poll_interval=settings.DISCONNECT_POLL_INTERVAL,
    )
    return PowerPlantResponse.from_entity(plant)


@router.get(
    "",
    name="list_power_plants",
    response_model=PowerPlantListResponse,
    responses={
        200: {"description": "One page of power plants"},
        400: {"description": "page/count not integers", "model": ProblemDetails},
    },
    summary="List power plants",
)
async def list_power_plants(
    request: Request,
    owner: Optional[str] = Query(
        None, description="Case-insensitive owner substring", examples=["Jane"]
    ),
    page: int = Query(
        0,
        ge=INT32_MIN,
        le=INT32_MAX,
        description="Zero-based page, negative values mean 0",
    ),
    count: int = Query(
        DEFAULT_PAGE_SIZE,
        ge=INT32_MIN,
        le=INT32_MAX,
        description=(
            f"Page size, non-positive means {DEFAULT_PAGE_SIZE}, "
            f"capped at {MAX_PAGE_SIZE}"
        ),
    ),
    service: PowerPlantService = Depends(get_power_plant_service),
) -> PowerPlantListResponse:
    """
    List power plants ordered by id.

    Records are ordered by their immutable id, so walking the pages of an
    unchanged result set visits every record exactly once.
    """
    result = await run_until_disconnected(
        request,
        service.list_power_plants(owner=owner, page=page, count=count),
        operation="list_power_plants",
        poll_interval=settings.DISCONNECT_POLL_INTERVAL,
    )
    return PowerPlantListResponse.from_page(result)
