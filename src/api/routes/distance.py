"""
Distance Matrix proxy
=====================

POST /api/v1/distance-matrix -- road distance and duration between two points

Received -> Validated (pydantic, 400 VALIDATION_ERROR)
         -> ProviderCalled (Google Distance Matrix, bounded timeout)
         -> Success (200) | Failed (see ``src.domain.errors``)

One request evaluates exactly one origin/destination pair; nothing is
cached.
"""

import logging

from fastapi import APIRouter, Depends, Request

from src.api.dependencies import get_distance_matrix_client, get_settings
from src.api.middleware import limiter
from src.api.schemas import (
    DistanceMatrixData,
    DistanceMatrixRequest,
    DistanceMatrixResponse,
    ErrorResponse,
    LatLng,
)
from src.config import Settings, settings as _settings
from src.domain.entities import Coordinate
from src.domain.errors import EndpointError, InternalError
from src.infrastructure.distance_matrix import DistanceMatrixClient

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/distance-matrix", tags=["distance"])


@router.post(
    "",
    response_model=DistanceMatrixResponse,
    summary="Road distance and duration between two coordinates",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid body or provider refusal"},
        500: {"model": ErrorResponse, "description": "Configuration or upstream failure"},
    },
)
@limiter.limit(_settings.rate_limit)
async def calculate_distance_matrix(
    request: Request,
    body: DistanceMatrixRequest,
    client: DistanceMatrixClient = Depends(get_distance_matrix_client),
    settings: Settings = Depends(get_settings),
):
    logger.info("Distance Matrix Request body=%s", body.model_dump())
    origin = Coordinate(lat=body.origin.lat, lng=body.origin.lng)
    destination = Coordinate(lat=body.destination.lat, lng=body.destination.lng)

    try:
        leg = await client.route(origin, destination)
    except EndpointError:
        raise
    except Exception as exc:
        logger.exception(
            "Distance Matrix calculation error origin=%s destination=%s",
            origin, destination,
        )
        raise InternalError(details=None if settings.is_production else str(exc)) from exc

    response = DistanceMatrixResponse(
        data=DistanceMatrixData(
            distance=leg.distance_km,
            distance_in_meters=leg.distance_in_meters,
            distance_text=leg.distance_text,
            duration=leg.duration_text,
            duration_in_seconds=leg.duration_in_seconds,
            origin=LatLng(lat=float(origin.lat), lng=float(origin.lng)),
            destination=LatLng(lat=float(destination.lat), lng=float(destination.lng)),
        )
    )
    logger.info("Distance Matrix Success %s", response.data.model_dump())
    return response
