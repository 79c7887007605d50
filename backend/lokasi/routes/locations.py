"""
Lokasi API - Location Route Handlers
======================================

What:  GET/POST/PUT/DELETE on /api/lokasi.
How:   Extracts the `id` query parameter and the JSON body, delegates to
       LocationService, returns JSON with the right status code.
Who:   Called by the map frontend.

The `id` parameter is declared optional on every method so that a missing id
on PUT/DELETE is reported by the service as "ID tidak valid" (400) rather
than by FastAPI's parameter validation.
"""

import logging
from typing import List, Optional, Union

from fastapi import APIRouter, Depends, Query

from lokasi.dependencies import get_location_service
from lokasi.schemas.location import (
    ErrorResponse,
    LocationInput,
    LocationResponse,
    MessageResponse,
)
from lokasi.services.location_service import LocationService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Lokasi"])

_ID_QUERY_DESCRIPTION = "24-character hex location identifier"


@router.get(
    "/lokasi",
    response_model=Union[LocationResponse, List[LocationResponse]],
    responses={
        400: {"description": "Malformed id", "model": ErrorResponse},
        404: {"description": "Location not found", "model": ErrorResponse},
        500: {"description": "Store unavailable or failed", "model": ErrorResponse},
    },
    summary="Read one location or all locations",
    description=(
        "With `?id=`, returns that single location. Without it, returns every "
        "stored location as an array (an empty store yields `[]`)."
    ),
)
async def read_locations(
    id: Optional[str] = Query(default=None, description=_ID_QUERY_DESCRIPTION),
    service: LocationService = Depends(get_location_service),
):
    # An empty `?id=` is treated like no id at all
    if id:
        return await service.get_location(id)
    return await service.list_locations()


@router.post(
    "/lokasi",
    status_code=201,
    response_model=LocationResponse,
    responses={
        400: {"description": "Malformed body", "model": ErrorResponse},
        500: {"description": "Store unavailable or failed", "model": ErrorResponse},
    },
    summary="Create a location",
    description=(
        "Stores a new location. The server assigns `_id` (any client value is "
        "discarded) and sets `koordinat.type` to `Point`."
    ),
)
async def create_location(
    payload: LocationInput,
    service: LocationService = Depends(get_location_service),
) -> LocationResponse:
    return await service.create_location(payload)


@router.put(
    "/lokasi",
    response_model=LocationResponse,
    responses={
        400: {"description": "Malformed id or body", "model": ErrorResponse},
        404: {"description": "Location not found", "model": ErrorResponse},
        500: {"description": "Store unavailable or failed", "model": ErrorResponse},
    },
    summary="Replace a location",
    description=(
        "Overwrites nama, kategori, deskripsi and koordinat of the location "
        "identified by `?id=`. Returns the record as submitted."
    ),
)
async def update_location(
    payload: LocationInput,
    id: Optional[str] = Query(default=None, description=_ID_QUERY_DESCRIPTION),
    service: LocationService = Depends(get_location_service),
) -> LocationResponse:
    return await service.update_location(id, payload)


@router.delete(
    "/lokasi",
    response_model=MessageResponse,
    responses={
        400: {"description": "Malformed id", "model": ErrorResponse},
        404: {"description": "Location not found", "model": ErrorResponse},
        500: {"description": "Store unavailable or failed", "model": ErrorResponse},
    },
    summary="Delete a location",
)
async def delete_location(
    id: Optional[str] = Query(default=None, description=_ID_QUERY_DESCRIPTION),
    service: LocationService = Depends(get_location_service),
) -> MessageResponse:
    return await service.delete_location(id)
