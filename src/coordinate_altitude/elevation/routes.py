"""API routes for the caching elevation proxy."""

import asyncio
import logging
from concurrent.futures import Executor
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from coordinate_altitude.coordinate import Coordinate, parse_locations
from coordinate_altitude.elevation.resolver import AltitudeResolver
from coordinate_altitude.elevation.schemas import (
    ElevationResult,
    LookupRequest,
    LookupResponse,
)
from coordinate_altitude.exceptions import (
    InvalidCoordinateError,
    PersistenceError,
    TransportError,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["elevation"])


def get_altitude_resolver(request: Request) -> AltitudeResolver:
    """FastAPI dependency that retrieves the AltitudeResolver from app state."""
    resolver: AltitudeResolver = request.app.state.altitude_resolver
    return resolver


def get_executor(request: Request) -> Executor:
    """FastAPI dependency that retrieves the resolve executor from app state."""
    executor: Executor = request.app.state.executor
    return executor


async def _resolve(
    coordinates: list[Coordinate],
    resolver: AltitudeResolver,
    executor: Executor,
) -> LookupResponse:
    if not coordinates:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No locations provided",
        )

    loop = asyncio.get_running_loop()
    try:
        resolved = await loop.run_in_executor(executor, resolver.resolve, coordinates)
    except PersistenceError as exc:
        logger.warning("Altitude cache not saved", extra={"error": str(exc)})
        resolved = exc.resolved
    except TransportError as exc:
        logger.error("Upstream elevation lookup failed", extra={"error": str(exc)})
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=str(exc),
        ) from exc

    return LookupResponse(results=[ElevationResult.from_coordinate(c) for c in resolved])


@router.get("/lookup", response_model=LookupResponse, summary="Look up elevation data")
async def lookup(
    locations: Annotated[str, Query(...)],
    resolver: Annotated[AltitudeResolver, Depends(get_altitude_resolver)],
    executor: Annotated[Executor, Depends(get_executor)],
) -> LookupResponse:
    """Look up elevation for 'latitude,longitude' pairs separated by '|'.

    Args:
        locations: Query parameter in 'lat,lon|lat,lon' format.
        resolver: Injected AltitudeResolver instance.
        executor: Injected executor the blocking resolve runs on.

    Returns:
        A LookupResponse with one result per location, in request order.
    """
    try:
        coordinates = parse_locations(locations) if locations else []
    except InvalidCoordinateError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc

    return await _resolve(coordinates, resolver, executor)


@router.post("/lookup", response_model=LookupResponse, summary="Look up elevation data")
async def lookup_bulk(
    body: LookupRequest,
    resolver: Annotated[AltitudeResolver, Depends(get_altitude_resolver)],
    executor: Annotated[Executor, Depends(get_executor)],
) -> LookupResponse:
    """Look up elevation for locations sent as a JSON body."""
    try:
        coordinates = [
            Coordinate.new(location.latitude, location.longitude)
            for location in body.locations
        ]
    except InvalidCoordinateError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc

    return await _resolve(coordinates, resolver, executor)
