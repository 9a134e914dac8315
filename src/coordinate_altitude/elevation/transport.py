"""Transport adapters that fetch elevations from a remote lookup service."""

import logging
from collections.abc import Sequence
from typing import Protocol

import requests
from pydantic import ValidationError

from coordinate_altitude.config import Settings
from coordinate_altitude.coordinate import Coordinate, encode_locations
from coordinate_altitude.elevation.schemas import (
    LocationPayload,
    LookupRequest,
    LookupResponse,
)
from coordinate_altitude.exceptions import (
    InvalidCoordinateError,
    ProtocolError,
    TransportError,
)

logger = logging.getLogger(__name__)


class ElevationTransport(Protocol):
    """Anything able to attach remote elevations to a batch of coordinates."""

    def fetch(self, coordinates: Sequence[Coordinate]) -> list[Coordinate]:
        """Return ``coordinates`` with altitudes, in the same order and count."""
        ...


class OpenElevationTransport:
    """Client for an open-elevation compatible ``/api/v1/lookup`` endpoint.

    Small batches travel as a ``locations=lat,lon|lat,lon`` query string on a
    GET request. Once that encoding grows past ``max_query_bytes`` the batch is
    sent as a JSON body on a POST request instead. The choice is made before
    anything goes on the wire, and failed requests are never retried.
    """

    def __init__(self, settings: Settings, session: requests.Session | None = None) -> None:
        self._settings = settings
        self._owns_session = session is None
        self._session = session if session is not None else requests.Session()

    def uses_query_string(self, coordinates: Sequence[Coordinate]) -> bool:
        """Whether ``coordinates`` fit in the compact GET form."""
        encoded = encode_locations(coordinates)
        return len(encoded.encode("utf-8")) <= self._settings.max_query_bytes

    def fetch(self, coordinates: Sequence[Coordinate]) -> list[Coordinate]:
        """Look up elevations for a batch of coordinates.

        Args:
            coordinates: Coordinates to resolve, in the order results are wanted.

        Returns:
            New coordinates carrying the elevation reported by the service.

        Raises:
            TransportError: If the request cannot be completed or is rejected.
            ProtocolError: If the response is not a well-formed lookup result
                for every requested coordinate.
        """
        if not coordinates:
            return []

        url = self._settings.api_url
        timeout = self._settings.request_timeout
        try:
            if self.uses_query_string(coordinates):
                logger.debug(
                    "Requesting elevations via query string",
                    extra={"count": len(coordinates)},
                )
                response = self._session.get(
                    url,
                    params={"locations": encode_locations(coordinates)},
                    timeout=timeout,
                )
            else:
                logger.debug(
                    "Requesting elevations via JSON body",
                    extra={"count": len(coordinates)},
                )
                body = LookupRequest(
                    locations=[LocationPayload.from_coordinate(c) for c in coordinates]
                )
                response = self._session.post(url, json=body.model_dump(), timeout=timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as exc:
            logger.error(
                "Elevation lookup request failed",
                extra={"url": url, "error": str(exc)},
            )
            raise TransportError(f"Elevation lookup request to {url} failed: {exc}") from exc

        return self._decode(response, expected=len(coordinates))

    def _decode(self, response: requests.Response, *, expected: int) -> list[Coordinate]:
        """Strip the ``results`` envelope and convert each entry to a Coordinate."""
        try:
            payload = response.json()
        except ValueError as exc:
            raise ProtocolError("Elevation service returned a non-JSON response") from exc

        try:
            lookup = LookupResponse.model_validate(payload)
            fetched = [result.to_coordinate() for result in lookup.results]
        except (ValidationError, InvalidCoordinateError) as exc:
            raise ProtocolError(f"Unexpected elevation response shape: {exc}") from exc

        if len(fetched) != expected:
            raise ProtocolError(
                f"Elevation service returned {len(fetched)} results for {expected} locations"
            )
        return fetched

    def close(self) -> None:
        """Close the HTTP session if this adapter created it."""
        if self._owns_session:
            self._session.close()
