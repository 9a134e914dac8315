"""Altitude resolution backed by a persistent cache and a remote lookup."""

import logging
from collections.abc import MutableSequence, Sequence

from coordinate_altitude.config import Settings
from coordinate_altitude.coordinate import Coordinate
from coordinate_altitude.elevation.cache import (
    CacheStore,
    JsonFileCacheStore,
    add_record,
    find,
)
from coordinate_altitude.elevation.transport import (
    ElevationTransport,
    OpenElevationTransport,
)
from coordinate_altitude.exceptions import PersistenceError

logger = logging.getLogger(__name__)


class AltitudeResolver:
    """Resolve altitudes for batches of coordinates.

    Each call loads the cache once, sends every cache miss to the transport
    in a single request, saves the cache at most once (only when it grew) and
    returns results in the caller's order. Calls are not synchronized; callers
    sharing a cache file across threads must serialize them.
    """

    def __init__(self, transport: ElevationTransport, cache_store: CacheStore) -> None:
        self._transport = transport
        self._cache_store = cache_store

    def resolve(self, requested: Sequence[Coordinate]) -> list[Coordinate]:
        """Return altitude-bearing copies of ``requested``.

        ``result[i]`` has the latitude and longitude of ``requested[i]`` for
        every index, duplicates included.

        Raises:
            TransportError: If the remote lookup fails. Nothing is cached.
            ProtocolError: If the remote payload is malformed. Nothing is cached.
            PersistenceError: If the cache cannot be saved. The full response
                is available on the exception's ``resolved`` attribute.
        """
        if not requested:
            return []

        records = self._cache_store.load()

        hits: list[Coordinate] = []
        misses: list[Coordinate] = []
        # (from_cache, position in hits or misses) for each requested index
        placement: list[tuple[bool, int]] = []
        for coordinate in requested:
            cached = find(coordinate, records)
            if cached is not None:
                placement.append((True, len(hits)))
                hits.append(cached)
            else:
                placement.append((False, len(misses)))
                misses.append(coordinate)

        fetched: list[Coordinate] = []
        added = 0
        if misses:
            fetched = self._transport.fetch(misses)
            added = sum(add_record(records, coordinate) for coordinate in fetched)

        logger.debug(
            "Resolved altitude batch",
            extra={"requested": len(requested), "hits": len(hits), "fetched": len(fetched)},
        )

        resolved = [
            coordinate.with_altitude((hits if from_cache else fetched)[position].altitude)
            for coordinate, (from_cache, position) in zip(requested, placement)
        ]

        if added:
            try:
                self._cache_store.save(records)
            except PersistenceError as exc:
                exc.resolved = resolved
                raise
        return resolved

    def resolve_one(self, coordinate: Coordinate) -> Coordinate:
        """Resolve a single coordinate, raising the same errors as ``resolve``."""
        return self.resolve([coordinate])[0]

    def add_altitude_in_place(self, coordinates: MutableSequence[Coordinate]) -> None:
        """Write resolved altitudes onto the caller's own coordinate objects.

        On ``PersistenceError`` the altitudes are written before the error is
        raised.
        """
        try:
            resolved = self.resolve(coordinates)
        except PersistenceError as exc:
            _write_altitudes(coordinates, exc.resolved)
            raise
        _write_altitudes(coordinates, resolved)


def _write_altitudes(targets: Sequence[Coordinate], resolved: Sequence[Coordinate]) -> None:
    for target, source in zip(targets, resolved):
        target.altitude = source.altitude


def build_resolver(settings: Settings | None = None) -> AltitudeResolver:
    """Wire the default HTTP transport and on-disk cache."""
    settings = settings if settings is not None else Settings.from_env()
    return AltitudeResolver(
        transport=OpenElevationTransport(settings),
        cache_store=JsonFileCacheStore(settings.cache_path),
    )


def resolve(coordinates: Sequence[Coordinate]) -> list[Coordinate]:
    """Resolve ``coordinates`` with a resolver configured from the environment."""
    return build_resolver().resolve(coordinates)


def resolve_one(coordinate: Coordinate) -> Coordinate:
    return build_resolver().resolve_one(coordinate)


def add_altitude_in_place(coordinates: MutableSequence[Coordinate]) -> None:
    build_resolver().add_altitude_in_place(coordinates)
