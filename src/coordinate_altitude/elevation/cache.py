"""Persistent cache of previously resolved altitudes."""

import contextlib
import logging
import os
from collections.abc import Iterable, Sequence
from typing import Protocol

from pydantic import TypeAdapter, ValidationError

from coordinate_altitude.coordinate import Coordinate
from coordinate_altitude.exceptions import InvalidCoordinateError, PersistenceError

logger = logging.getLogger(__name__)

_RECORDS = TypeAdapter(list[Coordinate])


class CacheStore(Protocol):
    """Load and save the whole set of cached altitude records at once."""

    def load(self) -> list[Coordinate]:
        ...

    def save(self, records: Sequence[Coordinate]) -> None:
        ...


def find(candidate: Coordinate, records: Iterable[Coordinate]) -> Coordinate | None:
    """Return the first record at the same rounded location as ``candidate``."""
    key = candidate.rounding_key
    for record in records:
        if record.rounding_key == key:
            return record
    return None


def add_record(records: list[Coordinate], candidate: Coordinate) -> bool:
    """Append ``candidate`` unless a record already covers its location.

    Returns:
        True if the record was added, False if an earlier one was kept.
    """
    if find(candidate, records) is not None:
        return False
    records.append(candidate)
    return True


class JsonFileCacheStore:
    """Cache store persisted as a single JSON array on disk.

    The file is a warm cache, not a source of truth: a missing, unreadable or
    corrupt file loads as an empty cache. Saves rewrite the whole file through
    a temporary sibling so the array on disk is always complete.
    """

    def __init__(self, path: str) -> None:
        self._path = path

    @property
    def path(self) -> str:
        return self._path

    def load(self) -> list[Coordinate]:
        """Read all cached records, or an empty list if none can be read."""
        if not os.path.exists(self._path):
            return []

        try:
            with open(self._path, "rb") as file_handle:
                loaded = _RECORDS.validate_json(file_handle.read())
        except OSError as exc:
            logger.warning(
                "Failed to read altitude cache",
                extra={"path": self._path, "error": str(exc)},
            )
            return []
        except (ValidationError, InvalidCoordinateError) as exc:
            logger.warning(
                "Ignoring corrupt altitude cache",
                extra={"path": self._path, "error": str(exc)},
            )
            return []

        records: list[Coordinate] = []
        for record in loaded:
            add_record(records, record)
        return records

    def save(self, records: Sequence[Coordinate]) -> None:
        """Overwrite the cache file with ``records``.

        Raises:
            PersistenceError: If the file cannot be written.
        """
        directory = os.path.dirname(self._path)
        temp_path = f"{self._path}.tmp"
        try:
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(temp_path, "wb") as file_handle:
                file_handle.write(_RECORDS.dump_json(list(records)))
            os.replace(temp_path, self._path)
        except OSError as exc:
            with contextlib.suppress(OSError):
                os.remove(temp_path)
            logger.error(
                "Failed to write altitude cache",
                extra={"path": self._path, "error": str(exc)},
            )
            raise PersistenceError(f"Could not write altitude cache {self._path}: {exc}") from exc

        logger.info(
            "Saved altitude cache",
            extra={"path": self._path, "records": len(records)},
        )
