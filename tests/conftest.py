"""Shared test fixtures."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from coordinate_altitude.config import Settings
from coordinate_altitude.elevation.cache import JsonFileCacheStore
from coordinate_altitude.elevation.resolver import AltitudeResolver
from coordinate_altitude.elevation.transport import OpenElevationTransport


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Create test settings pointing at a temporary cache directory."""
    return Settings(
        api_url="http://elevation.test/api/v1/lookup",
        cache_directory=str(tmp_path / "cache"),
        request_timeout=5.0,
        max_query_bytes=1024,
    )


@pytest.fixture
def cache_store(settings: Settings) -> JsonFileCacheStore:
    """Create a JSON cache store inside the temporary cache directory."""
    return JsonFileCacheStore(settings.cache_path)


@pytest.fixture
def transport() -> MagicMock:
    """Create a mock transport; tests program ``fetch`` themselves."""
    return MagicMock(spec=OpenElevationTransport)


@pytest.fixture
def resolver(transport: MagicMock, cache_store: JsonFileCacheStore) -> AltitudeResolver:
    """Create a resolver over the mock transport and a real on-disk cache."""
    return AltitudeResolver(transport=transport, cache_store=cache_store)
