"""FastAPI application entry point for the caching elevation proxy."""

import logging
from collections.abc import AsyncIterator
from concurrent.futures import ThreadPoolExecutor
from contextlib import asynccontextmanager

from fastapi import FastAPI

from coordinate_altitude.config import Settings
from coordinate_altitude.elevation.cache import JsonFileCacheStore
from coordinate_altitude.elevation.resolver import AltitudeResolver
from coordinate_altitude.elevation.routes import router
from coordinate_altitude.elevation.transport import OpenElevationTransport

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s — %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application startup and shutdown.

    Wires the resolver to the upstream service and the on-disk cache. A
    single worker runs every resolve so cache load/save cycles never overlap.
    """
    settings = Settings.from_env()
    transport = OpenElevationTransport(settings)
    app.state.altitude_resolver = AltitudeResolver(
        transport=transport,
        cache_store=JsonFileCacheStore(settings.cache_path),
    )
    app.state.executor = ThreadPoolExecutor(max_workers=1)
    logger.info(
        "Altitude proxy initialized",
        extra={"upstream": settings.api_url, "cache_path": settings.cache_path},
    )
    yield
    app.state.executor.shutdown(wait=False)
    transport.close()
    logger.info("Altitude proxy shut down")


app = FastAPI(title="Coordinate Altitude Proxy", lifespan=lifespan)
app.include_router(router)
