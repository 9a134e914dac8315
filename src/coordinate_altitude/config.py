"""Application configuration loaded from environment variables."""

import os
from dataclasses import dataclass

DEFAULT_API_URL = "https://api.open-elevation.com/api/v1/lookup"
CACHE_FILENAME = "altitude_cache.json"


def _default_cache_directory() -> str:
    cache_home = os.getenv("XDG_CACHE_HOME") or os.path.join(os.path.expanduser("~"), ".cache")
    return os.path.join(cache_home, "coordinate-altitude")


@dataclass(frozen=True, slots=True)
class Settings:
    """Application settings populated from environment variables."""

    api_url: str
    cache_directory: str
    request_timeout: float
    max_query_bytes: int

    @property
    def cache_path(self) -> str:
        """Location of the persisted altitude cache file."""
        return os.path.join(self.cache_directory, CACHE_FILENAME)

    @classmethod
    def from_env(cls) -> "Settings":
        """Create settings from environment variables.

        Returns:
            A frozen Settings instance with values from the environment.
        """
        return cls(
            api_url=os.getenv("ELEVATION_API_URL", DEFAULT_API_URL),
            cache_directory=os.getenv("ALTITUDE_CACHE_DIR") or _default_cache_directory(),
            request_timeout=float(os.getenv("REQUEST_TIMEOUT", "30")),
            max_query_bytes=int(os.getenv("MAX_QUERY_BYTES", "1024")),
        )
