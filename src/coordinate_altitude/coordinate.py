"""Coordinate value type and its textual location forms."""

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal

from pydantic import AliasChoices, BaseModel, Field, field_validator

from coordinate_altitude.exceptions import InvalidCoordinateError

# Decimal places the remote service keeps for latitude and longitude.
CACHE_PRECISION = 6
_CACHE_QUANTUM = Decimal(1).scaleb(-CACHE_PRECISION)
LOCATION_SEPARATOR = "|"


class Coordinate(BaseModel):
    """A point on Earth's surface and its elevation above sea level.

    Latitude and longitude are frozen once the coordinate is built; only
    ``altitude`` may be reassigned, which is how resolved altitudes are
    written back onto caller-owned objects.
    """

    latitude: float = Field(default=0.0, frozen=True)
    longitude: float = Field(default=0.0, frozen=True)
    altitude: float = Field(
        default=0.0,
        validation_alias=AliasChoices("altitude", "elevation"),
    )

    @field_validator("latitude")
    @classmethod
    def _check_latitude(cls, value: float) -> float:
        if not (-90 <= value <= 90):
            raise InvalidCoordinateError(
                f"Invalid latitude: {value}. Must be between -90 and 90."
            )
        return value

    @field_validator("longitude")
    @classmethod
    def _check_longitude(cls, value: float) -> float:
        if not (-180 <= value <= 180):
            raise InvalidCoordinateError(
                f"Invalid longitude: {value}. Must be between -180 and 180."
            )
        return value

    @classmethod
    def new(cls, latitude: float, longitude: float) -> "Coordinate":
        """Build a coordinate with an unresolved (zero) altitude.

        Raises:
            InvalidCoordinateError: If latitude or longitude is out of range.
        """
        return cls(latitude=latitude, longitude=longitude)

    @classmethod
    def from_tuple(cls, pair: tuple[float, float]) -> "Coordinate":
        """Build a coordinate from a ``(latitude, longitude)`` pair."""
        latitude, longitude = pair
        return cls.new(latitude, longitude)

    @classmethod
    def from_location(cls, location: str) -> "Coordinate":
        """Parse a 'lat,lon' string.

        Args:
            location: Comma-separated latitude and longitude, e.g. '51.5,-0.1'.

        Raises:
            InvalidCoordinateError: If the format is wrong or values are out of range.
        """
        try:
            lat_str, lon_str = location.split(",")
            latitude = float(lat_str.strip())
            longitude = float(lon_str.strip())
        except ValueError as exc:
            raise InvalidCoordinateError(
                f"Invalid location format: '{location}'. Expected 'latitude,longitude'."
            ) from exc
        return cls.new(latitude, longitude)

    def with_altitude(self, altitude: float) -> "Coordinate":
        """Return a copy carrying ``altitude``; the receiver is left untouched."""
        return self.model_copy(update={"altitude": float(altitude)})

    @property
    def rounding_key(self) -> tuple[float, float]:
        """Latitude and longitude rounded half-up, in decimal, to the service's precision."""
        return (
            _round_decimal(self.latitude),
            _round_decimal(self.longitude),
        )

    def matches(self, other: "Coordinate") -> bool:
        """Whether both coordinates name the same location for caching purposes."""
        return self.rounding_key == other.rounding_key


def _round_decimal(value: float) -> float:
    # Round the written decimal, not the binary float: 46.1650115 -> 46.165012
    return float(Decimal(repr(value)).quantize(_CACHE_QUANTUM, rounding=ROUND_HALF_UP))


def _plain_decimal(value: float) -> str:
    return format(Decimal(repr(value)), "f")


def format_location(coordinate: Coordinate) -> str:
    """Format as 'lat,lon' in plain decimal notation (never '1e-05')."""
    return f"{_plain_decimal(coordinate.latitude)},{_plain_decimal(coordinate.longitude)}"


def encode_locations(coordinates: Iterable[Coordinate]) -> str:
    """Encode coordinates as 'lat,lon|lat,lon|...'."""
    return LOCATION_SEPARATOR.join(format_location(coordinate) for coordinate in coordinates)


def parse_locations(locations: str) -> list[Coordinate]:
    """Parse the 'lat,lon|lat,lon|...' form into coordinates.

    Raises:
        InvalidCoordinateError: If any entry is malformed or out of range.
    """
    return [
        Coordinate.from_location(location)
        for location in locations.split(LOCATION_SEPARATOR)
    ]
