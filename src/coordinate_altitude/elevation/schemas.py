"""Pydantic schemas for the elevation lookup wire format."""

from pydantic import AliasChoices, BaseModel, Field

from coordinate_altitude.coordinate import Coordinate


class LocationPayload(BaseModel):
    """A single coordinate pair in a lookup request body."""

    latitude: float
    longitude: float

    @classmethod
    def from_coordinate(cls, coordinate: Coordinate) -> "LocationPayload":
        return cls(latitude=coordinate.latitude, longitude=coordinate.longitude)


class LookupRequest(BaseModel):
    """Request body for the POST lookup endpoint."""

    locations: list[LocationPayload]


class ElevationResult(BaseModel):
    """Elevation data for a single coordinate pair."""

    latitude: float
    longitude: float
    elevation: float = Field(validation_alias=AliasChoices("elevation", "altitude"))

    @classmethod
    def from_coordinate(cls, coordinate: Coordinate) -> "ElevationResult":
        return cls(
            latitude=coordinate.latitude,
            longitude=coordinate.longitude,
            elevation=coordinate.altitude,
        )

    def to_coordinate(self) -> Coordinate:
        return Coordinate(
            latitude=self.latitude,
            longitude=self.longitude,
            altitude=self.elevation,
        )


class LookupResponse(BaseModel):
    """Response envelope shared by both lookup endpoints."""

    results: list[ElevationResult]
