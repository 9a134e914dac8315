"""Tests for the Coordinate value type and location text forms."""

import pytest
from pydantic import ValidationError

from coordinate_altitude.coordinate import (
    Coordinate,
    encode_locations,
    format_location,
    parse_locations,
)
from coordinate_altitude.exceptions import InvalidCoordinateError


class TestConstruction:
    def test_new_defaults_altitude_to_zero(self) -> None:
        coordinate = Coordinate.new(44.0, 2)

        assert coordinate == Coordinate(latitude=44.0, longitude=2.0, altitude=0.0)

    def test_default_is_origin(self) -> None:
        assert Coordinate() == Coordinate(latitude=0.0, longitude=0.0, altitude=0.0)

    def test_from_tuple(self) -> None:
        assert Coordinate.from_tuple((34.324, 1.88832)) == Coordinate.new(34.324, 1.88832)

    def test_rejects_latitude_out_of_range(self) -> None:
        with pytest.raises(InvalidCoordinateError, match="Invalid latitude"):
            Coordinate.new(91.0, 0.0)

    def test_rejects_negative_latitude_out_of_range(self) -> None:
        with pytest.raises(InvalidCoordinateError, match="Invalid latitude"):
            Coordinate.new(-91.0, 0.0)

    def test_rejects_longitude_out_of_range(self) -> None:
        with pytest.raises(InvalidCoordinateError, match="Invalid longitude"):
            Coordinate.new(0.0, 181.0)

    def test_keyword_construction_is_validated(self) -> None:
        with pytest.raises(InvalidCoordinateError):
            Coordinate(latitude=0.0, longitude=-181.0, altitude=5.0)

    def test_accepts_boundaries(self) -> None:
        assert Coordinate.new(90.0, 180.0).latitude == 90.0
        assert Coordinate.new(-90.0, -180.0).longitude == -180.0

    def test_reads_elevation_alias(self) -> None:
        coordinate = Coordinate.model_validate(
            {"latitude": 10.0, "longitude": -10.0, "elevation": 21.0}
        )

        assert coordinate.altitude == 21.0


class TestMutability:
    def test_with_altitude_returns_copy(self) -> None:
        original = Coordinate.new(10, -10)

        updated = original.with_altitude(21)

        assert updated == Coordinate(latitude=10.0, longitude=-10.0, altitude=21.0)
        assert original.altitude == 0.0

    def test_altitude_can_be_assigned(self) -> None:
        coordinate = Coordinate.new(10, -10)

        coordinate.altitude = 21.0

        assert coordinate.altitude == 21.0

    def test_latitude_is_frozen(self) -> None:
        coordinate = Coordinate.new(10, -10)

        with pytest.raises(ValidationError):
            coordinate.latitude = 11.0  # type: ignore[misc]


class TestCacheMatching:
    def test_equality_is_exact(self) -> None:
        assert Coordinate.new(20.3453001, 28.0) != Coordinate.new(20.3453004, 28.0)

    def test_matches_beyond_sixth_decimal(self) -> None:
        assert Coordinate.new(20.3453001, 28.0).matches(Coordinate.new(20.3453004, 28.0))

    def test_differs_at_sixth_decimal(self) -> None:
        assert not Coordinate.new(20.345301, 28.0).matches(Coordinate.new(20.345302, 28.0))

    def test_ignores_altitude(self) -> None:
        assert Coordinate.new(1, 1).with_altitude(5).matches(Coordinate.new(1, 1))

    def test_rounding_key(self) -> None:
        assert Coordinate.new(46.1650119, 15.9725117).rounding_key == (46.165012, 15.972512)

    def test_rounding_key_rounds_decimal_halves_up(self) -> None:
        assert Coordinate.new(46.1650115, -2.0000005).rounding_key == (46.165012, -2.000001)
        assert Coordinate.new(46.1650115, 0).matches(Coordinate.new(46.165012, 0))


class TestLocationText:
    def test_from_location_handles_whitespace(self) -> None:
        coordinate = Coordinate.from_location(" 48.8 , 2.3 ")

        assert coordinate == Coordinate.new(48.8, 2.3)

    def test_from_location_rejects_invalid_format(self) -> None:
        with pytest.raises(InvalidCoordinateError, match="Invalid location format"):
            Coordinate.from_location("not-a-coordinate")

    def test_from_location_rejects_single_value(self) -> None:
        with pytest.raises(InvalidCoordinateError, match="Invalid location format"):
            Coordinate.from_location("51.5")

    def test_parse_locations(self) -> None:
        assert parse_locations("10,-10|20.5,30") == [
            Coordinate.new(10, -10),
            Coordinate.new(20.5, 30),
        ]

    def test_encode_locations(self) -> None:
        coordinates = [Coordinate.new(10, -10), Coordinate.new(20.5, 30)]

        assert encode_locations(coordinates) == "10.0,-10.0|20.5,30.0"
        assert format_location(coordinates[0]) == "10.0,-10.0"

    def test_encode_locations_avoids_scientific_notation(self) -> None:
        coordinates = [Coordinate.new(0.00001, 5), Coordinate.new(-1.5e-07, 0.0001)]

        assert encode_locations(coordinates) == "0.00001,5.0|-0.00000015,0.0001"
