"""Command-line lookup of coordinate altitudes.

Run directly:
    coordinate-altitude <LATITUDE> <LONGITUDE>
    coordinate-altitude "<LATITUDE>,<LONGITUDE>" ["<LATITUDE>,<LONGITUDE>" ...]
"""

import logging
import sys
from collections.abc import Sequence

from coordinate_altitude.coordinate import Coordinate
from coordinate_altitude.elevation.resolver import AltitudeResolver, build_resolver
from coordinate_altitude.exceptions import (
    InvalidCoordinateError,
    PersistenceError,
    ResolveError,
)

logger = logging.getLogger(__name__)

USAGE = (
    "usage: coordinate-altitude <COORDINATE> [<COORDINATE> ...]\n"
    '<COORDINATE>: <LATITUDE> <LONGITUDE> || "<LATITUDE>,<LONGITUDE>"'
)


def parse_arguments(args: Sequence[str]) -> list[Coordinate]:
    """Turn CLI arguments into coordinates.

    Two bare numbers are read as one latitude/longitude pair; anything else
    must be a list of 'lat,lon' strings.

    Raises:
        InvalidCoordinateError: If no coordinate is given or one is malformed.
    """
    if not args:
        raise InvalidCoordinateError("No coordinates provided")
    if len(args) == 2 and not any("," in arg for arg in args):
        try:
            pair = (float(args[0]), float(args[1]))
        except ValueError as exc:
            raise InvalidCoordinateError(
                f"Invalid coordinate: '{args[0]} {args[1]}'."
            ) from exc
        return [Coordinate.from_tuple(pair)]
    return [Coordinate.from_location(arg) for arg in args]


def run(args: Sequence[str], resolver: AltitudeResolver) -> int:
    """Resolve and print the coordinates named by ``args``; return an exit status."""
    if any(arg in ("-h", "--help") for arg in args):
        print(USAGE)
        return 0

    try:
        coordinates = parse_arguments(args)
    except InvalidCoordinateError as exc:
        print(f"error: {exc}\n{USAGE}", file=sys.stderr)
        return 1

    try:
        resolved = resolver.resolve(coordinates)
    except PersistenceError as exc:
        logger.warning("Altitude cache not saved", extra={"error": str(exc)})
        resolved = exc.resolved
    except ResolveError as exc:
        logger.error("Altitude lookup failed", extra={"error": str(exc)})
        return 1

    for coordinate in resolved:
        print(
            f"altitude for ({coordinate.latitude};{coordinate.longitude}) "
            f"is {coordinate.altitude}m"
        )
    return 0


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s — %(message)s",
    )
    sys.exit(run(sys.argv[1:], build_resolver()))


if __name__ == "__main__":
    main()
