"""Custom exception hierarchy for the application."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from coordinate_altitude.coordinate import Coordinate


class AppError(Exception):
    """Base exception for the application."""

    def __init__(self, message: str, *, code: str | None = None) -> None:
        super().__init__(message)
        self.code = code


class InvalidCoordinateError(AppError):
    """Raised when coordinate input is malformed or out of range."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="INVALID_COORDINATE")


class ResolveError(AppError):
    """Base for failures raised while resolving altitudes."""


class TransportError(ResolveError):
    """Raised when the remote elevation lookup cannot be completed."""

    def __init__(self, message: str, *, code: str = "TRANSPORT_ERROR") -> None:
        super().__init__(message, code=code)


class ProtocolError(TransportError):
    """Raised when the remote service answers with a payload of the wrong shape."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="PROTOCOL_ERROR")


class PersistenceError(ResolveError):
    """Raised when the altitude cache cannot be written.

    The altitudes themselves were resolved; ``resolved`` holds the complete
    response so callers can still use it.
    """

    def __init__(self, message: str, *, resolved: "list[Coordinate] | None" = None) -> None:
        super().__init__(message, code="PERSISTENCE_ERROR")
        self.resolved: list[Coordinate] = resolved if resolved is not None else []
