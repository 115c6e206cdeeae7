"""Exception hierarchy for the floorplan core."""

from __future__ import annotations


class FloorplanError(Exception):
    """Base exception for all floorplan errors."""

    def __init__(self, message: str, details: dict[str, str] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class GraphCorruptionError(FloorplanError):
    """Raised when the corner/wall graph violates its own invariants."""
    pass


class InvalidOperationError(FloorplanError):
    """Raised when an edit would create an invalid graph."""
    pass


class EntityNotFoundError(FloorplanError):
    """Raised when a corner, wall or room id is unknown."""
    pass
