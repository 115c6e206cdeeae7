"""Tests for the floorplan exception hierarchy."""

from blueprint.core.exceptions import (
    EntityNotFoundError,
    FloorplanError,
    GraphCorruptionError,
    InvalidOperationError,
)


def test_floorplan_error_base():
    error = FloorplanError("Broken", {"corner_id": "A"})
    assert str(error) == "Broken"
    assert error.message == "Broken"
    assert error.details == {"corner_id": "A"}


def test_details_default_to_empty():
    assert FloorplanError("x").details == {}


def test_subclasses():
    for cls in (GraphCorruptionError, InvalidOperationError, EntityNotFoundError):
        error = cls("failed")
        assert isinstance(error, FloorplanError)
        assert error.message == "failed"
