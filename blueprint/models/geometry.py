"""Geometric primitives used throughout the floorplan core."""

from __future__ import annotations
import math
from pydantic import BaseModel


class Point2D(BaseModel):
    """Point on the floor plane (model units, screen y-down convention)."""
    x: float
    y: float

    def distance_to(self, other: Point2D) -> float:
        return math.sqrt((self.x - other.x) ** 2 + (self.y - other.y) ** 2)

    def lerp(self, other: Point2D, t: float) -> Point2D:
        return Point2D(
            x=self.x + (other.x - self.x) * t,
            y=self.y + (other.y - self.y) * t,
        )

    def __add__(self, other: Vector2D) -> Point2D:
        return Point2D(x=self.x + other.x, y=self.y + other.y)

    def __sub__(self, other: Vector2D) -> Point2D:
        return Point2D(x=self.x - other.x, y=self.y - other.y)


class Vector2D(BaseModel):
    """2D displacement on the floor plane."""
    x: float
    y: float

    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y)

    def rotated(self, cs: float, sn: float) -> Vector2D:
        """Rotate by the angle whose cosine and sine are given."""
        return Vector2D(
            x=self.x * cs - self.y * sn,
            y=self.x * sn + self.y * cs,
        )

    def __mul__(self, scalar: float) -> Vector2D:
        return Vector2D(x=self.x * scalar, y=self.y * scalar)


class Bounds(BaseModel):
    """Axis-aligned bounding box of a floorplan."""
    min_x: float = 0.0
    min_y: float = 0.0
    max_x: float = 0.0
    max_y: float = 0.0

    @property
    def center(self) -> Point2D:
        return Point2D(x=(self.min_x + self.max_x) * 0.5, y=(self.min_y + self.max_y) * 0.5)

    @property
    def size(self) -> Vector2D:
        return Vector2D(x=self.max_x - self.min_x, y=self.max_y - self.min_y)


class CornerPosition(BaseModel):
    """Where to place a new corner, optionally with a caller-chosen id."""
    x: float
    y: float
    id: str | None = None
