from .geometry import Point2D, Vector2D, Bounds, CornerPosition
from .building import (
    WallType, WallTexture, FloorTexture, DEFAULT_WALL_TEXTURE, DEFAULT_FLOOR_TEXTURE,
)
from .parameters import FloorplanParams, PlannerParams
from .serialized import SerializedCorner, SerializedWall, SerializedFloorplan

__all__ = [
    "Point2D", "Vector2D", "Bounds", "CornerPosition",
    "WallType", "WallTexture", "FloorTexture",
    "DEFAULT_WALL_TEXTURE", "DEFAULT_FLOOR_TEXTURE",
    "FloorplanParams", "PlannerParams",
    "SerializedCorner", "SerializedWall", "SerializedFloorplan",
]
