"""API request/response schemas."""

from __future__ import annotations
from pydantic import BaseModel

from blueprint.core.corner import Corner
from blueprint.core.half_edge import HalfEdge
from blueprint.core.room import Room
from blueprint.core.wall import Wall
from blueprint.models import Bounds, CornerPosition, FloorTexture, WallTexture, WallType
from blueprint.models.geometry import Point2D, Vector2D


class CornerInfo(BaseModel):
    id: str
    x: float
    y: float
    walls: list[str]

    @classmethod
    def from_corner(cls, corner: Corner) -> CornerInfo:
        return cls(
            id=corner.id, x=corner.x, y=corner.y,
            walls=[wall.id for wall in corner.walls],
        )


class EdgeInfo(BaseModel):
    """One side of a wall: its footprint quad."""
    wall_id: str
    front: bool
    corners: list[Point2D]

    @classmethod
    def from_edge(cls, edge: HalfEdge) -> EdgeInfo:
        return cls(wall_id=edge.wall.id, front=edge.front, corners=edge.corners())


class WallInfo(BaseModel):
    id: str
    start: str
    end: str
    thickness: float
    height: float
    wall_type: WallType
    orphan: bool
    front_texture: WallTexture
    back_texture: WallTexture
    front_edge: EdgeInfo | None = None
    back_edge: EdgeInfo | None = None

    @classmethod
    def from_wall(cls, wall: Wall) -> WallInfo:
        return cls(
            id=wall.id,
            start=wall.start.id,
            end=wall.end.id,
            thickness=wall.thickness,
            height=wall.height,
            wall_type=wall.wall_type,
            orphan=wall.orphan,
            front_texture=wall.front_texture,
            back_texture=wall.back_texture,
            front_edge=EdgeInfo.from_edge(wall.front_edge) if wall.front_edge else None,
            back_edge=EdgeInfo.from_edge(wall.back_edge) if wall.back_edge else None,
        )


class RoomInfo(BaseModel):
    id: str
    corners: list[str]
    interior_corners: list[Point2D]
    edges: list[EdgeInfo]
    texture: FloorTexture

    @classmethod
    def from_room(cls, room: Room) -> RoomInfo:
        return cls(
            id=room.get_uuid(),
            corners=[corner.id for corner in room.corners],
            interior_corners=room.interior_corners,
            edges=[EdgeInfo.from_edge(edge) for edge in room.edges()],
            texture=room.get_texture(),
        )


class BoundsInfo(BaseModel):
    bounds: Bounds
    center: Point2D
    size: Vector2D

    @classmethod
    def from_bounds(cls, bounds: Bounds) -> BoundsInfo:
        return cls(bounds=bounds, center=bounds.center, size=bounds.size)


class CornerMove(BaseModel):
    """Absolute target position for a corner drag."""
    x: float
    y: float
    snap: bool = True


class MoveResult(BaseModel):
    corner: CornerInfo | None
    merged: bool


class WallCreate(BaseModel):
    """Endpoints are existing corner ids or positions of new corners."""
    start: str | CornerPosition
    end: str | CornerPosition
    wall_type: WallType = WallType.BLANK


class TextureUpdate(BaseModel):
    url: str
    scale: float = 0.0


class LoadResponse(BaseModel):
    loaded: bool
    corners: int
    walls: int
    rooms: int
