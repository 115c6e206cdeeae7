"""Floorplan: owns the corner/wall graph and the rooms derived from it."""

from __future__ import annotations
import logging
from typing import Any, Mapping

from pydantic import ValidationError

from blueprint.core.corner import Corner
from blueprint.core.events import Signal
from blueprint.core.exceptions import GraphCorruptionError, InvalidOperationError
from blueprint.core.half_edge import HalfEdge
from blueprint.core.room import Room
from blueprint.core.room_finder import RoomFinder
from blueprint.core.wall import Wall
from blueprint.models import (
    Bounds, FloorTexture, FloorplanParams, Point2D, SerializedCorner,
    SerializedFloorplan, SerializedWall, Vector2D,
)

logger = logging.getLogger(__name__)


class Floorplan:
    """
    A set of walls and corners, and the rooms they enclose.

    Corners and walls live in insertion-ordered arenas keyed by id; merge
    scans and room detection visit them in that order. Rooms are a pure
    function of the graph and are rebuilt by `update()`, which callers run
    once a batch of edits is complete.
    """

    def __init__(self, params: FloorplanParams | None = None) -> None:
        self.params = params or FloorplanParams()
        self.room_finder = RoomFinder()

        self._corners: dict[str, Corner] = {}
        self._walls: dict[str, Wall] = {}
        self._rooms: list[Room] = []

        # Keyed by room uuid; rooms themselves do not survive an update
        self._floor_textures: dict[str, FloorTexture] = {}

        self.wall_added = Signal()     # (wall)
        self.corner_added = Signal()   # (corner)
        self.redraw = Signal()         # ()
        self.rooms_updated = Signal()  # ()
        self.room_loaded = Signal()    # ()

    # -- arena ---------------------------------------------------------------

    def get_corners(self) -> list[Corner]:
        return list(self._corners.values())

    def get_walls(self) -> list[Wall]:
        return list(self._walls.values())

    def get_rooms(self) -> list[Room]:
        return list(self._rooms)

    def corner_by_id(self, corner_id: str) -> Corner:
        corner = self._corners.get(corner_id)
        if corner is None:
            raise GraphCorruptionError(
                f"Corner {corner_id} is referenced but not part of the floorplan",
                details={"corner_id": corner_id},
            )
        return corner

    def wall_by_id(self, wall_id: str) -> Wall:
        wall = self._walls.get(wall_id)
        if wall is None:
            raise GraphCorruptionError(
                f"Wall {wall_id} is referenced but not part of the floorplan",
                details={"wall_id": wall_id},
            )
        return wall

    def find_corner(self, corner_id: str) -> Corner | None:
        return self._corners.get(corner_id)

    def find_wall(self, wall_id: str) -> Wall | None:
        return self._walls.get(wall_id)

    def find_room(self, room_id: str) -> Room | None:
        for room in self._rooms:
            if room.get_uuid() == room_id:
                return room
        return None

    def new_corner(self, x: float, y: float, corner_id: str | None = None) -> Corner:
        """Create and register a corner. Does not update rooms."""
        if corner_id is not None and corner_id in self._corners:
            raise InvalidOperationError(
                f"Corner id {corner_id} is already in use",
                details={"corner_id": corner_id},
            )
        corner = Corner(self, x, y, corner_id)
        self._corners[corner.id] = corner
        corner.deleted.connect(self._remove_corner)
        self.corner_added.fire(corner)
        return corner

    def new_wall(self, start: Corner, end: Corner, notify: bool = True) -> Wall:
        """
        Create and register a wall between two distinct corners. Does not update rooms.

        With `notify=False` the caller fires `wall_added` itself once its edit
        is complete.
        """
        if start is end:
            raise InvalidOperationError(
                f"Wall would start and end at corner {start.id}",
                details={"corner_id": start.id},
            )
        wall = Wall(self, start, end, self._unique_wall_id(start, end))
        self._walls[wall.id] = wall
        wall.deleted.connect(self._remove_wall)
        if notify:
            self.wall_added.fire(wall)
        return wall

    def _unique_wall_id(self, start: Corner, end: Corner) -> str:
        base = f"{start.id},{end.id}"
        wall_id = base
        n = 1
        while wall_id in self._walls:
            n += 1
            wall_id = f"{base}#{n}"
        return wall_id

    def _remove_wall(self, wall: Wall) -> None:
        self._walls.pop(wall.id, None)

    def _remove_corner(self, corner: Corner) -> None:
        self._corners.pop(corner.id, None)

    # -- hit testing ---------------------------------------------------------

    def overlapped_corner(self, x: float, y: float, tolerance: float | None = None) -> Corner | None:
        if tolerance is None:
            tolerance = self.params.hit_tolerance
        for corner in self._corners.values():
            if corner.distance_from(x, y) < tolerance:
                return corner
        return None

    def overlapped_wall(self, x: float, y: float, tolerance: float | None = None) -> Wall | None:
        if tolerance is None:
            tolerance = self.params.hit_tolerance
        for wall in self._walls.values():
            if wall.distance_from(x, y) < tolerance:
                return wall
        return None

    # -- rooms ---------------------------------------------------------------

    def update(self) -> None:
        """Recompute every room and half edge from the current graph."""
        for wall in self._walls.values():
            wall.reset_front_back()

        room_corners = self.room_finder.find_rooms(self.get_corners())
        self._rooms = [Room(self, corners) for corners in room_corners]
        self._assign_orphan_edges()
        self._update_floor_textures()

        logger.debug(
            "Floorplan updated: %d corners, %d walls, %d rooms",
            len(self._corners), len(self._walls), len(self._rooms),
        )
        self.rooms_updated.fire()

    def _assign_orphan_edges(self) -> None:
        """Walls outside every room get an unlinked front/back pair."""
        for wall in self._walls.values():
            if wall.front_edge is None and wall.back_edge is None:
                wall.orphan = True
                HalfEdge(None, wall, False)
                HalfEdge(None, wall, True)

    def wall_edges(self) -> list[HalfEdge]:
        edges: list[HalfEdge] = []
        for wall in self._walls.values():
            if wall.front_edge is not None:
                edges.append(wall.front_edge)
            if wall.back_edge is not None:
                edges.append(wall.back_edge)
        return edges

    def get_floor_texture(self, room_id: str) -> FloorTexture | None:
        return self._floor_textures.get(room_id)

    def set_floor_texture(self, room_id: str, url: str, scale: float) -> None:
        self._floor_textures[room_id] = FloorTexture(url=url, scale=scale)

    def _update_floor_textures(self) -> None:
        """Drop textures of rooms that no longer exist."""
        room_ids = {room.get_uuid() for room in self._rooms}
        for room_id in list(self._floor_textures):
            if room_id not in room_ids:
                del self._floor_textures[room_id]

    # -- dimensions ----------------------------------------------------------

    def get_bounds(self) -> Bounds:
        """Bounding box of all corners; all zeros for an empty plan."""
        if not self._corners:
            return Bounds()
        xs = [corner.x for corner in self._corners.values()]
        ys = [corner.y for corner in self._corners.values()]
        return Bounds(min_x=min(xs), min_y=min(ys), max_x=max(xs), max_y=max(ys))

    def get_center2(self) -> Point2D:
        return self.get_bounds().center

    def get_size2(self) -> Vector2D:
        return self.get_bounds().size

    def get_center(self) -> tuple[float, float, float]:
        """Centre on the 3D floor plane as (x, 0, z)."""
        c = self.get_center2()
        return (c.x, 0.0, c.y)

    def get_size(self) -> tuple[float, float, float]:
        s = self.get_size2()
        return (s.x, 0.0, s.y)

    # -- persistence ---------------------------------------------------------

    def save_floorplan(self) -> SerializedFloorplan:
        return SerializedFloorplan(
            corners={
                corner.id: SerializedCorner(x=corner.x, y=corner.y)
                for corner in self._corners.values()
            },
            walls=[
                SerializedWall(
                    corner1=wall.start.id,
                    corner2=wall.end.id,
                    front_texture=wall.front_texture,
                    back_texture=wall.back_texture,
                    wall_type=wall.wall_type,
                )
                for wall in self._walls.values()
            ],
            new_floor_textures=dict(self._floor_textures),
        )

    def load_floorplan(self, data: SerializedFloorplan | Mapping[str, Any] | None) -> bool:
        """
        Replace the graph with a persisted floorplan.

        Malformed input leaves an empty floorplan and returns False; it never
        raises.
        """
        self.reset()

        try:
            plan = self._parse(data)
        except ValidationError as exc:
            logger.warning("Floorplan data is malformed, loading an empty plan: %s", exc)
            plan = None
        if plan is None:
            self.update()
            return False

        missing = {
            cid for w in plan.walls for cid in (w.corner1, w.corner2)
            if cid not in plan.corners
        }
        if missing:
            logger.warning("Walls reference unknown corners %s, loading an empty plan", sorted(missing))
            self.update()
            return False

        corners = {
            corner_id: self.new_corner(c.x, c.y, corner_id)
            for corner_id, c in plan.corners.items()
        }
        for w in plan.walls:
            if w.corner1 == w.corner2:
                logger.warning("Skipping zero-length wall at corner %s", w.corner1)
                continue
            wall = self.new_wall(corners[w.corner1], corners[w.corner2])
            wall.front_texture = w.front_texture
            wall.back_texture = w.back_texture
            wall.wall_type = w.wall_type

        self._floor_textures = dict(plan.new_floor_textures)
        self.update()
        logger.info(
            "Loaded floorplan: %d corners, %d walls, %d rooms",
            len(self._corners), len(self._walls), len(self._rooms),
        )
        self.room_loaded.fire()
        return True

    @staticmethod
    def _parse(data: SerializedFloorplan | Mapping[str, Any] | None) -> SerializedFloorplan | None:
        if isinstance(data, SerializedFloorplan):
            return data
        if not isinstance(data, Mapping) or "corners" not in data or "walls" not in data:
            logger.warning("Floorplan data lacks corners or walls, loading an empty plan")
            return None
        return SerializedFloorplan.model_validate(data)

    def reset(self) -> None:
        """Remove every wall and corner."""
        for wall in list(self._walls.values()):
            wall.remove()
        for corner in list(self._corners.values()):
            corner.remove()
        self._corners = {}
        self._walls = {}
        self._rooms = []
