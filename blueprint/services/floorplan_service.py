"""High-level floorplan service: facade for the API layer."""

from __future__ import annotations

import threading
from typing import Any, Mapping

from loguru import logger

from blueprint.core.corner import Corner
from blueprint.core.exceptions import EntityNotFoundError, InvalidOperationError
from blueprint.core.floorplan import Floorplan
from blueprint.core.room import Room
from blueprint.core.wall import Wall
from blueprint.models import (
    Bounds, CornerPosition, FloorplanParams, PlannerParams, SerializedFloorplan, WallType,
)


class FloorplanService:
    """
    Owns one floorplan and applies whole edits to it.

    Each public method is one complete edit: it mutates the graph and runs
    `Floorplan.update()` before returning. A lock keeps the graph single-
    writer when the API serves requests from several threads.
    """

    def __init__(
        self,
        params: FloorplanParams | None = None,
        planner_params: PlannerParams | None = None,
    ) -> None:
        self.floorplan = Floorplan(params)
        self.planner_params = planner_params or PlannerParams()
        self._lock = threading.Lock()

    # -- persistence ---------------------------------------------------------

    def load(self, data: SerializedFloorplan | Mapping[str, Any] | None) -> bool:
        with self._lock:
            loaded = self.floorplan.load_floorplan(data)
        if not loaded:
            logger.warning("Floorplan load rejected, plan is now empty")
        return loaded

    def save(self) -> SerializedFloorplan:
        with self._lock:
            return self.floorplan.save_floorplan()

    # -- queries -------------------------------------------------------------

    def corners(self) -> list[Corner]:
        return self.floorplan.get_corners()

    def walls(self) -> list[Wall]:
        return self.floorplan.get_walls()

    def rooms(self) -> list[Room]:
        return self.floorplan.get_rooms()

    def bounds(self) -> Bounds:
        return self.floorplan.get_bounds()

    def get_corner(self, corner_id: str) -> Corner:
        corner = self.floorplan.find_corner(corner_id)
        if corner is None:
            raise EntityNotFoundError(f"Corner {corner_id} not found", details={"corner_id": corner_id})
        return corner

    def get_wall(self, wall_id: str) -> Wall:
        wall = self.floorplan.find_wall(wall_id)
        if wall is None:
            raise EntityNotFoundError(f"Wall {wall_id} not found", details={"wall_id": wall_id})
        return wall

    def get_room(self, room_id: str) -> Room:
        room = self.floorplan.find_room(room_id)
        if room is None:
            raise EntityNotFoundError(f"Room {room_id} not found", details={"room_id": room_id})
        return room

    # -- edits ---------------------------------------------------------------

    def add_wall(
        self,
        start: str | CornerPosition,
        end: str | CornerPosition,
        wall_type: WallType = WallType.BLANK,
    ) -> Wall:
        """
        Add a wall between two endpoints.

        Each endpoint is an existing corner id or the position (and optional
        id) of a new corner, so corners only come into being together with
        their first wall.
        """
        with self._lock:
            self._check_endpoints(start, end)
            start_corner = self._resolve_endpoint(start)
            end_corner = self._resolve_endpoint(end)
            wall = self.floorplan.new_wall(start_corner, end_corner)
            wall.wall_type = wall_type
            self.floorplan.update()
        logger.info("Added wall {} ({} rooms)", wall.id, len(self.floorplan.get_rooms()))
        return wall

    def _check_endpoints(self, start: str | CornerPosition, end: str | CornerPosition) -> None:
        """Validate both endpoints before anything is created."""
        new_ids = []
        for endpoint in (start, end):
            if isinstance(endpoint, str):
                self.get_corner(endpoint)
            elif endpoint.id is not None:
                if self.floorplan.find_corner(endpoint.id) is not None:
                    raise InvalidOperationError(
                        f"Corner id {endpoint.id} is already in use",
                        details={"corner_id": endpoint.id},
                    )
                new_ids.append(endpoint.id)

        if isinstance(start, str) or isinstance(end, str):
            same = start == end
        else:
            same = (start.x, start.y) == (end.x, end.y) or len(set(new_ids)) < len(new_ids)
        if same:
            raise InvalidOperationError(
                "Wall would start and end at the same corner",
                details={"start": str(start), "end": str(end)},
            )

    def _resolve_endpoint(self, endpoint: str | CornerPosition) -> Corner:
        if isinstance(endpoint, str):
            return self.get_corner(endpoint)
        return self.floorplan.new_corner(endpoint.x, endpoint.y, endpoint.id)

    def move_corner(self, corner_id: str, x: float, y: float, snap: bool = True) -> tuple[Corner, bool]:
        """
        Move a corner as a drag would, optionally snapping to its neighbours' axes.

        Returns the corner and whether it merged with another corner or wall.
        """
        with self._lock:
            corner = self.get_corner(corner_id)
            merged = corner.move(x, y)
            if snap:
                corner.snap_to_axis(self.planner_params.snap_tolerance)
            self.floorplan.update()
        return corner, merged

    def move_wall(self, wall_id: str, dx: float, dy: float, snap: bool = True) -> Wall:
        with self._lock:
            wall = self.get_wall(wall_id)
            wall.relative_move(dx, dy)
            if snap and not wall.removed:
                wall.snap_to_axis(self.planner_params.snap_tolerance)
            self.floorplan.update()
        return wall

    def delete_corner(self, corner_id: str) -> None:
        with self._lock:
            self.get_corner(corner_id).remove_all()
            self.floorplan.update()
        logger.info("Deleted corner {}", corner_id)

    def delete_wall(self, wall_id: str) -> None:
        with self._lock:
            self.get_wall(wall_id).remove()
            self.floorplan.update()
        logger.info("Deleted wall {}", wall_id)

    def set_room_texture(self, room_id: str, url: str, scale: float) -> Room:
        with self._lock:
            room = self.get_room(room_id)
            room.set_texture(url, True, scale)
        return room
