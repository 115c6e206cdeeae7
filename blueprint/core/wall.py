"""Walls: the edges of the floorplan graph."""

from __future__ import annotations
from typing import TYPE_CHECKING, Any

from blueprint.core import utils
from blueprint.core.events import Signal
from blueprint.core.exceptions import GraphCorruptionError
from blueprint.models.building import DEFAULT_WALL_TEXTURE, WallTexture, WallType

if TYPE_CHECKING:
    from blueprint.core.corner import Corner
    from blueprint.core.floorplan import Floorplan
    from blueprint.core.half_edge import HalfEdge


class Wall:
    """
    A wall segment between two corners.

    The front side faces the plane traversed from start to end, the back side
    the reverse. Endpoints are held by corner id and resolved through the
    owning Floorplan.
    """

    def __init__(self, floorplan: Floorplan, start: Corner, end: Corner, wall_id: str | None = None) -> None:
        self.floorplan = floorplan
        self._start_id = start.id
        self._end_id = end.id
        self.id = wall_id or f"{start.id},{end.id}"

        params = floorplan.params
        self.thickness = params.wall_thickness
        self.height = params.wall_height
        self.wall_type = WallType.BLANK
        self.front_texture: WallTexture = DEFAULT_WALL_TEXTURE.model_copy()
        self.back_texture: WallTexture = DEFAULT_WALL_TEXTURE.model_copy()

        # Populated by Floorplan.update()
        self.front_edge: HalfEdge | None = None
        self.back_edge: HalfEdge | None = None
        self.orphan = False

        # Attached items, owned by the item collaborators
        self.items: list[Any] = []
        self.on_items: list[Any] = []

        self._removed = False
        self.moved = Signal()    # ()
        self.deleted = Signal()  # (wall)

        start.attach_start(self)
        end.attach_end(self)

    def __repr__(self) -> str:
        return f"Wall(id={self.id!r}, start={self._start_id!r}, end={self._end_id!r})"

    @property
    def start(self) -> Corner:
        return self.floorplan.corner_by_id(self._start_id)

    @start.setter
    def start(self, corner: Corner) -> None:
        if self.reattach_start(corner):
            self.fire_moved()

    @property
    def end(self) -> Corner:
        return self.floorplan.corner_by_id(self._end_id)

    @end.setter
    def end(self, corner: Corner) -> None:
        if self.reattach_end(corner):
            self.fire_moved()

    def reattach_start(self, corner: Corner) -> bool:
        """
        Move the start onto `corner` without notifying.

        Used by multi-step edits that fire `moved` once the graph is consistent
        again. Returns False if `corner` already is the start.
        """
        if corner.id == self._start_id:
            return False
        previous = self.start
        corner.attach_start(self)
        self._start_id = corner.id
        previous.detach_wall(self)
        return True

    def reattach_end(self, corner: Corner) -> bool:
        if corner.id == self._end_id:
            return False
        previous = self.end
        corner.attach_end(self)
        self._end_id = corner.id
        previous.detach_wall(self)
        return True

    @property
    def removed(self) -> bool:
        return self._removed

    @property
    def length(self) -> float:
        start, end = self.start, self.end
        return utils.distance(start.x, start.y, end.x, end.y)

    def opposite_corner(self, corner: Corner) -> Corner:
        if corner.id == self._start_id:
            return self.end
        if corner.id == self._end_id:
            return self.start
        raise GraphCorruptionError(
            f"Wall {self.id} does not connect to corner {corner.id}",
            details={"wall_id": self.id, "corner_id": corner.id},
        )

    def reset_front_back(self) -> None:
        self.front_edge = None
        self.back_edge = None
        self.orphan = False

    def relative_move(self, dx: float, dy: float) -> None:
        """Translate the whole wall; each endpoint may merge on the way."""
        start, end = self.start, self.end
        start.relative_move(dx, dy)
        end.relative_move(dx, dy)

    def snap_to_axis(self, tolerance: float) -> None:
        # start first: the end corner sees the snapped start position
        start, end = self.start, self.end
        start.snap_to_axis(tolerance)
        end.snap_to_axis(tolerance)

    def distance_from(self, x: float, y: float) -> float:
        start, end = self.start, self.end
        return utils.point_distance_from_line(x, y, start.x, start.y, end.x, end.y)

    def fire_moved(self) -> None:
        self.moved.fire()

    def remove(self) -> None:
        """Detach from both corners, then notify. Idempotent."""
        if self._removed:
            return
        self._removed = True
        start, end = self.start, self.end
        start.detach_wall(self)
        end.detach_wall(self)
        self.deleted.fire(self)
