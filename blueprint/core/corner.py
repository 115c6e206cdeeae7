"""Corners: the vertices of the floorplan graph."""

from __future__ import annotations
import logging
from typing import TYPE_CHECKING

from blueprint.core import utils
from blueprint.core.events import Signal
from blueprint.models.geometry import Point2D

if TYPE_CHECKING:
    from blueprint.core.floorplan import Floorplan
    from blueprint.core.wall import Wall

logger = logging.getLogger(__name__)


class Corner:
    """
    A point shared by one or more walls.

    Incident walls are held by id in two lists: walls starting here and walls
    ending here. The owning Floorplan resolves the ids. A corner whose last
    wall is detached removes itself.
    """

    def __init__(self, floorplan: Floorplan, x: float, y: float, corner_id: str | None = None) -> None:
        self.floorplan = floorplan
        self.x = float(x)
        self.y = float(y)
        self.id = corner_id or utils.guid()

        self._wall_starts: list[str] = []
        self._wall_ends: list[str] = []
        self._removed = False

        self.moved = Signal()    # (x, y)
        self.deleted = Signal()  # (corner)

    def __repr__(self) -> str:
        return f"Corner(id={self.id!r}, x={self.x:.2f}, y={self.y:.2f})"

    # -- incidence -----------------------------------------------------------

    @property
    def wall_starts(self) -> list[Wall]:
        return [self.floorplan.wall_by_id(wid) for wid in self._wall_starts]

    @property
    def wall_ends(self) -> list[Wall]:
        return [self.floorplan.wall_by_id(wid) for wid in self._wall_ends]

    @property
    def walls(self) -> list[Wall]:
        return self.wall_starts + self.wall_ends

    @property
    def removed(self) -> bool:
        return self._removed

    def attach_start(self, wall: Wall) -> None:
        self._wall_starts.append(wall.id)

    def attach_end(self, wall: Wall) -> None:
        self._wall_ends.append(wall.id)

    def detach_wall(self, wall: Wall) -> None:
        """Detach a wall; the corner removes itself once nothing is attached."""
        utils.remove_value(self._wall_starts, wall.id)
        utils.remove_value(self._wall_ends, wall.id)
        if not self._wall_starts and not self._wall_ends:
            self.remove()

    def is_wall_connected(self, wall: Wall) -> bool:
        return wall.id in self._wall_starts or wall.id in self._wall_ends

    def adjacent_corners(self) -> list[Corner]:
        """Far endpoints of every incident wall, start walls first."""
        result = [wall.end for wall in self.wall_starts]
        result.extend(wall.start for wall in self.wall_ends)
        return result

    def wall_to(self, corner: Corner) -> Wall | None:
        """The wall running from this corner to `corner`, if any."""
        for wall in self.wall_starts:
            if wall.end is corner:
                return wall
        return None

    def wall_from(self, corner: Corner) -> Wall | None:
        """The wall running from `corner` to this corner, if any."""
        for wall in self.wall_ends:
            if wall.start is corner:
                return wall
        return None

    def wall_to_or_from(self, corner: Corner) -> Wall | None:
        return self.wall_to(corner) or self.wall_from(corner)

    # -- geometry ------------------------------------------------------------

    def position(self) -> Point2D:
        return Point2D(x=self.x, y=self.y)

    def distance_from(self, x: float, y: float) -> float:
        return utils.distance(x, y, self.x, self.y)

    def distance_from_wall(self, wall: Wall) -> float:
        return wall.distance_from(self.x, self.y)

    def distance_from_corner(self, corner: Corner) -> float:
        return self.distance_from(corner.x, corner.y)

    # -- editing -------------------------------------------------------------

    def move(self, new_x: float, new_y: float) -> bool:
        """
        Move to a new position and merge with whatever it now touches.

        Returns True if a merge happened. The corner may have been merged away
        or removed when this returns.
        """
        self.x = float(new_x)
        self.y = float(new_y)
        merged = self.merge_with_intersected()
        self.moved.fire(self.x, self.y)

        for wall in self.walls:
            wall.fire_moved()
        return merged

    def relative_move(self, dx: float, dy: float) -> None:
        self.move(self.x + dx, self.y + dy)

    def snap_to_axis(self, tolerance: float) -> dict[str, bool]:
        """Align x and/or y with an adjacent corner closer than `tolerance`."""
        snapped = {"x": False, "y": False}
        for corner in self.adjacent_corners():
            if abs(corner.x - self.x) < tolerance:
                self.x = corner.x
                snapped["x"] = True
            if abs(corner.y - self.y) < tolerance:
                self.y = corner.y
                snapped["y"] = True
        return snapped

    def remove(self) -> None:
        """Fire the delete notification. Idempotent."""
        if self._removed:
            return
        self._removed = True
        self.deleted.fire(self)

    def remove_all(self) -> None:
        """Remove every incident wall, then this corner."""
        for wall in self.walls:
            wall.remove()
        self.remove()

    def merge_with_intersected(self) -> bool:
        """
        Merge with the first corner, then the first unconnected wall, lying
        within the corner tolerance.

        Returns True if a merge happened. The floorplan is updated afterwards.
        """
        if self._removed:
            return False
        tolerance = self.floorplan.params.corner_tolerance

        for corner in self.floorplan.get_corners():
            if corner is not self and self.distance_from_corner(corner) < tolerance:
                self._combine_with_corner(corner)
                return True

        for wall in self.floorplan.get_walls():
            if self.distance_from_wall(wall) < tolerance and not self.is_wall_connected(wall):
                self._split_wall(wall)
                return True

        return False

    def _combine_with_corner(self, corner: Corner) -> None:
        logger.debug("Merging corner %s into %s", corner.id, self.id)
        self.x = corner.x
        self.y = corner.y
        reparented = []
        for wall in reversed(corner.wall_starts):
            if wall.reattach_start(self):
                reparented.append(wall)
        for wall in reversed(corner.wall_ends):
            if wall.reattach_end(self):
                reparented.append(wall)
        corner.remove_all()
        self.remove_duplicate_walls()
        self.floorplan.update()

        for wall in reparented:
            if not wall.removed:
                wall.fire_moved()

    def _split_wall(self, wall: Wall) -> None:
        logger.debug("Splitting wall %s at corner %s", wall.id, self.id)
        start, end = wall.start, wall.end
        p = utils.closest_point_on_line(self.x, self.y, start.x, start.y, end.x, end.y)
        self.x = p.x
        self.y = p.y
        # the far end keeps a wall throughout, so it is never orphaned
        new_wall = self.floorplan.new_wall(self, end, notify=False)
        wall.reattach_end(self)
        self.remove_duplicate_walls()
        self.floorplan.update()

        if not new_wall.removed:
            self.floorplan.wall_added.fire(new_wall)
        if not wall.removed:
            wall.fire_moved()

    def remove_duplicate_walls(self) -> None:
        """Drop zero-length walls and all but one wall to each far corner."""
        far_corners: set[str] = set()
        for wall in reversed(self.wall_starts):
            if wall.removed:
                continue
            end = wall.end
            if end is self or end.id in far_corners:
                wall.remove()
            else:
                far_corners.add(end.id)

        for wall in reversed(self.wall_ends):
            if wall.removed:
                continue
            start = wall.start
            if start is self or start.id in far_corners:
                wall.remove()
            else:
                far_corners.add(start.id)
