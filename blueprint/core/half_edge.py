"""
Half edges: one side of a wall as seen from a room.

Once rooms have been identified, every room walks its corner cycle and
creates one half edge per wall it borders. A wall bordering two rooms ends
up with both a front and a back half edge. Walls bordering no room receive an
unlinked pair (orphans) so they can still be drawn with thickness.

Each half edge knows the wall centerline and an offset of half the wall
thickness. The interior and exterior outlines are obtained by displacing the
centerline endpoints along the bisector of the angle formed with the
neighbouring half edge, which gives a miter join at every corner.
"""

from __future__ import annotations
import math
from typing import TYPE_CHECKING

from blueprint.core import utils
from blueprint.core.events import Signal
from blueprint.models.building import WallTexture
from blueprint.models.geometry import Point2D, Vector2D

if TYPE_CHECKING:
    from blueprint.core.corner import Corner
    from blueprint.core.room import Room
    from blueprint.core.wall import Wall


class HalfEdge:
    """One directed traversal of a wall along a room boundary."""

    def __init__(self, room: Room | None, wall: Wall, front: bool) -> None:
        self.room = room
        self.wall = wall
        self.front = front

        self.offset = wall.thickness / 2.0
        self.height = wall.height

        self.next: HalfEdge | None = None
        self.prev: HalfEdge | None = None

        self.redraw = Signal()

        if self.front:
            wall.front_edge = self
        else:
            wall.back_edge = self

    def __repr__(self) -> str:
        side = "front" if self.front else "back"
        return f"HalfEdge(wall={self.wall.id!r}, {side})"

    def get_start(self) -> Corner:
        return self.wall.start if self.front else self.wall.end

    def get_end(self) -> Corner:
        return self.wall.end if self.front else self.wall.start

    def get_opposite_edge(self) -> HalfEdge | None:
        return self.wall.back_edge if self.front else self.wall.front_edge

    # -- textures ------------------------------------------------------------

    def get_texture(self) -> WallTexture:
        return self.wall.front_texture if self.front else self.wall.back_texture

    def set_texture(self, url: str, stretch: bool, scale: float) -> None:
        texture = WallTexture(url=url, stretch=stretch, scale=scale)
        if self.front:
            self.wall.front_texture = texture
        else:
            self.wall.back_texture = texture
        self.redraw.fire()

    # -- outline -------------------------------------------------------------

    def interior_start(self) -> Point2D:
        vec = self.half_angle_vector(self.prev, self)
        return self.get_start().position() + vec

    def interior_end(self) -> Point2D:
        vec = self.half_angle_vector(self, self.next)
        return self.get_end().position() + vec

    def exterior_start(self) -> Point2D:
        vec = self.half_angle_vector(self.prev, self)
        return self.get_start().position() - vec

    def exterior_end(self) -> Point2D:
        vec = self.half_angle_vector(self, self.next)
        return self.get_end().position() - vec

    def interior_center(self) -> Point2D:
        return self.interior_start().lerp(self.interior_end(), 0.5)

    def interior_distance(self) -> float:
        return self.interior_start().distance_to(self.interior_end())

    def distance_to(self, x: float, y: float) -> float:
        """Distance from a point to the interior side of the wall."""
        start, end = self.interior_start(), self.interior_end()
        return utils.point_distance_from_line(x, y, start.x, start.y, end.x, end.y)

    def corners(self) -> list[Point2D]:
        """Footprint quad: interior start/end, then exterior end/start."""
        return [
            self.interior_start(), self.interior_end(),
            self.exterior_end(), self.exterior_start(),
        ]

    def half_angle_vector(self, v1: HalfEdge | None, v2: HalfEdge | None) -> Vector2D:
        """
        Displacement from the elbow shared by `v1` and `v2` to the interior
        vertex of their miter join.

        `v1` ends where `v2` starts. A missing neighbour is replaced by the
        other edge extrapolated by its own length, i.e. a straight
        continuation.
        """
        if v1 is None and v2 is not None:
            s, e = v2.get_start(), v2.get_end()
            v1_start = (s.x - (e.x - s.x), s.y - (e.y - s.y))
            v1_end = (s.x, s.y)
            v2_start = (s.x, s.y)
            v2_end = (e.x, e.y)
        elif v1 is not None and v2 is None:
            s, e = v1.get_start(), v1.get_end()
            v1_start = (s.x, s.y)
            v1_end = (e.x, e.y)
            v2_start = (e.x, e.y)
            v2_end = (e.x + (e.x - s.x), e.y + (e.y - s.y))
        elif v1 is not None and v2 is not None:
            s1, e1 = v1.get_start(), v1.get_end()
            s2, e2 = v2.get_start(), v2.get_end()
            v1_start, v1_end = (s1.x, s1.y), (e1.x, e1.y)
            v2_start, v2_end = (s2.x, s2.y), (e2.x, e2.y)
        else:
            raise ValueError("half_angle_vector needs at least one edge")

        # Angle between the reversed first wall and the forward second wall.
        # For a room traversed counter-clockwise this is the interior angle.
        theta = utils.angle2pi(
            v1_start[0] - v1_end[0], v1_start[1] - v1_end[1],
            v2_end[0] - v1_end[0], v2_end[1] - v1_end[1],
        )

        cs = math.cos(theta / 2.0)
        sn = math.sin(theta / 2.0)

        direction = Vector2D(x=v2_end[0] - v2_start[0], y=v2_end[1] - v2_start[1])
        rotated = direction.rotated(cs, sn)
        mag = rotated.length()
        if mag < 1e-10:
            return Vector2D(x=0.0, y=0.0)

        # theta in [0, 2pi) keeps sn >= 0; theta -> 0 or 2pi folds the walls
        # back onto each other, so the miter length is capped
        sn = max(sn, 1.0 / self.wall.floorplan.params.miter_limit)

        desired_mag = self.offset / sn
        return rotated * (desired_mag / mag)
