"""Rooms: minimal counter-clockwise cycles of corners."""

from __future__ import annotations
from typing import TYPE_CHECKING, Iterator

from blueprint.core.events import Signal
from blueprint.core.exceptions import GraphCorruptionError
from blueprint.core.half_edge import HalfEdge
from blueprint.models.building import DEFAULT_FLOOR_TEXTURE, FloorTexture
from blueprint.models.geometry import Point2D

if TYPE_CHECKING:
    from blueprint.core.corner import Corner
    from blueprint.core.floorplan import Floorplan


class Room:
    """
    A room bounded by an ordered, counter-clockwise list of corners.

    Rooms are rebuilt from scratch on every floorplan update; anything that
    must survive a rebuild (the floor texture) is stored on the floorplan
    under the room's uuid.
    """

    def __init__(self, floorplan: Floorplan, corners: list[Corner]) -> None:
        self.floorplan = floorplan
        self.corners = corners
        self.edge_pointer: HalfEdge | None = None

        self.floor_changed = Signal()

        self._update_walls()

    def __repr__(self) -> str:
        return f"Room({self.get_uuid()!r})"

    def get_uuid(self) -> str:
        """Order- and rotation-independent id built from the corner ids."""
        return ",".join(sorted(corner.id for corner in self.corners))

    def get_texture(self) -> FloorTexture:
        texture = self.floorplan.get_floor_texture(self.get_uuid())
        return texture or DEFAULT_FLOOR_TEXTURE

    def set_texture(self, url: str, stretch: bool, scale: float) -> None:
        """Floor textures always stretch; `stretch` mirrors the wall API."""
        self.floorplan.set_floor_texture(self.get_uuid(), url, scale)
        self.floor_changed.fire()

    def edges(self) -> Iterator[HalfEdge]:
        """Walk the boundary ring once, starting at the edge pointer."""
        edge = self.edge_pointer
        while edge is not None:
            yield edge
            edge = edge.next
            if edge is self.edge_pointer:
                break

    def _update_walls(self) -> None:
        """Build the doubly linked half edge ring around this room."""
        prev_edge: HalfEdge | None = None
        first_edge: HalfEdge | None = None
        count = len(self.corners)

        for i, first_corner in enumerate(self.corners):
            second_corner = self.corners[(i + 1) % count]

            wall_to = first_corner.wall_to(second_corner)
            wall_from = first_corner.wall_from(second_corner)
            if wall_to is not None:
                edge = HalfEdge(self, wall_to, True)
            elif wall_from is not None:
                edge = HalfEdge(self, wall_from, False)
            else:
                raise GraphCorruptionError(
                    f"Room corners {first_corner.id} and {second_corner.id} are not connected by a wall",
                    details={"corner1": first_corner.id, "corner2": second_corner.id},
                )

            if first_edge is None:
                first_edge = edge
            else:
                edge.prev = prev_edge
                prev_edge.next = edge
                if i + 1 == count:
                    first_edge.prev = edge
                    edge.next = first_edge
            prev_edge = edge

        self.edge_pointer = first_edge

    @property
    def interior_corners(self) -> list[Point2D]:
        """Floor polygon inside the wall thickness, following current corner positions."""
        return [edge.interior_start() for edge in self.edges()]
