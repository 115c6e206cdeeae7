"""
Interactive floorplan editing.

The Floorplanner is a headless state machine: a front end forwards pointer
and key events as method calls (canvas-relative pixel coordinates) and
listens to `redraw` to repaint.
"""

from __future__ import annotations
import logging
from enum import IntEnum

from blueprint.core.corner import Corner
from blueprint.core.events import Signal
from blueprint.core.floorplan import Floorplan
from blueprint.core.wall import Wall
from blueprint.models import PlannerParams

logger = logging.getLogger(__name__)


class FloorplannerMode(IntEnum):
    MOVE = 0
    DRAW = 1
    DELETE = 2
    ADDPOST = 3
    DELETEPOST = 4


class Viewport:
    """Screen <-> model transform: a pan origin in pixels and a scale."""

    def __init__(self, pixels_per_cm: float) -> None:
        self.pixels_per_cm = pixels_per_cm
        self.origin_x = 0.0
        self.origin_y = 0.0

    @property
    def cm_per_pixel(self) -> float:
        return 1.0 / self.pixels_per_cm

    def to_world_x(self, sx: float) -> float:
        return (sx + self.origin_x) * self.cm_per_pixel

    def to_world_y(self, sy: float) -> float:
        return (sy + self.origin_y) * self.cm_per_pixel

    def to_screen_x(self, x: float) -> float:
        return x * self.pixels_per_cm - self.origin_x

    def to_screen_y(self, y: float) -> float:
        return y * self.pixels_per_cm - self.origin_y

    def pan(self, dx: float, dy: float) -> None:
        self.origin_x += dx
        self.origin_y += dy


class Floorplanner:
    """
    Editing session over a Floorplan.

    MOVE drags corners and walls (or pans on empty space), DRAW places
    corners joined by walls, DELETE removes what is under the pointer.
    ADDPOST and DELETEPOST are selectable for the post tools of the front
    end and do not edit the graph here.
    """

    def __init__(self, floorplan: Floorplan, params: PlannerParams | None = None) -> None:
        self.floorplan = floorplan
        self.params = params or PlannerParams()
        self.viewport = Viewport(self.params.pixels_per_cm)

        self.mode = FloorplannerMode.MOVE
        self.active_wall: Wall | None = None
        self.active_corner: Corner | None = None

        # drawing state
        self.target_x = 0.0
        self.target_y = 0.0
        self.last_node: Corner | None = None

        self.view_width = 0.0
        self.view_height = 0.0

        self.mode_reset = Signal()  # (mode)
        self.redraw = Signal()      # ()

        self._mouse_down = False
        self._mouse_moved = False
        # model coordinates
        self.mouse_x = 0.0
        self.mouse_y = 0.0
        # canvas pixels
        self._raw_mouse_x = 0.0
        self._raw_mouse_y = 0.0
        self._last_x = 0.0
        self._last_y = 0.0

        self.set_mode(FloorplannerMode.MOVE)
        floorplan.room_loaded.connect(self.reset)

    # -- coordinates ---------------------------------------------------------

    def convert_x(self, x: float) -> float:
        """Model x to canvas x."""
        return self.viewport.to_screen_x(x)

    def convert_y(self, y: float) -> float:
        """Model y to canvas y."""
        return self.viewport.to_screen_y(y)

    def reset_origin(self) -> None:
        """Pan so that the floorplan is centred in the view."""
        center = self.floorplan.get_center2()
        self.viewport.origin_x = center.x * self.viewport.pixels_per_cm - self.view_width / 2.0
        self.viewport.origin_y = center.y * self.viewport.pixels_per_cm - self.view_height / 2.0

    # -- modes ---------------------------------------------------------------

    def set_mode(self, mode: FloorplannerMode) -> None:
        self._end_draw_session()
        self.mode = FloorplannerMode(mode)
        self.mode_reset.fire(self.mode)
        self._update_target()

    def _end_draw_session(self) -> None:
        """Forget the last drawn corner; a session's lone first corner is dropped."""
        node = self.last_node
        self.last_node = None
        if node is not None and not node.removed and not node.walls:
            logger.debug("Dropping unconnected corner %s", node.id)
            node.remove()
            if self.active_corner is node:
                self.active_corner = None
            self.redraw.fire()

    def reset(self, view_width: float | None = None, view_height: float | None = None) -> None:
        if view_width is not None:
            self.view_width = view_width
        if view_height is not None:
            self.view_height = view_height
        self.set_mode(FloorplannerMode.MOVE)
        self.reset_origin()
        self.redraw.fire()

    def escape_key(self) -> None:
        self.set_mode(FloorplannerMode.MOVE)

    def _update_target(self) -> None:
        """Target is the pointer, snapped to the last drawn corner's axes."""
        tolerance = self.params.snap_tolerance
        if self.mode == FloorplannerMode.DRAW and self.last_node is not None:
            if abs(self.mouse_x - self.last_node.x) < tolerance:
                self.target_x = self.last_node.x
            else:
                self.target_x = self.mouse_x
            if abs(self.mouse_y - self.last_node.y) < tolerance:
                self.target_y = self.last_node.y
            else:
                self.target_y = self.mouse_y
        else:
            self.target_x = self.mouse_x
            self.target_y = self.mouse_y
        self.redraw.fire()

    # -- pointer events ------------------------------------------------------

    def mouse_down(self) -> None:
        self._mouse_down = True
        self._mouse_moved = False
        self._last_x = self._raw_mouse_x
        self._last_y = self._raw_mouse_y

        if self.mode == FloorplannerMode.DELETE:
            if self.active_corner is not None:
                logger.debug("Deleting corner %s", self.active_corner.id)
                self.active_corner.remove_all()
                self._after_delete()
            elif self.active_wall is not None:
                logger.debug("Deleting wall %s", self.active_wall.id)
                self.active_wall.remove()
                self._after_delete()
            else:
                self.set_mode(FloorplannerMode.MOVE)

    def _after_delete(self) -> None:
        self.active_corner = None
        self.active_wall = None
        self.floorplan.update()
        self.redraw.fire()

    def mouse_move(self, x: float, y: float) -> None:
        """Pointer moved to canvas position (x, y)."""
        self._mouse_moved = True
        self._raw_mouse_x = x
        self._raw_mouse_y = y
        self.mouse_x = self.viewport.to_world_x(x)
        self.mouse_y = self.viewport.to_world_y(y)

        if self.mode == FloorplannerMode.DRAW or (
            self.mode == FloorplannerMode.MOVE and self._mouse_down
        ):
            self._update_target()

        if self.mode != FloorplannerMode.DRAW and not self._mouse_down:
            self._update_hover()

        # panning
        if self._mouse_down and self.active_corner is None and self.active_wall is None:
            self.viewport.pan(self._last_x - x, self._last_y - y)
            self._last_x = x
            self._last_y = y
            self.redraw.fire()

        # dragging
        if self.mode == FloorplannerMode.MOVE and self._mouse_down:
            tolerance = self.params.snap_tolerance
            if self.active_corner is not None:
                self.active_corner.move(self.mouse_x, self.mouse_y)
                self.active_corner.snap_to_axis(tolerance)
            elif self.active_wall is not None:
                cm_per_pixel = self.viewport.cm_per_pixel
                self.active_wall.relative_move(
                    (x - self._last_x) * cm_per_pixel,
                    (y - self._last_y) * cm_per_pixel,
                )
                if not self.active_wall.removed:
                    self.active_wall.snap_to_axis(tolerance)
                self._last_x = x
                self._last_y = y
            self.redraw.fire()

    def _update_hover(self) -> None:
        """Corners under the pointer take precedence over walls."""
        hover_corner = self.floorplan.overlapped_corner(self.mouse_x, self.mouse_y)
        hover_wall = self.floorplan.overlapped_wall(self.mouse_x, self.mouse_y)
        changed = False
        if hover_corner is not self.active_corner:
            self.active_corner = hover_corner
            changed = True
        if self.active_corner is None:
            if hover_wall is not self.active_wall:
                self.active_wall = hover_wall
                changed = True
        else:
            self.active_wall = None
        if changed:
            self.redraw.fire()

    def mouse_up(self) -> None:
        self._mouse_down = False

        if self.mode == FloorplannerMode.DRAW and not self._mouse_moved:
            self._commit_corner()

    def _commit_corner(self) -> None:
        corner = self.floorplan.new_corner(self.target_x, self.target_y)
        if self.last_node is not None:
            self.floorplan.new_wall(self.last_node, corner)
        merged = corner.merge_with_intersected()
        if not merged:
            self.floorplan.update()

        if merged and self.last_node is not None:
            logger.debug("Closed a loop at corner %s, leaving draw mode", corner.id)
            self.set_mode(FloorplannerMode.MOVE)
        elif not corner.removed:
            self.last_node = corner

    def mouse_leave(self) -> None:
        self._mouse_down = False

    # -- convenience ---------------------------------------------------------

    def click(self, x: float, y: float) -> None:
        """Pointer move, press and release at one canvas position."""
        self.mouse_move(x, y)
        self.mouse_down()
        self.mouse_up()
