"""
Point, vector and polygon predicates.

Every function works on plain coordinates or on any object exposing `x` and
`y` attributes. Angles follow the left-handed (screen, y-down) convention
used by the rest of the floorplan model.
"""

from __future__ import annotations
import math
import uuid
from typing import Any, Callable, Hashable, Sequence, TypeVar

from blueprint.models.geometry import Point2D

T = TypeVar("T")


def distance(x1: float, y1: float, x2: float, y2: float) -> float:
    """Euclidean distance between two points."""
    dx = x2 - x1
    dy = y2 - y1
    return math.sqrt(dx * dx + dy * dy)


def closest_point_on_line(
    x: float, y: float, x1: float, y1: float, x2: float, y2: float,
) -> Point2D:
    """
    Closest point to (x, y) on the segment (x1, y1)-(x2, y2).

    Returns one of the endpoints or a point in the middle of the segment.
    A zero-length segment projects onto its first point.
    """
    a = x - x1
    b = y - y1
    c = x2 - x1
    d = y2 - y1

    len_sq = c * c + d * d
    if len_sq == 0:
        return Point2D(x=x1, y=y1)
    param = (a * c + b * d) / len_sq

    if param < 0:
        return Point2D(x=x1, y=y1)
    if param > 1:
        return Point2D(x=x2, y=y2)
    return Point2D(x=x1 + param * c, y=y1 + param * d)


def point_distance_from_line(
    x: float, y: float, x1: float, y1: float, x2: float, y2: float,
) -> float:
    """Distance from a point to a segment."""
    p = closest_point_on_line(x, y, x1, y1, x2, y2)
    return distance(x, y, p.x, p.y)


def angle(x1: float, y1: float, x2: float, y2: float) -> float:
    """Signed angle from (x1, y1) to (x2, y2), in -pi..pi."""
    dot = x1 * x2 + y1 * y2
    det = x1 * y2 - y1 * x2
    # negated for the left-handed coordinate system
    return -math.atan2(det, dot)


def angle2pi(x1: float, y1: float, x2: float, y2: float) -> float:
    """Same as `angle` but in 0..2pi."""
    theta = angle(x1, y1, x2, y2)
    if theta < 0:
        theta += 2 * math.pi
    return theta


def is_clockwise(points: Sequence[Any]) -> bool:
    """Signed-area test for the orientation of a closed loop."""
    total = 0.0
    n = len(points)
    for i in range(n):
        p1 = points[i]
        p2 = points[(i + 1) % n]
        if p1 is None or p2 is None:
            raise ValueError("is_clockwise passed null points")
        total += (p2.x - p1.x) * (p1.y + p2.y)
    return total >= 0


def _ccw(p1: Any, p2: Any, p3: Any) -> bool:
    return (p3.y - p1.y) * (p2.x - p1.x) > (p2.y - p1.y) * (p3.x - p1.x)


def line_line_intersect(
    x1: float, y1: float, x2: float, y2: float,
    x3: float, y3: float, x4: float, y4: float,
) -> bool:
    """
    True if the two segments obviously cross.

    If an endpoint of one lies on the other segment the result is undefined.
    """
    p1 = Point2D(x=x1, y=y1)
    p2 = Point2D(x=x2, y=y2)
    p3 = Point2D(x=x3, y=y3)
    p4 = Point2D(x=x4, y=y4)
    return (
        _ccw(p1, p3, p4) != _ccw(p2, p3, p4)
        and _ccw(p1, p2, p3) != _ccw(p1, p2, p4)
    )


def _polygon_edges(corners: Sequence[Any]):
    n = len(corners)
    for i in range(n):
        yield corners[i], corners[(i + 1) % n]


def line_polygon_intersect(
    x1: float, y1: float, x2: float, y2: float, corners: Sequence[Any],
) -> bool:
    """True if the segment crosses any edge of the polygon."""
    for first, second in _polygon_edges(corners):
        if line_line_intersect(x1, y1, x2, y2, first.x, first.y, second.x, second.y):
            return True
    return False


def polygon_polygon_intersect(first_corners: Sequence[Any], second_corners: Sequence[Any]) -> bool:
    """
    True if any edges of the two polygons cross.

    A polygon lying entirely inside the other is not detected.
    """
    for first, second in _polygon_edges(first_corners):
        if line_polygon_intersect(first.x, first.y, second.x, second.y, second_corners):
            return True
    return False


def point_in_polygon(
    x: float, y: float, corners: Sequence[Any],
    start_x: float = 0.0, start_y: float = 0.0,
) -> bool:
    """
    Even-odd test casting a ray from (start_x, start_y) to (x, y).

    The start point must lie outside the polygon. If the ray passes exactly
    through a vertex the result is undefined.
    """
    intersects = 0
    for first, second in _polygon_edges(corners):
        if line_line_intersect(start_x, start_y, x, y, first.x, first.y, second.x, second.y):
            intersects += 1
    return intersects % 2 == 1


def polygon_inside_polygon(
    inside_corners: Sequence[Any], outside_corners: Sequence[Any],
    start_x: float = 0.0, start_y: float = 0.0,
) -> bool:
    """True if every corner of `inside_corners` lies in `outside_corners`."""
    return all(
        point_in_polygon(c.x, c.y, outside_corners, start_x, start_y)
        for c in inside_corners
    )


def polygon_outside_polygon(
    inside_corners: Sequence[Any], outside_corners: Sequence[Any],
    start_x: float = 0.0, start_y: float = 0.0,
) -> bool:
    """True if no corner of `inside_corners` lies in `outside_corners`."""
    return not any(
        point_in_polygon(c.x, c.y, outside_corners, start_x, start_y)
        for c in inside_corners
    )


def cycle(seq: Sequence[T], shift: int) -> list[T]:
    """Rotate a sequence left by `shift` positions."""
    items = list(seq)
    if not items:
        return items
    shift %= len(items)
    return items[shift:] + items[:shift]


def unique(seq: Sequence[T], key: Callable[[T], Hashable]) -> list[T]:
    """Keep the first element for each key."""
    seen: set[Hashable] = set()
    result: list[T] = []
    for item in seq:
        k = key(item)
        if k not in seen:
            seen.add(k)
            result.append(item)
    return result


def remove_value(items: list[T], value: T) -> None:
    """Remove every occurrence of `value` in place."""
    items[:] = [item for item in items if item != value]


def guid() -> str:
    return str(uuid.uuid4())


def in_to_cm(inches: float) -> float:
    return inches * 2.54


def cm_to_in(cm: float) -> float:
    return cm / 2.54


def deg_to_rad(deg: float) -> float:
    return deg * (math.pi / 180)


def rad_to_deg(rad: float) -> float:
    return rad * (180 / math.pi)
