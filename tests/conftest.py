from __future__ import annotations

import pytest

from blueprint.core.floorplan import Floorplan


def build_loop(floorplan: Floorplan, points, ids=None):
    """Create corners at `points` and walls joining them in order, closing the loop."""
    ids = ids or [None] * len(points)
    corners = [floorplan.new_corner(x, y, cid) for (x, y), cid in zip(points, ids)]
    walls = [
        floorplan.new_wall(corners[i], corners[(i + 1) % len(corners)])
        for i in range(len(corners))
    ]
    floorplan.update()
    return corners, walls


RECTANGLE = [(0, 0), (100, 0), (100, 100), (0, 100)]


@pytest.fixture
def floorplan() -> Floorplan:
    return Floorplan()


@pytest.fixture
def rectangle(floorplan):
    """Corners A-B-C-D and walls AB, BC, CD, DA of a 100x100 room."""
    return build_loop(floorplan, RECTANGLE, ids=["A", "B", "C", "D"])
