import math

import pytest

from blueprint.core import utils
from blueprint.models import Point2D


def _pts(coords):
    return [Point2D(x=x, y=y) for x, y in coords]


def test_distance():
    assert utils.distance(0, 0, 3, 4) == pytest.approx(5.0)


def test_closest_point_on_line_clamps_to_segment():
    p = utils.closest_point_on_line(50, 20, 0, 0, 100, 0)
    assert (p.x, p.y) == pytest.approx((50, 0))

    p = utils.closest_point_on_line(-30, 10, 0, 0, 100, 0)
    assert (p.x, p.y) == pytest.approx((0, 0))

    p = utils.closest_point_on_line(130, 10, 0, 0, 100, 0)
    assert (p.x, p.y) == pytest.approx((100, 0))


def test_closest_point_on_zero_length_segment():
    p = utils.closest_point_on_line(5, 5, 1, 1, 1, 1)
    assert (p.x, p.y) == (1, 1)


def test_point_distance_from_line():
    assert utils.point_distance_from_line(50, 20, 0, 0, 100, 0) == pytest.approx(20)
    assert utils.point_distance_from_line(103, 4, 0, 0, 100, 0) == pytest.approx(5)


def test_angle_is_left_handed():
    # x axis to y axis is a negative turn with y pointing down
    assert utils.angle(1, 0, 0, 1) == pytest.approx(-math.pi / 2)
    assert utils.angle(0, 1, 1, 0) == pytest.approx(math.pi / 2)


def test_angle2pi_range():
    assert utils.angle2pi(1, 0, 0, 1) == pytest.approx(3 * math.pi / 2)
    assert utils.angle2pi(-1, 0, 1, 0) == pytest.approx(math.pi)
    assert 0 <= utils.angle2pi(1, 0, 1, 0) < 2 * math.pi


@pytest.mark.parametrize("coords", [
    [(0, 0), (100, 0), (100, 100), (0, 100)],
    [(0, 0), (50, 80), (120, 10)],
    [(10, 10), (40, 5), (60, 60), (20, 90), (-5, 40)],
])
def test_is_clockwise_flips_on_reversal(coords):
    loop = _pts(coords)
    assert utils.is_clockwise(list(reversed(loop))) is (not utils.is_clockwise(loop))


def test_is_clockwise_rejects_missing_points():
    with pytest.raises(ValueError):
        utils.is_clockwise([Point2D(x=0, y=0), None, Point2D(x=1, y=1)])


def test_line_line_intersect():
    assert utils.line_line_intersect(0, 0, 10, 10, 0, 10, 10, 0)
    assert not utils.line_line_intersect(0, 0, 10, 0, 0, 5, 10, 5)


def test_point_in_polygon():
    square = _pts([(10, 10), (20, 10), (20, 20), (10, 20)])
    assert utils.point_in_polygon(15, 12, square)
    assert not utils.point_in_polygon(25, 15, square)


def test_polygon_relations():
    outer = _pts([(10, 5), (100, 5), (100, 100), (10, 100)])
    inner = _pts([(20, 20), (30, 20), (30, 30), (20, 30)])
    crossing = _pts([(50, 50), (150, 50), (150, 150), (50, 150)])
    far = _pts([(200, 150), (210, 150), (210, 160)])

    assert utils.polygon_inside_polygon(inner, outer)
    assert not utils.polygon_polygon_intersect(inner, outer)
    assert utils.polygon_polygon_intersect(crossing, outer)
    assert utils.polygon_outside_polygon(far, outer)
    assert not utils.polygon_outside_polygon(inner, outer)


def test_cycle_and_unique():
    assert utils.cycle([1, 2, 3, 4], 1) == [2, 3, 4, 1]
    assert utils.cycle([1, 2, 3], 5) == [3, 1, 2]
    assert utils.cycle([], 3) == []
    assert utils.unique(["a", "b", "A", "c"], key=str.lower) == ["a", "b", "c"]


def test_remove_value_removes_every_occurrence():
    items = ["w1", "w2", "w1", "w3"]
    utils.remove_value(items, "w1")
    assert items == ["w2", "w3"]


def test_unit_conversions():
    assert utils.in_to_cm(1) == pytest.approx(2.54)
    assert utils.cm_to_in(2.54) == pytest.approx(1)
    assert utils.rad_to_deg(utils.deg_to_rad(30)) == pytest.approx(30)


def test_guid_is_unique():
    assert utils.guid() != utils.guid()
