import pytest

from blueprint.core.floorplan import Floorplan
from blueprint.core.floorplanner import Floorplanner, FloorplannerMode, Viewport
from blueprint.models import PlannerParams

from conftest import RECTANGLE, build_loop


@pytest.fixture
def planner(floorplan):
    # one pixel per centimetre keeps screen and model coordinates equal
    return Floorplanner(floorplan, PlannerParams(pixels_per_cm=1.0))


@pytest.mark.parametrize("ppc, pan", [
    (15 / 30.48, (0, 0)),
    (1.0, (-120.5, 33.0)),
    (2.75, (400, -80)),
])
def test_viewport_round_trip(ppc, pan):
    viewport = Viewport(ppc)
    viewport.pan(*pan)
    for x, y in [(0, 0), (123.4, -56.7), (-1000, 2500)]:
        assert viewport.to_world_x(viewport.to_screen_x(x)) == pytest.approx(x)
        assert viewport.to_world_y(viewport.to_screen_y(y)) == pytest.approx(y)
        assert viewport.to_screen_x(viewport.to_world_x(x)) == pytest.approx(x)


def test_default_scale_is_fifteen_pixels_per_foot():
    planner = Floorplanner(Floorplan())
    assert planner.viewport.to_screen_x(30.48) == pytest.approx(15)


def test_set_mode_resets_drawing_and_notifies(planner, floorplan):
    modes = []
    planner.mode_reset.connect(modes.append)
    planner.set_mode(FloorplannerMode.DRAW)
    planner.click(10, 10)
    assert planner.last_node is not None

    planner.escape_key()

    assert planner.mode == FloorplannerMode.MOVE
    assert planner.last_node is None
    assert modes == [FloorplannerMode.DRAW, FloorplannerMode.MOVE]
    assert floorplan.get_corners() == []


def test_abandoned_first_corner_is_not_saved(planner, floorplan):
    planner.set_mode(FloorplannerMode.DRAW)
    planner.click(10, 10)
    planner.click(200, 10)
    planner.set_mode(FloorplannerMode.MOVE)

    assert len(floorplan.get_walls()) == 1
    assert len(floorplan.get_corners()) == 2

    planner.set_mode(FloorplannerMode.DRAW)
    planner.click(400, 400)
    planner.escape_key()

    assert len(floorplan.get_corners()) == 2
    assert len(floorplan.save_floorplan().corners) == 2
    assert all(corner.walls for corner in floorplan.get_corners())


def test_draw_closes_loop_into_room(planner, floorplan):
    planner.set_mode(FloorplannerMode.DRAW)
    for x, y in [(0, 0), (100, 0), (100, 100), (0, 100)]:
        planner.click(x, y)

    assert planner.mode == FloorplannerMode.DRAW
    assert len(floorplan.get_walls()) == 3
    assert floorplan.get_rooms() == []

    planner.click(2, 3)

    assert planner.mode == FloorplannerMode.MOVE
    assert planner.last_node is None
    assert len(floorplan.get_corners()) == 4
    assert len(floorplan.get_walls()) == 4
    assert len(floorplan.get_rooms()) == 1


def test_draw_snaps_to_last_corner_axes(planner, floorplan):
    planner.set_mode(FloorplannerMode.DRAW)
    planner.click(0, 0)
    planner.click(100, 12)

    corner = planner.last_node
    assert (corner.x, corner.y) == (100, 0)


def test_delete_mode_removes_hovered_corner(planner, floorplan):
    build_loop(floorplan, RECTANGLE, ids=["A", "B", "C", "D"])
    planner.set_mode(FloorplannerMode.DELETE)

    planner.click(1, 1)

    assert floorplan.find_corner("A") is None
    assert len(floorplan.get_walls()) == 2
    assert floorplan.get_rooms() == []
    assert planner.active_corner is None
    assert planner.mode == FloorplannerMode.DELETE


def test_delete_mode_removes_hovered_wall(planner, floorplan):
    build_loop(floorplan, RECTANGLE, ids=["A", "B", "C", "D"])
    planner.set_mode(FloorplannerMode.DELETE)

    planner.click(50, 2)

    assert floorplan.find_wall("A,B") is None
    assert len(floorplan.get_corners()) == 4
    assert floorplan.get_rooms() == []


def test_delete_on_empty_space_returns_to_move(planner, floorplan):
    build_loop(floorplan, RECTANGLE)
    planner.set_mode(FloorplannerMode.DELETE)

    planner.click(50, 50)

    assert planner.mode == FloorplannerMode.MOVE
    assert len(floorplan.get_walls()) == 4


def test_hover_prefers_corners_over_walls(planner, floorplan):
    build_loop(floorplan, RECTANGLE, ids=["A", "B", "C", "D"])

    planner.mouse_move(2, 1)
    assert planner.active_corner.id == "A"
    assert planner.active_wall is None

    planner.mouse_move(50, 1)
    assert planner.active_corner is None
    assert planner.active_wall.id == "A,B"


def test_drag_corner_onto_corner(planner, floorplan):
    build_loop(floorplan, RECTANGLE, ids=["A", "B", "C", "D"])

    planner.mouse_move(0, 100)
    planner.mouse_down()
    planner.mouse_move(0, 50)
    planner.mouse_move(1, 2)
    planner.mouse_up()

    assert floorplan.find_corner("A") is None
    assert len(floorplan.get_corners()) == 3
    assert len(floorplan.get_walls()) == 3
    for wall in floorplan.get_walls():
        assert wall.start is not wall.end
    assert len(floorplan.get_rooms()) == 1


def test_drag_wall(planner, floorplan):
    build_loop(floorplan, RECTANGLE, ids=["A", "B", "C", "D"])

    planner.mouse_move(50, 100)
    planner.mouse_down()
    planner.mouse_move(50, 140)
    planner.mouse_up()

    c, d = floorplan.find_corner("C"), floorplan.find_corner("D")
    assert (c.y, d.y) == (140, 140)
    assert (c.x, d.x) == (100, 0)


def test_drag_empty_space_pans(planner, floorplan):
    planner.mouse_move(10, 10)
    planner.mouse_down()
    planner.mouse_move(30, 25)
    planner.mouse_up()

    assert (planner.viewport.origin_x, planner.viewport.origin_y) == (-20, -15)


def test_reset_centres_floorplan_on_load(planner, floorplan):
    redraws = []
    planner.redraw.connect(lambda: redraws.append(True))
    planner.view_width, planner.view_height = 400, 300

    floorplan.load_floorplan({
        "corners": {"A": {"x": 0, "y": 0}, "B": {"x": 200, "y": 100}},
        "walls": [{"corner1": "A", "corner2": "B"}],
    })

    assert planner.convert_x(100) == pytest.approx(200)
    assert planner.convert_y(50) == pytest.approx(150)
    assert redraws
