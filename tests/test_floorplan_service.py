import pytest

from blueprint.core.exceptions import EntityNotFoundError, InvalidOperationError
from blueprint.models import CornerPosition, WallType
from blueprint.services.floorplan_service import FloorplanService


@pytest.fixture
def service():
    return FloorplanService()


@pytest.fixture
def room_service(service):
    service.add_wall(CornerPosition(x=0, y=0, id="A"), CornerPosition(x=100, y=0, id="B"))
    service.add_wall("B", CornerPosition(x=100, y=100, id="C"))
    service.add_wall("C", CornerPosition(x=0, y=100, id="D"))
    service.add_wall("D", "A")
    return service


def test_adding_walls_builds_rooms(room_service):
    assert len(room_service.rooms()) == 1
    assert room_service.get_room("A,B,C,D").get_uuid() == "A,B,C,D"


def test_unknown_ids_raise(service):
    with pytest.raises(EntityNotFoundError) as exc_info:
        service.get_corner("missing")
    assert exc_info.value.details == {"corner_id": "missing"}
    with pytest.raises(EntityNotFoundError):
        service.delete_wall("missing")
    with pytest.raises(EntityNotFoundError):
        service.set_room_texture("missing", "x.png", 1)


def test_add_wall_to_same_corner_is_invalid(service):
    service.add_wall(CornerPosition(x=0, y=0, id="A"), CornerPosition(x=100, y=0))
    with pytest.raises(InvalidOperationError):
        service.add_wall("A", "A")
    with pytest.raises(InvalidOperationError):
        service.add_wall(CornerPosition(x=5, y=5), CornerPosition(x=5, y=5))
    with pytest.raises(InvalidOperationError):
        service.add_wall(CornerPosition(x=5, y=5, id="E"), CornerPosition(x=50, y=5, id="E"))
    assert len(service.corners()) == 2


def test_add_wall_rejects_taken_or_unknown_ids_without_side_effects(service):
    service.add_wall(CornerPosition(x=0, y=0, id="A"), CornerPosition(x=100, y=0, id="B"))

    with pytest.raises(InvalidOperationError) as exc_info:
        service.add_wall(CornerPosition(x=5, y=5, id="A"), "B")
    assert exc_info.value.details == {"corner_id": "A"}
    with pytest.raises(EntityNotFoundError):
        service.add_wall(CornerPosition(x=0, y=50, id="C"), "missing")

    assert {c.id for c in service.corners()} == {"A", "B"}
    assert len(service.walls()) == 1


def test_corners_only_exist_with_walls(service):
    wall = service.add_wall(CornerPosition(x=0, y=0), CornerPosition(x=100, y=0))
    service.add_wall(wall.end.id, CornerPosition(x=100, y=100, id="C"))

    assert len(service.corners()) == 3
    assert all(corner.walls for corner in service.corners())


def test_add_wall_sets_type(service):
    wall = service.add_wall(
        CornerPosition(x=0, y=0, id="A"), CornerPosition(x=100, y=0, id="B"), WallType.RAILING,
    )
    assert wall.id == "A,B"
    assert wall.wall_type == WallType.RAILING
    assert wall.orphan


def test_move_corner_reports_merge(room_service):
    corner, merged = room_service.move_corner("D", 5, 5)
    assert merged
    assert corner.id == "D"
    assert len(room_service.corners()) == 3

    corner, merged = room_service.move_corner("C", 120, 140)
    assert not merged


def test_move_corner_snaps_when_asked(room_service):
    corner, _ = room_service.move_corner("C", 108, 150)
    assert corner.x == 100

    corner, _ = room_service.move_corner("C", 108, 150, snap=False)
    assert corner.x == 108


def test_move_wall(room_service):
    wall = room_service.move_wall("A,B", 0, -50)
    assert (wall.start.y, wall.end.y) == (-50, -50)
    assert len(room_service.rooms()) == 1


def test_delete_corner_and_wall(room_service):
    room_service.delete_wall("A,B")
    assert room_service.rooms() == []

    room_service.delete_corner("C")
    assert {c.id for c in room_service.corners()} == {"A", "D"}


def test_room_texture_survives_edits(room_service):
    room_service.set_room_texture("A,B,C,D", "tiles.png", 40)
    room_service.move_corner("C", 130, 130, snap=False)

    assert room_service.get_room("A,B,C,D").get_texture().url == "tiles.png"


def test_save_and_load(room_service):
    saved = room_service.save()

    other = FloorplanService()
    assert other.load(saved.model_dump(by_alias=True))
    assert len(other.walls()) == 4
    assert other.bounds().max_x == 100

    assert other.load({"corners": {}}) is False
    assert other.corners() == []
