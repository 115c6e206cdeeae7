"""FastAPI route definitions."""

from __future__ import annotations
from typing import Any

from fastapi import APIRouter, Body, status

from blueprint.models import SerializedFloorplan
from blueprint.services.floorplan_service import FloorplanService
from blueprint.settings import get_settings
from blueprint.api.schemas import (
    BoundsInfo, CornerInfo, CornerMove, LoadResponse,
    MoveResult, RoomInfo, TextureUpdate, WallCreate, WallInfo,
)

router = APIRouter()

# Shared service instance
_settings = get_settings()
_service = FloorplanService(_settings.floorplan, _settings.planner)


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/floorplan", response_model=SerializedFloorplan, response_model_by_alias=True)
async def get_floorplan() -> SerializedFloorplan:
    """Current floorplan in its persisted shape."""
    return _service.save()


@router.put("/floorplan", response_model=LoadResponse)
async def put_floorplan(data: dict[str, Any] = Body(...)) -> LoadResponse:
    """Replace the floorplan. Malformed data leaves an empty plan."""
    loaded = _service.load(data)
    return LoadResponse(
        loaded=loaded,
        corners=len(_service.corners()),
        walls=len(_service.walls()),
        rooms=len(_service.rooms()),
    )


@router.get("/rooms", response_model=list[RoomInfo])
async def list_rooms() -> list[RoomInfo]:
    return [RoomInfo.from_room(room) for room in _service.rooms()]


@router.put("/rooms/{room_id}/texture", response_model=RoomInfo)
async def set_room_texture(room_id: str, request: TextureUpdate) -> RoomInfo:
    room = _service.set_room_texture(room_id, request.url, request.scale)
    return RoomInfo.from_room(room)


@router.get("/walls", response_model=list[WallInfo])
async def list_walls() -> list[WallInfo]:
    return [WallInfo.from_wall(wall) for wall in _service.walls()]


@router.get("/bounds", response_model=BoundsInfo)
async def get_bounds() -> BoundsInfo:
    return BoundsInfo.from_bounds(_service.bounds())


@router.get("/corners", response_model=list[CornerInfo])
async def list_corners() -> list[CornerInfo]:
    return [CornerInfo.from_corner(corner) for corner in _service.corners()]


@router.post("/corners/{corner_id}/move", response_model=MoveResult)
async def move_corner(corner_id: str, request: CornerMove) -> MoveResult:
    """Move a corner, merging it with whatever it lands on."""
    corner, merged = _service.move_corner(corner_id, request.x, request.y, request.snap)
    return MoveResult(
        corner=None if corner.removed else CornerInfo.from_corner(corner),
        merged=merged,
    )


@router.delete("/corners/{corner_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_corner(corner_id: str) -> None:
    _service.delete_corner(corner_id)


@router.post("/walls", response_model=WallInfo, status_code=status.HTTP_201_CREATED)
async def create_wall(request: WallCreate) -> WallInfo:
    wall = _service.add_wall(request.start, request.end, request.wall_type)
    return WallInfo.from_wall(wall)


@router.delete("/walls/{wall_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_wall(wall_id: str) -> None:
    _service.delete_wall(wall_id)
