"""Persisted floorplan shape, as exchanged with the serialization collaborator."""

from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field

from .building import DEFAULT_WALL_TEXTURE, FloorTexture, WallTexture, WallType


class SerializedCorner(BaseModel):
    x: float
    y: float


class SerializedWall(BaseModel):
    """Wall entry; corners are referenced by id."""
    model_config = ConfigDict(populate_by_name=True)

    corner1: str
    corner2: str
    front_texture: WallTexture = Field(
        default_factory=lambda: DEFAULT_WALL_TEXTURE.model_copy(), alias="frontTexture",
    )
    back_texture: WallTexture = Field(
        default_factory=lambda: DEFAULT_WALL_TEXTURE.model_copy(), alias="backTexture",
    )
    wall_type: WallType = Field(WallType.BLANK, alias="wallType")


class SerializedFloorplan(BaseModel):
    """
    Whole-plan snapshot.

    `newFloorTextures` maps room ids (sorted, comma-joined corner ids) to
    floor textures. `wallTextures` and `floorTextures` are legacy keys that
    are written empty and ignored on load.
    """
    model_config = ConfigDict(populate_by_name=True)

    corners: dict[str, SerializedCorner]
    walls: list[SerializedWall]
    wall_textures: list = Field(default_factory=list, alias="wallTextures")
    floor_textures: dict = Field(default_factory=dict, alias="floorTextures")
    new_floor_textures: dict[str, FloorTexture] = Field(
        default_factory=dict, alias="newFloorTextures",
    )
