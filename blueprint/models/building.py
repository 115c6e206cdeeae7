"""Building element value types: wall kinds and surface textures."""

from __future__ import annotations
from enum import Enum
from pydantic import BaseModel


class WallType(str, Enum):
    BLANK = "blank"
    RAILING = "railing"


class WallTexture(BaseModel):
    """Texture applied to one side of a wall."""
    url: str
    stretch: bool = True
    scale: float = 0.0


class FloorTexture(BaseModel):
    """Texture applied to a room floor."""
    url: str
    scale: float


DEFAULT_WALL_TEXTURE = WallTexture(url="rooms/textures/wallmap.png", stretch=True, scale=0)
DEFAULT_FLOOR_TEXTURE = FloorTexture(url="rooms/textures/hardwood.png", scale=400)
