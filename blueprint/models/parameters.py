"""Floorplan and editor parameters."""

from __future__ import annotations
from pydantic import BaseModel, Field


class FloorplanParams(BaseModel):
    """Model-level constants, all lengths in centimetres."""
    wall_thickness: float = Field(10.0, gt=0.0)
    wall_height: float = Field(250.0, gt=0.0)
    corner_tolerance: float = Field(20.0, ge=0.0)   # Merge radius for corners and walls
    hit_tolerance: float = Field(10.0, ge=0.0)      # Hover radius for hit-testing
    miter_limit: float = Field(10.0, ge=1.0)        # Max miter length / half thickness


class PlannerParams(BaseModel):
    """Interactive editor parameters."""
    snap_tolerance: float = Field(25.0, ge=0.0)     # Axis snap distance while drawing/dragging
    pixels_per_cm: float = Field(15.0 / 30.48, gt=0.0)  # 15 px per foot
