from __future__ import annotations
from typing import Literal

from pydantic import BaseModel, Field

Theme = Literal["light", "dark"]
AccentColor = Literal["green", "blue", "orange", "purple"]
WeightUnit = Literal["kg", "lb"]
LengthUnit = Literal["m", "ft"]
VolumeUnit = Literal["ml", "fl oz"]


class PreferencesIn(BaseModel):
    """Partial update: fields left out are not touched."""
    theme: Theme | None = None
    accent_color: AccentColor | None = None
    weight_unit: WeightUnit | None = None
    length_unit: LengthUnit | None = None
    volume_unit: VolumeUnit | None = None

    weight_goal: float | None = Field(None, gt=0)
    weight_goal_unit: WeightUnit = "kg"
    steps_goal: int | None = Field(None, ge=0)
    water_goal: float | None = Field(None, gt=0)
    water_goal_unit: VolumeUnit = "ml"


class PreferencesOut(BaseModel):
    theme: Theme = "dark"
    accent_color: AccentColor = "green"
    weight_unit: WeightUnit = "kg"
    length_unit: LengthUnit = "m"
    volume_unit: VolumeUnit = "ml"
    weight_goal: float | None = None     # kg
    steps_goal: int | None = None
    water_goal: float | None = None      # ml
