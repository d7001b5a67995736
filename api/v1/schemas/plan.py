from __future__ import annotations
from typing import Literal

from pydantic import BaseModel, Field


class GoalOptionsIn(BaseModel):
    pace: str | None = None
    focus: str | None = None
    trainingExperience: str | None = None
    strengthTrainingDays: str | None = None
    fatGainTolerance: str | None = None
    workoutFrequency: str | None = None
    dietExperience: str | None = None


class PlanRequest(BaseModel):
    age: int = Field(..., gt=0, le=120)
    sex: Literal["male", "female"]
    height: float = Field(..., gt=0, le=300)       # cm; ft and m values are far below
    height_unit: Literal["cm", "ft", "m"] = "cm"
    weight: float = Field(..., gt=0, le=1000)      # lb ceiling covers kg too
    weight_unit: Literal["kg", "lb"] = "kg"
    activity_level: str | None = Field(None, examples=["moderately-active"])
    goal: str | None = Field(None, examples=["lose-weight", "maintain-health", "build-muscle"])
    goal_options: GoalOptionsIn = GoalOptionsIn()


class MacroOut(BaseModel):
    grams: int
    calories: int
    percentage: float


class MacrosOut(BaseModel):
    protein: MacroOut
    carbs: MacroOut
    fats: MacroOut


class PlanOut(BaseModel):
    bmr: int
    tdee: int
    target_calories: int
    calorie_adjustment: float
    macros: MacrosOut
    expected_rate_per_week: float
    notes: list[str]
