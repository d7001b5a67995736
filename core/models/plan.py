from __future__ import annotations

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class MacroEntry:
    grams: int
    calories: int
    percentage: float      # share of target calories, 0–100, unrounded


@dataclass(frozen=True)
class MacroBreakdown:
    protein: MacroEntry
    carbs: MacroEntry
    fats: MacroEntry


@dataclass(frozen=True)
class NutritionPlan:
    bmr: int
    tdee: int
    target_calories: int
    calorie_adjustment: float
    macros: MacroBreakdown
    expected_rate_per_week: float   # kg/week, 2 decimals
    notes: tuple[str, ...]

    def as_dict(self) -> dict:
        out = asdict(self)
        out["notes"] = list(self.notes)
        return out
