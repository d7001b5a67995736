"""
core/models/profile.py
────────────────────────────────────────────────────────────────────────
Input record for the nutrition-plan calculator.

Every enum field may be ``None`` which means "not answered"; the
calculator substitutes its documented default in that case.  Goal
options are modelled as one base class (cross-cutting fields) plus one
subclass per goal.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Mapping, TypeVar

E = TypeVar("E", bound=Enum)


# ──────────────────────────────────────────────────────────────────────
#  Enumerations
# ──────────────────────────────────────────────────────────────────────
class Sex(str, Enum):
    male = "male"
    female = "female"


class ActivityLevel(str, Enum):
    sedentary = "sedentary"
    lightly_active = "lightly-active"
    moderate = "moderate"
    very_active = "very-active"
    athlete = "athlete"


class Goal(str, Enum):
    lose_weight = "lose_weight"
    maintain_health = "maintain_health"
    build_muscle = "build_muscle"


class Pace(str, Enum):
    slow = "slow"
    moderate = "moderate"
    fast = "fast"
    aggressive = "aggressive"


class Experience(str, Enum):
    beginner = "beginner"
    intermediate = "intermediate"
    advanced = "advanced"


class WorkoutFrequency(str, Enum):
    low = "0-1"
    medium = "2-3"
    high = "4-6"


class FatGainTolerance(str, Enum):
    minimal = "minimal"
    moderate = "moderate"


def parse_enum(enum: type[E], raw: Any) -> E | None:
    """Return the member whose value is `raw`, or None if missing/unknown."""
    if raw is None:
        return None
    if isinstance(raw, enum):
        return raw
    try:
        return enum(str(raw).strip())
    except ValueError:
        return None


# plausibility ceilings; anything above is a typo or a unit mix-up
_BIOMETRIC_LIMITS = {"age": 150, "height_m": 3.0, "weight_kg": 700.0}


class InvalidProfileError(ValueError):
    """Raised when age, height or weight are missing, not positive or implausibly large."""


# ──────────────────────────────────────────────────────────────────────
#  Goal options (one base + one variant per goal)
# ──────────────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class GoalOptions:
    goal: ClassVar[Goal | None] = None

    workout_frequency: WorkoutFrequency | None = None
    diet_experience: Experience | None = None


@dataclass(frozen=True)
class LoseWeightOptions(GoalOptions):
    goal: ClassVar[Goal | None] = Goal.lose_weight

    pace: Pace | None = None


@dataclass(frozen=True)
class MaintainHealthOptions(GoalOptions):
    goal: ClassVar[Goal | None] = Goal.maintain_health

    focus: str | None = None


@dataclass(frozen=True)
class BuildMuscleOptions(GoalOptions):
    goal: ClassVar[Goal | None] = Goal.build_muscle

    training_experience: Experience | None = None
    fat_gain_tolerance: FatGainTolerance | None = None
    strength_training_days: str | None = None   # informational only


def goal_options_from_dict(goal: Goal | None, raw: Mapping[str, Any] | None) -> GoalOptions:
    """Build the variant for `goal` from a loose camelCase options bag."""
    raw = raw or {}
    common = dict(
        workout_frequency=parse_enum(WorkoutFrequency, raw.get("workoutFrequency")),
        diet_experience=parse_enum(Experience, raw.get("dietExperience")),
    )
    if goal is Goal.lose_weight:
        return LoseWeightOptions(pace=parse_enum(Pace, raw.get("pace")), **common)
    if goal is Goal.maintain_health:
        return MaintainHealthOptions(focus=raw.get("focus") or None, **common)
    if goal is Goal.build_muscle:
        return BuildMuscleOptions(
            training_experience=parse_enum(Experience, raw.get("trainingExperience")),
            fat_gain_tolerance=parse_enum(FatGainTolerance, raw.get("fatGainTolerance")),
            strength_training_days=raw.get("strengthTrainingDays"),
            **common,
        )
    return GoalOptions(**common)


# ──────────────────────────────────────────────────────────────────────
#  Profile
# ──────────────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class ProfileInput:
    age: int
    sex: Sex
    height_m: float
    weight_kg: float
    activity_level: ActivityLevel | None = None
    goal_options: GoalOptions = GoalOptions()

    def __post_init__(self) -> None:
        for name, upper in _BIOMETRIC_LIMITS.items():
            value = getattr(self, name)
            if value is None or not math.isfinite(value) or not 0 < value <= upper:
                raise InvalidProfileError(
                    f"{name} must be a positive number up to {upper}, got {value!r}"
                )

    @property
    def goal(self) -> Goal | None:
        return self.goal_options.goal

    @property
    def height_cm(self) -> float:
        return self.height_m * 100

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "ProfileInput":
        """
        Accept the loose record shape used by the onboarding flow::

            {"age": 30, "sex": "male", "heightMeters": 1.8, "weightKg": 80,
             "activityLevel": "moderate", "goal": "build_muscle",
             "goalOptions": {"trainingExperience": "beginner", ...}}
        """
        sex = parse_enum(Sex, raw.get("sex"))
        if sex is None:
            raise InvalidProfileError(f"sex must be 'male' or 'female', got {raw.get('sex')!r}")
        goal = parse_enum(Goal, raw.get("goal"))
        return cls(
            age=raw.get("age"),
            sex=sex,
            height_m=raw.get("heightMeters"),
            weight_kg=raw.get("weightKg"),
            activity_level=parse_enum(ActivityLevel, raw.get("activityLevel")),
            goal_options=goal_options_from_dict(goal, raw.get("goalOptions")),
        )
