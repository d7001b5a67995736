"""
core/onboarding.py
────────────────────────────────────────────────────────────────────────
Bridge between the onboarding questionnaire and the calculator.

The questionnaire uses its own answer ids ("moderately-active",
"lose-weight", …) and lets the user type height / weight in the unit
they prefer.  `to_profile()` turns one completed questionnaire into a
`ProfileInput` the calculator understands.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from core.models.profile import ProfileInput
from core.units import height_to_meters, weight_to_kg

ACTIVITY_MAP = {
    "sedentary": "sedentary",
    "lightly-active": "lightly-active",
    "moderately-active": "moderate",
    "very-active": "very-active",
    "extra-active": "athlete",
}
DEFAULT_ACTIVITY_ANSWER = "moderately-active"

GOAL_MAP = {
    "lose-weight": "lose_weight",
    "maintain-health": "maintain_health",
    "build-muscle": "build_muscle",
}


def map_activity_level(answer: str | None) -> str:
    return ACTIVITY_MAP.get(answer or DEFAULT_ACTIVITY_ANSWER, "moderate")


def map_goal(answer: str | None) -> str:
    answer = answer or ""
    return GOAL_MAP.get(answer, answer)


@dataclass
class OnboardingAnswers:
    age: int
    sex: str
    height: float
    weight: float
    height_unit: str = "cm"
    weight_unit: str = "kg"
    activity_level: str | None = None
    goal: str | None = None
    goal_options: dict[str, Any] = field(default_factory=dict)

    def to_profile(self) -> ProfileInput:
        return ProfileInput.from_dict(
            {
                "age": self.age,
                "sex": self.sex,
                "heightMeters": height_to_meters(self.height, self.height_unit),
                "weightKg": weight_to_kg(self.weight, self.weight_unit),
                "activityLevel": map_activity_level(self.activity_level),
                "goal": map_goal(self.goal),
                "goalOptions": self.goal_options,
            }
        )
