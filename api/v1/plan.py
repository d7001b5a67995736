# api/v1/plan.py
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from core.nutrition_plan import NutritionPlanCalculator
from core.onboarding import OnboardingAnswers
from services.auth import get_current_user
from services.db import User
from api.v1.schemas import PlanOut, PlanRequest

router = APIRouter()
_calc = NutritionPlanCalculator()


@router.post("", response_model=PlanOut, status_code=status.HTTP_200_OK)
def compute_plan(
    body: PlanRequest,
    user: User = Depends(get_current_user),
) -> PlanOut:
    """
    Final onboarding step: answers (in the user's units) ➜ daily plan.
    Percentages are rounded to one decimal for display.
    """
    answers = OnboardingAnswers(
        age=body.age,
        sex=body.sex,
        height=body.height,
        height_unit=body.height_unit,
        weight=body.weight,
        weight_unit=body.weight_unit,
        activity_level=body.activity_level,
        goal=body.goal,
        goal_options=body.goal_options.model_dump(exclude_none=True),
    )
    try:
        plan = _calc.compute(answers.to_profile())
    except ValueError as exc:   # InvalidProfileError or unknown unit
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    out = plan.as_dict()
    for macro in out["macros"].values():
        macro["percentage"] = round(macro["percentage"], 1)
    return PlanOut.model_validate(out)
