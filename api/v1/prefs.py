from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from core.units import volume_to_ml, weight_to_kg
from services.auth import get_current_user
from services.db import User, get_session
from api.v1.schemas.prefs import PreferencesIn, PreferencesOut

router = APIRouter()
_LOG = logging.getLogger(__name__)

_PLAIN_FIELDS = ("theme", "accent_color", "weight_unit", "length_unit", "volume_unit")


# ───────────────────────── helpers ──────────────────────────
def serialize_preferences(row: User) -> PreferencesOut:
    """Convert SQLAlchemy row ➜ Pydantic schema, filling defaults for NULLs."""
    return PreferencesOut(
        theme=row.theme or "dark",
        accent_color=row.accent_color or "green",
        weight_unit=row.weight_unit or "kg",
        length_unit=row.length_unit or "m",
        volume_unit=row.volume_unit or "ml",
        weight_goal=row.weight_goal,
        steps_goal=row.steps_goal,
        water_goal=row.water_goal,
    )


# ───────────────────────── read ─────────────────────────────
@router.get(
    "/me/preferences",
    response_model=PreferencesOut,
    status_code=status.HTTP_200_OK,
)
async def get_preferences(user: User = Depends(get_current_user)) -> PreferencesOut:
    return serialize_preferences(user)


# ───────────────────────── update ───────────────────────────
@router.put(
    "/me/preferences",
    response_model=PreferencesOut,
    status_code=status.HTTP_200_OK,
)
async def update_preferences(
    body: PreferencesIn,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
) -> PreferencesOut:
    for name in _PLAIN_FIELDS:
        value = getattr(body, name)
        if value is not None:
            setattr(user, name, value)

    # goals are stored metric whatever unit the client typed them in
    if body.weight_goal is not None:
        user.weight_goal = weight_to_kg(body.weight_goal, body.weight_goal_unit)
    if body.steps_goal is not None:
        user.steps_goal = body.steps_goal
    if body.water_goal is not None:
        user.water_goal = volume_to_ml(body.water_goal, body.water_goal_unit)

    await db.commit()
    await db.refresh(user)
    _LOG.info("preferences updated for user %s", user.id)
    return serialize_preferences(user)
