from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from config import settings
from services.auth import create_token, get_current_user, hash_password, verify_password
from services.db import User, create_user, get_session, get_user_by_username
from api.v1.prefs import serialize_preferences
from api.v1.schemas import Credentials, DemoUserOut, TokenOut, UserMe, UserOut

router = APIRouter()
_LOG = logging.getLogger(__name__)


# ───────────────────────── login ────────────────────────────
@router.post("/login", response_model=TokenOut)
async def login(
    body: Credentials,
    db: AsyncSession = Depends(get_session),
) -> TokenOut:
    user = await get_user_by_username(db, body.username)
    if user is None or not verify_password(body.password, user.password_hash):
        _LOG.info("failed login for %r", body.username)
        raise HTTPException(status_code=401, detail="Invalid username or password")

    return TokenOut(
        access_token=create_token(user.id),
        user=UserOut.model_validate(user, from_attributes=True),
    )


# ───────────────────────── register ─────────────────────────
@router.post("/register", response_model=UserOut, status_code=status.HTTP_201_CREATED)
async def register(
    body: Credentials,
    db: AsyncSession = Depends(get_session),
) -> UserOut:
    if await get_user_by_username(db, body.username):
        raise HTTPException(status_code=409, detail="User already exists")

    try:
        user = await create_user(db, body.username, hash_password(body.password))
    except IntegrityError as exc:
        # a concurrent request took the username between lookup and insert
        await db.rollback()
        raise HTTPException(status_code=409, detail="User already exists") from exc
    return UserOut.model_validate(user, from_attributes=True)


# ───────────────────────── demo account ─────────────────────
@router.post("/init-demo", response_model=DemoUserOut)
async def init_demo(
    response: Response,
    db: AsyncSession = Depends(get_session),
) -> DemoUserOut:
    existing = await get_user_by_username(db, settings.demo_username)
    if existing is not None:
        response.status_code = status.HTTP_200_OK
        return DemoUserOut(
            message="Demo user already exists",
            user=UserOut.model_validate(existing, from_attributes=True),
        )

    user = await create_user(db, settings.demo_username, hash_password(settings.demo_password))
    response.status_code = status.HTTP_201_CREATED
    return DemoUserOut(
        message="Demo user created successfully",
        user=UserOut.model_validate(user, from_attributes=True),
    )


# ───────────────────────── me ───────────────────────────────
@router.get("/me", response_model=UserMe)
async def me(user: User = Depends(get_current_user)) -> UserMe:
    return UserMe(id=user.id, username=user.username, preferences=serialize_preferences(user))
