from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

import bcrypt
import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from config import settings
from services.db import User, get_session

_LOG = logging.getLogger(__name__)

_ALGO = "HS256"
_bearer = HTTPBearer(auto_error=False)


# ───────── passwords ─────────────────────────────────────────────────
def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=10)).decode("ascii")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("ascii"))
    except ValueError:
        _LOG.warning("stored password hash is malformed")
        return False


# ───────── tokens ────────────────────────────────────────────────────
def create_token(user_id: int, ttl_minutes: int | None = None) -> str:
    ttl = settings.token_ttl_minutes if ttl_minutes is None else ttl_minutes
    exp = datetime.now(timezone.utc) + timedelta(minutes=ttl)
    payload = {"sub": str(user_id), "exp": exp}
    return jwt.encode(payload, settings.jwt_secret, algorithm=_ALGO)


def verify_token(token: str) -> int:
    """Return the user id stored in `token`; raises jwt.InvalidTokenError."""
    payload = jwt.decode(token, settings.jwt_secret, algorithms=[_ALGO])
    try:
        return int(payload["sub"])
    except (KeyError, TypeError, ValueError) as exc:
        raise jwt.InvalidTokenError("token has no usable subject") from exc


# ───────── FastAPI dependency ────────────────────────────────────────
async def get_current_user(
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
    db: AsyncSession = Depends(get_session),
) -> User:
    unauthorized = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if creds is None:
        raise unauthorized
    try:
        user_id = verify_token(creds.credentials)
    except jwt.InvalidTokenError as exc:
        _LOG.info("rejected token: %s", exc)
        raise unauthorized from exc

    user = await db.get(User, user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return user
