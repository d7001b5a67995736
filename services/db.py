"""
services/db.py
────────────────────────────────────────────────────────────────────────
* Async SQLAlchemy v2 setup
* `users` table (credentials + display / unit preferences + goals)
* Small DAO helpers used by routers / scripts
"""
from __future__ import annotations

from datetime import datetime
from typing import AsyncGenerator

from sqlalchemy import DateTime, Float, Integer, String, func, select
from sqlalchemy.ext.asyncio import (
    AsyncAttrs,
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import Mapped, declarative_base, mapped_column

from config import settings

# ───────── connection helper ────────────────────────────────────────
_ENGINE: AsyncEngine | None = None


def engine() -> AsyncEngine:
    global _ENGINE
    if _ENGINE is None:
        _ENGINE = create_async_engine(settings.database_url, pool_pre_ping=True)
    return _ENGINE


# ───────── declarative base ──────────────────────────────────────────
Base = declarative_base(cls=AsyncAttrs)


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)
    username: Mapped[str] = mapped_column(String(30), unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String)

    # display / unit preferences (NULL ➜ default applied on read)
    theme: Mapped[str | None] = mapped_column(String)
    accent_color: Mapped[str | None] = mapped_column(String)
    weight_unit: Mapped[str | None] = mapped_column(String)
    length_unit: Mapped[str | None] = mapped_column(String)
    volume_unit: Mapped[str | None] = mapped_column(String)

    # goals, always stored metric
    weight_goal: Mapped[float | None] = mapped_column(Float)   # kg
    steps_goal: Mapped[int | None] = mapped_column(Integer)
    water_goal: Mapped[float | None] = mapped_column(Float)    # ml

    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.now(), onupdate=func.now()
    )


# ───────── DAO helpers ───────────────────────────────────────────────
async def get_user_by_username(db: AsyncSession, username: str) -> User | None:
    return (
        await db.execute(select(User).where(User.username == username.strip().lower()))
    ).scalar_one_or_none()


async def create_user(db: AsyncSession, username: str, password_hash: str) -> User:
    user = User(username=username.strip().lower(), password_hash=password_hash)
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


async def init_models(eng: AsyncEngine | None = None) -> None:
    """Create missing tables (no migrations in this project)."""
    async with (eng or engine()).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


# ───────── session helper ────────────────────────────────────────────

async def get_session() -> AsyncGenerator[AsyncSession, None]:
    async_session = async_sessionmaker(engine(), expire_on_commit=False)
    async with async_session() as session:
        yield session
