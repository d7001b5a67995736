"""
scripts/init_demo_user.py against a private in-memory database.
"""
import asyncio

from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import services.db as db
from scripts.init_demo_user import ensure_user
from services.auth import verify_password


def test_ensure_user_creates_once(monkeypatch):
    eng = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    monkeypatch.setattr(db, "_ENGINE", eng)

    async def _run():
        first = await ensure_user("Demo", "password")
        second = await ensure_user("demo", "other-password")
        async with async_sessionmaker(eng, expire_on_commit=False)() as s:
            user = await db.get_user_by_username(s, "demo")
        await eng.dispose()
        return first, second, user

    first, second, user = asyncio.run(_run())

    assert first is True
    assert second is False
    assert user.username == "demo"
    assert verify_password("password", user.password_hash)
