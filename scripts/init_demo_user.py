"""
scripts/init_demo_user.py
────────────────────────────────────────────────────────────────────────
Create the demo login (and the tables, if missing):

    python -m scripts.init_demo_user

Custom credentials:

    python -m scripts.init_demo_user --username alice --password s3cret!
"""
from __future__ import annotations

import asyncio
from argparse import ArgumentParser

from dotenv import load_dotenv
load_dotenv()

from sqlalchemy.ext.asyncio import async_sessionmaker

from config import settings
from services.auth import hash_password
from services.db import create_user, engine, get_user_by_username, init_models


async def ensure_user(username: str, password: str) -> bool:
    """Return True if the user was created, False if it already existed."""
    await init_models()
    async_session = async_sessionmaker(engine(), expire_on_commit=False)
    async with async_session() as db:
        existing = await get_user_by_username(db, username)
        if existing is not None:
            print(f"· {existing.username} already exists (id={existing.id})")
            return False

        user = await create_user(db, username, hash_password(password))
        print(f"✓ created {user.username} (id={user.id})")
        return True


# ───────────────────────────────
# CLI entrypoint
# ───────────────────────────────
async def _async_main() -> None:
    ap = ArgumentParser()
    ap.add_argument("--username", default=settings.demo_username)
    ap.add_argument("--password", default=settings.demo_password)
    args = ap.parse_args()

    if len(args.password) < 6:
        ap.error("password must be at least 6 characters")
    await ensure_user(args.username, args.password)


if __name__ == "__main__":  # pragma: no cover
    asyncio.run(_async_main())
