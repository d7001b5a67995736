# api/v1/router.py
from fastapi import APIRouter

from . import auth, plan, prefs

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["Auth"])
api_router.include_router(plan.router, prefix="/plan", tags=["Plan"])

# preferences live *under* the user resource
api_router.include_router(
    prefs.router,
    prefix="/users",          # results in /users/me/preferences
    tags=["Preferences"],
)
