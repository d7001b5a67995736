from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .prefs import PreferencesOut

# bcrypt only hashes the first 72 bytes and newer releases refuse longer input
MAX_PASSWORD_BYTES = 72


class Credentials(BaseModel):
    username: str = Field(..., min_length=3, max_length=30)
    password: str = Field(..., min_length=6, max_length=MAX_PASSWORD_BYTES)

    @field_validator("username")
    @classmethod
    def _normalise(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator("password")
    @classmethod
    def _fits_bcrypt(cls, v: str) -> str:
        if len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes when UTF-8 encoded")
        return v


class UserOut(BaseModel):
    id: int
    username: str

    model_config = ConfigDict(from_attributes=True)


class UserMe(UserOut):
    preferences: PreferencesOut


class TokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserOut


class DemoUserOut(BaseModel):
    success: bool = True
    message: str
    user: UserOut
