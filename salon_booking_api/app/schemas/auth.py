"""
Pydantic models for staff login.

Missing or non‑string credentials are read as empty strings so that
every failed login is answered the same way (401), whichever field
is wrong.
"""

from typing import Any

from pydantic import BaseModel, Field, field_validator


class LoginRequest(BaseModel):
    username: str = Field("", examples=["jessa"])
    password: str = Field("", examples=["strongpassword"])

    @field_validator("username", "password", mode="before")
    @classmethod
    def _blank_unless_string(cls, value: Any) -> str:
        return value if isinstance(value, str) else ""


class LoginResponse(BaseModel):
    success: bool = True
    token: str
    username: str
    role: str
