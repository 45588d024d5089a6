from __future__ import annotations

from pydantic import BaseModel, Field, ConfigDict


class LoginRequest(BaseModel):
    """Payload pentru /auth/login."""
    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1, max_length=200)

    model_config = ConfigDict(
        json_schema_extra={"examples": [{"username": "admin", "password": "pswadmin"}]}
    )
