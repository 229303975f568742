"""Request bodies for the JSON API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class LoginRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    email: str = Field(min_length=1)


class SubscribeRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    # A missing session is an auth failure, not a malformed body
    session: str | None = None
    ticker: str = Field(min_length=1)
