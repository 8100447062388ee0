"""Pydantic models for the order report login."""

from typing import Optional

from pydantic import BaseModel, Field


class Credential(BaseModel):
    """One configured login pair."""

    email: str = Field(..., description="Login email (matched case-insensitively)")
    password: str = Field(..., description="Login password (matched exactly)")


class LoginRequest(BaseModel):
    """Body of POST /order-report-auth."""

    email: Optional[str] = Field(None, description="Login email")
    password: Optional[str] = Field(None, description="Login password")

    class Config:
        extra = "ignore"
