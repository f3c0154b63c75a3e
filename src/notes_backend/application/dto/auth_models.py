"""Pydantic models for registration, login, and logout HTTP contracts."""

from __future__ import annotations

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class StrictModel(BaseModel):
    """Base model with strict unknown-field rejection."""

    model_config = ConfigDict(extra="forbid")


class RegisterRequest(StrictModel):
    """HTTP request model for account registration."""

    name: str = Field(min_length=1)
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class RegisterResponse(StrictModel):
    """HTTP response model for successful registration."""

    message: str
    user_id: UUID


class LoginRequest(StrictModel):
    """HTTP request model for email/password login."""

    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class LoginResponse(StrictModel):
    """HTTP response model carrying the opaque bearer credential."""

    token: str
    token_type: Literal["bearer"] = "bearer"
    expires_at: datetime


class LogoutResponse(StrictModel):
    ok: bool
