"""Shared normalization helpers for user registration and login inputs."""

from __future__ import annotations


def normalize_user_email(*, email: str) -> str:
    """Normalize one user email and reject blank values."""

    normalized = email.strip().lower()
    if not normalized:
        raise ValueError("email cannot be blank")
    return normalized


def normalize_user_password(*, password: str) -> str:
    """Reject blank passwords while preserving the submitted value."""

    if not password.strip():
        raise ValueError("password cannot be blank")
    return password


def normalize_display_name(*, name: str) -> str:
    normalized = name.strip()
    if not normalized:
        raise ValueError("name cannot be blank")
    return normalized
