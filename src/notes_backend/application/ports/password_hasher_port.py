"""Port for one-way hashing of account passwords."""

from __future__ import annotations

from typing import Protocol


class PasswordHasherPort(Protocol):
    """Salted password hashing used at registration and login."""

    def hash_password(self, password: str) -> str:
        """Return a salted hash safe to persist in `users.password_hash`."""

    def verify_password(self, *, password: str, password_hash: str) -> bool:
        """Return False for a mismatch or an unreadable stored hash."""
