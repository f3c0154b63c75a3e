"""Async SQLAlchemy engine and session factory helpers."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine


def create_session_factory(database_url: str) -> async_sessionmaker[AsyncSession]:
    """Create a reusable async session factory for the provided database URL."""

    return async_sessionmaker(create_engine(database_url), expire_on_commit=False)


def create_engine(database_url: str) -> AsyncEngine:
    """Create an async engine; pre-ping keeps revocation lookups off dead connections."""

    return create_async_engine(database_url, pool_pre_ping=True)
