"""Common type definitions for the application."""

from collections.abc import Callable

from sqlalchemy.ext.asyncio import AsyncSession

# Async session factory, e.g. an async_sessionmaker
SessionFactory = Callable[[], AsyncSession]

__all__ = [
    "SessionFactory",
]
