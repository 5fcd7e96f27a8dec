"""Pytest configuration and fixtures.

This module provides common fixtures used across all tests.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from vodtube.core.logging import setup_logging

# Setup logging for tests
setup_logging()


@pytest.fixture
def anyio_backend() -> str:
    """Specify backend for anyio.

    Returns:
        Backend name
    """
    return "asyncio"


@pytest.fixture
def mock_db_session_factory():
    """Create a mock async session factory and the session it yields.

    Returns:
        Tuple of (factory, session)
    """
    session = AsyncMock()
    session.get = AsyncMock(return_value=None)
    session.execute = AsyncMock()
    session.add = MagicMock()
    session.delete = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()

    factory = MagicMock()
    factory.return_value.__aenter__ = AsyncMock(return_value=session)
    factory.return_value.__aexit__ = AsyncMock(return_value=False)
    return factory, session


@pytest.fixture
def scalar_result():
    """Build mock `session.execute` results for scalar_one_or_none()."""

    def _make(value) -> MagicMock:
        result = MagicMock()
        result.scalar_one_or_none.return_value = value
        return result

    return _make
