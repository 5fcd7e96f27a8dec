"""Database declarative base and helpers.

The async engine and session factory are created by the DI container
(see vodtube.core.container); this module only holds the ORM base and
engine-level utilities.
"""

import re
from typing import ClassVar

from sqlalchemy import MetaData, text
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlalchemy.orm import DeclarativeBase, declared_attr

from vodtube.core.logging import get_logger

logger = get_logger(__name__)

# ============================================
# Naming Convention
# ============================================
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=NAMING_CONVENTION)


class Base(DeclarativeBase):
    """Base class for all ORM models.

    Example:
        >>> class Channel(Base):
        ...     __tablename__ = "channels"
        ...     id: Mapped[int] = mapped_column(primary_key=True)
    """

    metadata: ClassVar[MetaData] = metadata

    @declared_attr.directive
    @classmethod
    def __tablename__(cls) -> str:
        """Generate snake_case table name from class name."""
        return re.sub(r"(?<!^)(?=[A-Z])", "_", cls.__name__).lower()


async def init_db(engine: AsyncEngine) -> None:
    """Create all tables.

    Meant for development and tests; production schemas are managed outside
    the application.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database initialized")


async def check_db_connection(engine: AsyncEngine) -> bool:
    """Check if database connection is healthy.

    Returns:
        True if connection is successful, False otherwise
    """
    try:
        async with engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error("Database health check failed", error=str(e), exc_info=True)
        return False
