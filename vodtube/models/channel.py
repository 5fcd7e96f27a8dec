"""Channel ORM model."""

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vodtube.models.base import Base, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from vodtube.models.vod import Vod
    from vodtube.models.youtube_config import YouTubeConfig


class Channel(Base, UUIDMixin, TimestampMixin):
    """Archived streaming channel.

    Attributes:
        name: Channel login name
        display_name: Human-readable name, used in titles and descriptions
        vods: Archived videos (1:N)
        youtube_config: YouTube upload settings (1:1, optional)
    """

    __tablename__ = "channels"

    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True, index=True)
    display_name: Mapped[str] = mapped_column(String(100), nullable=False)

    vods: Mapped[list["Vod"]] = relationship(
        "Vod", back_populates="channel", cascade="all, delete-orphan"
    )
    youtube_config: Mapped["YouTubeConfig"] = relationship(
        "YouTubeConfig",
        back_populates="channel",
        uselist=False,
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<Channel(id={self.id}, name={self.name})>"


__all__ = [
    "Channel",
]
