"""YouTube upload configuration ORM models.

This module defines the per-channel YouTube upload settings and the playlist
mappings that route uploaded videos into playlists by category.
"""

import enum
import uuid
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vodtube.models.base import Base, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from vodtube.models.channel import Channel


class PrivacyStatus(str, enum.Enum):
    """YouTube video privacy status."""

    PUBLIC = "public"  # Visible to everyone
    PRIVATE = "private"  # Only visible to owner
    UNLISTED = "unlisted"  # Visible to anyone with the link


class YouTubeConfig(Base, UUIDMixin, TimestampMixin):
    """Per-channel YouTube upload settings.

    Templates support the placeholders {title}, {channel} and {date}; the
    description template additionally supports {duration}.

    Attributes:
        channel_id: Foreign key to channels table (one-to-one)
        upload_enabled: Upload finished VODs of this channel automatically
        default_privacy: Privacy status for uploaded videos
        default_category_id: YouTube category ID (20 = Gaming)
        title_template: Template for video title
        description_template: Template for video description
        tags: Default tags for uploaded videos
        add_chapters: Append chapter markers to the description
        notify_subscribers: Notify subscribers on upload
        channel: Owning channel
        playlist_mappings: Category to playlist rules, highest priority first
    """

    __tablename__ = "youtube_configs"

    channel_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("channels.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
        index=True,
    )

    upload_enabled: Mapped[bool] = mapped_column(nullable=False, default=False)
    default_privacy: Mapped[PrivacyStatus] = mapped_column(
        String(20), nullable=False, default=PrivacyStatus.PRIVATE
    )
    default_category_id: Mapped[str] = mapped_column(String(10), nullable=False, default="20")

    # Templates
    title_template: Mapped[str | None] = mapped_column(Text)
    description_template: Mapped[str | None] = mapped_column(Text)

    tags: Mapped[list[str] | None] = mapped_column(ARRAY(String))
    add_chapters: Mapped[bool] = mapped_column(nullable=False, default=True)
    notify_subscribers: Mapped[bool] = mapped_column(nullable=False, default=False)

    channel: Mapped["Channel"] = relationship("Channel", back_populates="youtube_config")
    playlist_mappings: Mapped[list["PlaylistMapping"]] = relationship(
        "PlaylistMapping",
        back_populates="config",
        order_by="desc(PlaylistMapping.priority)",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<YouTubeConfig(id={self.id}, channel_id={self.channel_id}, "
            f"upload_enabled={self.upload_enabled})>"
        )


class PlaylistMapping(Base, UUIDMixin, TimestampMixin):
    """Rule that routes videos with a matching category into a playlist.

    Attributes:
        config_id: Foreign key to youtube_configs table
        game_category: Category pattern, case-insensitive, may contain one '*'
        playlist_id: YouTube playlist ID
        playlist_name: Human-readable playlist name for reference
        priority: Higher is evaluated first
    """

    __tablename__ = "youtube_playlist_mappings"

    config_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("youtube_configs.id", ondelete="CASCADE"), nullable=False, index=True
    )

    game_category: Mapped[str] = mapped_column(String(200), nullable=False)
    playlist_id: Mapped[str] = mapped_column(String(100), nullable=False)
    playlist_name: Mapped[str | None] = mapped_column(String(200))
    priority: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    config: Mapped["YouTubeConfig"] = relationship(
        "YouTubeConfig", back_populates="playlist_mappings"
    )

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<PlaylistMapping(pattern={self.game_category!r}, "
            f"playlist_id={self.playlist_id}, priority={self.priority})>"
        )


__all__ = [
    "PrivacyStatus",
    "YouTubeConfig",
    "PlaylistMapping",
]
