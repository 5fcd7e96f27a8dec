"""Vod and Chapter ORM models.

A Vod is an archived stream video. Chapters mark the segments of a Vod and
carry the category (usually a game name) that was live during the segment.
"""

import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vodtube.models.base import Base, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from vodtube.models.channel import Channel
    from vodtube.models.youtube_upload import YouTubeUpload


class Vod(Base, UUIDMixin, TimestampMixin):
    """Archived stream video.

    Immutable once archived, apart from its YouTube upload association.

    Attributes:
        channel_id: Foreign key to channels table
        title: Stream title
        streamed_at: When the stream took place
        duration: Length in seconds
        video_path: Path to the archived video file
        channel: Owning channel
        chapters: Chapters in chronological order
        youtube_upload: YouTube upload record (one-to-one, optional)
    """

    __tablename__ = "vods"

    channel_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("channels.id", ondelete="CASCADE"), nullable=False, index=True
    )

    title: Mapped[str] = mapped_column(Text, nullable=False)
    streamed_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    duration: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    video_path: Mapped[str] = mapped_column(String(500), nullable=False)

    channel: Mapped["Channel"] = relationship("Channel", back_populates="vods")
    chapters: Mapped[list["Chapter"]] = relationship(
        "Chapter",
        back_populates="vod",
        order_by="Chapter.start",
        cascade="all, delete-orphan",
    )
    youtube_upload: Mapped["YouTubeUpload"] = relationship(
        "YouTubeUpload", back_populates="vod", uselist=False
    )

    __table_args__ = (Index("idx_vod_channel_streamed", "channel_id", "streamed_at"),)

    def __repr__(self) -> str:
        """String representation."""
        return f"<Vod(id={self.id}, channel_id={self.channel_id}, title={self.title[:30]!r})>"


class Chapter(Base, UUIDMixin, TimestampMixin):
    """Segment of a Vod.

    Attributes:
        vod_id: Foreign key to vods table
        start: Start offset in seconds
        end: End offset in seconds
        type: Category label (e.g. game name)
        title: Optional human title, preferred over type in chapter markers
    """

    __tablename__ = "chapters"

    vod_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("vods.id", ondelete="CASCADE"), nullable=False, index=True
    )

    start: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    end: Mapped[int | None] = mapped_column(Integer)
    type: Mapped[str] = mapped_column(String(200), nullable=False, default="")
    title: Mapped[str | None] = mapped_column(String(200))

    vod: Mapped["Vod"] = relationship("Vod", back_populates="chapters")

    def __repr__(self) -> str:
        """String representation."""
        return f"<Chapter(vod_id={self.vod_id}, start={self.start}, type={self.type!r})>"


__all__ = [
    "Vod",
    "Chapter",
]
