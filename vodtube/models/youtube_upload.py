"""YouTube upload ORM model.

This module defines the YouTubeUpload model that tracks the upload lifecycle
of a single Vod.
"""

import enum
import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vodtube.models.base import Base, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from vodtube.models.vod import Vod


class UploadStatus(str, enum.Enum):
    """Upload lifecycle status."""

    PENDING = "pending"  # Queued, not started
    UPLOADING = "uploading"  # Transfer in progress or interrupted
    COMPLETED = "completed"  # Uploaded (terminal)
    FAILED = "failed"  # Last attempt failed, retryable


class YouTubeUpload(Base, UUIDMixin, TimestampMixin):
    """Upload of a Vod to YouTube.

    At most one record exists per Vod. `status` alone decides whether running
    the upload again is safe: completed uploads are skipped, every other
    status is retryable.

    Attributes:
        vod_id: Foreign key to vods table (one-to-one)
        youtube_video_id: YouTube video ID after upload
        youtube_url: Watch URL after upload
        status: Current upload status
        error_message: Error of the last failed attempt
        retry_count: Number of failed transfer attempts
        uploaded_at: Time of the first successful upload
        playlist_ids: Playlists the video was routed to
        vod: Associated Vod
    """

    __tablename__ = "youtube_uploads"

    vod_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("vods.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
        index=True,
    )

    # YouTube Info (populated after upload)
    youtube_video_id: Mapped[str | None] = mapped_column(String(50), index=True)
    youtube_url: Mapped[str | None] = mapped_column(String(200))

    # Status
    status: Mapped[UploadStatus] = mapped_column(
        String(20), nullable=False, default=UploadStatus.PENDING
    )
    error_message: Mapped[str | None] = mapped_column(Text)
    retry_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    uploaded_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    playlist_ids: Mapped[list[str] | None] = mapped_column(ARRAY(String))

    vod: Mapped["Vod"] = relationship("Vod", back_populates="youtube_upload")

    __table_args__ = (Index("idx_youtube_upload_status", "status"),)

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<YouTubeUpload(id={self.id}, vod_id={self.vod_id}, "
            f"youtube_id={self.youtube_video_id}, status={self.status})>"
        )


__all__ = [
    "YouTubeUpload",
    "UploadStatus",
]
