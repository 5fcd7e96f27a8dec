"""YouTube OAuth credential ORM model."""

from datetime import datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from vodtube.models.base import Base, TimestampMixin, UUIDMixin


class YouTubeCredential(Base, UUIDMixin, TimestampMixin):
    """OAuth2 token pair for the YouTube Data API.

    Only the first row is used; the application operates a single YouTube
    account.

    Attributes:
        access_token: OAuth2 access token
        refresh_token: OAuth2 refresh token
        token_type: Token type, normally "Bearer"
        expiry: Access token expiration time
    """

    __tablename__ = "youtube_credentials"

    access_token: Mapped[str] = mapped_column(Text, nullable=False)
    refresh_token: Mapped[str] = mapped_column(Text, nullable=False)
    token_type: Mapped[str] = mapped_column(String(20), nullable=False, default="Bearer")
    expiry: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    def __repr__(self) -> str:
        """String representation without token values."""
        return f"<YouTubeCredential(id={self.id}, expiry={self.expiry})>"


__all__ = [
    "YouTubeCredential",
]
