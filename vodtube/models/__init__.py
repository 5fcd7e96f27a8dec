"""ORM models.

Importing this package registers every model with the declarative base so
string relationship targets resolve.
"""

from vodtube.models.base import Base, TimestampMixin, UUIDMixin
from vodtube.models.channel import Channel
from vodtube.models.vod import Chapter, Vod
from vodtube.models.youtube_config import PlaylistMapping, PrivacyStatus, YouTubeConfig
from vodtube.models.youtube_credential import YouTubeCredential
from vodtube.models.youtube_upload import UploadStatus, YouTubeUpload

__all__ = [
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    "Channel",
    "Vod",
    "Chapter",
    "YouTubeConfig",
    "PlaylistMapping",
    "PrivacyStatus",
    "YouTubeUpload",
    "UploadStatus",
    "YouTubeCredential",
]
