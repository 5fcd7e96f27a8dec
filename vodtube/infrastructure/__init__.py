"""External service clients (YouTube Data API, OAuth credentials, resumable transfer)."""

from vodtube.infrastructure.resumable_upload import ProgressReader, ResumableTransfer
from vodtube.infrastructure.youtube_api import UploadMetadata, UploadResult, YouTubeAPIClient
from vodtube.infrastructure.youtube_auth import YouTubeAuthClient

__all__ = [
    "ProgressReader",
    "ResumableTransfer",
    "UploadMetadata",
    "UploadResult",
    "YouTubeAPIClient",
    "YouTubeAuthClient",
]
