"""YouTube Data API client.

This module provides a high-level client for the YouTube operations the
uploader needs: resumable video upload, metadata update and playlist insertion.
"""

import asyncio
import time
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from googleapiclient.errors import HttpError

from vodtube.core.exceptions import CredentialError, VodTubeError, YouTubeAPIError
from vodtube.core.logging import get_logger
from vodtube.infrastructure.resumable_upload import (
    DEFAULT_CHUNK_SIZE,
    ProgressCallback,
    ResumableTransfer,
)
from vodtube.infrastructure.youtube_auth import YouTubeAuthClient

logger = get_logger(__name__)

DEFAULT_WATCH_URL_BASE = "https://www.youtube.com/watch?v="

# YouTube snippet limits
MAX_TITLE_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 5000


@dataclass
class UploadMetadata:
    """Metadata for YouTube video upload.

    Attributes:
        title: Video title (max 100 chars)
        description: Video description (max 5000 chars)
        tags: List of video tags
        category_id: YouTube category ID
        privacy_status: Privacy setting (public, private, unlisted)
        notify_subscribers: Notify channel subscribers on upload
        made_for_kids: Whether content is made for kids
    """

    title: str
    description: str = ""
    tags: list[str] | None = None
    category_id: str = "20"  # Gaming
    privacy_status: str = "private"
    notify_subscribers: bool = False
    made_for_kids: bool = False


@dataclass
class UploadResult:
    """Result of video upload operation.

    Attributes:
        video_id: YouTube video ID
        url: Full YouTube URL
        uploaded_at: Upload timestamp
    """

    video_id: str
    url: str
    uploaded_at: datetime


class YouTubeAPIClient:
    """YouTube Data API client.

    Example:
        >>> client = YouTubeAPIClient(auth_client)
        >>> await client.authenticate()
        >>> result = await client.upload_video(
        ...     video_path=Path("stream.mp4"),
        ...     metadata=UploadMetadata(title="My Stream"),
        ... )
        >>> await client.add_video_to_playlist(result.video_id, "PLxxxx")
    """

    def __init__(
        self,
        auth_client: YouTubeAuthClient,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        watch_url_base: str = DEFAULT_WATCH_URL_BASE,
    ) -> None:
        """Initialize YouTube API client.

        Args:
            auth_client: YouTube credential provider
            chunk_size: Upload chunk size in bytes
            watch_url_base: Prefix of public watch URLs
        """
        self.auth_client = auth_client
        self.chunk_size = chunk_size
        self.watch_url_base = watch_url_base

        logger.info("YouTubeAPIClient initialized", chunk_size=chunk_size)

    async def authenticate(self) -> Any:
        """Obtain an authenticated YouTube service.

        Returns:
            YouTube API service resource

        Raises:
            CredentialError: If no usable credential is available
        """
        try:
            return await self.auth_client.get_youtube_service()
        except VodTubeError:
            raise
        except Exception as e:
            raise CredentialError(
                message=f"Failed to build YouTube service: {e}",
                credential_type="oauth_token",
            ) from e

    def watch_url(self, video_id: str) -> str:
        """Public watch URL of a video."""
        return f"{self.watch_url_base}{video_id}"

    def _build_video_body(self, metadata: UploadMetadata) -> dict[str, Any]:
        """Build request body for video insert.

        Args:
            metadata: Video metadata

        Returns:
            Request body dictionary
        """
        body: dict[str, Any] = {
            "snippet": {
                "title": metadata.title[:MAX_TITLE_LENGTH],
                "description": metadata.description[:MAX_DESCRIPTION_LENGTH],
                "categoryId": metadata.category_id,
            },
            "status": {
                "privacyStatus": metadata.privacy_status,
                "selfDeclaredMadeForKids": metadata.made_for_kids,
            },
        }

        if metadata.tags:
            body["snippet"]["tags"] = metadata.tags[:500]  # YouTube limit

        return body

    async def upload_video(
        self,
        video_path: Path,
        metadata: UploadMetadata,
        on_progress: ProgressCallback | None = None,
        service: Any | None = None,
    ) -> UploadResult:
        """Upload video to YouTube with resumable upload.

        Args:
            video_path: Path to video file
            metadata: Video metadata
            on_progress: Called with (bytes_read, total_bytes) while streaming
            service: Service from a prior authenticate() call, fetched if omitted

        Returns:
            UploadResult with video ID and URL

        Raises:
            CredentialError: If no service was given and authentication fails
            TransferError: If the upload fails
            QuotaExceededError: If API quota is exceeded
        """
        youtube = service if service is not None else await self.authenticate()

        transfer = ResumableTransfer(
            service=youtube,
            body=self._build_video_body(metadata),
            file_path=video_path,
            chunk_size=self.chunk_size,
            notify_subscribers=metadata.notify_subscribers,
            on_progress=on_progress,
        )

        start_time = time.time()
        video_id = await transfer.run()

        logger.info(
            "Video uploaded successfully",
            video_id=video_id,
            bytes_sent=transfer.bytes_read,
            upload_time_seconds=f"{time.time() - start_time:.1f}",
        )

        return UploadResult(
            video_id=video_id,
            url=self.watch_url(video_id),
            uploaded_at=datetime.now(tz=UTC),
        )

    async def update_metadata(
        self,
        video_id: str,
        metadata: UploadMetadata,
    ) -> dict[str, Any]:
        """Replace the snippet (title, description, category, tags) of a video.

        Args:
            video_id: YouTube video ID
            metadata: Updated metadata

        Returns:
            Updated video resource

        Raises:
            YouTubeAPIError: If update fails
        """
        youtube = await self.authenticate()

        body = self._build_video_body(metadata)
        del body["status"]
        body["id"] = video_id

        try:
            response = await asyncio.to_thread(
                youtube.videos().update(part="snippet", body=body).execute
            )
            logger.info("Video metadata updated", video_id=video_id)
            return response
        except HttpError as e:
            raise YouTubeAPIError(
                message=f"Metadata update failed: {e}",
                error_code=str(e.resp.status),
                error_reason=str(e.content),
                video_id=video_id,
            ) from e

    async def add_video_to_playlist(self, video_id: str, playlist_id: str) -> dict[str, Any]:
        """Append a video to a playlist.

        Args:
            video_id: YouTube video ID
            playlist_id: YouTube playlist ID

        Returns:
            Created playlist item resource

        Raises:
            YouTubeAPIError: If the insert fails
        """
        youtube = await self.authenticate()

        body = {
            "snippet": {
                "playlistId": playlist_id,
                "resourceId": {"kind": "youtube#video", "videoId": video_id},
            }
        }

        try:
            response = await asyncio.to_thread(
                youtube.playlistItems().insert(part="snippet", body=body).execute
            )
            logger.info("Video added to playlist", video_id=video_id, playlist_id=playlist_id)
            return response
        except HttpError as e:
            raise YouTubeAPIError(
                message=f"Playlist insert failed: {e}",
                error_code=str(e.resp.status),
                error_reason=str(e.content),
                video_id=video_id,
                context={"playlist_id": playlist_id},
            ) from e


__all__ = [
    "MAX_DESCRIPTION_LENGTH",
    "YouTubeAPIClient",
    "UploadMetadata",
    "UploadResult",
]
