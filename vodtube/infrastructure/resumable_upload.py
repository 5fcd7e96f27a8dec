"""Resumable streaming upload of a local video file to YouTube.

The file is streamed through googleapiclient's resumable media upload so that
large archives are never loaded into memory. A wrapping reader reports
progress on every read.
"""

import asyncio
import os
from collections.abc import Callable
from pathlib import Path
from typing import Any, BinaryIO

from googleapiclient.errors import HttpError
from googleapiclient.http import MediaIoBaseUpload

from vodtube.core.exceptions import QuotaExceededError, TransferError
from vodtube.core.logging import get_logger

logger = get_logger(__name__)

# Resumable upload chunk size (8MB, must be a multiple of 256KB)
DEFAULT_CHUNK_SIZE = 8 * 1024 * 1024

ProgressCallback = Callable[[int, int], None]
CompleteCallback = Callable[[str], None]
ErrorCallback = Callable[[Exception], None]


def _is_quota_error(error: HttpError) -> bool:
    content = error.content
    if isinstance(content, bytes):
        content = content.decode("utf-8", errors="ignore")
    return error.resp.status == 403 and (
        "quotaExceeded" in str(error) or "quotaExceeded" in str(content)
    )


class ProgressReader:
    """Seekable file wrapper that reports cumulative bytes read.

    Every call to `read` invokes `on_progress(bytes_read, total_bytes)`.
    `bytes_read` only grows.

    Attributes:
        total_bytes: Size of the wrapped file
        bytes_read: Cumulative number of bytes returned by `read`
    """

    def __init__(
        self,
        fileobj: BinaryIO,
        total_bytes: int,
        on_progress: ProgressCallback | None = None,
    ) -> None:
        self._fileobj = fileobj
        self.total_bytes = total_bytes
        self.bytes_read = 0
        self._on_progress = on_progress

    def read(self, size: int = -1) -> bytes:
        data = self._fileobj.read(size)
        self.bytes_read += len(data)
        if self._on_progress is not None:
            self._on_progress(self.bytes_read, self.total_bytes)
        return data

    def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        return self._fileobj.seek(offset, whence)

    def tell(self) -> int:
        return self._fileobj.tell()

    def seekable(self) -> bool:
        return True

    def readable(self) -> bool:
        return True


class ResumableTransfer:
    """Upload one local video file as a new YouTube video.

    Callbacks are optional. On success `on_complete` is called exactly once
    with the new video ID; on failure `on_error` is called exactly once with
    the cause and the failure is raised as TransferError. Neither the
    transfer nor its chunks are retried here, and a started transfer cannot
    be cancelled.

    Example:
        >>> transfer = ResumableTransfer(
        ...     service=youtube,
        ...     body={"snippet": {"title": "Stream"}, "status": {"privacyStatus": "private"}},
        ...     file_path=Path("/vods/stream.mp4"),
        ...     on_progress=lambda done, total: print(f"{done}/{total}"),
        ... )
        >>> video_id = await transfer.run()
    """

    def __init__(
        self,
        service: Any,
        body: dict[str, Any],
        file_path: Path | str,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        mimetype: str = "video/*",
        notify_subscribers: bool = False,
        on_progress: ProgressCallback | None = None,
        on_complete: CompleteCallback | None = None,
        on_error: ErrorCallback | None = None,
    ) -> None:
        """Initialize the transfer.

        Args:
            service: Authenticated YouTube Data API v3 resource
            body: Video resource body (snippet and status)
            file_path: Local video file
            chunk_size: Bytes sent per resumable request
            mimetype: Media MIME type
            notify_subscribers: Notify channel subscribers about the new video
            on_progress: Called with (bytes_read, total_bytes) on every read
            on_complete: Called with the new video ID on success
            on_error: Called with the failure cause
        """
        self.service = service
        self.body = body
        self.file_path = Path(file_path)
        self.chunk_size = chunk_size
        self.mimetype = mimetype
        self.notify_subscribers = notify_subscribers
        self.on_progress = on_progress
        self.on_complete = on_complete
        self.on_error = on_error
        self._reader: ProgressReader | None = None

    @property
    def bytes_read(self) -> int:
        """Bytes read from the file so far."""
        return self._reader.bytes_read if self._reader else 0

    def _fail(self, cause: Exception) -> None:
        if self.on_error is not None:
            self.on_error(cause)

    async def run(self) -> str:
        """Stream the file and create the video.

        Returns:
            YouTube video ID

        Raises:
            QuotaExceededError: If the API quota is exhausted
            TransferError: If the file cannot be read or the upload is rejected
        """
        try:
            video_id = await self._send()
        except HttpError as e:
            logger.error(
                "Video transfer rejected",
                file_path=str(self.file_path),
                status=e.resp.status,
                bytes_read=self.bytes_read,
            )
            self._fail(e)
            if _is_quota_error(e):
                raise QuotaExceededError(file_path=str(self.file_path)) from e
            raise TransferError(
                message=f"Upload failed: {e}",
                file_path=str(self.file_path),
                bytes_sent=self.bytes_read,
                error_code=str(e.resp.status),
                error_reason=str(e.content),
            ) from e
        except Exception as e:
            logger.error(
                "Video transfer failed",
                file_path=str(self.file_path),
                error=str(e),
                bytes_read=self.bytes_read,
            )
            self._fail(e)
            raise TransferError(
                message=f"Upload failed: {e}",
                file_path=str(self.file_path),
                bytes_sent=self.bytes_read,
            ) from e

        if self.on_complete is not None:
            self.on_complete(video_id)
        return video_id

    async def _send(self) -> str:
        with self.file_path.open("rb") as fileobj:
            total_bytes = os.fstat(fileobj.fileno()).st_size
            self._reader = ProgressReader(fileobj, total_bytes, self.on_progress)

            media = MediaIoBaseUpload(
                self._reader,
                mimetype=self.mimetype,
                chunksize=self.chunk_size,
                resumable=True,
            )
            request = self.service.videos().insert(
                part="snippet,status",
                body=self.body,
                media_body=media,
                notifySubscribers=self.notify_subscribers,
            )

            logger.info(
                "Starting video transfer",
                file_path=str(self.file_path),
                file_size=total_bytes,
                chunk_size=self.chunk_size,
            )

            response = None
            while response is None:
                status, response = await asyncio.to_thread(request.next_chunk)
                if status:
                    logger.debug("Upload progress", progress=f"{int(status.progress() * 100)}%")

        video_id = response.get("id") if isinstance(response, dict) else None
        if not video_id:
            raise ValueError("Upload response did not include a video ID")
        return video_id


__all__ = [
    "DEFAULT_CHUNK_SIZE",
    "ProgressReader",
    "ResumableTransfer",
]
