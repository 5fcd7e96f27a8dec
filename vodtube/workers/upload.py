"""YouTube upload Celery tasks.

This module defines the Celery task that uploads one archived Vod to YouTube
and helpers to enqueue it:
- upload_to_youtube: Run the upload lifecycle for a Vod
- enqueue_upload: Schedule an upload
- enqueue_upload_retry: Reset a failed upload to pending and schedule it again
"""

import asyncio
import uuid
from datetime import UTC, datetime
from typing import Any

from celery import shared_task
from celery.result import AsyncResult
from celery.utils.log import get_task_logger
from pydantic import BaseModel

from vodtube.core.container import get_container
from vodtube.core.exceptions import AuthError, RecordNotFoundError, UploadError
from vodtube.services.uploader.config_service import YouTubeConfigService
from vodtube.workers.heartbeat import TaskHeartbeat

logger = get_task_logger(__name__)

UPLOAD_QUEUE = "upload"

# 3 attempts in total, each bounded by 12 hours
UPLOAD_MAX_RETRIES = 2
UPLOAD_TIME_LIMIT = 12 * 60 * 60


class UploadTaskResult(BaseModel):
    """Result of upload task.

    Attributes:
        vod_id: Vod ID
        upload_id: Database upload ID (if a record exists)
        youtube_video_id: YouTube video ID (if successful)
        youtube_url: YouTube URL (if successful)
        status: Upload status, or "skipped"
        playlist_ids: Playlists the video was routed to
        added_playlist_ids: Playlists the video was added to
        warnings: Failed best-effort steps
        skipped_reason: Why the upload was skipped
        started_at: Task start time
        completed_at: Task completion time
    """

    vod_id: str
    upload_id: str | None = None
    youtube_video_id: str | None = None
    youtube_url: str | None = None
    status: str
    playlist_ids: list[str] = []
    added_playlist_ids: list[str] = []
    warnings: list[str] = []
    skipped_reason: str | None = None
    started_at: datetime
    completed_at: datetime | None = None


async def _upload_to_youtube_async(
    vod_id: str,
    task_id: str | None = None,
) -> UploadTaskResult:
    """Upload a Vod to YouTube while publishing a heartbeat.

    Args:
        vod_id: Vod ID
        task_id: Celery task ID, used as heartbeat key

    Returns:
        UploadTaskResult with status

    Raises:
        RecordNotFoundError: If the Vod or its YouTube settings are missing
        AuthError: If YouTube authentication fails
        UploadError: If the transfer fails
    """
    started_at = datetime.now(tz=UTC)

    container = get_container()
    uploader = container.services.youtube_uploader()
    upload_config = container.configs.youtube_upload_config()

    heartbeat = TaskHeartbeat(
        redis=container.infrastructure.redis_async_client(),
        task_id=task_id or vod_id,
        config=upload_config.heartbeat,
        payload={"vod_id": vod_id},
    )

    async with heartbeat:
        outcome = await uploader.process_upload(uuid.UUID(vod_id))

    return UploadTaskResult(
        vod_id=vod_id,
        upload_id=str(outcome.upload_id) if outcome.upload_id else None,
        youtube_video_id=outcome.youtube_video_id,
        youtube_url=outcome.youtube_url,
        status=outcome.status.value if outcome.status else "skipped",
        playlist_ids=outcome.playlist_ids,
        added_playlist_ids=outcome.added_playlist_ids,
        warnings=outcome.warnings,
        skipped_reason=outcome.skipped_reason,
        started_at=started_at,
        completed_at=datetime.now(tz=UTC),
    )


# =============================================================================
# Celery Tasks
# =============================================================================


@shared_task(
    bind=True,
    name="vodtube.workers.upload.upload_to_youtube",
    max_retries=UPLOAD_MAX_RETRIES,
    default_retry_delay=300,
    time_limit=UPLOAD_TIME_LIMIT,
    acks_late=True,
)
def upload_to_youtube(self, vod_id: str) -> dict[str, Any]:
    """Upload an archived Vod to YouTube.

    Credential and transfer failures are retried by Celery; a missing Vod or
    missing settings is not.

    Args:
        self: Celery task instance
        vod_id: Vod ID

    Returns:
        UploadTaskResult as dict
    """
    logger.info(f"Starting YouTube upload for VOD: {vod_id}")

    container = get_container()
    task_config = container.configs.youtube_upload_config().task

    try:
        # Engine and Redis clients are bound to the event loop of this run
        with container.reset_singletons():
            result = asyncio.run(_upload_to_youtube_async(vod_id, self.request.id))

    except RecordNotFoundError as exc:
        logger.error(f"YouTube upload not possible for {vod_id}: {exc}")
        raise

    except (AuthError, UploadError) as exc:
        logger.error(
            f"YouTube upload failed for {vod_id} "
            f"(attempt {self.request.retries + 1}/{task_config.max_attempts}): {exc}"
        )
        raise self.retry(
            exc=exc,
            countdown=task_config.retry_delay_seconds,
            max_retries=task_config.max_attempts - 1,
        ) from exc

    if result.skipped_reason:
        logger.info(f"YouTube upload skipped for {vod_id}: {result.skipped_reason}")
    else:
        logger.info(f"YouTube upload complete: {vod_id} -> {result.youtube_video_id}")

    return result.model_dump(mode="json")


def enqueue_upload(vod_id: uuid.UUID | str) -> AsyncResult:
    """Schedule a YouTube upload for a Vod.

    Args:
        vod_id: Vod ID

    Returns:
        Celery AsyncResult of the scheduled task
    """
    result = upload_to_youtube.apply_async(args=[str(vod_id)], queue=UPLOAD_QUEUE)
    logger.info(f"Enqueued YouTube upload for VOD {vod_id}: task {result.id}")
    return result


async def enqueue_upload_retry(
    vod_id: uuid.UUID | str,
    config_service: YouTubeConfigService | None = None,
) -> AsyncResult:
    """Reset an upload to pending and schedule it again.

    The reset happens before the task is enqueued so a fast worker never
    sees the stale status.

    Args:
        vod_id: Vod ID
        config_service: Settings service, resolved from the container if omitted

    Returns:
        Celery AsyncResult of the scheduled task

    Raises:
        RecordNotFoundError: If the Vod has no upload record
        InvalidTransitionError: If the upload already completed
    """
    service = config_service or get_container().services.youtube_config_service()
    await service.reset_upload_for_retry(uuid.UUID(str(vod_id)))
    return enqueue_upload(vod_id)


__all__ = [
    "upload_to_youtube",
    "enqueue_upload",
    "enqueue_upload_retry",
    "UploadTaskResult",
]
