"""YouTube upload service.

This module provides the YouTubeUploader service that drives a single Vod
through its upload lifecycle:

    pending -> uploading -> completed | failed

Each status change is committed before the next remote call so that an
interrupted run always leaves a consistent record behind. Chapter markers and
playlist membership are best-effort enhancements: their failures are logged
and reported as warnings, never raised.
"""

import uuid
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from pathlib import Path

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from vodtube.config.youtube_upload import YouTubeAPIConfig
from vodtube.core.exceptions import RecordNotFoundError
from vodtube.core.logging import get_logger
from vodtube.core.state_machine import StateMachine, create_upload_state_machine
from vodtube.core.types import SessionFactory
from vodtube.infrastructure.resumable_upload import ProgressCallback
from vodtube.infrastructure.youtube_api import (
    MAX_DESCRIPTION_LENGTH,
    UploadMetadata,
    YouTubeAPIClient,
)
from vodtube.models.channel import Channel
from vodtube.models.vod import Chapter, Vod
from vodtube.models.youtube_config import PrivacyStatus, YouTubeConfig
from vodtube.models.youtube_upload import UploadStatus, YouTubeUpload
from vodtube.services.uploader.formatter import (
    TemplateFields,
    build_chapter_block,
    render_description,
    render_title,
)
from vodtube.services.uploader.playlist_router import PlaylistRouter, dedupe_playlist_ids

logger = get_logger(__name__)

SKIP_UPLOAD_DISABLED = "upload_disabled"
SKIP_ALREADY_COMPLETED = "already_completed"


@dataclass
class UploadOutcome:
    """Result of processing one Vod.

    Attributes:
        vod_id: Vod ID
        upload_id: Upload record ID, None if no record was created
        status: Upload status after processing
        youtube_video_id: YouTube video ID
        youtube_url: Watch URL
        playlist_ids: Playlists the video was routed to
        added_playlist_ids: Playlists the video was actually added to
        warnings: Failed best-effort steps (chapters, playlists)
        skipped_reason: Why nothing was uploaded, if skipped
    """

    vod_id: uuid.UUID
    upload_id: uuid.UUID | None = None
    status: UploadStatus | None = None
    youtube_video_id: str | None = None
    youtube_url: str | None = None
    playlist_ids: list[str] = field(default_factory=list)
    added_playlist_ids: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    skipped_reason: str | None = None

    @property
    def skipped(self) -> bool:
        """Whether the upload was skipped."""
        return self.skipped_reason is not None


def _progress_logger(vod_id: uuid.UUID, step_percent: int = 10) -> ProgressCallback:
    last_logged = -step_percent

    def on_progress(bytes_read: int, total_bytes: int) -> None:
        nonlocal last_logged
        if total_bytes <= 0:
            return
        percent = bytes_read * 100 // total_bytes
        if percent >= last_logged + step_percent:
            last_logged = percent - percent % step_percent
            logger.debug(
                "Transfer progress",
                vod_id=str(vod_id),
                percent=percent,
                bytes_read=bytes_read,
                total_bytes=total_bytes,
            )

    return on_progress


class YouTubeUploader:
    """Upload archived Vods to YouTube with database persistence.

    Example:
        >>> uploader = YouTubeUploader(youtube_api, db_session_factory)
        >>> outcome = await uploader.process_upload(vod_id)
        >>> outcome.status, outcome.youtube_url
        (<UploadStatus.COMPLETED: 'completed'>, 'https://www.youtube.com/watch?v=...')
    """

    def __init__(
        self,
        youtube_api: YouTubeAPIClient,
        db_session_factory: SessionFactory,
        config: YouTubeAPIConfig | None = None,
    ) -> None:
        """Initialize YouTube uploader.

        Args:
            youtube_api: YouTube API client
            db_session_factory: Database session factory
            config: Upload configuration
        """
        self.youtube_api = youtube_api
        self.db_session_factory = db_session_factory
        self.config = config or YouTubeAPIConfig()

        logger.info("YouTubeUploader initialized")

    async def _load_vod(self, session: AsyncSession, vod_id: uuid.UUID) -> Vod | None:
        result = await session.execute(
            select(Vod)
            .where(Vod.id == vod_id)
            .options(
                selectinload(Vod.channel)
                .selectinload(Channel.youtube_config)
                .selectinload(YouTubeConfig.playlist_mappings),
                selectinload(Vod.chapters),
                selectinload(Vod.youtube_upload),
            )
        )
        return result.scalar_one_or_none()

    def _truncate(self, message: str) -> str:
        return message[: self.config.error_message_max_length]

    async def _mark_failed(
        self,
        session: AsyncSession,
        upload: YouTubeUpload,
        machine: StateMachine,
        message: str,
        count_attempt: bool,
    ) -> None:
        upload.status = machine.transition_to(UploadStatus.FAILED)
        upload.error_message = self._truncate(message)
        if count_attempt:
            upload.retry_count = (upload.retry_count or 0) + 1
        await session.commit()

    async def process_upload(self, vod_id: uuid.UUID) -> UploadOutcome:
        """Upload a Vod to YouTube.

        Args:
            vod_id: Vod ID

        Returns:
            UploadOutcome describing the processed upload

        Raises:
            RecordNotFoundError: If the Vod or its channel's YouTube config is missing
            CredentialError: If YouTube authentication fails
            TransferError: If the video transfer fails
        """
        logger.info("Processing YouTube upload", vod_id=str(vod_id))

        async with self.db_session_factory() as session:
            vod = await self._load_vod(session, vod_id)
            if vod is None:
                raise RecordNotFoundError(model="Vod", record_id=str(vod_id))

            config = vod.channel.youtube_config
            if config is None:
                raise RecordNotFoundError(model="YouTubeConfig", record_id=str(vod.channel_id))

            if not config.upload_enabled:
                logger.info("YouTube upload disabled for channel", vod_id=str(vod_id))
                return UploadOutcome(vod_id=vod_id, skipped_reason=SKIP_UPLOAD_DISABLED)

            # Snapshot everything needed after the status commits
            fields = TemplateFields.from_vod(vod)
            chapters = list(vod.chapters)
            mappings = list(config.playlist_mappings)
            video_path = Path(vod.video_path)

            upload = vod.youtube_upload
            if upload is None:
                upload = YouTubeUpload(vod_id=vod.id, status=UploadStatus.PENDING, retry_count=0)
                session.add(upload)
                await session.commit()
                logger.debug("Created upload record", vod_id=str(vod_id))

            if upload.status == UploadStatus.COMPLETED:
                logger.info(
                    "Vod already uploaded",
                    vod_id=str(vod_id),
                    youtube_id=upload.youtube_video_id,
                )
                return UploadOutcome(
                    vod_id=vod_id,
                    upload_id=upload.id,
                    status=UploadStatus.COMPLETED,
                    youtube_video_id=upload.youtube_video_id,
                    youtube_url=upload.youtube_url,
                    playlist_ids=list(upload.playlist_ids or []),
                    skipped_reason=SKIP_ALREADY_COMPLETED,
                )

            machine = create_upload_state_machine(upload.status)
            upload.status = machine.transition_to(UploadStatus.UPLOADING)
            await session.commit()

            try:
                service = await self.youtube_api.authenticate()
            except Exception as e:
                logger.error("YouTube authentication failed", vod_id=str(vod_id), error=str(e))
                await self._mark_failed(
                    session, upload, machine, str(e) or type(e).__name__, count_attempt=False
                )
                raise

            metadata = UploadMetadata(
                title=render_title(config.title_template, fields),
                description=render_description(config.description_template, fields),
                tags=list(config.tags) if config.tags else None,
                category_id=config.default_category_id,
                privacy_status=PrivacyStatus(config.default_privacy).value,
                notify_subscribers=config.notify_subscribers,
            )

            try:
                result = await self.youtube_api.upload_video(
                    video_path=video_path,
                    metadata=metadata,
                    on_progress=_progress_logger(vod_id),
                    service=service,
                )
            except Exception as e:
                logger.error(
                    "Upload failed",
                    vod_id=str(vod_id),
                    retry_count=(upload.retry_count or 0) + 1,
                    error=str(e),
                )
                await self._mark_failed(
                    session, upload, machine, f"upload failed: {e}", count_attempt=True
                )
                raise

            upload.youtube_video_id = result.video_id
            upload.youtube_url = self.youtube_api.watch_url(result.video_id)
            await session.commit()

            outcome = UploadOutcome(
                vod_id=vod_id,
                upload_id=upload.id,
                youtube_video_id=result.video_id,
                youtube_url=upload.youtube_url,
            )

            if config.add_chapters and chapters:
                await self._add_chapters(result.video_id, metadata, chapters, outcome)

            playlist_ids = PlaylistRouter(mappings).route_chapters(chapters)
            if self.config.dedupe_playlists:
                playlist_ids = dedupe_playlist_ids(playlist_ids)
            outcome.playlist_ids = playlist_ids

            for playlist_id in playlist_ids:
                await self._add_to_playlist(result.video_id, playlist_id, outcome)

            upload.status = machine.transition_to(UploadStatus.COMPLETED)
            if upload.uploaded_at is None:
                upload.uploaded_at = result.uploaded_at or datetime.now(tz=UTC)
            upload.playlist_ids = playlist_ids
            upload.error_message = None
            await session.commit()

            outcome.status = UploadStatus.COMPLETED

            logger.info(
                "YouTube upload completed",
                vod_id=str(vod_id),
                youtube_id=result.video_id,
                url=upload.youtube_url,
                playlists_routed=len(playlist_ids),
                playlists_added=len(outcome.added_playlist_ids),
                warnings=len(outcome.warnings),
            )
            return outcome

    async def _add_chapters(
        self,
        video_id: str,
        metadata: UploadMetadata,
        chapters: list[Chapter],
        outcome: UploadOutcome,
    ) -> None:
        """Append the chapter block to the description.

        The block must survive intact for YouTube to detect chapters, so an
        over-long description is shortened instead of the block. If the block
        alone does not fit, the update is skipped and reported as a warning.
        """
        chapter_block = build_chapter_block(chapters)
        room = MAX_DESCRIPTION_LENGTH - len(chapter_block) - 2
        if room < 0:
            logger.warning(
                "Chapter block exceeds description limit",
                video_id=video_id,
                chapters=len(chapters),
                length=len(chapter_block),
            )
            outcome.warnings.append("chapters: description too long")
            return

        description = metadata.description
        if len(description) > room:
            logger.warning(
                "Description shortened to fit chapters",
                video_id=video_id,
                original_length=len(description),
                kept_length=room,
            )
            description = description[:room].rstrip()

        updated = replace(metadata, description=f"{description}\n\n{chapter_block}")
        try:
            await self.youtube_api.update_metadata(video_id, updated)
        except Exception as e:
            logger.warning("Failed to add chapters", video_id=video_id, error=str(e))
            outcome.warnings.append(f"chapters: {e}")

    async def _add_to_playlist(
        self,
        video_id: str,
        playlist_id: str,
        outcome: UploadOutcome,
    ) -> None:
        try:
            await self.youtube_api.add_video_to_playlist(video_id, playlist_id)
        except Exception as e:
            logger.warning(
                "Failed to add video to playlist",
                video_id=video_id,
                playlist_id=playlist_id,
                error=str(e),
            )
            outcome.warnings.append(f"playlist {playlist_id}: {e}")
            return
        outcome.added_playlist_ids.append(playlist_id)


__all__ = [
    "UploadOutcome",
    "YouTubeUploader",
]
