"""Administrative operations for YouTube upload settings.

Manages per-channel YouTubeConfig rows, their playlist mappings, and the
upload record reset used for manual retries. Inputs are validated with
Pydantic; missing rows raise RecordNotFoundError.
"""

import uuid

from pydantic import BaseModel, Field
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from vodtube.core.exceptions import RecordNotFoundError
from vodtube.core.logging import get_logger
from vodtube.core.state_machine import create_upload_state_machine
from vodtube.core.types import SessionFactory
from vodtube.models.channel import Channel
from vodtube.models.youtube_config import PlaylistMapping, PrivacyStatus, YouTubeConfig
from vodtube.models.youtube_upload import UploadStatus, YouTubeUpload

logger = get_logger(__name__)


class CreateYouTubeConfigInput(BaseModel):
    """Input for creating a channel's YouTube settings."""

    upload_enabled: bool = False
    default_privacy: PrivacyStatus = PrivacyStatus.PRIVATE
    default_category_id: str = Field(default="20", max_length=10)
    title_template: str | None = None
    description_template: str | None = None
    tags: list[str] | None = None
    add_chapters: bool = True
    notify_subscribers: bool = False


class UpdateYouTubeConfigInput(BaseModel):
    """Partial update of a channel's YouTube settings.

    Only fields that are explicitly set are applied.
    """

    upload_enabled: bool | None = None
    default_privacy: PrivacyStatus | None = None
    default_category_id: str | None = Field(default=None, max_length=10)
    title_template: str | None = None
    description_template: str | None = None
    tags: list[str] | None = None
    add_chapters: bool | None = None
    notify_subscribers: bool | None = None


class CreatePlaylistMappingInput(BaseModel):
    """Input for creating a playlist mapping."""

    game_category: str = Field(min_length=1, max_length=200)
    playlist_id: str = Field(min_length=1, max_length=100)
    playlist_name: str | None = Field(default=None, max_length=200)
    priority: int = 0


class UpdatePlaylistMappingInput(BaseModel):
    """Partial update of a playlist mapping."""

    game_category: str | None = Field(default=None, min_length=1, max_length=200)
    playlist_id: str | None = Field(default=None, min_length=1, max_length=100)
    playlist_name: str | None = Field(default=None, max_length=200)
    priority: int | None = None


class YouTubeConfigService:
    """CRUD for YouTube settings and upload status management.

    Example:
        >>> service = YouTubeConfigService(db_session_factory)
        >>> config = await service.create_config(
        ...     channel_id, CreateYouTubeConfigInput(upload_enabled=True)
        ... )
        >>> await service.create_playlist_mapping(
        ...     config.id, CreatePlaylistMappingInput(game_category="mine*", playlist_id="PL1")
        ... )
    """

    def __init__(self, db_session_factory: SessionFactory) -> None:
        self.db_session_factory = db_session_factory

    async def get_config(self, channel_id: uuid.UUID) -> YouTubeConfig:
        """Get a channel's YouTube settings with playlist mappings.

        Raises:
            RecordNotFoundError: If the channel has no YouTube settings
        """
        async with self.db_session_factory() as session:
            result = await session.execute(
                select(YouTubeConfig)
                .where(YouTubeConfig.channel_id == channel_id)
                .options(selectinload(YouTubeConfig.playlist_mappings))
            )
            config = result.scalar_one_or_none()
            if config is None:
                raise RecordNotFoundError(model="YouTubeConfig", record_id=str(channel_id))
            return config

    async def create_config(
        self,
        channel_id: uuid.UUID,
        data: CreateYouTubeConfigInput,
    ) -> YouTubeConfig:
        """Create YouTube settings for a channel.

        Args:
            channel_id: Channel ID
            data: Settings

        Returns:
            Created YouTubeConfig

        Raises:
            RecordNotFoundError: If the channel does not exist
        """
        async with self.db_session_factory() as session:
            channel = await session.get(Channel, channel_id)
            if channel is None:
                raise RecordNotFoundError(model="Channel", record_id=str(channel_id))

            config = YouTubeConfig(channel_id=channel_id, **data.model_dump(mode="json"))
            session.add(config)
            await session.commit()

            logger.info(
                "Created YouTube config",
                channel_id=str(channel_id),
                upload_enabled=config.upload_enabled,
            )
            return config

    async def update_config(
        self,
        config_id: uuid.UUID,
        data: UpdateYouTubeConfigInput,
    ) -> YouTubeConfig:
        """Apply a partial update to YouTube settings.

        Raises:
            RecordNotFoundError: If the config does not exist
        """
        async with self.db_session_factory() as session:
            config = await session.get(YouTubeConfig, config_id)
            if config is None:
                raise RecordNotFoundError(model="YouTubeConfig", record_id=str(config_id))

            changes = data.model_dump(mode="json", exclude_unset=True)
            for key, value in changes.items():
                setattr(config, key, value)
            await session.commit()

            logger.info(
                "Updated YouTube config",
                config_id=str(config_id),
                fields=sorted(changes),
            )
            return config

    async def delete_config(self, config_id: uuid.UUID) -> None:
        """Delete YouTube settings and their playlist mappings.

        Raises:
            RecordNotFoundError: If the config does not exist
        """
        async with self.db_session_factory() as session:
            config = await session.get(YouTubeConfig, config_id)
            if config is None:
                raise RecordNotFoundError(model="YouTubeConfig", record_id=str(config_id))

            await session.delete(config)
            await session.commit()

        logger.info("Deleted YouTube config", config_id=str(config_id))

    async def create_playlist_mapping(
        self,
        config_id: uuid.UUID,
        data: CreatePlaylistMappingInput,
    ) -> PlaylistMapping:
        """Add a playlist mapping to YouTube settings.

        Raises:
            RecordNotFoundError: If the config does not exist
        """
        async with self.db_session_factory() as session:
            config = await session.get(YouTubeConfig, config_id)
            if config is None:
                raise RecordNotFoundError(model="YouTubeConfig", record_id=str(config_id))

            mapping = PlaylistMapping(config_id=config_id, **data.model_dump(mode="json"))
            session.add(mapping)
            await session.commit()

            logger.info(
                "Created playlist mapping",
                config_id=str(config_id),
                game_category=mapping.game_category,
                playlist_id=mapping.playlist_id,
                priority=mapping.priority,
            )
            return mapping

    async def update_playlist_mapping(
        self,
        mapping_id: uuid.UUID,
        data: UpdatePlaylistMappingInput,
    ) -> PlaylistMapping:
        """Apply a partial update to a playlist mapping.

        Raises:
            RecordNotFoundError: If the mapping does not exist
        """
        async with self.db_session_factory() as session:
            mapping = await session.get(PlaylistMapping, mapping_id)
            if mapping is None:
                raise RecordNotFoundError(model="PlaylistMapping", record_id=str(mapping_id))

            for key, value in data.model_dump(mode="json", exclude_unset=True).items():
                setattr(mapping, key, value)
            await session.commit()

            logger.info("Updated playlist mapping", mapping_id=str(mapping_id))
            return mapping

    async def delete_playlist_mapping(self, mapping_id: uuid.UUID) -> None:
        """Delete a playlist mapping.

        Raises:
            RecordNotFoundError: If the mapping does not exist
        """
        async with self.db_session_factory() as session:
            mapping = await session.get(PlaylistMapping, mapping_id)
            if mapping is None:
                raise RecordNotFoundError(model="PlaylistMapping", record_id=str(mapping_id))

            await session.delete(mapping)
            await session.commit()

        logger.info("Deleted playlist mapping", mapping_id=str(mapping_id))

    async def get_upload_status(self, vod_id: uuid.UUID) -> YouTubeUpload:
        """Get the upload record of a Vod.

        Raises:
            RecordNotFoundError: If the Vod has no upload record
        """
        async with self.db_session_factory() as session:
            upload = await self._get_upload(session, vod_id)
            return upload

    async def reset_upload_for_retry(self, vod_id: uuid.UUID) -> YouTubeUpload:
        """Put an upload back to pending so it can be enqueued again.

        The error message is cleared; the retry count is kept.

        Raises:
            RecordNotFoundError: If the Vod has no upload record
            InvalidTransitionError: If the upload already completed
        """
        async with self.db_session_factory() as session:
            upload = await self._get_upload(session, vod_id)

            if upload.status == UploadStatus.PENDING:
                return upload

            machine = create_upload_state_machine(upload.status)
            upload.status = machine.transition_to(UploadStatus.PENDING)
            upload.error_message = None
            await session.commit()

            logger.info(
                "Reset upload for retry",
                vod_id=str(vod_id),
                retry_count=upload.retry_count,
            )
            return upload

    async def _get_upload(self, session: AsyncSession, vod_id: uuid.UUID) -> YouTubeUpload:
        result = await session.execute(select(YouTubeUpload).where(YouTubeUpload.vod_id == vod_id))
        upload = result.scalar_one_or_none()
        if upload is None:
            raise RecordNotFoundError(model="YouTubeUpload", record_id=str(vod_id))
        return upload


__all__ = [
    "CreatePlaylistMappingInput",
    "CreateYouTubeConfigInput",
    "UpdatePlaylistMappingInput",
    "UpdateYouTubeConfigInput",
    "YouTubeConfigService",
]
