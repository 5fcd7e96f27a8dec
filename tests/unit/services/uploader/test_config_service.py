"""Unit tests for YouTubeConfigService."""

import uuid
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from pydantic import ValidationError

from vodtube.core.exceptions import RecordNotFoundError
from vodtube.core.state_machine import InvalidTransitionError
from vodtube.models.channel import Channel
from vodtube.models.youtube_config import PlaylistMapping, PrivacyStatus, YouTubeConfig
from vodtube.models.youtube_upload import UploadStatus
from vodtube.services.uploader.config_service import (
    CreatePlaylistMappingInput,
    CreateYouTubeConfigInput,
    UpdatePlaylistMappingInput,
    UpdateYouTubeConfigInput,
    YouTubeConfigService,
)


class TestInputs:
    """Tests for config service input models."""

    def test_create_config_defaults(self):
        """Test defaults of a new config."""
        data = CreateYouTubeConfigInput()

        assert data.upload_enabled is False
        assert data.default_privacy == PrivacyStatus.PRIVATE
        assert data.default_category_id == "20"
        assert data.add_chapters is True
        assert data.notify_subscribers is False

    def test_invalid_privacy_rejected(self):
        """Test unknown privacy values are rejected."""
        with pytest.raises(ValidationError):
            CreateYouTubeConfigInput(default_privacy="secret")

    def test_mapping_requires_pattern_and_playlist(self):
        """Test empty pattern or playlist is rejected."""
        with pytest.raises(ValidationError):
            CreatePlaylistMappingInput(game_category="", playlist_id="PL1")
        with pytest.raises(ValidationError):
            CreatePlaylistMappingInput(game_category="minecraft", playlist_id="")

    def test_update_only_tracks_set_fields(self):
        """Test partial updates only carry explicit fields."""
        data = UpdateYouTubeConfigInput(upload_enabled=True)
        assert data.model_dump(exclude_unset=True) == {"upload_enabled": True}


class TestYouTubeConfigService:
    """Tests for YouTubeConfigService."""

    @pytest.fixture
    def service(self, mock_db_session_factory):
        factory, _ = mock_db_session_factory
        return YouTubeConfigService(factory)

    @pytest.mark.asyncio
    async def test_get_config(self, service, mock_db_session_factory, scalar_result):
        """Test get_config returns the channel's settings."""
        _, session = mock_db_session_factory
        config = SimpleNamespace(id=uuid.uuid4(), playlist_mappings=[])
        session.execute = AsyncMock(return_value=scalar_result(config))

        assert await service.get_config(uuid.uuid4()) is config

    @pytest.mark.asyncio
    async def test_get_config_missing(self, service, mock_db_session_factory, scalar_result):
        """Test get_config raises for channels without settings."""
        _, session = mock_db_session_factory
        session.execute = AsyncMock(return_value=scalar_result(None))

        with pytest.raises(RecordNotFoundError) as exc_info:
            await service.get_config(uuid.uuid4())

        assert exc_info.value.model == "YouTubeConfig"

    @pytest.mark.asyncio
    async def test_create_config(self, service, mock_db_session_factory):
        """Test create_config stores a new config for an existing channel."""
        _, session = mock_db_session_factory
        channel_id = uuid.uuid4()
        session.get = AsyncMock(return_value=SimpleNamespace(id=channel_id))

        config = await service.create_config(
            channel_id,
            CreateYouTubeConfigInput(
                upload_enabled=True,
                default_privacy=PrivacyStatus.UNLISTED,
                title_template="{channel} - {title}",
                tags=["gaming"],
            ),
        )

        session.get.assert_awaited_once_with(Channel, channel_id)
        session.add.assert_called_once_with(config)
        session.commit.assert_awaited_once()
        assert isinstance(config, YouTubeConfig)
        assert config.channel_id == channel_id
        assert config.upload_enabled is True
        assert config.default_privacy == "unlisted"
        assert config.title_template == "{channel} - {title}"
        assert config.tags == ["gaming"]

    @pytest.mark.asyncio
    async def test_create_config_channel_missing(self, service, mock_db_session_factory):
        """Test create_config raises for unknown channels."""
        _, session = mock_db_session_factory

        with pytest.raises(RecordNotFoundError) as exc_info:
            await service.create_config(uuid.uuid4(), CreateYouTubeConfigInput())

        assert exc_info.value.model == "Channel"
        session.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_config_partial(self, service, mock_db_session_factory):
        """Test update_config only touches explicit fields."""
        _, session = mock_db_session_factory
        config = SimpleNamespace(
            upload_enabled=False,
            default_privacy="private",
            tags=["old"],
        )
        session.get = AsyncMock(return_value=config)

        result = await service.update_config(
            uuid.uuid4(),
            UpdateYouTubeConfigInput(upload_enabled=True, default_privacy=PrivacyStatus.PUBLIC),
        )

        assert result is config
        assert config.upload_enabled is True
        assert config.default_privacy == "public"
        assert config.tags == ["old"]
        session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_update_config_missing(self, service):
        """Test update_config raises for unknown configs."""
        with pytest.raises(RecordNotFoundError):
            await service.update_config(uuid.uuid4(), UpdateYouTubeConfigInput())

    @pytest.mark.asyncio
    async def test_delete_config(self, service, mock_db_session_factory):
        """Test delete_config removes the row."""
        _, session = mock_db_session_factory
        config = SimpleNamespace(id=uuid.uuid4())
        session.get = AsyncMock(return_value=config)

        await service.delete_config(config.id)

        session.delete.assert_awaited_once_with(config)
        session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_delete_config_missing(self, service, mock_db_session_factory):
        """Test delete_config raises for unknown configs."""
        _, session = mock_db_session_factory

        with pytest.raises(RecordNotFoundError):
            await service.delete_config(uuid.uuid4())

        session.delete.assert_not_called()

    @pytest.mark.asyncio
    async def test_create_playlist_mapping(self, service, mock_db_session_factory):
        """Test create_playlist_mapping stores a mapping under the config."""
        _, session = mock_db_session_factory
        config_id = uuid.uuid4()
        session.get = AsyncMock(return_value=SimpleNamespace(id=config_id))

        mapping = await service.create_playlist_mapping(
            config_id,
            CreatePlaylistMappingInput(game_category="mine*", playlist_id="PL1", priority=3),
        )

        session.get.assert_awaited_once_with(YouTubeConfig, config_id)
        assert isinstance(mapping, PlaylistMapping)
        assert mapping.config_id == config_id
        assert mapping.game_category == "mine*"
        assert mapping.playlist_id == "PL1"
        assert mapping.priority == 3
        session.add.assert_called_once_with(mapping)

    @pytest.mark.asyncio
    async def test_create_playlist_mapping_config_missing(self, service):
        """Test create_playlist_mapping raises for unknown configs."""
        with pytest.raises(RecordNotFoundError):
            await service.create_playlist_mapping(
                uuid.uuid4(),
                CreatePlaylistMappingInput(game_category="*", playlist_id="PL1"),
            )

    @pytest.mark.asyncio
    async def test_update_playlist_mapping(self, service, mock_db_session_factory):
        """Test update_playlist_mapping applies explicit fields."""
        _, session = mock_db_session_factory
        mapping = SimpleNamespace(game_category="minecraft", playlist_id="PL1", priority=0)
        session.get = AsyncMock(return_value=mapping)

        await service.update_playlist_mapping(uuid.uuid4(), UpdatePlaylistMappingInput(priority=9))

        assert mapping.priority == 9
        assert mapping.game_category == "minecraft"

    @pytest.mark.asyncio
    async def test_delete_playlist_mapping(self, service, mock_db_session_factory):
        """Test delete_playlist_mapping removes the row."""
        _, session = mock_db_session_factory
        mapping = SimpleNamespace(id=uuid.uuid4())
        session.get = AsyncMock(return_value=mapping)

        await service.delete_playlist_mapping(mapping.id)

        session.delete.assert_awaited_once_with(mapping)

    @pytest.mark.asyncio
    async def test_get_upload_status_missing(
        self, service, mock_db_session_factory, scalar_result
    ):
        """Test get_upload_status raises when nothing was uploaded."""
        _, session = mock_db_session_factory
        session.execute = AsyncMock(return_value=scalar_result(None))

        with pytest.raises(RecordNotFoundError) as exc_info:
            await service.get_upload_status(uuid.uuid4())

        assert exc_info.value.model == "YouTubeUpload"

    @pytest.mark.asyncio
    async def test_reset_failed_upload(self, service, mock_db_session_factory, scalar_result):
        """Test a failed upload goes back to pending with its error cleared."""
        _, session = mock_db_session_factory
        upload = SimpleNamespace(
            status=UploadStatus.FAILED,
            error_message="upload failed: timeout",
            retry_count=2,
        )
        session.execute = AsyncMock(return_value=scalar_result(upload))

        result = await service.reset_upload_for_retry(uuid.uuid4())

        assert result is upload
        assert upload.status == UploadStatus.PENDING
        assert upload.error_message is None
        assert upload.retry_count == 2
        session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_reset_pending_upload_is_noop(
        self, service, mock_db_session_factory, scalar_result
    ):
        """Test resetting a pending upload changes nothing."""
        _, session = mock_db_session_factory
        upload = SimpleNamespace(status=UploadStatus.PENDING, error_message=None, retry_count=0)
        session.execute = AsyncMock(return_value=scalar_result(upload))

        await service.reset_upload_for_retry(uuid.uuid4())

        assert upload.status == UploadStatus.PENDING
        session.commit.assert_not_called()

    @pytest.mark.asyncio
    async def test_reset_completed_upload_rejected(
        self, service, mock_db_session_factory, scalar_result
    ):
        """Test completed uploads cannot be reset."""
        _, session = mock_db_session_factory
        upload = SimpleNamespace(status=UploadStatus.COMPLETED, error_message=None, retry_count=0)
        session.execute = AsyncMock(return_value=scalar_result(upload))

        with pytest.raises(InvalidTransitionError):
            await service.reset_upload_for_retry(uuid.uuid4())

        assert upload.status == UploadStatus.COMPLETED
        session.commit.assert_not_called()
