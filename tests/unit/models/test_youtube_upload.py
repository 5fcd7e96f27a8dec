"""Unit tests for YouTube upload model structure."""

import pytest

from vodtube.models.youtube_config import PlaylistMapping, PrivacyStatus, YouTubeConfig
from vodtube.models.youtube_upload import UploadStatus, YouTubeUpload


class TestPrivacyStatus:
    """Tests for PrivacyStatus enum."""

    def test_enum_values(self):
        """Test that all expected enum values exist."""
        assert PrivacyStatus.PUBLIC.value == "public"
        assert PrivacyStatus.PRIVATE.value == "private"
        assert PrivacyStatus.UNLISTED.value == "unlisted"

    def test_invalid_value_raises(self):
        """Test that invalid value raises ValueError."""
        with pytest.raises(ValueError):
            PrivacyStatus("invalid")

    def test_is_string_enum(self):
        """Test that enum is a string enum."""
        assert isinstance(PrivacyStatus.PUBLIC, str)
        assert PrivacyStatus.PUBLIC == "public"


class TestUploadStatus:
    """Tests for UploadStatus enum."""

    def test_enum_values(self):
        """Test that all expected enum values exist."""
        assert UploadStatus.PENDING.value == "pending"
        assert UploadStatus.UPLOADING.value == "uploading"
        assert UploadStatus.COMPLETED.value == "completed"
        assert UploadStatus.FAILED.value == "failed"

    def test_all_statuses_count(self):
        """Test that all expected statuses exist."""
        assert len(list(UploadStatus)) == 4

    def test_enum_from_string(self):
        """Test creating enum from stored string."""
        assert UploadStatus("failed") == UploadStatus.FAILED


class TestYouTubeUploadModel:
    """Tests for YouTubeUpload model structure."""

    def test_tablename(self):
        """Test table name."""
        assert YouTubeUpload.__tablename__ == "youtube_uploads"

    def test_vod_id_unique(self):
        """Test one upload record per Vod."""
        assert YouTubeUpload.__table__.c.vod_id.unique is True

    def test_columns(self):
        """Test the lifecycle columns exist."""
        columns = set(YouTubeUpload.__table__.c.keys())
        assert {
            "id",
            "vod_id",
            "youtube_video_id",
            "youtube_url",
            "status",
            "error_message",
            "retry_count",
            "uploaded_at",
            "playlist_ids",
            "created_at",
            "updated_at",
        } <= columns

    def test_repr(self):
        """Test string representation."""
        upload = YouTubeUpload(status=UploadStatus.PENDING, youtube_video_id="yt1")
        assert "yt1" in repr(upload)


class TestYouTubeConfigModel:
    """Tests for YouTubeConfig and PlaylistMapping model structure."""

    def test_tablenames(self):
        """Test table names."""
        assert YouTubeConfig.__tablename__ == "youtube_configs"
        assert PlaylistMapping.__tablename__ == "youtube_playlist_mappings"

    def test_channel_id_unique(self):
        """Test at most one config per channel."""
        assert YouTubeConfig.__table__.c.channel_id.unique is True

    def test_mappings_cascade_delete(self):
        """Test mappings are deleted with their config."""
        relationship = YouTubeConfig.__mapper__.relationships["playlist_mappings"]
        assert relationship.cascade.delete_orphan is True

    def test_mapping_repr(self):
        """Test string representation."""
        mapping = PlaylistMapping(game_category="mine*", playlist_id="PL1", priority=2)
        assert "mine*" in repr(mapping)
        assert "PL1" in repr(mapping)
