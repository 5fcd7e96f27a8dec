"""Unit tests for Channel, Vod and Chapter model structure."""

from vodtube.models.channel import Channel
from vodtube.models.vod import Chapter, Vod
from vodtube.models.youtube_credential import YouTubeCredential


class TestChannelModel:
    """Tests for Channel model structure."""

    def test_tablename(self):
        """Test table name."""
        assert Channel.__tablename__ == "channels"

    def test_youtube_config_is_scalar(self):
        """Test the YouTube config relationship is one-to-one."""
        relationship = Channel.__mapper__.relationships["youtube_config"]
        assert relationship.uselist is False


class TestVodModel:
    """Tests for Vod model structure."""

    def test_tablename(self):
        """Test table name."""
        assert Vod.__tablename__ == "vods"

    def test_youtube_upload_is_scalar(self):
        """Test the upload relationship is one-to-one."""
        relationship = Vod.__mapper__.relationships["youtube_upload"]
        assert relationship.uselist is False

    def test_chapters_ordered_by_start(self):
        """Test chapters load in chronological order."""
        relationship = Vod.__mapper__.relationships["chapters"]
        assert "start" in str(relationship.order_by[0])

    def test_repr_truncates_title(self):
        """Test long titles are shortened in repr."""
        vod = Vod(title="x" * 100)
        assert "x" * 31 not in repr(vod)


class TestChapterModel:
    """Tests for Chapter model structure."""

    def test_tablename(self):
        """Test table name."""
        assert Chapter.__tablename__ == "chapters"

    def test_repr(self):
        """Test string representation."""
        chapter = Chapter(start=600, type="Valorant")
        assert "Valorant" in repr(chapter)


class TestYouTubeCredentialModel:
    """Tests for YouTubeCredential model structure."""

    def test_tablename(self):
        """Test table name."""
        assert YouTubeCredential.__tablename__ == "youtube_credentials"

    def test_repr_hides_tokens(self):
        """Test token values never appear in repr."""
        credential = YouTubeCredential(access_token="secret_access", refresh_token="secret_refresh")
        assert "secret" not in repr(credential)
