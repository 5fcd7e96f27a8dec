"""Unit tests for YouTube API client."""

from datetime import datetime
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from googleapiclient.errors import HttpError

from vodtube.core.exceptions import CredentialError, TokenExpiredError, YouTubeAPIError
from vodtube.infrastructure.youtube_api import UploadMetadata, UploadResult, YouTubeAPIClient


def _sync_to_thread(f, *a, **kw):
    """Helper to mock asyncio.to_thread for synchronous execution."""
    return f(*a, **kw) if callable(f) else f


def _http_error(status: int, content: bytes) -> HttpError:
    resp = MagicMock()
    resp.status = status
    return HttpError(resp=resp, content=content)


class TestUploadMetadata:
    """Tests for UploadMetadata model."""

    def test_metadata_defaults(self):
        """Test metadata default values."""
        metadata = UploadMetadata(title="Video")

        assert metadata.tags is None
        assert metadata.description == ""
        assert metadata.category_id == "20"
        assert metadata.privacy_status == "private"
        assert metadata.notify_subscribers is False
        assert metadata.made_for_kids is False


class TestYouTubeAPIClient:
    """Tests for YouTubeAPIClient."""

    @pytest.fixture
    def mock_youtube(self):
        """Create mock YouTube service resource."""
        return MagicMock()

    @pytest.fixture
    def mock_auth(self, mock_youtube):
        """Create mock auth client."""
        auth = MagicMock()
        auth.get_youtube_service = AsyncMock(return_value=mock_youtube)
        return auth

    @pytest.fixture
    def client(self, mock_auth):
        """Create YouTubeAPIClient."""
        return YouTubeAPIClient(auth_client=mock_auth, chunk_size=256 * 1024)

    # =========================================================================
    # authenticate() tests
    # =========================================================================

    @pytest.mark.asyncio
    async def test_authenticate(self, client, mock_youtube):
        """Test authenticate returns the service."""
        assert await client.authenticate() is mock_youtube

    @pytest.mark.asyncio
    async def test_authenticate_keeps_credential_errors(self, client, mock_auth):
        """Test credential errors pass through unchanged."""
        error = TokenExpiredError(message="Failed to refresh token")
        mock_auth.get_youtube_service = AsyncMock(side_effect=error)

        with pytest.raises(TokenExpiredError) as exc_info:
            await client.authenticate()

        assert exc_info.value is error

    @pytest.mark.asyncio
    async def test_authenticate_wraps_other_errors(self, client, mock_auth):
        """Test unexpected errors become CredentialError."""
        mock_auth.get_youtube_service = AsyncMock(side_effect=RuntimeError("discovery failed"))

        with pytest.raises(CredentialError) as exc_info:
            await client.authenticate()

        assert "discovery failed" in str(exc_info.value)

    # =========================================================================
    # Body building tests
    # =========================================================================

    def test_watch_url(self, mock_auth):
        """Test watch URL uses the configured base."""
        client = YouTubeAPIClient(auth_client=mock_auth, watch_url_base="https://youtu.be/")
        assert client.watch_url("abc") == "https://youtu.be/abc"

    def test_build_video_body(self, client):
        """Test request body fields."""
        body = client._build_video_body(
            UploadMetadata(
                title="Stream",
                description="desc",
                tags=["a", "b"],
                category_id="20",
                privacy_status="unlisted",
            )
        )

        assert body["snippet"] == {
            "title": "Stream",
            "description": "desc",
            "categoryId": "20",
            "tags": ["a", "b"],
        }
        assert body["status"] == {"privacyStatus": "unlisted", "selfDeclaredMadeForKids": False}

    def test_build_video_body_truncates(self, client):
        """Test title and description are cut to YouTube limits."""
        body = client._build_video_body(UploadMetadata(title="t" * 150, description="d" * 6000))

        assert len(body["snippet"]["title"]) == 100
        assert len(body["snippet"]["description"]) == 5000
        assert "tags" not in body["snippet"]

    # =========================================================================
    # upload_video() tests
    # =========================================================================

    @pytest.mark.asyncio
    async def test_upload_video(self, client, mock_youtube):
        """Test upload runs a resumable transfer and returns the result."""
        progress = MagicMock()

        with patch("vodtube.infrastructure.youtube_api.ResumableTransfer") as mock_transfer_cls:
            transfer = mock_transfer_cls.return_value
            transfer.run = AsyncMock(return_value="yt_abc123")
            transfer.bytes_read = 1024

            result = await client.upload_video(
                video_path=Path("/vods/stream.mp4"),
                metadata=UploadMetadata(title="Stream", notify_subscribers=True),
                on_progress=progress,
            )

        kwargs = mock_transfer_cls.call_args.kwargs
        assert kwargs["service"] is mock_youtube
        assert kwargs["file_path"] == Path("/vods/stream.mp4")
        assert kwargs["chunk_size"] == 256 * 1024
        assert kwargs["notify_subscribers"] is True
        assert kwargs["on_progress"] is progress
        assert kwargs["body"]["snippet"]["title"] == "Stream"

        assert isinstance(result, UploadResult)
        assert result.video_id == "yt_abc123"
        assert result.url == "https://www.youtube.com/watch?v=yt_abc123"
        assert isinstance(result.uploaded_at, datetime)

    @pytest.mark.asyncio
    async def test_upload_video_with_service_skips_authentication(self, client, mock_auth):
        """Test a service passed in is used without re-authenticating."""
        service = MagicMock()

        with patch("vodtube.infrastructure.youtube_api.ResumableTransfer") as mock_transfer_cls:
            mock_transfer_cls.return_value.run = AsyncMock(return_value="yt_abc123")
            mock_transfer_cls.return_value.bytes_read = 0

            await client.upload_video(
                video_path=Path("/vods/stream.mp4"),
                metadata=UploadMetadata(title="Stream"),
                service=service,
            )

        mock_auth.get_youtube_service.assert_not_called()
        assert mock_transfer_cls.call_args.kwargs["service"] is service

    # =========================================================================
    # update_metadata() tests
    # =========================================================================

    @pytest.mark.asyncio
    async def test_update_metadata(self, client, mock_youtube):
        """Test snippet update request."""
        mock_youtube.videos.return_value.update.return_value.execute.return_value = {
            "id": "yt_abc123"
        }

        with patch("asyncio.to_thread", side_effect=_sync_to_thread):
            response = await client.update_metadata(
                "yt_abc123",
                UploadMetadata(title="Stream", description="desc\n\nChapters:\n0:00 - Intro\n"),
            )

        assert response == {"id": "yt_abc123"}
        kwargs = mock_youtube.videos.return_value.update.call_args.kwargs
        assert kwargs["part"] == "snippet"
        assert kwargs["body"]["id"] == "yt_abc123"
        assert "status" not in kwargs["body"]
        assert kwargs["body"]["snippet"]["description"].endswith("0:00 - Intro\n")

    @pytest.mark.asyncio
    async def test_update_metadata_error(self, client, mock_youtube):
        """Test update errors are mapped."""
        mock_youtube.videos.return_value.update.return_value.execute.side_effect = _http_error(
            404, b"Video not found"
        )

        with (
            patch("asyncio.to_thread", side_effect=_sync_to_thread),
            pytest.raises(YouTubeAPIError) as exc_info,
        ):
            await client.update_metadata("yt_abc123", UploadMetadata(title="Stream"))

        assert exc_info.value.error_code == "404"

    # =========================================================================
    # add_video_to_playlist() tests
    # =========================================================================

    @pytest.mark.asyncio
    async def test_add_video_to_playlist(self, client, mock_youtube):
        """Test playlist item insert request."""
        insert = mock_youtube.playlistItems.return_value.insert
        insert.return_value.execute.return_value = {"id": "item1"}

        with patch("asyncio.to_thread", side_effect=_sync_to_thread):
            response = await client.add_video_to_playlist("yt_abc123", "PL1")

        assert response == {"id": "item1"}
        insert.assert_called_once_with(
            part="snippet",
            body={
                "snippet": {
                    "playlistId": "PL1",
                    "resourceId": {"kind": "youtube#video", "videoId": "yt_abc123"},
                }
            },
        )

    @pytest.mark.asyncio
    async def test_add_video_to_playlist_error(self, client, mock_youtube):
        """Test playlist errors are mapped with the playlist ID."""
        insert = mock_youtube.playlistItems.return_value.insert
        insert.return_value.execute.side_effect = _http_error(404, b"playlistNotFound")

        with (
            patch("asyncio.to_thread", side_effect=_sync_to_thread),
            pytest.raises(YouTubeAPIError) as exc_info,
        ):
            await client.add_video_to_playlist("yt_abc123", "PL_missing")

        assert exc_info.value.context["playlist_id"] == "PL_missing"
        assert exc_info.value.error_code == "404"
