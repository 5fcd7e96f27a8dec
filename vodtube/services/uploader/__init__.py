"""YouTube upload services.

This module provides services for uploading archived VODs to YouTube:
- YouTubeUploader: Upload lifecycle orchestration
- YouTubeConfigService: Per-channel settings and playlist mappings
- PlaylistRouter: Category-based playlist selection
"""

from vodtube.services.uploader.config_service import YouTubeConfigService
from vodtube.services.uploader.playlist_router import PlaylistRouter
from vodtube.services.uploader.youtube_uploader import UploadOutcome, YouTubeUploader

__all__ = [
    "YouTubeUploader",
    "UploadOutcome",
    "YouTubeConfigService",
    "PlaylistRouter",
]
