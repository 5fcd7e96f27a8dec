"""Upload configuration models."""

from vodtube.config.youtube_upload import (
    HeartbeatConfig,
    UploadTaskConfig,
    YouTubeAPIConfig,
    YouTubeUploadPipelineConfig,
)

__all__ = [
    "HeartbeatConfig",
    "UploadTaskConfig",
    "YouTubeAPIConfig",
    "YouTubeUploadPipelineConfig",
]
