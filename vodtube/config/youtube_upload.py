"""YouTube upload configuration models.

This module provides typed Pydantic configuration for the YouTube upload job:
- YouTube API settings (transfer chunking, watch URL, playlist routing)
- Heartbeat settings for long-running upload tasks
- Upload task scheduling limits
"""

from pydantic import BaseModel, Field


class YouTubeAPIConfig(BaseModel):
    """Configuration for YouTube API operations.

    Attributes:
        chunk_size_mb: Chunk size in MB for the resumable transfer
        watch_url_base: Prefix of the public watch URL, the video ID is appended
        dedupe_playlists: Drop repeated playlist IDs produced by different mappings
        error_message_max_length: Maximum stored length of a failure message
    """

    chunk_size_mb: int = Field(default=8, ge=1, le=256, description="Upload chunk size in MB")
    watch_url_base: str = Field(
        default="https://www.youtube.com/watch?v=", description="Watch URL prefix"
    )
    dedupe_playlists: bool = Field(
        default=False, description="Remove duplicate playlist IDs across mappings"
    )
    error_message_max_length: int = Field(
        default=2000, ge=100, le=10000, description="Max stored error message length"
    )

    @property
    def chunk_size_bytes(self) -> int:
        """Chunk size in bytes."""
        return self.chunk_size_mb * 1024 * 1024


class HeartbeatConfig(BaseModel):
    """Configuration for upload task liveness reporting.

    Attributes:
        enabled: Whether to publish heartbeats
        interval_seconds: Seconds between heartbeats
        ttl_seconds: Expiry of the liveness key, should exceed the interval
        key_prefix: Redis key prefix, the task ID is appended
        write_timeout_seconds: Upper bound on one Redis write and on shutdown
    """

    enabled: bool = Field(default=True, description="Publish heartbeats")
    interval_seconds: int = Field(default=30, ge=1, le=600, description="Heartbeat interval")
    ttl_seconds: int = Field(default=120, ge=5, le=3600, description="Liveness key TTL")
    key_prefix: str = Field(default="vodtube:heartbeat:", description="Redis key prefix")
    write_timeout_seconds: float = Field(
        default=5.0, gt=0, le=60, description="Redis write and shutdown timeout"
    )


class UploadTaskConfig(BaseModel):
    """Configuration for the upload Celery task.

    Attributes:
        max_attempts: Total attempts including the first run
        retry_delay_seconds: Delay before a scheduler retry
        time_limit_hours: Hard wall-clock limit for one attempt
    """

    max_attempts: int = Field(default=3, ge=1, le=10, description="Total attempts")
    retry_delay_seconds: int = Field(default=300, ge=1, le=3600, description="Retry delay")
    time_limit_hours: int = Field(default=12, ge=1, le=48, description="Hard time limit")


class YouTubeUploadPipelineConfig(BaseModel):
    """Complete YouTube upload configuration.

    All sub-configs have defaults and can be used without explicit configuration.
    """

    youtube_api: YouTubeAPIConfig = Field(default_factory=YouTubeAPIConfig)
    heartbeat: HeartbeatConfig = Field(default_factory=HeartbeatConfig)
    task: UploadTaskConfig = Field(default_factory=UploadTaskConfig)


__all__ = [
    "YouTubeAPIConfig",
    "HeartbeatConfig",
    "UploadTaskConfig",
    "YouTubeUploadPipelineConfig",
]
