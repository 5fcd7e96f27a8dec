"""Liveness heartbeat for long-running tasks.

A TaskHeartbeat writes a short-lived Redis key at a fixed interval while the
wrapped work runs. Monitoring treats a task whose key expired as dead. The
heartbeat runs as its own asyncio task. Every Redis call is bounded by a
timeout, and failures are logged without reaching the work it accompanies.

Example:
    >>> async with TaskHeartbeat(redis, task_id="abc", config=HeartbeatConfig()):
    ...     await uploader.process_upload(vod_id)
"""

import asyncio
import json
from datetime import UTC, datetime
from typing import Any

from redis.asyncio import Redis as AsyncRedis

from vodtube.config.youtube_upload import HeartbeatConfig
from vodtube.core.logging import get_logger

logger = get_logger(__name__)


class TaskHeartbeat:
    """Periodically refresh a Redis liveness key for a task.

    Attributes:
        key: Redis key written on every beat
        beats: Number of successful writes
    """

    def __init__(
        self,
        redis: AsyncRedis,
        task_id: str,
        config: HeartbeatConfig | None = None,
        payload: dict[str, Any] | None = None,
    ) -> None:
        """Initialize heartbeat.

        Args:
            redis: Async Redis client
            task_id: Task identifier, appended to the key prefix
            config: Heartbeat settings
            payload: Extra fields stored with every beat
        """
        self.redis = redis
        self.task_id = task_id
        self.config = config or HeartbeatConfig()
        self.payload = payload or {}
        self.key = f"{self.config.key_prefix}{task_id}"
        self.beats = 0
        self._stop = asyncio.Event()
        self._task: asyncio.Task | None = None

    async def beat(self) -> None:
        """Write the liveness key once."""
        value = json.dumps(
            {
                "task_id": self.task_id,
                "at": datetime.now(tz=UTC).isoformat(),
                **self.payload,
            }
        )
        await self.redis.set(self.key, value, ex=self.config.ttl_seconds)
        self.beats += 1

    async def _run(self) -> None:
        while not self._stop.is_set():
            try:
                await asyncio.wait_for(self.beat(), timeout=self.config.write_timeout_seconds)
            except Exception as e:
                logger.warning(
                    "Heartbeat write failed", key=self.key, error=str(e) or type(e).__name__
                )
            try:
                await asyncio.wait_for(self._stop.wait(), timeout=self.config.interval_seconds)
            except TimeoutError:
                continue

    async def start(self) -> None:
        """Start beating in the background."""
        if not self.config.enabled or self._task is not None:
            return
        self._stop.clear()
        self._task = asyncio.create_task(self._run())
        logger.debug("Heartbeat started", key=self.key, interval=self.config.interval_seconds)

    async def stop(self) -> None:
        """Stop beating and remove the liveness key."""
        if self._task is None:
            return
        self._stop.set()
        task, self._task = self._task, None
        try:
            await asyncio.wait_for(task, timeout=self.config.write_timeout_seconds)
        except TimeoutError:
            logger.warning("Heartbeat did not stop in time", key=self.key)

        try:
            await asyncio.wait_for(
                self.redis.delete(self.key), timeout=self.config.write_timeout_seconds
            )
        except Exception as e:
            logger.warning("Heartbeat cleanup failed", key=self.key, error=str(e))

        logger.debug("Heartbeat stopped", key=self.key, beats=self.beats)

    async def __aenter__(self) -> "TaskHeartbeat":
        await self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.stop()


__all__ = ["TaskHeartbeat"]
