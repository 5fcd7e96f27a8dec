"""Celery application configuration.

This module configures the Celery application for VodTube background tasks.
Uses Redis as both broker and result backend.
"""

from celery import Celery, signals

from vodtube.core.config import get_config
from vodtube.core.logging import setup_logging

config = get_config()

# Create Celery app
celery_app = Celery(
    "vodtube",
    broker=str(config.celery_broker_url),
    backend=str(config.celery_result_backend),
    include=["vodtube.workers.upload"],
)

# Celery configuration
celery_app.conf.update(
    # Task settings
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    # Task execution settings
    task_acks_late=True,
    task_reject_on_worker_lost=True,
    task_time_limit=600,  # 10 minutes default; uploads override it
    # Worker settings
    worker_prefetch_multiplier=1,
    worker_max_tasks_per_child=100,
    # Result settings
    result_expires=86400,  # 24 hours
    result_extended=True,
    # Task routes
    task_routes={
        "vodtube.workers.upload.*": {"queue": "upload"},
    },
    # Default queue
    task_default_queue="default",
)


@signals.setup_logging.connect
def configure_worker_logging(**kwargs: object) -> None:
    """Use structlog instead of Celery's own logging setup."""
    setup_logging()


__all__ = ["celery_app"]
