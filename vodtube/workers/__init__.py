"""Celery workers for VodTube.

This package contains Celery tasks and configuration for background processing.

Modules:
- celery_app: Celery application configuration
- heartbeat: Liveness reporting for long-running tasks
- upload: YouTube upload task
"""

from vodtube.workers.celery_app import celery_app

__all__ = [
    "celery_app",
]
