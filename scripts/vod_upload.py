#!/usr/bin/env python3
"""Operator commands for YouTube VOD uploads.

Usage:
    # Upload a VOD in this process (no worker needed)
    python scripts/vod_upload.py upload <vod_id>

    # Schedule the upload on the Celery "upload" queue
    python scripts/vod_upload.py upload <vod_id> --enqueue

    # Reset a failed upload and schedule it again
    python scripts/vod_upload.py retry <vod_id>

    # Show the upload record of a VOD
    python scripts/vod_upload.py status <vod_id>

    # Store an OAuth token pair obtained out of band
    python scripts/vod_upload.py save-token --access-token ... --refresh-token ...

    # Show whether a usable credential is stored
    python scripts/vod_upload.py auth-info
"""

import argparse
import asyncio
import sys
import uuid
from datetime import UTC, datetime, timedelta

from vodtube.core.container import get_container
from vodtube.core.exceptions import VodTubeError
from vodtube.core.logging import get_logger, setup_logging

logger = get_logger(__name__)


async def upload(vod_id: uuid.UUID) -> None:
    """Run the upload lifecycle for one VOD."""
    uploader = get_container().services.youtube_uploader()
    outcome = await uploader.process_upload(vod_id)

    if outcome.skipped:
        logger.info("Upload skipped", vod_id=str(vod_id), reason=outcome.skipped_reason)
        return

    logger.info(
        "Upload finished",
        vod_id=str(vod_id),
        url=outcome.youtube_url,
        playlists=outcome.added_playlist_ids,
        warnings=outcome.warnings,
    )


async def show_status(vod_id: uuid.UUID) -> None:
    """Print the upload record of a VOD."""
    service = get_container().services.youtube_config_service()
    record = await service.get_upload_status(vod_id)
    logger.info(
        "Upload status",
        vod_id=str(vod_id),
        status=record.status,
        youtube_url=record.youtube_url,
        retry_count=record.retry_count,
        error=record.error_message,
        playlist_ids=record.playlist_ids,
    )


async def save_token(access_token: str, refresh_token: str, expires_in: int) -> None:
    """Store an OAuth token pair."""
    auth = get_container().infrastructure.youtube_auth()
    expiry = datetime.now(tz=UTC) + timedelta(seconds=expires_in)
    await auth.save_credentials(access_token, refresh_token, expiry)
    logger.info("Token stored", expiry=expiry.isoformat())


async def auth_info() -> None:
    """Print credential status without token values."""
    auth = get_container().infrastructure.youtube_auth()
    logger.info("Credential status", **await auth.get_credentials_info())


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Upload archived VODs to YouTube",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    upload_parser = subparsers.add_parser("upload", help="Upload a VOD")
    upload_parser.add_argument("vod_id", type=uuid.UUID)
    upload_parser.add_argument(
        "--enqueue",
        action="store_true",
        help="Schedule on the worker queue instead of uploading in this process",
    )

    retry_parser = subparsers.add_parser("retry", help="Reset and re-enqueue a failed upload")
    retry_parser.add_argument("vod_id", type=uuid.UUID)

    status_parser = subparsers.add_parser("status", help="Show the upload record of a VOD")
    status_parser.add_argument("vod_id", type=uuid.UUID)

    token_parser = subparsers.add_parser("save-token", help="Store an OAuth token pair")
    token_parser.add_argument("--access-token", required=True)
    token_parser.add_argument("--refresh-token", required=True)
    token_parser.add_argument(
        "--expires-in",
        type=int,
        default=3600,
        help="Access token lifetime in seconds (default: 3600)",
    )

    subparsers.add_parser("auth-info", help="Show credential status")

    args = parser.parse_args()
    setup_logging()

    try:
        if args.command == "upload" and args.enqueue:
            from vodtube.workers.upload import enqueue_upload

            result = enqueue_upload(args.vod_id)
            logger.info("Upload enqueued", vod_id=str(args.vod_id), task_id=result.id)
        elif args.command == "upload":
            asyncio.run(upload(args.vod_id))
        elif args.command == "retry":
            from vodtube.workers.upload import enqueue_upload_retry

            result = asyncio.run(enqueue_upload_retry(args.vod_id))
            logger.info("Retry enqueued", vod_id=str(args.vod_id), task_id=result.id)
        elif args.command == "status":
            asyncio.run(show_status(args.vod_id))
        elif args.command == "save-token":
            asyncio.run(save_token(args.access_token, args.refresh_token, args.expires_in))
        else:
            asyncio.run(auth_info())
    except KeyboardInterrupt:
        logger.info("Cancelled by user")
        sys.exit(1)
    except VodTubeError as e:
        logger.error("Command failed", **e.to_dict())
        sys.exit(1)


if __name__ == "__main__":
    main()
