"""YouTube OAuth credential provider.

This module provides the credential capability used by the YouTube API client.
The token pair lives in the youtube_credentials table; expired access tokens
are refreshed transparently and written back.

Required OAuth scopes:
- youtube.upload: Upload videos
- youtube.force-ssl: Update video metadata and manage playlists
"""

import asyncio
from datetime import UTC, datetime
from typing import Any

from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from googleapiclient.discovery import Resource, build
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from vodtube.core.exceptions import CredentialError, TokenExpiredError
from vodtube.core.logging import get_logger
from vodtube.core.types import SessionFactory
from vodtube.models.youtube_credential import YouTubeCredential

logger = get_logger(__name__)

YOUTUBE_SCOPES = [
    "https://www.googleapis.com/auth/youtube.upload",
    "https://www.googleapis.com/auth/youtube.force-ssl",
]

DEFAULT_TOKEN_URI = "https://oauth2.googleapis.com/token"


def _to_naive_utc(value: datetime) -> datetime:
    # google-auth compares expiry against naive UTC timestamps
    if value.tzinfo is None:
        return value
    return value.astimezone(UTC).replace(tzinfo=None)


def _to_aware_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class YouTubeAuthClient:
    """Database-backed YouTube OAuth credential provider.

    Constructed once and injected into the API client. Concurrent workers may
    refresh the same credential at the same time; the last write wins, which
    is safe because every refreshed token is valid.

    Example:
        >>> auth = YouTubeAuthClient(
        ...     db_session_factory=session_factory,
        ...     client_id="...apps.googleusercontent.com",
        ...     client_secret="...",
        ... )
        >>> youtube = await auth.get_youtube_service()
    """

    def __init__(
        self,
        db_session_factory: SessionFactory,
        client_id: str,
        client_secret: str,
        token_uri: str = DEFAULT_TOKEN_URI,
        scopes: list[str] | None = None,
    ) -> None:
        """Initialize YouTube auth client.

        Args:
            db_session_factory: Database session factory
            client_id: OAuth client ID used for token refresh
            client_secret: OAuth client secret used for token refresh
            token_uri: OAuth token endpoint
            scopes: Authorized scopes
        """
        self.db_session_factory = db_session_factory
        self.client_id = client_id
        self.client_secret = client_secret
        self.token_uri = token_uri
        self.scopes = scopes or YOUTUBE_SCOPES
        self._credentials: Credentials | None = None
        self._youtube_service: Resource | None = None

        logger.info("YouTubeAuthClient initialized", token_uri=token_uri)

    async def _load_record(self, session: AsyncSession) -> YouTubeCredential | None:
        result = await session.execute(
            select(YouTubeCredential).order_by(YouTubeCredential.created_at).limit(1)
        )
        return result.scalar_one_or_none()

    def _build_credentials(self, record: YouTubeCredential) -> Credentials:
        return Credentials(
            token=record.access_token,
            refresh_token=record.refresh_token,
            token_uri=self.token_uri,
            client_id=self.client_id,
            client_secret=self.client_secret,
            scopes=self.scopes,
            expiry=_to_naive_utc(record.expiry),
        )

    async def _refresh_credentials(self, creds: Credentials) -> Credentials:
        """Refresh an expired access token.

        Raises:
            CredentialError: If the OAuth client is not configured
            TokenExpiredError: If the refresh exchange fails
        """
        if not creds.refresh_token:
            raise TokenExpiredError(
                token_type="refresh",
                message="No refresh token available",
            )
        if not self.client_id or not self.client_secret:
            raise CredentialError(
                message="YouTube OAuth client ID/secret not configured",
                credential_type="oauth_client",
            )

        try:
            await asyncio.to_thread(creds.refresh, Request())
        except Exception as e:
            logger.error("Failed to refresh credentials", error=str(e))
            raise TokenExpiredError(
                token_type="access",
                message=f"Failed to refresh token: {e}",
            ) from e

        logger.info("Successfully refreshed credentials")
        return creds

    async def get_credentials(self) -> Credentials:
        """Get valid credentials, refreshing and persisting them if expired.

        Returns:
            Valid OAuth credentials

        Raises:
            CredentialError: If no credential is stored or it cannot be refreshed
        """
        if self._credentials and self._credentials.valid:
            return self._credentials

        async with self.db_session_factory() as session:
            record = await self._load_record(session)
            if record is None:
                raise CredentialError(
                    message="No YouTube credentials found",
                    credential_type="oauth_token",
                )

            creds = self._build_credentials(record)

            if _to_aware_utc(record.expiry) <= datetime.now(tz=UTC):
                creds = await self._refresh_credentials(creds)
                record.access_token = creds.token
                if creds.expiry:
                    record.expiry = _to_aware_utc(creds.expiry)
                if creds.refresh_token:
                    record.refresh_token = creds.refresh_token
                await session.commit()
                logger.debug("Saved refreshed credentials", expiry=str(record.expiry))

        self._credentials = creds
        self._youtube_service = None
        return creds

    async def get_youtube_service(self) -> Resource:
        """Get authenticated YouTube Data API v3 service.

        Returns:
            YouTube API service resource

        Raises:
            CredentialError: If authentication fails
        """
        if self._youtube_service and self._credentials and self._credentials.valid:
            return self._youtube_service

        creds = await self.get_credentials()
        self._youtube_service = build("youtube", "v3", credentials=creds, cache_discovery=False)
        logger.debug("Created YouTube Data API service")
        return self._youtube_service

    async def save_credentials(
        self,
        access_token: str,
        refresh_token: str,
        expiry: datetime,
        token_type: str = "Bearer",
    ) -> YouTubeCredential:
        """Store a token pair, replacing the existing one if present.

        Args:
            access_token: OAuth access token
            refresh_token: OAuth refresh token
            expiry: Access token expiry
            token_type: Token type

        Returns:
            The stored credential record
        """
        async with self.db_session_factory() as session:
            record = await self._load_record(session)
            if record is None:
                record = YouTubeCredential(
                    access_token=access_token,
                    refresh_token=refresh_token,
                    token_type=token_type,
                    expiry=_to_aware_utc(expiry),
                )
                session.add(record)
            else:
                record.access_token = access_token
                record.refresh_token = refresh_token
                record.token_type = token_type
                record.expiry = _to_aware_utc(expiry)
            await session.commit()

        self._credentials = None
        self._youtube_service = None
        logger.info("Saved YouTube credentials")
        return record

    async def is_authenticated(self) -> bool:
        """Check if a usable credential is available."""
        try:
            await self.get_credentials()
            return True
        except CredentialError:
            return False

    async def get_credentials_info(self) -> dict[str, Any]:
        """Get info about the stored credential (without token values)."""
        async with self.db_session_factory() as session:
            record = await self._load_record(session)

        if record is None:
            return {"authenticated": False}

        expiry = _to_aware_utc(record.expiry)
        return {
            "authenticated": True,
            "expired": expiry <= datetime.now(tz=UTC),
            "has_refresh_token": bool(record.refresh_token),
            "token_type": record.token_type,
            "expiry": expiry.isoformat(),
        }


__all__ = [
    "YouTubeAuthClient",
    "YOUTUBE_SCOPES",
]
