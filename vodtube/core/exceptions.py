"""Custom exceptions for VodTube.

All exceptions inherit from VodTubeError for easy catching. Each carries a
context dictionary for structured logging; use the `context` property or
`to_dict()` to access the details.
"""

from typing import Any


class VodTubeError(Exception):
    """Base exception for all VodTube errors.

    Attributes:
        context: Dictionary with additional error context

    Example:
        >>> try:
        ...     raise VodTubeError("Something went wrong", context={"vod_id": "123"})
        ... except VodTubeError as e:
        ...     print(f"Error: {e}, Context: {e.context}")
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        """Initialize VodTubeError.

        Args:
            message: Error message
            context: Optional dictionary with additional context
        """
        self.context = context or {}
        super().__init__(message)

    def with_context(self, **kwargs: Any) -> "VodTubeError":
        """Add additional context to the exception.

        Args:
            **kwargs: Key-value pairs to add to context

        Returns:
            Self for method chaining
        """
        self.context.update(kwargs)
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for logging/serialization.

        Returns:
            Dictionary with error type, message, and context
        """
        return {
            "error_type": self.__class__.__name__,
            "message": str(self),
            "context": self.context,
        }


# ============================================
# Database Errors
# ============================================


class DatabaseError(VodTubeError):
    """Base exception for database-related errors."""

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        operation: str | None = None,
    ) -> None:
        """Initialize DatabaseError.

        Args:
            message: Error message
            context: Additional context
            operation: Database operation that failed (e.g., "insert", "update")
        """
        ctx = context or {}
        if operation:
            ctx["operation"] = operation
        super().__init__(message, context=ctx)


class RecordNotFoundError(DatabaseError):
    """Raised when a database record is not found.

    Attributes:
        model: The model class that was queried
        record_id: The ID that was not found
    """

    def __init__(
        self,
        model: str,
        record_id: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize RecordNotFoundError.

        Args:
            model: Name of the model class
            record_id: ID that was not found
            context: Additional context
        """
        ctx = context or {}
        ctx.update({"model": model, "record_id": record_id})
        super().__init__(f"{model} with id={record_id} not found", context=ctx)
        self.model = model
        self.record_id = record_id


# ============================================
# Upload Errors
# ============================================


class UploadError(VodTubeError):
    """Base exception for upload-related errors."""

    def __init__(
        self,
        message: str,
        video_id: str | None = None,
        platform: str = "youtube",
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize UploadError.

        Args:
            message: Error message
            video_id: Video ID being uploaded
            platform: Upload platform
            context: Additional context
        """
        ctx = context or {}
        if video_id:
            ctx["video_id"] = video_id
        ctx["platform"] = platform
        super().__init__(message, context=ctx)


class YouTubeAPIError(UploadError):
    """Raised when a YouTube API call fails.

    Attributes:
        error_code: YouTube API error code (usually the HTTP status)
        error_reason: Error reason from API
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        error_reason: str | None = None,
        video_id: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize YouTubeAPIError.

        Args:
            message: Error message
            error_code: YouTube error code
            error_reason: Error reason
            video_id: Video ID
            context: Additional context
        """
        ctx = context or {}
        if error_code:
            ctx["error_code"] = error_code
        if error_reason:
            ctx["error_reason"] = error_reason

        self.error_code = error_code
        self.error_reason = error_reason

        super().__init__(message, video_id=video_id, platform="youtube", context=ctx)


class TransferError(YouTubeAPIError):
    """Raised when streaming a video file to YouTube fails.

    Covers local file errors as well as remote rejections. Retrying is an
    explicit, caller-initiated action.

    Attributes:
        file_path: Local file that was being sent
        bytes_sent: Bytes read from the file before the failure
    """

    def __init__(
        self,
        message: str,
        file_path: str | None = None,
        bytes_sent: int | None = None,
        error_code: str | None = None,
        error_reason: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize TransferError.

        Args:
            message: Error message
            file_path: Local file path
            bytes_sent: Bytes read before the failure
            error_code: HTTP status code if the remote rejected the upload
            error_reason: Remote error body
            context: Additional context
        """
        ctx = context or {}
        if file_path:
            ctx["file_path"] = file_path
        if bytes_sent is not None:
            ctx["bytes_sent"] = bytes_sent

        self.file_path = file_path
        self.bytes_sent = bytes_sent

        super().__init__(
            message,
            error_code=error_code,
            error_reason=error_reason,
            context=ctx,
        )


class QuotaExceededError(TransferError):
    """Raised when the YouTube API quota is exceeded."""

    def __init__(
        self,
        message: str = "YouTube API quota exceeded",
        file_path: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, file_path=file_path, error_code="403", context=context)


# ============================================
# Authentication Errors
# ============================================


class AuthError(VodTubeError):
    """Base exception for authentication errors."""


class CredentialError(AuthError):
    """Raised when no usable YouTube credential is available.

    Attributes:
        credential_type: Type of credential (oauth_token, oauth_client, etc.)
    """

    def __init__(
        self,
        message: str = "No usable YouTube credentials",
        credential_type: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize CredentialError.

        Args:
            message: Error message
            credential_type: Type of credential
            context: Additional context
        """
        ctx = context or {}
        if credential_type:
            ctx["credential_type"] = credential_type

        self.credential_type = credential_type

        super().__init__(message, context=ctx)


class TokenExpiredError(CredentialError):
    """Raised when an expired access token cannot be refreshed.

    Attributes:
        expired_at: When the token expired
    """

    def __init__(
        self,
        message: str = "Token has expired",
        token_type: str | None = None,
        expired_at: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize TokenExpiredError.

        Args:
            message: Error message
            token_type: Type of token (access, refresh)
            expired_at: Expiration time (ISO format)
            context: Additional context
        """
        ctx = context or {}
        if expired_at:
            ctx["expired_at"] = expired_at

        self.expired_at = expired_at

        super().__init__(message, credential_type=token_type, context=ctx)


__all__ = [
    "VodTubeError",
    "DatabaseError",
    "RecordNotFoundError",
    "UploadError",
    "YouTubeAPIError",
    "TransferError",
    "QuotaExceededError",
    "AuthError",
    "CredentialError",
    "TokenExpiredError",
]
