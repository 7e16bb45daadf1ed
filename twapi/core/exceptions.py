"""
Custom exceptions for twapi operations.

Every error raised by the signing, token exchange and upload code derives
from TwapiException so callers can catch the whole family at once.
"""
from typing import Optional, Any


class TwapiException(Exception):
    """Base exception for all twapi errors."""

    def __init__(self, message: str) -> None:
        """
        Initialize the exception.

        Args:
            message: Error message
        """
        self.message = message
        super().__init__(message)


class TransportError(TwapiException):
    """Exception raised when the connection or the socket fails."""

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        """
        Initialize the exception.

        Args:
            message: Error message
            cause: Underlying network exception (if available)
        """
        self.cause = cause
        super().__init__(message)


class TokenExchangeError(TwapiException):
    """Exception raised when request-token or access-token returns non-2xx."""

    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"Token exchange failed with HTTP {status_code}: {body}")


class MalformedResponseError(TwapiException):
    """Exception raised when an expected field is missing from a response."""

    def __init__(self, field: str, body: Any = None) -> None:
        """
        Initialize the exception.

        Args:
            field: Name (or dotted path) of the missing field
            body: Parsed or raw response body (if available)
        """
        self.field = field
        self.body = body
        super().__init__(f"Response is missing expected field '{field}'")


class UploadStageError(TwapiException):
    """Exception raised when a chunked upload stage returns non-2xx."""

    def __init__(
        self,
        stage: str,
        status_code: int,
        body: str,
        media_id: Optional[str] = None,
        segment_index: Optional[int] = None,
        response: Any = None
    ) -> None:
        """
        Initialize the exception.

        Args:
            stage: Upload command that failed (INIT, APPEND, FINALIZE, STATUS)
            status_code: HTTP status of the failed response
            body: Response body text
            media_id: Media ID, once INIT has succeeded
            segment_index: Failing segment for APPEND
            response: Raw TwapiResponse
        """
        self.stage = stage
        self.status_code = status_code
        self.body = body
        self.media_id = media_id
        self.segment_index = segment_index
        self.response = response
        where = stage if segment_index is None else f"{stage} segment {segment_index}"
        super().__init__(f"Media upload {where} failed with HTTP {status_code}: {body}")


class FileIOError(TwapiException):
    """Exception raised when the local media file cannot be read."""

    def __init__(self, path: Any, cause: Optional[BaseException] = None) -> None:
        self.path = path
        self.cause = cause
        reason = f": {cause}" if cause else ""
        super().__init__(f"Cannot read media file {path}{reason}")


class ProcessingTimeoutError(TwapiException):
    """Exception raised when media processing exceeds the caller's bound."""

    def __init__(self, media_id: str, attempts: int, last_response: Any = None) -> None:
        self.media_id = media_id
        self.attempts = attempts
        self.last_response = last_response
        super().__init__(
            f"Media {media_id} still processing after {attempts} status checks"
        )
