"""
Data models for the media upload module.

Uses dataclasses for immutable, type-safe data structures.
"""
import math
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Union

from ...api.transport import TwapiResponse
from ...exceptions import MalformedResponseError

# Bytes per APPEND segment
CHUNK_SIZE = 5_000_000


class UploadState(str, Enum):
    """
    Stages of a chunked upload.

    PROCESSING is skipped when FINALIZE reports no processing_info.
    """
    INIT = 'INIT'
    APPENDING = 'APPENDING'
    FINALIZING = 'FINALIZING'
    PROCESSING = 'PROCESSING'
    SUCCEEDED = 'SUCCEEDED'
    FAILED = 'FAILED'


@dataclass(frozen=True)
class ChunkInfo:
    """
    Information about a file chunk.

    Attributes:
        index: Segment index (zero-based)
        start: Start position in bytes
        end: End position in bytes (exclusive)
    """
    index: int
    start: int
    end: int

    @property
    def size(self) -> int:
        """Returns chunk size."""
        return self.end - self.start


@dataclass(frozen=True)
class ProcessingInfo:
    """
    Server-side processing status of an uploaded medium.

    Attributes:
        state: pending, in_progress, succeeded or failed
        check_after_secs: Seconds to wait before the next STATUS check
        progress_percent: Optional progress reported by the server
        error: Error object reported with a failed state
    """
    state: str
    check_after_secs: Optional[int] = None
    progress_percent: Optional[int] = None
    error: Optional[Dict[str, Any]] = None

    TERMINAL_STATES = ('succeeded', 'failed')

    @property
    def is_terminal(self) -> bool:
        return self.state in self.TERMINAL_STATES

    @property
    def succeeded(self) -> bool:
        return self.state == 'succeeded'

    @classmethod
    def from_dict(cls, data: Any) -> 'ProcessingInfo':
        """
        Parse a processing_info object.

        Raises:
            MalformedResponseError: If the object or its state is missing
        """
        if not isinstance(data, dict):
            raise MalformedResponseError('processing_info', data)
        state = data.get('state')
        if not isinstance(state, str):
            raise MalformedResponseError('processing_info.state', data)
        return cls(
            state=state,
            check_after_secs=data.get('check_after_secs'),
            progress_percent=data.get('progress_percent'),
            error=data.get('error'),
        )

    @classmethod
    def from_response(cls, response: TwapiResponse) -> Optional['ProcessingInfo']:
        """Returns the response's processing_info, or None when it has none."""
        body = response.json
        if not isinstance(body, dict) or 'processing_info' not in body:
            return None
        return cls.from_dict(body['processing_info'])


@dataclass
class UploadSession:
    """
    State of one chunked upload.

    Created per upload call and discarded once a terminal state is reached.

    Attributes:
        file_path: Media file being uploaded
        total_bytes: File size
        media_id: media_id_string returned by INIT
        chunk_size: Bytes per APPEND segment
        state: Current stage
        segments_sent: Number of APPEND calls that succeeded
    """
    file_path: Path
    total_bytes: int
    media_id: Optional[str] = None
    chunk_size: int = CHUNK_SIZE
    state: UploadState = UploadState.INIT
    segments_sent: int = 0

    @property
    def segment_count(self) -> int:
        """Number of APPEND calls needed: ceil(total_bytes / chunk_size)."""
        return math.ceil(self.total_bytes / self.chunk_size)


@dataclass
class MediaUploadConfig:
    """
    Configuration for a chunked media upload.

    Attributes:
        file_path: Path to the media file
        media_type: MIME type, e.g. 'video/mp4'
        media_category: e.g. 'tweet_video', 'tweet_gif', 'tweet_image'
        additional_owners: User IDs allowed to use the media (comma separated)
        max_poll_attempts: Maximum STATUS checks (None = unbounded)
        max_processing_wait: Maximum total seconds spent waiting between
            STATUS checks (None = unbounded)
    """
    file_path: Path
    media_type: str
    media_category: str
    additional_owners: Optional[Union[str, Iterable[str]]] = None
    max_poll_attempts: Optional[int] = None
    max_processing_wait: Optional[float] = None

    def __post_init__(self):
        """Validate and normalize config."""
        if isinstance(self.file_path, str):
            self.file_path = Path(self.file_path)

        if self.additional_owners is not None and not isinstance(self.additional_owners, str):
            self.additional_owners = ','.join(str(owner) for owner in self.additional_owners)

        if self.max_poll_attempts is not None and self.max_poll_attempts < 1:
            raise ValueError("max_poll_attempts must be at least 1")

        if self.max_processing_wait is not None and self.max_processing_wait < 0:
            raise ValueError("max_processing_wait cannot be negative")


@dataclass(frozen=True)
class MediaUploadResult:
    """
    Result of a completed chunked upload.

    Attributes:
        media_id: media_id_string to attach to a tweet
        state: SUCCEEDED or FAILED
        response: Last response (FINALIZE, or the terminal STATUS)
        segments: Number of APPEND segments sent
        status_checks: Number of STATUS requests made
    """
    media_id: str
    state: UploadState
    response: TwapiResponse
    segments: int = 0
    status_checks: int = 0

    @property
    def is_success(self) -> bool:
        return self.state == UploadState.SUCCEEDED

    @property
    def processing_info(self) -> Optional[ProcessingInfo]:
        return ProcessingInfo.from_response(self.response)


@dataclass
class UploadProgress:
    """
    Upload progress information.

    Attributes:
        total_chunks: Total number of segments
        uploaded_chunks: Number of segments sent
        total_bytes: Total file size
        uploaded_bytes: Bytes sent so far
    """
    total_chunks: int
    uploaded_chunks: int = 0
    total_bytes: int = 0
    uploaded_bytes: int = 0

    @property
    def percentage(self) -> float:
        """Returns upload progress as percentage."""
        if self.total_chunks == 0:
            return 0.0
        return (self.uploaded_chunks / self.total_chunks) * 100
