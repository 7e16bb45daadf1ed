"""
Chunked upload coordinator.

Drives the INIT / APPEND / FINALIZE / STATUS sequence of the media upload
endpoint. Segments are sent one at a time, in order, and the whole
sequence stops at the first non-2xx response.
"""
import asyncio
from pathlib import Path
from typing import Awaitable, Callable, List, Optional, Tuple, Union

from .models import (
    ChunkInfo,
    MediaUploadConfig,
    MediaUploadResult,
    ProcessingInfo,
    UploadProgress,
    UploadSession,
    UploadState,
)
from .protocols import ChunkingStrategy, FileReaderProtocol, FileValidatorProtocol
from .services import AsyncFileReader, FileValidator
from .strategies import SegmentChunkingStrategy
from ..api.client import APIClient
from ..api.config import EndpointConfig
from ..api.transport import TwapiResponse
from ..exceptions import MalformedResponseError, ProcessingTimeoutError, UploadStageError
from ..logging import get_logger

logger = get_logger('twapi.upload')


class ChunkedUploader:
    """
    Coordinates a chunked media upload.

    Uses dependency injection for all components, making it:
    - Testable (mock transport, instant sleep)
    - Extensible (swap file reader)

    Uploads are independent: one uploader may run several uploads on
    separate tasks, each with its own UploadSession.

    Example:
        >>> uploader = ChunkedUploader(api_client)
        >>> result = await uploader.upload(MediaUploadConfig(
        ...     file_path='clip.mp4', media_type='video/mp4', media_category='tweet_video'))
        >>> print(result.media_id)
    """

    def __init__(
        self,
        api_client: APIClient,
        upload_url: Optional[str] = None,
        chunking_strategy: Optional[ChunkingStrategy] = None,
        file_reader: Optional[FileReaderProtocol] = None,
        file_validator: Optional[FileValidatorProtocol] = None,
        sleep: Optional[Callable[[float], Awaitable[None]]] = None,
        progress_callback: Optional[Callable[[UploadProgress], None]] = None
    ):
        """
        Initialize chunked uploader.

        Args:
            api_client: Authorized API client
            upload_url: media/upload endpoint (defaults to upload.twitter.com)
            chunking_strategy: Strategy for segment boundaries
            file_reader: File reader implementation
            file_validator: File validator implementation
            sleep: Awaitable sleep used between STATUS checks
            progress_callback: Called after every APPEND
        """
        self._api = api_client
        self._upload_url = upload_url or EndpointConfig().upload_url
        self._chunking = chunking_strategy or SegmentChunkingStrategy()
        self._file_reader = file_reader or AsyncFileReader()
        self._validator = file_validator or FileValidator()
        self._sleep = sleep or asyncio.sleep
        self._progress_callback = progress_callback

    @property
    def upload_url(self) -> str:
        return self._upload_url

    async def upload(self, config: MediaUploadConfig) -> MediaUploadResult:
        """
        Execute the complete upload process.

        Args:
            config: Upload configuration

        Returns:
            MediaUploadResult in state SUCCEEDED or FAILED

        Raises:
            FileIOError: If the file cannot be read
            UploadStageError: On the first non-2xx response
            MalformedResponseError: If media_id_string or processing state is missing
            ProcessingTimeoutError: If a poll bound in config is exceeded
            TransportError: On network failure
        """
        path, file_size = self._validator.validate(config.file_path)
        session = UploadSession(file_path=path, total_bytes=file_size)
        file_size_mb = file_size / (1024 * 1024)
        logger.info(f"Starting upload: {path.name} ({file_size_mb:.2f} MB, {config.media_type})")

        session.media_id = await self._init(session, config)
        logger.info(f"INIT ok, media_id {session.media_id}")

        session.state = UploadState.APPENDING
        chunks = self._chunking.calculate_chunks(session.total_bytes, session.chunk_size)
        logger.info(f"File split into {session.segment_count} segments")
        await self._append_chunks(session, chunks)

        session.state = UploadState.FINALIZING
        finalize = await self._finalize(session)

        if ProcessingInfo.from_response(finalize) is None:
            session.state = UploadState.SUCCEEDED
            logger.info(f"Upload complete: {session.media_id}")
            return MediaUploadResult(
                media_id=session.media_id,
                state=session.state,
                response=finalize,
                segments=session.segments_sent,
            )

        session.state = UploadState.PROCESSING
        logger.info(f"Media {session.media_id} is processing")
        return await self._poll(session, config)

    async def status(self, media_id: str) -> TwapiResponse:
        """
        Fetch the processing status of an uploaded medium.

        Args:
            media_id: media_id_string

        Returns:
            Raw STATUS response
        """
        return await self._api.get(
            self._upload_url,
            [('command', 'STATUS'), ('media_id', media_id)]
        )

    def _build_init_fields(self, session: UploadSession, config: MediaUploadConfig) -> List[Tuple[str, str]]:
        fields = [
            ('command', 'INIT'),
            ('total_bytes', str(session.total_bytes)),
            ('media_type', config.media_type),
            ('media_category', config.media_category),
        ]
        if config.additional_owners:
            fields.append(('additional_owners', config.additional_owners))
        return fields

    async def _init(self, session: UploadSession, config: MediaUploadConfig) -> str:
        response = await self._api.post_multipart(
            self._upload_url, self._build_init_fields(session, config)
        )
        self._check(response, 'INIT', session)

        body = response.json
        media_id = body.get('media_id_string') if isinstance(body, dict) else None
        if not isinstance(media_id, str) or not media_id:
            raise MalformedResponseError('media_id_string', body)
        return media_id

    async def _append_chunks(self, session: UploadSession, chunks: List[ChunkInfo]) -> None:
        progress = UploadProgress(
            total_chunks=len(chunks),
            total_bytes=session.total_bytes
        )

        for chunk in chunks:
            await self._append(session, chunk)

            session.segments_sent += 1
            progress.uploaded_chunks += 1
            progress.uploaded_bytes += chunk.size
            if self._progress_callback:
                self._progress_callback(progress)

    async def _append(self, session: UploadSession, chunk: ChunkInfo) -> None:
        data = await self._file_reader.read_chunk(session.file_path, chunk.start, chunk.end)
        fields: List[Tuple[str, Union[str, bytes]]] = [
            ('command', 'APPEND'),
            ('media_id', session.media_id),
            ('segment_index', str(chunk.index)),
            ('media', data),
        ]
        chunk_size_kb = chunk.size / 1024
        logger.debug(f"APPEND segment {chunk.index} ({chunk_size_kb:.1f} KB)")

        response = await self._api.post_multipart(self._upload_url, fields)
        self._check(response, 'APPEND', session, segment_index=chunk.index)

    async def _finalize(self, session: UploadSession) -> TwapiResponse:
        response = await self._api.post_multipart(
            self._upload_url,
            [('command', 'FINALIZE'), ('media_id', session.media_id)]
        )
        self._check(response, 'FINALIZE', session)
        return response

    async def _poll(self, session: UploadSession, config: MediaUploadConfig) -> MediaUploadResult:
        attempts = 0
        waited = 0.0

        while True:
            response = await self.status(session.media_id)
            attempts += 1
            self._check(response, 'STATUS', session)

            info = ProcessingInfo.from_response(response)
            if info is None:
                raise MalformedResponseError('processing_info', response.json)

            if info.is_terminal:
                session.state = UploadState.SUCCEEDED if info.succeeded else UploadState.FAILED
                log = logger.info if info.succeeded else logger.error
                log(f"Processing of {session.media_id} {info.state} after {attempts} checks")
                return MediaUploadResult(
                    media_id=session.media_id,
                    state=session.state,
                    response=response,
                    segments=session.segments_sent,
                    status_checks=attempts,
                )

            if config.max_poll_attempts is not None and attempts >= config.max_poll_attempts:
                logger.error(f"Giving up on {session.media_id} after {attempts} checks")
                raise ProcessingTimeoutError(session.media_id, attempts, response)

            delay = info.check_after_secs
            if not isinstance(delay, (int, float)) or delay < 0:
                raise MalformedResponseError('processing_info.check_after_secs', response.json)

            if config.max_processing_wait is not None and waited + delay > config.max_processing_wait:
                logger.error(f"Giving up on {session.media_id} after waiting {waited:.0f}s")
                raise ProcessingTimeoutError(session.media_id, attempts, response)

            progress = f", {info.progress_percent}%" if info.progress_percent is not None else ""
            logger.debug(f"Media {session.media_id} {info.state}{progress}, next check in {delay}s")
            await self._sleep(delay)
            waited += delay

    @staticmethod
    def _check(
        response: TwapiResponse,
        stage: str,
        session: UploadSession,
        segment_index: Optional[int] = None
    ) -> None:
        """Raise UploadStageError for a non-2xx response."""
        if response.is_success:
            return
        where = stage if segment_index is None else f"{stage} segment {segment_index}"
        logger.error(f"{where} failed: HTTP {response.status_code}")
        raise UploadStageError(
            stage,
            response.status_code,
            response.text,
            media_id=session.media_id,
            segment_index=segment_index,
            response=response,
        )


async def upload_media_simple(
    api_client: APIClient,
    file_path: Union[str, Path],
    additional_owners: Optional[str] = None,
    upload_url: Optional[str] = None,
    file_reader: Optional[FileReaderProtocol] = None
) -> TwapiResponse:
    """
    Upload a small medium (image) in a single multipart request.

    Args:
        api_client: Authorized API client
        file_path: Media file
        additional_owners: Optional comma-separated user IDs
        upload_url: media/upload endpoint
        file_reader: File reader implementation

    Returns:
        Raw response; the caller inspects status_code
    """
    path, _ = FileValidator().validate(file_path)
    data = await (file_reader or AsyncFileReader()).read_file(path)
    fields: List[Tuple[str, Union[str, bytes]]] = [('media', data)]
    if additional_owners:
        fields.append(('additional_owners', additional_owners))
    logger.info(f"Uploading {path.name} in a single request")
    return await api_client.post_multipart(upload_url or EndpointConfig().upload_url, fields)
