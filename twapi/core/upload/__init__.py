"""
Media upload module.

Chunked INIT/APPEND/FINALIZE/STATUS uploads plus the single-request
upload for small images.
"""
from .coordinator import ChunkedUploader, upload_media_simple
from .models import (
    CHUNK_SIZE,
    UploadState,
    ChunkInfo,
    ProcessingInfo,
    UploadSession,
    MediaUploadConfig,
    MediaUploadResult,
    UploadProgress
)
from .protocols import ChunkingStrategy, FileReaderProtocol, FileValidatorProtocol

__all__ = [
    # Main classes
    'ChunkedUploader',
    'upload_media_simple',
    
    # Models
    'CHUNK_SIZE',
    'UploadState',
    'ChunkInfo',
    'ProcessingInfo',
    'UploadSession',
    'MediaUploadConfig',
    'MediaUploadResult',
    'UploadProgress',
    
    # Protocols
    'ChunkingStrategy',
    'FileReaderProtocol',
    'FileValidatorProtocol',
]
