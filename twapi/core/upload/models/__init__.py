"""Upload models."""
from .upload_models import (
    CHUNK_SIZE,
    UploadState,
    ChunkInfo,
    ProcessingInfo,
    UploadSession,
    MediaUploadConfig,
    MediaUploadResult,
    UploadProgress
)

__all__ = [
    'CHUNK_SIZE',
    'UploadState',
    'ChunkInfo',
    'ProcessingInfo',
    'UploadSession',
    'MediaUploadConfig',
    'MediaUploadResult',
    'UploadProgress'
]
