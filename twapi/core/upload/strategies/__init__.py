"""Upload strategies."""
from .chunking import BaseChunkingStrategy, SegmentChunkingStrategy

__all__ = [
    'BaseChunkingStrategy',
    'SegmentChunkingStrategy',
]
