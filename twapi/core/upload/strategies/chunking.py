"""
Chunking strategies for media uploads.

Implements Strategy Pattern for chunking algorithms.
"""
from abc import ABC, abstractmethod
from typing import List

from ..models import CHUNK_SIZE, ChunkInfo


class BaseChunkingStrategy(ABC):
    """Abstract base class for chunking strategies."""
    
    @abstractmethod
    def calculate_chunks(self, file_size: int, chunk_size: int = CHUNK_SIZE) -> List[ChunkInfo]:
        """Calculate chunk boundaries."""
        pass


class SegmentChunkingStrategy(BaseChunkingStrategy):
    """
    Fixed-size segments, as APPEND expects.
    
    Segment i covers [i * chunk_size, min((i + 1) * chunk_size, file_size)).
    A file whose size is an exact multiple of the segment size gets no
    trailing empty segment.
    """
    
    def calculate_chunks(self, file_size: int, chunk_size: int = CHUNK_SIZE) -> List[ChunkInfo]:
        """
        Calculate segment boundaries.
        
        Args:
            file_size: Total file size in bytes
            chunk_size: Bytes per segment (5,000,000 for media/upload)
            
        Returns:
            List of ChunkInfo, empty for an empty file
        """
        if file_size < 0:
            raise ValueError("File size cannot be negative")
        if chunk_size <= 0:
            raise ValueError("Chunk size must be positive")
        
        chunks = []
        index = 0
        
        while index * chunk_size < file_size:
            start = index * chunk_size
            end = min(start + chunk_size, file_size)
            chunks.append(ChunkInfo(index=index, start=start, end=end))
            index += 1
        
        return chunks
