"""
Protocol definitions for upload module.

Defines interfaces (protocols) for dependency injection and strategy pattern.
"""
from typing import Protocol, List, Tuple
from pathlib import Path

from .models import ChunkInfo


class ChunkingStrategy(Protocol):
    """Protocol for file chunking strategies."""
    
    def calculate_chunks(self, file_size: int, chunk_size: int) -> List[ChunkInfo]:
        """
        Calculate chunk boundaries for a file.
        
        Args:
            file_size: Total file size in bytes
            chunk_size: Bytes per chunk
            
        Returns:
            Chunks in upload order, segment indices starting at 0
        """
        ...


class FileReaderProtocol(Protocol):
    """Protocol for file reading operations."""
    
    async def read_chunk(self, file_path: Path, start: int, end: int) -> bytes:
        """
        Read a chunk from a file.
        
        Args:
            file_path: Path to the file
            start: Start position in bytes
            end: End position in bytes
            
        Returns:
            Exactly end - start bytes
            
        Raises:
            FileIOError: If the range cannot be read
        """
        ...
    
    async def read_file(self, file_path: Path) -> bytes:
        """Read a whole file (raises FileIOError)."""
        ...


class FileValidatorProtocol(Protocol):
    """Protocol for file validation operations."""
    
    def validate(self, file_path: Path) -> Tuple[Path, int]:
        """
        Validate a file for upload.
        
        Args:
            file_path: Path to the file
            
        Returns:
            Tuple of (validated path, file size)
            
        Raises:
            FileIOError: If the path is missing or not a regular file
        """
        ...
