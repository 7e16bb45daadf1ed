"""
File validation and reading services.

Single Responsibility: Each class handles one specific task.
"""
from pathlib import Path
from typing import Tuple, Union

import aiofiles

from ...exceptions import FileIOError
from ...logging import get_logger


class FileValidator:
    """
    Validates media files before upload.
    
    Responsibilities:
    - Check file existence
    - Verify file is not a directory
    - Get file size
    """
    
    def validate(self, file_path: Union[str, Path]) -> Tuple[Path, int]:
        """
        Validate a file for upload.
        
        Args:
            file_path: Path to the file
            
        Returns:
            Tuple of (validated Path, file size in bytes)
            
        Raises:
            FileIOError: If the file is missing, not a regular file, or unreadable
        """
        path = Path(file_path) if isinstance(file_path, str) else file_path
        
        if not path.exists():
            raise FileIOError(path, FileNotFoundError(f"File not found: {path}"))
        
        if not path.is_file():
            raise FileIOError(path, IsADirectoryError(f"Path is not a file: {path}"))
        
        try:
            file_size = path.stat().st_size
        except OSError as e:
            raise FileIOError(path, e) from e
        
        return path, file_size


class AsyncFileReader:
    """
    Asynchronous file reader for chunk-based reading.
    
    Uses aiofiles for non-blocking I/O. Each read opens the file, seeks,
    reads and closes it again, so no handle outlives a segment.
    """
    
    def __init__(self):
        """Initialize file reader."""
        self._logger = get_logger('twapi.upload.file')
    
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
            FileIOError: If reading fails or the file is shorter than expected
        """
        size = end - start
        try:
            async with aiofiles.open(file_path, 'rb') as f:
                await f.seek(start)
                data = await f.read(size)
        except OSError as e:
            self._logger.error(f"Failed to read chunk {start}-{end}: {e}")
            raise FileIOError(file_path, e) from e
        
        if len(data) != size:
            self._logger.error(f"Short read at {start}-{end}: got {len(data)} bytes")
            raise FileIOError(
                file_path,
                EOFError(f"expected {size} bytes at offset {start}, got {len(data)}")
            )
        
        self._logger.debug(f"Read chunk: {start}-{end} ({size} bytes)")
        return data
    
    async def read_file(self, file_path: Path) -> bytes:
        """
        Read entire file.
        
        Args:
            file_path: Path to the file
            
        Returns:
            File data
            
        Raises:
            FileIOError: If reading fails
        """
        try:
            async with aiofiles.open(file_path, 'rb') as f:
                return await f.read()
        except OSError as e:
            raise FileIOError(file_path, e) from e
