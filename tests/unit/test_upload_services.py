"""Tests for upload services."""
import pytest
from pathlib import Path
import tempfile
import os

from twapi.core.exceptions import FileIOError
from twapi.core.upload.services import FileValidator, AsyncFileReader


class TestFileValidator:
    """Test suite for FileValidator."""

    @pytest.fixture
    def validator(self):
        """Create validator instance."""
        return FileValidator()

    @pytest.fixture
    def temp_file(self):
        """Create temporary file for testing."""
        fd, path = tempfile.mkstemp()
        os.write(fd, b"test content")
        os.close(fd)
        yield Path(path)
        os.unlink(path)

    def test_validate_existing_file(self, validator, temp_file):
        """Test validating existing file."""
        path, size = validator.validate(temp_file)

        assert path == temp_file
        assert size == 12  # "test content"

    def test_validate_string_path(self, validator, temp_file):
        """Test validating string path."""
        path, size = validator.validate(str(temp_file))

        assert path == temp_file

    def test_validate_nonexistent_file(self, validator):
        """Test validating non-existent file."""
        with pytest.raises(FileIOError) as exc:
            validator.validate(Path("/nonexistent/file.mp4"))

        assert isinstance(exc.value.cause, FileNotFoundError)

    def test_validate_directory(self, validator):
        """Test validating directory raises error."""
        with pytest.raises(FileIOError):
            validator.validate(Path(tempfile.gettempdir()))

    def test_validate_empty_file(self, validator):
        """Test empty file is valid with size 0."""
        fd, path = tempfile.mkstemp()
        os.close(fd)
        try:
            assert validator.validate(path)[1] == 0
        finally:
            os.unlink(path)


class TestAsyncFileReader:
    """Test suite for AsyncFileReader."""

    @pytest.fixture
    def reader(self):
        """Create reader instance."""
        return AsyncFileReader()

    @pytest.fixture
    def temp_file(self):
        """Create temporary file with known content."""
        fd, path = tempfile.mkstemp()
        os.write(fd, b"0123456789ABCDEF")
        os.close(fd)
        yield Path(path)
        os.unlink(path)

    @pytest.mark.asyncio
    async def test_read_chunk(self, reader, temp_file):
        """Test reading a chunk."""
        data = await reader.read_chunk(temp_file, 0, 4)

        assert data == b"0123"

    @pytest.mark.asyncio
    async def test_read_chunk_middle(self, reader, temp_file):
        """Test reading chunk from middle."""
        data = await reader.read_chunk(temp_file, 5, 10)

        assert data == b"56789"

    @pytest.mark.asyncio
    async def test_read_chunk_past_end(self, reader, temp_file):
        """Test short read raises FileIOError."""
        with pytest.raises(FileIOError) as exc:
            await reader.read_chunk(temp_file, 10, 40)

        assert isinstance(exc.value.cause, EOFError)

    @pytest.mark.asyncio
    async def test_read_chunk_missing_file(self, reader):
        """Test unreadable file raises FileIOError."""
        with pytest.raises(FileIOError):
            await reader.read_chunk(Path("/nonexistent/file.mp4"), 0, 4)

    @pytest.mark.asyncio
    async def test_read_file(self, reader, temp_file):
        """Test reading entire file."""
        data = await reader.read_file(temp_file)

        assert data == b"0123456789ABCDEF"
