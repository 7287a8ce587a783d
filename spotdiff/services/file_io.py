"""
File I/O service for reading inputs and writing exported diffs.

Handles:
- Encoding detection
- Binary file detection
- Size limits
- Atomic writes
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import chardet


logger = logging.getLogger(__name__)

# File name used when exporting a diff without an explicit target
DEFAULT_EXPORT_NAME = "diff-result.diff"


def format_size(size: float) -> str:
    """Get human-readable file size."""
    for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
        if size < 1024:
            return f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} PB"


@dataclass
class FileContent:
    """Container for decoded file content with metadata."""
    name: str
    text: str
    encoding: str
    bom: bool
    size: int

    @property
    def line_count(self) -> int:
        """Number of lines, not counting a final terminator."""
        if not self.text:
            return 0
        count = self.text.count('\n') + self.text.count('\r') - self.text.count('\r\n')
        if not self.text.endswith(('\n', '\r')):
            count += 1
        return count

    @property
    def size_formatted(self) -> str:
        return format_size(self.size)


@dataclass
class ReadResult:
    """Result of a file read operation."""
    success: bool
    content: Optional[FileContent] = None
    error: Optional[str] = None
    is_binary: bool = False


@dataclass
class WriteResult:
    """Result of a file write operation."""
    success: bool
    bytes_written: int = 0
    error: Optional[str] = None


class FileIOService:
    """Service for safe file I/O operations."""

    # Binary file signatures (magic bytes)
    BINARY_SIGNATURES = [
        b'\x89PNG',        # PNG
        b'\xff\xd8\xff',   # JPEG
        b'GIF8',           # GIF
        b'PK\x03\x04',     # ZIP
        b'\x1f\x8b',       # GZIP
        b'%PDF',           # PDF
        b'\x7fELF',        # ELF
    ]

    BOMS = [
        (b'\xef\xbb\xbf', 'utf-8-sig'),
        (b'\xff\xfe', 'utf-16'),
        (b'\xfe\xff', 'utf-16'),
    ]

    def __init__(
        self,
        default_encoding: str = 'utf-8',
        fallback_encoding: str = 'latin-1',
        binary_check_size: int = 8192
    ):
        self.default_encoding = default_encoding
        self.fallback_encoding = fallback_encoding
        self.binary_check_size = binary_check_size

    def read_file(
        self,
        path: Path | str,
        encoding: Optional[str] = None,
        max_text_size: int = 50 * 1024 * 1024  # 50MB default limit
    ) -> ReadResult:
        """
        Read a text file with automatic encoding detection.

        Args:
            path: Path to the file
            encoding: Force specific encoding (auto-detect if None)
            max_text_size: Maximum file size in bytes to read as text

        Returns:
            ReadResult with content or error information
        """
        path = Path(path)

        if not path.exists():
            return ReadResult(success=False, error=f"File not found: {path}")

        if not path.is_file():
            return ReadResult(success=False, error=f"Not a file: {path}")

        try:
            raw_content = path.read_bytes()
        except PermissionError:
            return ReadResult(success=False, error=f"Permission denied: {path}")
        except OSError as e:
            logger.error("Failed to read %s: %s", path, e)
            return ReadResult(success=False, error=f"OS error: {e}")

        size = len(raw_content)
        if size > max_text_size:
            return ReadResult(
                success=False,
                error=(f"File too large for text comparison ({format_size(size)}). "
                       f"Max size is {format_size(max_text_size)}.")
            )

        if self.is_binary(raw_content):
            return ReadResult(success=False, is_binary=True,
                              error=f"File appears to be binary: {path}")

        text, used_encoding, bom = self.decode(raw_content, encoding)
        logger.debug("Read %s (%d bytes, %s)", path, size, used_encoding)

        return ReadResult(
            success=True,
            content=FileContent(
                name=path.name,
                text=text,
                encoding=used_encoding,
                bom=bom,
                size=size
            )
        )

    def decode(
        self,
        raw_content: bytes,
        encoding: Optional[str] = None
    ) -> tuple[str, str, bool]:
        """
        Decode bytes to text.

        Returns:
            Tuple of (text, encoding used, whether a BOM was present)
        """
        bom = False
        detected_encoding = encoding
        for marker, bom_encoding in self.BOMS:
            if raw_content.startswith(marker):
                bom = True
                detected_encoding = bom_encoding
                break

        if detected_encoding is None:
            detected_encoding = self._detect_encoding(raw_content)

        try:
            return raw_content.decode(detected_encoding), detected_encoding, bom
        except (UnicodeDecodeError, LookupError):
            logger.warning(
                "Could not decode as %s, falling back to %s",
                detected_encoding, self.fallback_encoding
            )
            text = raw_content.decode(self.fallback_encoding, errors='replace')
            return text, self.fallback_encoding, bom

    def is_binary(self, raw_content: bytes) -> bool:
        """Check if content looks binary."""
        chunk = raw_content[:self.binary_check_size]
        if not chunk:
            return False

        # UTF-16 text carries NUL bytes, so trust its BOM first
        if chunk.startswith((b'\xff\xfe', b'\xfe\xff')):
            return False

        for sig in self.BINARY_SIGNATURES:
            if chunk.startswith(sig):
                return True

        if b'\x00' in chunk:
            return True

        # Check ratio of non-text bytes
        non_text = sum(1 for b in chunk if b < 9 or (13 < b < 32))
        return non_text / len(chunk) > 0.3

    def write_text(
        self,
        path: Path | str,
        content: str,
        encoding: str = 'utf-8',
        atomic: bool = True
    ) -> WriteResult:
        """
        Write text to a file.

        Args:
            path: Path to write to
            content: Text to write, as is
            encoding: Encoding to use
            atomic: Use atomic write (write to temp then move)

        Returns:
            WriteResult with success status
        """
        path = Path(path)

        try:
            encoded = content.encode(encoding)
            path.parent.mkdir(parents=True, exist_ok=True)

            if atomic:
                fd, temp_path = tempfile.mkstemp(dir=path.parent)
                try:
                    with os.fdopen(fd, 'wb') as f:
                        f.write(encoded)
                    shutil.move(temp_path, path)
                except BaseException:
                    if os.path.exists(temp_path):
                        os.unlink(temp_path)
                    raise
            else:
                path.write_bytes(encoded)

            return WriteResult(success=True, bytes_written=len(encoded))

        except PermissionError:
            return WriteResult(success=False, error=f"Permission denied: {path}")
        except (OSError, UnicodeEncodeError) as e:
            logger.error("Failed to write %s: %s", path, e)
            return WriteResult(success=False, error=f"Write error: {e}")

    def _detect_encoding(self, content: bytes) -> str:
        """Detect encoding of content."""
        if not content:
            return self.default_encoding

        result = chardet.detect(content)

        if result['confidence'] > 0.7 and result['encoding']:
            encoding = result['encoding'].lower()
            if encoding == 'ascii':
                return 'utf-8'  # ASCII is subset of UTF-8
            return encoding

        return self.default_encoding
