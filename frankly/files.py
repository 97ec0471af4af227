"""
File content helpers for uploads.

Files are uploaded in two steps: ``create_file`` registers the file and
returns a pre-issued ``url``; the raw bytes are then PUT to that URL.
"""

import logging
import mimetypes
from pathlib import Path
from typing import BinaryIO, Optional, Union

logger = logging.getLogger(__name__)

mimetypes.init()

DEFAULT_CONTENT_TYPE = "application/octet-stream"


def detect_content_type(file_path: Union[str, Path]) -> tuple[str, Optional[str]]:
    """
    Detect MIME type and content encoding from a file path.

    Args:
        file_path: Path to the file

    Returns:
        (mime_type, encoding), e.g. ('image/png', None) or
        ('application/x-tar', 'gzip')
    """
    mime_type, encoding = mimetypes.guess_type(str(file_path))
    return mime_type or DEFAULT_CONTENT_TYPE, encoding


def get_file_size(file_path: Union[str, Path]) -> int:
    """Size of the file in bytes."""
    return Path(file_path).stat().st_size


def read_and_close(file_obj: BinaryIO) -> bytes:
    """Read the whole stream; it is closed afterwards even if reading fails."""
    with file_obj:
        data = file_obj.read()
    logger.debug(f"Read {len(data)} bytes for upload")
    return data
