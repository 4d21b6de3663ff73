"""
File operation utilities

This module handles streaming episode audio to disk, stamping file times
and writing the per-show sidecar file.
"""
import json
import logging
import os
from datetime import datetime
from pathlib import Path

import aiofiles
import httpx


logger = logging.getLogger(__name__)

PARTIAL_SUFFIX = ".part"


def partial_path(destination: Path) -> Path:
    """Staging path used while a download is in progress"""
    return destination.with_name(destination.name + PARTIAL_SUFFIX)


async def stream_to_file(
    response: httpx.Response,
    destination: Path,
    chunk_size: int = 65536,
) -> int:
    """
    Stream a response body to a file without buffering it in memory

    The body is written to a '.part' file next to the destination and moved
    into place only once the stream has been fully written, so the
    destination either does not exist or holds the complete body.

    Args:
        response: Open streaming response
        destination: Final file path
        chunk_size: Read size for the body iterator

    Returns:
        Number of bytes written

    Raises:
        httpx.HTTPError: If the stream breaks mid-body
        OSError: If the file cannot be written
    """
    destination.parent.mkdir(parents=True, exist_ok=True)
    staging = partial_path(destination)
    written = 0

    try:
        async with aiofiles.open(staging, 'wb') as f:
            async for chunk in response.aiter_bytes(chunk_size):
                await f.write(chunk)
                written += len(chunk)
        os.replace(staging, destination)
    except Exception:
        cleanup_temp_file(staging)
        raise

    logger.debug(f"Wrote {written / (1024 * 1024):.2f} MB to {destination}")
    return written


def set_file_times(file_path: Path, instant: datetime) -> None:
    """
    Set both access and modification time of a file to an instant

    Args:
        file_path: File to update
        instant: Timezone-aware datetime
    """
    timestamp = instant.timestamp()
    os.utime(file_path, (timestamp, timestamp))


async def write_json_if_missing(file_path: Path, payload: dict) -> bool:
    """
    Write a JSON document only if the file does not already exist

    Existing files are never touched, whatever they contain.

    Args:
        file_path: Target file
        payload: JSON-serializable mapping

    Returns:
        True if the file was written, False if it already existed
    """
    file_path.parent.mkdir(parents=True, exist_ok=True)
    content = json.dumps(payload, indent=2, ensure_ascii=False)
    try:
        async with aiofiles.open(file_path, 'x', encoding='utf-8') as f:
            await f.write(content)
    except FileExistsError:
        logger.debug(f"Keeping existing file: {file_path}")
        return False

    logger.debug(f"Wrote {file_path}")
    return True


def cleanup_temp_file(file_path: Path) -> bool:
    """
    Safely delete a temporary file

    Args:
        file_path: Path to file to delete

    Returns:
        True if deleted successfully, False otherwise
    """
    if not file_path or not file_path.exists():
        return False

    try:
        file_path.unlink()
        logger.debug(f"Cleaned up temporary file: {file_path}")
        return True
    except (OSError, PermissionError) as e:
        logger.warning(f"Failed to delete temporary file {file_path}: {e}")
        return False
