"""SHA-256 content fingerprints for submitted files."""

from __future__ import annotations

import asyncio
import hashlib
from pathlib import Path
from typing import Union

from safescan_sdk.exceptions import IntakeError

_CHUNK_SIZE = 1024 * 1024  # 1 MiB
_OFFLOAD_THRESHOLD = 4 * _CHUNK_SIZE

Buffer = Union[bytes, bytearray, memoryview]


def fingerprint(data: Buffer) -> str:
    """Return the lowercase hex SHA-256 digest of *data*.

    The buffer is fed to the hash through a :class:`memoryview`, so no copy
    of the content is made.

    Raises:
        IntakeError: If *data* is not a readable byte buffer.
    """
    try:
        view = memoryview(data).cast("B")
    except TypeError as exc:
        raise IntakeError(f"Cannot read submitted file: {exc}") from exc

    digest = hashlib.sha256()
    for offset in range(0, view.nbytes, _CHUNK_SIZE):
        digest.update(view[offset : offset + _CHUNK_SIZE])
    return digest.hexdigest()


async def fingerprint_async(data: Buffer) -> str:
    """Compute :func:`fingerprint` without blocking the event loop on large buffers."""
    if isinstance(data, (bytes, bytearray, memoryview)) and len(data) > _OFFLOAD_THRESHOLD:
        return await asyncio.to_thread(fingerprint, data)
    return fingerprint(data)


def fingerprint_file(file_path: Union[str, Path]) -> str:
    """Return the SHA-256 digest of a file on disk, reading it in chunks.

    Raises:
        FileNotFoundError: If *file_path* does not exist.
        IntakeError: If the file cannot be read.
    """
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    digest = hashlib.sha256()
    try:
        with open(path, "rb") as fh:
            for chunk in iter(lambda: fh.read(_CHUNK_SIZE), b""):
                digest.update(chunk)
    except OSError as exc:
        raise IntakeError(f"Cannot read submitted file: {exc}") from exc
    return digest.hexdigest()
