"""Best-effort text extraction from submitted files.

The sampled text is advisory input for the remote static-pattern stage.
Binary or undecodable content yields :data:`NO_CONTENT` instead of an error.
"""

from __future__ import annotations

import asyncio
import codecs
import logging

logger = logging.getLogger(__name__)

NO_CONTENT = ""

_BINARY_PROBE = 8192
_OFFLOAD_THRESHOLD = 4 * 1024 * 1024

_BOMS = (
    (codecs.BOM_UTF32_LE, "utf-32"),
    (codecs.BOM_UTF32_BE, "utf-32"),
    (codecs.BOM_UTF8, "utf-8-sig"),
    (codecs.BOM_UTF16_LE, "utf-16"),
    (codecs.BOM_UTF16_BE, "utf-16"),
)


def guess_encoding(data: bytes) -> str | None:
    """Pick an encoding for *data*, or ``None`` if it looks binary."""
    for bom, encoding in _BOMS:
        if data.startswith(bom):
            return encoding
    if b"\x00" in data[:_BINARY_PROBE]:
        return None
    return "utf-8"


def sample_content(data: bytes) -> str:
    """Decode *data* as text, returning :data:`NO_CONTENT` on any failure."""
    encoding = guess_encoding(data)
    if encoding is None:
        logger.info("Content looks binary, continuing without content analysis")
        return NO_CONTENT
    try:
        return data.decode(encoding)
    except (UnicodeDecodeError, LookupError) as exc:
        logger.info("Could not read file as text (%s), continuing without content analysis", exc)
        return NO_CONTENT


async def sample_content_async(data: bytes) -> str:
    if len(data) > _OFFLOAD_THRESHOLD:
        return await asyncio.to_thread(sample_content, data)
    return sample_content(data)
