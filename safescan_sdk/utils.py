"""Display helpers."""

from __future__ import annotations

_UNITS = ("Bytes", "KB", "MB", "GB", "TB")


def format_file_size(size: int) -> str:
    """Format *size* in 1024-based units, e.g. ``1536 -> "1.5 KB"``."""
    if size <= 0:
        return "0 Bytes"
    exponent = 0
    while size >= 1024 ** (exponent + 1) and exponent < len(_UNITS) - 1:
        exponent += 1
    value = round(size / 1024**exponent, 2)
    return f"{value:g} {_UNITS[exponent]}"
