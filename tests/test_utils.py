"""Tests for safescan_sdk.utils."""

import pytest

from safescan_sdk.utils import format_file_size


@pytest.mark.parametrize(
    ("size", "expected"),
    [
        (0, "0 Bytes"),
        (12, "12 Bytes"),
        (1023, "1023 Bytes"),
        (1024, "1 KB"),
        (1536, "1.5 KB"),
        (1024 * 1024, "1 MB"),
        (100 * 1024 * 1024, "100 MB"),
        (5 * 1024**3, "5 GB"),
    ],
)
def test_format_file_size(size: int, expected: str):
    assert format_file_size(size) == expected
