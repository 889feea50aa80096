"""Tests for safescan_sdk.history."""

from __future__ import annotations

import pytest
from conftest import HELLO_DIGEST

from safescan_sdk.history import filter_threats, verdict_counts
from safescan_sdk.models import ThreatSummary


def threat(name: str, digest: str, verdict: str) -> ThreatSummary:
    return ThreatSummary(
        id=name,
        fingerprint=digest,
        file_name=name,
        file_size=1,
        verdict=verdict,
        threat_score=0,
        last_seen="",
        scan_count=1,
    )


@pytest.fixture()
def threats() -> list[ThreatSummary]:
    return [
        threat("Invoice.PDF", HELLO_DIGEST, "safe"),
        threat("keygen.exe", "ab" * 32, "malicious"),
        threat("setup.exe", "cd" * 32, "suspicious"),
        threat("crack.zip", "ef" * 32, "malicious"),
    ]


class TestFilterThreats:
    def test_no_filters(self, threats: list[ThreatSummary]):
        assert filter_threats(threats) == threats

    def test_by_verdict_keeps_order(self, threats: list[ThreatSummary]):
        assert [t.file_name for t in filter_threats(threats, verdict="malicious")] == [
            "keygen.exe",
            "crack.zip",
        ]

    def test_search_name_case_insensitive(self, threats: list[ThreatSummary]):
        assert [t.file_name for t in filter_threats(threats, search="invoice")] == ["Invoice.PDF"]

    def test_search_fingerprint(self, threats: list[ThreatSummary]):
        assert [t.file_name for t in filter_threats(threats, search=HELLO_DIGEST[:10].upper())] == [
            "Invoice.PDF"
        ]

    def test_combined(self, threats: list[ThreatSummary]):
        assert [t.file_name for t in filter_threats(threats, search=".exe", verdict="suspicious")] == [
            "setup.exe"
        ]


def test_verdict_counts(threats: list[ThreatSummary]):
    assert verdict_counts(threats) == {"safe": 1, "malicious": 2, "suspicious": 1}
