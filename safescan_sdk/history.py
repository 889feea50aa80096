"""Filtering helpers for the recently-scanned threats list."""

from __future__ import annotations

from collections import Counter
from typing import Iterable

from safescan_sdk.models import ThreatSummary

ALL_VERDICTS = "all"


def filter_threats(
    threats: Iterable[ThreatSummary],
    search: str = "",
    verdict: str = ALL_VERDICTS,
) -> list[ThreatSummary]:
    """Keep threats matching *verdict* whose name or fingerprint contains *search*.

    Matching is case-insensitive and the input order (newest first) is kept.
    """
    needle = search.lower()
    return [
        threat
        for threat in threats
        if (needle in threat.file_name.lower() or needle in threat.fingerprint.lower())
        and (verdict == ALL_VERDICTS or threat.verdict == verdict)
    ]


def verdict_counts(threats: Iterable[ThreatSummary]) -> dict[str, int]:
    return dict(Counter(threat.verdict for threat in threats))
