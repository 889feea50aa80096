"""Integration tests against a live SafeScan analysis service.

These tests require a deployed analysis function and history table. Run with::

    pytest -m integration

Configure via ``SAFESCAN_API_URL`` and ``SAFESCAN_API_KEY``; the tests are
skipped when the URL is not set.
"""

from __future__ import annotations

import os

import pytest

from safescan_sdk.async_client import AsyncAnalysisClient
from safescan_sdk.client import AnalysisClient
from safescan_sdk.config import ClientSettings
from safescan_sdk.models import FileSubmission, ScanStage, ScanSucceeded, Severity
from safescan_sdk.orchestrator import ScanOrchestrator
from safescan_sdk.stages import no_pacing

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(not os.environ.get("SAFESCAN_API_URL"), reason="SAFESCAN_API_URL not set"),
]

EICAR = b"X5O!P%@AP[4\\PZX54(P^)7CC)7}$EICAR-STANDARD-ANTIVIRUS-TEST-FILE!$H+H*"
CLEAN_DATA = b"This is a clean test file with no malicious content."


@pytest.fixture(scope="module")
def settings() -> ClientSettings:
    return ClientSettings()


class TestScan:
    async def test_clean_file(self, settings: ClientSettings):
        async with AsyncAnalysisClient.from_settings(settings) as client:
            outcome = await ScanOrchestrator(client, pacing=no_pacing).scan(
                FileSubmission.from_bytes(CLEAN_DATA, name="clean.txt")
            )
        assert outcome.stage is ScanStage.COMPLETE
        assert isinstance(outcome, ScanSucceeded)
        assert outcome.record.scan_id != ""

    async def test_eicar_not_safe(self, settings: ClientSettings):
        async with AsyncAnalysisClient.from_settings(settings) as client:
            outcome = await ScanOrchestrator(client, pacing=no_pacing).scan(
                FileSubmission.from_bytes(EICAR, name="eicar.com")
            )
        assert isinstance(outcome, ScanSucceeded)
        assert outcome.record.verdict.severity > Severity.SAFE


class TestHistory:
    def test_recent_threats(self, settings: ClientSettings):
        with AnalysisClient.from_settings(settings) as client:
            threats = client.recent_threats(limit=5)
        assert len(threats) <= 5
