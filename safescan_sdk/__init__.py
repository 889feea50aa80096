"""SafeScan SDK: client-side orchestration of remote malware triage."""

from safescan_sdk.async_client import AsyncAnalysisClient
from safescan_sdk.client import AnalysisClient
from safescan_sdk.config import ClientSettings
from safescan_sdk.exceptions import (
    AnalysisConnectionError,
    AnalysisTimeoutError,
    ConfigurationError,
    IntakeError,
    RemoteAnalysisError,
    SafeScanError,
    StageTransitionError,
    UnexpectedError,
)
from safescan_sdk.fingerprint import fingerprint, fingerprint_file
from safescan_sdk.models import (
    AnalysisVerdict,
    FileSubmission,
    ProgressEvent,
    ScanFailed,
    ScanOutcome,
    ScanRecord,
    ScanStage,
    ScanSucceeded,
    Severity,
    ThreatSummary,
)
from safescan_sdk.orchestrator import ScanOrchestrator
from safescan_sdk.stages import STAGE_PLAN, StageSequencer, no_pacing, sleep_pacing

__all__ = [
    "ScanOrchestrator",
    "AnalysisClient",
    "AsyncAnalysisClient",
    "ClientSettings",
    "StageSequencer",
    "STAGE_PLAN",
    "sleep_pacing",
    "no_pacing",
    "fingerprint",
    "fingerprint_file",
    "FileSubmission",
    "ProgressEvent",
    "AnalysisVerdict",
    "ScanRecord",
    "ScanStage",
    "Severity",
    "ScanSucceeded",
    "ScanFailed",
    "ScanOutcome",
    "ThreatSummary",
    "SafeScanError",
    "IntakeError",
    "ConfigurationError",
    "RemoteAnalysisError",
    "AnalysisConnectionError",
    "AnalysisTimeoutError",
    "UnexpectedError",
    "StageTransitionError",
]
