"""``safescan`` command line interface.

Sub-commands:

* ``scan PATH`` submits one file and prints progress and the verdict.
* ``history`` lists recently scanned files and their latest verdicts.

Configuration comes from ``SAFESCAN_*`` environment variables or ``.env``.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Optional, Sequence

from safescan_sdk.async_client import AsyncAnalysisClient
from safescan_sdk.client import AnalysisClient
from safescan_sdk.config import ClientSettings
from safescan_sdk.exceptions import SafeScanError
from safescan_sdk.history import ALL_VERDICTS, filter_threats, verdict_counts
from safescan_sdk.log import configure_logging
from safescan_sdk.models import FileSubmission, ProgressEvent, ScanFailed, ScanOutcome, Severity
from safescan_sdk.orchestrator import ScanOrchestrator
from safescan_sdk.stages import no_pacing, sleep_pacing
from safescan_sdk.utils import format_file_size

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    # accepted before or after the sub-command; SUPPRESS keeps a sub-command
    # from resetting a value given at the top level
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--log-level", default=argparse.SUPPRESS, help="Override SAFESCAN_LOG_LEVEL")

    parser = argparse.ArgumentParser(prog="safescan", description="Submit files for malware triage.")
    parser.add_argument("--log-level", default=None, help="Override SAFESCAN_LOG_LEVEL")
    sub = parser.add_subparsers(dest="command", required=True)

    scan = sub.add_parser("scan", parents=[common], help="Scan a file")
    scan.add_argument("path", help="File to scan")
    scan.add_argument("--no-pacing", action="store_true", help="Skip the stage pacing delays")

    history = sub.add_parser("history", parents=[common], help="List recently scanned files")
    history.add_argument(
        "--verdict",
        default=ALL_VERDICTS,
        choices=[ALL_VERDICTS, "unknown", *(s.value for s in Severity)],
    )
    history.add_argument("--search", default="", help="Filter by file name or SHA-256 substring")
    history.add_argument("--limit", type=int, default=50)
    return parser


def print_event(event: ProgressEvent) -> None:
    print(f"[{event.percent:3d}%] {event.stage.value}: {event.message}")


def print_outcome(outcome: ScanOutcome) -> None:
    if isinstance(outcome, ScanFailed):
        print(f"Scan failed: {outcome.message}", file=sys.stderr)
        return
    record = outcome.record
    print()
    print(f"File:         {record.file_name} ({format_file_size(record.file_size)})")
    print(f"SHA-256:      {record.fingerprint}")
    print(f"Scan ID:      {record.scan_id}")
    print(f"Verdict:      {record.verdict.severity.value}")
    print(f"Threat score: {record.verdict.threat_score}/100")


async def run_scan(settings: ClientSettings, path: str, pacing: bool = True) -> ScanOutcome:
    submission = FileSubmission.from_path(path)
    async with AsyncAnalysisClient.from_settings(settings) as client:
        orchestrator = ScanOrchestrator(
            client,
            pacing=sleep_pacing if pacing else no_pacing,
            max_file_size=settings.max_file_size,
        )
        orchestrator.subscribe(print_event)
        return await orchestrator.scan(submission)


def run_history(settings: ClientSettings, verdict: str, search: str, limit: int) -> int:
    with AnalysisClient.from_settings(settings) as client:
        threats = filter_threats(client.recent_threats(limit=limit), search=search, verdict=verdict)
    for threat in threats:
        print(
            f"{threat.last_seen:<32} {threat.verdict:<10} {threat.threat_score:>3} "
            f"{threat.scan_count:>4}x {threat.fingerprint[:16]}  {threat.file_name}"
        )
    counts = ", ".join(f"{name}: {count}" for name, count in sorted(verdict_counts(threats).items()))
    print(f"{len(threats)} file(s){' (' + counts + ')' if counts else ''}")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = ClientSettings()
    configure_logging(args.log_level or settings.log_level)

    if args.command == "scan":
        try:
            outcome = asyncio.run(run_scan(settings, args.path, pacing=not args.no_pacing))
        except FileNotFoundError as exc:
            print(str(exc), file=sys.stderr)
            return 1
        except SafeScanError as exc:
            logger.debug("Scan aborted before submission", exc_info=exc)
            print(f"Scan failed: {exc}", file=sys.stderr)
            return 1
        print_outcome(outcome)
        return 1 if isinstance(outcome, ScanFailed) else 0

    try:
        return run_history(settings, args.verdict, args.search, args.limit)
    except SafeScanError as exc:
        logger.debug("History lookup failed", exc_info=exc)
        print(f"History lookup failed: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
