"""Synchronous REST client for the SafeScan analysis service."""

from __future__ import annotations

import logging
from typing import Any

import requests

from safescan_sdk.config import (
    DEFAULT_HISTORY_PATH,
    DEFAULT_SCAN_PATH,
    ClientSettings,
    ensure_remote_configured,
)
from safescan_sdk.envelope import (
    DEFAULT_FAILURE,
    HISTORY_FAILURE,
    HISTORY_SELECT,
    MALFORMED_RESPONSE,
    auth_headers,
    build_scan_request,
    parse_envelope,
    parse_threat_rows,
    status_failure,
)
from safescan_sdk.exceptions import (
    AnalysisConnectionError,
    AnalysisTimeoutError,
    RemoteAnalysisError,
)
from safescan_sdk.models import AnalysisEnvelope, ThreatSummary

logger = logging.getLogger(__name__)


class AnalysisClient:
    """Synchronous client for the SafeScan REST API.

    Endpoint and credential are checked on every call, before any request
    is sent; a missing or placeholder value raises
    :class:`~safescan_sdk.exceptions.ConfigurationError`.

    Args:
        base_url: Root URL of the analysis service.
        api_key: Bearer credential.
        timeout: Default request timeout in seconds.
        session: Optional pre-configured :class:`requests.Session`.
        scan_path: Path of the analysis endpoint.
        history_path: Path of the scanned-files table.

    Example::

        client = AnalysisClient("https://abc.supabase.co", "anon-key")
        for threat in client.recent_threats(limit=10):
            print(threat.file_name, threat.verdict)
    """

    def __init__(
        self,
        base_url: str = "",
        api_key: str = "",
        timeout: float = 300,
        session: requests.Session | None = None,
        scan_path: str = DEFAULT_SCAN_PATH,
        history_path: str = DEFAULT_HISTORY_PATH,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._timeout = timeout
        self._session = session or requests.Session()
        self._scan_path = scan_path
        self._history_path = history_path

    @classmethod
    def from_settings(cls, settings: ClientSettings, session: requests.Session | None = None) -> AnalysisClient:
        return cls(
            settings.api_url,
            settings.api_key,
            timeout=settings.timeout_seconds,
            session=session,
            scan_path=settings.scan_path,
            history_path=settings.history_path,
        )

    def analyze(
        self,
        fingerprint: str,
        file_name: str,
        file_size: int,
        file_content: str = "",
    ) -> AnalysisEnvelope:
        """Request a full analysis of a fingerprinted file.

        Args:
            fingerprint: SHA-256 hex digest of the file.
            file_name: Declared file name.
            file_size: Declared size in bytes.
            file_content: Sampled text content, empty for binary files.

        Returns:
            The parsed :class:`AnalysisEnvelope`.

        Raises:
            ConfigurationError: If endpoint or credential is not configured.
            RemoteAnalysisError: On non-2xx status or ``success: false``.
            AnalysisConnectionError: If the service is unreachable.
            AnalysisTimeoutError: If the request times out.
        """
        ensure_remote_configured(self._base_url, self._api_key)
        body = build_scan_request(fingerprint, file_name, file_size, file_content)
        logger.info("Requesting analysis of %s (%s)", file_name, fingerprint)
        resp = self._request(
            "POST",
            self._scan_path,
            json=body,
            headers={**auth_headers(self._api_key), "Content-Type": "application/json"},
        )
        return parse_envelope(self._json(resp))

    def recent_threats(self, limit: int = 50) -> list[ThreatSummary]:
        """List recently scanned files with their latest verdicts, newest first.

        Raises:
            ConfigurationError: If endpoint or credential is not configured.
            RemoteAnalysisError: On non-2xx status or a malformed body.
        """
        ensure_remote_configured(self._base_url, self._api_key)
        resp = self._request(
            "GET",
            self._history_path,
            action=HISTORY_FAILURE,
            params={"select": HISTORY_SELECT, "order": "last_seen.desc", "limit": str(limit)},
            headers=auth_headers(self._api_key),
        )
        return parse_threat_rows(self._json(resp))

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> AnalysisClient:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _request(self, method: str, path: str, action: str = DEFAULT_FAILURE, **kwargs: Any) -> requests.Response:
        try:
            resp = self._session.request(
                method,
                f"{self._base_url}{path}",
                timeout=self._timeout,
                **kwargs,
            )
        except requests.ConnectionError as exc:
            raise AnalysisConnectionError(str(exc)) from exc
        except requests.Timeout as exc:
            raise AnalysisTimeoutError(str(exc)) from exc
        except requests.RequestException as exc:
            raise AnalysisConnectionError(str(exc)) from exc

        if not 200 <= resp.status_code < 300:
            logger.warning("Analysis service answered %s %s", resp.status_code, resp.reason)
            raise status_failure(resp.status_code, resp.reason, action)
        return resp

    @staticmethod
    def _json(resp: requests.Response) -> Any:
        try:
            return resp.json()
        except ValueError as exc:
            raise RemoteAnalysisError(MALFORMED_RESPONSE, status_code=resp.status_code) from exc
