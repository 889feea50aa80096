"""Asynchronous REST client for the SafeScan analysis service (``httpx``)."""

from __future__ import annotations

import logging
from typing import Any

import httpx

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


class AsyncAnalysisClient:
    """Asynchronous client for the SafeScan REST API.

    This is the transport used by :class:`~safescan_sdk.orchestrator.ScanOrchestrator`.
    A single :meth:`analyze` call is made per scan and it is never retried.

    Args:
        base_url: Root URL of the analysis service.
        api_key: Bearer credential.
        timeout: Default request timeout in seconds.
        client: Optional pre-configured :class:`httpx.AsyncClient`.
        scan_path: Path of the analysis endpoint.
        history_path: Path of the scanned-files table.

    Example::

        async with AsyncAnalysisClient("https://abc.supabase.co", "anon-key") as client:
            envelope = await client.analyze(digest, "invoice.pdf", 18233)
    """

    def __init__(
        self,
        base_url: str = "",
        api_key: str = "",
        timeout: float = 300,
        client: httpx.AsyncClient | None = None,
        scan_path: str = DEFAULT_SCAN_PATH,
        history_path: str = DEFAULT_HISTORY_PATH,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._timeout = timeout
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._scan_path = scan_path
        self._history_path = history_path

    @classmethod
    def from_settings(
        cls, settings: ClientSettings, client: httpx.AsyncClient | None = None
    ) -> AsyncAnalysisClient:
        return cls(
            settings.api_url,
            settings.api_key,
            timeout=settings.timeout_seconds,
            client=client,
            scan_path=settings.scan_path,
            history_path=settings.history_path,
        )

    async def analyze(
        self,
        fingerprint: str,
        file_name: str,
        file_size: int,
        file_content: str = "",
    ) -> AnalysisEnvelope:
        """Request a full analysis of a fingerprinted file.

        Raises:
            ConfigurationError: If endpoint or credential is not configured.
            RemoteAnalysisError: On non-2xx status or ``success: false``.
        """
        ensure_remote_configured(self._base_url, self._api_key)
        body = build_scan_request(fingerprint, file_name, file_size, file_content)
        logger.info("Requesting analysis of %s (%s)", file_name, fingerprint)
        resp = await self._request(
            "POST",
            self._scan_path,
            json=body,
            headers={**auth_headers(self._api_key), "Content-Type": "application/json"},
        )
        return parse_envelope(self._json(resp))

    async def recent_threats(self, limit: int = 50) -> list[ThreatSummary]:
        """List recently scanned files with their latest verdicts, newest first."""
        ensure_remote_configured(self._base_url, self._api_key)
        resp = await self._request(
            "GET",
            self._history_path,
            action=HISTORY_FAILURE,
            params={"select": HISTORY_SELECT, "order": "last_seen.desc", "limit": str(limit)},
            headers=auth_headers(self._api_key),
        )
        return parse_threat_rows(self._json(resp))

    async def close(self) -> None:
        """Close the underlying HTTP client if owned by this instance."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> AsyncAnalysisClient:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _request(self, method: str, path: str, action: str = DEFAULT_FAILURE, **kwargs: Any) -> httpx.Response:
        try:
            resp = await self._client.request(
                method,
                f"{self._base_url}{path}",
                timeout=self._timeout,
                **kwargs,
            )
        except httpx.ConnectError as exc:
            raise AnalysisConnectionError(str(exc)) from exc
        except httpx.TimeoutException as exc:
            raise AnalysisTimeoutError(str(exc)) from exc
        except httpx.TransportError as exc:
            raise AnalysisConnectionError(str(exc)) from exc

        if not resp.is_success:
            logger.warning("Analysis service answered %s %s", resp.status_code, resp.reason_phrase)
            raise status_failure(resp.status_code, resp.reason_phrase, action)
        return resp

    @staticmethod
    def _json(resp: httpx.Response) -> Any:
        try:
            return resp.json()
        except ValueError as exc:
            raise RemoteAnalysisError(MALFORMED_RESPONSE, status_code=resp.status_code) from exc
