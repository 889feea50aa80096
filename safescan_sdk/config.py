"""Client configuration loaded from ``SAFESCAN_*`` environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict

from safescan_sdk.exceptions import ConfigurationError

PLACEHOLDER_API_URL = "https://your-project-ref.supabase.co"
PLACEHOLDER_API_KEY = "your-anon-key-here"

DEFAULT_SCAN_PATH = "/functions/v1/malware-scan"
DEFAULT_HISTORY_PATH = "/rest/v1/file_hashes"
DEFAULT_MAX_FILE_SIZE = 100 * 1024 * 1024  # 100 MiB


def ensure_remote_configured(api_url: str, api_key: str) -> None:
    """Fail fast unless both endpoint and credential are real values.

    Raises:
        ConfigurationError: If either value is empty or a placeholder.
    """
    missing = []
    if not api_url or not api_url.strip() or api_url.rstrip("/") == PLACEHOLDER_API_URL:
        missing.append("API URL")
    if not api_key or not api_key.strip() or api_key == PLACEHOLDER_API_KEY:
        missing.append("API key")
    if missing:
        raise ConfigurationError(
            f"Analysis service configuration missing or using placeholder values ({', '.join(missing)}). "
            "Set SAFESCAN_API_URL and SAFESCAN_API_KEY."
        )


class ClientSettings(BaseSettings):
    """Configuration for talking to the analysis service."""

    model_config = SettingsConfigDict(env_prefix="SAFESCAN_", env_file=".env", extra="ignore")

    api_url: str = ""
    api_key: str = ""
    scan_path: str = DEFAULT_SCAN_PATH
    history_path: str = DEFAULT_HISTORY_PATH
    timeout_seconds: float = 300
    max_file_size: int = DEFAULT_MAX_FILE_SIZE
    log_level: str = "INFO"

    def require_remote(self) -> None:
        ensure_remote_configured(self.api_url, self.api_key)
