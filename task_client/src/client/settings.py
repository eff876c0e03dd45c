from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class Settings:
    """
    Client settings loaded from environment variables.

    Env vars:
    - TASK_API_BASE_URL: base URL of the task service. Default 'http://localhost:3000'
    - TASK_API_TIMEOUT_SECONDS: transport timeout in seconds (default: 10)
    - TASK_API_ENABLE_BASIC_AUTH: 'true' to send HTTP Basic credentials (default: false)
    - TASK_API_USERNAME: username for basic auth (used when TASK_API_ENABLE_BASIC_AUTH=true)
    - TASK_API_PASSWORD: password for basic auth (used when TASK_API_ENABLE_BASIC_AUTH=true)
    - TASK_CLIENT_LOG_LEVEL: logging level name (default: INFO)
    """

    base_url: str = "http://localhost:3000"
    timeout_seconds: float = 10.0
    enable_basic_auth: bool = False
    username: Optional[str] = None
    password: Optional[str] = None
    log_level: str = "INFO"

    @property
    def basic_auth(self) -> Optional[Tuple[str, str]]:
        """Credentials tuple for httpx, or None when auth is disabled or incomplete."""
        if not self.enable_basic_auth or self.username is None or self.password is None:
            return None
        return (self.username, self.password)


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name, default)
    if value is None or value == "":
        return default
    return value


def _parse_bool(value: str, default: bool = False) -> bool:
    v = value.strip().lower()
    if v in {"1", "true", "yes", "on"}:
        return True
    if v in {"0", "false", "no", "off"}:
        return False
    return default


def _parse_timeout(value: str, default: float) -> float:
    try:
        parsed = float(value.strip())
    except ValueError:
        return default
    # Only positive timeouts are accepted
    return parsed if parsed > 0 else default


# PUBLIC_INTERFACE
def get_settings() -> Settings:
    """Return client settings loaded from environment variables."""
    base_url = _get_env("TASK_API_BASE_URL", "http://localhost:3000").strip().rstrip("/")
    timeout = _parse_timeout(_get_env("TASK_API_TIMEOUT_SECONDS", "10"), 10.0)

    enable_basic_auth = _parse_bool(_get_env("TASK_API_ENABLE_BASIC_AUTH", "false"), False)
    username = os.getenv("TASK_API_USERNAME") if enable_basic_auth else None
    password = os.getenv("TASK_API_PASSWORD") if enable_basic_auth else None

    log_level = _get_env("TASK_CLIENT_LOG_LEVEL", "INFO").strip().upper()

    return Settings(
        base_url=base_url,
        timeout_seconds=timeout,
        enable_basic_auth=enable_basic_auth,
        username=username,
        password=password,
        log_level=log_level,
    )
