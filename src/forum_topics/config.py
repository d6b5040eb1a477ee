from __future__ import annotations

from dataclasses import dataclass
import os

from .urls import BASE_URL


def _parse_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    v = value.strip().lower()
    if v in {"1", "true", "t", "yes", "y", "on"}:
        return True
    if v in {"0", "false", "f", "no", "n", "off"}:
        return False
    return default


def _parse_int(value: str | None, default: int) -> int:
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


@dataclass(frozen=True)
class Config:
    base_url: str = BASE_URL
    user_agent: str = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) Chrome/120.0.0.0 Safari/537.36"

    # Raw Cookie header of a logged-in session; empty means anonymous.
    session_cookie: str | None = None

    http_timeout_ms: int = 30000
    http_retry_count: int = 3
    http_retry_interval_ms: int = 2000

    use_test_fixtures: bool = False

    log_json: bool = False
    log_level: str = "info"

    @property
    def logged_in(self) -> bool:
        return bool(self.session_cookie)

    @classmethod
    def from_env(cls) -> "Config":
        return cls(
            base_url=(os.environ.get("BASE_URL") or BASE_URL).strip().rstrip("/"),
            user_agent=os.environ.get("USER_AGENT", cls.user_agent),
            session_cookie=(os.environ.get("SESSION_COOKIE") or "").strip() or None,
            http_timeout_ms=_parse_int(os.environ.get("HTTP_TIMEOUT_MS"), 30000),
            http_retry_count=max(1, _parse_int(os.environ.get("HTTP_RETRY_COUNT"), 3)),
            http_retry_interval_ms=_parse_int(
                os.environ.get("HTTP_RETRY_INTERVAL_MS"), 2000
            ),
            use_test_fixtures=_parse_bool(os.environ.get("USE_TEST_FIXTURES"), False),
            log_json=_parse_bool(os.environ.get("LOG_JSON"), False),
            log_level=os.environ.get("LOG_LEVEL", "info"),
        )
