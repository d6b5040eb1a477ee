from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from zoneinfo import ZoneInfo
from typing import Any
import json
import sys

from .errors import ParseError


_TZ = ZoneInfo("Asia/Shanghai")

_LEVELS = {
    "debug": 10,
    "info": 20,
    "warn": 30,
    "warning": 30,
    "error": 40,
}


@dataclass(frozen=True)
class Logger:
    """Line-oriented event logger. Writes to stderr so stdout stays free for results."""

    enabled: bool = True
    json_mode: bool = False
    level: str = "info"

    def _level_value(self) -> int:
        return _LEVELS.get((self.level or "info").strip().lower(), 20)

    def _should_emit(self, level: str) -> bool:
        if not self.enabled:
            return False
        return _LEVELS[level.lower()] >= self._level_value()

    def _ts(self) -> str:
        return datetime.now(tz=_TZ).isoformat(timespec="seconds")

    def info(self, event: str, **fields: Any) -> None:
        self._emit("INFO", event, **fields)

    def warn(self, event: str, **fields: Any) -> None:
        self._emit("WARN", event, **fields)

    def debug(self, event: str, **fields: Any) -> None:
        self._emit("DEBUG", event, **fields)

    def error(self, event: str, **fields: Any) -> None:
        self._emit("ERROR", event, **fields)

    def parse_failure(self, event: str, err: ParseError, **fields: Any) -> None:
        self._emit(
            "ERROR",
            event,
            error=type(err).__name__,
            message=str(err),
            context=dict(err.context),
            **fields,
        )

    def _emit(self, level: str, event: str, **fields: Any) -> None:
        if not self._should_emit(level):
            return
        if self.json_mode:
            payload = {"ts": self._ts(), "level": level, "event": event, **fields}
            print(json.dumps(payload, ensure_ascii=False, default=str), file=sys.stderr)
            return
        parts = [f"{k}={v}" for k, v in fields.items() if v is not None]
        suffix = (" " + " ".join(parts)) if parts else ""
        print(f"[{self._ts()}] {level} {event}{suffix}", file=sys.stderr)
