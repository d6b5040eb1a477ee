from __future__ import annotations

from dataclasses import dataclass
import time

from bs4 import BeautifulSoup
import requests

from .parser import load_document


@dataclass(frozen=True)
class HttpConfig:
    user_agent: str
    timeout_ms: int
    retry_count: int
    retry_interval_ms: int
    cookie: str | None = None


class HttpClient:
    def __init__(self, cfg: HttpConfig):
        self._cfg = cfg
        self._session = requests.Session()
        self._session.headers.update({"User-Agent": cfg.user_agent})
        if cfg.cookie:
            self._session.headers.update({"Cookie": cfg.cookie})

    def get_text(self, url: str) -> str:
        last_err: Exception | None = None
        for attempt in range(1, self._cfg.retry_count + 1):
            try:
                resp = self._session.get(url, timeout=self._cfg.timeout_ms / 1000)
                resp.raise_for_status()
                resp.encoding = resp.encoding or resp.apparent_encoding
                return resp.text
            except requests.RequestException as e:
                last_err = e
                if attempt < self._cfg.retry_count:
                    time.sleep(self._cfg.retry_interval_ms / 1000)
                continue
        assert last_err is not None
        raise last_err

    def get_document(self, url: str) -> BeautifulSoup:
        return load_document(self.get_text(url))
