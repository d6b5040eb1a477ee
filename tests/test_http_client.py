from __future__ import annotations

import requests

from forum_topics.http_client import HttpClient, HttpConfig


class _FakeResponse:
    def __init__(self, *, text: str, status_code: int = 200) -> None:
        self.text = text
        self.status_code = status_code
        self.encoding = "utf-8"
        self.apparent_encoding = "utf-8"

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"http {self.status_code}")


class _FakeSession:
    def __init__(self, responses: list[_FakeResponse]) -> None:
        self.headers: dict[str, str] = {}
        self.calls: list[str] = []
        self._responses = responses

    def get(self, url: str, timeout: float) -> _FakeResponse:  # noqa: ARG002
        self.calls.append(url)
        return self._responses.pop(0)


def _client(monkeypatch, fake: _FakeSession, **overrides) -> HttpClient:
    monkeypatch.setattr(
        "forum_topics.http_client.requests.Session",
        lambda: fake,
    )
    cfg = {
        "user_agent": "pytest",
        "timeout_ms": 1000,
        "retry_count": 2,
        "retry_interval_ms": 0,
        **overrides,
    }
    return HttpClient(HttpConfig(**cfg))


def test_http_client_sends_cookie_when_configured(monkeypatch) -> None:
    fake = _FakeSession([_FakeResponse(text="<html></html>")])
    http = _client(monkeypatch, fake, cookie="A2=token")
    assert http.get_text("https://www.v2ex.com/") == "<html></html>"
    assert fake.headers == {"User-Agent": "pytest", "Cookie": "A2=token"}


def test_http_client_anonymous_has_no_cookie(monkeypatch) -> None:
    fake = _FakeSession([_FakeResponse(text="ok")])
    _client(monkeypatch, fake)
    assert "Cookie" not in fake.headers


def test_http_client_retries_then_succeeds(monkeypatch) -> None:
    fake = _FakeSession(
        [_FakeResponse(text="", status_code=503), _FakeResponse(text="second")]
    )
    http = _client(monkeypatch, fake)
    assert http.get_text("https://www.v2ex.com/?tab=hot") == "second"
    assert len(fake.calls) == 2


def test_http_client_raises_after_last_attempt(monkeypatch) -> None:
    fake = _FakeSession(
        [_FakeResponse(text="", status_code=500), _FakeResponse(text="", status_code=502)]
    )
    http = _client(monkeypatch, fake)
    try:
        http.get_text("https://www.v2ex.com/")
    except requests.HTTPError as e:
        assert "502" in str(e)
    else:
        raise AssertionError("expected HTTPError")


def test_http_client_get_document(monkeypatch) -> None:
    fake = _FakeSession([_FakeResponse(text="<html><body><p>hi</p></body></html>")])
    doc = _client(monkeypatch, fake).get_document("https://www.v2ex.com/")
    assert doc.select_one("p").get_text() == "hi"
