from __future__ import annotations

from dataclasses import asdict
from pathlib import Path

from .config import Config
from .errors import ParseError
from .http_client import HttpClient, HttpConfig
from .logger import Logger
from .models import NodePage, Page, TopicList
from .parser import parse_topic_list_html


def _fixtures_dir() -> Path:
    here = Path(__file__).resolve()
    return here.parents[2] / "tests" / "fixtures"


def _fixture_for(page: Page) -> Path:
    name = "node_list.html" if isinstance(page, NodePage) else "tab_list.html"
    return _fixtures_dir() / name


def build_http_client(cfg: Config) -> HttpClient:
    return HttpClient(
        HttpConfig(
            user_agent=cfg.user_agent,
            timeout_ms=cfg.http_timeout_ms,
            retry_count=cfg.http_retry_count,
            retry_interval_ms=cfg.http_retry_interval_ms,
            cookie=cfg.session_cookie,
        )
    )


def fetch_topic_list(
    cfg: Config,
    page: Page,
    *,
    page_no: int = 1,
    http: HttpClient | None = None,
    log: Logger | None = None,
) -> TopicList:
    """Fetch one listing page and parse it. Parse errors are logged and re-raised."""

    if log is None:
        log = Logger(enabled=True, json_mode=cfg.log_json, level=cfg.log_level)

    if cfg.use_test_fixtures:
        source = _fixture_for(page)
        html = source.read_text(encoding="utf-8")
        log.info("topic_list.fixture", path=source.name)
    else:
        url = page.url_for(page_no, base_url=cfg.base_url)
        if http is None:
            http = build_http_client(cfg)
        html = http.get_text(url)
        log.debug("topic_list.fetch", url=url, bytes=len(html))

    try:
        result = parse_topic_list_html(html, page, logged_in=cfg.logged_in)
    except ParseError as e:
        log.parse_failure("topic_list.failed", e, page=page.path, page_no=page_no)
        raise

    log.info(
        "topic_list.parsed",
        page=page.path,
        page_no=page_no,
        topics=len(result),
        max_page=result.max_page,
        favorited=result.favorited,
    )
    return result


def topic_list_to_dict(topic_list: TopicList) -> dict[str, object]:
    return {
        "max_page": topic_list.max_page,
        "favorited": topic_list.favorited,
        "once_token": topic_list.once_token,
        "topics": [asdict(t) for t in topic_list],
    }
