from __future__ import annotations

import re
from urllib.parse import urlsplit

from .errors import UnexpectedStructure


BASE_URL = "https://www.v2ex.com"

_RE_TOPIC = re.compile(r"^/t/(\d+)(?:[/#?]|$)")
_RE_MEMBER = re.compile(r"^/member/([^/?#]+)")
_RE_NODE = re.compile(r"^/go/([^/?#]+)")


def absolute_url(path: str, base_url: str = BASE_URL) -> str:
    """Append a site path to ``base_url``, keeping any path prefix the base carries."""

    return base_url.rstrip("/") + "/" + path.lstrip("/")


def _path_of(url: str) -> str:
    return urlsplit(url.strip()).path or ""


def topic_id_from_url(url: str) -> int:
    """``/t/123#reply4`` -> ``123``. Absolute URLs are accepted too."""

    m = _RE_TOPIC.match(_path_of(url))
    if not m:
        raise UnexpectedStructure("not a topic url", context={"url": url})
    return int(m.group(1))


def username_from_url(url: str) -> str:
    m = _RE_MEMBER.match(_path_of(url))
    if not m:
        raise UnexpectedStructure("not a member url", context={"url": url})
    return m.group(1)


def node_name_from_url(url: str) -> str:
    m = _RE_NODE.match(_path_of(url))
    if not m:
        raise UnexpectedStructure("not a node url", context={"url": url})
    return m.group(1)
