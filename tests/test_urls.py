from __future__ import annotations

import pytest

from forum_topics.errors import UnexpectedStructure
from forum_topics.urls import (
    absolute_url,
    node_name_from_url,
    topic_id_from_url,
    username_from_url,
)


def test_topic_id_from_url() -> None:
    assert topic_id_from_url("/t/123") == 123
    assert topic_id_from_url("/t/123#reply45") == 123
    assert topic_id_from_url("https://www.v2ex.com/t/99?p=2") == 99


@pytest.mark.parametrize("url", ["", "/t/", "/t/abc", "/member/alice"])
def test_topic_id_from_bad_url(url: str) -> None:
    with pytest.raises(UnexpectedStructure):
        topic_id_from_url(url)


def test_username_and_node_from_url() -> None:
    assert username_from_url("/member/alice") == "alice"
    assert username_from_url("https://www.v2ex.com/member/bob") == "bob"
    assert node_name_from_url("/go/python") == "python"
    with pytest.raises(UnexpectedStructure):
        username_from_url("/go/python")
    with pytest.raises(UnexpectedStructure):
        node_name_from_url("/member/alice")


def test_absolute_url() -> None:
    assert absolute_url("/go/qna", "https://example.com/") == "https://example.com/go/qna"
    assert absolute_url("/?tab=hot") == "https://www.v2ex.com/?tab=hot"
    assert absolute_url("/go/qna", "http://host/mirror/") == "http://host/mirror/go/qna"
