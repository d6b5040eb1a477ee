from __future__ import annotations

from dataclasses import dataclass
import re
from typing import Union

from bs4 import BeautifulSoup, Tag

from .errors import (
    StructureNotFound,
    TimeFormatError,
    UnexpectedStructure,
    UnsupportedPageKind,
)
from .models import (
    Avatar,
    FavoriteTopics,
    Member,
    Node,
    NodePage,
    Page,
    Tab,
    Topic,
    TopicDraft,
    TopicList,
)
from .selectors import (
    bfs,
    children,
    descend,
    element_children,
    first_child_or_none,
    table_rows,
    text_nodes,
)
from .urls import node_name_from_url, topic_id_from_url, username_from_url


# Listing rows carry no semantic labels, so cells are addressed by position.
ROW_COLUMNS = {
    "member": 0,
    "title": 2,
    "reply_count": 3,
}

CONTENT_BOX_PATH = ("#Wrapper", ".content", "#Main", ".box")
TAB_TABLE_PATH = (".item", "table")
NODE_TABLE_PATH = ("#TopicsNode", ".cell", "table")
PAGE_INPUT_PATH = (".cell", "table")
FAVORITE_LINK_PATH = (".node_header", ".node_info", ".fr", "a.node_header_link")

UNFAVORITE_PREFIX = "/unfav"
ONCE_MARKER = "?once="

_RE_REPLY_TIME = re.compile(r"•\s*(.+?)(?:\s+•|$)")
_RE_NUMBER = re.compile(r"\d+", re.ASCII)


@dataclass(frozen=True)
class PreSupplied:
    node: Node


@dataclass(frozen=True)
class DecodedFromMarkup:
    pass


NodeSource = Union[PreSupplied, DecodedFromMarkup]
DECODED_FROM_MARKUP = DecodedFromMarkup()


def load_document(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "lxml")


def locate_content_box(doc: Tag) -> Tag:
    body = bfs(doc, "body")
    if body is None:
        raise StructureNotFound("document has no body")
    return descend(body, *CONTENT_BOX_PATH)


def parse_node(anchor: Tag) -> Node:
    """Decode a node anchor such as ``<a class="node" href="/go/qna">问与答</a>``."""

    href = str(anchor.get("href") or "")
    return Node(name=node_name_from_url(href), title=anchor.get_text(strip=True))


def parse_member(cell: Tag) -> Member:
    cells = element_children(cell)
    if not cells or cells[0].name != "a":
        raise UnexpectedStructure("member cell must start with a link")
    link = cells[0]
    username = username_from_url(str(link.get("href") or ""))

    inner = element_children(link)
    if not inner or inner[0].name != "img":
        raise UnexpectedStructure(
            "member link must wrap an avatar image", context={"username": username}
        )
    return Member(username=username, avatar=Avatar(url=str(inner[0].get("src") or "")))


def parse_title(cell: Tag) -> tuple[int, str]:
    """Return ``(topic_id, title_html)``. The title keeps its inline markup as served."""

    a = first_child_or_none(cell, ".item_title", "a")
    if a is None:
        raise UnexpectedStructure("topic row has no title link")
    topic_id = topic_id_from_url(str(a.get("href") or ""))
    return topic_id, a.decode_contents()


def parse_reply_time(text: str) -> str:
    clean = " ".join(text.split())
    m = _RE_REPLY_TIME.search(clean)
    if not m:
        raise TimeFormatError("unrecognised reply time", context={"text": text})
    return m.group(1).strip()


def parse_info(cell: Tag, source: NodeSource) -> tuple[Node, str]:
    """Return the topic's node and its reply-time annotation.

    A node decoded from the row is rendered as a link inside ``.fade`` and is
    followed by a separator text node, so the annotation is the second text
    node. When the node comes from the page, the annotation is the first one.
    """

    fade = first_child_or_none(cell, ".fade")
    if fade is None:
        raise UnexpectedStructure("topic row has no info line")

    if isinstance(source, PreSupplied):
        node = source.node
        index = 0
    else:
        anchor = first_child_or_none(fade, ".node")
        if anchor is None:
            raise UnexpectedStructure("topic row has no node link")
        node = parse_node(anchor)
        index = 1

    texts = text_nodes(fade)
    if len(texts) <= index:
        # no replies yet
        return node, ""
    return node, parse_reply_time(str(texts[index]))


def parse_reply_count(cell: Tag) -> int:
    counts = element_children(cell)
    if not counts:
        return 0
    text = counts[0].get_text(strip=True)
    if not _RE_NUMBER.fullmatch(text):
        raise UnexpectedStructure(
            "reply count is not a number", context={"text": text}
        )
    return int(text)


def parse_max_page(content_box: Tag) -> int:
    page_input = None
    for table in children(content_box, *PAGE_INPUT_PATH):
        for row in table_rows(table):
            page_input = first_child_or_none(row, "td[align=left]", "input.page_input")
            if page_input is not None:
                break
        if page_input is not None:
            break
    if page_input is None:
        return 1

    raw = str(page_input.get("max") or "").strip()
    if not _RE_NUMBER.fullmatch(raw):
        raise UnexpectedStructure(
            "page input has no valid bound", context={"max": raw}
        )
    return int(raw)


def parse_favorite(content_box: Tag, logged_in: bool) -> tuple[bool, str | None]:
    """Return ``(favorited, once_token)`` for a node page.

    Only logged-in members see the toggle, so the document is not inspected
    otherwise.
    """

    if not logged_in:
        return False, None

    a = first_child_or_none(content_box, *FAVORITE_LINK_PATH)
    if a is None:
        raise UnexpectedStructure("node header has no favorite link")
    href = str(a.get("href") or "")

    once = None
    if ONCE_MARKER in href:
        once = href.rpartition(ONCE_MARKER)[2]
    return href.startswith(UNFAVORITE_PREFIX), once


def _cell(cells: list[Tag], role: str) -> Tag:
    pos = ROW_COLUMNS[role]
    if len(cells) <= pos:
        raise UnexpectedStructure(
            f"topic row has no {role} cell", context={"cells": len(cells)}
        )
    return cells[pos]


def parse_row(row: Tag, source: NodeSource) -> Topic:
    cells = element_children(row)

    draft = TopicDraft().with_member(parse_member(_cell(cells, "member")))
    title_cell = _cell(cells, "title")
    draft = draft.with_title(*parse_title(title_cell))
    draft = draft.with_info(*parse_info(title_cell, source))
    draft = draft.with_reply_count(parse_reply_count(_cell(cells, "reply_count")))
    return draft.finish()


def _rows(content_box: Tag, path: tuple[str, ...]) -> list[Tag]:
    return [row for table in children(content_box, *path) for row in table_rows(table)]


def parse_doc_for_tab(content_box: Tag) -> TopicList:
    topics = [parse_row(row, DECODED_FROM_MARKUP) for row in _rows(content_box, TAB_TABLE_PATH)]
    return TopicList(topics=tuple(topics), max_page=1, favorited=False)


def parse_doc_for_node(content_box: Tag, node: Node, logged_in: bool) -> TopicList:
    max_page = parse_max_page(content_box)
    favorited, once = parse_favorite(content_box, logged_in)
    source = PreSupplied(node)
    topics = [parse_row(row, source) for row in _rows(content_box, NODE_TABLE_PATH)]
    return TopicList(
        topics=tuple(topics), max_page=max_page, favorited=favorited, once_token=once
    )


def parse_topic_list(doc: Tag, page: Page, *, logged_in: bool = False) -> TopicList:
    """Parse a tab, node or favorite-topics listing into a ``TopicList``."""

    if not isinstance(page, (Tab, NodePage, FavoriteTopics)):
        raise UnsupportedPageKind(
            f"unknown page type: {page!r}", context={"page": type(page).__name__}
        )

    content_box = locate_content_box(doc)
    if isinstance(page, NodePage):
        return parse_doc_for_node(content_box, page.node, logged_in)
    return parse_doc_for_tab(content_box)


def parse_topic_list_html(html: str, page: Page, *, logged_in: bool = False) -> TopicList:
    return parse_topic_list(load_document(html), page, logged_in=logged_in)
