from __future__ import annotations

from collections import deque

from bs4 import NavigableString, Tag

from .errors import StructureNotFound


def element_children(el: Tag) -> list[Tag]:
    return [c for c in el.children if isinstance(c, Tag)]


def text_nodes(el: Tag) -> list[NavigableString]:
    """Direct text children of ``el``. Comments, CDATA and doctypes are skipped."""

    return [c for c in el.children if type(c) is NavigableString]


def matches(el: Tag, selector: str) -> bool:
    return bool(el.css.match(selector))


def bfs(root: Tag, selector: str) -> Tag | None:
    """Breadth-first search for the first element (``root`` included) matching ``selector``."""

    queue: deque[Tag] = deque([root])
    while queue:
        el = queue.popleft()
        if el.name != "[document]" and matches(el, selector):
            return el
        queue.extend(element_children(el))
    return None


def children(el: Tag, *path: str) -> list[Tag]:
    """Follow ``path`` one immediate-child selector per step, collecting every match."""

    current = [el]
    for selector in path:
        current = [
            c for parent in current for c in element_children(parent) if matches(c, selector)
        ]
        if not current:
            break
    return current


def first_child_or_none(el: Tag, *path: str) -> Tag | None:
    found = children(el, *path)
    return found[0] if found else None


def child(el: Tag, *path: str) -> Tag:
    found = first_child_or_none(el, *path)
    if found is None:
        raise StructureNotFound(
            f"no element at path: {' > '.join(path)}",
            context={"parent": el.name, "path": list(path)},
        )
    return found


def descend(el: Tag, *path: str) -> Tag:
    """Take the first immediate child matching each selector in turn."""

    current = el
    for selector in path:
        current = child(current, selector)
    return current


def table_rows(table: Tag) -> list[Tag]:
    """``tr`` rows of ``table`` whether or not the parser inserted a ``tbody``."""

    rows: list[Tag] = []
    for el in element_children(table):
        if el.name == "tbody":
            rows.extend(children(el, "tr"))
        elif el.name == "tr":
            rows.append(el)
    return rows
