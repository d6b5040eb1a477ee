from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterator, Sequence

from .errors import UnexpectedStructure
from .urls import BASE_URL, absolute_url


@dataclass(frozen=True)
class Avatar:
    url: str


@dataclass(frozen=True)
class Member:
    username: str
    avatar: Avatar


@dataclass(frozen=True)
class Node:
    name: str
    title: str

    @property
    def path(self) -> str:
        return f"/go/{self.name}"


@dataclass(frozen=True)
class Topic:
    id: int
    title: str
    member: Member
    node: Node
    reply_time: str = ""
    reply_count: int = 0

    @property
    def path(self) -> str:
        return f"/t/{self.id}"


@dataclass(frozen=True)
class TopicDraft:
    """A row being decoded. Each ``with_*`` call returns a new draft."""

    member: Member | None = None
    id: int | None = None
    title: str | None = None
    node: Node | None = None
    reply_time: str | None = None
    reply_count: int | None = None

    def with_member(self, member: Member) -> "TopicDraft":
        return replace(self, member=member)

    def with_title(self, topic_id: int, title: str) -> "TopicDraft":
        return replace(self, id=topic_id, title=title)

    def with_info(self, node: Node, reply_time: str) -> "TopicDraft":
        return replace(self, node=node, reply_time=reply_time)

    def with_reply_count(self, reply_count: int) -> "TopicDraft":
        return replace(self, reply_count=reply_count)

    def finish(self) -> Topic:
        missing = [
            name
            for name in ("member", "id", "title", "node", "reply_time", "reply_count")
            if getattr(self, name) is None
        ]
        if missing:
            raise UnexpectedStructure(
                "topic row is incomplete", context={"missing": missing}
            )
        return Topic(
            id=self.id,
            title=self.title,
            member=self.member,
            node=self.node,
            reply_time=self.reply_time,
            reply_count=self.reply_count,
        )


@dataclass(frozen=True)
class TopicList(Sequence[Topic]):
    topics: tuple[Topic, ...] = ()
    max_page: int = 1
    favorited: bool = False
    once_token: str | None = None

    def __post_init__(self) -> None:
        if self.max_page < 1:
            raise UnexpectedStructure(
                "max page must be positive", context={"max_page": self.max_page}
            )
        object.__setattr__(self, "topics", tuple(self.topics))

    def __getitem__(self, index):
        return self.topics[index]

    def __len__(self) -> int:
        return len(self.topics)

    def __iter__(self) -> Iterator[Topic]:
        return iter(self.topics)


# Page kinds


class Page:
    path: str = "/"

    def url_for(self, page_no: int = 1, base_url: str = BASE_URL) -> str:
        url = absolute_url(self.path, base_url)
        if page_no > 1:
            url += ("&" if "?" in url else "?") + f"p={page_no}"
        return url

    @property
    def url(self) -> str:
        return self.url_for()


@dataclass(frozen=True)
class Tab(Page):
    title: str
    path: str = "/"

    @property
    def key(self) -> str:
        _, _, key = self.path.partition("?tab=")
        return key


@dataclass(frozen=True)
class NodePage(Page):
    node: Node

    @property
    def path(self) -> str:  # type: ignore[override]
        return self.node.path


@dataclass(frozen=True)
class FavoriteTopics(Page):
    path: str = "/my/topics"


ALL_TABS: tuple[Tab, ...] = (
    Tab("技术", "/?tab=tech"),
    Tab("创意", "/?tab=creative"),
    Tab("好玩", "/?tab=play"),
    Tab("Apple", "/?tab=apple"),
    Tab("酷工作", "/?tab=jobs"),
    Tab("交易", "/?tab=deals"),
    Tab("城市", "/?tab=city"),
    Tab("问与答", "/?tab=qna"),
    Tab("最热", "/?tab=hot"),
    Tab("全部", "/?tab=all"),
    Tab("R2", "/?tab=r2"),
    Tab("关注", "/?tab=members"),
)
TAB_ALL = ALL_TABS[9]
PAGE_FAV_TOPIC = FavoriteTopics()


def get_tab(key: str) -> Tab | None:
    for tab in ALL_TABS:
        if tab.key == key:
            return tab
    return None
