#!/usr/bin/env python3

from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path

from dotenv import find_dotenv, load_dotenv


def main() -> int:
    load_dotenv(find_dotenv(usecwd=True))

    parser = argparse.ArgumentParser(description="forum_topics: fetch one listing page")
    target = parser.add_mutually_exclusive_group()
    target.add_argument("--tab", help="Tab key, e.g. hot, tech, all (default: all)")
    target.add_argument("--node", help="Node name, e.g. python")
    target.add_argument(
        "--favorites", action="store_true", help="Favorite topics of the session member"
    )
    parser.add_argument("--page", type=int, default=1, help="Page number (default: 1)")
    parser.add_argument("--cookie", help="Cookie header of a logged-in session")
    parser.add_argument("--base-url", help="Site base URL")
    parser.add_argument(
        "--use-test-fixtures", action="store_true", help="Use local HTML fixtures"
    )
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    parser.add_argument("--log-json", action="store_true", help="Output logs as JSON")
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warn", "error"],
        help="Log level (default: info)",
    )
    args = parser.parse_args()

    if args.cookie:
        os.environ["SESSION_COOKIE"] = args.cookie
    if args.base_url:
        os.environ["BASE_URL"] = args.base_url
    if args.use_test_fixtures:
        os.environ["USE_TEST_FIXTURES"] = "true"
    if args.log_json:
        os.environ["LOG_JSON"] = "true"
    if args.log_level:
        os.environ["LOG_LEVEL"] = args.log_level

    project_dir = Path(__file__).resolve().parents[1]
    src_dir = project_dir / "src"
    sys.path.insert(0, str(src_dir))

    from forum_topics.config import Config
    from forum_topics.errors import ParseError
    from forum_topics.models import PAGE_FAV_TOPIC, TAB_ALL, Node, NodePage, get_tab
    from forum_topics.workflow import fetch_topic_list, topic_list_to_dict

    if args.node:
        # The listing itself never names its node, so the name doubles as title.
        page = NodePage(Node(name=args.node, title=args.node))
    elif args.favorites:
        page = PAGE_FAV_TOPIC
    elif args.tab:
        page = get_tab(args.tab)
        if page is None:
            parser.error(f"unknown tab: {args.tab}")
    else:
        page = TAB_ALL

    cfg = Config.from_env()
    try:
        topics = fetch_topic_list(cfg, page, page_no=max(1, args.page))
    except ParseError:
        return 2

    if args.json:
        print(json.dumps(topic_list_to_dict(topics), ensure_ascii=False, indent=2))
        return 0

    print("========================================")
    print(f"[{page.path}] page {args.page}/{topics.max_page}")
    if cfg.logged_in and isinstance(page, NodePage):
        print(f"favorited: {topics.favorited} once: {topics.once_token}")
    for t in topics:
        when = t.reply_time or "-"
        print(f"{t.id:>8}  {t.reply_count:>4}  {t.node.name:<12} {t.member.username:<16} {when}  {t.title}")
    print("========================================")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
