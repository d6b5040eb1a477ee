from __future__ import annotations

import json

from forum_topics.errors import UnexpectedStructure
from forum_topics.logger import Logger


def test_parse_failure_keeps_context_apart_from_event_fields(capsys) -> None:
    err = UnexpectedStructure(
        "bad row", context={"level": "x", "event": "y", "error": "z", "message": "m"}
    )
    Logger(json_mode=True).parse_failure("topic_list.failed", err, page_no=3)

    payload = json.loads(capsys.readouterr().err.strip())
    assert payload["level"] == "ERROR"
    assert payload["event"] == "topic_list.failed"
    assert payload["error"] == "UnexpectedStructure"
    assert payload["message"] == "bad row"
    assert payload["context"] == {"level": "x", "event": "y", "error": "z", "message": "m"}
    assert payload["page_no"] == 3


def test_logger_filters_below_level(capsys) -> None:
    log = Logger(level="warn")
    log.info("skipped")
    log.warn("kept", n=1)
    out = capsys.readouterr().err
    assert "skipped" not in out
    assert "WARN kept n=1" in out
