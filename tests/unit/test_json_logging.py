from __future__ import annotations

import io
import json
import logging

from typed_options import Options
from typed_options.observability.logging import JsonFormatter, configure_logging, get_logger


def _lines(stream: io.StringIO) -> list[dict]:
    return [json.loads(line) for line in stream.getvalue().splitlines() if line.strip()]


def test_kv_logger_emits_extra_fields(restore_root_logger) -> None:
    stream = io.StringIO()
    configure_logging(level="DEBUG", stream=stream)

    get_logger("typed_options.test").info("loaded", count=3, path="x.yaml", obj=object())

    (record,) = _lines(stream)
    assert record["message"] == "loaded"
    assert record["logger"] == "typed_options.test"
    assert record["level"] == "INFO"
    assert record["count"] == 3
    assert record["path"] == "x.yaml"
    assert record["obj"].startswith("<object")


def test_configure_logging_replaces_handlers(restore_root_logger) -> None:
    configure_logging(level="INFO", stream=io.StringIO())
    configure_logging(level="INFO", stream=io.StringIO())
    assert len(logging.getLogger().handlers) == 1


def test_exception_includes_traceback(restore_root_logger) -> None:
    stream = io.StringIO()
    configure_logging(level="INFO", stream=stream)

    try:
        raise ValueError("boom")
    except ValueError:
        get_logger().exception("failed")

    (record,) = _lines(stream)
    assert record["level"] == "ERROR"
    assert "ValueError: boom" in record["exc_info"]


def test_store_logs_overwrite_and_mismatch(restore_root_logger) -> None:
    stream = io.StringIO()
    configure_logging(level="DEBUG", stream=stream)

    options = Options().set("x", 1).set("x", "one")
    assert options.get("x", int) is None

    events = {r["message"]: r for r in _lines(stream)}
    assert events["option_overwritten"]["old_kind"] == "int"
    assert events["option_overwritten"]["new_kind"] == "str"
    assert events["option_type_mismatch"]["requested_kind"] == "int"


def test_formatter_skips_private_attrs() -> None:
    record = logging.LogRecord("n", logging.INFO, __file__, 1, "msg", None, None)
    record._private = 1
    payload = json.loads(JsonFormatter().format(record))
    assert "_private" not in payload
    assert payload["message"] == "msg"
