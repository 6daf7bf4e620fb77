import logging

from app.core.logging import DEFAULT_FORMAT, ContextFilter, bind


def _format(record: logging.LogRecord) -> str:
    ContextFilter().filter(record)
    return logging.Formatter(DEFAULT_FORMAT).format(record)


def test_missing_context_is_rendered_as_dash():
    record = logging.LogRecord("app.test", logging.INFO, __file__, 1, "hello", (), None)
    line = _format(record)
    assert "| user=- |" in line
    assert record.stage == "-"


def test_bound_user_id_reaches_the_formatted_line(caplog):
    log = bind(logging.getLogger("app.test"), user_id=42)
    with caplog.at_level(logging.INFO, logger="app.test"):
        log.info("generated", extra={"stage": "strict"})

    (record,) = caplog.records
    assert record.user_id == 42
    assert record.stage == "strict"
    assert "| user=42 |" in _format(record)
