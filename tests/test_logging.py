"""Tests for structured logging, fetch timing and the debug middleware."""
import json
import logging

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from court_fetcher.config.settings import settings
from court_fetcher.middleware import DebugLoggingMiddleware
from court_fetcher.utils.fetch_logger import log_fetch_execution
from court_fetcher.utils.logger import StructuredFormatter, get_logger


def _record(msg="Case fetched", exc_info=None, **extra):
    record = logging.LogRecord(
        name="court_fetcher.api", level=logging.INFO, pathname=__file__, lineno=10,
        msg=msg, args=(), exc_info=exc_info,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


# =============================================================================
# StructuredFormatter
# =============================================================================

def test_human_format_includes_context():
    line = StructuredFormatter().format(_record(query_id="query_1", duration_ms=12.5))
    assert "[INFO] [court_fetcher.api]" in line
    assert "(query=query_1, 12.5ms)" in line
    assert line.endswith("Case fetched")


def test_human_format_without_context():
    line = StructuredFormatter().format(_record())
    assert line.endswith("[court_fetcher.api] Case fetched")


def test_json_format():
    line = StructuredFormatter(include_json=True).format(
        _record(msg="केस मिला", query_id="query_1", case_number="W.P.(C) 1/2024")
    )
    data = json.loads(line)
    assert data["level"] == "INFO"
    assert data["logger"] == "court_fetcher.api"
    assert data["message"] == "केस मिला"
    assert data["query_id"] == "query_1"
    assert data["case_number"] == "W.P.(C) 1/2024"
    assert "request_id" not in data
    # Non-ASCII kept readable
    assert "केस" in line


def test_json_format_with_exception():
    try:
        raise ValueError("bad year")
    except ValueError:
        import sys
        record = _record(exc_info=sys.exc_info())

    data = json.loads(StructuredFormatter(include_json=True).format(record))
    assert "ValueError: bad year" in data["exception"]


# =============================================================================
# DebugLogger
# =============================================================================

def test_context_is_attached(caplog):
    logger = get_logger("court_fetcher.tests")
    logger.set_context(request_id="req-1")

    with caplog.at_level(logging.INFO, logger="court_fetcher"):
        logger.info("hello", query_id="query_9")

    [record] = caplog.records
    assert record.request_id == "req-1"
    assert record.query_id == "query_9"

    logger.clear_context()
    caplog.clear()
    with caplog.at_level(logging.INFO, logger="court_fetcher"):
        logger.info("again")
    assert not hasattr(caplog.records[0], "request_id")


def test_debug_only_in_debug_mode(caplog, monkeypatch):
    logger = get_logger("court_fetcher.tests")

    with caplog.at_level(logging.DEBUG, logger="court_fetcher"):
        monkeypatch.setattr(settings, "debug", False)
        logger.debug("hidden")
        monkeypatch.setattr(settings, "debug", True)
        logger.debug("shown")

    assert [r.getMessage() for r in caplog.records] == ["shown"]


# =============================================================================
# log_fetch_execution
# =============================================================================

@pytest.mark.asyncio
async def test_fetch_logger_success(caplog):
    @log_fetch_execution("court")
    async def lookup(value):
        return value * 2

    with caplog.at_level(logging.INFO, logger="court_fetcher"):
        assert await lookup(21) == 42

    [record] = [r for r in caplog.records if r.getMessage().startswith("Fetch complete")]
    assert record.getMessage() == "Fetch complete: court.lookup"
    assert record.duration_ms >= 0


@pytest.mark.asyncio
async def test_fetch_logger_failure(caplog):
    @log_fetch_execution("court")
    async def lookup():
        raise LookupError("no record")

    with caplog.at_level(logging.INFO, logger="court_fetcher"):
        with pytest.raises(LookupError):
            await lookup()

    [record] = [r for r in caplog.records if r.levelno == logging.ERROR]
    assert record.getMessage() == "Fetch failed: court.lookup"
    assert record.exc_info is not None


# =============================================================================
# DebugLoggingMiddleware
# =============================================================================

@pytest.fixture
def debug_app():
    app = FastAPI()
    app.add_middleware(DebugLoggingMiddleware)

    @app.post("/api/echo")
    async def echo(payload: dict):
        return payload

    @app.get("/static/app.js")
    async def asset():
        return {"ok": True}

    return app


def test_middleware_logs_request_and_response(debug_app, caplog, monkeypatch):
    monkeypatch.setattr(settings, "debug", True)

    with caplog.at_level(logging.DEBUG, logger="court_fetcher"):
        with TestClient(debug_app) as client:
            response = client.post("/api/echo", json={"caseNumber": "12345"})

    assert response.status_code == 200
    messages = [r.getMessage() for r in caplog.records if r.name.endswith("debug_middleware")]
    assert "Incoming request: POST /api/echo" in messages
    assert 'Request body: {"caseNumber": "12345"}' in messages
    assert "Response: 200" in messages


def test_middleware_body_reaches_formatted_output(debug_app, caplog, monkeypatch):
    monkeypatch.setattr(settings, "debug", True)

    with caplog.at_level(logging.DEBUG, logger="court_fetcher"):
        with TestClient(debug_app) as client:
            client.post("/api/echo", json={"caseNumber": "12345", "petitioner": "श्री राम"})

    [body_record] = [r for r in caplog.records if r.getMessage().startswith("Request body")]
    text_line = StructuredFormatter().format(body_record)
    json_line = json.loads(StructuredFormatter(include_json=True).format(body_record))

    assert '"caseNumber": "12345"' in text_line
    assert "श्री राम" in text_line
    assert '"caseNumber": "12345"' in json_line["message"]


def test_middleware_non_json_body(debug_app, caplog, monkeypatch):
    monkeypatch.setattr(settings, "debug", True)

    with caplog.at_level(logging.DEBUG, logger="court_fetcher"):
        with TestClient(debug_app) as client:
            client.post("/api/echo", content=b"not json", headers={"content-type": "text/plain"})

    messages = [r.getMessage() for r in caplog.records if r.name.endswith("debug_middleware")]
    assert "Request body is not JSON (8 bytes)" in messages


def test_middleware_skips_static(debug_app, caplog, monkeypatch):
    monkeypatch.setattr(settings, "debug", True)

    with caplog.at_level(logging.DEBUG, logger="court_fetcher"):
        with TestClient(debug_app) as client:
            client.get("/static/app.js")

    assert not [r for r in caplog.records if r.name.endswith("debug_middleware")]
