"""Tests for structured JSON logging."""

from __future__ import annotations

import json
import logging

import pytest


def test_json_formatter():
    """JsonFormatter outputs valid JSON with expected fields."""
    from tutorials.server.logging_config import JsonFormatter

    fmt = JsonFormatter()
    record = logging.LogRecord(
        name="tutorials.test",
        level=logging.INFO,
        pathname="test.py",
        lineno=1,
        msg="saved %s",
        args=("tutorial",),
        exc_info=None,
    )
    record.request_id = "abc-123"  # type: ignore[attr-defined]
    record.tutorial_id = 7  # type: ignore[attr-defined]
    record.latency_ms = 1.5  # type: ignore[attr-defined]

    data = json.loads(fmt.format(record))

    assert data["level"] == "INFO"
    assert data["logger"] == "tutorials.test"
    assert data["message"] == "saved tutorial"
    assert data["request_id"] == "abc-123"
    assert data["tutorial_id"] == 7
    assert data["latency_ms"] == 1.5
    assert "timestamp" in data


def test_json_formatter_no_extras():
    from tutorials.server.logging_config import JsonFormatter

    record = logging.LogRecord(
        name="test", level=logging.WARNING, pathname="", lineno=0,
        msg="warn", args=(), exc_info=None,
    )
    data = json.loads(JsonFormatter().format(record))
    assert data["level"] == "WARNING"
    assert "request_id" not in data
    assert "exception" not in data


def test_json_formatter_includes_exception():
    from tutorials.server.logging_config import JsonFormatter

    try:
        raise ValueError("bad")
    except ValueError:
        import sys

        record = logging.LogRecord(
            name="test", level=logging.ERROR, pathname="", lineno=0,
            msg="failed", args=(), exc_info=sys.exc_info(),
        )
    data = json.loads(JsonFormatter().format(record))
    assert "ValueError: bad" in data["exception"]


@pytest.mark.asyncio
async def test_request_adds_request_id():
    """Middleware adds X-Request-Id header to responses."""
    pytest.importorskip("fastapi")
    pytest.importorskip("httpx")

    from httpx import ASGITransport, AsyncClient

    from tutorials.server.app import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.get("/health")
        assert resp.status_code == 200
        assert len(resp.headers["x-request-id"]) > 10


@pytest.mark.asyncio
async def test_request_passes_through_request_id():
    """Middleware uses provided X-Request-Id."""
    pytest.importorskip("fastapi")
    pytest.importorskip("httpx")

    from httpx import ASGITransport, AsyncClient

    from tutorials.server.app import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.get("/health", headers={"X-Request-Id": "custom-123"})
        assert resp.headers["x-request-id"] == "custom-123"


def _record(**context) -> logging.LogRecord:
    record = logging.LogRecord(
        name="tutorials.test", level=logging.INFO, pathname="", lineno=0,
        msg="saved", args=(), exc_info=None,
    )
    for key, value in context.items():
        setattr(record, key, value)
    return record


def test_context_formatter_appends_pairs():
    from tutorials.server.logging_config import ContextFormatter

    line = ContextFormatter().format(_record(tutorial_id=3, request_id="r1"))
    assert "INFO [tutorials.test] saved" in line
    assert line.endswith("request_id=r1 tutorial_id=3")


def test_context_formatter_without_context():
    from tutorials.server.logging_config import ContextFormatter

    line = ContextFormatter().format(_record())
    assert line.endswith("saved")
    assert "=" not in line.split("saved")[-1]


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def test_setup_logging_replaces_its_own_handler(restore_root_logger):
    from tutorials.server.logging_config import ContextFormatter, JsonFormatter, setup_logging

    root = restore_root_logger
    other = logging.NullHandler()
    root.addHandler(other)

    first = setup_logging(log_format="pretty", log_level="debug")
    second = setup_logging(log_format="json", log_level="WARNING")

    assert isinstance(first.formatter, ContextFormatter)
    assert isinstance(second.formatter, JsonFormatter)
    assert first not in root.handlers
    assert second in root.handlers
    assert other in root.handlers
    assert root.level == logging.WARNING


@pytest.mark.asyncio
async def test_route_logs_carry_tutorial_id(caplog):
    pytest.importorskip("fastapi")
    pytest.importorskip("httpx")

    from httpx import ASGITransport, AsyncClient

    from tutorials import MemoryStore
    from tutorials.server.app import app
    from tutorials.server.state import set_store

    set_store(MemoryStore())
    try:
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            with caplog.at_level(logging.INFO, logger="tutorials.server.routes.tutorials"):
                resp = await client.post("/api/tutorials", json={"title": "Go"})
    finally:
        set_store(None)

    created = [r for r in caplog.records if r.getMessage() == "Tutorial created"]
    assert len(created) == 1
    assert created[0].tutorial_id == resp.json()["id"]
