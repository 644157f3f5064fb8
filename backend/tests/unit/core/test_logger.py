"""Tests for logging configuration and request correlation."""

from __future__ import annotations

import json
import logging

import pytest

from taskapi.core.logger import REQUEST_ID_HEADER, JSONFormatter, configure_logging


@pytest.fixture()
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def test_configure_logging_sets_level(restore_root_logger):
    configure_logging("debug")

    assert restore_root_logger.level == logging.DEBUG
    assert len(restore_root_logger.handlers) == 1
    assert isinstance(restore_root_logger.handlers[0].formatter, JSONFormatter)


def test_json_formatter_includes_extras():
    record = logging.LogRecord("x", logging.INFO, __file__, 1, "task.created", None, None)
    record.task_id = 7
    record.request_id = "rid-1"

    payload = json.loads(JSONFormatter().format(record))

    assert payload["message"] == "task.created"
    assert payload["task_id"] == 7
    assert payload["request_id"] == "rid-1"


def test_request_id_header_is_echoed(client):
    resp = client.get("/api/v1/health", headers={REQUEST_ID_HEADER: "abc-123"})

    assert resp.headers[REQUEST_ID_HEADER] == "abc-123"


def test_request_id_generated_when_missing(client):
    resp = client.get("/api/v1/health")

    assert resp.headers.get(REQUEST_ID_HEADER)


def test_each_request_gets_its_own_request_id(client):
    first = client.get("/api/v1/health", headers={REQUEST_ID_HEADER: "first-id"})
    second = client.get("/api/v1/health", headers={REQUEST_ID_HEADER: "second-id"})
    third = client.get("/api/v1/health")

    assert first.headers[REQUEST_ID_HEADER] == "first-id"
    assert second.headers[REQUEST_ID_HEADER] == "second-id"
    assert third.headers[REQUEST_ID_HEADER] not in {"first-id", "second-id"}
