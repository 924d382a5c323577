"""
Unit tests for activity sink resolution and the logging sink.
"""

import logging

import pytest

from jwt_webhooks.sinks import (
    ActivitySink,
    CallableSink,
    DatabaseSink,
    LoggingSink,
    resolve_sink,
)

pytestmark = pytest.mark.unit

captured = []


def record_activity(message, subject_id):
    captured.append((message, subject_id))


def test_logging_sink_writes_message_and_subject(caplog):
    caplog.set_level(logging.INFO, logger="jwt_webhooks.activity")
    LoggingSink().log("Webhook sent for new client ID 42.", 42)

    record, = [r for r in caplog.records if r.name == "jwt_webhooks.activity"]
    assert record.levelno == logging.INFO
    assert record.getMessage() == "[subject 42] Webhook sent for new client ID 42."
    assert record.subject_id == 42


def test_resolve_sink_from_dotted_class_path():
    assert isinstance(resolve_sink("jwt_webhooks.sinks.DatabaseSink"), DatabaseSink)


def test_resolve_sink_defaults_to_logging():
    assert isinstance(resolve_sink(None), LoggingSink)


def test_resolve_sink_keeps_instances():
    sink = LoggingSink("crm.webhooks")
    assert resolve_sink(sink) is sink


def test_resolve_sink_wraps_callables():
    captured.clear()
    sink = resolve_sink(f"{__name__}.record_activity")
    assert isinstance(sink, CallableSink)
    sink.log("hello", 0)
    assert captured == [("hello", 0)]


def test_resolve_sink_rejects_non_callables():
    with pytest.raises(TypeError):
        resolve_sink(42)


def test_sink_interface_is_abstract():
    with pytest.raises(TypeError):
        ActivitySink()
