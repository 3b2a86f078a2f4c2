"""Tests for settings and the ring buffer logger."""
import logging

from grainlink.app.config import ControllerSettings
from grainlink.app.logging import RingBufferHandler, create_logger, ring_buffer


def test_defaults():
    settings = ControllerSettings()
    assert settings.inter_line_delay == 0.25
    assert settings.enable_auto_advance is True


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("INTER_LINE_DELAY", "0.5")
    monkeypatch.setenv("ENABLE_AUTO_ADVANCE", "false")
    settings = ControllerSettings()
    assert settings.inter_line_delay == 0.5
    assert settings.enable_auto_advance is False


def test_ring_buffer_keeps_last_events():
    logger = create_logger("grainlink.test.ring", 2)
    handler = ring_buffer(logger)
    assert isinstance(handler, RingBufferHandler)
    handler.clear()
    for i in range(3):
        logger.info("event_%d", i, extra={"details": {"i": i}})
    events = handler.get_events()
    assert [e["event"] for e in events] == ["event_1", "event_2"]
    assert events[-1]["details"] == {"i": 2}
    assert events[-1]["level"] == "INFO"


def test_create_logger_is_idempotent():
    logger = create_logger("grainlink.test.once", 5)
    again = create_logger("grainlink.test.once", 5)
    assert logger is again
    assert len([h for h in again.handlers if isinstance(h, RingBufferHandler)]) == 1
    assert logger.propagate is False
    assert logger.level == logging.INFO
