"""
Unit tests for the event log pipeline
"""

import asyncio
import logging
import time

import pytest

from archiver.event_log import EventLog
from models.base import LogLevel
from schemas.config import AlertConfig
from schemas.event_log import EventLogItem
from tests.conftest import RecordingAlertDispatcher

logger = logging.getLogger("tests.event_log")


class SlowAlertDispatcher(RecordingAlertDispatcher):
    """Blocks on every send"""

    def __init__(self, delay: float):
        super().__init__()
        self.delay = delay

    def send(self, config, message):
        time.sleep(self.delay)
        super().send(config, message)


class FailingAlertDispatcher(RecordingAlertDispatcher):
    def send(self, config, message):
        raise RuntimeError("mail server down")


def test_event_log_item_str():
    assert str(EventLogItem(level=LogLevel.ALERT, message="boom")) == "Alert: boom"
    assert str(EventLogItem(level=LogLevel.EMERGENCY, message="down")) == "Emerg: down"
    assert str(EventLogItem(message="ok")) == "Info: ok"


def test_only_alert_and_emergency_trigger_alerts():
    triggering = [level for level in LogLevel if level.triggers_alert]
    assert triggering == [LogLevel.EMERGENCY, LogLevel.ALERT]


class TestEventLog:
    """Test the consumer and bounded drain"""

    @pytest.mark.asyncio
    async def test_forwards_alert_and_emergency(self):
        dispatcher = RecordingAlertDispatcher()
        alert_config = AlertConfig(recipient_emails=["ops@example.com"])

        async with EventLog(logger, alert_config, dispatcher) as event_log:
            await event_log.queue.put(EventLogItem(level=LogLevel.INFO, message="saved"))
            await event_log.queue.put(EventLogItem(level=LogLevel.ALERT, message="save failed"))
            await event_log.queue.put(EventLogItem(level=LogLevel.WARNING, message="slow"))
            await event_log.queue.put(EventLogItem(level=LogLevel.EMERGENCY, message="bucket gone"))

        assert dispatcher.alerts == ["Alert: save failed", "Emerg: bucket gone"]
        assert dispatcher.configs == [alert_config, alert_config]
        assert event_log.dropped == 0

    @pytest.mark.asyncio
    async def test_logs_every_item(self, caplog):
        caplog.set_level(logging.DEBUG, logger="tests.event_log")

        async with EventLog(logger, AlertConfig(), RecordingAlertDispatcher()) as event_log:
            await event_log.queue.put(EventLogItem(level=LogLevel.INFO, message="saved to users/data1"))
            await event_log.queue.put(EventLogItem(level=LogLevel.DEBUG, message="detail"))
            await event_log.queue.put(EventLogItem(level=LogLevel.ALERT, message="failed"))

        messages = [r.getMessage() for r in caplog.records if r.name == "tests.event_log"]
        assert "Info: saved to users/data1" in messages
        assert "Debug: detail" in messages
        assert "Alert: failed" in messages

    @pytest.mark.asyncio
    async def test_drain_is_bounded(self, caplog):
        dispatcher = SlowAlertDispatcher(delay=0.5)
        event_log = EventLog(logger, AlertConfig(), dispatcher, drain_timeout=0.05)
        event_log.start()

        for i in range(3):
            await event_log.queue.put(EventLogItem(level=LogLevel.ALERT, message=f"failure {i}"))
        await asyncio.sleep(0.01)

        started = time.monotonic()
        await event_log.close()
        elapsed = time.monotonic() - started

        assert elapsed < 0.4
        assert event_log.dropped == 2
        assert "2 undelivered item(s)" in caplog.text

    @pytest.mark.asyncio
    async def test_capacity(self):
        event_log = EventLog(logger, AlertConfig(), RecordingAlertDispatcher())
        assert event_log.queue.maxsize == 50

    @pytest.mark.asyncio
    async def test_single_consumer(self):
        event_log = EventLog(logger, AlertConfig(), RecordingAlertDispatcher())
        event_log.start()
        try:
            with pytest.raises(RuntimeError):
                event_log.start()
        finally:
            await event_log.close()

    @pytest.mark.asyncio
    async def test_dispatch_failure_does_not_stop_consumer(self):
        dispatcher = FailingAlertDispatcher()

        async with EventLog(logger, AlertConfig(), dispatcher) as event_log:
            await event_log.queue.put(EventLogItem(level=LogLevel.ALERT, message="first"))
            await event_log.queue.put(EventLogItem(level=LogLevel.INFO, message="second"))

        assert event_log.dropped == 0
        assert event_log.queue.empty()
