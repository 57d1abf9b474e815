"""
Bounded event log between a destination write and the log/alert consumer.

One EventLog is created per non-dry-run write. The destination is the only
producer; a single consumer task logs every item and forwards Alert and
Emergency items to the alert dispatcher.

Closing is bounded: the owner waits at most ``drain_timeout`` seconds for
the consumer to catch up and then stops it regardless. Items still queued
at that point are dropped and counted in a warning.
"""

from typing import Optional, Union
import asyncio
import contextlib
import logging

from archiver.alerts import AlertDispatcher, dispatch_alert
from core.config import settings
from schemas.config import AlertConfig
from schemas.event_log import EventLogItem

LoggerLike = Union[logging.Logger, logging.LoggerAdapter]


class EventLog:
    """
    Single-producer/single-consumer queue of EventLogItems.

    Usage:
        async with EventLog(logger, config.alert, dispatcher) as event_log:
            await destination.write(data, event_log.queue)
    """

    def __init__(
        self,
        logger: LoggerLike,
        alert_config: AlertConfig,
        dispatcher: AlertDispatcher,
        capacity: Optional[int] = None,
        drain_timeout: Optional[float] = None,
    ):
        self.logger = logger
        self.alert_config = alert_config
        self.dispatcher = dispatcher
        self.drain_timeout = drain_timeout if drain_timeout is not None else settings.EVENT_LOG_DRAIN_TIMEOUT
        self.queue: "asyncio.Queue[EventLogItem]" = asyncio.Queue(
            maxsize=capacity if capacity is not None else settings.EVENT_LOG_CAPACITY
        )
        self.dropped = 0
        self._consumer: Optional[asyncio.Task] = None

    async def __aenter__(self) -> "EventLog":
        self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    def start(self) -> None:
        """Start the consumer task. An EventLog has exactly one consumer."""
        if self._consumer is not None:
            raise RuntimeError("event log consumer already started")
        self._consumer = asyncio.create_task(self._consume())

    async def _consume(self) -> None:
        while True:
            item = await self.queue.get()
            try:
                await self.process(item)
            finally:
                self.queue.task_done()

    async def process(self, item: EventLogItem) -> None:
        """Log one item and escalate it if its level calls for an alert."""
        self.logger.log(item.level.logging_level, str(item))
        if item.level.triggers_alert:
            await dispatch_alert(self.dispatcher, self.alert_config, str(item))

    async def drain(self) -> bool:
        """
        Wait until every queued item has been processed, up to drain_timeout.

        Returns:
            True if the queue drained in time
        """
        try:
            await asyncio.wait_for(self.queue.join(), timeout=self.drain_timeout)
            return True
        except asyncio.TimeoutError:
            return False

    async def close(self) -> None:
        """Drain (bounded) and stop the consumer, dropping anything left."""
        drained = await self.drain()

        if self._consumer is not None:
            self._consumer.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._consumer
            self._consumer = None

        if not drained:
            self.dropped = self.queue.qsize()
            self.logger.warning(
                f"Event log closed after {self.drain_timeout}s with "
                f"{self.dropped} undelivered item(s)"
            )
