"""
Capability interfaces for archive sources and destinations
"""

from abc import ABC, abstractmethod
from typing import Any
import asyncio
import logging

from schemas.event_log import EventLogItem
from models.base import LogLevel

logger = logging.getLogger(__name__)


class Source(ABC):
    """
    Abstract base class for all data sources.

    Responsibilities:
    - Apply a set's sub-configuration (replacing any previous set's state)
    - Read the payload for the currently applied set
    """

    @abstractmethod
    def for_set(self, set_name: str, set_config: Any) -> None:
        """
        Apply the sub-configuration of one archive set.

        Args:
            set_name: Name of the archive set
            set_config: Raw JSON sub-configuration (mapping, text or bytes)

        Raises:
            SetConfigurationError: If the sub-configuration is malformed or
                a required field is missing
        """
        pass

    @abstractmethod
    async def read(self) -> bytes:
        """
        Fetch the payload for the current set.

        Raises:
            SourceReadError: On transport failure or an error response
        """
        pass


class Destination(ABC):
    """
    Abstract base class for all destinations.

    Every write reports its outcome twice: one EventLogItem on the event
    log (Info on success, Alert on failure) and, on failure, the error
    raised to the caller.
    """

    @abstractmethod
    def for_set(self, set_name: str, set_config: Any) -> None:
        """Apply the sub-configuration of one archive set."""
        pass

    @abstractmethod
    async def write(self, data: bytes, event_log: "asyncio.Queue[EventLogItem]") -> None:
        """
        Store ``data`` and put exactly one EventLogItem on ``event_log``.

        Raises:
            DestinationWriteError: If the store fails
        """
        pass


class NullSource(Source):
    """Source that returns a fixed payload. Useful for testing destinations."""

    def __init__(self, data: bytes = b""):
        self.data = data
        self.set_name = ""

    def for_set(self, set_name: str, set_config: Any) -> None:
        self.set_name = set_name

    async def read(self) -> bytes:
        return self.data


class NullDestination(Destination):
    """Destination that discards everything it is given."""

    def __init__(self):
        self.set_name = ""

    def for_set(self, set_name: str, set_config: Any) -> None:
        self.set_name = set_name

    async def write(self, data: bytes, event_log: "asyncio.Queue[EventLogItem]") -> None:
        logger.debug(f"Discarding {len(data)} bytes for set {self.set_name}")
        await event_log.put(EventLogItem(
            level=LogLevel.INFO,
            message=f"discarded {len(data)} bytes for set {self.set_name}",
        ))
