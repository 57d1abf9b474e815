"""
Event log record emitted by destination writes
"""

from pydantic import BaseModel

from models.base import LogLevel


class EventLogItem(BaseModel):
    message: str
    level: LogLevel = LogLevel.INFO

    def __str__(self) -> str:
        return f"{self.level.label}: {self.message}"
