"""
Shared enums for the archiver.

Models:
    base: SourceType, DestinationType, AuthType, RunState and LogLevel

Usage:
    from models.base import SourceType, LogLevel

Example:
    level = LogLevel.ALERT
    assert level.triggers_alert
    assert level.label == "Alert"
"""

from models.base import AuthType, DestinationType, LogLevel, RunState, SourceType

__all__ = [
    "SourceType",
    "DestinationType",
    "AuthType",
    "RunState",
    "LogLevel",
]
