import enum
import logging


# ============================================================================
# ENUMS
# ============================================================================

class SourceType(str, enum.Enum):
    """Declared source adapter types"""
    REST_API = "RestAPI"
    NULL = "Null"


class DestinationType(str, enum.Enum):
    """Declared destination adapter types"""
    S3 = "S3"
    NULL = "Null"


class AuthType(str, enum.Enum):
    """Authentication strategies understood by the REST source"""
    NONE = ""
    BASIC = "basic"
    BEARER = "bearer"
    SALESFORCE_OAUTH = "SalesforceOauth"


class RunState(str, enum.Enum):
    """Lifecycle of one archive run"""
    UNLOADED = "unloaded"
    LOADED = "loaded"
    SOURCE_SELECTED = "source_selected"
    DESTINATION_SELECTED = "destination_selected"
    ITERATING = "iterating"
    DONE = "done"


class LogLevel(enum.IntEnum):
    """Event log severity, ordered by syslog priority"""
    EMERGENCY = 0
    ALERT = 1
    CRITICAL = 2
    ERROR = 3
    WARNING = 4
    NOTICE = 5
    INFO = 6
    DEBUG = 7

    @property
    def label(self) -> str:
        return _LEVEL_LABELS[self]

    @property
    def logging_level(self) -> int:
        """Matching stdlib logging level"""
        return _LOGGING_LEVELS[self]

    @property
    def triggers_alert(self) -> bool:
        return self in (LogLevel.ALERT, LogLevel.EMERGENCY)


_LEVEL_LABELS = {
    LogLevel.EMERGENCY: "Emerg",
    LogLevel.ALERT: "Alert",
    LogLevel.CRITICAL: "Critical",
    LogLevel.ERROR: "Error",
    LogLevel.WARNING: "Warning",
    LogLevel.NOTICE: "Notice",
    LogLevel.INFO: "Info",
    LogLevel.DEBUG: "Debug",
}

_LOGGING_LEVELS = {
    LogLevel.EMERGENCY: logging.CRITICAL,
    LogLevel.ALERT: logging.CRITICAL,
    LogLevel.CRITICAL: logging.CRITICAL,
    LogLevel.ERROR: logging.ERROR,
    LogLevel.WARNING: logging.WARNING,
    LogLevel.NOTICE: logging.INFO,
    LogLevel.INFO: logging.INFO,
    LogLevel.DEBUG: logging.DEBUG,
}
