"""
Custom exceptions for the archive runner with structured error context.

This module provides the exception hierarchy used across the archiver.
Every exception carries a human-readable message and optional context so
that a log line or alert e-mail is actionable on its own.

Exception Hierarchy:
    ArchiverException (base)
    ├── ConfigurationError
    │   └── SetConfigurationError
    ├── SourceError
    │   ├── SourceReadError
    │   └── AuthenticationError
    ├── DestinationError
    │   └── DestinationWriteError
    └── AlertError
"""

from typing import Optional, Dict, Any
from datetime import datetime, timezone


class ArchiverException(Exception):
    """
    Base exception for all archiver errors.

    Attributes:
        message: Human-readable error message
        context: Additional context information (set name, adapter, url, etc.)
        original_exception: The original exception that was caught (if any)
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None
    ):
        self.message = message
        self.context = context or {}
        self.original_exception = original_exception
        self.timestamp = datetime.now(timezone.utc)

        super().__init__(message)
        if original_exception:
            self.__cause__ = original_exception

    def __str__(self) -> str:
        """Format error message with context."""
        base_msg = self.message

        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base_msg += f" | Context: {context_str}"

        if self.original_exception:
            base_msg += f" | Caused by: {type(self.original_exception).__name__}: {self.original_exception}"

        return base_msg

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
            "original_error": str(self.original_exception) if self.original_exception else None
        }


# ============================================================================
# Configuration Errors
# ============================================================================

class ConfigurationError(ArchiverException):
    """
    Raised when the application or an adapter configuration is unusable.

    Covers malformed JSON, missing Source/Destination blocks, invalid
    adapter configuration and unrecognized adapter or auth types. Always
    fatal to the run.
    """
    pass


class SetConfigurationError(ConfigurationError):
    """
    Raised by an adapter's for_set when a set's sub-configuration is bad.

    Context should include:
        - set_name: Name of the offending archive set
    """
    pass


# ============================================================================
# Source Errors
# ============================================================================

class SourceError(ArchiverException):
    """Base exception for data source failures."""
    pass


class SourceReadError(SourceError):
    """
    Raised when reading from a source fails.

    The raw response body (if any was received) is kept on the exception so
    callers can log a truncated copy for diagnosis.
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None,
        status_code: Optional[int] = None,
        response_body: Optional[bytes] = None
    ):
        super().__init__(message, context, original_exception)
        self.status_code = status_code
        self.response_body = response_body
        if status_code is not None:
            self.context["status_code"] = status_code


class AuthenticationError(SourceError):
    """Raised when a source cannot obtain credentials (e.g. token exchange)."""
    pass


# ============================================================================
# Destination Errors
# ============================================================================

class DestinationError(ArchiverException):
    """Base exception for destination failures."""
    pass


class DestinationWriteError(DestinationError):
    """
    Raised when a destination fails to store a payload.

    Context should include:
        - bucket: Target bucket (object store destinations)
        - key: Object key that failed
    """
    pass


# ============================================================================
# Alert Errors
# ============================================================================

class AlertError(ArchiverException):
    """Raised when an alert cannot be delivered."""
    pass
