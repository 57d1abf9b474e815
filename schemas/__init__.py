"""
Pydantic schemas for configuration, events and the HTTP API.

Schemas:
    base: ConfigModel and parse_raw_json for PascalCase JSON blocks
    config: Application document (Runtime, Source, Destination, Alert, Sets)
    rest_api: RestAPI adapter and per-set configuration, Salesforce token response
    s3: S3 adapter and per-set configuration
    event_log: EventLogItem
    api: API endpoint request/response schemas

Usage:
    from schemas.config import AppConfig
    from schemas.base import parse_raw_json

Example:
    config = AppConfig.model_validate_json(
        '{"Source": {"Type": "RestAPI"}, "Destination": {"Type": "S3"}}'
    )
    assert config.runtime.dry_run_mode is False

Validation:
    Adapter blocks stay raw until the selected adapter validates them, so a
    document can carry configuration for adapters that are not in use.
"""

__all__ = [
    "ConfigModel",
    "parse_raw_json",
    "AppConfig",
    "EventLogItem",
]

from schemas.base import ConfigModel, parse_raw_json
from schemas.config import AppConfig
from schemas.event_log import EventLogItem
