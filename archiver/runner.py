"""
Archive Runner - sequences archive sets from a source to a destination.

This module provides:
- run_set: one set's read → (dry-run preview) → write → event log drain
- ArchiveRunner: loads configuration, selects adapters by declared type,
  runs every set and reports failures through logs and one summary alert

Failures are collected per set and never stop the remaining sets. The run
itself only reports success or failure through its summary and alerts.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union
import logging

from archiver.alerts import AlertDispatcher, SESAlertDispatcher, dispatch_alert
from archiver.base import Destination, Source
from archiver.config_loader import load_config
from archiver.event_log import EventLog
from archiver.factory import DestinationFactory, SourceFactory, create_destination, create_source
from core.config import settings
from core.exceptions import ArchiverException, ConfigurationError, SourceReadError
from core.logging import get_set_logger
from models.base import RunState
from schemas.config import AlertConfig, AppConfig, ArchiveSet

logger = logging.getLogger(__name__)

LoggerLike = Union[logging.Logger, logging.LoggerAdapter]

TIME_FORMAT = "%a, %d %b %Y %H:%M:%S %z"


def preview_payload(data: bytes, limit: Optional[int] = None) -> str:
    """Decode at most ``limit`` bytes of ``data``, marking any cut."""
    limit = limit if limit is not None else settings.DRY_RUN_PREVIEW_BYTES
    if len(data) > limit:
        return f"{data[:limit].decode('utf-8', errors='replace')}...(truncated)"
    return data.decode("utf-8", errors="replace")


async def run_set(
    set_logger: LoggerLike,
    source: Source,
    destination: Destination,
    config: AppConfig,
    dispatcher: AlertDispatcher,
) -> None:
    """
    Read the current set from the source and write it to the destination.

    Both adapters must already have the set's configuration applied.

    Raises:
        SourceReadError: If the read fails (nothing is written)
        Exception: Whatever the destination raised, after the event log
            has been drained and closed
    """
    try:
        data = await source.read()
    except SourceReadError as e:
        if e.response_body:
            set_logger.error(f"Source response body:\n{preview_payload(e.response_body)}")
        raise

    if config.runtime.dry_run_mode:
        set_logger.info("Dry-run mode enabled. No data will be written to the destination.")
        set_logger.info(f"response:\n{preview_payload(data)}")
        return

    async with EventLog(set_logger, config.alert, dispatcher) as event_log:
        try:
            await destination.write(data, event_log.queue)
        except Exception as e:
            set_logger.error(f"Error saving to destination: {e}")
            raise
        set_logger.info("Data saved to destination")


class ArchiveRunner:
    """
    Archive orchestrator.

    Responsibilities:
    - Load configuration and build the declared source and destination
    - Apply each set's configuration and run it through run_set
    - Collect per-set errors without aborting the run
    - Dispatch one alert for a fatal startup failure, or one summary alert
      for all per-set failures
    """

    def __init__(
        self,
        alert_dispatcher: Optional[AlertDispatcher] = None,
        source_factory: SourceFactory = create_source,
        destination_factory: DestinationFactory = create_destination,
        run_logger: Optional[logging.Logger] = None,
    ):
        self.alert_dispatcher = alert_dispatcher or SESAlertDispatcher()
        self.source_factory = source_factory
        self.destination_factory = destination_factory
        self.logger = run_logger or logger
        self.state = RunState.UNLOADED

    async def run(self, config_file: Optional[str] = None) -> Dict[str, Any]:
        """
        Run every archive set in the configuration file.

        Args:
            config_file: Path to the configuration document (falls back to
                CONFIG_PATH, then ./config.json)

        Returns:
            Dictionary with run statistics:
            - status: "success", "completed_with_errors" or "failed"
            - state: final RunState
            - sets_total / sets_failed: set counts
            - errors: human-readable error messages
        """
        self.state = RunState.UNLOADED
        self.logger.info(f"Archive started at {datetime.now(timezone.utc).strftime(TIME_FORMAT)}")

        try:
            config = load_config(config_file)
        except ConfigurationError as e:
            return await self._abort(AlertConfig(), f"Unable to load config, error: {e}")

        return await self.run_config(config)

    async def run_config(self, config: AppConfig) -> Dict[str, Any]:
        """Run an already-parsed configuration."""
        self.state = RunState.LOADED

        try:
            source = await self.source_factory(config.source)
        except Exception as e:
            return await self._abort(
                config.alert,
                f"Unable to initialize {config.source.type} source, error: {e}"
            )
        self.state = RunState.SOURCE_SELECTED

        try:
            destination = await self.destination_factory(config.destination)
        except Exception as e:
            return await self._abort(
                config.alert,
                f"Unable to initialize {config.destination.type} destination, error: {e}"
            )
        self.state = RunState.DESTINATION_SELECTED

        self.state = RunState.ITERATING
        width = config.max_set_name_length()
        total = len(config.sets)
        errors: List[str] = []
        sets_failed = 0

        for index, archive_set in enumerate(config.sets, start=1):
            set_errors = await self._process_set(
                index, total, archive_set, source, destination, config, width
            )
            if set_errors:
                sets_failed += 1
                errors.extend(set_errors)

        if errors:
            await dispatch_alert(
                self.alert_dispatcher,
                config.alert,
                "Archive error(s):\n" + "\n".join(errors)
            )

        self.state = RunState.DONE
        self.logger.info(f"Archive completed at {datetime.now(timezone.utc).strftime(TIME_FORMAT)}")

        return {
            "status": "completed_with_errors" if errors else "success",
            "state": self.state.value,
            "dry_run": config.runtime.dry_run_mode,
            "sets_total": total,
            "sets_failed": sets_failed,
            "errors": errors,
        }

    async def _process_set(
        self,
        index: int,
        total: int,
        archive_set: ArchiveSet,
        source: Source,
        destination: Destination,
        config: AppConfig,
        width: int,
    ) -> List[str]:
        """Apply one set's configuration and run it. Returns its error messages."""
        name = archive_set.name
        set_logger = get_set_logger(self.logger, name, width)
        set_logger.info(f"({index}/{total}) Beginning archive set")

        errors: List[str] = []
        if not name:
            errors.append("configuration contains a set with no name")

        configured = True
        try:
            source.for_set(name, archive_set.source)
        except Exception as e:
            msg = f'Error setting source set on set "{name}": {e}'
            set_logger.error(msg)
            errors.append(msg)
            configured = False

        try:
            destination.for_set(name, archive_set.destination)
        except Exception as e:
            msg = f'Error setting destination set on set "{name}": {e}'
            set_logger.error(msg)
            errors.append(msg)
            configured = False

        # Never run a set against state left over from the previous one
        if not configured:
            set_logger.warning("Skipping set due to configuration errors")
            return errors

        try:
            await run_set(set_logger, source, destination, config, self.alert_dispatcher)
        except Exception as e:
            msg = f'Archive failed with error on set "{name}": {e}'
            extra = {"error_context": e.to_dict()} if isinstance(e, ArchiverException) else None
            set_logger.error(msg, extra=extra)
            errors.append(msg)

        return errors

    async def _abort(self, alert_config: AlertConfig, msg: str) -> Dict[str, Any]:
        """Report a fatal startup failure and finish the run."""
        self.logger.error(msg)
        await dispatch_alert(self.alert_dispatcher, alert_config, msg)
        self.state = RunState.DONE
        return {
            "status": "failed",
            "state": self.state.value,
            "dry_run": False,
            "sets_total": 0,
            "sets_failed": 0,
            "errors": [msg],
        }
