"""
Alert dispatch for severe archive conditions.

The archiver only ever calls ``AlertDispatcher.send``; delivery is fire and
forget and nothing is returned to the caller.
"""

from abc import ABC, abstractmethod
import asyncio
import logging

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from core.exceptions import AlertError
from schemas.config import AlertConfig

logger = logging.getLogger(__name__)


class AlertDispatcher(ABC):
    """Forwards a message through an external notification channel."""

    @abstractmethod
    def send(self, config: AlertConfig, message: str) -> None:
        pass


class SESAlertDispatcher(AlertDispatcher):
    """
    Send alerts as e-mail through Amazon SES.

    Every address in ``RecipientEmails`` gets its own message. With no
    recipients configured the alert is only logged.
    """

    def send(self, config: AlertConfig, message: str) -> None:
        logger.info(f"Sending alert: {message}")

        if not config.recipient_emails:
            logger.warning("No alert recipients configured; alert not e-mailed")
            return

        try:
            client = self._client(config)
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Unable to create SES client: {e}")
            return

        for recipient in config.recipient_emails:
            try:
                self._send_email(client, config, recipient, message)
            except AlertError as e:
                logger.error(str(e), extra={"error_context": e.to_dict()})

    def _client(self, config: AlertConfig):
        kwargs = {"service_name": "ses"}
        if config.aws_region:
            kwargs["region_name"] = config.aws_region
        if config.aws_access_key_id and config.aws_secret_access_key:
            kwargs["aws_access_key_id"] = config.aws_access_key_id
            kwargs["aws_secret_access_key"] = config.aws_secret_access_key
        return boto3.client(**kwargs)

    def _send_email(self, client, config: AlertConfig, recipient: str, message: str) -> None:
        try:
            client.send_email(
                Source=config.return_to_addr,
                Destination={"ToAddresses": [recipient]},
                Message={
                    "Subject": {"Charset": config.char_set, "Data": config.subject_text},
                    "Body": {"Text": {"Charset": config.char_set, "Data": message}},
                },
            )
        except (BotoCoreError, ClientError) as e:
            raise AlertError(
                f"error sending alert e-mail to {recipient}",
                context={"recipient": recipient},
                original_exception=e
            )


async def dispatch_alert(dispatcher: AlertDispatcher, config: AlertConfig, message: str) -> None:
    """
    Run ``dispatcher.send`` off the event loop.

    Failures are logged and never propagate to the caller.
    """
    try:
        await asyncio.to_thread(dispatcher.send, config, message)
    except Exception:
        logger.exception("Alert dispatch failed")
