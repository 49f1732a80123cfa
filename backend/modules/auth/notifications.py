"""
Notification sinks for account emails.

Email delivery is an external concern; the default sink only logs what
would be sent.
"""

import logging

from .interfaces import INotificationSink

logger = logging.getLogger(__name__)


class LoggingNotificationSink(INotificationSink):
    """Writes outgoing notifications to the application log."""

    async def send_password_reset(self, to: str, name: str, reset_url: str) -> None:
        logger.info(f"Password reset requested for {to} ({name}): {reset_url}")
