"""
Console message client adapter - Implements MessageClient protocol.

This module provides a console-based implementation of the domain's
message client port, logging confirmation messages for demo purposes.
"""

import logging

from src.domain.ports import Message

logger = logging.getLogger(__name__)


class ConsoleMessageClient:
    """
    Implements MessageClient protocol via console logging.

    Uses structural subtyping - no explicit inheritance from Protocol.
    For demo/development purposes - the confirmation link is visible in logs.
    """

    def send(self, address: str, message: Message) -> None:
        """
        Log a message to the console (simulates email delivery).

        In production, this would be replaced with the SMTP adapter.
        Logged at INFO level to be visible in docker-compose logs.

        Args:
            address: Recipient email address
            message: Subject and body to deliver
        """
        logger.info(
            "[CONFIRMATION] To: %s Subject: %s Body: %s",
            address,
            message.subject,
            message.body,
        )
