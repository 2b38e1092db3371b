"""
SMTP message client adapter - Implements MessageClient protocol.

Delivers confirmation messages as plain-text email through an SMTP
relay. Opens one connection per message.
"""

import logging
import smtplib
from email.message import EmailMessage

from src.domain.exceptions import MessageDeliveryError
from src.domain.ports import Message

logger = logging.getLogger(__name__)


class SmtpMessageClient:
    """
    Implements MessageClient protocol via smtplib.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(self, host: str, port: int, sender: str, timeout: float = 10.0) -> None:
        self._host = host
        self._port = port
        self._sender = sender
        self._timeout = timeout

    def send(self, address: str, message: Message) -> None:
        """
        Send a message as a plain-text email.

        Raises:
            MessageDeliveryError: If the relay is unreachable or rejects the message
        """
        mail = EmailMessage()
        mail["From"] = self._sender
        mail["To"] = address
        mail["Subject"] = message.subject
        mail.set_content(message.body)

        try:
            with smtplib.SMTP(self._host, self._port, timeout=self._timeout) as smtp:
                smtp.send_message(mail)
        except (smtplib.SMTPException, OSError) as exc:
            logger.error("SMTP delivery to %s failed: %s", address, exc)
            raise MessageDeliveryError(f"could not deliver message to {address}") from exc

        logger.info("Confirmation email sent to %s", address)
