"""SMTP mail transport. smtplib runs in a worker thread so the event loop is not blocked."""

import asyncio
import logging
import smtplib
from email.message import EmailMessage
from typing import Optional

logger = logging.getLogger(__name__)


class SmtpMailTransport:
    """Delivers plain-text messages over SMTP. Implements MailTransport protocol."""

    def __init__(
        self,
        host: str,
        port: int = 25,
        username: Optional[str] = None,
        password: Optional[str] = None,
        starttls: bool = False,
        timeout: float = 10.0,
    ) -> None:
        self._host = host
        self._port = port
        self._username = username
        self._password = password
        self._starttls = starttls
        self._timeout = timeout

    async def send(self, to_address: str, from_address: str, subject: str, body: str) -> None:
        message = build_message(to_address, from_address, subject, body)
        await asyncio.to_thread(self._deliver, message)

    def _deliver(self, message: EmailMessage) -> None:
        with smtplib.SMTP(self._host, self._port, timeout=self._timeout) as server:
            if self._starttls:
                server.starttls()
            if self._username:
                server.login(self._username, self._password or "")
            server.send_message(message)
        logger.info("smtp_message_delivered", extra={"to_address": message["To"]})


def build_message(to_address: str, from_address: str, subject: str, body: str) -> EmailMessage:
    message = EmailMessage()
    message["From"] = from_address
    message["To"] = to_address
    message["Subject"] = subject
    message.set_content(body)
    return message
