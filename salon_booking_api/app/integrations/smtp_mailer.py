"""
SMTP mail relay.

Port 465 uses implicit TLS; any other port is upgraded with STARTTLS
before logging in.  A new connection is opened per message.
"""

import logging
import smtplib
from email.message import Message

from ..core.errors import IntegrationError

logger = logging.getLogger(__name__)


class SmtpMailer:
    def __init__(self, host: str, port: int, username: str, password: str, timeout: float = 30) -> None:
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.timeout = timeout

    @property
    def sender(self) -> str:
        return self.username

    def send(self, message: Message) -> None:
        """Send a fully built MIME message.  Blocking."""
        if not self.username or not self.password:
            raise IntegrationError("SMTP credentials are not configured")
        try:
            if self.port == 465:
                server = smtplib.SMTP_SSL(self.host, self.port, timeout=self.timeout)
            else:
                server = smtplib.SMTP(self.host, self.port, timeout=self.timeout)
            with server:
                if self.port != 465:
                    server.starttls()
                server.login(self.username, self.password)
                server.send_message(message)
        except (smtplib.SMTPException, OSError) as exc:
            raise IntegrationError(f"SMTP send failed: {exc}") from exc
        logger.info("Email sent to %s", message["To"])
