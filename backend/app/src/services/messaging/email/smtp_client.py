"""SMTP mailer used by the admin connection test and outgoing notifications."""

import smtplib
from email.mime.text import MIMEText

from src.logger_config import get_logger


class SMTPMailer:
    """Small wrapper over ``smtplib`` with STARTTLS."""

    def __init__(self, host: str, port: int, user: str, password: str, timeout: int = 30) -> None:
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.timeout = timeout
        self.logger = get_logger("smtp.client")

    def verify(self) -> None:
        """Open a connection and log in; raises ``smtplib.SMTPException``/``OSError`` on failure."""
        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
            server.starttls()
            server.login(self.user, self.password)
        self.logger.info("SMTP login succeeded for %s@%s", self.user, self.host)

    def send(self, to: str, subject: str, body: str) -> None:
        msg = MIMEText(body, "plain", "utf-8")
        msg["Subject"] = subject
        msg["From"] = self.user
        msg["To"] = to
        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
            server.starttls()
            server.login(self.user, self.password)
            server.send_message(msg)
        self.logger.info("Email sent to %s", to)
