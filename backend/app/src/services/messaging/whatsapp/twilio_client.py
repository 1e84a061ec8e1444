"""Client for sending WhatsApp messages through Twilio."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from twilio.base.exceptions import TwilioRestException
from twilio.rest import Client

from src.logger_config import get_logger
from src.services.errors import ProviderError


@dataclass(frozen=True)
class SentMessage:
    """Provider answer for an accepted outbound message."""

    sid: str
    status: Optional[str]


class TwilioWhatsAppClient:
    """Thin wrapper around the Twilio messages endpoint."""

    def __init__(self, account_sid: str, auth_token: str, from_number: Optional[str]) -> None:
        self.client = Client(account_sid, auth_token)
        self.from_number = from_number
        self.logger = get_logger("twilio.client")

    def send_message(self, to: str, body: str) -> SentMessage:
        """Send a plain text message.

        Args:
            to (str): Destination with channel prefix, e.g. ``whatsapp:+905551112233``.
            body (str): Message text.

        Raises:
            ProviderError: when Twilio rejects the message or cannot be reached.
        """
        sender = self.from_number or ""
        if sender and not sender.startswith("whatsapp:"):
            sender = f"whatsapp:{sender}"

        try:
            message = self.client.messages.create(body=body, from_=sender, to=to)
        except TwilioRestException as exc:
            self.logger.error("Twilio returned an error while sending message: %s", exc)
            raise ProviderError(exc.msg or str(exc)) from exc
        except Exception as exc:
            self.logger.error("Unexpected error while sending message via Twilio: %s", exc)
            raise ProviderError(str(exc)) from exc

        return SentMessage(sid=message.sid, status=message.status)
