"""Phone number helpers shared by outbound and inbound WhatsApp flows."""

import re

_NON_DIGITS = re.compile(r"\D")
CHANNEL_PREFIX = "whatsapp:"


def digits_only(phone: str) -> str:
    """Return only the digits of ``phone``."""
    return _NON_DIGITS.sub("", phone or "")


def to_whatsapp_address(phone: str) -> str:
    """Format a stored phone number as a Twilio WhatsApp destination."""
    return f"{CHANNEL_PREFIX}+{digits_only(phone)}"


def strip_inbound_prefixes(raw: str) -> str:
    """Turn ``whatsapp:+905551112233`` (or ``+90 555 ...``) into bare digits."""
    value = (raw or "").strip()
    if value.lower().startswith(CHANNEL_PREFIX):
        value = value[len(CHANNEL_PREFIX):]
    return digits_only(value.lstrip("+"))
