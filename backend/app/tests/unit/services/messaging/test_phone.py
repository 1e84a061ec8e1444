"""Test phone number helpers."""

import pytest

from src.services.messaging.whatsapp.phone import (
    digits_only,
    strip_inbound_prefixes,
    to_whatsapp_address,
)


def test_digits_only() -> None:
    assert digits_only("+90 (555) 111-22-33") == "905551112233"
    assert digits_only("") == ""


def test_to_whatsapp_address() -> None:
    assert to_whatsapp_address("+90 555 111 22 33") == "whatsapp:+905551112233"


@pytest.mark.parametrize(
    "raw",
    ["whatsapp:+905551112233", "WhatsApp:+905551112233", "+905551112233", " 905551112233 "],
)
def test_strip_inbound_prefixes(raw) -> None:
    assert strip_inbound_prefixes(raw) == "905551112233"
