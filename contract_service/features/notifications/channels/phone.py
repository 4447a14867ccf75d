"""Phone number validation and E.164 formatting for SMS/WhatsApp."""

from __future__ import annotations

import phonenumbers
from phonenumbers import NumberParseException, PhoneNumberFormat


def normalize_phone(phone: str | None, default_region: str) -> str | None:
    """Return the number in E.164 format, or None if it is not a usable number.

    Numbers without a leading "+" are parsed in ``default_region``.

    Example:
        >>> normalize_phone("+968 9123 4567", "OM")
        '+96891234567'
    """
    if not phone or not phone.strip():
        return None
    try:
        parsed = phonenumbers.parse(phone.strip(), default_region)
    except NumberParseException:
        return None
    if not phonenumbers.is_possible_number(parsed):
        return None
    return phonenumbers.format_number(parsed, PhoneNumberFormat.E164)


def is_valid_phone(phone: str | None, default_region: str) -> bool:
    return normalize_phone(phone, default_region) is not None


__all__ = ["is_valid_phone", "normalize_phone"]
