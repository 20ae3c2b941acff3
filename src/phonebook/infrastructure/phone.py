"""Phone numbers as the phonebook stores them."""

import phonenumbers
from phonenumbers import PhoneNumber, PhoneNumberFormat


def _parse(text: str, region: str | None) -> PhoneNumber | None:
    try:
        number = phonenumbers.parse(text, region)
    except phonenumbers.NumberParseException:
        return None
    return number if phonenumbers.is_valid_number(number) else None


def normalize_phone(raw: str | None, default_region: str | None = None) -> str | None:
    """E.164 form of raw, or None when it is blank or not a valid number.

    A number without a country code is read in default_region ("FI" turns
    "040 123 5432" into "+358401235432"); an explicit +code wins.
    """
    text = (raw or "").strip()
    number = _parse(text, default_region) if text else None
    if number is None:
        return None
    return phonenumbers.format_number(number, PhoneNumberFormat.E164)


def stored_phone(raw: str | None, default_region: str | None = None) -> str | None:
    """Phone as it is stored: E.164 when it parses, else the stripped input. Blank is None."""
    text = (raw or "").strip()
    if not text:
        return None
    return normalize_phone(text, default_region) or text
