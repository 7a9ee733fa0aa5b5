from __future__ import annotations

import re
from datetime import date

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_ISO_DATE_RE = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")


def validate_email_format(email: str) -> tuple[bool, str | None]:
    """Validate that an identity string looks like an e-mail address."""
    if not email or not _EMAIL_RE.fullmatch(email):
        return False, "Please provide a valid email"
    return True, None


def validate_iso_date(value: str) -> tuple[bool, str | None]:
    """Validate a zero-padded YYYY-MM-DD calendar date."""
    if not _ISO_DATE_RE.fullmatch(value):
        return False, "Due date must use the YYYY-MM-DD format"
    try:
        date.fromisoformat(value)
    except ValueError:
        return False, f"{value} is not a valid calendar date"
    return True, None
