"""Email syntax check and normalization for signups."""
import re
from typing import Any

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def normalize_email(value: Any) -> str:
    """Trim and lower-case. Non-strings normalize to "" (which is never valid)."""
    if not isinstance(value, str):
        return ""
    return value.strip().lower()


def is_valid_email(candidate: Any) -> bool:
    """local@domain.tld shape: no whitespace, exactly one @, at least one dot after it. Never raises."""
    if not isinstance(candidate, str):
        return False
    return _EMAIL_RE.match(candidate.strip()) is not None
