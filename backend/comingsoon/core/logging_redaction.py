"""Redact sensitive data from structured logs. Never log full email addresses, secrets or webhook URLs."""
import re
from typing import Any

# Keys (case-insensitive) that must be redacted in dicts
REDACT_KEYS = frozenset({
    "password", "token", "secret", "authorization", "cookie", "api_key", "webhook",
})

_EMAIL_RE = re.compile(r"([^@\s])[^@\s]*@([^@\s]+)")


def _redact_key(key: str) -> bool:
    k = key.lower()
    return any(r in k for r in REDACT_KEYS)


def mask_email(value: str) -> str:
    """'test@example.com' -> 't***@example.com'. Leaves non-email text unchanged."""
    return _EMAIL_RE.sub(r"\1***@\2", value)


def redact_for_log(obj: Any) -> Any:
    """Return a copy of obj safe for logging: sensitive keys replaced with '[REDACTED]', emails masked."""
    if obj is None:
        return None
    if isinstance(obj, dict):
        return {
            k: "[REDACTED]" if _redact_key(k) else redact_for_log(v)
            for k, v in obj.items()
        }
    if isinstance(obj, (list, tuple)):
        return type(obj)(redact_for_log(x) for x in obj)
    if isinstance(obj, str):
        if obj.lower().startswith("bearer "):
            return "[REDACTED]"
        return mask_email(obj)
    return obj
