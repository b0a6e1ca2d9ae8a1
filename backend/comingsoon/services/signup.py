"""Signup registrar: validate, rate-limit, dedupe by normalized email, persist, notify.

Each step can short-circuit. Nothing is rolled back: once the record is written, a failed
notification does not undo it. The dedupe check is read-then-write, so two concurrent first
signups for one address may both write (same record, last write wins).
"""
import json
import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any
from urllib.parse import parse_qsl

from pydantic import BaseModel
from starlette.requests import Request

from comingsoon.core.logging_redaction import redact_for_log
from comingsoon.core.metrics import record_signup_outcome, record_store_error
from comingsoon.core.rate_limit import RateLimiter
from comingsoon.services.notifier import Notifier
from comingsoon.services.store import KeyValueStore, StoreError
from comingsoon.services.validation import is_valid_email, normalize_email

logger = logging.getLogger(__name__)

_FORM_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")


class SignupOutcome(str, Enum):
    REGISTERED = "registered"
    ALREADY_REGISTERED = "already_registered"
    INVALID_EMAIL = "invalid_email"
    RATE_LIMITED = "rate_limited"


class SignupResult(BaseModel):
    outcome: SignupOutcome
    email: str


def _parse_query_body(body: bytes) -> dict[str, str]:
    return dict(parse_qsl(body.decode("utf-8", errors="replace"), keep_blank_values=True))


async def read_signup_fields(request: Request) -> dict[str, Any]:
    """Request body as a flat mapping: JSON object, form fields, or a raw query string. {} if unparseable."""
    content_type = (request.headers.get("content-type") or "").lower()
    body = await request.body()
    if "application/json" in content_type:
        try:
            data = json.loads(body or b"null")
        except ValueError:
            return {}
        return data if isinstance(data, dict) else {}
    if content_type.startswith(_FORM_TYPES):
        # form() re-reads the cached body
        try:
            form = await request.form()
        except Exception:
            logger.debug("Form parse failed; falling back to query-string body", exc_info=True)
            return _parse_query_body(body)
        return dict(form.items())
    return _parse_query_body(body)


class SignupRegistrar:
    """register() returns a typed outcome; expected failures (bad email, quota) are never raised."""

    def __init__(self, store: KeyValueStore, rate_limiter: RateLimiter, notifier: Notifier) -> None:
        self.store = store
        self.rate_limiter = rate_limiter
        self.notifier = notifier

    @staticmethod
    def email_key(email: str) -> str:
        return f"email:{email}"

    async def register(self, fields: Mapping[str, Any], identity: str, now_ms: int) -> SignupResult:
        email = normalize_email(fields.get("email"))
        if not is_valid_email(email):
            return self._done(SignupOutcome.INVALID_EMAIL, email)

        if not (await self.rate_limiter.check_and_increment(identity, now_ms)).admitted:
            return self._done(SignupOutcome.RATE_LIMITED, email)

        key = self.email_key(email)
        try:
            existing = await self.store.get_json(key)
        except StoreError:
            logger.warning("Signup lookup failed; treating as new", exc_info=True)
            record_store_error("get")
            existing = None
        if existing:
            return self._done(SignupOutcome.ALREADY_REGISTERED, email)

        try:
            await self.store.put_json(key, {"email": email, "ts": now_ms})
        except StoreError:
            logger.warning("Signup record write failed for %s", redact_for_log(email), exc_info=True)
            record_store_error("put")

        # Best effort: outcome is discarded and errors never reach the caller
        try:
            await self.notifier.notify(email, now_ms)
        except Exception:
            logger.warning("Signup notifier raised; ignoring", exc_info=True)
        return self._done(SignupOutcome.REGISTERED, email)

    def _done(self, outcome: SignupOutcome, email: str) -> SignupResult:
        record_signup_outcome(outcome.value)
        logger.info("signup %s", outcome.value, extra=redact_for_log({"email": email}))
        return SignupResult(outcome=outcome, email=email)
