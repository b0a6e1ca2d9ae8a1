"""Best-effort signup notifications. notify() never raises; its result is informational only."""
import logging
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone

import httpx

from comingsoon.core.metrics import record_webhook

logger = logging.getLogger(__name__)


def iso_timestamp(timestamp_ms: int) -> str:
    """Epoch milliseconds -> ISO-8601 UTC with millisecond precision and Z suffix."""
    seconds, millis = divmod(timestamp_ms, 1000)
    dt = datetime.fromtimestamp(seconds, tz=timezone.utc) + timedelta(milliseconds=millis)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class Notifier(ABC):
    @abstractmethod
    async def notify(self, email: str, timestamp_ms: int) -> bool:
        """Forward a new signup. Return True if delivered; must not raise."""
        ...


class NullNotifier(Notifier):
    """No destination configured."""

    async def notify(self, email: str, timestamp_ms: int) -> bool:
        return False


class WebhookNotifier(Notifier):
    """POST {"email", "ts"} as JSON to a webhook. At most once, no retry."""

    def __init__(self, url: str, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.url = url
        self._transport = transport

    async def notify(self, email: str, timestamp_ms: int) -> bool:
        payload = {"email": email, "ts": iso_timestamp(timestamp_ms)}
        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                r = await client.post(self.url, json=payload)
            r.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning("Signup webhook forward failed: %s", type(e).__name__)
            record_webhook("failure")
            return False
        record_webhook("success")
        return True
