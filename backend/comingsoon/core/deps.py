"""FastAPI dependencies: store, notifier, clock, signup registrar, metrics guard. Tests swap these via dependency_overrides."""
import time
from collections.abc import Callable

from fastapi import Depends, Header, HTTPException, status

from comingsoon.core.config import Settings, get_settings
from comingsoon.core.rate_limit import RateLimiter
from comingsoon.services.notifier import Notifier, NullNotifier, WebhookNotifier
from comingsoon.services.signup import SignupRegistrar
from comingsoon.services.store import KeyValueStore, get_store


def get_clock() -> Callable[[], int]:
    """Current time in epoch milliseconds."""
    return lambda: int(time.time() * 1000)


def get_notifier(settings: Settings = Depends(get_settings)) -> Notifier:
    if settings.signup_webhook_url:
        return WebhookNotifier(settings.signup_webhook_url)
    return NullNotifier()


def get_registrar(
    settings: Settings = Depends(get_settings),
    store: KeyValueStore = Depends(get_store),
    notifier: Notifier = Depends(get_notifier),
) -> SignupRegistrar:
    return SignupRegistrar(store, RateLimiter.from_settings(store, settings), notifier)


def require_metrics_access(
    x_metrics_secret: str | None = Header(None, alias="X-Metrics-Secret"),
) -> None:
    """Allow /metrics if no secret is configured (local) or the X-Metrics-Secret header matches."""
    s = get_settings()
    if s.metrics_secret and x_metrics_secret != s.metrics_secret:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or missing X-Metrics-Secret",
        )
