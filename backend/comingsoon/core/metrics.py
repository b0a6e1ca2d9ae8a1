"""Prometheus metrics: request count by route/status, latency, signup outcomes, webhook and store failures."""
from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total requests",
    ["method", "path", "status_class"],
)
REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds",
    "Request latency",
    ["method", "path"],
    buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0),
)
SIGNUP_OUTCOMES_TOTAL = Counter(
    "signup_outcomes_total",
    "Signup results",
    ["outcome"],  # registered | already_registered | invalid_email | rate_limited | server_error
)
WEBHOOK_TOTAL = Counter(
    "signup_webhook_total",
    "Signup webhook forwards",
    ["result"],  # success | failure
)
STORE_ERRORS_TOTAL = Counter(
    "kv_store_errors_total",
    "Key-value store failures (tolerated)",
    ["operation"],  # get | put
)

# Everything else is served by the landing page catch-all
_KNOWN_PATHS = frozenset({"/", "/api/signup", "/favicon.svg", "/logo.svg", "/healthz", "/readyz"})


def _status_class(status: int) -> str:
    if status < 200:
        return "1xx"
    if status < 300:
        return "2xx"
    if status < 400:
        return "3xx"
    if status < 500:
        return "4xx"
    return "5xx"


def record_request(method: str, path: str, status_code: int, latency_seconds: float) -> None:
    path = path or "/"
    # Normalize path to avoid high cardinality (arbitrary paths all render the landing page)
    if path not in _KNOWN_PATHS:
        path = "/{page}"
    sc = _status_class(status_code)
    REQUEST_COUNT.labels(method=method, path=path, status_class=sc).inc()
    REQUEST_LATENCY.labels(method=method, path=path).observe(latency_seconds)


def record_signup_outcome(outcome: str) -> None:
    SIGNUP_OUTCOMES_TOTAL.labels(outcome=outcome).inc()


def record_webhook(result: str) -> None:
    WEBHOOK_TOTAL.labels(result=result).inc()


def record_store_error(operation: str) -> None:
    STORE_ERRORS_TOTAL.labels(operation=operation).inc()


def get_metrics() -> tuple[bytes, str]:
    return generate_latest(), CONTENT_TYPE_LATEST
