"""FastAPI app: signup API, landing page, ops endpoints, outermost fault boundary."""
import logging
import time

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from comingsoon.core.config import apply_secrets_overlay, get_settings
from comingsoon.core.deps import require_metrics_access
from comingsoon.core.metrics import get_metrics
from comingsoon.core.request_logging import RequestLoggingMiddleware
from comingsoon.services.store import KeyValueStore, StoreError, get_store
from comingsoon.api.pages import router as pages_router
from comingsoon.api.signup import router as signup_router

logger = logging.getLogger(__name__)

# Prod: overlay env from AWS Secrets Manager before settings are read
apply_secrets_overlay()
settings = get_settings()
if settings.log_json:
    for h in logging.getLogger("comingsoon.request").handlers[:]:
        logging.getLogger("comingsoon.request").removeHandler(h)
    h = logging.StreamHandler()
    h.setFormatter(logging.Formatter("%(message)s"))
    logging.getLogger("comingsoon.request").addHandler(h)
    logging.getLogger("comingsoon.request").setLevel(logging.INFO)

app = FastAPI(title=settings.app_name)


# Innermost middleware: anything a handler lets escape becomes a plain 500
@app.middleware("http")
async def fault_boundary(request, call_next):
    try:
        return await call_next(request)
    except Exception as e:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return PlainTextResponse(f"Server error: {e}", status_code=500)


app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins.split(","),
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Accept"],
)


@app.middleware("http")
async def security_headers(request, call_next):
    response = await call_next(request)
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
    return response


app.include_router(signup_router, prefix="/api")


@app.get("/healthz")
async def healthz():
    """Liveness: no store access."""
    return {"status": "ok"}


@app.get("/readyz")
async def readyz(store: KeyValueStore = Depends(get_store)):
    """Readiness: store round trip."""
    try:
        await store.put_json("health:readyz", {"ts": int(time.time() * 1000)}, ttl_seconds=60)
        await store.get_json("health:readyz")
    except StoreError:
        logger.warning("Readiness check: store unreachable", exc_info=True)
        return JSONResponse(
            status_code=503,
            content={"status": "unavailable", "detail": "store unreachable"},
        )
    return {"status": "ok"}


@app.get("/metrics", response_class=Response)
async def metrics(_: None = Depends(require_metrics_access)):
    """Prometheus metrics. In prod set METRICS_SECRET and send X-Metrics-Secret."""
    body, content_type = get_metrics()
    return Response(content=body, media_type=content_type)


# Catch-all landing page: must be registered after every other route
app.include_router(pages_router)
