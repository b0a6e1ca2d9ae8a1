"""Landing page, inline SVGs, catch-all routing, ops endpoints."""
import pytest
from httpx import AsyncClient

from comingsoon.main import app
from comingsoon.core.config import Settings, get_settings
from comingsoon.services.pages import render_landing_page, svg_favicon, svg_wordmark
from comingsoon.services.store import get_store

from conftest import BrokenStore


@pytest.mark.asyncio
async def test_favicon_and_logo_are_svg(client: AsyncClient):
    for path in ("/favicon.svg", "/logo.svg"):
        r = await client.get(path)
        assert r.status_code == 200
        assert r.headers["content-type"].startswith("image/svg+xml")
        assert r.headers["cache-control"] == "public, max-age=3600"
        assert "#7c3aed" in r.text and "#06b6d4" in r.text


@pytest.mark.parametrize("method,path", [
    ("GET", "/"),
    ("GET", "/anything/else"),
    ("PUT", "/api/signup"),
    ("DELETE", "/about"),
])
@pytest.mark.asyncio
async def test_unmatched_routes_serve_landing_page(client: AsyncClient, method, path):
    r = await client.request(method, path)
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/html")
    assert 'action="/api/signup"' in r.text
    assert r.headers["permissions-policy"] == "interest-cohort=()"
    assert "x-request-id" in r.headers


@pytest.mark.asyncio
async def test_theme_from_settings(client: AsyncClient):
    app.dependency_overrides[get_settings] = lambda: Settings(brand="Acme <Labs>", primary_color="#ff0000")
    r = await client.get("/logo.svg")
    assert "#ff0000" in r.text
    assert "Acme &lt;Labs&gt;" in r.text
    r = await client.get("/")
    assert "<title>Acme &lt;Labs&gt; — Launching Soon</title>" in r.text


def test_landing_page_escapes_text_and_script_payloads():
    s = Settings(tagline='<script>alert("x")</script>', launch_at="</script><b>")
    html = render_landing_page(s)
    assert '<script>alert("x")</script>' not in html
    assert "&lt;script&gt;" in html
    assert "</script><b>" not in html
    assert '"@type": "Organization"' in html


def test_svg_helpers_use_colors():
    assert 'stop-color="#111111"' in svg_favicon("#111111", "#222222")
    assert ">Brand<" in svg_wordmark("#111111", "#222222", "Brand")


@pytest.mark.asyncio
async def test_healthz(client: AsyncClient):
    r = await client.get("/healthz")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_readyz_ok_and_unavailable(client: AsyncClient):
    r = await client.get("/readyz")
    assert r.status_code == 200
    app.dependency_overrides[get_store] = lambda: BrokenStore()
    r = await client.get("/readyz")
    assert r.status_code == 503
    assert r.json()["status"] == "unavailable"


@pytest.mark.asyncio
async def test_metrics_exposes_signup_counters(client: AsyncClient):
    await client.post("/api/signup", json={"email": "m@example.com"})
    r = await client.get("/metrics")
    assert r.status_code == 200
    assert "signup_outcomes_total" in r.text


@pytest.mark.asyncio
async def test_metrics_secret_required_when_configured(client: AsyncClient, monkeypatch):
    monkeypatch.setenv("METRICS_SECRET", "s3cret")
    get_settings.cache_clear()
    try:
        assert (await client.get("/metrics")).status_code == 401
        r = await client.get("/metrics", headers={"X-Metrics-Secret": "s3cret"})
        assert r.status_code == 200
    finally:
        get_settings.cache_clear()


@pytest.mark.asyncio
async def test_unhandled_fault_becomes_plain_500(client: AsyncClient):
    def broken_settings():
        raise RuntimeError("config exploded")

    app.dependency_overrides[get_settings] = broken_settings
    r = await client.get("/")
    assert r.status_code == 500
    assert r.text == "Server error: config exploded"
