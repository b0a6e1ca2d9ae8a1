"""Landing page and inline SVGs. Registered last: the catch-all answers every unmatched path and method."""
from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse, Response

from comingsoon.core.config import Settings, get_settings
from comingsoon.services.pages import render_landing_page, svg_favicon, svg_wordmark

router = APIRouter(tags=["pages"])

SVG_MEDIA_TYPE = "image/svg+xml"
PAGE_HEADERS = {
    "Cache-Control": "public, max-age=3600",
    "X-Powered-By": "FastAPI · CodeAssylum",
    "Permissions-Policy": "interest-cohort=()",
}

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


@router.get("/favicon.svg")
async def favicon(settings: Settings = Depends(get_settings)):
    body = svg_favicon(settings.primary_color, settings.accent_color)
    return Response(content=body, media_type=SVG_MEDIA_TYPE, headers=PAGE_HEADERS)


@router.get("/logo.svg")
async def logo(settings: Settings = Depends(get_settings)):
    body = svg_wordmark(settings.primary_color, settings.accent_color, settings.brand)
    return Response(content=body, media_type=SVG_MEDIA_TYPE, headers=PAGE_HEADERS)


@router.api_route("/{path:path}", methods=ALL_METHODS, include_in_schema=False)
async def landing_page(path: str, settings: Settings = Depends(get_settings)):
    return HTMLResponse(content=render_landing_page(settings), headers=PAGE_HEADERS)
