"""Signup API: POST /api/signup (JSON or form body). Outcomes map to fixed JSON bodies and status codes."""
import logging
from collections.abc import Callable

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute

from comingsoon.core.deps import get_clock, get_registrar
from comingsoon.core.metrics import record_signup_outcome
from comingsoon.core.rate_limit import client_identity
from comingsoon.services.signup import SignupOutcome, SignupRegistrar, read_signup_fields

logger = logging.getLogger(__name__)

JSON_HEADERS = {"Cache-Control": "no-store"}

_RESPONSES: dict[SignupOutcome, tuple[int, dict]] = {
    SignupOutcome.REGISTERED: (status.HTTP_200_OK, {"ok": True}),
    SignupOutcome.ALREADY_REGISTERED: (status.HTTP_200_OK, {"ok": True, "message": "already_signed_up"}),
    SignupOutcome.INVALID_EMAIL: (status.HTTP_400_BAD_REQUEST, {"ok": False, "error": "invalid_email"}),
    SignupOutcome.RATE_LIMITED: (status.HTTP_429_TOO_MANY_REQUESTS, {"ok": False, "error": "rate_limited"}),
}


def _json(status_code: int, content: dict) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=content, headers=JSON_HEADERS)


class SignupRoute(APIRoute):
    """Any fault in a signup route, dependency resolution included, answers with the JSON server_error body."""

    def get_route_handler(self) -> Callable:
        handler = super().get_route_handler()

        async def handle(request: Request):
            try:
                return await handler(request)
            except (HTTPException, RequestValidationError):
                raise
            except Exception as e:
                logger.exception("Signup failed")
                record_signup_outcome("server_error")
                return _json(
                    status.HTTP_500_INTERNAL_SERVER_ERROR,
                    {"ok": False, "error": "server_error", "detail": str(e)},
                )

        return handle


router = APIRouter(tags=["signup"], route_class=SignupRoute)


@router.post("/signup")
async def signup(
    request: Request,
    registrar: SignupRegistrar = Depends(get_registrar),
    clock: Callable[[], int] = Depends(get_clock),
):
    fields = await read_signup_fields(request)
    result = await registrar.register(fields, client_identity(request.headers), clock())
    status_code, body = _RESPONSES[result.outcome]
    return _json(status_code, body)
