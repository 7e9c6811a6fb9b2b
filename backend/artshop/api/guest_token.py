import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from artshop.config import settings

GUEST_COOKIE = "guestToken"


class GuestTokenMiddleware(BaseHTTPMiddleware):
    """
    Give every visitor a durable pseudo-anonymous token.

    A client without the cookie gets a fresh uuid and a Set-Cookie on the
    response; a client that already has one keeps it and no cookie is
    re-issued. Handlers read it from ``request.state.guest_token``.
    """

    async def dispatch(self, request: Request, call_next):
        token = request.cookies.get(GUEST_COOKIE)
        issued = False
        if not token:
            token = uuid.uuid4().hex
            issued = True
        request.state.guest_token = token

        response = await call_next(request)
        if issued:
            response.set_cookie(
                GUEST_COOKIE,
                token,
                max_age=settings.GUEST_TOKEN_TTL_DAYS * 24 * 60 * 60,
                httponly=True,
                secure=settings.is_production,
                samesite="strict",
            )
        return response


def get_guest_token(request: Request) -> str:
    return getattr(request.state, "guest_token", None)
