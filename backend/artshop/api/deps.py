from typing import Any, Optional

from fastapi import Depends, Header, Request

from artshop.config import settings
from artshop.services.auth_service import AdminClaims, AdminVerifier, bearer_token


def get_admin_verifier() -> AdminVerifier:
    return AdminVerifier(settings.ADMIN_JWT_SECRET)


def require_admin(
    authorization: Optional[str] = Header(None),
    verifier: AdminVerifier = Depends(get_admin_verifier),
) -> AdminClaims:
    """Dependency for admin-only routes; AuthError is turned into 401/403 by the app."""
    return verifier.verify(bearer_token(authorization))


async def admin_json_body(
    request: Request,
    admin: AdminClaims = Depends(require_admin),
) -> Any:
    """
    Request body of an admin-only route, read after the credential check so an
    unauthenticated caller gets 401/403 whatever it sent. A body that is not
    JSON comes back as None and is rejected by the service.
    """
    try:
        return await request.json()
    except ValueError:
        return None
