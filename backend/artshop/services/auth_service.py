from dataclasses import dataclass
from typing import Optional

import jwt

from artshop.utils.logs import get_logger

log = get_logger("auth")

ADMIN_ROLE = "admin"
ALGORITHM = "HS256"


class AuthError(Exception):
    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


@dataclass
class AdminClaims:
    role: str
    subject: Optional[str] = None


class AdminVerifier:
    """
    Verifies signed admin credentials (HS256 JWTs).

    ``verify`` returns the claims of a valid admin token, or raises
    AuthError(401) for a bad/expired token and AuthError(403) when the token
    is valid but the role is not admin.
    """

    def __init__(self, secret: str):
        self.secret = secret

    def verify(self, credential: Optional[str]) -> AdminClaims:
        if not credential:
            raise AuthError(401, "Unauthorized: Admin token missing")
        try:
            decoded = jwt.decode(credential, self.secret, algorithms=[ALGORITHM])
        except jwt.PyJWTError as e:
            log.info(f"rejected admin token: {e.__class__.__name__}")
            raise AuthError(401, "Invalid or expired token")
        role = decoded.get("role")
        if role != ADMIN_ROLE:
            raise AuthError(403, "Forbidden: Admin access only")
        return AdminClaims(role=role, subject=decoded.get("sub"))


def bearer_token(authorization: Optional[str]) -> str:
    if not authorization or not authorization.startswith("Bearer "):
        raise AuthError(401, "Unauthorized: Admin token missing")
    return authorization.split(" ", 1)[1].strip()
