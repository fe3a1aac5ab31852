# fred/core/security.py

from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import jwt, JWTError

from fred.constants.error_codes import ErrorCode
from fred.core.config import (
    JWT_ACCESS_SECRET_KEY,
    JWT_ALGORITHM,
    ACCESS_TOKEN_EXPIRE_MINUTES,
)
from fred.core.exceptions import AppException

# Tokens are minted by the FRED identity service; this API only verifies them.
# create_access_token exists for local tooling and tests.


def create_access_token(
    subject: str,
    token_version: int,
    expires_delta: Optional[timedelta] = None,
) -> str:
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))

    claims = {
        "sub": subject,
        "token_version": token_version,
        "type": "access",
        "iat": now,
        "exp": expire,
    }
    return jwt.encode(claims, JWT_ACCESS_SECRET_KEY, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str) -> dict:
    """Verify signature, expiry and token type; return the claims."""
    try:
        claims = jwt.decode(token, JWT_ACCESS_SECRET_KEY, algorithms=[JWT_ALGORITHM])
    except JWTError:
        raise AppException(401, "Invalid or expired token", ErrorCode.UNAUTHORIZED)

    if claims.get("type") != "access" or not claims.get("sub"):
        raise AppException(401, "Invalid token claims", ErrorCode.UNAUTHORIZED)

    return claims
