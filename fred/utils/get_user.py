from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from fred.core.db import get_db
from fred.core.exceptions import AppException
from fred.core.security import decode_access_token
from fred.constants.error_codes import ErrorCode
from fred.models.users.user_models import User
from fred.utils.logger import get_logger

logger = get_logger("auth.guard")


def _bearer_token(authorization: str) -> str:
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        logger.warning("Missing bearer token")
        raise AppException(401, "Invalid authorization header", ErrorCode.UNAUTHORIZED)
    return token.strip()


async def get_current_user(
    request: Request,
    authorization: str = Header(...),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Resolve the acting FRED user from an access token issued elsewhere."""
    payload = decode_access_token(_bearer_token(authorization))

    username = payload.get("sub")
    user = await db.scalar(select(User).where(User.username == username))

    if not user:
        logger.warning("Token user not found", extra={"username": username})
        raise AppException(401, "User not found", ErrorCode.UNAUTHORIZED)

    if not user.is_active:
        logger.warning("Inactive user access blocked", extra={"user_id": user.id})
        raise AppException(403, "User account is inactive", ErrorCode.PERMISSION_DENIED)

    if user.token_version != payload.get("token_version"):
        logger.warning("Token version mismatch", extra={"user_id": user.id})
        raise AppException(401, "Session expired", ErrorCode.UNAUTHORIZED)

    request.state.user = user
    return user
