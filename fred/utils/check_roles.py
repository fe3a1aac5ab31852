from fastapi import Depends
from fred.core.exceptions import AppException
from fred.constants.error_codes import ErrorCode
from fred.utils.get_user import get_current_user
from fred.models.users.user_models import User

# Equipment Specialist, Rental Coordinator, Finance, Manager, Admin
READ_ROLES = ["es", "rc", "fin", "manager", "admin"]
PO_WRITE_ROLES = ["rc", "manager", "admin"]


def require_role(roles: list[str]):
    allowed = {r.lower() for r in roles}

    async def role_checker(user: User = Depends(get_current_user)) -> User:
        if user.role.lower() not in allowed:
            raise AppException(403, "Permission denied", ErrorCode.PERMISSION_DENIED)
        return user

    return role_checker
