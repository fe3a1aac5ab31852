from sqlalchemy.ext.asyncio import AsyncSession
from fred.models.support.activity_models import UserActivity
from fred.models.users.user_models import User
from fred.constants.activity_templates import ACTIVITY_TEMPLATES
from fred.constants.activity_codes import ActivityCode


async def emit_activity(
    db: AsyncSession,
    *,
    user: User,
    code: ActivityCode,
    **context,
):
    """Stage one audit line in the caller's transaction; the caller commits."""
    template = ACTIVITY_TEMPLATES.get(code)
    if not template:
        raise ValueError(f"No activity template for code {code}")

    context.setdefault("actor_role", user.role.upper())
    context.setdefault("actor_email", user.username)

    try:
        message = template.format(**context)
    except KeyError as e:
        raise ValueError(
            f"Missing activity context key: {e.args[0]} for {code}"
        )

    db.add(
        UserActivity(
            user_id=user.id,
            username_snapshot=user.username,
            message=message,
        )
    )
