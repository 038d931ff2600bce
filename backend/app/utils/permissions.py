"""Role helpers shared by routers and services."""

from app.models.user import User


ADMIN = "admin"


def is_admin(user: User) -> bool:
    return user.role == ADMIN


def actor_display_name(user: User) -> str:
    # Timeline entries keep the name as it was when the change happened.
    return (user.name or "").strip() or user.email or ("Admin" if is_admin(user) else "Member")
