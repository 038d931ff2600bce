"""SQLAlchemy model package initialization."""

from app.models.user import User
from app.models.profile import Profile
from app.models.update_request import ProfileUpdateRequest
from app.models.change_record import ProfileChangeRecord

__all__ = [
    "User",
    "Profile",
    "ProfileUpdateRequest",
    "ProfileChangeRecord",
]
