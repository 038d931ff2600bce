"""Dashboard status counters over the profile set."""

from typing import Dict

from sqlalchemy.orm import Session

from app.models.profile import Profile
from app.utils.profile_fields import APPROVAL_STATUSES


def compute_stats(db: Session) -> Dict[str, int]:
    stats = {
        status: db.query(Profile).filter(Profile.approval_status == status).count()
        for status in APPROVAL_STATUSES
    }
    stats["total"] = db.query(Profile).count()
    return stats
