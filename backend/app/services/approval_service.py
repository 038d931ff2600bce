"""Profile approval state machine.

Profiles start ``pending``; administrators move them to ``approved`` or
``rejected`` and may re-decide an already decided profile. Every content or
status change is written to the timeline in the same transaction as the
mutation itself. Decision emails go out only after the commit and can never
undo it.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Optional

from fastapi import BackgroundTasks
from sqlalchemy.orm import Session

from app.config import settings
from app.exceptions import InvalidStateError
from app.models.profile import Profile
from app.models.user import User
from app.services import change_recorder, profile_service
from app.services.notification_service import ApprovalNotifier
from app.utils.permissions import actor_display_name
from app.utils.profile_fields import APPROVED, REJECTED

logger = logging.getLogger(__name__)


def _record(db: Session, profile: Profile, current_user: User, before: dict, after: dict, action_kind: str):
    return change_recorder.diff_and_record(
        db,
        profile_user_id=profile.user_id,
        actor_id=current_user.user_id,
        actor_display_name=actor_display_name(current_user),
        is_admin_actor=True,
        before=before,
        after=after,
        action_kind=action_kind,
    )


def _deliver(notifier: ApprovalNotifier, user_id: int, message: Dict[str, Any]) -> None:
    try:
        notifier.send(**message)
    except Exception as exc:
        logger.warning("[approval] %s notification for user_id=%s failed: %s", message["status"], user_id, exc)


def _notify(
    notifier: Optional[ApprovalNotifier],
    background_tasks: Optional[BackgroundTasks],
    subject: Profile,
    status: str,
    **extra: Any,
) -> None:
    # Message is built now; the session may be closed by the time it is sent.
    if notifier is None:
        return
    message = {"recipient": subject.email, "name": subject.full_name, "status": status, **extra}
    if background_tasks is not None:
        background_tasks.add_task(_deliver, notifier, subject.user_id, message)
    else:
        _deliver(notifier, subject.user_id, message)


def approve_profile(
    db: Session,
    profile_user_id: int,
    current_user: User,
    notifier: Optional[ApprovalNotifier] = None,
    background_tasks: Optional[BackgroundTasks] = None,
) -> Profile:
    profile = profile_service.get_profile(db, profile_user_id)
    before = {"approval_status": profile.approval_status}
    after = {"approval_status": APPROVED}
    try:
        _record(db, profile, current_user, before, after, change_recorder.ACTION_APPROVE)
        profile.approval_status = APPROVED
        if profile.approved_at is None:
            profile.approved_at = datetime.utcnow()
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(profile)
    logger.info("[approval] user_id=%s approved by %s", profile.user_id, current_user.user_id)

    _notify(notifier, background_tasks, profile, APPROVED, profile=profile_service.snapshot(profile))
    return profile


def reject_profile(
    db: Session,
    profile_user_id: int,
    current_user: User,
    reason: Optional[str] = None,
    notifier: Optional[ApprovalNotifier] = None,
    background_tasks: Optional[BackgroundTasks] = None,
) -> Profile:
    profile = profile_service.get_profile(db, profile_user_id)
    next_reason = (reason or "").strip()
    before = {
        "approval_status": profile.approval_status,
        "rejection_reason": profile.rejection_reason,
    }
    after = {
        "approval_status": REJECTED,
        "rejection_reason": next_reason,
    }
    try:
        _record(db, profile, current_user, before, after, change_recorder.ACTION_REJECT)
        profile.approval_status = REJECTED
        profile.rejection_reason = next_reason
        profile.is_public = False
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(profile)
    logger.info("[approval] user_id=%s rejected by %s", profile.user_id, current_user.user_id)

    _notify(notifier, background_tasks, profile, REJECTED, reason=next_reason)
    return profile


def set_public(db: Session, profile_user_id: int, desired: bool, current_user: User) -> Profile:
    profile = profile_service.get_profile(db, profile_user_id)
    if desired and profile.approval_status == REJECTED:
        raise InvalidStateError("Rejected profiles cannot be made public.")
    try:
        if settings.AUDIT_VISIBILITY_CHANGES:
            _record(
                db,
                profile,
                current_user,
                {"is_public": bool(profile.is_public)},
                {"is_public": bool(desired)},
                change_recorder.ACTION_VISIBILITY,
            )
        profile.is_public = bool(desired)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(profile)
    return profile


def admin_edit(db: Session, profile_user_id: int, raw_payload: Any, current_user: User) -> Profile:
    payload = profile_service.parse_field_payload(raw_payload)
    profile = profile_service.get_profile(db, profile_user_id)
    if not payload:
        return profile

    before = profile_service.snapshot(profile, payload.keys())
    try:
        profile_service.apply_payload(profile, payload)
        after = profile_service.snapshot(profile, payload.keys())
        _record(db, profile, current_user, before, after, change_recorder.ACTION_ADMIN_EDIT)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(profile)
    return profile
