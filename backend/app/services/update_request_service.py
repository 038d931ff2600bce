"""Update request service layer. Diffs submitted edits against the live profile and applies admin decisions."""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from app.exceptions import InvalidStateError, NotFoundError
from app.models.profile import Profile
from app.models.update_request import ProfileUpdateRequest
from app.models.user import User
from app.services import change_recorder, profile_service
from app.services.directory_query import validate_page_bounds
from app.utils.permissions import actor_display_name
from app.utils.profile_fields import APPROVED, PENDING, REJECTED, field_label, format_value, normalize_filter

logger = logging.getLogger(__name__)


def _profile_identity(profile: Optional[Profile]) -> Optional[Dict[str, Any]]:
    if profile is None:
        return None
    return {
        "user_id": profile.user_id,
        "first_name": profile.first_name,
        "last_name": profile.last_name,
        "email": profile.email,
    }


def serialize_request(row: ProfileUpdateRequest, profile: Optional[Profile] = None) -> Dict[str, Any]:
    return {
        "id": row.id,
        "profile_user_id": row.profile_user_id,
        "submitted_payload": dict(row.submitted_payload or {}),
        "status": row.status,
        "admin_notes": row.admin_notes,
        "decided_by": row.decided_by,
        "decided_at": row.decided_at,
        "created_at": row.created_at,
        "profile": _profile_identity(profile),
    }


def list_requests(
    db: Session,
    *,
    status: Optional[str] = PENDING,
    page: int = 1,
    limit: int = 10,
) -> Tuple[List[Dict[str, Any]], int]:
    validate_page_bounds(page, limit)
    query = db.query(ProfileUpdateRequest, Profile).outerjoin(
        Profile, Profile.user_id == ProfileUpdateRequest.profile_user_id
    )
    status_filter = normalize_filter(status)
    if status_filter:
        query = query.filter(ProfileUpdateRequest.status == status_filter)

    total = query.count()
    rows = (
        query.order_by(ProfileUpdateRequest.created_at.desc(), ProfileUpdateRequest.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return [serialize_request(req, profile) for req, profile in rows], total


def compute_field_diff(proposed_payload: Dict[str, Any], current_profile: Any) -> List[Tuple[str, str, str]]:
    """Rows of (field, current, proposed) for exactly the proposed keys, in proposal order."""
    if isinstance(current_profile, Profile):
        current_profile = profile_service.snapshot(current_profile, proposed_payload.keys())
    return [
        (field, format_value(current_profile.get(field)), format_value(proposed))
        for field, proposed in proposed_payload.items()
    ]


def _get_request(db: Session, request_id: int) -> ProfileUpdateRequest:
    row = db.query(ProfileUpdateRequest).filter(ProfileUpdateRequest.id == request_id).first()
    if not row:
        raise NotFoundError("Update request not found")
    return row


def _ensure_pending(row: ProfileUpdateRequest) -> None:
    if row.status != PENDING:
        raise InvalidStateError(f"Update request has already been {row.status}.")


def get_request_detail(db: Session, request_id: int) -> Dict[str, Any]:
    row = _get_request(db, request_id)
    profile = db.query(Profile).filter(Profile.user_id == row.profile_user_id).first()
    payload = dict(row.submitted_payload or {})
    current = profile_service.snapshot(profile, payload.keys()) if profile else {}
    detail = serialize_request(row, profile)
    detail["diff"] = [
        {"field": field, "label": field_label(field), "current_value": current_value, "proposed_value": proposed}
        for field, current_value, proposed in compute_field_diff(payload, current)
    ]
    return detail


def _claim(db: Session, request_id: int, next_status: str, current_user: User, admin_notes: Optional[str] = None) -> None:
    # Compare-and-set on status: only one decision can move a request out of pending.
    values = {
        ProfileUpdateRequest.status: next_status,
        ProfileUpdateRequest.decided_by: current_user.user_id,
        ProfileUpdateRequest.decided_at: datetime.utcnow(),
    }
    if admin_notes is not None:
        values[ProfileUpdateRequest.admin_notes] = admin_notes
    updated = (
        db.query(ProfileUpdateRequest)
        .filter(ProfileUpdateRequest.id == request_id, ProfileUpdateRequest.status == PENDING)
        .update(values, synchronize_session=False)
    )
    if updated != 1:
        raise InvalidStateError("Update request has already been decided.")


def approve_request(
    db: Session,
    request_id: int,
    current_user: User,
    override_payload: Any = None,
) -> Profile:
    row = _get_request(db, request_id)
    _ensure_pending(row)

    source = override_payload if override_payload is not None else dict(row.submitted_payload or {})
    effective = profile_service.parse_field_payload(source)
    profile = profile_service.get_profile(db, row.profile_user_id)

    try:
        _claim(db, request_id, APPROVED, current_user)
        before = profile_service.snapshot(profile, effective.keys())
        profile_service.apply_payload(profile, effective)
        after = profile_service.snapshot(profile, effective.keys())
        change_recorder.diff_and_record(
            db,
            profile_user_id=profile.user_id,
            actor_id=current_user.user_id,
            actor_display_name=actor_display_name(current_user),
            is_admin_actor=True,
            before=before,
            after=after,
            action_kind=change_recorder.ACTION_APPROVE,
        )
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(profile)
    logger.info(
        "[update-request] request_id=%s approved by %s fields=%s override=%s",
        request_id,
        current_user.user_id,
        list(effective),
        override_payload is not None,
    )
    return profile


def reject_request(db: Session, request_id: int, current_user: User, reason: Optional[str] = None) -> ProfileUpdateRequest:
    row = _get_request(db, request_id)
    _ensure_pending(row)
    notes = (reason or "").strip() or None
    try:
        _claim(db, request_id, REJECTED, current_user, admin_notes=notes)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(row)
    logger.info("[update-request] request_id=%s rejected by %s", request_id, current_user.user_id)
    return row
