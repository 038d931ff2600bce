"""Profile service layer. Registration, snapshots and member self-service flows."""

import copy
import logging
from datetime import date, datetime
from typing import Any, Dict, Iterable, Optional

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from app.exceptions import InvalidStateError, NotFoundError, ValidationError
from app.models.profile import Profile
from app.models.update_request import ProfileUpdateRequest
from app.models.user import User
from app.schemas.profile import ProfileCreate, ProfileFieldPayload
from app.services import change_recorder
from app.utils.permissions import actor_display_name, is_admin
from app.utils.profile_fields import CONTENT_FIELDS, PENDING, STATUS_FIELDS

logger = logging.getLogger(__name__)


def _json_safe(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (list, dict)):
        return copy.deepcopy(value)
    return value


def snapshot(profile: Profile, fields: Optional[Iterable[str]] = None) -> Dict[str, Any]:
    names = list(fields) if fields is not None else [*CONTENT_FIELDS, *STATUS_FIELDS]
    return {name: _json_safe(getattr(profile, name)) for name in names}


def _format_validation_error(exc: PydanticValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(item) for item in err.get("loc", ()))
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts)


def parse_field_payload(raw: Any, *, json_mode: bool = False) -> Dict[str, Any]:
    """Validate a raw field mapping against the profile field schema.

    Returns only the keys present in ``raw``, in the order the caller sent
    them. Raises ``ValidationError`` for non-mapping input, unknown keys or
    badly typed values.
    """
    if isinstance(raw, ProfileFieldPayload):
        return raw.model_dump(mode="json" if json_mode else "python", exclude_unset=True)
    if not isinstance(raw, dict):
        raise ValidationError("Payload must be a mapping of profile field names to values.")
    try:
        model = ProfileFieldPayload.model_validate(raw)
    except PydanticValidationError as exc:
        raise ValidationError(f"Invalid profile payload: {_format_validation_error(exc)}")
    dumped = model.model_dump(mode="json" if json_mode else "python", exclude_unset=True)
    return {key: dumped[key] for key in raw if key in dumped}


def apply_payload(profile: Profile, payload: Dict[str, Any]) -> None:
    for key, value in payload.items():
        setattr(profile, key, copy.deepcopy(value))


def get_profile(db: Session, profile_user_id: int) -> Profile:
    profile = db.query(Profile).filter(Profile.user_id == profile_user_id).first()
    if not profile:
        raise NotFoundError("Profile not found")
    return profile


def create_profile(db: Session, current_user: User, data: ProfileCreate) -> Profile:
    existing = db.query(Profile).filter(Profile.user_id == current_user.user_id).first()
    if existing:
        raise InvalidStateError("A profile already exists for this user.")

    payload = data.model_dump(exclude_unset=True)
    if not payload.get("email"):
        payload["email"] = current_user.email
    profile = Profile(
        user_id=current_user.user_id,
        approval_status=PENDING,
        is_public=False,
        organizations=[],
        skills=[],
        interests=[],
        preferred_mode_of_communication=[],
    )
    apply_payload(profile, payload)
    db.add(profile)
    db.commit()
    db.refresh(profile)
    logger.info("[profile] registered profile for user_id=%s", current_user.user_id)
    return profile


def self_edit(db: Session, current_user: User, raw_payload: Any) -> Profile:
    payload = parse_field_payload(raw_payload)
    profile = get_profile(db, current_user.user_id)
    if profile.approval_status != PENDING or profile.approved_at is not None:
        raise InvalidStateError("Reviewed profiles can only be changed through an update request.")
    if not payload:
        return profile

    before = snapshot(profile, payload.keys())
    apply_payload(profile, payload)
    after = snapshot(profile, payload.keys())
    try:
        change_recorder.diff_and_record(
            db,
            profile_user_id=profile.user_id,
            actor_id=current_user.user_id,
            actor_display_name=actor_display_name(current_user),
            is_admin_actor=is_admin(current_user),
            before=before,
            after=after,
            action_kind=change_recorder.ACTION_SELF_EDIT,
        )
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(profile)
    return profile


def submit_update_request(db: Session, current_user: User, raw_payload: Any) -> ProfileUpdateRequest:
    stored_payload = parse_field_payload(raw_payload, json_mode=True)
    if not stored_payload:
        raise ValidationError("Update request must contain at least one field.")

    profile = get_profile(db, current_user.user_id)
    current = snapshot(profile, stored_payload.keys())
    if not change_recorder.diff_fields(current, stored_payload):
        raise ValidationError("Update request does not change any field.")

    row = ProfileUpdateRequest(
        profile_user_id=profile.user_id,
        submitted_payload=stored_payload,
        status=PENDING,
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    logger.info("[update-request] submitted request_id=%s user_id=%s fields=%s", row.id, profile.user_id, list(stored_payload))
    return row
