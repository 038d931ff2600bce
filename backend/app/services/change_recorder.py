"""Field-level diffing and the append-only profile timeline."""

from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy.orm import Session

from app.models.change_record import ProfileChangeRecord
from app.utils.profile_fields import field_label

ACTION_APPROVE = "approve"
ACTION_REJECT = "reject"
ACTION_ADMIN_EDIT = "admin_edit"
ACTION_SELF_EDIT = "self_edit"
ACTION_VISIBILITY = "visibility"

ACTION_KINDS = {ACTION_APPROVE, ACTION_REJECT, ACTION_ADMIN_EDIT, ACTION_SELF_EDIT, ACTION_VISIBILITY}

_MISSING = object()


def values_equal(left: Any, right: Any) -> bool:
    """Deep value equality used for diffing snapshots.

    Lists compare element-wise in order, mappings compare key by key with a
    missing key equal to None, and booleans never equal numbers.
    """
    if left is _MISSING:
        left = None
    if right is _MISSING:
        right = None
    if left is None or right is None:
        return left is None and right is None
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if isinstance(left, Mapping) and isinstance(right, Mapping):
        for key in set(left) | set(right):
            if not values_equal(left.get(key, _MISSING), right.get(key, _MISSING)):
                return False
        return True
    if isinstance(left, (list, tuple)) and isinstance(right, (list, tuple)):
        if len(left) != len(right):
            return False
        return all(values_equal(a, b) for a, b in zip(left, right))
    if isinstance(left, (Mapping, list, tuple)) or isinstance(right, (Mapping, list, tuple)):
        return False
    return left == right


def diff_fields(before: Mapping[str, Any], after: Mapping[str, Any]) -> List[str]:
    keys = list(before)
    keys.extend(key for key in after if key not in before)
    return [
        key
        for key in keys
        if not values_equal(before.get(key, _MISSING), after.get(key, _MISSING))
    ]


def diff_and_record(
    db: Session,
    *,
    profile_user_id: int,
    actor_id: int,
    actor_display_name: str,
    is_admin_actor: bool,
    before: Mapping[str, Any],
    after: Mapping[str, Any],
    action_kind: str,
) -> Optional[ProfileChangeRecord]:
    """Append a timeline entry when ``before`` and ``after`` differ.

    The row is flushed but not committed so the caller can commit it together
    with the mutation it describes.
    """
    if action_kind not in ACTION_KINDS:
        raise ValueError(f"Unknown action kind: {action_kind}")

    changed = diff_fields(before, after)
    if not changed:
        return None

    row = ProfileChangeRecord(
        profile_user_id=profile_user_id,
        updated_by=actor_id,
        updated_by_name=actor_display_name,
        updated_at=datetime.utcnow(),
        changed_fields=changed,
        is_admin=bool(is_admin_actor),
        action_kind=action_kind,
    )
    db.add(row)
    db.flush()
    return row


def list_history(db: Session, *, profile_user_id: int) -> List[ProfileChangeRecord]:
    return (
        db.query(ProfileChangeRecord)
        .filter(ProfileChangeRecord.profile_user_id == profile_user_id)
        .order_by(ProfileChangeRecord.updated_at.asc(), ProfileChangeRecord.id.asc())
        .all()
    )


def to_response(row: ProfileChangeRecord) -> Dict[str, Any]:
    fields = list(row.changed_fields or [])
    return {
        "id": row.id,
        "profile_user_id": row.profile_user_id,
        "updated_by": row.updated_by,
        "updated_by_name": row.updated_by_name,
        "updated_at": row.updated_at,
        "changed_fields": fields,
        "changed_field_labels": [field_label(name) for name in fields],
        "is_admin": bool(row.is_admin),
        "action_kind": row.action_kind,
    }
