"""Profile update request contracts built on Pydantic."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel


class UpdateRequestSubmit(BaseModel):
    submitted_payload: Dict[str, Any]


class UpdateRequestApprove(BaseModel):
    # Checked against the profile field schema by the service, not here,
    # so a malformed override surfaces as a domain validation error.
    override_payload: Optional[Any] = None


class UpdateRequestReject(BaseModel):
    reason: Optional[str] = None


class FieldDiffOut(BaseModel):
    field: str
    label: str
    current_value: str
    proposed_value: str


class UpdateRequestProfileOut(BaseModel):
    user_id: int
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None


class UpdateRequestOut(BaseModel):
    id: int
    profile_user_id: int
    submitted_payload: Dict[str, Any]
    status: str
    admin_notes: Optional[str] = None
    decided_by: Optional[int] = None
    decided_at: Optional[datetime] = None
    created_at: datetime
    profile: Optional[UpdateRequestProfileOut] = None


class UpdateRequestDetailOut(UpdateRequestOut):
    diff: List[FieldDiffOut] = []
