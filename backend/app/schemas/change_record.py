"""Profile timeline (audit trail) response contracts."""

from datetime import datetime
from typing import List

from pydantic import BaseModel


class ChangeRecordOut(BaseModel):
    id: int
    profile_user_id: int
    updated_by: int
    updated_by_name: str
    updated_at: datetime
    changed_fields: List[str]
    changed_field_labels: List[str]
    is_admin: bool
    action_kind: str
