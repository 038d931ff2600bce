"""Append-only profile audit trail (timeline) SQLAlchemy model."""

from sqlalchemy import Column, Integer, String, Boolean, DateTime, JSON, Index
from sqlalchemy.sql import func

from app.database import Base


class ProfileChangeRecord(Base):
    __tablename__ = "profile_change_records"

    id = Column(Integer, primary_key=True, autoincrement=True)
    profile_user_id = Column(Integer, nullable=False)  # no FK: history outlives the profile
    updated_by = Column(Integer, nullable=False)
    updated_by_name = Column(String(150), nullable=False)
    updated_at = Column(DateTime, nullable=False, server_default=func.now())
    changed_fields = Column(JSON, nullable=False)  # ordered list of field names
    is_admin = Column(Boolean, nullable=False, default=False)
    action_kind = Column(String(20), nullable=False)  # approve/reject/admin_edit/self_edit/visibility

    __table_args__ = (
        Index("idx_change_record_profile", "profile_user_id", "updated_at", "id"),
    )
