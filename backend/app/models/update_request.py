"""Profile update request SQLAlchemy model definitions."""

from sqlalchemy import Column, Integer, String, Text, DateTime, JSON, Index
from sqlalchemy.sql import func
from app.database import Base


class ProfileUpdateRequest(Base):
    __tablename__ = "profile_update_requests"

    id = Column(Integer, primary_key=True, autoincrement=True)
    profile_user_id = Column(Integer, nullable=False)
    submitted_payload = Column(JSON, nullable=False)  # {field: proposed value}
    status = Column(String(20), nullable=False, default="pending")  # pending/approved/rejected
    admin_notes = Column(Text)
    decided_by = Column(Integer)
    decided_at = Column(DateTime)
    created_at = Column(DateTime, nullable=False, server_default=func.now())

    __table_args__ = (
        Index("idx_update_request_status", "status", "created_at"),
        Index("idx_update_request_profile", "profile_user_id"),
    )
