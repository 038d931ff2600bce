"""Member profile SQLAlchemy model definitions."""

from sqlalchemy import Column, Integer, String, Text, Boolean, Date, DateTime, JSON, Index
from sqlalchemy.sql import func
from app.database import Base


class Profile(Base):
    __tablename__ = "profiles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, unique=True, nullable=False)

    # Moderation
    approval_status = Column(String(20), nullable=False, default="pending")  # pending/approved/rejected
    is_public = Column(Boolean, nullable=False, default=False)
    rejection_reason = Column(Text)

    # Identity & contact
    first_name = Column(String(100))
    last_name = Column(String(100))
    email = Column(String(150))
    phone = Column(String(40))
    gender = Column(String(30))
    date_of_birth = Column(Date)

    # Program & career
    program = Column(String(100))
    graduation_year = Column(Integer)
    organization = Column(String(200))
    organization_type = Column(String(50))
    position = Column(String(200))
    experience_level = Column(String(50))
    organizations = Column(JSON, nullable=False, default=list)  # [{name,type,role,years_experience,description}]

    # Location
    location = Column(String(200))
    city = Column(String(100))
    country = Column(String(100))
    pincode = Column(String(20))
    address = Column(Text)

    # Presence
    linkedin_url = Column(String(500))
    website_url = Column(String(500))
    bio = Column(Text)
    skills = Column(JSON, nullable=False, default=list)
    interests = Column(JSON, nullable=False, default=list)
    preferred_mode_of_communication = Column(JSON, nullable=False, default=list)
    show_contact_info = Column(Boolean, nullable=False, default=False)
    show_location = Column(Boolean, nullable=False, default=True)

    emergency_contact_name = Column(String(100))
    emergency_contact_phone = Column(String(40))
    avatar_url = Column(String(500))

    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
    approved_at = Column(DateTime)

    __table_args__ = (
        Index("idx_profiles_status_created", "approval_status", "created_at"),
        Index("idx_profiles_created", "created_at", "id"),
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip()
