"""User domain SQLAlchemy model definitions."""

from sqlalchemy import Column, Integer, String, Boolean, DateTime
from sqlalchemy.sql import func
from app.database import Base


class User(Base):
    __tablename__ = "users"

    user_id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(150), unique=True, nullable=False)
    name = Column(String(100), nullable=False)
    role = Column(String(20), nullable=False, default="member")  # admin/member
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, server_default=func.now())
