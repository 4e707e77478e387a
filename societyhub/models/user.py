# ================================
# USER MODELS (models/user.py)
# ================================

from sqlalchemy import Column, String, Boolean, JSON
from societyhub.models.base import Base
import enum

class UserRole(str, enum.Enum):
    ADMIN = "admin"
    COMMITTEE_MEMBER = "committee_member"
    RESIDENT = "resident"
    STAFF = "staff"

class User(Base):
    """Society member account"""
    __tablename__ = "users"

    # Basic Information
    name = Column(String(50), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    unit = Column(String(20), nullable=True)
    phone = Column(String(20), nullable=True)

    # Authorization
    role = Column(String(20), default=UserRole.RESIDENT.value, nullable=False, index=True)
    permissions = Column(JSON, default=list, nullable=False)  # e.g. ['member_management', 'reports']

    # Authentication
    password_hash = Column(String(255), nullable=False)

    # Account Status
    is_active = Column(Boolean, default=True, nullable=False)

    def has_permission(self, permission: str) -> bool:
        return permission in (self.permissions or [])

    def __repr__(self):
        return f"<User(email='{self.email}', role='{self.role}')>"
