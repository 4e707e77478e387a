# ================================
# USER & AUTH SCHEMAS (schemas/user.py)
# ================================

from pydantic import Field, EmailStr
from typing import Optional, List, Literal
from datetime import datetime
from uuid import UUID
from societyhub.schemas.base import BaseSchema, BaseResponseSchema, EmailFieldMixin, PasswordFieldMixin

RoleName = Literal["admin", "committee_member", "resident", "staff"]

class RegisterRequest(BaseSchema, EmailFieldMixin, PasswordFieldMixin):
    """Self-registration payload"""
    name: str = Field(..., min_length=1, max_length=50)
    email: EmailStr
    password: str = Field(..., description="At least 8 characters")
    role: RoleName
    unit: Optional[str] = Field(None, max_length=20)
    phone: Optional[str] = Field(None, max_length=20)

class AdminCreateUserRequest(RegisterRequest):
    """Admin-created account, optionally with granular permissions"""
    permissions: List[str] = Field(default_factory=list)

class LoginRequest(BaseSchema, EmailFieldMixin):
    email: EmailStr
    password: str = Field(..., min_length=1)

class UpdatePermissionsRequest(BaseSchema, EmailFieldMixin):
    email: EmailStr
    permissions: List[str]

class UserUpdate(BaseSchema):
    """Partial update by an admin"""
    name: Optional[str] = Field(None, min_length=1, max_length=50)
    role: Optional[RoleName] = None
    permissions: Optional[List[str]] = None
    unit: Optional[str] = Field(None, max_length=20)
    phone: Optional[str] = Field(None, max_length=20)

class UserResponse(BaseResponseSchema):
    """Public view of a user; the password hash is never included"""
    name: str
    email: str
    role: str
    permissions: List[str] = Field(default_factory=list)
    unit: Optional[str] = None
    phone: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime

class AuthResponse(BaseSchema):
    message: str
    user: UserResponse
    token: str

class UserEnvelope(BaseSchema):
    message: Optional[str] = None
    user: UserResponse

class UserListResponse(BaseSchema):
    count: int
    users: List[UserResponse]

class ToggleActiveResponse(BaseSchema):
    message: str
    user_id: UUID
    is_active: bool
