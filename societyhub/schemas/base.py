# ================================
# BASE SCHEMAS (schemas/base.py)
# ================================

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, Dict, Any
from datetime import datetime
from uuid import UUID

from societyhub.utils.timeslots import is_valid_time

class BaseSchema(BaseModel):
    """Base schema with shared configuration"""
    model_config = ConfigDict(
        from_attributes=True,
        str_strip_whitespace=True,
        validate_assignment=True,
    )

class BaseResponseSchema(BaseSchema):
    """Base Schema for API responses with ID field"""
    id: UUID

class TimestampMixin(BaseModel):
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")

# ================================
# ERROR / SUCCESS RESPONSE SCHEMAS
# ================================

class ErrorResponse(BaseSchema):
    """Standard Error Response Schema"""
    detail: str = Field(..., description="Error message")
    error_code: Optional[str] = Field(None, description="Application-specific error code")
    request_id: Optional[str] = Field(None, description="Request correlation ID")

class MessageResponse(BaseSchema):
    message: str = Field(..., description="Success message")

class SuccessResponse(BaseSchema):
    """Standard Success Response Schema"""
    success: bool = True
    message: str = Field(..., description="Success message")
    data: Optional[Dict[str, Any]] = Field(None, description="Additional data")

# ================================
# COMMON FIELD VALIDATORS
# ================================

class EmailFieldMixin:
    """Mixin for email normalization"""

    @field_validator('email', check_fields=False)
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower() if v else v

class PasswordFieldMixin:
    """Mixin for password validation"""

    @field_validator('password', check_fields=False)
    @classmethod
    def validate_password(cls, v: str) -> str:
        if v is not None and len(v) < 8:
            raise ValueError('Password must be at least 8 characters long')
        return v

def validate_hhmm(value: Optional[str]) -> Optional[str]:
    """Shared check for "HH:MM" time strings"""
    if value is None:
        return value
    if not is_valid_time(value):
        raise ValueError('Time must be in HH:MM format')
    return value

def split_tags(value: Optional[str]) -> list:
    """Comma-separated tag string to a clean list"""
    if not value:
        return []
    return [tag.strip() for tag in value.split(',') if tag.strip()]
