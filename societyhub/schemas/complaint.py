# ================================
# COMPLAINT SCHEMAS (schemas/complaint.py)
# ================================

from pydantic import Field
from typing import Optional, List, Literal
from datetime import datetime
from uuid import UUID
from societyhub.schemas.base import BaseSchema

PriorityName = Literal["low", "medium", "high", "urgent"]
StatusName = Literal["pending", "in_progress", "resolved", "closed"]

class ComplaintCreate(BaseSchema):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1, max_length=100)
    priority: PriorityName = "medium"

class ComplaintStatusUpdate(BaseSchema):
    status: StatusName
    resolution_notes: Optional[str] = None

class ComplaintAssign(BaseSchema):
    staff_id: UUID

class CommentCreate(BaseSchema):
    comment: str = Field(..., min_length=1)
    commented_by: Optional[UUID] = Field(None, description="Author override, honored for admins only")

class ComplaintView(BaseSchema):
    """Flat complaint row with the resident's contact details"""
    id: UUID
    title: str
    description: str
    category: str
    priority: str
    status: str
    resolution_notes: str = ""
    created_at: datetime
    updated_at: datetime
    assigned_staff_id: Optional[UUID] = None
    resident_id: UUID
    resident_name: Optional[str] = None
    resident_email: Optional[str] = None
    unit_number: str = "-"

class ComplaintDetailView(ComplaintView):
    staff_name: Optional[str] = None
    staff_email: Optional[str] = None

class ComplaintEnvelope(BaseSchema):
    complaint: ComplaintDetailView

class ComplaintListResponse(BaseSchema):
    complaints: List[ComplaintView]
    page: int
    limit: int
    total: int

class CommentView(BaseSchema):
    id: UUID
    complaint_id: UUID
    comment: str
    commenter_name: Optional[str] = None
    created_at: datetime

class CommentEnvelope(BaseSchema):
    comment: CommentView

class CommentListResponse(BaseSchema):
    comments: List[CommentView]
