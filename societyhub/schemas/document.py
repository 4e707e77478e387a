# ================================
# DOCUMENT SCHEMAS (schemas/document.py)
# ================================

from pydantic import Field
from typing import Optional, List, Literal
from datetime import date, datetime
from uuid import UUID
from societyhub.schemas.base import BaseSchema, BaseResponseSchema, TimestampMixin

DocumentCategoryName = Literal[
    "Bylaws", "Circulars", "Agreements", "Meeting Minutes", "Financial Reports", "Notice", "Other"
]
AccessLevelName = Literal["public", "residents_only", "committee_only", "admin_only"]

class DocumentUpdate(BaseSchema):
    """Partial update; tags arrive as a comma-separated string"""
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    category: Optional[DocumentCategoryName] = None
    access_level: Optional[AccessLevelName] = None
    tags: Optional[str] = None
    is_active: Optional[bool] = None
    expiry_date: Optional[date] = None
    version: Optional[int] = Field(None, ge=1)

class DocumentResponse(BaseResponseSchema, TimestampMixin):
    title: str
    description: Optional[str] = None
    category: str
    file_url: str
    file_name: str
    file_size: int
    file_type: str
    uploaded_by_id: Optional[UUID] = None
    uploader_name: str
    access_level: str
    tags: List[str] = Field(default_factory=list)
    version: int
    is_active: bool
    expiry_date: Optional[date] = None
    download_count: int

class DocumentEnvelope(BaseSchema):
    success: bool = True
    message: Optional[str] = None
    document: DocumentResponse

class DocumentListResponse(BaseSchema):
    success: bool = True
    count: int
    documents: List[DocumentResponse]

class CategoryCount(BaseSchema):
    category: str
    count: int

class RecentUpload(BaseSchema):
    id: UUID
    title: str
    category: str
    uploader_name: str
    created_at: datetime

class DocumentStats(BaseSchema):
    total_documents: int
    category_breakdown: List[CategoryCount]
    total_downloads: int
    recent_uploads: List[RecentUpload]

class DocumentStatsResponse(BaseSchema):
    success: bool = True
    stats: DocumentStats
