# ================================
# COMPLAINT ROUTES (api/v1/complaints.py)
# ================================

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional
from uuid import UUID

from societyhub.dependencies import get_db, get_current_user, require_roles, get_pagination_params
from societyhub.models.user import User, UserRole
from societyhub.schemas.complaint import (
    ComplaintCreate, ComplaintStatusUpdate, ComplaintAssign, CommentCreate,
    ComplaintEnvelope, ComplaintListResponse, CommentEnvelope, CommentListResponse
)
from societyhub.services.complaint_service import ComplaintService
from societyhub.mappers.complaint_mapper import map_complaint_to_view, map_complaint_to_detail, map_comment_to_view

router = APIRouter()

def _page(complaints, total: int, page: int, limit: int) -> ComplaintListResponse:
    return ComplaintListResponse(
        complaints=[map_complaint_to_view(c) for c in complaints],
        page=page,
        limit=limit,
        total=total
    )

@router.get("", response_model=ComplaintListResponse)
async def list_complaints(
    status_filter: Optional[str] = Query(None, alias="status"),
    priority: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    pagination: tuple = Depends(get_pagination_params),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(UserRole.ADMIN))
):
    """All complaints, newest first"""
    page, limit = pagination
    complaints, total = ComplaintService.list_all(
        db, status=status_filter, priority=priority, category=category, page=page, limit=limit
    )
    return _page(complaints, total, page, limit)

@router.post("", response_model=ComplaintEnvelope, status_code=status.HTTP_201_CREATED)
async def create_complaint(
    complaint_data: ComplaintCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(UserRole.RESIDENT))
):
    complaint = ComplaintService.create_complaint(db, complaint_data, current_user)
    return ComplaintEnvelope(complaint=map_complaint_to_detail(complaint))

@router.get("/my", response_model=ComplaintListResponse)
async def my_complaints(
    pagination: tuple = Depends(get_pagination_params),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(UserRole.RESIDENT))
):
    page, limit = pagination
    complaints, total = ComplaintService.list_for_resident(db, current_user, page=page, limit=limit)
    return _page(complaints, total, page, limit)

@router.get("/assigned", response_model=ComplaintListResponse)
async def assigned_complaints(
    status_filter: Optional[str] = Query(None, alias="status"),
    pagination: tuple = Depends(get_pagination_params),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(UserRole.STAFF))
):
    page, limit = pagination
    complaints, total = ComplaintService.list_assigned(
        db, current_user, status=status_filter, page=page, limit=limit
    )
    return _page(complaints, total, page, limit)

@router.get("/{complaint_id}", response_model=ComplaintEnvelope)
async def get_complaint(
    complaint_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    complaint = ComplaintService.get_accessible_complaint(db, complaint_id, current_user)
    return ComplaintEnvelope(complaint=map_complaint_to_detail(complaint))

@router.patch("/{complaint_id}/status", response_model=ComplaintEnvelope)
async def update_complaint_status(
    complaint_id: UUID,
    status_data: ComplaintStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(UserRole.ADMIN, UserRole.STAFF))
):
    complaint = ComplaintService.update_status(db, complaint_id, status_data, current_user)
    return ComplaintEnvelope(complaint=map_complaint_to_detail(complaint))

@router.patch("/{complaint_id}/assign", response_model=ComplaintEnvelope)
async def assign_complaint(
    complaint_id: UUID,
    assign_data: ComplaintAssign,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(UserRole.ADMIN))
):
    complaint = ComplaintService.assign_staff(db, complaint_id, assign_data.staff_id)
    return ComplaintEnvelope(complaint=map_complaint_to_detail(complaint))

# ================================
# COMMENTS
# ================================

@router.post("/{complaint_id}/comments", response_model=CommentEnvelope, status_code=status.HTTP_201_CREATED)
async def add_comment(
    complaint_id: UUID,
    comment_data: CommentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    comment = ComplaintService.add_comment(db, complaint_id, comment_data, current_user)
    return CommentEnvelope(comment=map_comment_to_view(comment))

@router.get("/{complaint_id}/comments", response_model=CommentListResponse)
async def list_comments(
    complaint_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    comments = ComplaintService.list_comments(db, complaint_id, current_user)
    return CommentListResponse(comments=[map_comment_to_view(c) for c in comments])
