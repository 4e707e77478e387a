from typing import Optional
from uuid import UUID
from datetime import date
from fastapi import APIRouter, Depends, File, Form, UploadFile, Query, status
from fastapi.responses import FileResponse
from sqlalchemy.orm import Session

from societyhub.dependencies import get_db, get_current_user, require_roles
from societyhub.models.user import User, UserRole
from societyhub.models.document import DocumentCategory, AccessLevel
from societyhub.core.exceptions import ValidationError
from societyhub.schemas.base import MessageResponse
from societyhub.schemas.document import (
    DocumentUpdate,
    DocumentEnvelope,
    DocumentListResponse,
    DocumentStatsResponse
)
from societyhub.services.document_service import DocumentService

router = APIRouter()

document_managers = require_roles(UserRole.ADMIN, UserRole.COMMITTEE_MEMBER)

CATEGORIES = [c.value for c in DocumentCategory]
ACCESS_LEVELS = [a.value for a in AccessLevel]


@router.post("", response_model=DocumentEnvelope, status_code=status.HTTP_201_CREATED)
async def upload_document(
    file: Optional[UploadFile] = File(None),
    title: str = Form(...),
    category: str = Form(...),
    description: Optional[str] = Form(None),
    access_level: str = Form(AccessLevel.RESIDENTS_ONLY.value),
    tags: Optional[str] = Form(None, description="Comma-separated tags"),
    expiry_date: Optional[date] = Form(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(document_managers)
):
    """Upload a document to the society repository"""
    if category not in CATEGORIES:
        raise ValidationError(f"Invalid category. Allowed: {', '.join(CATEGORIES)}")
    if access_level not in ACCESS_LEVELS:
        raise ValidationError(f"Invalid access level. Allowed: {', '.join(ACCESS_LEVELS)}")

    document = await DocumentService.upload_document(
        db=db,
        file=file,
        title=title.strip(),
        category=category,
        uploaded_by=current_user,
        description=description,
        access_level=access_level,
        tags=tags,
        expiry_date=expiry_date
    )
    return DocumentEnvelope(message="Document uploaded successfully", document=document)


@router.get("", response_model=DocumentListResponse)
async def list_documents(
    category: Optional[str] = Query(None),
    access_level: Optional[str] = Query(None),
    is_active: Optional[bool] = Query(None),
    search: Optional[str] = Query(None, description="Matches title, description and tags"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """List the documents the caller may see"""
    documents = DocumentService.list_documents(
        db,
        current_user,
        category=category,
        access_level=access_level,
        is_active=is_active,
        search=search
    )
    return DocumentListResponse(count=len(documents), documents=documents)


@router.get("/stats", response_model=DocumentStatsResponse)
async def document_stats(
    db: Session = Depends(get_db),
    current_user: User = Depends(document_managers)
):
    return DocumentStatsResponse(stats=DocumentService.get_stats(db))


@router.get("/{document_id}", response_model=DocumentEnvelope)
async def get_document(
    document_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return DocumentEnvelope(document=DocumentService.get_accessible_document(db, document_id, current_user))


@router.get("/{document_id}/download")
async def download_document(
    document_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Stream the stored file under its original name"""
    document = DocumentService.register_download(db, document_id, current_user)
    return FileResponse(
        path=document.file_url,
        filename=document.file_name,
        media_type=document.file_type
    )


@router.patch("/{document_id}", response_model=DocumentEnvelope)
async def update_document(
    document_id: UUID,
    document_data: DocumentUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(document_managers)
):
    document = DocumentService.update_document(db, document_id, document_data)
    return DocumentEnvelope(message="Document updated successfully", document=document)


@router.delete("/{document_id}", response_model=MessageResponse)
async def delete_document(
    document_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(document_managers)
):
    DocumentService.delete_document(db, document_id)
    return MessageResponse(message="Document deleted successfully")
