# ================================
# DOCUMENT SERVICE (services/document_service.py)
# ================================

from typing import List, Optional, Dict, Any
from uuid import UUID
from datetime import date
from sqlalchemy import func, or_, String, cast
from sqlalchemy.orm import Session
from fastapi import UploadFile
import logging

from societyhub.models.document import Document, AccessLevel
from societyhub.models.user import User, UserRole
from societyhub.schemas.document import DocumentUpdate
from societyhub.schemas.base import split_tags
from societyhub.utils.storage import LocalStorage
from societyhub.core.exceptions import AppException, NotFoundError, AuthorizationError, ValidationError

logger = logging.getLogger(__name__)

# Access levels each non-admin role may read; admins read everything
VISIBLE_ACCESS_LEVELS = {
    UserRole.RESIDENT.value: [AccessLevel.PUBLIC.value, AccessLevel.RESIDENTS_ONLY.value],
    UserRole.COMMITTEE_MEMBER.value: [
        AccessLevel.PUBLIC.value, AccessLevel.RESIDENTS_ONLY.value, AccessLevel.COMMITTEE_ONLY.value
    ],
    UserRole.STAFF.value: [AccessLevel.PUBLIC.value],
}


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so they match literally"""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class DocumentService:
    """Service for managing the society document repository"""

    @staticmethod
    def visible_levels(user: User) -> Optional[List[str]]:
        """Access levels the user may see; None means unrestricted"""
        if user.role == UserRole.ADMIN.value:
            return None
        return VISIBLE_ACCESS_LEVELS.get(user.role, [AccessLevel.PUBLIC.value])

    @staticmethod
    def can_access(document: Document, user: User) -> bool:
        levels = DocumentService.visible_levels(user)
        return levels is None or document.access_level in levels

    @staticmethod
    async def upload_document(
        db: Session,
        file: Optional[UploadFile],
        title: str,
        category: str,
        uploaded_by: User,
        description: Optional[str] = None,
        access_level: str = AccessLevel.RESIDENTS_ONLY.value,
        tags: Optional[str] = None,
        expiry_date: Optional[date] = None,
        storage: Optional[LocalStorage] = None
    ) -> Document:
        """Store the file on disk and record it; the file is removed again if the record cannot be saved"""
        if file is None or not file.filename:
            raise ValidationError("No file uploaded")

        storage = storage or LocalStorage()
        stored = await storage.save(file)

        document = Document(
            title=title,
            description=description,
            category=category,
            file_url=stored["path"],
            file_name=stored["file_name"],
            file_size=stored["file_size"],
            file_type=stored["file_type"],
            uploaded_by_id=uploaded_by.id,
            uploader_name=uploaded_by.name,
            access_level=access_level,
            tags=split_tags(tags),
            expiry_date=expiry_date
        )

        try:
            db.add(document)
            db.commit()
            db.refresh(document)
        except Exception:
            db.rollback()
            storage.delete(stored["path"])
            logger.error(f"Failed to save document record, removed {stored['path']}")
            raise

        logger.info(f"Document uploaded: {document.title} ({document.file_name}) by {uploaded_by.email}")
        return document

    @staticmethod
    def list_documents(
        db: Session,
        user: User,
        category: Optional[str] = None,
        access_level: Optional[str] = None,
        is_active: Optional[bool] = None,
        search: Optional[str] = None
    ) -> List[Document]:
        query = db.query(Document)

        levels = DocumentService.visible_levels(user)
        if levels is not None:
            query = query.filter(Document.access_level.in_(levels))

        if category:
            query = query.filter(Document.category == category)
        if access_level:
            query = query.filter(Document.access_level == access_level)
        if is_active is not None:
            query = query.filter(Document.is_active == is_active)
        if search:
            pattern = f"%{escape_like(search.lower())}%"
            query = query.filter(or_(
                func.lower(Document.title).like(pattern, escape="\\"),
                func.lower(func.coalesce(Document.description, "")).like(pattern, escape="\\"),
                func.lower(cast(Document.tags, String)).like(pattern, escape="\\")
            ))

        return query.order_by(Document.created_at.desc()).all()

    @staticmethod
    def get_document(db: Session, document_id: UUID) -> Document:
        document = db.query(Document).filter(Document.id == document_id).first()
        if not document:
            raise NotFoundError("Document not found")
        return document

    @staticmethod
    def get_accessible_document(db: Session, document_id: UUID, user: User) -> Document:
        document = DocumentService.get_document(db, document_id)
        if not DocumentService.can_access(document, user):
            raise AuthorizationError("You do not have access to this document")
        return document

    @staticmethod
    def register_download(db: Session, document_id: UUID, user: User) -> Document:
        """Access-checked lookup that counts the download"""
        document = DocumentService.get_accessible_document(db, document_id, user)

        if not LocalStorage.exists(document.file_url):
            raise AppException("File not found on server", 404, "FILE_MISSING")

        document.download_count = (document.download_count or 0) + 1
        db.commit()
        db.refresh(document)
        return document

    @staticmethod
    def update_document(db: Session, document_id: UUID, data: DocumentUpdate) -> Document:
        document = DocumentService.get_document(db, document_id)

        changes = data.model_dump(exclude_unset=True)
        for field, value in changes.items():
            if field == "tags":
                document.tags = split_tags(value)
            elif field == "description" or field == "expiry_date" or value is not None:
                setattr(document, field, value)

        db.commit()
        db.refresh(document)

        logger.info(f"Document updated: {document.title} fields={list(changes)}")
        return document

    @staticmethod
    def delete_document(db: Session, document_id: UUID, storage: Optional[LocalStorage] = None) -> None:
        document = DocumentService.get_document(db, document_id)
        storage = storage or LocalStorage()

        if LocalStorage.exists(document.file_url):
            storage.delete(document.file_url)

        db.delete(document)
        db.commit()

        logger.info(f"Document deleted: {document.title}")

    @staticmethod
    def get_stats(db: Session) -> Dict[str, Any]:
        active = db.query(Document).filter(Document.is_active == True)

        total_documents = active.count()
        category_rows = db.query(Document.category, func.count(Document.id)).filter(
            Document.is_active == True
        ).group_by(Document.category).all()
        total_downloads = db.query(func.coalesce(func.sum(Document.download_count), 0)).filter(
            Document.is_active == True
        ).scalar() or 0
        recent = active.order_by(Document.created_at.desc()).limit(5).all()

        return {
            "total_documents": total_documents,
            "category_breakdown": [{"category": c, "count": n} for c, n in category_rows],
            "total_downloads": int(total_downloads),
            "recent_uploads": [
                {
                    "id": d.id,
                    "title": d.title,
                    "category": d.category,
                    "uploader_name": d.uploader_name,
                    "created_at": d.created_at,
                }
                for d in recent
            ],
        }
