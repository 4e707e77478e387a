# ================================
# COMPLAINT SERVICE (services/complaint_service.py)
# ================================

from sqlalchemy.orm import Session, joinedload
from societyhub.models.complaint import Complaint, ComplaintComment, ComplaintStatus
from societyhub.models.user import User, UserRole
from societyhub.schemas.complaint import ComplaintCreate, ComplaintStatusUpdate, CommentCreate
from societyhub.core.exceptions import NotFoundError, AuthorizationError, ValidationError
from typing import List, Optional, Tuple
import uuid
import logging

logger = logging.getLogger(__name__)

def _is_set(value: Optional[str]) -> bool:
    """Query filters treat an empty value and "all" as no filter"""
    return bool(value) and value != "all"

class ComplaintService:

    @staticmethod
    def _base_query(db: Session):
        return db.query(Complaint).options(
            joinedload(Complaint.resident),
            joinedload(Complaint.assigned_staff)
        )

    @staticmethod
    def _paginate(query, page: int, limit: int) -> Tuple[List[Complaint], int]:
        total = query.count()
        items = query.order_by(Complaint.created_at.desc()).offset((page - 1) * limit).limit(limit).all()
        return items, total

    @staticmethod
    def get_complaint(db: Session, complaint_id: uuid.UUID) -> Complaint:
        complaint = ComplaintService._base_query(db).filter(Complaint.id == complaint_id).first()
        if not complaint:
            raise NotFoundError("Complaint not found")
        return complaint

    @staticmethod
    def can_access(complaint: Complaint, user: User) -> bool:
        """Admins, the owning resident and the assigned staff member"""
        if user.role == UserRole.ADMIN.value:
            return True
        if complaint.resident_id == user.id:
            return True
        return complaint.assigned_staff_id is not None and complaint.assigned_staff_id == user.id

    @staticmethod
    def get_accessible_complaint(db: Session, complaint_id: uuid.UUID, user: User) -> Complaint:
        complaint = ComplaintService.get_complaint(db, complaint_id)
        if not ComplaintService.can_access(complaint, user):
            raise AuthorizationError("You do not have access to this complaint")
        return complaint

    @staticmethod
    def list_all(
        db: Session,
        status: Optional[str] = None,
        priority: Optional[str] = None,
        category: Optional[str] = None,
        page: int = 1,
        limit: int = 20
    ) -> Tuple[List[Complaint], int]:
        query = ComplaintService._base_query(db)
        if _is_set(status):
            query = query.filter(Complaint.status == status)
        if _is_set(priority):
            query = query.filter(Complaint.priority == priority)
        if _is_set(category):
            query = query.filter(Complaint.category == category)
        return ComplaintService._paginate(query, page, limit)

    @staticmethod
    def list_for_resident(db: Session, resident: User, page: int = 1, limit: int = 20) -> Tuple[List[Complaint], int]:
        query = ComplaintService._base_query(db).filter(Complaint.resident_id == resident.id)
        return ComplaintService._paginate(query, page, limit)

    @staticmethod
    def list_assigned(
        db: Session,
        staff: User,
        status: Optional[str] = None,
        page: int = 1,
        limit: int = 20
    ) -> Tuple[List[Complaint], int]:
        query = ComplaintService._base_query(db).filter(Complaint.assigned_staff_id == staff.id)
        if _is_set(status):
            query = query.filter(Complaint.status == status)
        return ComplaintService._paginate(query, page, limit)

    @staticmethod
    def create_complaint(db: Session, data: ComplaintCreate, resident: User) -> Complaint:
        complaint = Complaint(
            resident_id=resident.id,
            title=data.title,
            description=data.description,
            category=data.category,
            priority=data.priority,
            status=ComplaintStatus.PENDING.value,
            resolution_notes=""
        )
        db.add(complaint)
        db.commit()

        logger.info(f"Complaint created by {resident.email}: {complaint.title}")
        return ComplaintService.get_complaint(db, complaint.id)

    @staticmethod
    def update_status(db: Session, complaint_id: uuid.UUID, data: ComplaintStatusUpdate, user: User) -> Complaint:
        complaint = ComplaintService.get_complaint(db, complaint_id)

        is_assigned_staff = complaint.assigned_staff_id is not None and complaint.assigned_staff_id == user.id
        if user.role != UserRole.ADMIN.value and not is_assigned_staff:
            raise AuthorizationError("Only admins or the assigned staff member can update this complaint")

        complaint.status = data.status
        if data.resolution_notes is not None:
            complaint.resolution_notes = data.resolution_notes

        db.commit()
        logger.info(f"Complaint {complaint.id} status -> {complaint.status} by {user.email}")
        return ComplaintService.get_complaint(db, complaint.id)

    @staticmethod
    def assign_staff(db: Session, complaint_id: uuid.UUID, staff_id: uuid.UUID) -> Complaint:
        complaint = ComplaintService.get_complaint(db, complaint_id)

        staff = db.query(User).filter(User.id == staff_id).first()
        if not staff or staff.role != UserRole.STAFF.value:
            raise ValidationError("Assignee must be a staff member")

        complaint.assigned_staff_id = staff.id
        complaint.status = ComplaintStatus.IN_PROGRESS.value
        db.commit()

        logger.info(f"Complaint {complaint.id} assigned to {staff.email}")
        return ComplaintService.get_complaint(db, complaint.id)

    # ================================
    # COMMENTS
    # ================================

    @staticmethod
    def add_comment(db: Session, complaint_id: uuid.UUID, data: CommentCreate, user: User) -> ComplaintComment:
        complaint = ComplaintService.get_accessible_complaint(db, complaint_id, user)

        author_id = user.id
        if data.commented_by and user.role == UserRole.ADMIN.value:
            author = db.query(User).filter(User.id == data.commented_by).first()
            if not author:
                raise NotFoundError("Comment author not found")
            author_id = author.id

        comment = ComplaintComment(
            complaint_id=complaint.id,
            commented_by_id=author_id,
            comment=data.comment
        )
        db.add(comment)
        db.commit()
        db.refresh(comment)

        return comment

    @staticmethod
    def list_comments(db: Session, complaint_id: uuid.UUID, user: User) -> List[ComplaintComment]:
        complaint = ComplaintService.get_accessible_complaint(db, complaint_id, user)
        return db.query(ComplaintComment).options(
            joinedload(ComplaintComment.commented_by)
        ).filter(
            ComplaintComment.complaint_id == complaint.id
        ).order_by(ComplaintComment.created_at.asc()).all()
