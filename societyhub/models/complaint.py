# ================================
# COMPLAINT MODELS (models/complaint.py)
# ================================

from sqlalchemy import Column, String, Text, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from societyhub.models.base import Base
import enum

class ComplaintPriority(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"

class ComplaintStatus(str, enum.Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"
    CLOSED = "closed"

class Complaint(Base):
    """Maintenance complaint raised by a resident"""
    __tablename__ = "complaints"

    resident_id = Column(Uuid(as_uuid=True), ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)
    assigned_staff_id = Column(Uuid(as_uuid=True), ForeignKey('users.id', ondelete='SET NULL'), nullable=True, index=True)

    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    category = Column(String(100), nullable=False)
    priority = Column(String(20), default=ComplaintPriority.MEDIUM.value, nullable=False)
    status = Column(String(20), default=ComplaintStatus.PENDING.value, nullable=False, index=True)
    resolution_notes = Column(Text, default="", nullable=False)

    # Relationships
    resident = relationship("User", foreign_keys=[resident_id])
    assigned_staff = relationship("User", foreign_keys=[assigned_staff_id])
    comments = relationship(
        "ComplaintComment",
        back_populates="complaint",
        cascade="all, delete-orphan",
        order_by="ComplaintComment.created_at"
    )

    def __repr__(self):
        return f"<Complaint(title='{self.title}', status='{self.status}')>"

class ComplaintComment(Base):
    __tablename__ = "complaint_comments"

    complaint_id = Column(Uuid(as_uuid=True), ForeignKey('complaints.id', ondelete='CASCADE'), nullable=False, index=True)
    commented_by_id = Column(Uuid(as_uuid=True), ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    comment = Column(Text, nullable=False)

    complaint = relationship("Complaint", back_populates="comments")
    commented_by = relationship("User")
