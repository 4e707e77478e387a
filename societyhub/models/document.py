# ================================
# DOCUMENT MODELS (models/document.py)
# ================================

from sqlalchemy import Column, String, Text, Integer, Boolean, Date, ForeignKey, JSON, Uuid
from sqlalchemy.orm import relationship
from societyhub.models.base import Base
import enum

class DocumentCategory(str, enum.Enum):
    BYLAWS = "Bylaws"
    CIRCULARS = "Circulars"
    AGREEMENTS = "Agreements"
    MEETING_MINUTES = "Meeting Minutes"
    FINANCIAL_REPORTS = "Financial Reports"
    NOTICE = "Notice"
    OTHER = "Other"

class AccessLevel(str, enum.Enum):
    PUBLIC = "public"
    RESIDENTS_ONLY = "residents_only"
    COMMITTEE_ONLY = "committee_only"
    ADMIN_ONLY = "admin_only"

class Document(Base):
    """Uploaded file in the society repository"""
    __tablename__ = "documents"

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String(30), nullable=False, index=True)

    # File information
    file_url = Column(String(500), nullable=False)
    file_name = Column(String(255), nullable=False)
    file_size = Column(Integer, nullable=False)
    file_type = Column(String(100), nullable=False)

    uploaded_by_id = Column(Uuid(as_uuid=True), ForeignKey('users.id', ondelete='SET NULL'), nullable=True, index=True)
    uploader_name = Column(String(100), nullable=False)

    access_level = Column(String(20), default=AccessLevel.RESIDENTS_ONLY.value, nullable=False)
    tags = Column(JSON, default=list, nullable=False)
    version = Column(Integer, default=1, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False, index=True)
    expiry_date = Column(Date, nullable=True)
    download_count = Column(Integer, default=0, nullable=False)

    uploaded_by = relationship("User")

    def __repr__(self):
        return f"<Document(title='{self.title}', access='{self.access_level}')>"
