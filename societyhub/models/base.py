# ================================
# BASE MODEL (models/base.py)
# ================================

from sqlalchemy import Column, DateTime, Uuid
from sqlalchemy.orm import as_declarative, declared_attr
from datetime import datetime, timezone
import uuid

def utcnow() -> datetime:
    return datetime.now(timezone.utc)

@as_declarative()
class Base:
    """Base model with the columns every table shares"""

    # Automatic table names from the class name
    @declared_attr
    def __tablename__(cls) -> str:
        return cls.__name__.lower() + "s"

    # Common columns
    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
