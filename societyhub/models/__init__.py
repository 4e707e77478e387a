# ================================
# MODELS PACKAGE (models/__init__.py)
# ================================

from societyhub.models.base import Base
from societyhub.models.user import User, UserRole
from societyhub.models.complaint import Complaint, ComplaintComment, ComplaintPriority, ComplaintStatus
from societyhub.models.amenity import (
    Amenity, Booking, AmenityCategory, AmenityStatus,
    BookingStatus, BookingPaymentStatus, BookingPaymentMethod
)
from societyhub.models.billing import (
    Invoice, Expense, InvoiceStatus, PaymentMethod, ExpenseCategory, ExpenseStatus
)
from societyhub.models.document import Document, DocumentCategory, AccessLevel
from societyhub.models.analytics import VisitorLog, CabLog, DeliveryLog, DailySummary

__all__ = [
    "Base",
    "User", "UserRole",
    "Complaint", "ComplaintComment", "ComplaintPriority", "ComplaintStatus",
    "Amenity", "Booking", "AmenityCategory", "AmenityStatus",
    "BookingStatus", "BookingPaymentStatus", "BookingPaymentMethod",
    "Invoice", "Expense", "InvoiceStatus", "PaymentMethod", "ExpenseCategory", "ExpenseStatus",
    "Document", "DocumentCategory", "AccessLevel",
    "VisitorLog", "CabLog", "DeliveryLog", "DailySummary",
]
