# ================================
# SCHEMAS PACKAGE INITIALIZATION (schemas/__init__.py)
# ================================

"""
Pydantic Schemas Package

Central imports for the request and response schemas
"""

from societyhub.schemas.base import (
    BaseSchema,
    BaseResponseSchema,
    TimestampMixin,
    ErrorResponse,
    MessageResponse,
    SuccessResponse,
)

from societyhub.schemas.user import (
    RegisterRequest,
    AdminCreateUserRequest,
    LoginRequest,
    UpdatePermissionsRequest,
    UserUpdate,
    UserResponse,
    AuthResponse,
)

from societyhub.schemas.complaint import (
    ComplaintCreate,
    ComplaintStatusUpdate,
    ComplaintAssign,
    CommentCreate,
    ComplaintView,
    ComplaintDetailView,
)

from societyhub.schemas.amenity import (
    AmenityCreate,
    AmenityUpdate,
    AmenityResponse,
    BookingCreate,
    BookingStatusUpdate,
    BookingPaymentUpdate,
    BookingResponse,
)

from societyhub.schemas.billing import (
    InvoiceCreate,
    InvoiceUpdate,
    InvoiceResponse,
    ExpenseCreate,
    ExpenseUpdate,
    ExpenseResponse,
)

from societyhub.schemas.document import DocumentUpdate, DocumentResponse

from societyhub.schemas.analytics import (
    VisitorRecord,
    CabRecord,
    DeliveryRecord,
    DailySummaryResponse,
)
