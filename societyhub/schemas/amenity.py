# ================================
# AMENITY & BOOKING SCHEMAS (schemas/amenity.py)
# ================================

from pydantic import Field, field_validator
from typing import Optional, List, Literal
from datetime import date
from uuid import UUID
from societyhub.schemas.base import BaseSchema, BaseResponseSchema, TimestampMixin, validate_hhmm

CategoryName = Literal["Indoor", "Outdoor", "Sports", "Recreation", "Meeting"]
AmenityStatusName = Literal["active", "inactive", "maintenance"]
BookingStatusName = Literal["pending", "approved", "rejected", "cancelled", "completed"]
BookingPaymentMethodName = Literal["cash", "online", "upi", "card"]

class MaintenanceWindow(BaseSchema):
    start_date: date
    end_date: date
    reason: Optional[str] = None

# ================================
# AMENITY SCHEMAS
# ================================

class AmenityCreate(BaseSchema):
    name: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    category: CategoryName
    capacity: int = Field(..., ge=1)
    location: str = Field(..., min_length=1, max_length=200)
    features: List[str] = Field(default_factory=list)
    images: List[str] = Field(default_factory=list)
    open_time: str = Field(..., description="Opening time, HH:MM")
    close_time: str = Field(..., description="Closing time, HH:MM")
    max_duration: int = Field(default=2, ge=1)
    advance_booking_days: int = Field(default=7, ge=0)
    min_booking_duration: int = Field(default=1, ge=1)
    slot_interval: int = Field(default=1, ge=1)
    price_per_hour: float = Field(default=0, ge=0)
    price_per_day: float = Field(default=0, ge=0)
    security_deposit: float = Field(default=0, ge=0)
    status: AmenityStatusName = "active"
    maintenance_schedule: List[MaintenanceWindow] = Field(default_factory=list)

    @field_validator('open_time', 'close_time')
    @classmethod
    def validate_times(cls, v):
        return validate_hhmm(v)

class AmenityUpdate(BaseSchema):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    category: Optional[CategoryName] = None
    capacity: Optional[int] = Field(None, ge=1)
    location: Optional[str] = Field(None, max_length=200)
    features: Optional[List[str]] = None
    images: Optional[List[str]] = None
    open_time: Optional[str] = None
    close_time: Optional[str] = None
    max_duration: Optional[int] = Field(None, ge=1)
    advance_booking_days: Optional[int] = Field(None, ge=0)
    min_booking_duration: Optional[int] = Field(None, ge=1)
    slot_interval: Optional[int] = Field(None, ge=1)
    price_per_hour: Optional[float] = Field(None, ge=0)
    price_per_day: Optional[float] = Field(None, ge=0)
    security_deposit: Optional[float] = Field(None, ge=0)
    status: Optional[AmenityStatusName] = None
    maintenance_schedule: Optional[List[MaintenanceWindow]] = None

    @field_validator('open_time', 'close_time')
    @classmethod
    def validate_times(cls, v):
        return validate_hhmm(v)

class AmenityResponse(BaseResponseSchema, TimestampMixin):
    name: str
    description: str
    category: str
    capacity: int
    location: str
    features: List[str] = Field(default_factory=list)
    images: List[str] = Field(default_factory=list)
    open_time: str
    close_time: str
    max_duration: int
    advance_booking_days: int
    min_booking_duration: int
    slot_interval: int
    price_per_hour: float
    price_per_day: float
    security_deposit: float
    status: str
    maintenance_schedule: List[dict] = Field(default_factory=list)
    created_by_id: Optional[UUID] = None

class AmenityEnvelope(BaseSchema):
    success: bool = True
    amenity: AmenityResponse

class AmenityListResponse(BaseSchema):
    success: bool = True
    count: int
    amenities: List[AmenityResponse]

class CategoryBreakdown(BaseSchema):
    category: str
    count: int

class AmenityStatsResponse(BaseSchema):
    success: bool = True
    total_amenities: int
    active_amenities: int
    total_bookings: int
    pending_bookings: int
    approved_bookings: int
    total_revenue: float
    category_breakdown: List[CategoryBreakdown]

# ================================
# BOOKING SCHEMAS
# ================================

class BookingCreate(BaseSchema):
    amenity_id: UUID
    booking_date: date
    start_time: str
    end_time: str
    purpose: str = Field(..., min_length=1)
    number_of_guests: int = Field(default=1, ge=1)
    special_requests: Optional[str] = None
    notes: Optional[str] = None

    @field_validator('start_time', 'end_time')
    @classmethod
    def validate_times(cls, v):
        return validate_hhmm(v)

class BookingStatusUpdate(BaseSchema):
    status: BookingStatusName
    rejection_reason: Optional[str] = None
    notes: Optional[str] = None

class BookingPaymentUpdate(BaseSchema):
    payment_method: BookingPaymentMethodName
    transaction_id: Optional[str] = None

class AmenitySummary(BaseSchema):
    id: UUID
    name: str
    category: str
    location: str

class BookingResponse(BaseResponseSchema, TimestampMixin):
    amenity_id: UUID
    amenity: Optional[AmenitySummary] = None
    user_id: UUID
    resident_name: str
    unit: str
    booking_date: date
    start_time: str
    end_time: str
    duration: int
    purpose: str
    number_of_guests: int
    status: str
    total_amount: float
    payment_status: str
    payment_method: Optional[str] = None
    transaction_id: Optional[str] = None
    approved_by_id: Optional[UUID] = None
    rejection_reason: Optional[str] = None
    notes: Optional[str] = None
    special_requests: Optional[str] = None

class BookingEnvelope(BaseSchema):
    success: bool = True
    message: Optional[str] = None
    booking: BookingResponse

class BookingListResponse(BaseSchema):
    success: bool = True
    count: int
    bookings: List[BookingResponse]

class TimeSlot(BaseSchema):
    start_time: str
    end_time: str

class AvailableSlotsResponse(BaseSchema):
    success: bool = True
    booking_date: date
    available_slots: List[TimeSlot]
