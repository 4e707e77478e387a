# ================================
# AMENITY & BOOKING MODELS (models/amenity.py)
# ================================

from sqlalchemy import Column, String, Text, Integer, Numeric, Date, ForeignKey, JSON, Index, Uuid
from sqlalchemy.orm import relationship
from societyhub.models.base import Base
import enum

class AmenityCategory(str, enum.Enum):
    INDOOR = "Indoor"
    OUTDOOR = "Outdoor"
    SPORTS = "Sports"
    RECREATION = "Recreation"
    MEETING = "Meeting"

class AmenityStatus(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    MAINTENANCE = "maintenance"

class BookingStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    CANCELLED = "cancelled"
    COMPLETED = "completed"

class BookingPaymentStatus(str, enum.Enum):
    PENDING = "pending"
    PAID = "paid"
    REFUNDED = "refunded"

class BookingPaymentMethod(str, enum.Enum):
    CASH = "cash"
    ONLINE = "online"
    UPI = "upi"
    CARD = "card"

# Bookings in these states hold their time slot
SLOT_HOLDING_STATUSES = [BookingStatus.PENDING.value, BookingStatus.APPROVED.value]

class Amenity(Base):
    """Bookable shared facility"""
    __tablename__ = "amenities"

    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    category = Column(String(20), nullable=False, index=True)
    capacity = Column(Integer, nullable=False)
    location = Column(String(200), nullable=False)
    features = Column(JSON, default=list, nullable=False)
    images = Column(JSON, default=list, nullable=False)

    # Timings ("HH:MM")
    open_time = Column(String(5), nullable=False)
    close_time = Column(String(5), nullable=False)

    # Booking rules (hours / days)
    max_duration = Column(Integer, default=2, nullable=False)
    advance_booking_days = Column(Integer, default=7, nullable=False)
    min_booking_duration = Column(Integer, default=1, nullable=False)
    slot_interval = Column(Integer, default=1, nullable=False)

    # Pricing
    price_per_hour = Column(Numeric(12, 2), default=0, nullable=False)
    price_per_day = Column(Numeric(12, 2), default=0, nullable=False)
    security_deposit = Column(Numeric(12, 2), default=0, nullable=False)

    status = Column(String(20), default=AmenityStatus.ACTIVE.value, nullable=False, index=True)
    # [{"start_date": "YYYY-MM-DD", "end_date": "YYYY-MM-DD", "reason": "..."}]
    maintenance_schedule = Column(JSON, default=list, nullable=False)

    created_by_id = Column(Uuid(as_uuid=True), ForeignKey('users.id', ondelete='SET NULL'), nullable=True)

    # Relationships
    created_by = relationship("User")
    bookings = relationship("Booking", back_populates="amenity", cascade="all, delete-orphan", passive_deletes=True)

    def __repr__(self):
        return f"<Amenity(name='{self.name}', status='{self.status}')>"

class Booking(Base):
    """Reserved time slot against an amenity"""
    __tablename__ = "bookings"
    __table_args__ = (
        Index("ix_bookings_amenity_date_start", "amenity_id", "booking_date", "start_time"),
    )

    amenity_id = Column(Uuid(as_uuid=True), ForeignKey('amenities.id', ondelete='CASCADE'), nullable=False)
    user_id = Column(Uuid(as_uuid=True), ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)

    resident_name = Column(String(100), nullable=False)
    unit = Column(String(20), nullable=False)
    booking_date = Column(Date, nullable=False)
    start_time = Column(String(5), nullable=False)
    end_time = Column(String(5), nullable=False)
    duration = Column(Integer, nullable=False)
    purpose = Column(Text, nullable=False)
    number_of_guests = Column(Integer, default=1, nullable=False)

    status = Column(String(20), default=BookingStatus.PENDING.value, nullable=False, index=True)
    total_amount = Column(Numeric(12, 2), default=0, nullable=False)
    payment_status = Column(String(20), default=BookingPaymentStatus.PENDING.value, nullable=False)
    payment_method = Column(String(20), nullable=True)
    transaction_id = Column(String(100), nullable=True)

    approved_by_id = Column(Uuid(as_uuid=True), ForeignKey('users.id', ondelete='SET NULL'), nullable=True)
    rejection_reason = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)
    special_requests = Column(Text, nullable=True)

    # Relationships
    amenity = relationship("Amenity", back_populates="bookings")
    user = relationship("User", foreign_keys=[user_id])
    approved_by = relationship("User", foreign_keys=[approved_by_id])

    def __repr__(self):
        return f"<Booking(amenity='{self.amenity_id}', date='{self.booking_date}', {self.start_time}-{self.end_time})>"
