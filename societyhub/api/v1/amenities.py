# ================================
# AMENITY & BOOKING ROUTES (api/v1/amenities.py)
# ================================

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional
from uuid import UUID
from datetime import date

from societyhub.dependencies import get_db, get_current_user, require_roles
from societyhub.models.user import User, UserRole
from societyhub.core.exceptions import ValidationError
from societyhub.schemas.base import MessageResponse
from societyhub.schemas.amenity import (
    AmenityCreate, AmenityUpdate, AmenityEnvelope, AmenityListResponse, AmenityStatsResponse,
    BookingCreate, BookingStatusUpdate, BookingPaymentUpdate, BookingEnvelope, BookingListResponse,
    AvailableSlotsResponse
)
from societyhub.services.amenity_service import AmenityService
from societyhub.services.booking_service import BookingService

router = APIRouter()

amenity_managers = require_roles(UserRole.ADMIN, UserRole.COMMITTEE_MEMBER)

# ================================
# AMENITIES
# ================================

@router.post("/amenities", response_model=AmenityEnvelope, status_code=status.HTTP_201_CREATED)
async def create_amenity(
    amenity_data: AmenityCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(amenity_managers)
):
    amenity = AmenityService.create_amenity(db, amenity_data, current_user)
    return AmenityEnvelope(amenity=amenity)

@router.get("/amenities", response_model=AmenityListResponse)
async def list_amenities(
    status_filter: Optional[str] = Query(None, alias="status"),
    category: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    amenities = AmenityService.list_amenities(db, status=status_filter, category=category)
    return AmenityListResponse(count=len(amenities), amenities=amenities)

@router.get("/amenities/stats", response_model=AmenityStatsResponse)
async def amenity_stats(
    db: Session = Depends(get_db),
    current_user: User = Depends(amenity_managers)
):
    return AmenityStatsResponse(**AmenityService.get_stats(db))

@router.get("/amenities/{amenity_id}", response_model=AmenityEnvelope)
async def get_amenity(
    amenity_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return AmenityEnvelope(amenity=AmenityService.get_amenity(db, amenity_id))

@router.patch("/amenities/{amenity_id}", response_model=AmenityEnvelope)
async def update_amenity(
    amenity_id: UUID,
    amenity_data: AmenityUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(amenity_managers)
):
    amenity = AmenityService.update_amenity(db, amenity_id, amenity_data)
    return AmenityEnvelope(amenity=amenity)

@router.delete("/amenities/{amenity_id}", response_model=MessageResponse)
async def delete_amenity(
    amenity_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(UserRole.ADMIN))
):
    AmenityService.delete_amenity(db, amenity_id)
    return MessageResponse(message="Amenity and its bookings deleted successfully")

# ================================
# BOOKINGS
# ================================

@router.post("/bookings", response_model=BookingEnvelope, status_code=status.HTTP_201_CREATED)
async def create_booking(
    booking_data: BookingCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    booking = BookingService.create_booking(db, booking_data, current_user)
    return BookingEnvelope(message="Booking created successfully", booking=booking)

@router.get("/bookings", response_model=BookingListResponse)
async def list_bookings(
    status_filter: Optional[str] = Query(None, alias="status"),
    amenity_id: Optional[UUID] = Query(None),
    user_id: Optional[UUID] = Query(None),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    bookings = BookingService.list_bookings(
        db,
        current_user,
        status=status_filter,
        amenity_id=amenity_id,
        user_id=user_id,
        start_date=start_date,
        end_date=end_date
    )
    return BookingListResponse(count=len(bookings), bookings=bookings)

@router.get("/bookings/available-slots", response_model=AvailableSlotsResponse)
async def available_slots(
    amenity_id: Optional[UUID] = Query(None),
    booking_date: Optional[date] = Query(None, alias="date"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    if not amenity_id or not booking_date:
        raise ValidationError("amenity_id and date are required")

    slots = BookingService.get_available_slots(db, amenity_id, booking_date)
    return AvailableSlotsResponse(booking_date=booking_date, available_slots=slots)

@router.get("/bookings/{booking_id}", response_model=BookingEnvelope)
async def get_booking(
    booking_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return BookingEnvelope(booking=BookingService.get_accessible_booking(db, booking_id, current_user))

@router.patch("/bookings/{booking_id}/status", response_model=BookingEnvelope)
async def update_booking_status(
    booking_id: UUID,
    status_data: BookingStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(amenity_managers)
):
    booking = BookingService.update_status(db, booking_id, status_data, current_user)
    return BookingEnvelope(message=f"Booking {booking.status}", booking=booking)

@router.patch("/bookings/{booking_id}/cancel", response_model=BookingEnvelope)
async def cancel_booking(
    booking_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    booking = BookingService.cancel_booking(db, booking_id, current_user)
    return BookingEnvelope(message="Booking cancelled successfully", booking=booking)

@router.patch("/bookings/{booking_id}/payment", response_model=BookingEnvelope)
async def mark_booking_payment(
    booking_id: UUID,
    payment_data: BookingPaymentUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(amenity_managers)
):
    booking = BookingService.mark_payment(db, booking_id, payment_data, current_user)
    return BookingEnvelope(message="Payment recorded successfully", booking=booking)
