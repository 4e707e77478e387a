# ================================
# BOOKING SERVICE (services/booking_service.py)
# ================================

from sqlalchemy.orm import Session, joinedload
from societyhub.models.amenity import (
    Amenity, Booking, AmenityStatus, BookingStatus, BookingPaymentStatus, SLOT_HOLDING_STATUSES
)
from societyhub.models.user import User, UserRole
from societyhub.schemas.amenity import BookingCreate, BookingStatusUpdate, BookingPaymentUpdate
from societyhub.core.exceptions import AppException, NotFoundError, AuthorizationError, ConflictError, ValidationError
from societyhub.utils.timeslots import (
    to_minutes, duration_hours, intervals_overlap, within_hours, generate_available_slots
)
from datetime import date, timedelta
from decimal import Decimal
from typing import List, Optional, Dict
import uuid
import logging

logger = logging.getLogger(__name__)

# Roles that manage every booking; everyone else only sees their own
BOOKING_MANAGER_ROLES = [UserRole.ADMIN.value, UserRole.COMMITTEE_MEMBER.value]

class BookingService:
    """Amenity bookings with slot validation and overlap protection"""

    @staticmethod
    def _holding_bookings(db: Session, amenity_id: uuid.UUID, booking_date: date) -> List[Booking]:
        return db.query(Booking).filter(
            Booking.amenity_id == amenity_id,
            Booking.booking_date == booking_date,
            Booking.status.in_(SLOT_HOLDING_STATUSES)
        ).all()

    @staticmethod
    def _in_maintenance(amenity: Amenity, booking_date: date) -> bool:
        for window in amenity.maintenance_schedule or []:
            start = window.get("start_date")
            end = window.get("end_date")
            if not start or not end:
                continue
            if date.fromisoformat(start) <= booking_date <= date.fromisoformat(end):
                return True
        return False

    @staticmethod
    def get_booking(db: Session, booking_id: uuid.UUID) -> Booking:
        booking = db.query(Booking).options(joinedload(Booking.amenity)).filter(Booking.id == booking_id).first()
        if not booking:
            raise NotFoundError("Booking not found")
        return booking

    @staticmethod
    def get_accessible_booking(db: Session, booking_id: uuid.UUID, user: User) -> Booking:
        booking = BookingService.get_booking(db, booking_id)
        if user.role not in BOOKING_MANAGER_ROLES and booking.user_id != user.id:
            raise AuthorizationError("You do not have access to this booking")
        return booking

    @staticmethod
    def create_booking(db: Session, data: BookingCreate, user: User, today: Optional[date] = None) -> Booking:
        """
        Validate a booking request against the amenity's rules and insert it.

        The amenity row is locked for the duration of the overlap check and the
        insert so concurrent requests for one amenity are serialized.
        """
        today = today or date.today()

        amenity = db.query(Amenity).filter(Amenity.id == data.amenity_id).with_for_update().first()
        if not amenity:
            raise NotFoundError("Amenity not found")

        try:
            if amenity.status != AmenityStatus.ACTIVE.value:
                raise ValidationError("Amenity is not available for booking")

            if to_minutes(data.end_time) <= to_minutes(data.start_time):
                raise ValidationError("End time must be after start time")

            if not within_hours(data.start_time, data.end_time, amenity.open_time, amenity.close_time):
                raise ValidationError(
                    f"Booking must be within operating hours ({amenity.open_time} - {amenity.close_time})"
                )

            duration = duration_hours(data.start_time, data.end_time)
            if duration < amenity.min_booking_duration:
                raise ValidationError(f"Minimum booking duration is {amenity.min_booking_duration} hour(s)")
            if duration > amenity.max_duration:
                raise ValidationError(f"Maximum booking duration is {amenity.max_duration} hour(s)")

            if data.booking_date < today:
                raise ValidationError("Cannot book a date in the past")
            if data.booking_date > today + timedelta(days=amenity.advance_booking_days):
                raise ValidationError(f"Bookings can be made at most {amenity.advance_booking_days} days in advance")

            if BookingService._in_maintenance(amenity, data.booking_date):
                raise ValidationError("Amenity is under maintenance on the selected date")

            if data.number_of_guests > amenity.capacity:
                raise ValidationError(f"Number of guests exceeds capacity ({amenity.capacity})")

            for existing in BookingService._holding_bookings(db, amenity.id, data.booking_date):
                if intervals_overlap(data.start_time, data.end_time, existing.start_time, existing.end_time):
                    raise ConflictError("Time slot already booked")

        except AppException:
            db.rollback()  # releases the amenity lock
            raise

        total_amount = Decimal(duration) * Decimal(str(amenity.price_per_hour or 0)) + Decimal(str(amenity.security_deposit or 0))

        booking = Booking(
            amenity_id=amenity.id,
            user_id=user.id,
            resident_name=user.name,
            unit=user.unit or "-",
            booking_date=data.booking_date,
            start_time=data.start_time,
            end_time=data.end_time,
            duration=duration,
            purpose=data.purpose,
            number_of_guests=data.number_of_guests,
            special_requests=data.special_requests,
            notes=data.notes,
            status=BookingStatus.PENDING.value,
            total_amount=total_amount,
            payment_status=BookingPaymentStatus.PENDING.value
        )
        db.add(booking)
        db.commit()

        logger.info(
            f"Booking created: {amenity.name} on {booking.booking_date} "
            f"{booking.start_time}-{booking.end_time} by {user.email}"
        )
        return BookingService.get_booking(db, booking.id)

    @staticmethod
    def list_bookings(
        db: Session,
        user: User,
        status: Optional[str] = None,
        amenity_id: Optional[uuid.UUID] = None,
        user_id: Optional[uuid.UUID] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None
    ) -> List[Booking]:
        query = db.query(Booking).options(joinedload(Booking.amenity))

        if user.role not in BOOKING_MANAGER_ROLES:
            query = query.filter(Booking.user_id == user.id)
        elif user_id:
            query = query.filter(Booking.user_id == user_id)

        if status:
            query = query.filter(Booking.status == status)
        if amenity_id:
            query = query.filter(Booking.amenity_id == amenity_id)
        if start_date:
            query = query.filter(Booking.booking_date >= start_date)
        if end_date:
            query = query.filter(Booking.booking_date <= end_date)

        return query.order_by(Booking.booking_date.desc(), Booking.start_time.desc()).all()

    @staticmethod
    def get_available_slots(db: Session, amenity_id: uuid.UUID, booking_date: date) -> List[Dict[str, str]]:
        amenity = db.query(Amenity).filter(Amenity.id == amenity_id).first()
        if not amenity:
            raise NotFoundError("Amenity not found")

        booked = [
            (b.start_time, b.end_time)
            for b in BookingService._holding_bookings(db, amenity.id, booking_date)
        ]
        return generate_available_slots(amenity.open_time, amenity.close_time, amenity.slot_interval, booked)

    @staticmethod
    def update_status(db: Session, booking_id: uuid.UUID, data: BookingStatusUpdate, user: User) -> Booking:
        booking = BookingService.get_booking(db, booking_id)

        if booking.status in (BookingStatus.CANCELLED.value, BookingStatus.COMPLETED.value):
            raise ValidationError(f"Cannot change status of a {booking.status} booking")

        booking.status = data.status
        if data.status == BookingStatus.APPROVED.value:
            booking.approved_by_id = user.id
        if data.status == BookingStatus.REJECTED.value:
            booking.rejection_reason = data.rejection_reason
        if data.notes is not None:
            booking.notes = data.notes

        db.commit()
        logger.info(f"Booking {booking.id} status -> {booking.status} by {user.email}")
        return BookingService.get_booking(db, booking.id)

    @staticmethod
    def cancel_booking(db: Session, booking_id: uuid.UUID, user: User) -> Booking:
        booking = BookingService.get_accessible_booking(db, booking_id, user)

        if booking.status == BookingStatus.COMPLETED.value:
            raise ValidationError("Cannot cancel a completed booking")

        booking.status = BookingStatus.CANCELLED.value
        db.commit()

        logger.info(f"Booking {booking.id} cancelled by {user.email}")
        return BookingService.get_booking(db, booking.id)

    @staticmethod
    def mark_payment(db: Session, booking_id: uuid.UUID, data: BookingPaymentUpdate, user: User) -> Booking:
        booking = BookingService.get_booking(db, booking_id)

        booking.payment_status = BookingPaymentStatus.PAID.value
        booking.payment_method = data.payment_method
        if data.transaction_id:
            booking.transaction_id = data.transaction_id

        db.commit()
        logger.info(f"Booking {booking.id} marked paid ({booking.payment_method}) by {user.email}")
        return BookingService.get_booking(db, booking.id)
