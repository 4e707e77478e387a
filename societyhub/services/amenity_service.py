# ================================
# AMENITY SERVICE (services/amenity_service.py)
# ================================

from sqlalchemy import func
from sqlalchemy.orm import Session
from societyhub.models.amenity import Amenity, Booking, AmenityStatus, BookingStatus, BookingPaymentStatus
from societyhub.models.user import User
from societyhub.schemas.amenity import AmenityCreate, AmenityUpdate
from societyhub.core.exceptions import NotFoundError, ValidationError
from societyhub.utils.timeslots import to_minutes
from typing import List, Optional, Dict, Any
import uuid
import logging

logger = logging.getLogger(__name__)

class AmenityService:

    @staticmethod
    def _validate_rules(amenity: Amenity):
        """Checks that depend on more than one field"""
        if to_minutes(amenity.close_time) <= to_minutes(amenity.open_time):
            raise ValidationError("Close time must be after open time")
        if amenity.min_booking_duration > amenity.max_duration:
            raise ValidationError("Minimum booking duration cannot exceed maximum duration")
        for window in amenity.maintenance_schedule or []:
            if window.get("end_date") and window.get("start_date") and window["end_date"] < window["start_date"]:
                raise ValidationError("Maintenance window must end on or after its start date")

    @staticmethod
    def get_amenity(db: Session, amenity_id: uuid.UUID) -> Amenity:
        amenity = db.query(Amenity).filter(Amenity.id == amenity_id).first()
        if not amenity:
            raise NotFoundError("Amenity not found")
        return amenity

    @staticmethod
    def list_amenities(db: Session, status: Optional[str] = None, category: Optional[str] = None) -> List[Amenity]:
        query = db.query(Amenity)
        if status:
            query = query.filter(Amenity.status == status)
        if category:
            query = query.filter(Amenity.category == category)
        return query.order_by(Amenity.created_at.desc()).all()

    @staticmethod
    def create_amenity(db: Session, data: AmenityCreate, created_by: User) -> Amenity:
        amenity = Amenity(**data.model_dump(mode="json"), created_by_id=created_by.id)
        AmenityService._validate_rules(amenity)

        db.add(amenity)
        db.commit()
        db.refresh(amenity)

        logger.info(f"Amenity created: {amenity.name} by {created_by.email}")
        return amenity

    @staticmethod
    def update_amenity(db: Session, amenity_id: uuid.UUID, data: AmenityUpdate) -> Amenity:
        amenity = AmenityService.get_amenity(db, amenity_id)

        changes = data.model_dump(mode="json", exclude_unset=True)
        for field, value in changes.items():
            if value is None:
                continue
            setattr(amenity, field, value)

        try:
            AmenityService._validate_rules(amenity)
        except ValidationError:
            db.rollback()
            raise

        db.commit()
        db.refresh(amenity)

        logger.info(f"Amenity updated: {amenity.name} fields={list(changes)}")
        return amenity

    @staticmethod
    def delete_amenity(db: Session, amenity_id: uuid.UUID) -> None:
        amenity = AmenityService.get_amenity(db, amenity_id)

        deleted_bookings = db.query(Booking).filter(Booking.amenity_id == amenity.id).delete(synchronize_session=False)
        db.delete(amenity)
        db.commit()

        logger.info(f"Amenity deleted: {amenity.name} ({deleted_bookings} bookings removed)")

    @staticmethod
    def get_stats(db: Session) -> Dict[str, Any]:
        total_amenities = db.query(func.count(Amenity.id)).scalar() or 0
        active_amenities = db.query(func.count(Amenity.id)).filter(
            Amenity.status == AmenityStatus.ACTIVE.value
        ).scalar() or 0

        total_bookings = db.query(func.count(Booking.id)).scalar() or 0
        pending_bookings = db.query(func.count(Booking.id)).filter(
            Booking.status == BookingStatus.PENDING.value
        ).scalar() or 0
        approved_bookings = db.query(func.count(Booking.id)).filter(
            Booking.status == BookingStatus.APPROVED.value
        ).scalar() or 0

        total_revenue = db.query(func.coalesce(func.sum(Booking.total_amount), 0)).filter(
            Booking.payment_status == BookingPaymentStatus.PAID.value
        ).scalar() or 0

        category_rows = db.query(Amenity.category, func.count(Amenity.id)).group_by(Amenity.category).all()

        return {
            "total_amenities": total_amenities,
            "active_amenities": active_amenities,
            "total_bookings": total_bookings,
            "pending_bookings": pending_bookings,
            "approved_bookings": approved_bookings,
            "total_revenue": float(total_revenue),
            "category_breakdown": [
                {"category": category, "count": count} for category, count in category_rows
            ],
        }
