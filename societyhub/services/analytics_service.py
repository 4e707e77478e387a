# ================================
# ANALYTICS SERVICE (services/analytics_service.py)
# ================================

from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from societyhub.models.analytics import VisitorLog, CabLog, DeliveryLog, DailySummary
from societyhub.core.exceptions import ValidationError
from datetime import date, timedelta
from typing import List, Optional, Dict, Any, Tuple
import csv
import io
import logging

logger = logging.getLogger(__name__)

DEFAULT_RANGE_DAYS = 30

# Detail type -> (fact model, rollup counter)
FACT_TYPES = {
    "visitors": (VisitorLog, "total_visitors"),
    "cabs": (CabLog, "total_cabs"),
    "deliveries": (DeliveryLog, "total_deliveries"),
}

CSV_HEADER = ["date", "total_visitors", "total_cabs", "total_deliveries"]

class AnalyticsService:

    @staticmethod
    def resolve_range(
        start_date: Optional[date],
        end_date: Optional[date],
        today: Optional[date] = None
    ) -> Tuple[date, date]:
        """Missing bounds default to the last 30 days ending today"""
        today = today or date.today()
        end = end_date or today
        start = start_date or (end - timedelta(days=DEFAULT_RANGE_DAYS))
        if start > end:
            raise ValidationError("start_date must be on or before end_date")
        return start, end

    @staticmethod
    def get_daily(db: Session, start: date, end: date, ascending: bool = False) -> List[DailySummary]:
        order = DailySummary.date.asc() if ascending else DailySummary.date.desc()
        return db.query(DailySummary).filter(
            DailySummary.date >= start,
            DailySummary.date <= end
        ).order_by(order).all()

    @staticmethod
    def get_overview(db: Session, period: int = DEFAULT_RANGE_DAYS, today: Optional[date] = None) -> Dict[str, Any]:
        today = today or date.today()
        since = today - timedelta(days=period)
        rows = db.query(DailySummary).filter(DailySummary.date >= since).all()

        total_days = len(rows)
        visitors = sum(r.total_visitors for r in rows)
        cabs = sum(r.total_cabs for r in rows)
        deliveries = sum(r.total_deliveries for r in rows)

        def per_day(total: int) -> float:
            return round(total / total_days, 2) if total_days else 0

        return {
            "period": period,
            "total_days": total_days,
            "totals": {"visitors": visitors, "cabs": cabs, "deliveries": deliveries},
            "averages": {
                "visitors": per_day(visitors),
                "cabs": per_day(cabs),
                "deliveries": per_day(deliveries),
            },
        }

    @staticmethod
    def get_details(
        db: Session,
        fact_type: str,
        start: date,
        end: date,
        page: int = 1,
        limit: int = 50
    ) -> Tuple[list, int]:
        if fact_type not in FACT_TYPES:
            raise ValidationError("Invalid analytics type")

        model, _ = FACT_TYPES[fact_type]
        query = db.query(model).filter(model.date >= start, model.date <= end)
        total = query.count()
        rows = query.order_by(model.date.desc(), model.created_at.desc()).offset((page - 1) * limit).limit(limit).all()
        return rows, total

    @staticmethod
    def export_csv(rows: List[DailySummary]) -> str:
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(CSV_HEADER)
        for row in rows:
            writer.writerow([row.date.isoformat(), row.total_visitors, row.total_cabs, row.total_deliveries])
        return buffer.getvalue()

    # ================================
    # RECORDING
    # ================================

    @staticmethod
    def _bump_summary(db: Session, day: date, counter: str) -> int:
        """Increment one rollup counter in place; returns the number of rows touched"""
        column = getattr(DailySummary, counter)
        return db.query(DailySummary).filter(DailySummary.date == day).update(
            {column: column + 1}, synchronize_session=False
        )

    @staticmethod
    def _increment_summary(db: Session, day: date, counter: str):
        """Bump one counter on the day's rollup, creating the row when absent"""
        if AnalyticsService._bump_summary(db, day, counter):
            return

        try:
            with db.begin_nested():
                db.add(DailySummary(date=day, **{counter: 1}))
        except IntegrityError:
            # Another request created the row first
            AnalyticsService._bump_summary(db, day, counter)

    @staticmethod
    def record(db: Session, fact_type: str, payload: Dict[str, Any], today: Optional[date] = None):
        """Insert a fact row and count it on that day's rollup"""
        model, counter = FACT_TYPES[fact_type]

        data = dict(payload)
        data["date"] = data.get("date") or today or date.today()

        record = model(**data)
        db.add(record)
        db.flush()

        AnalyticsService._increment_summary(db, record.date, counter)

        db.commit()
        db.refresh(record)

        logger.info(f"Recorded {fact_type} entry for {record.date}")
        return record
