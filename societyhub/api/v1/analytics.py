# ================================
# ANALYTICS ROUTES (api/v1/analytics.py)
# ================================

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response
from sqlalchemy.orm import Session
from typing import Optional
from datetime import date

from societyhub.dependencies import get_db, require_roles, require_role_or_permission
from societyhub.models.user import User, UserRole
from societyhub.core.exceptions import ValidationError
from societyhub.schemas.analytics import (
    VisitorRecord, CabRecord, DeliveryRecord,
    VisitorResponse, CabResponse, DeliveryResponse,
    DailySummaryResponse, DailyAnalyticsResponse, OverviewResponse, DetailsResponse, RecordResponse
)
from societyhub.services.analytics_service import AnalyticsService

router = APIRouter()

report_readers = require_role_or_permission([UserRole.ADMIN], "reports")
recorders = require_roles(UserRole.ADMIN, UserRole.COMMITTEE_MEMBER)

DETAIL_SCHEMAS = {
    "visitors": VisitorResponse,
    "cabs": CabResponse,
    "deliveries": DeliveryResponse,
}

@router.get("/daily", response_model=DailyAnalyticsResponse)
async def daily_summary(
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(report_readers)
):
    """Daily rollups in the range, newest first"""
    start, end = AnalyticsService.resolve_range(start_date, end_date)
    rows = AnalyticsService.get_daily(db, start, end)
    return DailyAnalyticsResponse(
        start_date=start,
        end_date=end,
        count=len(rows),
        data=[DailySummaryResponse.model_validate(r) for r in rows]
    )

@router.get("/summary/overview", response_model=OverviewResponse)
async def overview(
    period: int = Query(30, ge=1, le=3650, description="Days to look back"),
    db: Session = Depends(get_db),
    current_user: User = Depends(report_readers)
):
    return OverviewResponse(**AnalyticsService.get_overview(db, period))

@router.get("/export")
async def export_daily(
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    format: str = Query("csv"),
    db: Session = Depends(get_db),
    current_user: User = Depends(report_readers)
):
    """CSV download of the daily rollups, oldest first"""
    if format != "csv":
        raise ValidationError("Only CSV export is supported currently")

    start, end = AnalyticsService.resolve_range(start_date, end_date)
    rows = AnalyticsService.get_daily(db, start, end, ascending=True)
    filename = f"analytics-{start.isoformat()}-to-{end.isoformat()}.csv"

    return Response(
        content=AnalyticsService.export_csv(rows),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )

# ================================
# RECORDING
# ================================

@router.post("/record-visitor", response_model=RecordResponse, status_code=status.HTTP_201_CREATED)
async def record_visitor(
    record: VisitorRecord,
    db: Session = Depends(get_db),
    current_user: User = Depends(recorders)
):
    entry = AnalyticsService.record(db, "visitors", record.model_dump())
    return RecordResponse(message="Visitor recorded", record_id=entry.id, date=entry.date)

@router.post("/record-cab", response_model=RecordResponse, status_code=status.HTTP_201_CREATED)
async def record_cab(
    record: CabRecord,
    db: Session = Depends(get_db),
    current_user: User = Depends(recorders)
):
    entry = AnalyticsService.record(db, "cabs", record.model_dump())
    return RecordResponse(message="Cab recorded", record_id=entry.id, date=entry.date)

@router.post("/record-delivery", response_model=RecordResponse, status_code=status.HTTP_201_CREATED)
async def record_delivery(
    record: DeliveryRecord,
    db: Session = Depends(get_db),
    current_user: User = Depends(recorders)
):
    entry = AnalyticsService.record(db, "deliveries", record.model_dump())
    return RecordResponse(message="Delivery recorded", record_id=entry.id, date=entry.date)

# Declared last so the fixed paths above take precedence
@router.get("/{fact_type}", response_model=DetailsResponse)
async def details(
    fact_type: str,
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=500),
    db: Session = Depends(get_db),
    current_user: User = Depends(report_readers)
):
    if fact_type not in DETAIL_SCHEMAS:
        raise ValidationError("Invalid analytics type")

    start, end = AnalyticsService.resolve_range(start_date, end_date)
    rows, total = AnalyticsService.get_details(db, fact_type, start, end, page=page, limit=limit)
    schema = DETAIL_SCHEMAS[fact_type]

    return DetailsResponse(
        type=fact_type,
        page=page,
        limit=limit,
        total=total,
        data=[schema.model_validate(r).model_dump(mode="json") for r in rows]
    )
