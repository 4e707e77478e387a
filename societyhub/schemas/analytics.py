# ================================
# ANALYTICS SCHEMAS (schemas/analytics.py)
# ================================

from pydantic import Field
from typing import Optional, List
from uuid import UUID
import datetime as dt
from societyhub.schemas.base import BaseSchema

# ================================
# RECORDING SCHEMAS
# ================================

class VisitorRecord(BaseSchema):
    date: Optional[dt.date] = None
    visitor_name: Optional[str] = Field(None, max_length=100)
    visitor_type: Optional[str] = Field(None, max_length=50)
    entry_time: Optional[dt.datetime] = None
    exit_time: Optional[dt.datetime] = None
    host_name: Optional[str] = Field(None, max_length=100)
    purpose: Optional[str] = Field(None, max_length=255)

class CabRecord(BaseSchema):
    date: Optional[dt.date] = None
    cab_number: Optional[str] = Field(None, max_length=30)
    driver_name: Optional[str] = Field(None, max_length=100)
    passenger_name: Optional[str] = Field(None, max_length=100)
    trip_type: Optional[str] = Field(None, max_length=20)
    time: Optional[dt.datetime] = None
    destination: Optional[str] = Field(None, max_length=255)
    fare: float = Field(default=0, ge=0)

class DeliveryRecord(BaseSchema):
    date: Optional[dt.date] = None
    delivery_company: Optional[str] = Field(None, max_length=100)
    tracking_number: Optional[str] = Field(None, max_length=100)
    recipient_name: Optional[str] = Field(None, max_length=100)
    delivery_time: Optional[dt.datetime] = None
    package_type: Optional[str] = Field(None, max_length=50)
    status: Optional[str] = Field(None, max_length=20)

# ================================
# RESPONSE SCHEMAS
# ================================

class VisitorResponse(VisitorRecord):
    id: UUID
    date: dt.date

class CabResponse(CabRecord):
    id: UUID
    date: dt.date

class DeliveryResponse(DeliveryRecord):
    id: UUID
    date: dt.date

class DailySummaryResponse(BaseSchema):
    date: dt.date
    total_visitors: int
    total_cabs: int
    total_deliveries: int

class DailyAnalyticsResponse(BaseSchema):
    success: bool = True
    start_date: dt.date
    end_date: dt.date
    count: int
    data: List[DailySummaryResponse]

class OverviewTotals(BaseSchema):
    visitors: int
    cabs: int
    deliveries: int

class OverviewAverages(BaseSchema):
    visitors: float
    cabs: float
    deliveries: float

class OverviewResponse(BaseSchema):
    success: bool = True
    period: int
    total_days: int
    totals: OverviewTotals
    averages: OverviewAverages

class DetailsResponse(BaseSchema):
    success: bool = True
    type: str
    page: int
    limit: int
    total: int
    data: list

class RecordResponse(BaseSchema):
    success: bool = True
    message: str
    record_id: UUID
    date: dt.date
