# ================================
# BILLING SCHEMAS (schemas/billing.py)
# ================================

from pydantic import Field
from typing import Optional, List, Literal
from uuid import UUID
import datetime as dt
from societyhub.schemas.base import BaseSchema, BaseResponseSchema, TimestampMixin

InvoiceStatusName = Literal["pending", "paid", "overdue", "cancelled"]
PaymentMethodName = Literal["bank_transfer", "cash", "cheque", "upi", "card", "other"]
ExpenseCategoryName = Literal["Maintenance", "Utilities", "Security", "Housekeeping", "Repairs", "Salaries", "Other"]
ExpenseStatusName = Literal["pending", "approved", "rejected"]

# ================================
# INVOICE SCHEMAS
# ================================

class InvoiceCharges(BaseSchema):
    maintenance_charge: float = Field(default=0, ge=0)
    parking_charge: float = Field(default=0, ge=0)
    water_charge: float = Field(default=0, ge=0)
    common_area_charge: float = Field(default=0, ge=0)
    gst: float = Field(default=0, ge=0, le=100, description="GST percent")

class InvoiceCreate(InvoiceCharges):
    user_id: UUID
    unit: str = Field(..., min_length=1, max_length=20)
    due_date: dt.date
    notes: str = ""

class InvoiceUpdate(BaseSchema):
    maintenance_charge: Optional[float] = Field(None, ge=0)
    parking_charge: Optional[float] = Field(None, ge=0)
    water_charge: Optional[float] = Field(None, ge=0)
    common_area_charge: Optional[float] = Field(None, ge=0)
    gst: Optional[float] = Field(None, ge=0, le=100)
    unit: Optional[str] = Field(None, max_length=20)
    due_date: Optional[dt.date] = None
    notes: Optional[str] = None
    status: Optional[InvoiceStatusName] = None

class MarkPaidRequest(BaseSchema):
    payment_method: PaymentMethodName = "other"

class InvoiceResponse(BaseResponseSchema, TimestampMixin):
    invoice_number: str
    user_id: UUID
    resident_name: str
    resident_email: str
    unit: str
    maintenance_charge: float
    parking_charge: float
    water_charge: float
    common_area_charge: float
    gst: float
    subtotal: float
    gst_amount: float
    total_amount: float
    due_date: dt.date
    status: str
    paid_date: Optional[dt.datetime] = None
    payment_method: Optional[str] = None
    notes: str = ""
    created_by_id: Optional[UUID] = None

class InvoiceEnvelope(BaseSchema):
    success: bool = True
    message: Optional[str] = None
    invoice: InvoiceResponse

class InvoiceListResponse(BaseSchema):
    success: bool = True
    count: int
    invoices: List[InvoiceResponse]

class BillingStats(BaseSchema):
    total_revenue: float
    total_pending: float
    total_expenses: float
    net_balance: float
    collection_rate: float
    paid_invoice_count: int
    pending_invoice_count: int
    expense_count: int

class BillingStatsResponse(BaseSchema):
    success: bool = True
    stats: BillingStats

# ================================
# EXPENSE SCHEMAS
# ================================

class ExpenseCreate(BaseSchema):
    category: ExpenseCategoryName
    description: str = Field(..., min_length=1)
    amount: float = Field(..., ge=0)
    vendor: str = Field(..., min_length=1, max_length=200)
    date: dt.date
    payment_method: PaymentMethodName
    transaction_id: str = ""
    receipt: str = ""
    notes: str = ""

class ExpenseUpdate(BaseSchema):
    category: Optional[ExpenseCategoryName] = None
    description: Optional[str] = None
    amount: Optional[float] = Field(None, ge=0)
    vendor: Optional[str] = Field(None, max_length=200)
    date: Optional[dt.date] = None
    payment_method: Optional[PaymentMethodName] = None
    transaction_id: Optional[str] = None
    receipt: Optional[str] = None
    notes: Optional[str] = None
    status: Optional[ExpenseStatusName] = None

class ExpenseResponse(BaseResponseSchema, TimestampMixin):
    expense_number: str
    category: str
    description: str
    amount: float
    vendor: str
    date: dt.date
    payment_method: str
    transaction_id: str = ""
    receipt: str = ""
    notes: str = ""
    status: str
    approved_by_id: Optional[UUID] = None
    created_by_id: Optional[UUID] = None

class ExpenseEnvelope(BaseSchema):
    success: bool = True
    message: Optional[str] = None
    expense: ExpenseResponse

class ExpenseListResponse(BaseSchema):
    success: bool = True
    count: int
    expenses: List[ExpenseResponse]
