# ================================
# BILLING ROUTES (api/v1/billing.py)
# ================================

from fastapi import APIRouter, Depends, Query, Body, status
from sqlalchemy.orm import Session
from typing import Optional
from uuid import UUID
from datetime import date

from societyhub.dependencies import get_db, get_current_user, require_roles
from societyhub.models.user import User, UserRole
from societyhub.schemas.base import SuccessResponse
from societyhub.schemas.billing import (
    InvoiceCreate, InvoiceUpdate, MarkPaidRequest, InvoiceEnvelope, InvoiceListResponse,
    BillingStatsResponse, ExpenseCreate, ExpenseUpdate, ExpenseEnvelope, ExpenseListResponse
)
from societyhub.services.billing_service import BillingService

router = APIRouter()

billing_managers = require_roles(UserRole.ADMIN, UserRole.COMMITTEE_MEMBER)
admin_only = require_roles(UserRole.ADMIN)

# ================================
# INVOICES
# ================================

@router.get("/invoices", response_model=InvoiceListResponse)
async def list_invoices(
    status_filter: Optional[str] = Query(None, alias="status"),
    start_date: Optional[date] = Query(None, description="Due date from"),
    end_date: Optional[date] = Query(None, description="Due date until"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    invoices = BillingService.list_invoices(
        db, current_user, status=status_filter, start_date=start_date, end_date=end_date
    )
    return InvoiceListResponse(count=len(invoices), invoices=invoices)

@router.get("/invoices/stats", response_model=BillingStatsResponse)
async def billing_stats(
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return BillingStatsResponse(stats=BillingService.get_stats(db, start_date, end_date))

@router.get("/invoices/{invoice_id}", response_model=InvoiceEnvelope)
async def get_invoice(
    invoice_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return InvoiceEnvelope(invoice=BillingService.get_accessible_invoice(db, invoice_id, current_user))

@router.post("/invoices", response_model=InvoiceEnvelope, status_code=status.HTTP_201_CREATED)
async def create_invoice(
    invoice_data: InvoiceCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(billing_managers)
):
    invoice = BillingService.create_invoice(db, invoice_data, current_user)
    return InvoiceEnvelope(message="Invoice created successfully", invoice=invoice)

@router.patch("/invoices/{invoice_id}", response_model=InvoiceEnvelope)
async def update_invoice(
    invoice_id: UUID,
    invoice_data: InvoiceUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(billing_managers)
):
    invoice = BillingService.update_invoice(db, invoice_id, invoice_data)
    return InvoiceEnvelope(message="Invoice updated successfully", invoice=invoice)

@router.patch("/invoices/{invoice_id}/mark-paid", response_model=InvoiceEnvelope)
async def mark_invoice_paid(
    invoice_id: UUID,
    payment: Optional[MarkPaidRequest] = Body(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(billing_managers)
):
    method = payment.payment_method if payment else "other"
    invoice = BillingService.mark_paid(db, invoice_id, method)
    return InvoiceEnvelope(message="Invoice marked as paid", invoice=invoice)

@router.delete("/invoices/{invoice_id}", response_model=SuccessResponse)
async def delete_invoice(
    invoice_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_only)
):
    BillingService.delete_invoice(db, invoice_id)
    return SuccessResponse(message="Invoice deleted successfully")

# ================================
# EXPENSES
# ================================

@router.get("/expenses", response_model=ExpenseListResponse)
async def list_expenses(
    category: Optional[str] = Query(None),
    status_filter: Optional[str] = Query(None, alias="status"),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    expenses = BillingService.list_expenses(
        db, category=category, status=status_filter, start_date=start_date, end_date=end_date
    )
    return ExpenseListResponse(count=len(expenses), expenses=expenses)

@router.get("/expenses/{expense_id}", response_model=ExpenseEnvelope)
async def get_expense(
    expense_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return ExpenseEnvelope(expense=BillingService.get_expense(db, expense_id))

@router.post("/expenses", response_model=ExpenseEnvelope, status_code=status.HTTP_201_CREATED)
async def create_expense(
    expense_data: ExpenseCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(billing_managers)
):
    expense = BillingService.create_expense(db, expense_data, current_user)
    return ExpenseEnvelope(message="Expense recorded successfully", expense=expense)

@router.patch("/expenses/{expense_id}", response_model=ExpenseEnvelope)
async def update_expense(
    expense_id: UUID,
    expense_data: ExpenseUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(billing_managers)
):
    expense = BillingService.update_expense(db, expense_id, expense_data)
    return ExpenseEnvelope(message="Expense updated successfully", expense=expense)

@router.delete("/expenses/{expense_id}", response_model=SuccessResponse)
async def delete_expense(
    expense_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_only)
):
    BillingService.delete_expense(db, expense_id)
    return SuccessResponse(message="Expense deleted successfully")
