# ================================
# BILLING SERVICE (services/billing_service.py)
# ================================

from sqlalchemy import func
from sqlalchemy.orm import Session
from societyhub.models.billing import Invoice, Expense, InvoiceStatus, ExpenseStatus
from societyhub.models.user import User, UserRole
from societyhub.schemas.billing import InvoiceCreate, InvoiceUpdate, ExpenseCreate, ExpenseUpdate
from societyhub.core.exceptions import NotFoundError, AuthorizationError, ValidationError
from datetime import date, datetime, time, timezone
from decimal import Decimal
from typing import List, Optional, Dict, Any
import re
import uuid
import logging

logger = logging.getLogger(__name__)

BILLING_MANAGER_ROLES = [UserRole.ADMIN.value, UserRole.COMMITTEE_MEMBER.value]

CHARGE_FIELDS = ("maintenance_charge", "parking_charge", "water_charge", "common_area_charge", "gst")

EXPENSE_UPDATABLE_FIELDS = (
    "category", "description", "amount", "vendor", "date",
    "payment_method", "transaction_id", "receipt", "notes", "status",
)

def next_sequence_number(existing: List[str], prefix: str, width: int = 5) -> str:
    """One more than the highest numeric suffix in use, e.g. INV-00001"""
    highest = 0
    pattern = re.compile(rf"^{re.escape(prefix)}-(\d+)$")
    for number in existing:
        match = pattern.match(number or "")
        if match:
            highest = max(highest, int(match.group(1)))
    return f"{prefix}-{highest + 1:0{width}d}"

def _day_start(value: date) -> datetime:
    return datetime.combine(value, time.min, tzinfo=timezone.utc)

def _day_end(value: date) -> datetime:
    return datetime.combine(value, time.max, tzinfo=timezone.utc)

class BillingService:

    # ================================
    # INVOICES
    # ================================

    @staticmethod
    def _next_invoice_number(db: Session) -> str:
        numbers = [row[0] for row in db.query(Invoice.invoice_number).all()]
        return next_sequence_number(numbers, "INV")

    @staticmethod
    def _save_invoice(db: Session, invoice: Invoice) -> Invoice:
        invoice.refresh_overdue_status()
        db.commit()
        db.refresh(invoice)
        return invoice

    @staticmethod
    def get_invoice(db: Session, invoice_id: uuid.UUID) -> Invoice:
        invoice = db.query(Invoice).filter(Invoice.id == invoice_id).first()
        if not invoice:
            raise NotFoundError("Invoice not found")
        return invoice

    @staticmethod
    def get_accessible_invoice(db: Session, invoice_id: uuid.UUID, user: User) -> Invoice:
        invoice = BillingService.get_invoice(db, invoice_id)
        if user.role not in BILLING_MANAGER_ROLES and invoice.user_id != user.id:
            raise AuthorizationError("You do not have access to this invoice")
        return invoice

    @staticmethod
    def list_invoices(
        db: Session,
        user: User,
        status: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None
    ) -> List[Invoice]:
        query = db.query(Invoice)
        if user.role not in BILLING_MANAGER_ROLES:
            query = query.filter(Invoice.user_id == user.id)
        if status:
            query = query.filter(Invoice.status == status)
        if start_date:
            query = query.filter(Invoice.due_date >= start_date)
        if end_date:
            query = query.filter(Invoice.due_date <= end_date)
        return query.order_by(Invoice.created_at.desc()).all()

    @staticmethod
    def create_invoice(db: Session, data: InvoiceCreate, created_by: User) -> Invoice:
        resident = db.query(User).filter(User.id == data.user_id).first()
        if not resident:
            raise NotFoundError("User not found")

        invoice = Invoice(
            invoice_number=BillingService._next_invoice_number(db),
            user_id=resident.id,
            resident_name=resident.name,
            resident_email=resident.email,
            unit=data.unit,
            due_date=data.due_date,
            notes=data.notes,
            status=InvoiceStatus.PENDING.value,
            created_by_id=created_by.id,
            **{field: Decimal(str(getattr(data, field))) for field in CHARGE_FIELDS}
        )
        invoice.calculate_totals()

        db.add(invoice)
        BillingService._save_invoice(db, invoice)

        logger.info(f"Invoice {invoice.invoice_number} created for {resident.email}: {invoice.total_amount}")
        return invoice

    @staticmethod
    def update_invoice(db: Session, invoice_id: uuid.UUID, data: InvoiceUpdate) -> Invoice:
        invoice = BillingService.get_invoice(db, invoice_id)

        changes = data.model_dump(exclude_unset=True)
        for field, value in changes.items():
            if value is None:
                continue
            if field in CHARGE_FIELDS:
                value = Decimal(str(value))
            setattr(invoice, field, value)

        if any(field in changes for field in CHARGE_FIELDS):
            invoice.calculate_totals()

        BillingService._save_invoice(db, invoice)
        logger.info(f"Invoice {invoice.invoice_number} updated fields={list(changes)}")
        return invoice

    @staticmethod
    def mark_paid(db: Session, invoice_id: uuid.UUID, payment_method: str = "other") -> Invoice:
        invoice = BillingService.get_invoice(db, invoice_id)

        if invoice.status == InvoiceStatus.PAID.value:
            raise ValidationError("Invoice is already paid")

        invoice.status = InvoiceStatus.PAID.value
        invoice.paid_date = datetime.now(timezone.utc)
        invoice.payment_method = payment_method or "other"

        BillingService._save_invoice(db, invoice)
        logger.info(f"Invoice {invoice.invoice_number} paid via {invoice.payment_method}")
        return invoice

    @staticmethod
    def delete_invoice(db: Session, invoice_id: uuid.UUID) -> None:
        invoice = BillingService.get_invoice(db, invoice_id)
        db.delete(invoice)
        db.commit()
        logger.info(f"Invoice {invoice.invoice_number} deleted")

    @staticmethod
    def get_stats(db: Session, start_date: Optional[date] = None, end_date: Optional[date] = None) -> Dict[str, Any]:
        paid_query = db.query(Invoice).filter(Invoice.status == InvoiceStatus.PAID.value)
        if start_date:
            paid_query = paid_query.filter(Invoice.paid_date >= _day_start(start_date))
        if end_date:
            paid_query = paid_query.filter(Invoice.paid_date <= _day_end(end_date))
        paid_invoices = paid_query.all()

        pending_invoices = db.query(Invoice).filter(
            Invoice.status.in_([InvoiceStatus.PENDING.value, InvoiceStatus.OVERDUE.value])
        ).all()

        expense_query = db.query(Expense).filter(Expense.status == ExpenseStatus.APPROVED.value)
        if start_date:
            expense_query = expense_query.filter(Expense.date >= start_date)
        if end_date:
            expense_query = expense_query.filter(Expense.date <= end_date)
        expenses = expense_query.all()

        total_revenue = sum((Decimal(str(inv.total_amount)) for inv in paid_invoices), Decimal(0))
        total_pending = sum((Decimal(str(inv.total_amount)) for inv in pending_invoices), Decimal(0))
        total_expenses = sum((Decimal(str(exp.amount)) for exp in expenses), Decimal(0))

        total_due = total_revenue + total_pending
        collection_rate = round(float(total_revenue / total_due * 100), 2) if total_due > 0 else 0.0

        return {
            "total_revenue": float(total_revenue),
            "total_pending": float(total_pending),
            "total_expenses": float(total_expenses),
            "net_balance": float(total_revenue - total_expenses),
            "collection_rate": collection_rate,
            "paid_invoice_count": len(paid_invoices),
            "pending_invoice_count": len(pending_invoices),
            "expense_count": len(expenses),
        }

    # ================================
    # EXPENSES
    # ================================

    @staticmethod
    def _next_expense_number(db: Session) -> str:
        numbers = [row[0] for row in db.query(Expense.expense_number).all()]
        return next_sequence_number(numbers, "EXP")

    @staticmethod
    def get_expense(db: Session, expense_id: uuid.UUID) -> Expense:
        expense = db.query(Expense).filter(Expense.id == expense_id).first()
        if not expense:
            raise NotFoundError("Expense not found")
        return expense

    @staticmethod
    def list_expenses(
        db: Session,
        category: Optional[str] = None,
        status: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None
    ) -> List[Expense]:
        query = db.query(Expense)
        if category:
            query = query.filter(Expense.category == category)
        if status:
            query = query.filter(Expense.status == status)
        if start_date:
            query = query.filter(Expense.date >= start_date)
        if end_date:
            query = query.filter(Expense.date <= end_date)
        return query.order_by(Expense.date.desc(), Expense.created_at.desc()).all()

    @staticmethod
    def create_expense(db: Session, data: ExpenseCreate, created_by: User) -> Expense:
        expense = Expense(
            expense_number=BillingService._next_expense_number(db),
            category=data.category,
            description=data.description,
            amount=Decimal(str(data.amount)),
            vendor=data.vendor,
            date=data.date,
            payment_method=data.payment_method,
            transaction_id=data.transaction_id,
            receipt=data.receipt,
            notes=data.notes,
            status=ExpenseStatus.APPROVED.value,
            approved_by_id=created_by.id,
            created_by_id=created_by.id
        )

        db.add(expense)
        db.commit()
        db.refresh(expense)

        logger.info(f"Expense {expense.expense_number} recorded: {expense.amount} to {expense.vendor}")
        return expense

    @staticmethod
    def update_expense(db: Session, expense_id: uuid.UUID, data: ExpenseUpdate) -> Expense:
        expense = BillingService.get_expense(db, expense_id)

        changes = data.model_dump(exclude_unset=True)
        for field, value in changes.items():
            if field not in EXPENSE_UPDATABLE_FIELDS or value is None:
                continue
            if field == "amount":
                value = Decimal(str(value))
            setattr(expense, field, value)

        db.commit()
        db.refresh(expense)

        logger.info(f"Expense {expense.expense_number} updated fields={list(changes)}")
        return expense

    @staticmethod
    def delete_expense(db: Session, expense_id: uuid.UUID) -> None:
        expense = BillingService.get_expense(db, expense_id)
        db.delete(expense)
        db.commit()
        logger.info(f"Expense {expense.expense_number} deleted")
