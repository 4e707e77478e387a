# ================================
# BILLING MODELS (models/billing.py)
# ================================

from sqlalchemy import Column, String, Text, Numeric, Date, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from societyhub.models.base import Base
from decimal import Decimal
from datetime import date
import enum

class InvoiceStatus(str, enum.Enum):
    PENDING = "pending"
    PAID = "paid"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"

class PaymentMethod(str, enum.Enum):
    BANK_TRANSFER = "bank_transfer"
    CASH = "cash"
    CHEQUE = "cheque"
    UPI = "upi"
    CARD = "card"
    OTHER = "other"

class ExpenseCategory(str, enum.Enum):
    MAINTENANCE = "Maintenance"
    UTILITIES = "Utilities"
    SECURITY = "Security"
    HOUSEKEEPING = "Housekeeping"
    REPAIRS = "Repairs"
    SALARIES = "Salaries"
    OTHER = "Other"

class ExpenseStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

class Invoice(Base):
    """Maintenance bill issued to a resident"""
    __tablename__ = "invoices"

    invoice_number = Column(String(20), unique=True, nullable=False, index=True)
    user_id = Column(Uuid(as_uuid=True), ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)
    resident_name = Column(String(100), nullable=False)
    resident_email = Column(String(255), nullable=False)
    unit = Column(String(20), nullable=False)

    # Charges
    maintenance_charge = Column(Numeric(12, 2), default=0, nullable=False)
    parking_charge = Column(Numeric(12, 2), default=0, nullable=False)
    water_charge = Column(Numeric(12, 2), default=0, nullable=False)
    common_area_charge = Column(Numeric(12, 2), default=0, nullable=False)
    gst = Column(Numeric(5, 2), default=0, nullable=False)  # percent

    # Totals
    subtotal = Column(Numeric(12, 2), default=0, nullable=False)
    gst_amount = Column(Numeric(12, 2), default=0, nullable=False)
    total_amount = Column(Numeric(12, 2), default=0, nullable=False)

    due_date = Column(Date, nullable=False)
    status = Column(String(20), default=InvoiceStatus.PENDING.value, nullable=False, index=True)
    paid_date = Column(DateTime(timezone=True), nullable=True)
    payment_method = Column(String(20), nullable=True)
    notes = Column(Text, default="", nullable=False)

    created_by_id = Column(Uuid(as_uuid=True), ForeignKey('users.id', ondelete='SET NULL'), nullable=True)

    # Relationships
    user = relationship("User", foreign_keys=[user_id])
    created_by = relationship("User", foreign_keys=[created_by_id])

    def calculate_totals(self):
        """Recompute subtotal, GST amount and total from the charges"""
        subtotal = sum(
            Decimal(str(charge or 0)) for charge in (
                self.maintenance_charge,
                self.parking_charge,
                self.water_charge,
                self.common_area_charge,
            )
        )
        gst_amount = (subtotal * Decimal(str(self.gst or 0)) / Decimal(100)).quantize(Decimal("0.01"))
        self.subtotal = subtotal
        self.gst_amount = gst_amount
        self.total_amount = subtotal + gst_amount

    def refresh_overdue_status(self, today: date = None):
        """Pending invoices past their due date become overdue"""
        today = today or date.today()
        if self.status == InvoiceStatus.PENDING.value and self.due_date and today > self.due_date:
            self.status = InvoiceStatus.OVERDUE.value

    def __repr__(self):
        return f"<Invoice(number='{self.invoice_number}', status='{self.status}')>"

class Expense(Base):
    """Society expenditure record"""
    __tablename__ = "expenses"

    expense_number = Column(String(20), unique=True, nullable=False, index=True)
    category = Column(String(20), nullable=False, index=True)
    description = Column(Text, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    vendor = Column(String(200), nullable=False)
    date = Column(Date, nullable=False)
    payment_method = Column(String(20), nullable=False)
    transaction_id = Column(String(100), default="", nullable=False)
    receipt = Column(String(500), default="", nullable=False)
    notes = Column(Text, default="", nullable=False)
    status = Column(String(20), default=ExpenseStatus.APPROVED.value, nullable=False)

    approved_by_id = Column(Uuid(as_uuid=True), ForeignKey('users.id', ondelete='SET NULL'), nullable=True)
    created_by_id = Column(Uuid(as_uuid=True), ForeignKey('users.id', ondelete='SET NULL'), nullable=True)

    approved_by = relationship("User", foreign_keys=[approved_by_id])
    created_by = relationship("User", foreign_keys=[created_by_id])

    def __repr__(self):
        return f"<Expense(number='{self.expense_number}', amount='{self.amount}')>"
