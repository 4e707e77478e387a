# ================================
# ANALYTICS MODELS (models/analytics.py)
# ================================

from sqlalchemy import Column, String, Integer, Numeric, Date, DateTime
from societyhub.models.base import Base

class VisitorLog(Base):
    __tablename__ = "analytics_visitors"

    date = Column(Date, nullable=False, index=True)
    visitor_name = Column(String(100), nullable=True)
    visitor_type = Column(String(50), nullable=True)  # guest, contractor, family...
    entry_time = Column(DateTime(timezone=True), nullable=True)
    exit_time = Column(DateTime(timezone=True), nullable=True)
    host_name = Column(String(100), nullable=True)
    purpose = Column(String(255), nullable=True)

class CabLog(Base):
    __tablename__ = "analytics_cabs"

    date = Column(Date, nullable=False, index=True)
    cab_number = Column(String(30), nullable=True)
    driver_name = Column(String(100), nullable=True)
    passenger_name = Column(String(100), nullable=True)
    trip_type = Column(String(20), nullable=True)  # arrival, departure, local
    time = Column(DateTime(timezone=True), nullable=True)
    destination = Column(String(255), nullable=True)
    fare = Column(Numeric(12, 2), default=0, nullable=False)

class DeliveryLog(Base):
    __tablename__ = "analytics_deliveries"

    date = Column(Date, nullable=False, index=True)
    delivery_company = Column(String(100), nullable=True)
    tracking_number = Column(String(100), nullable=True)
    recipient_name = Column(String(100), nullable=True)
    delivery_time = Column(DateTime(timezone=True), nullable=True)
    package_type = Column(String(50), nullable=True)
    status = Column(String(20), nullable=True)  # delivered, pending, returned

class DailySummary(Base):
    """One rollup row per calendar day"""
    __tablename__ = "analytics_daily_summaries"

    date = Column(Date, unique=True, nullable=False)
    total_visitors = Column(Integer, default=0, nullable=False)
    total_cabs = Column(Integer, default=0, nullable=False)
    total_deliveries = Column(Integer, default=0, nullable=False)
