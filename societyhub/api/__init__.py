# ================================
# API PACKAGE INITIALIZATION (api/__init__.py)
# ================================

"""
API Package

Root package for all API routes
"""

from fastapi import APIRouter

from societyhub.schemas.base import ErrorResponse

from societyhub.api.v1 import users, complaints, amenities, billing, documents, analytics

# Version Info
API_VERSION = "1.0.0"
API_TITLE = "SocietyHub API"
API_DESCRIPTION = """
Residential society management API

## Features
- Resident, committee, staff and admin accounts
- Complaint tracking with staff assignment and comments
- Amenity booking with slot availability
- Maintenance invoices and society expenses
- Document repository with role-based visibility
- Visitor, cab and delivery analytics

## Authentication
- Session token in an HTTP-only cookie, or `Authorization: Bearer <token>`
"""

AUTH_RESPONSES = {
    401: {"model": ErrorResponse, "description": "Authentication required"},
    403: {"model": ErrorResponse, "description": "Insufficient role"},
}

# Base router for the whole API
api_router = APIRouter(prefix="/api")

api_router.include_router(
    users.router,
    prefix="/users",
    tags=["Users"],
    responses=AUTH_RESPONSES
)

api_router.include_router(
    complaints.router,
    prefix="/complaints",
    tags=["Complaints"],
    responses={**AUTH_RESPONSES, 404: {"description": "Complaint not found"}}
)

api_router.include_router(
    amenities.router,
    prefix="/amenities",
    tags=["Amenities & Bookings"],
    responses={**AUTH_RESPONSES, 404: {"description": "Amenity or booking not found"}}
)

api_router.include_router(
    billing.router,
    prefix="/billing",
    tags=["Billing"],
    responses={**AUTH_RESPONSES, 404: {"description": "Invoice or expense not found"}}
)

api_router.include_router(
    documents.router,
    prefix="/documents",
    tags=["Documents"],
    responses={**AUTH_RESPONSES, 404: {"description": "Document not found"}}
)

api_router.include_router(
    analytics.router,
    prefix="/analytics",
    tags=["Analytics"],
    responses=AUTH_RESPONSES
)

__all__ = ["api_router", "API_VERSION", "API_TITLE", "API_DESCRIPTION"]
