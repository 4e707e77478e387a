# ================================
# USER ROUTES (api/v1/users.py)
# ================================

from fastapi import APIRouter, Depends, Response, Query, status
from sqlalchemy.orm import Session
from typing import Optional
from uuid import UUID
import logging

from societyhub.config import settings
from societyhub.dependencies import get_db, get_current_user, require_roles, require_role_or_permission
from societyhub.models.user import User, UserRole
from societyhub.schemas.base import MessageResponse
from societyhub.schemas.user import (
    RegisterRequest, AdminCreateUserRequest, LoginRequest, UpdatePermissionsRequest, UserUpdate,
    UserResponse, AuthResponse, UserEnvelope, UserListResponse, ToggleActiveResponse
)
from societyhub.services.auth_service import AuthService
from societyhub.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter()

admin_only = require_roles(UserRole.ADMIN)
member_managers = require_role_or_permission([UserRole.ADMIN], "member_management")

def _set_auth_cookie(response: Response, token: str):
    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=token,
        httponly=True,
        secure=settings.AUTH_COOKIE_SECURE,
        samesite="strict",
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60
    )

# ================================
# SESSION ENDPOINTS
# ================================

@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: RegisterRequest,
    response: Response,
    db: Session = Depends(get_db)
):
    """Create an account and start a session for it"""
    user, token = AuthService.register(
        db,
        name=user_data.name,
        email=user_data.email,
        password=user_data.password,
        role=user_data.role,
        unit=user_data.unit,
        phone=user_data.phone
    )
    _set_auth_cookie(response, token)
    return AuthResponse(message="User registered successfully", user=user, token=token)

@router.post("/login", response_model=AuthResponse)
async def login(
    credentials: LoginRequest,
    response: Response,
    db: Session = Depends(get_db)
):
    user, token = AuthService.login(db, credentials.email, credentials.password)
    _set_auth_cookie(response, token)
    return AuthResponse(message="Login successful", user=user, token=token)

@router.post("/logout", response_model=MessageResponse)
async def logout(response: Response):
    response.delete_cookie(
        key=settings.AUTH_COOKIE_NAME,
        httponly=True,
        secure=settings.AUTH_COOKIE_SECURE,
        samesite="strict"
    )
    return MessageResponse(message="Logged out successfully")

@router.get("/me", response_model=UserEnvelope)
async def get_me(current_user: User = Depends(get_current_user)):
    return UserEnvelope(user=current_user)

# ================================
# ADMIN ENDPOINTS
# ================================

@router.patch("/permissions", response_model=UserEnvelope)
async def update_permissions(
    payload: UpdatePermissionsRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_only)
):
    """Replace a user's granular permissions, looked up by email"""
    user = UserService.update_permissions_by_email(db, payload.email, payload.permissions)
    return UserEnvelope(message="Permissions updated", user=user)

@router.post("", response_model=UserEnvelope, status_code=status.HTTP_201_CREATED)
async def create_user(
    user_data: AdminCreateUserRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_only)
):
    """Admin-created account; the admin's own session is left untouched"""
    user = AuthService.create_user(
        db,
        name=user_data.name,
        email=user_data.email,
        password=user_data.password,
        role=user_data.role,
        permissions=user_data.permissions,
        unit=user_data.unit,
        phone=user_data.phone
    )
    logger.info(f"Admin {current_user.email} created user {user.email}")
    return UserEnvelope(message="User created successfully", user=user)

@router.get("", response_model=UserListResponse)
async def list_users(
    role: Optional[str] = Query(None, description="Filter by role"),
    db: Session = Depends(get_db),
    current_user: User = Depends(member_managers)
):
    users = UserService.list_users(db, role=role)
    return UserListResponse(count=len(users), users=users)

@router.get("/{user_id}", response_model=UserEnvelope)
async def get_user(
    user_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(member_managers)
):
    return UserEnvelope(user=UserService.get_user_by_id(db, user_id))

@router.patch("/{user_id}", response_model=UserEnvelope)
async def update_user(
    user_id: UUID,
    update_data: UserUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_only)
):
    user = UserService.update_user(db, user_id, update_data)
    return UserEnvelope(message="User updated successfully", user=user)

@router.patch("/{user_id}/toggle-active", response_model=ToggleActiveResponse)
async def toggle_active(
    user_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_only)
):
    user = UserService.toggle_active(db, user_id, current_user)
    return ToggleActiveResponse(
        message="User enabled" if user.is_active else "User disabled",
        user_id=user.id,
        is_active=user.is_active
    )

@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_only)
):
    UserService.delete_user(db, user_id, current_user)
    return MessageResponse(message="User deleted successfully")
