# ================================
# DEPENDENCIES (dependencies.py)
# ================================

from fastapi import Depends, Query, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from societyhub.config import settings
from societyhub.models.user import User, UserRole
from societyhub.core.security import verify_token
from societyhub.core.exceptions import AuthenticationError, AuthorizationError
from typing import Optional, Sequence
import uuid

security = HTTPBearer(auto_error=False)

# ================================
# BASIC DEPENDENCIES
# ================================

def get_db(request: Request) -> Session:
    """Database session opened by DatabaseSessionMiddleware"""
    return request.state.db

# ================================
# USER AUTHENTICATION DEPENDENCIES
# ================================

def get_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> Optional[str]:
    """Session token from the auth cookie, falling back to the bearer header"""
    token = request.cookies.get(settings.AUTH_COOKIE_NAME)
    if token:
        return token
    if credentials and credentials.credentials:
        return credentials.credentials
    return None

async def get_current_user(
    token: Optional[str] = Depends(get_token),
    db: Session = Depends(get_db)
) -> User:
    """Dependency for the current user"""
    if not token:
        raise AuthenticationError("Authentication required")

    payload = verify_token(token)
    if not payload:
        raise AuthenticationError("Invalid or expired token")

    try:
        user_id = uuid.UUID(str(payload.get("sub")))
    except (TypeError, ValueError):
        raise AuthenticationError("Invalid or expired token")

    user = db.query(User).filter(User.id == user_id).first()
    if not user or not user.is_active:
        raise AuthenticationError("User not active or not found")

    return user

# ================================
# ROLE / PERMISSION DEPENDENCIES
# ================================

def require_roles(*roles: str):
    """Factory for role-based dependencies"""
    allowed = [r.value if isinstance(r, UserRole) else r for r in roles]

    def role_dependency(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in allowed:
            raise AuthorizationError("Forbidden: insufficient role")
        return current_user

    return role_dependency

def require_role_or_permission(roles: Sequence[str], permission: str):
    """Passes for any of the roles, or for a user holding the granular permission"""
    allowed = [r.value if isinstance(r, UserRole) else r for r in roles]

    def role_or_permission_dependency(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role in allowed or current_user.has_permission(permission):
            return current_user
        raise AuthorizationError("Forbidden: insufficient role")

    return role_or_permission_dependency

# ================================
# PAGINATION DEPENDENCIES
# ================================

def get_pagination_params(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100)
) -> tuple[int, int]:
    """Dependency for pagination parameters"""
    return page, limit
