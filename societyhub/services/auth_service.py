# ================================
# AUTH SERVICE (services/auth_service.py)
# ================================

from sqlalchemy.orm import Session
from societyhub.models.user import User, UserRole
from societyhub.core.security import verify_password, get_password_hash, create_access_token
from societyhub.core.permissions import invalid_permissions
from societyhub.core.exceptions import AppException, AuthenticationError, ValidationError
from typing import List, Optional, Tuple
import logging

logger = logging.getLogger(__name__)

class AuthService:

    @staticmethod
    def create_user(
        db: Session,
        name: str,
        email: str,
        password: str,
        role: str = UserRole.RESIDENT.value,
        permissions: Optional[List[str]] = None,
        unit: Optional[str] = None,
        phone: Optional[str] = None
    ) -> User:
        """Create an account; duplicate emails are rejected"""
        email = email.strip().lower()

        existing_user = db.query(User).filter(User.email == email).first()
        if existing_user:
            raise AppException("User already exists", 400, "EMAIL_EXISTS")

        permissions = permissions or []
        unknown = invalid_permissions(permissions)
        if unknown:
            raise ValidationError(f"Invalid permissions: {', '.join(unknown)}")

        user = User(
            name=name.strip(),
            email=email,
            password_hash=get_password_hash(password),
            role=role,
            permissions=permissions,
            unit=unit,
            phone=phone,
            is_active=True
        )

        db.add(user)
        db.commit()
        db.refresh(user)

        logger.info(f"User created: {user.email} ({user.role})")
        return user

    @staticmethod
    def authenticate_user(db: Session, email: str, password: str) -> User:
        """Check credentials; wrong email and wrong password look the same to the caller"""
        user = db.query(User).filter(User.email == email.strip().lower()).first()

        if not user or not verify_password(password, user.password_hash):
            logger.warning(f"Failed login attempt for {email}")
            raise AppException("Invalid email or password", 400, "INVALID_CREDENTIALS")

        if not user.is_active:
            raise AuthenticationError("Account is deactivated")

        return user

    @staticmethod
    def issue_token(user: User) -> str:
        return create_access_token(data={"sub": str(user.id), "role": user.role})

    @staticmethod
    def register(db: Session, **user_data) -> Tuple[User, str]:
        """Create an account and a session token for it"""
        user = AuthService.create_user(db, **user_data)
        return user, AuthService.issue_token(user)

    @staticmethod
    def login(db: Session, email: str, password: str) -> Tuple[User, str]:
        user = AuthService.authenticate_user(db, email, password)
        logger.info(f"User logged in: {user.email}")
        return user, AuthService.issue_token(user)
