# ================================
# USER SERVICE (services/user_service.py)
# ================================

from sqlalchemy.orm import Session
from societyhub.models.user import User
from societyhub.schemas.user import UserUpdate
from societyhub.core.permissions import invalid_permissions, is_valid_role
from societyhub.core.exceptions import AppException, NotFoundError, ValidationError
from typing import List, Optional
import uuid
import logging

logger = logging.getLogger(__name__)

class UserService:
    """Admin-side user management"""

    @staticmethod
    def get_user_by_id(db: Session, user_id: uuid.UUID) -> User:
        user = db.query(User).filter(User.id == user_id).first()
        if not user:
            raise NotFoundError("User not found")
        return user

    @staticmethod
    def list_users(db: Session, role: Optional[str] = None) -> List[User]:
        query = db.query(User)
        if role:
            if not is_valid_role(role):
                raise ValidationError(f"Invalid role: {role}")
            query = query.filter(User.role == role)
        return query.order_by(User.created_at.desc()).all()

    @staticmethod
    def update_user(db: Session, user_id: uuid.UUID, update_data: UserUpdate) -> User:
        user = UserService.get_user_by_id(db, user_id)

        changes = update_data.model_dump(exclude_unset=True)
        if changes.get("permissions") is not None:
            unknown = invalid_permissions(changes["permissions"])
            if unknown:
                raise ValidationError(f"Invalid permissions: {', '.join(unknown)}")

        for field, value in changes.items():
            if value is None and field in ("name", "role", "permissions"):
                continue
            setattr(user, field, value)

        db.commit()
        db.refresh(user)

        logger.info(f"User updated: {user.email} fields={list(changes)}")
        return user

    @staticmethod
    def update_permissions_by_email(db: Session, email: str, permissions: List[str]) -> User:
        user = db.query(User).filter(User.email == email.strip().lower()).first()
        if not user:
            raise NotFoundError("User not found")

        unknown = invalid_permissions(permissions)
        if unknown:
            raise ValidationError(f"Invalid permissions: {', '.join(unknown)}")

        user.permissions = list(permissions)
        db.commit()
        db.refresh(user)

        logger.info(f"Permissions for {user.email} set to {user.permissions}")
        return user

    @staticmethod
    def toggle_active(db: Session, user_id: uuid.UUID, current_user: User) -> User:
        user = UserService.get_user_by_id(db, user_id)

        if user.id == current_user.id and user.is_active:
            raise AppException("You cannot deactivate your own account", 400, "SELF_DEACTIVATE_FORBIDDEN")

        user.is_active = not user.is_active
        db.commit()
        db.refresh(user)

        logger.info(f"User {user.email} {'enabled' if user.is_active else 'disabled'}")
        return user

    @staticmethod
    def delete_user(db: Session, user_id: uuid.UUID, current_user: User) -> None:
        user = UserService.get_user_by_id(db, user_id)

        if user.id == current_user.id:
            raise AppException("Cannot delete yourself", 400, "SELF_DELETE_FORBIDDEN")

        db.delete(user)
        db.commit()

        logger.info(f"User deleted: {user.email}")
