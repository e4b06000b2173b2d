# shopapp/users/service.py

import logging
from sqlalchemy.orm import Session

from . import models
from ..core.exceptions import AuthenticationError, ConflictError, NotFoundError, require_text
from ..entities.user import User
from ..utils.password_utils import ensure_password_policy, verify_password, get_password_hash

logger = logging.getLogger(__name__)


class UserService:

    @staticmethod
    def get_user_by_email(db: Session, email: str) -> User:
        user = db.query(User).filter(User.email == email).first()
        if not user:
            raise NotFoundError("User", email, field="email")
        return user

    @staticmethod
    def update_profile(db: Session, user: User, request: models.UpdateProfileRequest) -> User:
        """Apply the non-blank fields of the request. A new username must not belong to anyone else."""
        try:
            if request.username is not None and request.username.strip():
                username = request.username.strip()
                if username != user.username:
                    taken = db.query(User).filter(User.username == username, User.id != user.id).first()
                    if taken:
                        raise ConflictError("Username already exists", {"field": "username"})
                    user.username = username
            if request.profile_image is not None:
                user.profile_image = request.profile_image.strip() or None
            db.commit()
            db.refresh(user)
        except Exception:
            db.rollback()
            raise
        logger.info(f"Profile updated for user {user.id}")
        return user

    @staticmethod
    def change_password(db: Session, user: User, request: models.PasswordChange) -> None:
        current = require_text(request.current_password, "Current password", "current_password")
        if not verify_password(current, user.password_hash):
            logger.warning(f"Invalid current password provided for user ID: {user.id}")
            raise AuthenticationError("Current password is incorrect")
        new_password = require_text(request.new_password, "New password", "new_password")
        ensure_password_policy(new_password, label="New password", field="new_password")
        try:
            user.password_hash = get_password_hash(new_password)
            db.commit()
        except Exception:
            db.rollback()
            raise
        logger.info(f"Successfully changed password for user ID: {user.id}")
