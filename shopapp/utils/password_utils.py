# shopapp/utils/password_utils.py

from passlib.context import CryptContext
import logging

from ..core.config import settings
from ..core.exceptions import ValidationFailedError

logger = logging.getLogger(__name__)

# Create the context once and reuse it
bcrypt_context = CryptContext(schemes=['bcrypt'], deprecated='auto')


def is_password_long_enough(password: str) -> bool:
    return password is not None and len(password) >= settings.MIN_PASSWORD_LENGTH


def ensure_password_policy(password: str, label: str = "Password", field: str = "password") -> None:
    """
    Raises a validation error when the password is shorter than the minimum length.
    """
    if not is_password_long_enough(password):
        raise ValidationFailedError(
            f"{label} must be at least {settings.MIN_PASSWORD_LENGTH} characters",
            field=field,
        )


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verifies a plain-text password against a hashed password.
    """
    return bcrypt_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """
    Hashes a plain-text password.
    """
    try:
        return bcrypt_context.hash(password)
    except Exception:
        logger.exception("Error occurred while hashing password.")
        raise
