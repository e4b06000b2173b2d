# shopapp/auth/service.py

from datetime import timedelta, datetime, timezone
from typing import Annotated, Optional
from uuid import uuid4
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
import jwt
from jwt import PyJWTError

from . import models
from ..core.config import settings
from ..core.exceptions import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    require_text,
)
from ..core.infrastructure import denylist_service
from ..database.core import DbSession
from ..entities.admin import Admin
from ..entities.user import User, Role
from ..logging import logger
from ..utils.password_utils import ensure_password_policy, verify_password, get_password_hash

# --- Configuration ---
SECRET_KEY = settings.ENCODING_SECRET_KEY
ALGORITHM = settings.ENCODING_ALGORITHM
ACCESS_TOKEN_EXPIRE_MINUTES = settings.ACCESS_TOKEN_EXPIRE_MINUTES
PASSWORD_RESET_TOKEN_EXPIRE_MINUTES = settings.PASSWORD_RESET_TOKEN_EXPIRE_MINUTES

ACCESS_SCOPE = 'access_token'
PASSWORD_RESET_SCOPE = 'password_reset'

oauth2_bearer = OAuth2PasswordBearer(tokenUrl='/api/auth/token')


# --- Token handling ---

def create_access_token(email: str, principal_id: int, role: Role, expires_delta: Optional[timedelta] = None) -> str:
    """Creates a new JWT access token with a unique ID (jti)."""
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    encode = {
        'sub': email,
        'id': principal_id,
        'role': role.value,
        'exp': expire,
        'scope': ACCESS_SCOPE,
        'jti': str(uuid4()),
    }
    return jwt.encode(encode, SECRET_KEY, algorithm=ALGORITHM)


def create_password_reset_token(email: str) -> str:
    """Creates a new, short-lived JWT for password reset."""
    expires = datetime.now(timezone.utc) + timedelta(minutes=PASSWORD_RESET_TOKEN_EXPIRE_MINUTES)
    encode = {'sub': email, 'exp': expires, 'scope': PASSWORD_RESET_SCOPE, 'jti': str(uuid4())}
    return jwt.encode(encode, SECRET_KEY, algorithm=ALGORITHM)


def _decode(token: str, scope: str, error_message: str) -> dict:
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except PyJWTError as e:
        logger.warning(f"Token verification failed: {str(e)}")
        raise AuthenticationError(error_message)
    if payload.get('scope') != scope:
        raise AuthenticationError(message="Invalid token scope")
    jti = payload.get('jti')
    if not jti:
        raise AuthenticationError(message="Token is missing JTI.")
    if denylist_service.is_token_denylisted(jti):
        raise AuthenticationError(message="Token has been revoked.")
    return payload


def _revoke(payload: dict) -> None:
    """Denylist a decoded token for the rest of its lifetime."""
    expires_at = datetime.fromtimestamp(payload['exp'], tz=timezone.utc)
    remaining = expires_at - datetime.now(timezone.utc)
    if remaining.total_seconds() > 0:
        denylist_service.add_token_to_denylist(payload['jti'], remaining)


def verify_token(token: str) -> models.TokenData:
    """Decodes and verifies an access token, and checks if it's denylisted."""
    payload = _decode(token, ACCESS_SCOPE, "Could not validate credentials")
    principal_id = payload.get('id')
    role = payload.get('role')
    if principal_id is None or role not in Role.__members__:
        raise AuthenticationError(message="Token is missing identity claims.")
    return models.TokenData(
        principal_id=principal_id,
        email=payload.get('sub', ''),
        role=Role(role),
        jti=payload['jti'],
        token=token,
    )


def revoke_access_token(token: str) -> None:
    payload = _decode(token, ACCESS_SCOPE, "Could not validate credentials")
    _revoke(payload)
    logger.info(f"Access token revoked for {payload.get('sub')}")


# --- Dependencies ---

def get_current_principal(token: Annotated[str, Depends(oauth2_bearer)]) -> models.TokenData:
    """FastAPI dependency for any authenticated caller, user or admin."""
    return verify_token(token)


CurrentPrincipal = Annotated[models.TokenData, Depends(get_current_principal)]


def get_current_user(principal: CurrentPrincipal, db: DbSession) -> User:
    if principal.role != Role.USER:
        raise PermissionDeniedError("This endpoint is available to customers only")
    user = db.get(User, principal.principal_id)
    if not user:
        raise AuthenticationError(message="User account no longer exists")
    return user


def get_current_admin(principal: CurrentPrincipal, db: DbSession) -> Admin:
    if principal.role != Role.ADMIN:
        raise PermissionDeniedError("Admin access required")
    admin = db.get(Admin, principal.principal_id)
    if not admin:
        raise AuthenticationError(message="Admin account no longer exists")
    return admin


CurrentUser = Annotated[User, Depends(get_current_user)]
CurrentAdmin = Annotated[Admin, Depends(get_current_admin)]


# --- Customer accounts ---

def authenticate_user(email: str, password: str, db: Session) -> Optional[User]:
    """Authenticates a user with email and password."""
    user = db.query(User).filter(User.email == email).first()
    if not user or not verify_password(password, user.password_hash):
        return None
    return user


def register_user(db: Session, register_user_request: models.RegisterUserRequest) -> str:
    """Creates the account and returns an access token for it."""
    username = require_text(register_user_request.username, "Username", "username").strip()
    email = require_text(register_user_request.email, "Email", "email").strip()
    password = require_text(register_user_request.password, "Password", "password")
    ensure_password_policy(password)

    if db.query(User).filter(User.email == email).first():
        logger.warning(f"Registration failed for {email}: Email already registered.")
        raise ConflictError("Email already exists", {"field": "email"})
    if db.query(User).filter(User.username == username).first():
        logger.warning(f"Registration failed for {email}: Username taken.")
        raise ConflictError("Username already exists", {"field": "username"})

    user = User(
        username=username,
        email=email,
        password_hash=get_password_hash(password),
        role=Role.USER,
    )
    try:
        db.add(user)
        db.commit()
        db.refresh(user)
    except Exception:
        db.rollback()
        raise
    logger.info(f"Registered user {email} (ID: {user.id})")
    return create_access_token(user.email, user.id, Role.USER)


def login_user(db: Session, email: Optional[str], password: Optional[str]) -> str:
    require_text(email, "Email", "email")
    require_text(password, "Password", "password")
    user = authenticate_user(email.strip(), password, db)
    if not user:
        logger.warning(f"Failed login attempt for {email}")
        raise AuthenticationError("Incorrect email or password")
    return create_access_token(user.email, user.id, Role.USER)


def request_password_reset(db: Session, email: Optional[str]) -> str:
    """Issues a reset token. There is no mail transport, so the token is handed back to the caller."""
    email = require_text(email, "Email", "email").strip()
    user = db.query(User).filter(User.email == email).first()
    if not user:
        raise NotFoundError("User", email, field="email")
    logger.info(f"Password reset token issued for {email}")
    return create_password_reset_token(user.email)


def reset_user_password(db: Session, request: models.ResetPasswordRequest) -> None:
    """Verifies a password reset token and updates the user's password. The token is single-use."""
    email = require_text(request.email, "Email", "email").strip()
    token = require_text(request.reset_token, "Reset token", "reset_token")
    payload = _decode(token, PASSWORD_RESET_SCOPE, "Invalid or expired reset token")
    if payload.get('sub') != email:
        raise AuthenticationError("Invalid or expired reset token")

    user = db.query(User).filter(User.email == email).first()
    if not user:
        raise NotFoundError("User", message="User not found")

    new_password = require_text(request.new_password, "New password", "new_password")
    ensure_password_policy(new_password)

    try:
        user.password_hash = get_password_hash(new_password)
        db.commit()
    except Exception:
        db.rollback()
        raise
    _revoke(payload)
    logger.info(f"Password reset completed for {email}")


# --- Admin accounts ---

def register_admin(db: Session, request: models.RegisterAdminRequest) -> str:
    if settings.ADMIN_REGISTRATION_KEY and request.registration_key != settings.ADMIN_REGISTRATION_KEY:
        logger.warning(f"Admin registration rejected for {request.email}: bad registration key")
        raise PermissionDeniedError("Invalid admin registration key")

    email = require_text(request.email, "Email", "email").strip()
    password = require_text(request.password, "Password", "password")
    ensure_password_policy(password)

    if db.query(Admin).filter(Admin.email == email).first():
        raise ConflictError("Admin with this email already exists", {"field": "email"})

    admin = Admin(
        email=email,
        name=(request.username or "").strip() or None,
        password_hash=get_password_hash(password),
    )
    try:
        db.add(admin)
        db.commit()
        db.refresh(admin)
    except Exception:
        db.rollback()
        raise
    logger.info(f"Registered admin {email} (ID: {admin.id})")
    return create_access_token(admin.email, admin.id, Role.ADMIN)


def login_admin(db: Session, email: Optional[str], password: Optional[str]) -> str:
    require_text(email, "Email", "email")
    require_text(password, "Password", "password")
    admin = db.query(Admin).filter(Admin.email == email.strip()).first()
    if not admin or not verify_password(password, admin.password_hash):
        logger.warning(f"Failed admin login attempt for {email}")
        raise AuthenticationError("Incorrect email or password")
    return create_access_token(admin.email, admin.id, Role.ADMIN)
