# shopapp/auth/controller.py
from typing import Annotated
from fastapi import APIRouter, Depends, Request
from fastapi.security import OAuth2PasswordRequestForm
from starlette import status

from . import models
from . import service
from ..core.infrastructure import limiter
from ..database.core import DbSession

router = APIRouter(prefix='/auth', tags=['auth'])


@router.post("/register", response_model=models.AuthResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit("30/hour")
async def register_user(request: Request, db: DbSession, register_user_request: models.RegisterUserRequest):
    """Register a new customer account."""
    token = service.register_user(db, register_user_request)
    return models.AuthResponse(token=token, message="User registered successfully")


@router.post("/login", response_model=models.AuthResponse)
@limiter.limit("50/hour")
async def login(request: Request, db: DbSession, login_request: models.LoginRequest):
    token = service.login_user(db, login_request.email, login_request.password)
    return models.AuthResponse(token=token, message="User logged in successfully")


@router.post("/token", response_model=models.Token)
@limiter.limit("50/hour")
async def login_for_access_token(
    request: Request,
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
    db: DbSession
):
    """OAuth2 password flow, used by the interactive docs. The username field carries the email."""
    token = service.login_user(db, form_data.username, form_data.password)
    return models.Token(access_token=token, token_type='bearer')


@router.post("/forgot-password", response_model=models.ForgotPasswordResponse)
@limiter.limit("10/hour")
async def forgot_password(request: Request, db: DbSession, forgot_request: models.ForgotPasswordRequest):
    reset_token = service.request_password_reset(db, forgot_request.email)
    return models.ForgotPasswordResponse(
        message="Password reset token generated. In production, this would be sent via email.",
        reset_token=reset_token,
    )


@router.post("/reset-password", response_model=models.MessageResponse)
async def reset_password(db: DbSession, reset_request: models.ResetPasswordRequest):
    service.reset_user_password(db, reset_request)
    return models.MessageResponse(message="Password reset successfully")


@router.post("/admin/register", response_model=models.AuthResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit("10/hour")
async def register_admin(request: Request, db: DbSession, register_request: models.RegisterAdminRequest):
    token = service.register_admin(db, register_request)
    return models.AuthResponse(token=token, message="Admin registered successfully")


@router.post("/admin/login", response_model=models.AuthResponse)
@limiter.limit("50/hour")
async def login_admin(request: Request, db: DbSession, login_request: models.LoginRequest):
    token = service.login_admin(db, login_request.email, login_request.password)
    return models.AuthResponse(token=token, message="Admin logged in successfully")


@router.post("/logout", response_model=models.MessageResponse)
async def logout(principal: service.CurrentPrincipal):
    """Revoke the presented access token."""
    service.revoke_access_token(principal.token)
    return models.MessageResponse(message="Logged out successfully")
