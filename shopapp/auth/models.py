from typing import Optional
from pydantic import BaseModel, EmailStr

from ..entities.user import Role


class RegisterUserRequest(BaseModel):
    username: Optional[str] = None
    email: Optional[EmailStr] = None
    password: Optional[str] = None


class RegisterAdminRequest(RegisterUserRequest):
    registration_key: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class ForgotPasswordRequest(BaseModel):
    email: Optional[str] = None


class ResetPasswordRequest(BaseModel):
    email: Optional[str] = None
    reset_token: Optional[str] = None
    new_password: Optional[str] = None


class AuthResponse(BaseModel):
    token: str
    message: str


class Token(BaseModel):
    access_token: str
    token_type: str


class ForgotPasswordResponse(BaseModel):
    message: str
    reset_token: str


class MessageResponse(BaseModel):
    message: str


class TokenData(BaseModel):
    """Claims of a verified access token."""
    principal_id: int
    email: str
    role: Role
    jti: str
    token: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
