from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict

from ..entities.user import Role


class UserProfileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    role: Role
    profile_image: Optional[str] = None
    created_at: datetime


class UpdateProfileRequest(BaseModel):
    username: Optional[str] = None
    profile_image: Optional[str] = None


class PasswordChange(BaseModel):
    current_password: Optional[str] = None
    new_password: Optional[str] = None
