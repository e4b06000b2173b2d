# shopapp/users/controller.py
from fastapi import APIRouter

from . import models
from .service import UserService
from ..auth.models import MessageResponse
from ..auth.service import CurrentUser
from ..database.core import DbSession

router = APIRouter(prefix="/user", tags=["user"])


@router.get("/profile", response_model=models.UserProfileResponse)
async def get_profile(current_user: CurrentUser):
    return current_user


@router.get("/profile/{email}", response_model=models.UserProfileResponse)
async def get_profile_by_email(email: str, current_user: CurrentUser, db: DbSession):
    return UserService.get_user_by_email(db, email)


@router.put("/profile", response_model=models.UserProfileResponse)
async def update_profile(request: models.UpdateProfileRequest, current_user: CurrentUser, db: DbSession):
    return UserService.update_profile(db, current_user, request)


@router.post("/change-password", response_model=MessageResponse)
async def change_password(password_change: models.PasswordChange, current_user: CurrentUser, db: DbSession):
    UserService.change_password(db, current_user, password_change)
    return MessageResponse(message="Password changed successfully")
