# shopapp/notifications/controller.py
from typing import List
from fastapi import APIRouter

from . import models
from .service import NotificationService
from ..auth.models import MessageResponse
from ..auth.service import CurrentPrincipal
from ..database.core import DbSession

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("/", response_model=List[models.NotificationResponse])
async def get_notifications(principal: CurrentPrincipal, db: DbSession):
    return NotificationService.list_notifications(db, principal)


@router.get("/unread", response_model=List[models.NotificationResponse])
async def get_unread_notifications(principal: CurrentPrincipal, db: DbSession):
    return NotificationService.list_unread(db, principal)


@router.put("/read-all", response_model=MessageResponse)
async def mark_all_as_read(principal: CurrentPrincipal, db: DbSession):
    NotificationService.mark_all_as_read(db, principal)
    return MessageResponse(message="All notifications marked as read")


@router.get("/count", response_model=models.NotificationCount)
async def get_unread_count(principal: CurrentPrincipal, db: DbSession):
    return models.NotificationCount(count=NotificationService.unread_count(db, principal))


@router.put("/{notification_id}/read", response_model=MessageResponse)
async def mark_as_read(notification_id: int, principal: CurrentPrincipal, db: DbSession):
    NotificationService.mark_as_read(db, principal, notification_id)
    return MessageResponse(message="Notification marked as read")


@router.delete("/{notification_id}", response_model=MessageResponse)
async def delete_notification(notification_id: int, principal: CurrentPrincipal, db: DbSession):
    NotificationService.delete_notification(db, principal, notification_id)
    return MessageResponse(message="Notification deleted successfully")
