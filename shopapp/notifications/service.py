# shopapp/notifications/service.py

import logging
from typing import List, Optional
from sqlalchemy.orm import Session

from ..auth.models import TokenData
from ..core.exceptions import NotFoundError, PermissionDeniedError
from ..entities.admin import Admin
from ..entities.notification import Notification
from ..entities.user import User

logger = logging.getLogger(__name__)


class NotificationService:
    """
    Inbox management for users and admins.

    The create/notify helpers only stage rows on the session; the calling
    service commits them together with its own changes.
    """

    @staticmethod
    def create_for_user(db: Session, user: User, title: str, message: str) -> Notification:
        notification = Notification(user_id=user.id, title=title, message=message, is_read=False)
        db.add(notification)
        return notification

    @staticmethod
    def create_for_email(db: Session, email: str, title: str, message: str) -> Notification:
        user = db.query(User).filter(User.email == email).first()
        if not user:
            raise NotFoundError("User", email, field="email")
        return NotificationService.create_for_user(db, user, title, message)

    @staticmethod
    def notify_admins_about_new_order(db: Session, order_id: int, user_email: str, total_amount: float) -> List[Notification]:
        title = "New Order Received"
        message = f"New order #{order_id} from {user_email}. Total: ${total_amount:.2f}"
        notifications = []
        for admin in db.query(Admin).all():
            notification = Notification(admin_id=admin.id, title=title, message=message, is_read=False)
            db.add(notification)
            notifications.append(notification)
        logger.info(f"Queued new-order notification for {len(notifications)} admin(s), order #{order_id}")
        return notifications

    @staticmethod
    def notify_user_about_order_status(
        db: Session, user: User, order_id: int, status: str, custom_message: Optional[str] = None
    ) -> Notification:
        message = custom_message.strip() if custom_message and custom_message.strip() else (
            f"Your order #{order_id} status has been updated to: {status}"
        )
        return NotificationService.create_for_user(db, user, "Order Status Updated", message)

    # --- Inbox queries, scoped to the calling principal ---

    @staticmethod
    def _inbox(db: Session, principal: TokenData):
        query = db.query(Notification)
        if principal.is_admin:
            return query.filter(Notification.admin_id == principal.principal_id)
        return query.filter(Notification.user_id == principal.principal_id)

    @staticmethod
    def _owned(db: Session, principal: TokenData, notification_id: int, action: str) -> Notification:
        notification = db.get(Notification, notification_id)
        if not notification:
            raise NotFoundError("Notification", notification_id)
        owner_id = notification.admin_id if principal.is_admin else notification.user_id
        if owner_id != principal.principal_id:
            raise PermissionDeniedError(f"You don't have permission to {action} this notification")
        return notification

    @staticmethod
    def list_notifications(db: Session, principal: TokenData) -> List[Notification]:
        return (
            NotificationService._inbox(db, principal)
            .order_by(Notification.created_at.desc(), Notification.id.desc())
            .all()
        )

    @staticmethod
    def list_unread(db: Session, principal: TokenData) -> List[Notification]:
        return (
            NotificationService._inbox(db, principal)
            .filter(Notification.is_read.is_(False))
            .order_by(Notification.created_at.desc(), Notification.id.desc())
            .all()
        )

    @staticmethod
    def mark_as_read(db: Session, principal: TokenData, notification_id: int) -> None:
        notification = NotificationService._owned(db, principal, notification_id, "access")
        notification.is_read = True
        db.commit()

    @staticmethod
    def mark_all_as_read(db: Session, principal: TokenData) -> int:
        unread = NotificationService.list_unread(db, principal)
        for notification in unread:
            notification.is_read = True
        db.commit()
        return len(unread)

    @staticmethod
    def delete_notification(db: Session, principal: TokenData, notification_id: int) -> None:
        notification = NotificationService._owned(db, principal, notification_id, "delete")
        db.delete(notification)
        db.commit()

    @staticmethod
    def unread_count(db: Session, principal: TokenData) -> int:
        return NotificationService._inbox(db, principal).filter(Notification.is_read.is_(False)).count()
