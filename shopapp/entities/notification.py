# shopapp/entities/notification.py

from sqlalchemy import Column, String, Integer, Boolean, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship

from ..database.core import Base, utcnow


class Notification(Base):
    """
    Inbox entry addressed either to a customer (user_id) or to an admin (admin_id).
    """
    __tablename__ = 'notifications'

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey('users.id'), nullable=True, index=True)
    admin_id = Column(Integer, ForeignKey('admins.id'), nullable=True, index=True)

    title = Column(String(200), nullable=False)
    message = Column(Text, nullable=False)
    is_read = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    user = relationship("User", back_populates="notifications")
    admin = relationship("Admin", back_populates="notifications")
