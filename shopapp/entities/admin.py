# shopapp/entities/admin.py

from sqlalchemy import Column, String, Integer, DateTime
from sqlalchemy.orm import relationship

from ..database.core import Base, utcnow


class Admin(Base):
    """Back-office account, kept apart from customer users."""
    __tablename__ = 'admins'

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(100), unique=True, nullable=False, index=True)
    name = Column(String(100), nullable=True)
    password_hash = Column(String, nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    notifications = relationship("Notification", back_populates="admin", cascade="all")

    def __repr__(self):
        return f"<Admin(email='{self.email}')>"
