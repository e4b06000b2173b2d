# shopapp/admin/service.py

import logging
from datetime import datetime, timedelta
from typing import Optional
from sqlalchemy import func
from sqlalchemy.orm import Session

from . import models
from ..core.config import settings
from ..database.core import utcnow
from ..entities.cart import CartItem
from ..entities.notification import Notification
from ..entities.order import Order, OrderStatus, PURCHASED_STATUSES
from ..entities.payment import Payment, PaymentStatus
from ..entities.product import Product
from ..entities.review import Review
from ..entities.user import User

logger = logging.getLogger(__name__)

PENDING_STATUSES = (OrderStatus.CREATED, OrderStatus.PENDING_PAYMENT)


class AdminService:

    @staticmethod
    def _count(db: Session, column, *criteria) -> int:
        return db.query(func.count(column)).filter(*criteria).scalar() or 0

    @staticmethod
    def _revenue(db: Session, since: Optional[datetime] = None) -> float:
        query = db.query(func.coalesce(func.sum(Order.total_amount), 0.0)).filter(
            Order.status.in_(PURCHASED_STATUSES)
        )
        if since is not None:
            query = query.filter(Order.created_at >= since)
        return round(float(query.scalar() or 0.0), 2)

    @staticmethod
    def get_dashboard_stats(db: Session, now: Optional[datetime] = None) -> models.DashboardStats:
        """
        Aggregate store-wide figures for the admin dashboard.

        "Week" and "month" are the trailing 7 and 30 days; "today" starts at
        midnight UTC.
        """
        now = now or utcnow()
        start_of_today = now.replace(hour=0, minute=0, second=0, microsecond=0)
        start_of_week = now - timedelta(days=7)
        start_of_month = now - timedelta(days=30)
        count = AdminService._count

        # --- Users ---
        total_users = count(db, User.id)
        active_users = db.query(func.count(func.distinct(Order.user_id))).scalar() or 0

        # --- Orders ---
        total_orders = count(db, Order.id)
        paid_orders = count(db, Order.id, Order.status.in_(PURCHASED_STATUSES))
        total_revenue = AdminService._revenue(db)

        # --- Payments ---
        total_payments = count(db, Payment.id)
        successful_payments = count(db, Payment.id, Payment.status == PaymentStatus.SUCCEEDED)
        success_rate = round(successful_payments * 100.0 / total_payments, 2) if total_payments else 0.0

        # --- Reviews ---
        average_rating = db.query(func.avg(Review.rating)).scalar()

        distribution = {status.value: 0 for status in OrderStatus}
        for status, status_count in db.query(Order.status, func.count(Order.id)).group_by(Order.status).all():
            distribution[status.value] = status_count

        stats = models.DashboardStats(
            total_users=total_users,
            active_users=active_users,
            new_users_today=count(db, User.id, User.created_at >= start_of_today),
            new_users_this_week=count(db, User.id, User.created_at >= start_of_week),
            new_users_this_month=count(db, User.id, User.created_at >= start_of_month),
            total_orders=total_orders,
            pending_orders=count(db, Order.id, Order.status.in_(PENDING_STATUSES)),
            completed_orders=count(db, Order.id, Order.status == OrderStatus.DELIVERED),
            cancelled_orders=count(db, Order.id, Order.status == OrderStatus.CANCELLED),
            orders_today=count(db, Order.id, Order.created_at >= start_of_today),
            orders_this_week=count(db, Order.id, Order.created_at >= start_of_week),
            orders_this_month=count(db, Order.id, Order.created_at >= start_of_month),
            total_revenue=total_revenue,
            revenue_today=AdminService._revenue(db, start_of_today),
            revenue_this_week=AdminService._revenue(db, start_of_week),
            revenue_this_month=AdminService._revenue(db, start_of_month),
            average_order_value=round(total_revenue / paid_orders, 2) if paid_orders else 0.0,
            total_products=count(db, Product.id),
            low_stock_products=count(
                db, Product.id, Product.stock > 0, Product.stock < settings.LOW_STOCK_THRESHOLD
            ),
            out_of_stock_products=count(db, Product.id, Product.stock == 0),
            total_payments=total_payments,
            successful_payments=successful_payments,
            failed_payments=count(db, Payment.id, Payment.status == PaymentStatus.FAILED),
            success_rate=success_rate,
            total_reviews=count(db, Review.id),
            average_rating=round(float(average_rating), 2) if average_rating is not None else 0.0,
            reviews_this_month=count(db, Review.id, Review.created_at >= start_of_month),
            order_status_distribution=distribution,
            notifications_today=count(db, Notification.id, Notification.created_at >= start_of_today),
            cart_items_total=int(db.query(func.coalesce(func.sum(CartItem.quantity), 0)).scalar() or 0),
        )
        logger.info("Dashboard statistics computed")
        return stats
