from typing import Dict
from pydantic import BaseModel


class DashboardStats(BaseModel):
    # Users
    total_users: int
    active_users: int
    new_users_today: int
    new_users_this_week: int
    new_users_this_month: int

    # Orders
    total_orders: int
    pending_orders: int
    completed_orders: int
    cancelled_orders: int
    orders_today: int
    orders_this_week: int
    orders_this_month: int

    # Sales
    total_revenue: float
    revenue_today: float
    revenue_this_week: float
    revenue_this_month: float
    average_order_value: float

    # Products
    total_products: int
    low_stock_products: int
    out_of_stock_products: int

    # Payments
    total_payments: int
    successful_payments: int
    failed_payments: int
    success_rate: float

    # Reviews
    total_reviews: int
    average_rating: float
    reviews_this_month: int

    order_status_distribution: Dict[str, int]
    notifications_today: int
    cart_items_total: int
