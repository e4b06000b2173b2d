from datetime import timedelta

from shopapp.admin.service import AdminService
from shopapp.database.core import utcnow
from shopapp.entities import CartItem, Cart, Order, OrderStatus, Payment, PaymentStatus, Review
from conftest import make_order, make_product


def test_dashboard_requires_admin(client, auth_headers):
    assert client.get("/api/admin/dashboard/stats").status_code == 401
    assert client.get("/api/admin/dashboard/stats", headers=auth_headers).status_code == 403


def test_empty_dashboard(client, admin_headers):
    body = client.get("/api/admin/dashboard/stats", headers=admin_headers).json()
    assert body["total_users"] == 0
    assert body["average_order_value"] == 0.0
    assert body["success_rate"] == 0.0
    assert body["order_status_distribution"] == {
        "CREATED": 0, "PENDING_PAYMENT": 0, "PAID": 0, "SHIPPED": 0, "DELIVERED": 0, "CANCELLED": 0,
    }


def test_dashboard_figures(db_session, test_user, other_user):
    cheap = make_product(db_session, name="Cheap", price=10.0, stock=3)
    make_product(db_session, name="Gone", price=5.0, stock=0)
    make_product(db_session, name="Plenty", price=5.0, stock=50)

    paid = make_order(db_session, test_user, cheap, quantity=2, status=OrderStatus.PAID)
    delivered = make_order(db_session, test_user, cheap, quantity=4, status=OrderStatus.DELIVERED)
    make_order(db_session, test_user, cheap, quantity=1, status=OrderStatus.CREATED)
    make_order(db_session, test_user, cheap, quantity=1, status=OrderStatus.CANCELLED)

    old = make_order(db_session, test_user, cheap, quantity=1, status=OrderStatus.SHIPPED)
    old.created_at = utcnow() - timedelta(days=45)
    other_user.created_at = utcnow() - timedelta(days=45)

    db_session.add_all([
        Payment(order_id=paid.id, amount=20.0, status=PaymentStatus.SUCCEEDED, payment_method="CARD", idempotency_key="a"),
        Payment(order_id=delivered.id, amount=40.0, status=PaymentStatus.SUCCEEDED, payment_method="CARD", idempotency_key="b"),
        Payment(order_id=paid.id, amount=20.0, status=PaymentStatus.FAILED, payment_method="CARD", idempotency_key="c"),
        Review(user_id=test_user.id, product_id=cheap.id, rating=4),
    ])
    cart = Cart(user_id=other_user.id)
    cart.items.append(CartItem(product_id=cheap.id, quantity=3))
    db_session.add(cart)
    db_session.commit()

    stats = AdminService.get_dashboard_stats(db_session)

    assert stats.total_users == 2
    assert stats.active_users == 1
    assert stats.new_users_this_month == 1
    assert stats.total_orders == 5
    assert stats.pending_orders == 1
    assert stats.completed_orders == 1
    assert stats.cancelled_orders == 1
    assert stats.orders_this_month == 4
    assert stats.total_revenue == 70.0
    assert stats.revenue_this_month == 60.0
    assert stats.average_order_value == round(70.0 / 3, 2)
    assert stats.total_products == 3
    assert stats.low_stock_products == 1
    assert stats.out_of_stock_products == 1
    assert stats.total_payments == 3
    assert stats.successful_payments == 2
    assert stats.failed_payments == 1
    assert stats.success_rate == 66.67
    assert stats.total_reviews == 1
    assert stats.average_rating == 4.0
    assert stats.order_status_distribution["SHIPPED"] == 1
    assert stats.cart_items_total == 3
    assert db_session.query(Order).count() == 5
