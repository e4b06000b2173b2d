import os

# Must be set before the application modules read their settings
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["RATE_LIMIT_ENABLED"] = "0"
os.environ["SEED_SAMPLE_DATA"] = "0"
os.environ["PAYMENT_PROCESSING_DELAY_SECONDS"] = "0"
os.environ["ADMIN_REGISTRATION_KEY"] = ""
os.environ["REDIS_URL"] = "redis://127.0.0.1:1/0"

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from shopapp.auth import service as auth_service
from shopapp.database.core import Base, get_db
from shopapp.database import models  # noqa: F401
from shopapp.entities import Admin, Cart, CartItem, Order, OrderItem, OrderStatus, Product, User, Role
from shopapp.payments.gateway import gateway
from shopapp.utils import password_utils
from main import app

# Use an in-memory SQLite database for testing
TEST_SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

TEST_PASSWORD = "secret123"


@pytest.fixture(scope="session")
def password_hash():
    # bcrypt is slow; hash once per run
    return password_utils.get_password_hash(TEST_PASSWORD)


@pytest.fixture(scope="function")
def db_session():
    """
    Creates a new, isolated in-memory database session for each test.
    """
    engine = create_engine(
        TEST_SQLALCHEMY_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture(scope="function")
def revoked_tokens(mocker):
    """In-memory stand-in for the Redis denylist."""
    revoked = set()
    mocker.patch(
        "shopapp.core.infrastructure.denylist_service.is_token_denylisted",
        side_effect=lambda jti: jti in revoked,
    )
    mocker.patch(
        "shopapp.core.infrastructure.denylist_service.add_token_to_denylist",
        side_effect=lambda jti, expires: revoked.add(jti),
    )
    return revoked


@pytest.fixture(scope="function")
def approve_payments(mocker):
    mocker.patch.object(gateway, "success_rate", 1.0)
    mocker.patch.object(gateway, "delay_seconds", 0)


@pytest.fixture(scope="function")
def decline_payments(mocker):
    mocker.patch.object(gateway, "success_rate", 0.0)
    mocker.patch.object(gateway, "delay_seconds", 0)


@pytest.fixture(scope="function")
def client(db_session, revoked_tokens):
    """
    Creates a TestClient for the app, overriding the database dependency.
    """
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


def make_user(db, password_hash, username="tester", email="test@example.com") -> User:
    user = User(username=username, email=email, password_hash=password_hash, role=Role.USER)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def make_product(db, name="Desk Lamp", price=25.0, stock=10, category="Home") -> Product:
    product = Product(name=name, description=f"{name} description", price=price, stock=stock, category=category)
    db.add(product)
    db.commit()
    db.refresh(product)
    return product


def make_order(db, user, product, quantity=1, status=OrderStatus.PAID) -> Order:
    """Insert an order directly, without touching stock."""
    order = Order(
        user_id=user.id,
        status=status,
        shipping_address="1 Test Street",
        total_amount=round(product.price * quantity, 2),
    )
    order.items.append(OrderItem(
        product_id=product.id,
        quantity=quantity,
        unit_price=product.price,
        subtotal=round(product.price * quantity, 2),
    ))
    db.add(order)
    db.commit()
    db.refresh(order)
    return order


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(scope="function")
def test_user(db_session, password_hash):
    return make_user(db_session, password_hash)


@pytest.fixture(scope="function")
def other_user(db_session, password_hash):
    return make_user(db_session, password_hash, username="other", email="other@example.com")


@pytest.fixture(scope="function")
def test_admin(db_session, password_hash):
    admin = Admin(email="admin@example.com", name="Admin", password_hash=password_hash)
    db_session.add(admin)
    db_session.commit()
    db_session.refresh(admin)
    return admin


@pytest.fixture(scope="function")
def auth_headers(test_user):
    return bearer(auth_service.create_access_token(test_user.email, test_user.id, Role.USER))


@pytest.fixture(scope="function")
def other_headers(other_user):
    return bearer(auth_service.create_access_token(other_user.email, other_user.id, Role.USER))


@pytest.fixture(scope="function")
def admin_headers(test_admin):
    return bearer(auth_service.create_access_token(test_admin.email, test_admin.id, Role.ADMIN))


@pytest.fixture(scope="function")
def product(db_session):
    return make_product(db_session)


@pytest.fixture(scope="function")
def cart_with_items(db_session, test_user, product):
    """The test user's cart holding two units of `product`."""
    cart = Cart(user_id=test_user.id)
    cart.items.append(CartItem(product_id=product.id, quantity=2))
    db_session.add(cart)
    db_session.commit()
    return cart
