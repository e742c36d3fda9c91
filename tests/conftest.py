import os
import threading
from decimal import Decimal

# must be set before storefront.utils.settings is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CELERY_TASK_ALWAYS_EAGER"] = "true"
os.environ["CLEAR_CART_ON_ORDER"] = "false"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from storefront.api import create_app
from storefront.api.deps import get_lock_service, get_notification_service, get_product_client
from storefront.data.database import Base, get_db
from storefront.data.models import UserModel
from storefront.domain.errors import NotFoundError

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


class FakeProductClient:
    """In-memory catalog with the same contract as ProductClient."""

    def __init__(self):
        self.products = {
            1: {"id": 1, "title": "Keyboard", "price": 10.00, "category_id": 1},
            2: {"id": 2, "title": "Mouse", "price": 49.50, "category_id": 1},
            3: {"id": 3, "title": "Monitor", "price": 15.00, "category_id": 2},
        }
        self.calls = []

    def fetch_product(self, product_id: int) -> dict:
        self.calls.append(product_id)
        if product_id not in self.products:
            raise NotFoundError(f"Product {product_id} not found")
        return dict(self.products[product_id])

    def set_price(self, product_id: int, price) -> None:
        self.products[product_id]["price"] = price


class FakeLockService:
    """Process-local stand-in for the Redis SET NX lock."""

    def __init__(self):
        self._guard = threading.Lock()
        self.held = {}
        self.acquired = []
        self.released = []

    def acquire_order_lock(self, user_id: int, token: str, ttl: int) -> bool:
        with self._guard:
            if user_id in self.held:
                return False
            self.held[user_id] = token
            self.acquired.append(user_id)
            return True

    def release_order_lock(self, user_id: int, token: str) -> bool:
        with self._guard:
            if self.held.get(user_id) != token:
                return False
            del self.held[user_id]
            self.released.append(user_id)
            return True


class RecordingNotificationService:
    def __init__(self):
        self.sent = []

    def send_order_notification(self, user_id: int, order_id: int, total_price: Decimal):
        self.sent.append((user_id, order_id, total_price))


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def db():
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def session_factory():
    return TestingSessionLocal


@pytest.fixture()
def product_client():
    return FakeProductClient()


@pytest.fixture()
def lock_service():
    return FakeLockService()


@pytest.fixture()
def notifications():
    return RecordingNotificationService()


@pytest.fixture()
def customer(db):
    user = UserModel(id=1, name="Alice", address="1 Market Street", phone="+1-555-0100")
    db.add(user)
    db.commit()
    return user


@pytest.fixture()
def other_customer(db):
    user = UserModel(id=2, name="Bob", address="2 Side Road", phone="+1-555-0200")
    db.add(user)
    db.commit()
    return user


@pytest.fixture()
def customer_without_profile(db):
    user = UserModel(id=3, name="Carol", address=None, phone=None)
    db.add(user)
    db.commit()
    return user


@pytest.fixture()
def client(product_client, lock_service, notifications):
    app = create_app()

    def override_get_db():
        session = TestingSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_product_client] = lambda: product_client
    app.dependency_overrides[get_lock_service] = lambda: lock_service
    app.dependency_overrides[get_notification_service] = lambda: notifications

    # not used as a context manager: lifespan (create_all on the real engine) stays off
    return TestClient(app)
