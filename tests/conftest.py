import os

# przed importem shop.*, settings czyta env przy imporcie
os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"
os.environ["ORDER_DECREMENT_STOCK"] = "false"
os.environ["CELERY_TASK_ALWAYS_EAGER"] = "true"

from decimal import Decimal
import itertools

import pytest
from fastapi.testclient import TestClient

import shop.data.models  # noqa: F401
from shop.api import create_app
from shop.api.deps import get_idempotency_service, get_notification_service
from shop.data.database import Base, SessionLocal, engine
from shop.data.models import CategoryModel, ProductModel, UserModel
from shop.repos.order_repo import OrderRepo
from shop.repos.product_repo import ProductRepo
from shop.repos.user_repo import UserRepo
from shop.services.idempotency_service import IdempotencyService
from shop.services.order_service import OrderService

_seq = itertools.count(1)


class RecordingNotifications:
    def __init__(self):
        self.sent = []

    def send_order_notification(self, user_id, order_id, total_price):
        self.sent.append((user_id, order_id, total_price))


class InMemoryIdempotency:
    PENDING = IdempotencyService.PENDING

    def __init__(self):
        self.results = {}

    def claim(self, scope, key):
        if (scope, key) in self.results:
            return False
        self.results[(scope, key)] = self.PENDING
        return True

    def get_result(self, scope, key):
        return self.results.get((scope, key))

    def store_result(self, scope, key, result):
        # to samo co json.dumps(default=str) w redisie
        self.results[(scope, key)] = {k: str(v) for k, v in result.items()}

    def release(self, scope, key):
        self.results.pop((scope, key), None)


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def make_user(db):
    def _make(**overrides):
        n = next(_seq)
        values = {
            "name": f"Customer {n}",
            "email": f"customer{n}@example.com",
            "password": "$2b$12$" + "x" * 53,
            "phone": 5491100000000 + n,
            "country": "Argentina",
            "address": "Av Siempre Viva 742",
            "city": "Springfield",
        }
        values.update(overrides)
        user = UserModel(**values)
        db.add(user)
        db.commit()
        return user

    return _make


@pytest.fixture
def make_category(db):
    def _make(name=None):
        category = CategoryModel(name=name or f"category {next(_seq)}")
        db.add(category)
        db.commit()
        return category

    return _make


@pytest.fixture
def make_product(db):
    def _make(price="10.00", stock=10, **overrides):
        values = {
            "name": f"Product {next(_seq)}",
            "description": "Test product",
            "price": Decimal(price),
            "stock": stock,
            "img_url": "https://example.com/p.jpg",
        }
        values.update(overrides)
        product = ProductModel(**values)
        db.add(product)
        db.commit()
        return product

    return _make


@pytest.fixture
def notifications():
    return RecordingNotifications()


@pytest.fixture
def idempotency():
    return InMemoryIdempotency()


@pytest.fixture
def order_service(db, notifications, idempotency):
    def _make(**kwargs):
        kwargs.setdefault("notification_service", notifications)
        kwargs.setdefault("idempotency_service", idempotency)
        return OrderService(OrderRepo(db), UserRepo(db), ProductRepo(db), **kwargs)

    return _make


@pytest.fixture
def client(db, notifications, idempotency):
    app = create_app()
    app.dependency_overrides[get_notification_service] = lambda: notifications
    app.dependency_overrides[get_idempotency_service] = lambda: idempotency
    with TestClient(app) as c:
        yield c
