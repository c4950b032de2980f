from decimal import Decimal
from uuid import uuid4

from fastapi.testclient import TestClient

from shop.api import create_app
from shop.api.deps import get_idempotency_service, get_order_service
from shop.data.models import OrderModel
from shop.services.idempotency_service import IdempotencyService


def _order_body(user, *products):
    return {"userId": str(user.id), "products": [{"id": str(p.id)} for p in products]}


def test_create_order_returns_ids_and_total(client, db, notifications, make_user, make_product):
    user = make_user()
    p1 = make_product(price="49.99", stock=1)
    p2 = make_product(price="99.99", stock=1)

    resp = client.post("/orders/", json=_order_body(user, p1, p2))

    assert resp.status_code == 201
    body = resp.json()
    assert set(body) == {"orderId", "orderDate", "totalPrice", "orderDetailId"}
    assert Decimal(body["totalPrice"]) == Decimal("149.98")
    assert len(notifications.sent) == 1


def test_get_order_returns_details_and_products(client, make_user, make_product):
    user = make_user()
    p1 = make_product(price="49.99", name="Razer Viper")
    p2 = make_product(price="99.99", name="Razer BlackWidow V3")
    created = client.post("/orders/", json=_order_body(user, p1, p2)).json()

    resp = client.get(f"/orders/{created['orderId']}")

    assert resp.status_code == 200
    body = resp.json()
    assert body["id"] == created["orderId"]
    assert "date" in body
    assert len(body["orderDetails"]) == 1
    detail = body["orderDetails"][0]
    assert detail["id"] == created["orderDetailId"]
    assert Decimal(detail["price"]) == Decimal("149.98")
    assert [p["name"] for p in detail["products"]] == ["Razer Viper", "Razer BlackWidow V3"]
    assert {"id", "name", "description", "price", "stock", "imgUrl"} <= set(detail["products"][0])


def test_create_order_unknown_user_is_404(client, db, make_product):
    p1 = make_product()

    resp = client.post("/orders/", json={"userId": str(uuid4()), "products": [{"id": str(p1.id)}]})

    assert resp.status_code == 404
    assert resp.json() == {"statusCode": 404, "message": "User not found", "error": "Not Found"}
    db.expire_all()
    assert db.query(OrderModel).count() == 0


def test_create_order_out_of_stock_is_400(client, db, make_user, make_product):
    user = make_user()
    p1 = make_product(stock=1)
    p2 = make_product(stock=0)

    resp = client.post("/orders/", json=_order_body(user, p1, p2))

    assert resp.status_code == 400
    body = resp.json()
    assert body["error"] == "Bad Request"
    assert str(p2.id) in body["message"]
    db.expire_all()
    assert db.query(OrderModel).count() == 0


def test_create_order_unknown_product_is_404(client, make_user):
    user = make_user()
    missing = str(uuid4())

    resp = client.post("/orders/", json={"userId": str(user.id), "products": [{"id": missing}]})

    assert resp.status_code == 404
    assert missing in resp.json()["message"]


def test_create_order_malformed_product_id_is_400(client, make_user):
    user = make_user()

    resp = client.post("/orders/", json={"userId": str(user.id), "products": [{"id": "1234"}]})

    assert resp.status_code == 400
    assert "1234" in resp.json()["message"]


def test_create_order_body_errors_are_reported_together(client):
    resp = client.post("/orders/", json={"userId": "nope", "products": []})

    assert resp.status_code == 400
    body = resp.json()
    assert body["statusCode"] == 400
    assert isinstance(body["message"], list)
    assert len(body["message"]) == 2
    assert any(m.startswith("userId") for m in body["message"])
    assert any(m.startswith("products") for m in body["message"])


def test_get_order_with_malformed_id_is_400(client):
    resp = client.get("/orders/not-a-uuid")

    assert resp.status_code == 400
    assert resp.json()["error"] == "Bad Request"


def test_get_unknown_order_is_404(client):
    resp = client.get(f"/orders/{uuid4()}")

    assert resp.status_code == 404
    assert resp.json()["message"] == "Order not found"


def test_idempotency_key_prevents_duplicate_orders(client, db, make_user, make_product):
    user = make_user()
    p1 = make_product(price="10.00")
    headers = {"Idempotency-Key": "checkout-42"}

    first = client.post("/orders/", json=_order_body(user, p1), headers=headers)
    second = client.post("/orders/", json=_order_body(user, p1), headers=headers)

    assert first.status_code == second.status_code == 201
    assert first.json()["orderId"] == second.json()["orderId"]
    db.expire_all()
    assert db.query(OrderModel).count() == 1


def test_retry_of_order_in_flight_is_409(client, idempotency, make_user, make_product):
    user = make_user()
    p1 = make_product()
    idempotency.claim(str(user.id), "checkout-42")

    resp = client.post("/orders/", json=_order_body(user, p1), headers={"Idempotency-Key": "checkout-42"})

    assert resp.status_code == 409
    assert resp.json()["error"] == "Conflict"
    assert "checkout-42" in resp.json()["message"]


def test_order_is_placed_when_redis_is_unreachable(client, db, make_user, make_product):
    user = make_user()
    p1 = make_product()
    client.app.dependency_overrides[get_idempotency_service] = lambda: IdempotencyService(url="redis://127.0.0.1:1/0")

    resp = client.post("/orders/", json=_order_body(user, p1), headers={"Idempotency-Key": "k1"})

    assert resp.status_code == 201
    db.expire_all()
    assert db.query(OrderModel).count() == 1


def test_unexpected_error_still_gets_the_envelope(db):
    app = create_app()

    def _broken():
        raise RuntimeError("boom")

    app.dependency_overrides[get_order_service] = _broken
    with TestClient(app, raise_server_exceptions=False) as c:
        resp = c.get(f"/orders/{uuid4()}")

    assert resp.status_code == 500
    assert resp.json() == {"statusCode": 500, "message": "Internal server error", "error": "Internal Server Error"}


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}
