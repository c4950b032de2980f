from decimal import Decimal
from uuid import uuid4

import bcrypt

from shop.data.models import OrderModel, UserModel


def _password_matches(raw, digest):
    return bcrypt.checkpw(raw.encode("utf-8"), digest.encode("utf-8"))


def _signup(**overrides):
    body = {
        "name": "Juan Perez",
        "email": "juan.perez@example.com",
        "password": "Example123!",
        "confirmPassword": "Example123!",
        "phone": 5491123456789,
        "country": "Argentina",
        "address": "Av Siempre Viva 742",
        "city": "Springfield",
    }
    body.update(overrides)
    return body


def test_create_user_hashes_password_and_hides_it(client, db):
    resp = client.post("/users/", json=_signup())

    assert resp.status_code == 201
    body = resp.json()
    assert body["email"] == "juan.perez@example.com"
    assert "password" not in body
    assert "isAdmin" not in body

    db.expire_all()
    stored = db.query(UserModel).one()
    assert stored.password != "Example123!"
    assert _password_matches("Example123!", stored.password)
    assert stored.is_admin is False


def test_create_user_ignores_admin_flag(client, db):
    resp = client.post("/users/", json=_signup(isAdmin=True))

    assert resp.status_code == 201
    db.expire_all()
    assert db.query(UserModel).one().is_admin is False


def test_password_confirmation_must_match(client):
    resp = client.post("/users/", json=_signup(confirmPassword="Example123?"))

    assert resp.status_code == 400
    assert "Password and confirmPassword must match" in resp.json()["message"]


def test_all_field_errors_are_returned_at_once(client):
    resp = client.post(
        "/users/",
        json=_signup(name="Juan!", email="not-an-email", password="weak", confirmPassword="weak", city=""),
    )

    assert resp.status_code == 400
    messages = resp.json()["message"]
    assert isinstance(messages, list)
    fields = {m.split(":")[0] for m in messages}
    assert {"name", "email", "password", "city"} <= fields


def test_duplicate_email_is_rejected(client, make_user):
    make_user(email="taken@example.com")

    resp = client.post("/users/", json=_signup(email="taken@example.com"))

    assert resp.status_code == 400
    assert "taken@example.com" in resp.json()["message"]


def test_get_user(client, make_user):
    user = make_user(name="Ana Gomez")

    resp = client.get(f"/users/{user.id}")

    assert resp.status_code == 200
    assert resp.json()["name"] == "Ana Gomez"
    assert "password" not in resp.json()


def test_get_user_errors(client):
    assert client.get(f"/users/{uuid4()}").status_code == 404
    assert client.get("/users/123").status_code == 400


def test_list_users_is_paginated(client, make_user):
    for name in ("Alice", "Bob", "Carol"):
        make_user(name=name)

    page_one = client.get("/users/", params={"page": 1, "limit": 2}).json()
    page_two = client.get("/users/", params={"page": 2, "limit": 2}).json()

    assert [u["name"] for u in page_one] == ["Alice", "Bob"]
    assert [u["name"] for u in page_two] == ["Carol"]


def test_list_users_includes_what_they_ordered(client, make_user, make_product):
    buyer = make_user(name="Alice")
    make_user(name="Bob")
    mouse = make_product(name="Razer Viper", price="49.99", img_url="https://example.com/viper.jpg")
    keyboard = make_product(name="Razer BlackWidow V3", price="99.99", img_url="https://example.com/bw.jpg")
    order = {"userId": str(buyer.id), "products": [{"id": str(mouse.id)}, {"id": str(keyboard.id)}]}
    assert client.post("/orders/", json=order).status_code == 201

    alice, bob = client.get("/users/").json()

    assert bob["orders"] == []
    assert len(alice["orders"]) == 1
    details = alice["orders"][0]["orderDetails"]
    assert len(details) == 1
    assert Decimal(details[0]["price"]) == Decimal("149.98")
    assert details[0]["products"] == [
        {"name": "Razer Viper", "imgUrl": "https://example.com/viper.jpg"},
        {"name": "Razer BlackWidow V3", "imgUrl": "https://example.com/bw.jpg"},
    ]
    assert "password" not in alice


def test_update_user_changes_only_given_fields(client, db, make_user):
    user = make_user(city="Springfield", country="Argentina")

    resp = client.put(f"/users/{user.id}", json={"city": "Shelbyville"})

    assert resp.status_code == 200
    assert resp.json()["city"] == "Shelbyville"
    assert resp.json()["country"] == "Argentina"


def test_update_password_requires_confirmation(client, make_user):
    user = make_user()

    resp = client.put(f"/users/{user.id}", json={"password": "Another123!"})

    assert resp.status_code == 400


def test_update_password_is_hashed(client, db, make_user):
    user = make_user()

    resp = client.put(
        f"/users/{user.id}",
        json={"password": "Another123!", "confirmPassword": "Another123!"},
    )

    assert resp.status_code == 200
    db.expire_all()
    assert _password_matches("Another123!", db.get(UserModel, user.id).password)


def test_update_unknown_user_is_404(client):
    assert client.put(f"/users/{uuid4()}", json={"city": "Nowhere"}).status_code == 404


def test_delete_user(client, db, make_user):
    user = make_user()

    resp = client.delete(f"/users/{user.id}")

    assert resp.status_code == 200
    assert str(user.id) in resp.json()["message"]
    db.expire_all()
    assert db.get(UserModel, user.id) is None


def test_user_with_orders_cannot_be_deleted(client, db, make_user):
    user = make_user()
    db.add(OrderModel(user_id=user.id))
    db.commit()

    resp = client.delete(f"/users/{user.id}")

    assert resp.status_code == 400
    db.expire_all()
    assert db.get(UserModel, user.id) is not None
