"""Tests for the HTTP API."""

import pytest
from fastapi.testclient import TestClient

from messledger.api.app import create_app
from messledger.api.security import create_access_token
from messledger.cache import NullMemberCache

MONTH = "2024-05"


@pytest.fixture
def client(temp_db, settings):
    app = create_app(database=temp_db, settings=settings, member_cache=NullMemberCache())
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_headers(settings):
    token = create_access_token("admin", "admin", "Admin", settings=settings)
    return {"Authorization": f"Bearer {token}"}


def _headers_for(member, settings):
    token = create_access_token(member.key, "member", member.name, settings=settings)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def alice_headers(sample_members, settings):
    return _headers_for(sample_members["alice"], settings)


@pytest.fixture
def bob_headers(sample_members, settings):
    return _headers_for(sample_members["bob"], settings)


def test_missing_token_is_unauthorized(client):
    response = client.get(f"/api/summary/{MONTH}")
    assert response.status_code == 401


def test_bad_token_is_unauthorized(client):
    response = client.get(f"/api/summary/{MONTH}", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401


def test_token_signed_with_other_secret(client, settings):
    token = create_access_token("admin", "admin", settings=settings.model_copy(update={"jwt_secret": "other"}))
    response = client.get(f"/api/summary/{MONTH}", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_summary_admin_only(client, alice_headers):
    response = client.get(f"/api/summary/{MONTH}", headers=alice_headers)
    assert response.status_code == 403
    assert response.json()["detail"] == "Access denied. Admin only."


def test_month_summary(client, admin_headers, services, admin, sample_members):
    services.meals.add_meal(admin, "2024-05-01", sample_members["alice"].key, "lunch")
    services.expenses.create_expense(admin, "Fish", "450", "market", "2024-05-02", paid_by=sample_members["bob"].key)

    response = client.get(f"/api/summary/{MONTH}", headers=admin_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["month"] == MONTH
    rows = {row["member_name"]: row for row in body["members"]}
    assert rows["Alice"]["regular_meals"] == 1
    assert rows["Alice"]["payment_status"] == "pending"
    assert rows["Bob"]["expenses"]["market"] == 450


def test_record_payment(client, admin_headers, sample_members):
    alice = sample_members["alice"]
    response = client.put(
        f"/api/summary/{MONTH}/payment",
        headers=admin_headers,
        json={"member_id": alice.key, "payment_status": "clear", "amount_paid": "1450"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["payment_status"] == "clear"
    assert body["amount_paid"] == 1450
    assert body["submitted_amount"] == 0
    assert body["member_name"] == "Alice"


def test_record_payment_invalid_status(client, admin_headers, sample_members):
    response = client.put(
        f"/api/summary/{MONTH}/payment",
        headers=admin_headers,
        json={"member_id": sample_members["alice"].key, "payment_status": "maybe"},
    )
    assert response.status_code == 400


def test_member_totals_and_invoice(client, admin_headers, alice_headers, bob_headers, services, admin, sample_members):
    alice = sample_members["alice"]
    services.expenses.create_expense(admin, "Rice", "300", "rice", "2024-05-03", paid_by=alice.key)

    response = client.get(f"/api/summary/{MONTH}/totals/{alice.key}", headers=alice_headers)
    assert response.status_code == 200
    assert response.json()["total"] == 300
    assert response.json()["expenses"]["rice"] == 300

    response = client.get(f"/api/summary/{MONTH}/totals/{alice.key}", headers=bob_headers)
    assert response.status_code == 403

    response = client.get(f"/api/summary/{MONTH}/invoice/{alice.key}", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["member"]["name"] == "Alice"
    assert len(response.json()["member_expenses"]) == 1


def test_bill(client, admin_headers, sample_members):
    response = client.get(f"/api/summary/{MONTH}/bill", headers=admin_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["total_meals"] == 120
    assert [line["member_name"] for line in body["members"]] == ["Alice", "Bob", "Carol"]


def test_expense_crud(client, admin_headers, alice_headers, sample_members):
    response = client.post(
        "/api/expenses",
        headers=alice_headers,
        json={"description": "Onions", "amount": "80", "category": "market", "date": "2024-05-04"},
    )
    assert response.status_code == 201
    created = response.json()
    assert created["status"] == "pending"
    assert created["paid_by"] == sample_members["alice"].key

    response = client.put("/api/expenses/approve-all", headers=admin_headers)
    assert response.status_code == 200
    assert response.json() == {"count": 1}

    response = client.put(f"/api/expenses/{created['id']}", headers=admin_headers, json={"amount": "95.5"})
    assert response.status_code == 200
    assert response.json()["amount"] == 95.5
    assert response.json()["status"] == "approved"

    response = client.get("/api/expenses", headers=admin_headers, params={"month": MONTH})
    assert [e["description"] for e in response.json()] == ["Onions"]

    response = client.delete(f"/api/expenses/{created['id']}", headers=admin_headers)
    assert response.status_code == 204

    response = client.delete(f"/api/expenses/{created['id']}", headers=admin_headers)
    assert response.status_code == 404


def test_approve_all_admin_only(client, alice_headers):
    response = client.put("/api/expenses/approve-all", headers=alice_headers)
    assert response.status_code == 403


def test_meals(client, alice_headers, bob_headers, sample_members):
    alice = sample_members["alice"]
    payload = {"date": "2024-05-01", "member_id": alice.key, "meal_type": "lunch"}

    response = client.post("/api/meals", headers=alice_headers, json=payload)
    assert response.status_code == 201
    assert response.json()["member_name"] == "Alice"

    response = client.post("/api/meals", headers=alice_headers, json=payload)
    assert response.status_code == 409

    response = client.post("/api/meals", headers=bob_headers, json=payload)
    assert response.status_code == 403

    response = client.get("/api/meals/overview", headers=bob_headers, params={"month": MONTH})
    overview = {row["name"]: row for row in response.json()}
    assert overview["Alice"]["total_meals"] == 1

    response = client.delete(
        "/api/meals",
        headers=alice_headers,
        params={"date": "2024-05-01", "member_id": alice.key, "meal_type": "lunch"},
    )
    assert response.status_code == 204
    assert client.get("/api/meals", headers=alice_headers, params={"month": MONTH}).json() == []


def test_guest_meals(client, alice_headers, sample_members):
    response = client.post(
        "/api/guest-meals",
        headers=alice_headers,
        json={
            "date": "2024-05-02",
            "member_id": sample_members["alice"].key,
            "guest_meal_type": "fish",
            "meal_time": "dinner",
        },
    )
    assert response.status_code == 201
    guest_meal_id = response.json()["id"]

    response = client.get("/api/guest-meals", headers=alice_headers, params={"month": MONTH})
    assert [g["guest_meal_type"] for g in response.json()] == ["fish"]

    response = client.delete(f"/api/guest-meals/{guest_meal_id}", headers=alice_headers)
    assert response.status_code == 204


def test_market_request_and_approve(client, admin_headers, alice_headers, bob_headers, sample_members):
    response = client.post("/api/market", headers=alice_headers, json={"date": "2024-05-10"})
    assert response.status_code == 201
    alice_duty = response.json()
    assert alice_duty["status"] == "pending"

    response = client.post("/api/market", headers=bob_headers, json={"date": "2024-05-10"})
    bob_duty = response.json()

    response = client.put(f"/api/market/id/{alice_duty['id']}", headers=admin_headers, json={"status": "approved"})
    assert response.status_code == 200
    assert response.json()["status"] == "approved"

    duties = client.get("/api/market", headers=admin_headers, params={"date": "2024-05-10"}).json()
    assert [d["id"] for d in duties] == [alice_duty["id"]]

    response = client.put(f"/api/market/id/{bob_duty['id']}", headers=admin_headers, json={"status": "approved"})
    assert response.status_code == 404


def test_market_reject_and_invalid_decision(client, admin_headers, alice_headers):
    duty = client.post("/api/market", headers=alice_headers, json={"date": "2024-05-11"}).json()

    response = client.put(f"/api/market/id/{duty['id']}", headers=admin_headers, json={"status": "maybe"})
    assert response.status_code == 400

    response = client.put(f"/api/market/id/{duty['id']}", headers=admin_headers, json={"status": "rejected"})
    assert response.status_code == 204
    assert client.get("/api/market", headers=admin_headers, params={"month": MONTH}).json() == []


def test_market_manual_assignment(client, admin_headers, sample_members):
    response = client.post("/api/market", headers=admin_headers, json={"date": "2024-05-12", "request_type": "manual_assign"})
    assert response.status_code == 400

    response = client.post(
        "/api/market",
        headers=admin_headers,
        json={"date": "2024-05-12", "request_type": "manual_assign", "member_id": sample_members["bob"].key},
    )
    assert response.status_code == 201
    assert response.json()["status"] == "approved"


def test_managers(client, admin_headers, alice_headers, sample_members):
    body = {"date": "2024-05-01", "member_id": sample_members["bob"].key}
    response = client.post("/api/managers", headers=admin_headers, json=body)
    assert response.status_code == 201
    record_id = response.json()["id"]

    assert client.post("/api/managers", headers=admin_headers, json=body).status_code == 409
    assert client.post("/api/managers", headers=alice_headers, json=body).status_code == 403

    response = client.get("/api/managers", headers=alice_headers, params={"date": "2024-05-01"})
    assert [r["member_name"] for r in response.json()] == ["Bob"]

    assert client.delete(f"/api/managers/{record_id}", headers=admin_headers).status_code == 204


def test_members(client, admin_headers, alice_headers, sample_members):
    response = client.post("/api/members", headers=admin_headers, json={"user_id": "u-dave", "name": "Dave"})
    assert response.status_code == 201
    dave = response.json()
    assert dave["role"] == "member"

    response = client.put(f"/api/members/{dave['id']}", headers=admin_headers, json={"deposit": "700"})
    assert response.json()["deposit"] == 700

    names = [m["name"] for m in client.get("/api/members", headers=alice_headers).json()]
    assert names == ["Alice", "Bob", "Carol", "Dave"]

    assert client.get("/api/members/u-nobody", headers=alice_headers).status_code == 404
    assert client.delete(f"/api/members/{dave['id']}", headers=alice_headers).status_code == 403
    assert client.delete(f"/api/members/{dave['id']}", headers=admin_headers).status_code == 204


def test_notifications(client, admin_headers, alice_headers, bob_headers, sample_members):
    alice = sample_members["alice"]
    response = client.post(
        "/api/notifications", headers=admin_headers, json={"user_id": alice.key, "message": "Rent is due"}
    )
    assert response.status_code == 201
    note = response.json()

    response = client.get("/api/notifications", headers=alice_headers)
    assert [n["message"] for n in response.json()] == ["Rent is due"]

    assert client.put(f"/api/notifications/{note['id']}", headers=bob_headers, json={"is_read": True}).status_code == 403

    response = client.put("/api/notifications/mark-read", headers=alice_headers)
    assert response.json() == {"count": 1}

    assert client.delete(f"/api/notifications/{note['id']}", headers=alice_headers).status_code == 204


def test_payment_notifications(client, admin_headers, alice_headers, sample_members):
    alice = sample_members["alice"]
    response = client.post(
        "/api/notifications/payment",
        headers=admin_headers,
        json={"dues": [{"user_id": alice.key, "member_name": "Alice", "amount": "467.20"}]},
    )
    assert response.status_code == 200
    assert response.json() == {"count": 1}

    note = client.get(f"/api/notifications/user/{alice.key}", headers=alice_headers).json()[0]
    assert note["type"] == "payment"
    assert note["payment_amount"] == 467.2

    response = client.put(f"/api/notifications/{note['id']}/paid", headers=alice_headers)
    assert response.status_code == 200
    assert response.json()["is_paid"] is True


def test_cooking(client, admin_headers, alice_headers, sample_members):
    body = {"date": "2024-05-03", "member_id": sample_members["alice"].key}
    response = client.post("/api/cooking", headers=admin_headers, json=body)
    assert response.status_code == 201
    record = response.json()
    assert record["cooked"] is True

    assert client.post("/api/cooking", headers=admin_headers, json=body).status_code == 409
    assert client.post("/api/cooking", headers=alice_headers, json=body).status_code == 403

    response = client.get("/api/cooking/date/2024-05-03", headers=alice_headers)
    assert [r["member_name"] for r in response.json()] == ["Alice"]

    assert client.delete(f"/api/cooking/{record['id']}", headers=admin_headers).status_code == 204
    assert client.get("/api/cooking", headers=alice_headers).json() == []


def test_clear_month(client, admin_headers, alice_headers, services, admin, sample_members):
    services.meals.add_meal(admin, "2024-05-01", sample_members["alice"].key, "lunch")

    response = client.get("/api/admin/clear-month/preview", headers=admin_headers, params={"month": MONTH})
    assert response.status_code == 200
    assert response.json()["counts"]["meals"] == 1
    assert response.json()["total"] == 1

    assert client.delete("/api/admin/clear-month", headers=alice_headers, params={"month": MONTH}).status_code == 403
    assert client.delete("/api/admin/clear-month", headers=admin_headers, params={"month": "2024-5"}).status_code == 400

    response = client.delete("/api/admin/clear-month", headers=admin_headers, params={"month": MONTH})
    assert response.status_code == 200
    assert response.json()["total"] == 1
    assert client.get("/api/meals", headers=admin_headers, params={"month": MONTH}).json() == []
