from __future__ import annotations

from conftest import auth_headers, create_part, create_user
from eepdb.apps.accounts.models import UserRole
from eepdb.apps.inventory import models as inventory_models
from eepdb.apps.notifications import models as notification_models
from eepdb.apps.orders import models as order_models
from eepdb.database import MAX_DB_INT


def _stock(db, part_id):
    db.expire_all()
    return db.get(inventory_models.Part, part_id).stock_level


def test_place_order_returns_camel_case_summary(client, api_session):
    user = create_user(api_session)
    part = create_part(api_session, stock_level=10)

    resp = client.post(
        "/orders",
        json={"part_id": part.id, "quantity": 8},
        headers=auth_headers(user),
    )

    assert resp.status_code == 201, resp.text
    body = resp.json()
    assert body["inventoryUpdated"] is True
    assert body["notificationCreated"] is True
    assert body["newStockLevel"] == 2
    assert body["notifications"] == ["Critical stock level for Servo Motor! Only 2 units left."]
    assert body["order"]["status"] == "Pending"
    assert body["order"]["priority"] == "Medium"
    assert body["order"]["ordered_by"] == user.id
    assert body["order"]["part_name"] == "Servo Motor"
    assert body["order"]["user_email"] == "store@example.com"
    assert _stock(api_session, part.id) == 2


def test_place_order_insufficient_stock(client, api_session):
    user = create_user(api_session)
    part = create_part(api_session, stock_level=3)

    resp = client.post(
        "/orders",
        json={"part_id": part.id, "quantity": 5},
        headers=auth_headers(user),
    )

    assert resp.status_code == 400
    assert "Not enough stock" in resp.json()["detail"]
    assert _stock(api_session, part.id) == 3
    assert api_session.query(order_models.PartOrder).count() == 0


def test_place_order_validation_and_missing_part(client, api_session):
    user = create_user(api_session)
    part = create_part(api_session)
    headers = auth_headers(user)

    assert client.post("/orders", json={"part_id": part.id, "quantity": 0}, headers=headers).status_code == 400
    assert client.post("/orders", json={"part_id": 999, "quantity": 1}, headers=headers).status_code == 404


def test_ordering_for_someone_else_requires_admin(client, api_session):
    staff = create_user(api_session)
    other = create_user(api_session, company_id="EMP-2", email="other@example.com", name="Other")
    admin = create_user(api_session, company_id="ADM-1", email="admin@example.com", role=UserRole.ADMIN)
    part = create_part(api_session, stock_level=50)

    denied = client.post(
        "/orders",
        json={"part_id": part.id, "quantity": 1, "ordered_by": other.id},
        headers=auth_headers(staff),
    )
    assert denied.status_code == 400

    allowed = client.post(
        "/orders",
        json={"part_id": part.id, "quantity": 1, "ordered_by": other.id, "priority": "Urgent"},
        headers=auth_headers(admin),
    )
    assert allowed.status_code == 201, allowed.text
    assert allowed.json()["order"]["ordered_by"] == other.id
    assert allowed.json()["notificationCreated"] is True


def test_cancel_and_complete_endpoints(client, api_session):
    user = create_user(api_session)
    part = create_part(api_session, stock_level=10)
    headers = auth_headers(user)

    first = client.post("/orders", json={"part_id": part.id, "quantity": 4}, headers=headers).json()["order"]
    second = client.post("/orders", json={"part_id": part.id, "quantity": 2}, headers=headers).json()["order"]

    cancelled = client.post("/orders/cancel", json={"orderId": first["id"]}, headers=headers)
    assert cancelled.status_code == 200, cancelled.text
    assert cancelled.json()["inventoryRestored"] is True
    assert cancelled.json()["updatedOrder"]["status"] == "Cancelled"
    assert cancelled.json()["message"] == "Order cancelled successfully"

    again = client.post("/orders/cancel", json={"orderId": first["id"]}, headers=headers)
    assert again.status_code == 200
    assert again.json()["inventoryRestored"] is False

    completed = client.post("/orders/complete", json={"orderId": second["id"]}, headers=headers)
    assert completed.status_code == 200
    assert completed.json()["updatedOrder"]["status"] == "Completed"
    assert completed.json()["updatedOrder"]["delivered_at"] is not None

    assert client.post("/orders/cancel", json={"orderId": second["id"]}, headers=headers).status_code == 409
    assert client.post("/orders/complete", json={"orderId": first["id"]}, headers=headers).status_code == 409
    assert client.post("/orders/cancel", json={"orderId": 999}, headers=headers).status_code == 404
    assert _stock(api_session, part.id) == 8


def test_list_and_get_orders(client, api_session):
    user = create_user(api_session)
    part = create_part(api_session, stock_level=20)
    headers = auth_headers(user)
    order_id = client.post("/orders", json={"part_id": part.id, "quantity": 1}, headers=headers).json()["order"]["id"]

    listed = client.get("/orders", params={"status": "Pending"}, headers=headers)
    assert listed.status_code == 200
    assert [o["id"] for o in listed.json()] == [order_id]

    assert client.get(f"/orders/{order_id}", headers=headers).json()["quantity"] == 1
    assert client.get("/orders/999", headers=headers).status_code == 404


def test_update_stock_endpoint(client, api_session):
    staff = create_user(api_session)
    mechanic = create_user(
        api_session,
        company_id="MNT-1",
        email="mechanic@example.com",
        role=UserRole.MAINTENANCE_STAFF,
    )
    part = create_part(api_session, stock_level=20)

    resp = client.post(
        "/inventory/update-stock",
        json={"partId": part.id, "change": -8},
        headers=auth_headers(staff),
    )
    assert resp.status_code == 200, resp.text
    assert resp.json()["updatedPart"]["stock_level"] == 12
    assert resp.json()["updatedPart"]["status"] == "Low"
    assert resp.json()["notification"] == "Low stock alert for Servo Motor! 12 units remaining."

    negative = client.post(
        "/inventory/update-stock",
        json={"partId": part.id, "change": -50},
        headers=auth_headers(staff),
    )
    assert negative.status_code == 400

    forbidden = client.post(
        "/inventory/update-stock",
        json={"partId": part.id, "change": 5},
        headers=auth_headers(mechanic),
    )
    assert forbidden.status_code == 403
    assert _stock(api_session, part.id) == 12

    movements = client.get(f"/parts/{part.id}/movements", headers=auth_headers(mechanic))
    assert [m["quantity"] for m in movements.json()] == [-8]


def test_parts_endpoints(client, api_session):
    staff = create_user(api_session)
    headers = auth_headers(staff)

    created = client.post(
        "/parts",
        json={"name": "Hydraulic Pump", "type": "Pump", "stock_level": 3},
        headers=headers,
    )
    assert created.status_code == 201, created.text
    part = created.json()
    assert part["status"] == "Critical"

    advice = client.get(f"/parts/{part['id']}/recommendation", headers=headers).json()
    assert advice["priority"] == "high"
    assert advice["suggested_quantity"] == 12

    listed = client.get("/parts", params={"search": "pump"}, headers=headers).json()
    assert [p["name"] for p in listed] == ["Hydraulic Pump"]
    assert client.get("/parts/999", headers=headers).status_code == 404


def test_resolve_notification_endpoint(client, api_session):
    user = create_user(api_session)
    part = create_part(api_session, stock_level=6)
    headers = auth_headers(user)
    client.post("/orders", json={"part_id": part.id, "quantity": 2}, headers=headers)

    pending = client.get("/notifications", params={"status": "Pending"}, headers=headers).json()
    assert len(pending) == 1
    notification_id = pending[0]["id"]

    resp = client.post("/notifications/resolve", json={"notificationId": notification_id}, headers=headers)
    assert resp.status_code == 200
    assert resp.json() == {"message": "Notification marked as resolved", "notificationId": notification_id}

    api_session.expire_all()
    notification = api_session.get(notification_models.Notification, notification_id)
    assert notification.status == notification_models.NotificationStatus.RESOLVED
    assert client.post("/notifications/resolve", json={"notificationId": 999}, headers=headers).status_code == 404


def test_endpoints_require_a_token(client):
    assert client.post("/orders", json={"part_id": 1, "quantity": 1}).status_code == 401
    assert client.get("/parts").status_code == 401
    assert client.get("/health").json() == {"status": "ok"}


def test_inactive_user_is_refused(client, api_session):
    user = create_user(api_session, is_active=False)
    part = create_part(api_session)
    resp = client.post("/orders", json={"part_id": part.id, "quantity": 1}, headers=auth_headers(user))
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Inactive user account"


def test_oversized_integers_are_rejected_before_the_database(client, api_session):
    user = create_user(api_session)
    part = create_part(api_session, stock_level=10)
    headers = auth_headers(user)
    huge = 10**20

    assert client.post(
        "/inventory/update-stock", json={"partId": part.id, "change": huge}, headers=headers
    ).status_code == 422
    assert client.post(
        "/inventory/update-stock", json={"partId": huge, "change": 1}, headers=headers
    ).status_code == 422
    assert client.post("/orders", json={"part_id": huge, "quantity": 1}, headers=headers).status_code == 422
    assert client.post("/orders", json={"part_id": part.id, "quantity": huge}, headers=headers).status_code == 422
    assert client.post("/orders/cancel", json={"orderId": huge}, headers=headers).status_code == 422
    assert client.post("/orders/complete", json={"orderId": huge}, headers=headers).status_code == 422
    assert client.post("/notifications/resolve", json={"notificationId": huge}, headers=headers).status_code == 422
    assert client.get(f"/orders/{huge}", headers=headers).status_code == 422
    assert client.get(f"/parts/{huge}", headers=headers).status_code == 422
    assert client.get("/orders", params={"skip": huge}, headers=headers).status_code == 422
    assert _stock(api_session, part.id) == 10


def test_stock_total_cannot_overflow_the_column(client, api_session):
    user = create_user(api_session)
    part = create_part(api_session, stock_level=10)

    resp = client.post(
        "/inventory/update-stock",
        json={"partId": part.id, "change": MAX_DB_INT},
        headers=auth_headers(user),
    )

    assert resp.status_code == 400
    assert _stock(api_session, part.id) == 10
