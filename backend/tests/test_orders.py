from datetime import datetime

from sqlalchemy import update

from orderdesk.core.constants import OrderStatus
from orderdesk.models import Order
from orderdesk.repositories.order_repository import OrderRepository, order_number_prefix
from orderdesk.services.order_service import month_keys
from tests.helpers import login, order_payload


def set_order_status(db_run, order_id, status):
    async def _set(db):
        await db.execute(update(Order).where(Order.id == order_id).values(status=status))
        await db.commit()
    db_run(_set)


def create_order(client, headers, seed, **overrides):
    response = client.post("/api/orders/", json=order_payload(seed, **overrides), headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def test_create_order_allocates_daily_numbers(client, client_headers, seed):
    first = create_order(client, client_headers, seed)
    second = create_order(client, client_headers, seed)

    prefix = order_number_prefix()
    assert first["orderNumber"] == f"{prefix}0001"
    assert second["orderNumber"] == f"{prefix}0002"
    assert first["lookupCode"] == first["orderNumber"]


def test_created_order_is_a_draft_with_items(client, client_headers, seed):
    order = create_order(client, client_headers, seed, warehouseId=seed["warehouse"])
    assert order["status"] == OrderStatus.DRAFT
    assert order["statusDisplay"] == "Draft"
    assert order["customerId"] == seed["customer"]
    assert order["customerName"] == "Acme Corporation"
    assert order["carrierName"] == "UPS"
    assert order["carrierServiceName"] == "Ground"
    assert order["orderTypeName"] == "Outbound"
    assert order["warehouseName"] == "Chicago DC"
    assert order["shipToAccount"]["lookupCode"] == "ACME-DOCK"
    assert order["billToAccount"]["lookupCode"] == "ACME-HQ"
    assert order["itemCount"] == 2
    assert order["totalQuantity"] == 8
    assert [(i["materialCode"], i["quantity"], i["uom"]) for i in order["items"]] == [
        ("MAT001", 5, "EA"),
        ("MAT002", 3, "EA"),
    ]


def test_create_order_reports_missing_fields_and_items(client, client_headers, seed):
    response = client.post(
        "/api/orders/", json=order_payload(seed, carrierId=None, items=[]), headers=client_headers
    )
    assert response.status_code == 400
    details = response.json()["details"]
    assert "Carrier is required" in details
    assert "At least one item is required" in details


def test_create_order_rejects_non_positive_quantity(client, client_headers, seed):
    items = [{"materialId": seed["materials"]["MAT001"], "quantity": 0}]
    response = client.post("/api/orders/", json=order_payload(seed, items=items), headers=client_headers)
    assert response.status_code == 400
    assert "Item 1: Item quantity must be greater than 0" in response.json()["details"]


def test_create_order_rejects_service_of_another_carrier(client, client_headers, seed):
    response = client.post(
        "/api/orders/",
        json=order_payload(seed, carrierId=seed["carriers"]["FEDEX"]),
        headers=client_headers,
    )
    assert response.status_code == 400
    assert "Carrier service not found" in response.json()["details"]


def test_create_order_rejects_foreign_references(client, other_customer, seed):
    response = client.post("/api/orders/", json=order_payload(seed), headers=other_customer["headers"])
    assert response.status_code == 400
    details = response.json()["details"]
    assert "Ship-to account not found" in details
    assert "Bill-to account not found" in details
    assert f"Material {seed['materials']['MAT001']} not found" in details


def test_bill_to_must_allow_billing(client, client_headers, seed):
    response = client.post(
        "/api/orders/",
        json=order_payload(seed, billToAccountId=seed["accounts"]["ACME-DOCK"]),
        headers=client_headers,
    )
    assert response.status_code == 400
    assert "Bill-to account not found" in response.json()["details"]


def test_orders_are_client_only(client, admin_headers, seed):
    response = client.post("/api/orders/", json=order_payload(seed), headers=admin_headers)
    assert response.status_code == 403
    assert response.json()["error"] == "Access denied. Client access only."


def test_client_without_customer_cannot_order(client, admin_headers, seed):
    client.post(
        "/api/auth/register",
        json={"email": "loner@example.com", "password": "Password789!"},
        headers=admin_headers,
    )
    headers = login(client, "loner@example.com", "Password789!")
    response = client.get("/api/orders/", headers=headers)
    assert response.status_code == 400
    assert response.json()["error"] == "User is not associated with a customer"


def test_order_of_another_customer_is_forbidden(client, client_headers, other_customer, seed):
    order = create_order(client, client_headers, seed)
    response = client.get(f"/api/orders/{order['id']}", headers=other_customer["headers"])
    assert response.status_code == 403
    assert response.json()["error"] == "Access denied"
    response = client.delete(f"/api/orders/{order['id']}", headers=other_customer["headers"])
    assert response.status_code == 403


def test_get_unknown_order(client, client_headers):
    assert client.get("/api/orders/9999", headers=client_headers).status_code == 404


def test_update_draft_order(client, client_headers, seed):
    order = create_order(client, client_headers, seed)
    response = client.put(
        f"/api/orders/{order['id']}",
        json={
            "carrierId": seed["carriers"]["FEDEX"],
            "carrierServiceId": seed["services"]["FEDEX-2DA"],
            "items": [{"materialId": seed["materials"]["MAT003"], "quantity": 7}],
        },
        headers=client_headers,
    )
    assert response.status_code == 200
    data = response.json()
    assert data["carrierName"] == "FedEx"
    assert data["carrierServiceName"] == "2Day"
    assert data["itemCount"] == 1
    assert data["totalQuantity"] == 7
    assert data["orderNumber"] == order["orderNumber"]


def test_update_rechecks_service_against_current_carrier(client, client_headers, seed):
    order = create_order(client, client_headers, seed)
    response = client.put(
        f"/api/orders/{order['id']}",
        json={"carrierServiceId": seed["services"]["FEDEX-GND"]},
        headers=client_headers,
    )
    assert response.status_code == 400
    assert "Carrier service not found" in response.json()["details"]


def test_only_draft_orders_can_change(client, client_headers, seed, db_run):
    order = create_order(client, client_headers, seed)
    set_order_status(db_run, order["id"], OrderStatus.SUBMITTED)

    response = client.put(f"/api/orders/{order['id']}", json={"items": []}, headers=client_headers)
    assert response.status_code == 400
    assert response.json()["error"] == "Only draft orders can be updated"

    response = client.delete(f"/api/orders/{order['id']}", headers=client_headers)
    assert response.status_code == 400
    assert response.json()["error"] == "Only draft orders can be deleted"


def test_delete_draft_order(client, client_headers, seed):
    order = create_order(client, client_headers, seed)
    response = client.delete(f"/api/orders/{order['id']}", headers=client_headers)
    assert response.status_code == 204
    assert client.get(f"/api/orders/{order['id']}", headers=client_headers).status_code == 404


def test_list_orders_with_filters(client, client_headers, seed, db_run):
    first = create_order(client, client_headers, seed)
    second = create_order(client, client_headers, seed)
    set_order_status(db_run, first["id"], OrderStatus.COMPLETED)

    data = client.get("/api/orders/", headers=client_headers).json()
    assert [o["id"] for o in data["orders"]] == [second["id"], first["id"]]
    assert data["pagination"]["total"] == 2

    drafts = client.get("/api/orders/", params={"status": OrderStatus.DRAFT}, headers=client_headers).json()
    assert [o["id"] for o in drafts["orders"]] == [second["id"]]

    future = client.get("/api/orders/", params={"fromDate": "2099-01-01T00:00:00"}, headers=client_headers).json()
    assert future["orders"] == []


def test_other_customer_sees_no_orders(client, client_headers, other_customer, seed):
    create_order(client, client_headers, seed)
    data = client.get("/api/orders/", headers=other_customer["headers"]).json()
    assert data["orders"] == []


def test_order_stats(client, client_headers, seed, db_run):
    first = create_order(client, client_headers, seed)
    create_order(client, client_headers, seed)
    set_order_status(db_run, first["id"], OrderStatus.SUBMITTED)

    response = client.get("/api/orders/stats", params={"periodInMonths": 3}, headers=client_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["totalOrders"] == 2
    assert {s["status"]: s["count"] for s in data["byStatus"]} == {10: 1, 11: 1}
    assert len(data["byMonth"]) == 3
    assert data["byMonth"][-1] == {"month": datetime.utcnow().strftime("%Y-%m"), "count": 2}
    assert data["topCarriers"] == [{"carrierId": seed["carriers"]["UPS"], "name": "UPS", "count": 2}]
    top = data["topMaterials"][0]
    assert top["code"] == "MAT001"
    assert top["totalQuantity"] == 10
    assert top["orderCount"] == 2


def test_order_number_collision_is_retried(client, client_headers, seed, monkeypatch):
    first = create_order(client, client_headers, seed)
    real_next_number = OrderRepository.next_order_number
    calls = []

    async def stale_then_fresh(self, today=None):
        calls.append(today)
        if len(calls) == 1:
            return first["orderNumber"]
        return await real_next_number(self, today)

    monkeypatch.setattr(OrderRepository, "next_order_number", stale_then_fresh)
    second = create_order(client, client_headers, seed)
    assert len(calls) == 2
    assert second["orderNumber"] == f"{order_number_prefix()}0002"


def test_order_number_gives_up_after_retries(client, client_headers, seed, monkeypatch):
    first = create_order(client, client_headers, seed)

    async def always_taken(self, today=None):
        return first["orderNumber"]

    monkeypatch.setattr(OrderRepository, "next_order_number", always_taken)
    response = client.post("/api/orders/", json=order_payload(seed), headers=client_headers)
    assert response.status_code == 500
    assert response.json()["error"] == "Could not allocate an order number"


def test_order_number_sequence_grows_past_four_digits(client, client_headers, seed, db_run):
    first = create_order(client, client_headers, seed)
    prefix = order_number_prefix()

    async def _jump(db):
        await db.execute(update(Order).where(Order.id == first["id"]).values(order_number=f"{prefix}9999"))
        await db.commit()
    db_run(_jump)

    assert create_order(client, client_headers, seed)["orderNumber"] == f"{prefix}10000"
    assert create_order(client, client_headers, seed)["orderNumber"] == f"{prefix}10001"


def test_month_keys_cross_year_boundary():
    assert month_keys(3, datetime(2024, 2, 10)) == ["2023-12", "2024-01", "2024-02"]
    assert month_keys(1, datetime(2024, 7, 1)) == ["2024-07"]
