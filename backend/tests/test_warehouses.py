from tests.helpers import order_payload, warehouse_payload


def test_create_warehouse_with_customer_links(client, admin_headers, seed):
    payload = warehouse_payload(customerIds=[seed["customer"]])
    response = client.post("/api/warehouses/", json=payload, headers=admin_headers)
    assert response.status_code == 201
    data = response.json()
    assert data["lookupCode"] == "WH-NYC"
    assert data["status"] == 1
    assert data["customerCount"] == 1
    assert data["customers"][0]["lookupCode"] == "ACME"
    assert data["orderCount"] == 0


def test_create_warehouse_validation(client, admin_headers):
    response = client.post(
        "/api/warehouses/",
        json=warehouse_payload(name="", capacity=-5, status=7),
        headers=admin_headers,
    )
    assert response.status_code == 400
    details = response.json()["details"]
    assert "Warehouse Name is required" in details
    assert "Capacity must be a non-negative number" in details
    assert "Invalid status value" in details


def test_create_warehouse_with_unknown_customer(client, admin_headers):
    response = client.post("/api/warehouses/", json=warehouse_payload(customerIds=[9999]), headers=admin_headers)
    assert response.status_code == 400
    assert "Customer not found" in response.json()["details"]


def test_create_warehouse_duplicate_code(client, admin_headers):
    response = client.post("/api/warehouses/", json=warehouse_payload(code="WH-CHI"), headers=admin_headers)
    assert response.status_code == 409
    assert response.json()["error"] == "Warehouse with this code already exists"


def test_create_warehouse_requires_admin(client, client_headers):
    response = client.post("/api/warehouses/", json=warehouse_payload(), headers=client_headers)
    assert response.status_code == 403


def test_list_warehouses_paginates(client, admin_headers):
    for code in ("WH-B", "WH-A"):
        client.post("/api/warehouses/", json=warehouse_payload(code=code), headers=admin_headers)
    response = client.get("/api/warehouses/", params={"page": 1, "limit": 2}, headers=admin_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 3
    assert data["totalPages"] == 2
    assert [w["lookupCode"] for w in data["warehouses"]] == ["WH-A", "WH-B"]

    second = client.get("/api/warehouses/", params={"page": 2, "limit": 2}, headers=admin_headers).json()
    assert [w["lookupCode"] for w in second["warehouses"]] == ["WH-CHI"]


def test_list_warehouses_puts_inactive_first(client, admin_headers):
    for code, status in (("WH-ZZZ", 2), ("WH-AAA", 1)):
        client.post("/api/warehouses/", json=warehouse_payload(code=code, status=status), headers=admin_headers)
    data = client.get("/api/warehouses/", headers=admin_headers).json()
    assert [w["lookupCode"] for w in data["warehouses"]] == ["WH-ZZZ", "WH-AAA", "WH-CHI"]


def test_list_warehouses_filters(client, admin_headers):
    client.post("/api/warehouses/", json=warehouse_payload(), headers=admin_headers)
    by_state = client.get("/api/warehouses/", params={"state": "NY"}, headers=admin_headers).json()
    assert [w["lookupCode"] for w in by_state["warehouses"]] == ["WH-NYC"]
    by_search = client.get("/api/warehouses/", params={"search": "Chicago"}, headers=admin_headers).json()
    assert [w["lookupCode"] for w in by_search["warehouses"]] == ["WH-CHI"]


def test_client_sees_only_linked_warehouses(client, admin_headers, client_headers, seed):
    created = client.post("/api/warehouses/", json=warehouse_payload(), headers=admin_headers).json()

    data = client.get("/api/warehouses/", headers=client_headers).json()
    assert [w["lookupCode"] for w in data["warehouses"]] == ["WH-CHI"]
    assert client.get(f"/api/warehouses/{seed['warehouse']}", headers=client_headers).status_code == 200
    assert client.get(f"/api/warehouses/{created['id']}", headers=client_headers).status_code == 404


def test_update_warehouse_replaces_links(client, admin_headers, other_customer, seed):
    response = client.put(
        f"/api/warehouses/{seed['warehouse']}",
        json={"capacity": 60000, "customerIds": [other_customer["id"]]},
        headers=admin_headers,
    )
    assert response.status_code == 200
    data = response.json()
    assert data["capacity"] == 60000
    assert data["name"] == "Chicago DC"
    assert [c["id"] for c in data["customers"]] == [other_customer["id"]]


def test_update_unknown_warehouse(client, admin_headers):
    response = client.put("/api/warehouses/9999", json={"name": "Nowhere"}, headers=admin_headers)
    assert response.status_code == 404


def test_delete_warehouse_without_orders_removes_it(client, admin_headers, seed):
    created = client.post(
        "/api/warehouses/", json=warehouse_payload(customerIds=[seed["customer"]]), headers=admin_headers
    ).json()
    response = client.delete(f"/api/warehouses/{created['id']}", headers=admin_headers)
    assert response.status_code == 204
    assert client.get(f"/api/warehouses/{created['id']}", headers=admin_headers).status_code == 404


def test_delete_warehouse_with_orders_deactivates_it(client, admin_headers, client_headers, seed):
    order = client.post(
        "/api/orders/", json=order_payload(seed, warehouseId=seed["warehouse"]), headers=client_headers
    )
    assert order.status_code == 201, order.text

    response = client.delete(f"/api/warehouses/{seed['warehouse']}", headers=admin_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Warehouse has been deactivated"
    assert body["warehouse"]["status"] == 2
    assert body["warehouse"]["orderCount"] == 1

    detail = client.get(f"/api/warehouses/{seed['warehouse']}", headers=admin_headers).json()
    assert detail["status"] == 2


def test_warehouse_stats(client, admin_headers, client_headers, seed):
    client.post("/api/warehouses/", json=warehouse_payload(capacity=10000), headers=admin_headers)
    client.post("/api/orders/", json=order_payload(seed, warehouseId=seed["warehouse"]), headers=client_headers)

    data = client.get("/api/warehouses/stats", headers=admin_headers).json()
    assert data["activeWarehouses"] == 2
    assert data["capacity"] == {"total": 60000, "average": 30000.0, "max": 50000, "min": 10000}
    assert {s["state"]: s["count"] for s in data["byState"]} == {"IL": 1, "NY": 1}
    assert data["recentOrders"][0]["lookupCode"] == "WH-CHI"
    assert data["recentOrders"][0]["orderCount"] == 1

    scoped = client.get("/api/warehouses/stats", headers=client_headers).json()
    assert scoped["activeWarehouses"] == 1
