from tests.helpers import order_payload


def test_client_lists_own_materials(client, client_headers):
    response = client.get("/api/materials/", headers=client_headers)
    assert response.status_code == 200
    data = response.json()
    assert [m["code"] for m in data["materials"]] == ["MAT001", "MAT002", "MAT003", "MAT004", "MAT005"]
    assert data["pagination"] == {"total": 5, "page": 1, "limit": 20, "totalPages": 1}
    assert data["materials"][0]["projectName"] == "Default"
    assert data["materials"][0]["customerName"] == "Acme Corporation"


def test_materials_are_scoped_to_customer(client, admin_headers, other_customer, seed):
    client.post(
        "/api/materials/",
        json={"lookupCode": "GLX-1", "code": "GLX-1", "uom": "EA", "availableQuantity": 3,
              "projectId": other_customer["projects"]["Main"]},
        headers=admin_headers,
    )
    mine = client.get("/api/materials/", headers=other_customer["headers"]).json()
    assert [m["code"] for m in mine["materials"]] == ["GLX-1"]

    everything = client.get("/api/materials/", headers=admin_headers).json()
    assert everything["pagination"]["total"] == 6

    response = client.get(f"/api/materials/{seed['materials']['MAT001']}", headers=other_customer["headers"])
    assert response.status_code == 404


def test_list_materials_filters(client, client_headers, seed):
    data = client.get("/api/materials/", params={"uom": "EA", "limit": 2}, headers=client_headers).json()
    assert data["pagination"]["total"] == 3
    assert data["pagination"]["totalPages"] == 2
    assert len(data["materials"]) == 2

    data = client.get("/api/materials/", params={"search": "Tape"}, headers=client_headers).json()
    assert [m["code"] for m in data["materials"]] == ["MAT004"]

    retail = seed["projects"]["ACME-RETAIL"]
    data = client.get("/api/materials/", params={"projectId": retail}, headers=client_headers).json()
    assert data["materials"] == []


def test_search_materials_by_quantity(client, client_headers):
    response = client.get(
        "/api/materials/search", params={"minQuantity": 40, "maxQuantity": 80}, headers=client_headers
    )
    assert response.status_code == 200
    assert [m["code"] for m in response.json()["materials"]] == ["MAT002", "MAT003", "MAT004"]

    response = client.get("/api/materials/search", params={"query": "Box"}, headers=client_headers)
    assert len(response.json()["materials"]) == 3


def test_list_uoms(client, client_headers):
    response = client.get("/api/materials/uoms", headers=client_headers)
    assert response.status_code == 200
    assert response.json()["uoms"] == ["CS", "EA", "PL"]


def test_material_detail_includes_order_history(client, client_headers, seed):
    order = client.post("/api/orders/", json=order_payload(seed), headers=client_headers).json()

    response = client.get(f"/api/materials/{seed['materials']['MAT001']}", headers=client_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["project"]["lookupCode"] == "ACME-DEFAULT"
    assert data["orderCount"] == 1
    history = data["orderHistory"]
    assert len(history) == 1
    assert history[0]["orderId"] == order["id"]
    assert history[0]["orderNumber"] == order["orderNumber"]
    assert history[0]["status"] == 10
    assert history[0]["quantity"] == 5


def test_create_material_validation(client, admin_headers, seed):
    project = seed["projects"]["ACME-DEFAULT"]
    response = client.post(
        "/api/materials/",
        json={"lookupCode": "MAT100", "code": "MAT100", "uom": "BOX", "availableQuantity": -1, "projectId": project},
        headers=admin_headers,
    )
    assert response.status_code == 400
    details = response.json()["details"]
    assert "Invalid unit of measure" in details
    assert "Available quantity must be a non-negative number" in details

    response = client.post(
        "/api/materials/",
        json={"lookupCode": "MAT001", "code": "MAT001", "projectId": project},
        headers=admin_headers,
    )
    assert response.status_code == 409


def test_create_and_update_material(client, admin_headers, seed):
    response = client.post(
        "/api/materials/",
        json={"lookupCode": "MAT100", "code": "MAT100", "description": "Pallet Jack",
              "projectId": seed["projects"]["ACME-RETAIL"]},
        headers=admin_headers,
    )
    assert response.status_code == 201
    created = response.json()
    assert created["uom"] == "EA"
    assert created["availableQuantity"] == 0
    assert created["projectName"] == "Retail Rollout"

    response = client.put(
        f"/api/materials/{created['id']}", json={"availableQuantity": 9, "uom": "PL"}, headers=admin_headers
    )
    assert response.status_code == 200
    assert response.json()["availableQuantity"] == 9
    assert response.json()["uom"] == "PL"


def test_material_management_requires_admin(client, client_headers, seed):
    response = client.put(
        f"/api/materials/{seed['materials']['MAT001']}", json={"availableQuantity": 1}, headers=client_headers
    )
    assert response.status_code == 403
