def test_list_active_carriers_with_services(client, client_headers):
    response = client.get("/api/carriers/", headers=client_headers)
    assert response.status_code == 200
    carriers = response.json()["carriers"]
    assert [c["lookupCode"] for c in carriers] == ["FEDEX", "UPS"]
    assert len(carriers[1]["services"]) == 3


def test_carriers_require_token(client, seed):
    assert client.get("/api/carriers/").status_code == 401


def test_inactive_carriers_and_services_are_hidden(client, admin_headers, seed):
    client.put(f"/api/carriers/{seed['carriers']['FEDEX']}", json={"status": 2}, headers=admin_headers)
    client.put(f"/api/carriers/services/{seed['services']['UPS-2DA']}", json={"status": 2}, headers=admin_headers)

    carriers = client.get("/api/carriers/", headers=admin_headers).json()["carriers"]
    assert [c["lookupCode"] for c in carriers] == ["UPS"]
    assert sorted(s["lookupCode"] for s in carriers[0]["services"]) == ["UPS-3DS", "UPS-GND"]

    services = client.get(f"/api/carriers/{seed['carriers']['UPS']}/services", headers=admin_headers).json()
    assert [s["name"] for s in services["services"]] == ["3 Day Select", "Ground"]


def test_get_carrier(client, client_headers, seed):
    response = client.get(f"/api/carriers/{seed['carriers']['UPS']}", headers=client_headers)
    assert response.status_code == 200
    assert response.json()["name"] == "UPS"
    assert client.get("/api/carriers/9999", headers=client_headers).status_code == 404


def test_services_of_unknown_carrier(client, client_headers):
    response = client.get("/api/carriers/9999/services", headers=client_headers)
    assert response.status_code == 404
    assert response.json()["error"] == "Carrier not found"


def test_create_carrier_and_service(client, admin_headers):
    response = client.post("/api/carriers/", json={"lookupCode": "DHL", "name": "DHL"}, headers=admin_headers)
    assert response.status_code == 201
    carrier = response.json()
    assert carrier["status"] == 1
    assert carrier["services"] == []

    response = client.post(
        f"/api/carriers/{carrier['id']}/services",
        json={"lookupCode": "DHL-EXP", "name": "Express", "description": "DHL Express"},
        headers=admin_headers,
    )
    assert response.status_code == 201
    assert response.json()["carrierId"] == carrier["id"]


def test_create_carrier_conflicts_and_validation(client, admin_headers, seed):
    assert client.post("/api/carriers/", json={"lookupCode": "UPS", "name": "Again"}, headers=admin_headers).status_code == 409

    response = client.post("/api/carriers/", json={"lookupCode": "X" * 51, "name": ""}, headers=admin_headers)
    assert response.status_code == 400
    details = response.json()["details"]
    assert "Carrier Name is required" in details
    assert any("Carrier Code" in d for d in details)

    response = client.post(
        f"/api/carriers/{seed['carriers']['UPS']}/services",
        json={"lookupCode": "FEDEX-GND", "name": "Copy"},
        headers=admin_headers,
    )
    assert response.status_code == 409


def test_carrier_management_requires_admin(client, client_headers, seed):
    response = client.post("/api/carriers/", json={"lookupCode": "DHL", "name": "DHL"}, headers=client_headers)
    assert response.status_code == 403
    response = client.put(f"/api/carriers/{seed['carriers']['UPS']}", json={"name": "U"}, headers=client_headers)
    assert response.status_code == 403
