ADDRESS = {
    "address": "77 Canal St",
    "city": "Chicago",
    "state": "IL",
    "zipCode": "60606",
}


def test_ship_to_lists_shipping_accounts(client, client_headers):
    response = client.get("/api/ship-to/", headers=client_headers)
    assert response.status_code == 200
    assert [a["name"] for a in response.json()["addresses"]] == ["Acme Dock", "Acme HQ"]


def test_billing_lists_bill_to_accounts(client, client_headers):
    response = client.get("/api/ship-to/billing", headers=client_headers)
    assert response.status_code == 200
    assert [a["lookupCode"] for a in response.json()["addresses"]] == ["ACME-HQ"]


def test_create_ship_to_generates_lookup_codes(client, client_headers, seed):
    first = client.post("/api/ship-to/", json={"name": "Main Warehouse", **ADDRESS}, headers=client_headers)
    assert first.status_code == 201
    data = first.json()
    assert data["lookupCode"] == "MAIN-WAREHOUSE"
    assert data["accountType"] == "SHIP_TO"
    assert data["customerId"] == seed["customer"]

    second = client.post("/api/ship-to/", json={"name": "Main  Warehouse", **ADDRESS}, headers=client_headers)
    assert second.json()["lookupCode"] == "MAIN-WAREHOUSE-2"

    names = [a["name"] for a in client.get("/api/ship-to/", headers=client_headers).json()["addresses"]]
    assert "Main Warehouse" in names


def test_create_bill_to_account(client, client_headers):
    response = client.post(
        "/api/ship-to/", json={"name": "Accounts Payable", "accountType": "BILL_TO", **ADDRESS}, headers=client_headers
    )
    assert response.status_code == 201
    billing = client.get("/api/ship-to/billing", headers=client_headers).json()["addresses"]
    assert [a["name"] for a in billing] == ["Accounts Payable", "Acme HQ"]


def test_create_ship_to_validation(client, client_headers):
    response = client.post(
        "/api/ship-to/", json={"name": "", "city": "Chicago", "accountType": "PICKUP"}, headers=client_headers
    )
    assert response.status_code == 400
    details = response.json()["details"]
    assert "Name is required" in details
    assert "Address is required" in details
    assert "Invalid account type" in details


def test_ship_to_is_client_only(client, admin_headers):
    assert client.get("/api/ship-to/", headers=admin_headers).status_code == 403
