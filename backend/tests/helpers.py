"""Request payload builders and login helper shared by the tests"""


def login(client, email, password):
    response = client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}


def customer_payload(code="GLOBEX", email="buyer@globex.example.com", **overrides):
    payload = {
        "lookupCode": code,
        "name": f"{code.title()} Inc",
        "address": "1 Main St",
        "city": "Springfield",
        "state": "OR",
        "zipCode": "97477",
        "phone": "555-0101",
        "email": f"info@{code.lower()}.example.com",
        "projects": [
            {"name": "Main", "isDefault": True},
            {"name": "Seasonal", "isDefault": False},
        ],
        "users": [{"email": email, "password": "Password456!"}],
    }
    payload.update(overrides)
    return payload


def warehouse_payload(code="WH-NYC", **overrides):
    payload = {
        "lookupCode": code,
        "name": f"Warehouse {code}",
        "address": "10 Dock St",
        "city": "New York",
        "state": "NY",
        "zipCode": "10001",
        "capacity": 1000,
    }
    payload.update(overrides)
    return payload


def order_payload(seed, **overrides):
    payload = {
        "orderTypeId": seed["outbound"],
        "shipToAccountId": seed["accounts"]["ACME-DOCK"],
        "billToAccountId": seed["accounts"]["ACME-HQ"],
        "carrierId": seed["carriers"]["UPS"],
        "carrierServiceId": seed["services"]["UPS-GND"],
        "expectedDeliveryDate": "2030-01-15",
        "items": [
            {"materialId": seed["materials"]["MAT001"], "quantity": 5},
            {"materialId": seed["materials"]["MAT002"], "quantity": 3},
        ],
    }
    payload.update(overrides)
    return payload
