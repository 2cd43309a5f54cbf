def test_health_is_public(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_root(client):
    assert client.get("/").status_code == 200


def test_db_test_counts_rows(client, admin_headers):
    response = client.get("/api/db-test", headers=admin_headers)
    assert response.status_code == 200
    tables = response.json()["tables"]
    assert tables["users"] == 2
    assert tables["materials"] == 5
    assert tables["statuses"] == 8
    assert tables["orders"] == 0


def test_db_test_requires_admin(client, client_headers):
    assert client.get("/api/db-test", headers=client_headers).status_code == 403


def test_statuses_catalog(client, client_headers):
    response = client.get("/api/statuses", headers=client_headers)
    assert response.status_code == 200
    statuses = response.json()["statuses"]
    assert [s["code"] for s in statuses] == [1, 2, 3, 10, 11, 12, 13, 14]
    assert statuses[3]["name"] == "Draft"
    assert statuses[3]["entity"] == "ORDER"


def test_order_types(client, client_headers):
    response = client.get("/api/order-types", headers=client_headers)
    assert response.status_code == 200
    assert [t["lookupCode"] for t in response.json()["orderTypes"]] == ["INBOUND", "OUTBOUND"]


def test_unknown_route_uses_error_body(client):
    response = client.get("/api/no-such-thing")
    assert response.status_code == 404
    assert "error" in response.json()
