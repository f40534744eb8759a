from conftest import auth_headers


def test_unexpected_errors_render_as_500_without_stack(client, topping_store, monkeypatch):
    async def broken_find(**filters):
        raise RuntimeError("database is down")

    monkeypatch.setattr(topping_store, "find", broken_find)
    response = client.get("/api/v1/toppings")

    assert response.status_code == 500
    [error] = response.json()["errors"]
    assert error == {"type": "RuntimeError", "message": "database is down", "path": "/api/v1/toppings"}


def test_unknown_route_uses_error_envelope(client):
    response = client.get("/api/v1/nope")
    assert response.status_code == 404
    assert response.json()["errors"][0]["type"] == "HTTPException"


def test_manager_without_tenant_claim_cannot_create_topping(client):
    response = client.post(
        "/api/v1/toppings",
        json={"name": "Corn", "price": 5},
        headers=auth_headers("manager"),
    )
    assert response.status_code == 500
    assert response.json()["errors"][0]["message"] == "Tenant ID is missing in auth"


def test_health(client):
    response = client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
