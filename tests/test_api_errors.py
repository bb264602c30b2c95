from fastapi.testclient import TestClient

from restapi.dependencies import get_storage


def test_validation_errors_are_listed_per_field(client):
    response = client.post("/api/transactions", json={
        "type": "gift",
        "amount": "12.345",
        "category": "",
        "date": "yesterday",
    })

    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Invalid request data"
    fields = {error["field"] for error in body["errors"]}
    assert {"type", "amount", "category", "date"} <= fields
    assert all(error["message"] and error["type"] for error in body["errors"])


def test_invalid_path_parameter(client):
    response = client.get("/api/loans/abc")
    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "loan_id"


def test_unexpected_errors_are_hidden(app):
    class BrokenStorage:
        async def get_loans(self):
            raise RuntimeError("database exploded")

    app.dependency_overrides[get_storage] = lambda: BrokenStorage()
    with TestClient(app, raise_server_exceptions=False) as client:
        response = client.get("/api/loans")

    assert response.status_code == 500
    assert response.json() == {"message": "Internal server error"}


def test_health_check(client):
    response = client.get("/health_check/")
    assert response.status_code == 200
    assert response.json() == {"service_name": "Finance Tracker", "status": "healthy"}
