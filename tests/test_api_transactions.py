EXPENSE = {
    "type": "expense",
    "amount": "42.50",
    "category": "Food & Dining",
    "description": "Dinner",
    "date": "2024-02-10T19:30:00",
}


def test_create_then_read(client):
    response = client.post("/api/transactions", json=EXPENSE)
    assert response.status_code == 201
    created = response.json()
    assert {key: created[key] for key in EXPENSE} == EXPENSE
    assert "id" in created and "createdAt" in created

    response = client.get(f"/api/transactions/{created['id']}")
    assert response.status_code == 200
    assert response.json() == created


def test_amount_is_normalized_to_cents(client):
    response = client.post("/api/transactions", json={**EXPENSE, "amount": 7})
    assert response.json()["amount"] == "7.00"


def test_timezone_aware_dates_are_stored_as_utc(client):
    response = client.post("/api/transactions", json={**EXPENSE, "date": "2024-02-10T21:30:00+02:00"})
    assert response.json()["date"] == "2024-02-10T19:30:00"


def test_list_filters(client):
    client.post("/api/transactions", json=EXPENSE)
    client.post("/api/transactions", json={**EXPENSE, "type": "income", "category": "Salary", "date": "2024-02-01T09:00:00"})
    client.post("/api/transactions", json={**EXPENSE, "date": "2024-03-01T09:00:00"})

    assert len(client.get("/api/transactions").json()) == 3
    assert [t["category"] for t in client.get("/api/transactions", params={"type": "income"}).json()] == ["Salary"]

    in_february = client.get(
        "/api/transactions",
        params={"startDate": "2024-02-01T00:00:00", "endDate": "2024-02-29T23:59:59"},
    ).json()
    assert [t["date"] for t in in_february] == ["2024-02-10T19:30:00", "2024-02-01T09:00:00"]

    # type wins over dates
    by_type = client.get(
        "/api/transactions",
        params={"type": "expense", "startDate": "2024-02-01T00:00:00", "endDate": "2024-02-29T23:59:59"},
    ).json()
    assert len(by_type) == 2


def test_partial_update(client):
    created = client.post("/api/transactions", json=EXPENSE).json()

    response = client.put(f"/api/transactions/{created['id']}", json={"amount": "50"})
    assert response.status_code == 200
    assert response.json()["amount"] == "50.00"
    assert response.json()["description"] == "Dinner"


def test_update_rejects_null_required_field(client):
    created = client.post("/api/transactions", json=EXPENSE).json()

    response = client.put(f"/api/transactions/{created['id']}", json={"amount": None})
    assert response.status_code == 400


def test_delete(client):
    created = client.post("/api/transactions", json=EXPENSE).json()

    response = client.delete(f"/api/transactions/{created['id']}")
    assert response.status_code == 204
    assert client.get(f"/api/transactions/{created['id']}").status_code == 404
    assert client.delete(f"/api/transactions/{created['id']}").status_code == 404


def test_missing_transaction(client):
    response = client.get("/api/transactions/12345")
    assert response.status_code == 404
    assert response.json() == {"message": "Transaction not found"}

    assert client.put("/api/transactions/12345", json={"amount": "1"}).status_code == 404
