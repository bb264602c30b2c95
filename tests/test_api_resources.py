CATEGORY = {"name": "Pets", "type": "expense", "color": "#a855f7", "icon": "paw"}
LOAN = {
    "name": "Car loan",
    "totalAmount": "100.00",
    "remainingAmount": "40.00",
    "interestRate": "5.25",
    "monthlyPayment": "10.00",
    "dueDate": "2024-12-01T00:00:00",
}
BUDGET = {
    "userId": 1,
    "name": "Groceries",
    "targetAmount": "400.00",
    "currentAmount": "100.00",
    "period": "monthly",
    "startDate": "2024-01-01T00:00:00",
    "endDate": "2024-01-31T23:59:59",
}
GOAL = {"userId": 1, "title": "Emergency fund", "targetAmount": "1000.00", "currentAmount": "250.00"}


def test_default_categories_are_seeded_at_startup(client):
    categories = client.get("/api/categories").json()
    assert len(categories) == 18
    assert categories[0]["name"] == "Salary"

    income = client.get("/api/categories", params={"type": "income"}).json()
    assert [c["name"] for c in income] == ["Salary", "Freelance", "Investment", "Other Income"]


def test_category_crud(client):
    response = client.post("/api/categories", json=CATEGORY)
    assert response.status_code == 201
    category = response.json()

    response = client.put(f"/api/categories/{category['id']}", json={"color": "#000"})
    assert response.json()["color"] == "#000"
    assert response.json()["name"] == "Pets"

    assert client.delete(f"/api/categories/{category['id']}").status_code == 204
    assert client.delete(f"/api/categories/{category['id']}").status_code == 404


def test_category_names_are_unique(client):
    response = client.post("/api/categories", json={**CATEGORY, "name": "Salary"})
    assert response.status_code == 400
    assert response.json() == {"message": "Category with this name already exists"}

    pets = client.post("/api/categories", json=CATEGORY).json()
    response = client.put(f"/api/categories/{pets['id']}", json={"name": "Travel"})
    assert response.status_code == 400

    # renaming to its own name is fine
    assert client.put(f"/api/categories/{pets['id']}", json={"name": "Pets"}).status_code == 200


def test_category_color_must_be_hex(client):
    assert client.post("/api/categories", json={**CATEGORY, "color": "purple"}).status_code == 400


def test_loan_crud_with_progress(client):
    response = client.post("/api/loans", json=LOAN)
    assert response.status_code == 201
    loan = response.json()
    assert loan["progress"] == 60.0
    assert loan["status"] == "active"

    assert client.get(f"/api/loans/{loan['id']}").json()["remainingAmount"] == "40.00"

    paid_off = client.put(f"/api/loans/{loan['id']}", json={"remainingAmount": "0", "status": "paid"}).json()
    assert paid_off["progress"] == 100.0

    assert client.delete(f"/api/loans/{loan['id']}").status_code == 204
    assert client.get(f"/api/loans/{loan['id']}").status_code == 404


def test_loans_newest_first(client):
    first = client.post("/api/loans", json=LOAN).json()
    second = client.post("/api/loans", json={**LOAN, "name": "Laptop"}).json()

    assert [loan["id"] for loan in client.get("/api/loans").json()] == [second["id"], first["id"]]

def test_loan_remaining_cannot_exceed_total(client):
    response = client.post("/api/loans", json={**LOAN, "remainingAmount": "150.00"})
    assert response.status_code == 400

    loan = client.post("/api/loans", json=LOAN).json()
    response = client.put(f"/api/loans/{loan['id']}", json={"totalAmount": "10.00"})
    assert response.status_code == 400
    assert client.get(f"/api/loans/{loan['id']}").json()["progress"] == 60.0



def test_budget_crud_with_status(client):
    response = client.post("/api/budgets", json=BUDGET)
    assert response.status_code == 201
    budget = response.json()
    assert budget["progress"] == 25.0
    assert budget["status"] == "good"
    assert budget["alertThreshold"] == "0.80"

    updated = client.put(f"/api/budgets/{budget['id']}", json={"currentAmount": "420.00"}).json()
    assert updated["status"] == "exceeded"

    client.post("/api/budgets", json={**BUDGET, "userId": 2})
    assert len(client.get("/api/budgets", params={"userId": 1}).json()) == 1
    assert len(client.get("/api/budgets").json()) == 2

    assert client.delete(f"/api/budgets/{budget['id']}").status_code == 204
    assert client.get(f"/api/budgets/{budget['id']}").status_code == 404


def test_budget_dates_must_be_ordered(client):
    response = client.post("/api/budgets", json={**BUDGET, "endDate": "2023-12-31T00:00:00"})
    assert response.status_code == 400


def test_budget_update_keeps_dates_ordered(client):
    budget = client.post("/api/budgets", json=BUDGET).json()

    response = client.put(f"/api/budgets/{budget['id']}", json={"endDate": "2023-01-01T00:00:00"})
    assert response.status_code == 400
    response = client.put(f"/api/budgets/{budget['id']}", json={"startDate": "2024-02-15T00:00:00"})
    assert response.status_code == 400
    assert client.get(f"/api/budgets/{budget['id']}").json()["endDate"] == budget["endDate"]

    moved = client.put(f"/api/budgets/{budget['id']}", json={
        "startDate": "2024-02-01T00:00:00",
        "endDate": "2024-02-29T00:00:00",
    })
    assert moved.status_code == 200


def test_goal_crud(client):
    response = client.post("/api/goals", json=GOAL)
    assert response.status_code == 201
    goal = response.json()
    assert goal["progress"] == 25.0
    assert goal["priority"] == "medium"

    updated = client.put(f"/api/goals/{goal['id']}", json={"status": "completed"}).json()
    assert updated["status"] == "completed"
    assert [g["id"] for g in client.get("/api/goals", params={"userId": 1}).json()] == [goal["id"]]
    assert client.get("/api/goals", params={"userId": 2}).json() == []

    assert client.delete(f"/api/goals/{goal['id']}").status_code == 204
    assert client.put(f"/api/goals/{goal['id']}", json={"status": "paused"}).status_code == 404


def test_currencies(client):
    currencies = client.get("/api/currencies").json()

    assert currencies[0] == {"code": "USD", "symbol": "$", "name": "US Dollar", "country": "United States"}
    assert "SEK" in {currency["code"] for currency in currencies}
