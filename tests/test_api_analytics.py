SCENARIO = [
    {"type": "income", "amount": "1000", "category": "Salary", "date": "2024-01-01T10:00:00"},
    {"type": "expense", "amount": "200", "category": "Food", "date": "2024-01-02T10:00:00"},
    {"type": "business", "amount": "50", "category": "Travel", "date": "2024-01-03T10:00:00"},
]


def add_scenario(client):
    for transaction in SCENARIO:
        assert client.post("/api/transactions", json=transaction).status_code == 201


def test_overview(client):
    add_scenario(client)
    client.post("/api/loans", json={"name": "Car", "totalAmount": "100", "remainingAmount": "40"})

    assert client.get("/api/analytics/overview").json() == {
        "totalIncome": "1000.00",
        "totalExpenses": "250.00",
        "netBalance": "750.00",
        "totalLoanBalance": "40.00",
    }


def test_overview_within_dates(client):
    add_scenario(client)

    overview = client.get(
        "/api/analytics/overview",
        params={"startDate": "2024-01-02T00:00:00", "endDate": "2024-01-02T23:59:59"},
    ).json()
    assert overview["totalIncome"] == "0.00"
    assert overview["totalExpenses"] == "200.00"
    assert overview["netBalance"] == "-200.00"


def test_overview_formatted_for_a_currency(client):
    add_scenario(client)

    overview = client.get("/api/analytics/overview", params={"currency": "SEK"}).json()
    assert overview["formatted"]["netBalance"] == "750.00 kr"
    assert overview["formatted"]["totalIncome"] == "1000.00 kr"


def test_category_breakdown(client):
    add_scenario(client)

    assert client.get("/api/analytics/category-breakdown").json() == [
        {"category": "Food", "amount": "200.00"},
    ]
    assert client.get("/api/analytics/category-breakdown", params={"type": "business"}).json() == [
        {"category": "Travel", "amount": "50.00"},
    ]


def test_breakdown_sums_to_overview_total(client):
    add_scenario(client)
    client.post("/api/transactions", json={**SCENARIO[1], "category": "Rent", "amount": "700.10"})
    client.post("/api/transactions", json={**SCENARIO[1], "amount": "0.15"})

    breakdown = client.get("/api/analytics/category-breakdown", params={"type": "expense"}).json()
    assert [row["category"] for row in breakdown] == ["Rent", "Food"]
    assert breakdown[1]["amount"] == "200.15"


def test_export_csv(client):
    client.post("/api/transactions", json={**SCENARIO[1], "description": 'Coffee, "nice"'})

    response = client.get("/api/export/transactions")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert response.headers["content-disposition"] == "attachment; filename=transactions.csv"
    assert response.text.splitlines() == [
        "Date,Type,Category,Description,Amount",
        '2024-01-02,expense,Food,"Coffee, ""nice""",200.00',
    ]


def upload(client, content, filename="transactions.csv"):
    return client.post(
        "/api/import/transactions",
        files={"file": (filename, content.encode(), "text/csv")},
    )


def test_import_csv(client):
    content = (
        "Date,Type,Category,Description,Amount\n"
        "2024-01-05,income,Salary,January,1500.00\n"
        '2024-01-06,expense,Food,"Coffee, ""nice""",4.20\n'
    )

    body = upload(client, content).json()
    assert body["success"] is True
    assert body["imported"] == 2

    transactions = client.get("/api/transactions").json()
    assert [t["description"] for t in transactions] == ['Coffee, "nice"', "January"]


def test_import_is_all_or_nothing(client):
    content = (
        "Date,Type,Category,Description,Amount\n"
        "2024-01-05,income,Salary,January,1500.00\n"
        "2024-01-06,gift,Food,Lunch,4\n"
    )

    body = upload(client, content).json()
    assert body["success"] is False
    assert [error["row"] for error in body["errors"]] == [3]
    assert client.get("/api/transactions").json() == []


def test_import_rejects_other_files(client):
    body = upload(client, "hello", filename="notes.txt").json()
    assert body["success"] is False
    assert "CSV" in body["message"]

    body = upload(client, "Date,Amount\n2024-01-01,3\n").json()
    assert body["success"] is False
