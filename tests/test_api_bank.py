from restapi.dependencies import get_plaid


def link_bank(client, headers):
    response = client.post(
        "/api/plaid/exchange-public-token",
        json={"publicToken": "public-sandbox-1", "metadata": {"institution": {"name": "First Platypus Bank"}}},
        headers=headers,
    )
    assert response.status_code == 200
    return response.json()


def test_create_link_token(client, auth_headers):
    user = client.get("/api/users/me", headers=auth_headers).json()

    response = client.get("/api/plaid/create-link-token", headers=auth_headers)
    assert response.json() == {"link_token": f"link-sandbox-{user['id']}"}


def test_exchange_links_accounts(client, auth_headers):
    accounts = link_bank(client, auth_headers)

    assert [account["accountId"] for account in accounts] == ["acc_checking"]
    assert accounts[0]["institutionName"] == "First Platypus Bank"
    assert client.get("/api/users/me", headers=auth_headers).json()["plaidItemId"] == "item-123"
    assert client.get("/api/bank-accounts", headers=auth_headers).json() == accounts

    # linking again refreshes instead of duplicating
    link_bank(client, auth_headers)
    assert len(client.get("/api/bank-accounts", headers=auth_headers).json()) == 1


def test_sync_mirrors_posted_transactions(client, auth_headers):
    account = link_bank(client, auth_headers)[0]

    response = client.post("/api/bank-accounts/sync", json={"accountId": account["id"]}, headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == {"synced": 2, "skipped": 1}

    transactions = client.get("/api/transactions").json()
    assert [(t["type"], t["amount"], t["category"]) for t in transactions] == [
        ("expense", "4.33", "Food & Dining"),
        ("income", "2500.00", "Other Income"),
    ]
    assert client.get("/api/bank-accounts", headers=auth_headers).json()[0]["lastSyncedAt"] is not None

    again = client.post("/api/bank-accounts/sync", json={"accountId": account["id"]}, headers=auth_headers)
    assert again.json() == {"synced": 0, "skipped": 3}
    assert len(client.get("/api/transactions").json()) == 2


def test_sync_of_someone_elses_account(client, auth_headers):
    account = link_bank(client, auth_headers)[0]
    other = client.post("/api/auth/register", json={"username": "mallory", "password": "secret123"}).json()
    other_headers = {"Authorization": f"Bearer {other['accessToken']}"}

    response = client.post("/api/bank-accounts/sync", json={"accountId": account["id"]}, headers=other_headers)
    assert response.status_code == 404
    assert client.post("/api/bank-accounts/sync", json={"accountId": 999}, headers=auth_headers).status_code == 404


def test_bank_routes_need_auth(client):
    assert client.get("/api/bank-accounts").status_code == 401


def test_plaid_not_configured(app, client, auth_headers):
    del app.dependency_overrides[get_plaid]

    response = client.get("/api/plaid/create-link-token", headers=auth_headers)

    assert response.status_code == 503
    assert response.json() == {"message": "Bank integration is not configured"}


def test_account_linked_by_another_user_is_a_conflict(client, auth_headers):
    account = link_bank(client, auth_headers)[0]
    other = client.post("/api/auth/register", json={"username": "mallory", "password": "secret123"}).json()
    other_headers = {"Authorization": f"Bearer {other['accessToken']}"}

    response = client.post(
        "/api/plaid/exchange-public-token",
        json={"publicToken": "public-sandbox-2"},
        headers=other_headers,
    )
    assert response.status_code == 409

    assert client.get("/api/bank-accounts", headers=auth_headers).json() == [account]
    assert client.get("/api/bank-accounts", headers=other_headers).json() == []
    assert client.get("/api/users/me", headers=other_headers).json()["plaidItemId"] is None
