def register(client, username="bob", password="secret123"):
    return client.post("/api/auth/register", json={"username": username, "password": password})


def test_register_returns_user_and_token(client):
    response = register(client)

    assert response.status_code == 201
    body = response.json()
    assert body["username"] == "bob"
    assert body["subscriptionStatus"] == "free"
    assert body["tokenType"] == "bearer"
    assert body["accessToken"]
    assert "password" not in body


def test_duplicate_username(client):
    register(client)
    response = register(client)

    assert response.status_code == 400
    assert response.json() == {"message": "Username already registered"}


def test_login(client):
    register(client)

    response = client.post("/api/auth/login", data={"username": "bob", "password": "secret123"})
    assert response.status_code == 200
    token = response.json()["accessToken"]

    me = client.get("/api/users/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["username"] == "bob"


def test_login_with_wrong_password(client):
    register(client)

    response = client.post("/api/auth/login", data={"username": "bob", "password": "wrong-one"})
    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"


def test_protected_routes_need_a_valid_token(client):
    assert client.get("/api/users/me").status_code == 401
    assert client.get("/api/users/me", headers={"Authorization": "Bearer garbage"}).status_code == 401


def test_subscription_of_a_new_user(client, auth_headers):
    body = client.get("/api/users/me/subscription", headers=auth_headers).json()

    assert body["plan"] == "free"
    assert body["trialDaysLeft"] == 0
    assert body["features"]["maxTransactions"] == 50
    assert body["features"]["advancedReports"] is False


def test_start_trial_once(client, auth_headers):
    response = client.post("/api/users/me/trial", json={"kind": "annual"}, headers=auth_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["plan"] == "annual_trial"
    assert body["trialDaysLeft"] == 30
    assert body["features"]["maxTransactions"] is None

    assert client.get("/api/users/me", headers=auth_headers).json()["subscriptionStatus"] == "annual_trial"

    again = client.post("/api/users/me/trial", json={"kind": "monthly"}, headers=auth_headers)
    assert again.status_code == 400


def test_upgrade_required(client, auth_headers):
    response = client.get(
        "/api/users/me/upgrade-required", params={"feature": "dataExport"}, headers=auth_headers
    )
    assert response.json() == {"feature": "dataExport", "upgradeRequired": True}

    response = client.get(
        "/api/users/me/upgrade-required", params={"feature": "maxTransactions"}, headers=auth_headers
    )
    assert response.json()["upgradeRequired"] is False

    response = client.get(
        "/api/users/me/upgrade-required", params={"feature": "teleport"}, headers=auth_headers
    )
    assert response.status_code == 400
