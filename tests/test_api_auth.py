from tests.conftest import auth_headers


def test_register_and_login(client):
    response = client.post(
        "/api/v1/auth/register",
        json={"email": "Pat@Example.com", "password": "secret123", "name": "Pat"},
    )
    assert response.status_code == 201
    assert response.json()["email"] == "pat@example.com"
    assert response.json()["profile_completed"] is False

    response = client.post("/api/v1/auth/login", data={"username": "pat@example.com", "password": "secret123"})
    assert response.status_code == 200
    body = response.json()
    assert body["token_type"] == "bearer"
    assert body["user"]["email"] == "pat@example.com"
    assert body["access_token"]


def test_register_duplicate_email(client):
    payload = {"email": "pat@example.com", "password": "secret123"}
    client.post("/api/v1/auth/register", json=payload)

    response = client.post("/api/v1/auth/register", json=payload)

    assert response.status_code == 400
    assert response.json() == {"error": True, "message": "User already exists", "status_code": 400}


def test_register_rejects_short_password(client):
    response = client.post("/api/v1/auth/register", json={"email": "pat@example.com", "password": "123"})

    assert response.status_code == 422


def test_login_with_wrong_password(client):
    client.post("/api/v1/auth/register", json={"email": "pat@example.com", "password": "secret123"})

    response = client.post("/api/v1/auth/login", data={"username": "pat@example.com", "password": "nope"})

    assert response.status_code == 400
    assert response.json()["message"] == "Incorrect email or password"


def test_me_requires_valid_token(client):
    assert client.get("/api/v1/auth/me").status_code == 401

    response = client.get("/api/v1/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 403

    headers = auth_headers(client)
    response = client.get("/api/v1/auth/me", headers=headers)
    assert response.status_code == 200
    assert response.json()["email"] == "patient@example.com"


def test_health_and_metrics(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["project"] == "MediTracker"

    assert client.get("/metrics").status_code == 200
