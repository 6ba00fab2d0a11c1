def test_signup_and_login(client):
    response = client.post("/auth/signup", json={
        "email": "new@example.com",
        "username": "newuser",
        "password": "password123"
    })
    assert response.status_code == 201
    assert "password_hash" not in response.json()

    login = client.post("/auth/login", json={"email": "new@example.com", "password": "password123"})
    assert login.status_code == 200
    token = login.json()["access_token"]

    response = client.get("/productivity/current", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200


def test_signup_duplicate_email(client, test_user):
    response = client.post("/auth/signup", json={
        "email": test_user.email,
        "username": "someone_else",
        "password": "password123"
    })
    assert response.status_code == 400


def test_login_wrong_password(client, test_user):
    response = client.post("/auth/login", json={"email": test_user.email, "password": "nope"})
    assert response.status_code == 401


def test_invalid_token(client):
    response = client.get("/tasks", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401


def test_health(client):
    assert client.get("/health/z").json()["status"] == "ok"
