USER = {
    "name": "Meera Iyer",
    "email": "meera@example.com",
    "userId": "meera",
    "password": "s3cret-pass",
}


def test_signup_and_login(client):
    r = client.post("/api/signup", json=USER)
    assert r.status_code == 201, r.text
    assert r.json()["message"] == "Signup successful!"

    r = client.post("/api/login", json={"userId": "meera", "password": "s3cret-pass"})
    assert r.status_code == 200
    body = r.json()
    assert body["message"] == "Login successful"
    assert body["user"] == {
        "userId": "meera",
        "name": "Meera Iyer",
        "email": "meera@example.com",
    }
    assert "password" not in str(body)


def test_duplicate_signup(client):
    assert client.post("/api/signup", json=USER).status_code == 201

    for duplicate in (
        {**USER, "email": "other@example.com"},
        {**USER, "userId": "meera2"},
    ):
        r = client.post("/api/signup", json=duplicate)
        assert r.status_code == 409
        assert r.json()["error"] == "Email or User ID already exists."


def test_signup_missing_fields(client):
    payload = {k: v for k, v in USER.items() if k != "password"}
    r = client.post("/api/signup", json=payload)
    assert r.status_code == 400
    assert "password" in r.json()["error"]


def test_login_failures_are_indistinguishable(client):
    client.post("/api/signup", json=USER)

    wrong_password = client.post(
        "/api/login", json={"userId": "meera", "password": "nope"}
    )
    unknown_user = client.post(
        "/api/login", json={"userId": "ghost", "password": "nope"}
    )

    assert wrong_password.status_code == 401
    assert unknown_user.status_code == 401
    assert wrong_password.json() == unknown_user.json()
    assert wrong_password.json()["error"] == "Invalid credentials."


def test_login_missing_fields(client):
    r = client.post("/api/login", json={"userId": "meera"})
    assert r.status_code == 400
