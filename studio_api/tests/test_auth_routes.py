from sqlmodel import select

from studio_api.auth import create_access_token, verify_password
from studio_api.models import User

from conftest import PASSWORD, auth_headers, make_studio


def test_register(client, session):
    response = client.post(
        "/api/auth/register",
        json={"username": "johndoe", "email": "john@doe.com", "password": "johnspass"},
    )
    assert response.status_code == 201
    assert response.json() == {"message": "User registered successfully", "success": True}
    # no auto-login
    assert "token" not in response.json()

    user = session.exec(select(User).where(User.email == "john@doe.com")).first()
    assert user.password_hash != "johnspass"
    assert verify_password("johnspass", user.password_hash)
    assert user.role == "user"


def test_register_duplicate_email(client, owner):
    response = client.post(
        "/api/auth/register",
        json={"username": "someone", "email": owner.email, "password": "whatever"},
    )
    assert response.status_code == 409
    assert response.json() == {"error": "Email already exists"}


def test_register_missing_fields(client):
    response = client.post("/api/auth/register", json={"email": "john@doe.com"})
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Invalid request"
    assert body["details"]


def test_login(client, owner):
    response = client.post("/api/auth/login", json={"email": owner.email, "password": PASSWORD})
    assert response.status_code == 200
    data = response.json()
    assert data["token"]
    assert data["user"]["email"] == owner.email
    assert data["user"]["role"] == "user"
    assert "password_hash" not in data["user"]

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {data['token']}"})
    assert me.status_code == 200
    assert me.json()["id"] == owner.id


def test_login_failures_are_uniform(client, owner):
    wrong_password = client.post("/api/auth/login", json={"email": owner.email, "password": "nope"})
    unknown_email = client.post("/api/auth/login", json={"email": "ghost@example.com", "password": PASSWORD})

    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json() == {"error": "Invalid credentials"}


def test_me_not_logged_in(client):
    response = client.get("/api/auth/me")
    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized: Missing or invalid token"}


def test_me_invalid_token(client):
    response = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized: Invalid token"}


def test_me_expired_token(client, owner):
    token = create_access_token(
        {"sub": owner.email, "id": owner.id, "email": owner.email, "role": owner.role},
        expires_minutes=-1,
    )
    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_me_token_without_identity(client):
    token = create_access_token({"sub": "someone@example.com"})
    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_me_user_removed(client, session, owner):
    headers = auth_headers(owner)
    session.delete(owner)
    session.commit()
    response = client.get("/api/auth/me", headers=headers)
    assert response.status_code == 404


def test_my_items(client, session, owner, other_user):
    first = make_studio(session, owner, name="First")
    second = make_studio(session, owner, name="Second")
    make_studio(session, other_user, name="Not mine")

    response = client.get("/api/auth/my-items", headers=auth_headers(owner))
    assert response.status_code == 200
    assert [s["id"] for s in response.json()] == [second.id, first.id]
