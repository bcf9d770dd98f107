import pytest

from .conftest import ADMIN_TOKEN


def test_admin_login(client):
    response = client.post("/admin-login", json={"email": " ADMIN@example.com", "password": "adminpass "})
    assert response.status_code == 200
    assert response.json() == {"email": "Admin@Example.com", "isAdmin": True}


def test_admin_login_against_hashed_password(client):
    assert client.post("/admin-login", json={"email": "ops@example.com", "password": "opspass"}).status_code == 200


@pytest.mark.parametrize(
    "body,status,error",
    [
        ({"email": "admin@example.com"}, 400, "Email and password are required"),
        ({"password": "adminpass"}, 400, "Email and password are required"),
        ({"email": "admin@example.com", "password": "wrong"}, 401, "Invalid admin credentials"),
        ({"email": "a@x.com", "password": "adminpass"}, 401, "Invalid admin credentials"),
    ],
)
def test_admin_login_failures(client, body, status, error):
    response = client.post("/admin-login", json=body)
    assert response.status_code == status
    assert response.json() == {"error": error}


def test_registered_users_are_not_admins(client, user):
    assert client.post("/admin-login", json={"email": "a@x.com", "password": "secret1"}).status_code == 401


def test_fee_schedule_requires_admin_token(client, user):
    ok = client.get("/admin/fees", params={"token": ADMIN_TOKEN})
    assert ok.status_code == 200
    assert ok.json() == {"baseFee": 1, "percentageFee": 0.005}

    for params in ({}, {"token": user["token"]}, {"token": "admin-token-2"}):
        denied = client.get("/admin/fees", params=params)
        assert denied.status_code == 403
        assert denied.json() == {"error": "Unauthorized"}
