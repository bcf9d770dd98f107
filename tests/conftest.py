import json

import httpx
import pytest
from fastapi.testclient import TestClient

from money_transfer_api.app.core.config import Settings
from money_transfer_api.app.core.security import hash_password
from money_transfer_api.app.main import create_app
from money_transfer_api.app.services.business_notifier import BusinessNotifier

ADMIN_TOKEN = "admin-token-1"


@pytest.fixture
def admins():
    return [
        {"email": "Admin@Example.com", "password": "adminpass", "token": ADMIN_TOKEN},
        {"email": "ops@example.com", "password": hash_password("opspass")},
    ]


@pytest.fixture
def settings(tmp_path, admins):
    return Settings(
        storage_backend="file",
        data_dir=str(tmp_path),
        admins_json=json.dumps(admins),
        business_service_url="http://partner.test",
    )


@pytest.fixture
def partner():
    """Records partner-service calls.  Set ``fail`` to make them error."""

    class Partner:
        def __init__(self):
            self.requests = []
            self.fail = None

        def handler(self, request):
            self.requests.append(request)
            if self.fail == "connect":
                raise httpx.ConnectError("connection refused", request=request)
            if self.fail == "status":
                return httpx.Response(500, json={"error": "down"})
            return httpx.Response(200, json={"ok": True})

    return Partner()


@pytest.fixture
def app(settings, partner):
    notifier = BusinessNotifier(settings.business_service_url, transport=httpx.MockTransport(partner.handler))
    return create_app(settings, notifier=notifier)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def store(app):
    return app.state.store


@pytest.fixture
def register(client):
    def _register(**overrides):
        body = {
            "name": "Ada",
            "surname": "Lovelace",
            "email": "a@x.com",
            "password": "secret1",
            "country": "Gabon",
        }
        body.update(overrides)
        return client.post("/register", json=body)

    return _register


@pytest.fixture
def user(register):
    response = register()
    assert response.status_code == 201
    return response.json()
