import os
import tempfile

# must be set before gatekeeper.gate_config is imported
os.environ.setdefault("GATE_LOG_FILE", os.path.join(tempfile.mkdtemp(prefix="gate-logs-"), "gate.log"))
os.environ.setdefault("SESSION_SECRET_KEY", "test-session-secret")

import pytest
from fastapi import Request
from fastapi.testclient import TestClient
from starlette.requests import Request as StarletteRequest

from storefront.main import create_app


def make_request(path: str = "/customer/profile", session=None, root_path: str = "") -> StarletteRequest:
    scope = {
        "type": "http",
        "method": "GET",
        "path": path,
        "root_path": root_path,
        "query_string": b"",
        "headers": [],
    }
    if session is not None:
        scope["session"] = session
    return StarletteRequest(scope)


@pytest.fixture
def app():
    application = create_app()

    @application.post("/test/session")
    async def seed_session(request: Request):
        request.session.clear()
        request.session.update(await request.json())
        return {"ok": True}

    return application


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def login_as(client):
    def _login(role):
        response = client.post("/test/session", json={"account": {"id": 7, "role": role}})
        assert response.status_code == 200
        return client

    return _login
