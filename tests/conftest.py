"""
tests/conftest.py -- Shared fixtures for the fibserver test suite.

  - app: fresh Flask app per test (own counter, user table, session table)
  - client: anonymous test client
  - auth_client: test client already logged in as the configured user

The maintenance thread is disabled (SESSION_SWEEP_SECONDS=0) so tests stay
deterministic; sweep_idle_sessions() is tested directly instead. Secure
cookies are off because the test client talks plain http.
"""

from __future__ import annotations

import pytest

from fibserver import create_app

USERNAME = "tester"
PASSWORD = "Squ!r3"


@pytest.fixture
def app(tmp_path):
    return create_app(
        {
            "TESTING": True,
            "SECRET_KEY": "test-secret",
            "AUTH_USERNAME": USERNAME,
            "AUTH_PASSWORD": PASSWORD,
            "SESSION_COOKIE_SECURE": False,
            "SESSION_SWEEP_SECONDS": 0,
            "LOG_PATH": str(tmp_path / "app.log"),
        }
    )


@pytest.fixture
def state(app):
    return app.extensions["fibserver"]


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_client(client):
    resp = client.post("/login", json={"username": USERNAME, "password": PASSWORD})
    assert resp.status_code == 200
    return client
