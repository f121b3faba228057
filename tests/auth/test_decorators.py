"""Tests for authentication decorators.

Tests the @auth_required and @localhost_only decorators that enforce
security constraints on protected endpoints. Throwaway routes are added
to a fresh app so the decorators are exercised in isolation.
"""

import pytest
from flask import g, jsonify

from easysearch_core.auth.decorators import auth_required, localhost_only
from easysearch_core.auth.schemas import RegistrationRequest
from easysearch_core.main import create_app


def _add_probe_routes(app):
    @app.get("/probe/protected")
    @auth_required
    def protected():
        return jsonify({"user_id": g.user_id, "role": g.role.value})

    @app.get("/probe/local")
    @localhost_only
    def local():
        return jsonify({"ok": True})


@pytest.fixture
def probe_app(app):
    _add_probe_routes(app)
    return app


@pytest.fixture
def probe_client(probe_app):
    return probe_app.test_client()


@pytest.fixture
def bypass_client(test_settings):
    """Client whose app treats every request as non-localhost."""
    app = create_app(test_settings.model_copy(update={"bypass_localhost_check": True}))
    _add_probe_routes(app)
    return app.test_client()


class TestAuthRequired:
    """Tests for @auth_required decorator."""

    def test_sets_request_context(self, probe_client, app_service):
        tokens = app_service.register(RegistrationRequest(
            email="a@x.com", contact_number="+1000", password="password1"
        ))

        response = probe_client.get(
            "/probe/protected",
            headers={"Authorization": f"Bearer {tokens.access_token}"}
        )

        assert response.status_code == 200
        data = response.get_json()
        assert data["role"] == "CUSTOMER"
        assert data["user_id"]

    def test_missing_header(self, probe_client):
        response = probe_client.get("/probe/protected")

        assert response.status_code == 401
        data = response.get_json()
        assert data["error"]["type"] == "UnauthorizedError"
        assert data["error"]["message"] == "No token provided"

    def test_invalid_token(self, probe_client):
        response = probe_client.get(
            "/probe/protected",
            headers={"Authorization": "Bearer not-a-token"}
        )

        assert response.status_code == 401
        assert response.get_json()["error"]["message"] == "Unauthorized"


class TestLocalhostOnlyDecorator:
    """Tests for @localhost_only decorator."""

    def test_localhost_allowed(self, probe_client):
        """Test client requests come from 127.0.0.1."""
        response = probe_client.get("/probe/local")
        assert response.status_code == 200

    def test_ipv6_loopback_allowed(self, probe_client):
        response = probe_client.get(
            "/probe/local",
            environ_overrides={"REMOTE_ADDR": "::1"}
        )
        assert response.status_code == 200

    def test_remote_address_blocked(self, probe_client):
        response = probe_client.get(
            "/probe/local",
            environ_overrides={"REMOTE_ADDR": "10.0.0.5"}
        )

        assert response.status_code == 403
        data = response.get_json()
        assert data["error"]["type"] == "ForbiddenError"
        assert "only accessible from localhost" in data["error"]["message"]

    def test_bypass_simulates_remote(self, bypass_client):
        """Should block localhost requests when the bypass setting is on."""
        response = bypass_client.get("/probe/local")

        assert response.status_code == 403
        assert response.get_json()["error"]["details"]["remote_addr"] == "192.168.1.100"
