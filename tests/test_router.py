# SPDX-License-Identifier: MIT
# Copyright (c) 2025 eve-oauth contributors

"""Tests for the FastAPI login routes."""

from unittest.mock import patch
from urllib.parse import parse_qs, urlparse

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from eve_oauth import (
    AuthenticationError,
    EveProfile,
    ResponseParseError,
    UpstreamFetchError,
    create_eve_router,
)
from eve_oauth.router import STATE_COOKIE

from .helpers import make_response


@pytest.fixture
def client(strategy, silent_logger):
    app = FastAPI()
    app.include_router(create_eve_router(strategy, secure_cookies=False, logger=silent_logger))
    return TestClient(app)


class TestLogin:
    """Tests for the login route."""

    def test_login_redirects_to_eve_sso(self, client):
        """Test login redirects to the SSO authorize URL and sets the state cookie."""
        response = client.get("/auth/eve/login", follow_redirects=False)

        assert response.status_code == 302
        location = response.headers["location"]
        assert location.startswith("https://login.eveonline.com/oauth/authorize?")

        state = parse_qs(urlparse(location).query)["state"][0]
        assert response.cookies[STATE_COOKIE] == state

    def test_state_cookie_is_httponly(self, client):
        """Test the state cookie is not readable from scripts."""
        response = client.get("/auth/eve/login", follow_redirects=False)

        assert "httponly" in response.headers["set-cookie"].lower()

    def test_custom_prefix(self, strategy, silent_logger):
        """Test routes are mounted under the given prefix."""
        app = FastAPI()
        app.include_router(create_eve_router(strategy, prefix="/sso", logger=silent_logger))

        response = TestClient(app).get("/sso/login", follow_redirects=False)

        assert response.status_code == 302


class TestCallback:
    """Tests for the callback route."""

    def test_callback_returns_verified_user(self, client, strategy):
        """Test a valid callback returns the verify result."""
        client.cookies.set(STATE_COOKIE, "state-123")

        with patch.object(strategy, "authenticate", return_value={"character_id": "12345678"}) as mock_auth:
            response = client.get("/auth/eve/callback?code=auth-code&state=state-123")

        assert response.status_code == 200
        assert response.json() == {"character_id": "12345678"}
        mock_auth.assert_called_once_with("auth-code")

    def test_callback_serializes_to_dict(self, client, strategy):
        """Test users with to_dict are serialized through it."""
        client.cookies.set(STATE_COOKIE, "state-123")
        profile = EveProfile(id="12345678", name="Test Pilot")

        with patch.object(strategy, "authenticate", return_value=profile):
            response = client.get("/auth/eve/callback?code=auth-code&state=state-123")

        assert response.json()["name"] == "Test Pilot"
        assert response.json()["provider"] == "eve"

    def test_callback_state_mismatch(self, client, strategy):
        """Test a state that does not match the cookie is rejected."""
        client.cookies.set(STATE_COOKIE, "state-123")

        with patch.object(strategy, "authenticate") as mock_auth:
            response = client.get("/auth/eve/callback?code=auth-code&state=forged")

        assert response.status_code == 400
        mock_auth.assert_not_called()

    def test_callback_without_state_cookie(self, client):
        """Test a callback without a login cookie is rejected."""
        response = client.get("/auth/eve/callback?code=auth-code&state=state-123")

        assert response.status_code == 400

    def test_callback_without_code(self, client):
        """Test a callback without a code is rejected."""
        client.cookies.set(STATE_COOKIE, "state-123")

        response = client.get("/auth/eve/callback?state=state-123")

        assert response.status_code == 400

    def test_callback_error_from_sso(self, client):
        """Test an error reported by EVE SSO is a 401."""
        response = client.get("/auth/eve/callback?error=access_denied&state=state-123")

        assert response.status_code == 401
        assert "access_denied" in response.json()["detail"]

    @pytest.mark.parametrize(
        "error, status_code",
        [
            (AuthenticationError("Character 1 is not authorized"), 401),
            (UpstreamFetchError("Failed to fetch character profile"), 502),
            (ResponseParseError("Failed to parse character profile"), 502),
        ],
    )
    def test_callback_errors(self, client, strategy, error, status_code):
        """Test strategy errors map to HTTP status codes."""
        client.cookies.set(STATE_COOKIE, "state-123")

        with patch.object(strategy, "authenticate", side_effect=error):
            response = client.get("/auth/eve/callback?code=auth-code&state=state-123")

        assert response.status_code == status_code
        assert response.json()["detail"] == str(error)

    @pytest.mark.parametrize("body", ["[]", "null"])
    def test_callback_non_object_token_response(self, client, body):
        """Test a token endpoint returning a JSON non-object is a 502."""
        client.cookies.set(STATE_COOKIE, "state-123")

        with patch("httpx.post") as mock_post:
            mock_post.return_value = make_response(
                200, body, "https://login.eveonline.com/oauth/token", method="POST",
            )

            response = client.get("/auth/eve/callback?code=auth-code&state=state-123")

        assert response.status_code == 502
        assert response.json()["detail"] == "Failed to obtain access token"

    def test_full_login_flow(self, client, character_body, verified_users):
        """Test login then callback against mocked EVE SSO endpoints."""
        login = client.get("/auth/eve/login", follow_redirects=False)
        state = parse_qs(urlparse(login.headers["location"]).query)["state"][0]
        client.cookies.clear()
        client.cookies.set(STATE_COOKIE, state)

        with patch("httpx.post") as mock_post, patch("httpx.get") as mock_get:
            mock_post.return_value = make_response(
                200, '{"access_token": "at", "refresh_token": "rt"}',
                "https://login.eveonline.com/oauth/token", method="POST",
            )
            mock_get.return_value = make_response(200, character_body, "https://login.eveonline.com/oauth/verify")

            response = client.get(f"/auth/eve/callback?code=auth-code&state={state}")

        assert response.status_code == 200
        assert response.json() == {"character_id": "12345678", "name": "Test Pilot"}
        assert verified_users[0][0] == "at"
