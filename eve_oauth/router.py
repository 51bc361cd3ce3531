# SPDX-License-Identifier: MIT
# Copyright (c) 2025 eve-oauth contributors

"""FastAPI routes for logging in with EVE Online SSO.

``create_eve_router`` returns an ``APIRouter`` with two endpoints:

- ``GET {prefix}/login`` redirects to EVE SSO with a fresh state value
- ``GET {prefix}/callback`` completes the login and returns the verified user

Example:
    >>> from fastapi import FastAPI
    >>> app = FastAPI()
    >>> app.include_router(create_eve_router(strategy))
"""

import secrets
from typing import Any, Optional

from fastapi import APIRouter, HTTPException, Query, Request, Response
from fastapi.responses import JSONResponse, RedirectResponse

from .exceptions import AuthenticationError, ResponseParseError, UpstreamFetchError
from .logger import Logger, create_logger
from .strategy import EveStrategy

STATE_COOKIE = "eve_oauth_state"


def create_eve_router(
    strategy: EveStrategy,
    prefix: str = "/auth/eve",
    secure_cookies: bool = True,
    state_ttl_seconds: int = 600,
    logger: Optional[Logger] = None,
) -> APIRouter:
    """Create the login and callback routes for a strategy.

    Args:
        strategy: Configured EVE strategy
        prefix: Path prefix for both routes
        secure_cookies: Whether the state cookie is marked Secure
        state_ttl_seconds: Lifetime of the state cookie
        logger: Logger to use (default: stdout logger "eve_oauth.router")

    Returns:
        APIRouter to include in the application
    """
    log = logger or create_logger(name="eve_oauth.router")
    router = APIRouter(prefix=prefix, tags=["eve-sso"])

    @router.get("/login")
    def login() -> Response:
        """Redirect the user agent to EVE SSO."""
        state = secrets.token_urlsafe(32)
        authorization_url, state = strategy.authorization_url(state=state)

        response = RedirectResponse(url=authorization_url, status_code=302)
        response.set_cookie(
            key=STATE_COOKIE,
            value=state,
            max_age=state_ttl_seconds,
            httponly=True,
            secure=secure_cookies,
            samesite="lax",
        )

        log.info("Initiated EVE SSO login")
        return response

    @router.get("/callback")
    def callback(
        request: Request,
        code: Optional[str] = Query(None, description="Authorization code from EVE SSO"),
        state: Optional[str] = Query(None, description="OAuth state parameter"),
        error: Optional[str] = Query(None, description="Error reported by EVE SSO"),
    ) -> JSONResponse:
        """Complete the login and return the verified user.

        Raises:
            400: Missing code, or state does not match the login request
            401: Login denied at EVE SSO or rejected by the verify callback
            502: EVE SSO could not be reached or returned a malformed response
        """
        if error:
            log.warning("EVE SSO reported an error", error=error)
            raise HTTPException(status_code=401, detail=f"Login failed: {error}")

        expected_state = request.cookies.get(STATE_COOKIE)
        if not state or not expected_state or not secrets.compare_digest(state.encode(), expected_state.encode()):
            log.warning("Callback state mismatch")
            raise HTTPException(status_code=400, detail="Invalid or expired state")

        if not code:
            raise HTTPException(status_code=400, detail="Missing authorization code")

        try:
            user = strategy.authenticate(code)
        except AuthenticationError as e:
            raise HTTPException(status_code=401, detail=str(e))
        except (UpstreamFetchError, ResponseParseError) as e:
            raise HTTPException(status_code=502, detail=str(e))

        response = JSONResponse(content=_serialize_user(user))
        response.delete_cookie(STATE_COOKIE)
        return response

    return router


def _serialize_user(user: Any) -> Any:
    to_dict = getattr(user, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    return user
