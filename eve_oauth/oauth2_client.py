# SPDX-License-Identifier: MIT
# Copyright (c) 2025 eve-oauth contributors

"""Generic OAuth 2.0 authorization-code client.

This module implements the provider-independent half of the login flow:
building the authorization URL, exchanging an authorization code for tokens,
refreshing tokens and issuing authenticated GET requests. Provider
strategies hold an instance of ``OAuth2Client`` and supply the endpoints.
"""

import secrets
from typing import Any, Dict, Optional, Sequence

import httpx

from .exceptions import OAuth2RequestError


class OAuth2Client:
    """OAuth 2.0 client for the authorization-code grant.

    Attributes:
        client_id: OAuth client ID
        client_secret: OAuth client secret
        authorization_url: Provider authorization endpoint
        token_url: Provider token endpoint
        callback_url: Redirect URI registered with the provider
        scope: Default scopes to request
        scope_separator: Delimiter used to join scopes
        custom_headers: Headers sent with every request
        timeout: Request timeout in seconds
    """

    def __init__(
        self,
        client_id: Optional[str],
        client_secret: Optional[str],
        authorization_url: str,
        token_url: str,
        callback_url: Optional[str] = None,
        scope: Optional[Sequence[str]] = None,
        scope_separator: str = " ",
        custom_headers: Optional[Dict[str, str]] = None,
        timeout: float = 10.0,
    ):
        self.client_id = client_id
        self.client_secret = client_secret
        self.authorization_url = authorization_url
        self.token_url = token_url
        self.callback_url = callback_url
        self.scope = list(scope or [])
        self.scope_separator = scope_separator
        self.custom_headers = dict(custom_headers or {})
        self.timeout = timeout
        self._use_authorization_header_for_get = False

    def use_authorization_header_for_get(self, enabled: bool) -> None:
        """Send the access token as a Bearer header instead of a query parameter on GET."""
        self._use_authorization_header_for_get = enabled

    @property
    def uses_authorization_header_for_get(self) -> bool:
        return self._use_authorization_header_for_get

    def get_authorization_url(
        self,
        state: Optional[str] = None,
        scope: Optional[Sequence[str]] = None,
        **params: str,
    ) -> tuple[str, str]:
        """Generate the URL the user agent is redirected to.

        Args:
            state: OAuth state parameter (generated if not provided)
            scope: Scopes to request instead of the client defaults
            **params: Extra query parameters

        Returns:
            Tuple of (authorization_url, state)
        """
        state = state or secrets.token_urlsafe(32)
        scopes = list(scope) if scope is not None else self.scope

        query: Dict[str, str] = {
            "response_type": "code",
            "client_id": self.client_id or "",
        }
        if self.callback_url:
            query["redirect_uri"] = self.callback_url
        if scopes:
            query["scope"] = self.scope_separator.join(scopes)
        query["state"] = state
        query.update(params)

        url = httpx.URL(self.authorization_url).copy_merge_params(query)
        return str(url), state

    def exchange_code_for_token(self, code: str) -> Dict[str, Any]:
        """Exchange an authorization code for access and refresh tokens.

        Args:
            code: Authorization code from the callback

        Returns:
            Token response containing access_token, refresh_token, etc.

        Raises:
            OAuth2RequestError: If the token endpoint fails or returns anything but a JSON object
        """
        data = {
            "grant_type": "authorization_code",
            "code": code,
        }
        if self.callback_url:
            data["redirect_uri"] = self.callback_url
        return self._request_token(data)

    def refresh_access_token(self, refresh_token: str) -> Dict[str, Any]:
        """Obtain a new access token with a refresh token.

        Raises:
            OAuth2RequestError: If the token endpoint fails or returns anything but a JSON object
        """
        return self._request_token({
            "grant_type": "refresh_token",
            "refresh_token": refresh_token,
        })

    def _request_token(self, data: Dict[str, str]) -> Dict[str, Any]:
        try:
            response = httpx.post(
                self.token_url,
                data={
                    "client_id": self.client_id or "",
                    "client_secret": self.client_secret or "",
                    **data,
                },
                headers={"Accept": "application/json", **self.custom_headers},
                timeout=self.timeout,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise OAuth2RequestError(
                f"Token request failed: {e}",
                status_code=e.response.status_code,
                body=e.response.text,
            ) from e
        except httpx.HTTPError as e:
            raise OAuth2RequestError(f"Token endpoint unavailable: {e}") from e
        except (UnicodeEncodeError, httpx.InvalidURL) as e:
            raise OAuth2RequestError(f"Could not build token request: {e}") from e

        try:
            tokens = response.json()
        except ValueError as e:
            raise OAuth2RequestError(
                "Token endpoint returned a non-JSON response",
                status_code=response.status_code,
                body=response.text,
            ) from e

        if not isinstance(tokens, dict):
            raise OAuth2RequestError(
                "Token endpoint returned a non-object response",
                status_code=response.status_code,
                body=response.text,
            )
        return tokens

    def get(self, url: str, access_token: str) -> str:
        """Issue an authenticated GET request.

        Args:
            url: Resource URL
            access_token: OAuth access token

        Returns:
            Response body text

        Raises:
            OAuth2RequestError: If the request fails or returns a non-2xx status
        """
        headers = dict(self.custom_headers)
        params: Dict[str, str] = {}
        if self._use_authorization_header_for_get:
            headers["Authorization"] = f"Bearer {access_token}"
        else:
            params["access_token"] = access_token

        try:
            response = httpx.get(url, headers=headers, params=params, timeout=self.timeout)
            response.raise_for_status()
            return response.text
        except httpx.HTTPStatusError as e:
            raise OAuth2RequestError(
                f"Request to {url} failed: {e}",
                status_code=e.response.status_code,
                body=e.response.text,
            ) from e
        except httpx.HTTPError as e:
            raise OAuth2RequestError(f"Request to {url} failed: {e}") from e
        except (UnicodeEncodeError, httpx.InvalidURL) as e:
            raise OAuth2RequestError(f"Could not build request to {url}: {e}") from e
