# SPDX-License-Identifier: MIT
# Copyright (c) 2025 eve-oauth contributors

"""EVE Online SSO authentication strategy.

The strategy authenticates characters by delegating to EVE Online Single
Sign-On using the OAuth 2.0 authorization-code flow. The OAuth2 exchange is
performed by a held ``OAuth2Client``; the strategy supplies EVE's endpoints
and headers, and turns the SSO verify response into an ``EveProfile``.

Applications supply a ``verify`` callable which accepts ``access_token``,
``refresh_token`` and ``profile`` and returns the application user, or a
falsy value if the character is not allowed to log in.

Example:
    >>> strategy = EveStrategy(
    ...     {
    ...         "clientID": "3rdparty_clientid",
    ...         "clientSecret": "jkfopwkmif90e0womkepowe9irkjo3p9mkfwe",
    ...         "callbackURL": "https://3rdpartysite.com/callback",
    ...         "userAgent": "3rdpartysite.com",
    ...     },
    ...     lambda access_token, refresh_token, profile: users.find_or_create(profile.id),
    ... )
"""

import json
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional, Sequence

from .config import DEFAULT_USER_AGENT, EveStrategyOptions
from .exceptions import (
    AuthenticationError,
    ConfigurationError,
    OAuth2RequestError,
    ResponseParseError,
    StrategyError,
    UpstreamFetchError,
)
from .logger import Logger, create_logger
from .models import EveProfile
from .oauth2_client import OAuth2Client
from .profile import PROVIDER, parse_profile

ProfileCallback = Callable[[Optional[Exception], Optional[EveProfile]], None]
VerifyCallback = Callable[[str, Optional[str], EveProfile], Any]


class Strategy(ABC):
    """Capability interface for OAuth2 authentication strategies.

    A strategy describes how to drive a generic OAuth2 client for one
    provider and how to load the provider's profile for an access token.
    """

    name: str

    @abstractmethod
    def configure(self) -> Dict[str, Any]:
        """Return the keyword arguments used to build the OAuth2 client."""
        pass

    @abstractmethod
    def fetch_profile(self, access_token: str, done: ProfileCallback) -> None:
        """Load the user profile for an access token.

        ``done`` is called exactly once, either as ``done(error, None)`` or
        as ``done(None, profile)``.

        Args:
            access_token: OAuth access token
            done: Completion callback
        """
        pass


class EveStrategy(Strategy):
    """Authentication strategy for EVE Online SSO.

    Attributes:
        name: Strategy name, always "eve"
        options: Validated strategy options
        character_url: Identity endpoint queried for the character profile
    """

    name = "eve"

    def __init__(
        self,
        options: Any,
        verify: VerifyCallback,
        logger: Optional[Logger] = None,
    ):
        """Initialize the strategy.

        Args:
            options: ``EveStrategyOptions``, a mapping of options, or None
            verify: Callable invoked with (access_token, refresh_token, profile)
            logger: Logger to use (default: stdout logger "eve_oauth.strategy")

        Raises:
            ConfigurationError: If callbackURL is missing, the options are
                invalid, or verify is not callable
        """
        if not _get_option(options, "callback_url", "callbackURL"):
            raise ConfigurationError("eve-oauth strategy requires a callbackURL option")

        self.options = EveStrategyOptions.from_mapping(options)

        if not callable(verify):
            raise ConfigurationError("eve-oauth strategy requires a verify callback")

        self._verify = verify
        self.logger = logger or create_logger(name="eve_oauth.strategy")
        self.character_url = self.options.character_url

        self._oauth2 = OAuth2Client(**self.configure())
        self._oauth2.use_authorization_header_for_get(True)

    @property
    def oauth2(self) -> OAuth2Client:
        """The OAuth2 client the strategy delegates to."""
        return self._oauth2

    def configure(self) -> Dict[str, Any]:
        """Build the OAuth2 client parameters for EVE SSO.

        Returns:
            Keyword arguments for ``OAuth2Client``, with the User-Agent
            header filled in when the custom headers do not set one
        """
        headers = dict(self.options.custom_headers)
        if not headers.get("User-Agent"):
            headers["User-Agent"] = self.options.user_agent or DEFAULT_USER_AGENT

        return {
            "client_id": self.options.client_id,
            "client_secret": self.options.client_secret,
            "authorization_url": self.options.authorization_url,
            "token_url": self.options.token_url,
            "callback_url": self.options.callback_url,
            "scope": list(self.options.scope),
            "scope_separator": self.options.scope_separator,
            "custom_headers": headers,
        }

    def authorization_url(
        self,
        state: Optional[str] = None,
        scope: Optional[Sequence[str]] = None,
    ) -> tuple[str, str]:
        """Build the EVE SSO login URL.

        Args:
            state: Opaque state echoed back to the callback (generated if omitted)
            scope: Scopes to request instead of the configured ones

        Returns:
            Tuple of (authorization_url, state)
        """
        return self._oauth2.get_authorization_url(state=state, scope=scope)

    def user_profile(self, access_token: str) -> EveProfile:
        """Retrieve the character profile for an access token.

        Args:
            access_token: Access token issued by EVE SSO

        Returns:
            EveProfile with ``raw`` and ``json`` attached

        Raises:
            UpstreamFetchError: If the verify endpoint could not be reached
                or returned an error status
            ResponseParseError: If the verify endpoint returned invalid JSON
        """
        self.logger.debug("Fetching character profile", url=self.character_url)

        try:
            body = self._oauth2.get(self.character_url, access_token)
        except OAuth2RequestError as e:
            self.logger.error(
                "Failed to fetch character profile",
                url=self.character_url,
                status_code=e.status_code,
                error=str(e),
            )
            raise UpstreamFetchError("Failed to fetch character profile", cause=e) from e

        try:
            data = json.loads(body)
        except ValueError as e:
            self.logger.error("Failed to parse character profile", url=self.character_url)
            raise ResponseParseError("Failed to parse character profile") from e

        if not isinstance(data, dict):
            self.logger.error("Character profile is not a JSON object", url=self.character_url)
            raise ResponseParseError("Failed to parse character profile")

        profile = parse_profile(data)
        profile.provider = PROVIDER
        profile.raw = body
        profile.json = data

        self.logger.info("Character profile loaded", character_id=profile.id)
        return profile

    def fetch_profile(self, access_token: str, done: ProfileCallback) -> None:
        """Retrieve the character profile and hand it to ``done``.

        ``done`` receives ``(UpstreamFetchError | ResponseParseError, None)``
        on failure and ``(None, EveProfile)`` on success, exactly once.

        Args:
            access_token: Access token issued by EVE SSO
            done: Completion callback
        """
        try:
            profile = self.user_profile(access_token)
        except StrategyError as e:
            done(e, None)
            return

        done(None, profile)

    def authenticate(self, code: str) -> Any:
        """Complete a login from the authorization code EVE SSO redirected with.

        Args:
            code: Authorization code from the callback request

        Returns:
            Whatever the verify callback returned for the character

        Raises:
            UpstreamFetchError: If the token exchange or profile fetch failed
            ResponseParseError: If the profile response was not JSON
            AuthenticationError: If no access token was issued or verify
                rejected the character
        """
        try:
            token_response = self._oauth2.exchange_code_for_token(code)
        except OAuth2RequestError as e:
            self.logger.error("Failed to obtain access token", status_code=e.status_code, error=str(e))
            raise UpstreamFetchError("Failed to obtain access token", cause=e) from e

        access_token = token_response.get("access_token")
        if not access_token:
            raise AuthenticationError("No access token in response")
        refresh_token = token_response.get("refresh_token")

        profile = self.user_profile(access_token)

        user = self._verify(access_token, refresh_token, profile)
        if not user:
            self.logger.warning("Character rejected by verify callback", character_id=profile.id)
            raise AuthenticationError(f"Character {profile.id} is not authorized")

        self.logger.info("Character authenticated", character_id=profile.id)
        return user

    def refresh(self, refresh_token: str) -> Dict[str, Any]:
        """Exchange a refresh token for a new access token.

        Raises:
            UpstreamFetchError: If the token endpoint request failed
        """
        try:
            return self._oauth2.refresh_access_token(refresh_token)
        except OAuth2RequestError as e:
            self.logger.error("Failed to refresh access token", status_code=e.status_code, error=str(e))
            raise UpstreamFetchError("Failed to refresh access token", cause=e) from e


def _get_option(options: Any, name: str, alias: str) -> Any:
    """Read one option from an options instance or mapping."""
    if options is None:
        return None
    if isinstance(options, EveStrategyOptions):
        return getattr(options, name)
    return options.get(name) or options.get(alias)
