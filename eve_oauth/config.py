# SPDX-License-Identifier: MIT
# Copyright (c) 2025 eve-oauth contributors

"""Strategy options for EVE Online SSO.

Options can be given under their Python names (``client_id``) or under the
names used by EVE SSO client configuration (``clientID``), and can be loaded
from ``EVE_*`` environment variables.
"""

import os
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, ValidationInfo, field_validator

from .exceptions import ConfigurationError

DEFAULT_AUTHORIZATION_URL = "https://login.eveonline.com/oauth/authorize"
DEFAULT_TOKEN_URL = "https://login.eveonline.com/oauth/token"
DEFAULT_CHARACTER_URL = "https://login.eveonline.com/oauth/verify"
DEFAULT_SCOPE_SEPARATOR = ","
DEFAULT_USER_AGENT = "eve-oauth"

_ENV_VARS = {
    "client_id": "EVE_CLIENT_ID",
    "client_secret": "EVE_CLIENT_SECRET",
    "callback_url": "EVE_CALLBACK_URL",
    "authorization_url": "EVE_AUTHORIZATION_URL",
    "token_url": "EVE_TOKEN_URL",
    "character_url": "EVE_CHARACTER_URL",
    "scope": "EVE_SCOPE",
    "scope_separator": "EVE_SCOPE_SEPARATOR",
    "user_agent": "EVE_USER_AGENT",
}


class EveStrategyOptions(BaseModel):
    """Immutable EVE SSO strategy options.

    ``callback_url`` is optional here so that an incomplete configuration
    reaches the strategy, which rejects it with ``ConfigurationError``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    client_id: Optional[str] = Field(default=None, alias="clientID", description="SSO application Client ID")
    client_secret: Optional[str] = Field(default=None, alias="clientSecret", description="SSO application secret")
    callback_url: Optional[str] = Field(default=None, alias="callbackURL", description="Redirect target after login")
    authorization_url: str = Field(default=DEFAULT_AUTHORIZATION_URL, alias="authorizationURL")
    token_url: str = Field(default=DEFAULT_TOKEN_URL, alias="tokenURL")
    character_url: str = Field(default=DEFAULT_CHARACTER_URL, alias="characterURL")
    scope: tuple[str, ...] = Field(default=(), description="Permission scopes to request, e.g. publicData")
    scope_separator: str = Field(default=DEFAULT_SCOPE_SEPARATOR, alias="scopeSeparator")
    user_agent: Optional[str] = Field(default=None, alias="userAgent", description="Application-identifying User-Agent")
    custom_headers: dict[str, str] = Field(default_factory=dict, alias="customHeaders")

    @field_validator("scope", mode="before")
    @classmethod
    def _split_scope(cls, value: Any) -> Any:
        if value is None:
            return ()
        if isinstance(value, str):
            return (value,) if value else ()
        return value

    @field_validator("authorization_url", "token_url", "character_url", "scope_separator", mode="before")
    @classmethod
    def _empty_means_default(cls, value: Any, info: ValidationInfo) -> Any:
        # Empty values fall back to the defaults, the same as omitted ones
        if value is None or value == "":
            return cls.model_fields[info.field_name].default
        return value

    @field_validator("custom_headers", mode="before")
    @classmethod
    def _none_headers(cls, value: Any) -> Any:
        return {} if value is None else value

    @field_validator("user_agent")
    @classmethod
    def _ascii_user_agent(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.isascii():
            raise ValueError("userAgent must contain only ASCII characters")
        return value

    @field_validator("custom_headers")
    @classmethod
    def _ascii_headers(cls, value: dict[str, str]) -> dict[str, str]:
        # httpx encodes header names and values as ASCII
        for name, header_value in value.items():
            if not name.isascii() or not header_value.isascii():
                raise ValueError(f"customHeaders entry {name!r} must contain only ASCII characters")
        return value

    @classmethod
    def from_mapping(cls, options: Any) -> "EveStrategyOptions":
        """Build options from a mapping, an options instance or None.

        Raises:
            ConfigurationError: If the options fail validation
        """
        if isinstance(options, cls):
            return options
        try:
            return cls.model_validate(options or {})
        except ValidationError as e:
            raise ConfigurationError(f"Invalid eve-oauth strategy options: {e}") from e


def load_options_from_env(**overrides: Any) -> EveStrategyOptions:
    """Load strategy options from ``EVE_*`` environment variables.

    ``EVE_SCOPE`` is a comma separated list. Explicit keyword overrides take
    precedence over the environment.

    Example:
        >>> # EVE_CLIENT_ID=abc EVE_CALLBACK_URL=https://example.com/callback
        >>> options = load_options_from_env(user_agent="example.com")
        >>> options.callback_url
        'https://example.com/callback'

    Raises:
        ConfigurationError: If the resulting options fail validation
    """
    values: dict[str, Any] = {}
    for field_name, env_var in _ENV_VARS.items():
        raw = os.getenv(env_var)
        if not raw:
            continue
        if field_name == "scope":
            values[field_name] = [s.strip() for s in raw.split(",") if s.strip()]
        else:
            values[field_name] = raw

    values.update({key: value for key, value in overrides.items() if value is not None})
    return EveStrategyOptions.from_mapping(values)
