# SPDX-License-Identifier: MIT
# Copyright (c) 2025 eve-oauth contributors

"""EVE Online SSO authentication strategy.

Authenticates EVE Online characters through the SSO OAuth 2.0
authorization-code flow and normalizes the SSO verify response into an
``EveProfile``.
"""

__version__ = "0.1.0"

from .config import (
    DEFAULT_AUTHORIZATION_URL,
    DEFAULT_CHARACTER_URL,
    DEFAULT_TOKEN_URL,
    EveStrategyOptions,
    load_options_from_env,
)
from .exceptions import (
    AuthenticationError,
    ConfigurationError,
    MappingParseError,
    OAuth2RequestError,
    ResponseParseError,
    StrategyError,
    UpstreamFetchError,
)
from .logger import Logger, SilentLogger, StdoutLogger, create_logger
from .models import EveProfile
from .oauth2_client import OAuth2Client
from .profile import parse_profile
from .router import create_eve_router
from .strategy import EveStrategy, Strategy

__all__ = [
    # Version
    "__version__",
    # Configuration
    "EveStrategyOptions",
    "load_options_from_env",
    "DEFAULT_AUTHORIZATION_URL",
    "DEFAULT_TOKEN_URL",
    "DEFAULT_CHARACTER_URL",
    # Models
    "EveProfile",
    "parse_profile",
    # Strategies
    "Strategy",
    "EveStrategy",
    "OAuth2Client",
    # Web
    "create_eve_router",
    # Logging
    "Logger",
    "StdoutLogger",
    "SilentLogger",
    "create_logger",
    # Exceptions
    "StrategyError",
    "ConfigurationError",
    "OAuth2RequestError",
    "UpstreamFetchError",
    "ResponseParseError",
    "MappingParseError",
    "AuthenticationError",
]
