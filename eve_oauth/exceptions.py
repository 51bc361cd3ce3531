# SPDX-License-Identifier: MIT
# Copyright (c) 2025 eve-oauth contributors

"""Exception hierarchy for the EVE SSO strategy."""

from typing import Optional


class StrategyError(Exception):
    """Base exception for all eve_oauth errors."""
    pass


class ConfigurationError(StrategyError, ValueError):
    """Raised when the strategy is constructed with missing or invalid options."""
    pass


class OAuth2RequestError(StrategyError):
    """Raised by the OAuth2 client when a request to the provider fails.

    Attributes:
        status_code: HTTP status of the failed response, if one was received
        body: Response body text, if one was received
    """

    def __init__(self, message: str, status_code: Optional[int] = None, body: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class UpstreamFetchError(StrategyError):
    """Raised when a request to EVE SSO could not be completed.

    Wraps the underlying client error so callers can tell an unreachable
    provider apart from a malformed response.
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class ResponseParseError(StrategyError):
    """Raised when the identity endpoint returns a body that is not JSON."""
    pass


class MappingParseError(StrategyError, ValueError):
    """Raised when the profile normalizer is given an unparsable string."""
    pass


class AuthenticationError(StrategyError):
    """Raised when a login cannot be completed or the character is rejected."""
    pass
