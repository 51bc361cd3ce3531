# SPDX-License-Identifier: MIT
# Copyright (c) 2025 eve-oauth contributors

"""Constants and builders shared by eve_oauth tests."""

import httpx

CALLBACK_URL = "https://3rdpartysite.com/callback"

CHARACTER_RESPONSE = {
    "CharacterID": 12345678,
    "CharacterName": "Test Pilot",
    "ExpiresOn": "2024-01-01T00:00:00",
    "Scopes": "publicData",
    "TokenType": "Character",
    "CharacterOwnerHash": "abc123",
}


def make_response(status_code: int, text: str, url: str, method: str = "GET") -> httpx.Response:
    """Build an httpx response bound to a request so raise_for_status works."""
    return httpx.Response(status_code, text=text, request=httpx.Request(method, url))
