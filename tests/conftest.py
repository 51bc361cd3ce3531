# SPDX-License-Identifier: MIT
# Copyright (c) 2025 eve-oauth contributors

"""Shared fixtures for eve_oauth tests."""

import json

import pytest

from eve_oauth import EveStrategy, SilentLogger

from .helpers import CALLBACK_URL, CHARACTER_RESPONSE


@pytest.fixture
def silent_logger():
    """Logger that records messages for assertions."""
    return SilentLogger()


@pytest.fixture
def options():
    """Minimal valid strategy options using EVE SSO client option names."""
    return {
        "clientID": "3rdparty_clientid",
        "clientSecret": "jkfopwkmif90e0womkepowe9irkjo3p9mkfwe",
        "callbackURL": CALLBACK_URL,
        "userAgent": "3rdpartysite.com",
    }


@pytest.fixture
def verified_users():
    """Records every verify call made by the strategy fixture."""
    return []


@pytest.fixture
def strategy(options, silent_logger, verified_users):
    """Strategy whose verify callback accepts every character."""

    def verify(access_token, refresh_token, profile):
        verified_users.append((access_token, refresh_token, profile))
        return {"character_id": profile.id, "name": profile.name}

    return EveStrategy(options, verify, logger=silent_logger)


@pytest.fixture
def character_body():
    """Verify endpoint body for the test character."""
    return json.dumps(CHARACTER_RESPONSE)
