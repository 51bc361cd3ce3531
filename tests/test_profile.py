# SPDX-License-Identifier: MIT
# Copyright (c) 2025 eve-oauth contributors

"""Tests for the character profile normalizer."""

import json

import pytest

from eve_oauth import EveProfile, MappingParseError, parse_profile

from .helpers import CHARACTER_RESPONSE


class TestParseProfile:
    """Tests for parse_profile."""

    def test_maps_verify_response(self):
        """Test the verify response maps to the normalized profile fields."""
        profile = parse_profile(CHARACTER_RESPONSE)

        assert profile.to_dict() == {
            "provider": "eve",
            "id": "12345678",
            "name": "Test Pilot",
            "expires": "2024-01-01T00:00:00",
            "scopes": "publicData",
            "tokenType": "Character",
            "characterOwnerHash": "abc123",
        }

    def test_returns_eve_profile(self):
        """Test the result is an EveProfile with no audit fields attached."""
        profile = parse_profile(CHARACTER_RESPONSE)

        assert isinstance(profile, EveProfile)
        assert profile.raw is None
        assert profile.json is None

    @pytest.mark.parametrize("character_id", [1, 90000001, "95465499", 2112625428])
    def test_id_is_stringified_character_id(self, character_id):
        """Test id always equals the stringified CharacterID."""
        profile = parse_profile({**CHARACTER_RESPONSE, "CharacterID": character_id})

        assert profile.id == str(character_id)

    @pytest.mark.parametrize(
        "data",
        [
            {},
            {"CharacterID": 1},
            {"provider": "github", "CharacterID": 2},
            CHARACTER_RESPONSE,
        ],
    )
    def test_provider_is_always_eve(self, data):
        """Test provider is 'eve' regardless of the response content."""
        assert parse_profile(data).provider == "eve"

    def test_string_input_matches_object_input(self):
        """Test parsing the JSON text gives the same profile as the object."""
        assert parse_profile(json.dumps(CHARACTER_RESPONSE)) == parse_profile(CHARACTER_RESPONSE)

    def test_bytes_input_is_parsed(self):
        """Test a JSON body given as bytes is parsed."""
        profile = parse_profile(json.dumps(CHARACTER_RESPONSE).encode("utf-8"))

        assert profile.name == "Test Pilot"

    def test_malformed_string_raises_mapping_parse_error(self):
        """Test malformed JSON text raises MappingParseError."""
        with pytest.raises(MappingParseError):
            parse_profile("{not json")

    @pytest.mark.parametrize("data", ["[1]", "null", "42", '"CharacterID"', b"[]", [1]])
    def test_non_object_raises_mapping_parse_error(self, data):
        """Test input that is not a JSON object raises MappingParseError."""
        with pytest.raises(MappingParseError, match="not a JSON object"):
            parse_profile(data)

    def test_mapping_parse_error_is_value_error(self):
        """Test MappingParseError can be caught as ValueError."""
        with pytest.raises(ValueError):
            parse_profile("<html>Bad Gateway</html>")

    def test_missing_fields_are_none(self):
        """Test missing fields come through as None without validation."""
        profile = parse_profile({"CharacterName": "Lonely Pilot"})

        assert profile.name == "Lonely Pilot"
        assert profile.id is None
        assert profile.expires is None
        assert profile.scopes is None
        assert profile.token_type is None
        assert profile.character_owner_hash is None

    def test_scopes_pass_through_unchanged(self):
        """Test a scope list keeps its order and is not split or joined."""
        scopes = ["esi-skills.read_skills.v1", "publicData", "esi-wallet.read_character_wallet.v1"]

        profile = parse_profile({**CHARACTER_RESPONSE, "Scopes": scopes})

        assert profile.scopes == scopes

    def test_values_are_not_coerced(self):
        """Test values other than the character ID are passed through as-is."""
        profile = parse_profile({**CHARACTER_RESPONSE, "ExpiresOn": 1704067200, "TokenType": None})

        assert profile.expires == 1704067200
        assert profile.token_type is None
