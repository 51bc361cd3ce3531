# SPDX-License-Identifier: MIT
# Copyright (c) 2025 eve-oauth contributors

"""Mapping of the EVE SSO verify response to an ``EveProfile``.

See https://developers.eveonline.com/resource/single-sign-on#obtain_the_character_id
for the response format.
"""

import json
from collections.abc import Mapping
from typing import Any, Union

from .exceptions import MappingParseError
from .models import EveProfile

PROVIDER = "eve"


def parse_profile(data: Union[Mapping[str, Any], str, bytes]) -> EveProfile:
    """Map an EVE SSO verify response to a normalized profile.

    The mapping is lenient: keys missing from the response come through as
    None and values are not type-checked.

    Args:
        data: Parsed response object, or its JSON text

    Returns:
        EveProfile with provider, id, name, expires, scopes, token_type and
        character_owner_hash set

    Raises:
        MappingParseError: If ``data`` is not valid JSON or does not decode
            to a JSON object
    """
    if isinstance(data, (str, bytes)):
        try:
            data = json.loads(data)
        except ValueError as e:
            raise MappingParseError(f"Character profile is not valid JSON: {e}") from e

    if not isinstance(data, Mapping):
        raise MappingParseError("Character profile is not a JSON object")

    character_id = data.get("CharacterID")

    return EveProfile(
        provider=PROVIDER,
        id=str(character_id) if character_id is not None else None,
        name=data.get("CharacterName"),
        expires=data.get("ExpiresOn"),
        scopes=data.get("Scopes"),
        token_type=data.get("TokenType"),
        character_owner_hash=data.get("CharacterOwnerHash"),
    )
