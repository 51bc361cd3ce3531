# SPDX-License-Identifier: MIT
# Copyright (c) 2025 eve-oauth contributors

"""Normalized character profile returned by the EVE SSO strategy."""

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class EveProfile:
    """Character profile normalized from the EVE SSO verify response.

    Fields are copied from the provider response without validation, so any
    of them may be None when EVE omits the corresponding key.

    Attributes:
        provider: Always "eve"
        id: Character ID as a string
        name: Character name
        expires: Token expiry timestamp as sent by EVE
        scopes: Scopes granted to the access token, as sent by EVE
        token_type: Access token type (e.g. "Character")
        character_owner_hash: Hash identifying the character's owning account
        raw: Response body text the profile was parsed from
        json: Parsed response object the profile was mapped from
    """
    provider: str = "eve"
    id: Optional[str] = None
    name: Optional[str] = None
    expires: Any = None
    scopes: Any = None
    token_type: Optional[str] = None
    character_owner_hash: Optional[str] = None
    raw: Optional[str] = field(default=None, repr=False, compare=False)
    json: Optional[dict[str, Any]] = field(default=None, repr=False, compare=False)

    def to_dict(self) -> dict[str, Any]:
        """Convert the profile to its wire representation.

        Returns:
            Dictionary keyed by the normalized profile names; ``_raw`` and
            ``_json`` are only present when the profile came from a fetch
        """
        data = {
            "provider": self.provider,
            "id": self.id,
            "name": self.name,
            "expires": self.expires,
            "scopes": self.scopes,
            "tokenType": self.token_type,
            "characterOwnerHash": self.character_owner_hash,
        }
        if self.raw is not None:
            data["_raw"] = self.raw
        if self.json is not None:
            data["_json"] = self.json
        return data
