# SPDX-License-Identifier: MIT
# Copyright (c) 2025 eve-oauth contributors

"""Example FastAPI application logging in with EVE Online SSO.

Configure the SSO application through the environment and run:

    EVE_CLIENT_ID=... EVE_CLIENT_SECRET=... \\
    EVE_CALLBACK_URL=http://localhost:8000/auth/eve/callback \\
    EVE_USER_AGENT=localhost uvicorn examples.eve_login_example:app

Then open http://localhost:8000/auth/eve/login.
"""

from fastapi import FastAPI

from eve_oauth import EveProfile, EveStrategy, create_eve_router, create_logger, load_options_from_env

logger = create_logger(logger_type="stdout", level="INFO", name="eve_login_example")

# In-memory user store for demo purposes
users: dict[str, dict] = {}


def verify(access_token: str, refresh_token: str | None, profile: EveProfile) -> dict:
    """Find or create the application user for a character."""
    user = users.setdefault(
        profile.character_owner_hash or profile.id,
        {"character_id": profile.id, "name": profile.name},
    )
    logger.info("Character logged in", character_id=profile.id)
    return user


strategy = EveStrategy(load_options_from_env(), verify, logger=logger)

app = FastAPI(title="EVE SSO example")
app.include_router(create_eve_router(strategy, secure_cookies=False, logger=logger))


@app.get("/users")
def list_users() -> dict:
    return {"users": list(users.values())}
