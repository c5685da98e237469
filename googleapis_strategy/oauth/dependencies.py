"""
FastAPI dependencies for the authentication endpoints.

Provides the configured strategy and validates the strategy name in the path.
"""

import logging
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, HTTPException, status

from googleapis_strategy.core.domain import VerifyContext, VerifyResult
from googleapis_strategy.core.ports import AuthStrategy
from googleapis_strategy.core.strategy import GoogleAPIsStrategy
from googleapis_strategy.oauth.config import OAuthSettings, get_oauth_settings


logger = logging.getLogger(__name__)


def verify_profile(ctx: VerifyContext) -> VerifyResult:
    """
    Default verify callback.

    Accepts any Google account with a verified email address and uses the
    profile itself as the user. Applications override ``get_strategy`` to
    plug in their own user lookup.
    """
    profile = ctx.profile
    if not profile.get("verified_email", profile.get("email_verified")):
        return VerifyResult(info={"message": "Email address is not verified"})

    user = {
        "id": profile.get("id") or profile.get("sub"),
        "email": profile.get("email"),
        "name": profile.get("name"),
    }
    return VerifyResult(user=user)


@lru_cache()
def _build_strategy(settings: OAuthSettings) -> GoogleAPIsStrategy:
    return GoogleAPIsStrategy(
        settings.to_strategy_config(GoogleAPIsStrategy.name), verify_profile
    )


def get_settings() -> OAuthSettings:
    """Provide OAuth settings dependency."""
    return get_oauth_settings()


def get_strategy(
    settings: Annotated[OAuthSettings, Depends(get_settings)],
) -> AuthStrategy:
    """
    Provide the Google strategy dependency.

    Raises:
        HTTPException: If Google credentials are not configured
    """
    if not settings.is_configured():
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Strategy '{GoogleAPIsStrategy.name}' is not configured",
        )
    return _build_strategy(settings)


async def validate_name(name: str) -> str:
    """
    Validate that the strategy name in the path is supported.

    Raises:
        HTTPException: If the name is unknown
    """
    if name != GoogleAPIsStrategy.name:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown strategy: {name}. Supported: ['{GoogleAPIsStrategy.name}']",
        )
    return name


# Type aliases for cleaner dependency injection
Settings = Annotated[OAuthSettings, Depends(get_settings)]
Strategy = Annotated[AuthStrategy, Depends(get_strategy)]
ValidName = Annotated[str, Depends(validate_name)]
