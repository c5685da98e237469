"""
OAuth2 settings for the HTTP integration.

Loaded from environment variables and turned into a StrategyConfig.
"""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

from googleapis_strategy.core.domain import StrategyConfig


logger = logging.getLogger(__name__)

DEFAULT_SCOPE = "openid email profile"


@dataclass(frozen=True)
class OAuthSettings:
    """
    OAuth settings.

    Loaded from environment variables. ``is_configured`` tells whether the
    Google strategy can be built.
    """

    base_url: str
    google_client_id: str | None
    google_client_secret: str | None
    scope: str = DEFAULT_SCOPE
    access_type: str | None = None

    @classmethod
    def from_env(cls) -> "OAuthSettings":
        """Load settings from environment variables."""
        return cls(
            base_url=os.getenv("BASE_URL", ""),
            google_client_id=os.getenv("GOOGLE_CLIENT_ID"),
            google_client_secret=os.getenv("GOOGLE_CLIENT_SECRET"),
            scope=os.getenv("GOOGLE_OAUTH_SCOPE", DEFAULT_SCOPE),
            access_type=os.getenv("GOOGLE_ACCESS_TYPE") or None,
        )

    def get_callback_url(self, name: str) -> str:
        """Generate the callback URL for a strategy."""
        return f"{self.base_url}/auth/{name}/callback"

    def is_configured(self) -> bool:
        """Check if Google credentials are present."""
        return bool(self.google_client_id and self.google_client_secret)

    def to_strategy_config(self, name: str = "googleapis") -> StrategyConfig:
        """Build the strategy configuration from these settings."""
        return StrategyConfig(
            client_id=self.google_client_id,
            client_secret=self.google_client_secret,
            redirect_url=self.get_callback_url(name),
            scope=self.scope,
        )

    def call_options(self) -> dict[str, str]:
        """Per-call options passed to ``authenticate``."""
        options = {}
        if self.access_type:
            options["access_type"] = self.access_type
        return options


@lru_cache()
def get_oauth_settings() -> OAuthSettings:
    """Get OAuth settings singleton."""
    settings = OAuthSettings.from_env()
    if not settings.is_configured():
        logger.warning("Google OAuth not configured (missing credentials)")
    return settings
