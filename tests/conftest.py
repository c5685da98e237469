"""
Shared test configuration and fixtures.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from googleapis_strategy.core.domain import StrategyConfig, VerifyResult
from googleapis_strategy.core.strategy import GoogleAPIsStrategy


SAMPLE_PROFILE = {
    "id": "1234567890",
    "email": "jane@example.com",
    "verified_email": True,
    "name": "Jane Doe",
}


@pytest.fixture
def make_request():
    """Factory for request doubles exposing only query parameters."""

    def _make(**query):
        return SimpleNamespace(query_params=query)

    return _make


@pytest.fixture
def sample_profile():
    """Google userinfo profile."""
    return dict(SAMPLE_PROFILE)


@pytest.fixture
def strategy_config():
    """Valid strategy configuration."""
    return StrategyConfig(
        client_id="test-client-id",
        client_secret="test-client-secret",
        redirect_url="http://testserver/auth/googleapis/callback",
    )


@pytest.fixture
def mock_oauth_client():
    """OAuth2 client double; token exchange returns an access token only."""
    client = MagicMock()
    client.generate_auth_url.return_value = "https://accounts.google.com/o/oauth2/v2/auth?x=1"
    client.get_token = AsyncMock(return_value={"access_token": "AT1"})
    return client


@pytest.fixture
def mock_profile_fetcher():
    """Profile fetcher double returning SAMPLE_PROFILE."""
    fetcher = MagicMock()
    fetcher.get = AsyncMock(return_value=dict(SAMPLE_PROFILE))
    return fetcher


@pytest.fixture
def verify():
    """Verify callback double accepting every profile."""
    return MagicMock(return_value=VerifyResult(user={"id": "user-1"}, info={"scope": "email"}))


@pytest.fixture
def make_strategy(strategy_config, mock_oauth_client, mock_profile_fetcher, verify):
    """Factory building a strategy wired to the doubles."""

    def _make(config=None, verify_callback=None):
        return GoogleAPIsStrategy(
            config or strategy_config,
            verify_callback or verify,
            oauth_client=mock_oauth_client,
            profile_fetcher=mock_profile_fetcher,
        )

    return _make
