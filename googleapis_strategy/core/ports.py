"""
Port definitions (interfaces) for the core domain.

Ports define the contracts between the strategy and its collaborators.
Infrastructure adapters implement these ports; tests substitute doubles.
"""

from typing import Any, Mapping, Optional, Protocol, runtime_checkable

from googleapis_strategy.core.domain import Outcome


class AuthRequest(Protocol):
    """
    Inbound request as seen by a strategy.

    Starlette's ``Request`` satisfies this protocol.
    """

    @property
    def query_params(self) -> Mapping[str, str]: ...


class OAuth2Client(Protocol):
    """
    Port (interface) for the provider's OAuth2 client.

    Handles authorization URL generation, code-for-token exchange and
    credential storage for subsequent calls.
    """

    def generate_auth_url(self, params: Mapping[str, Any]) -> str:
        """
        Build the provider's authorization URL.

        Args:
            params: Extra authorization parameters (scope, access_type)

        Returns:
            Absolute URL to redirect the user agent to
        """
        ...

    async def get_token(self, code: str) -> dict[str, Any]:
        """Exchange an authorization code for a token response."""
        ...

    def set_credentials(self, tokens: Mapping[str, Any]) -> None:
        """Apply tokens to the client for subsequent calls."""
        ...


class ProfileFetcher(Protocol):
    """Port (interface) for retrieving the identity profile."""

    async def get(self, auth: OAuth2Client) -> dict[str, Any]:
        """
        Fetch the profile of the user the credentials belong to.

        Args:
            auth: An OAuth2 client with credentials applied

        Returns:
            The provider's profile record, unmodified
        """
        ...


@runtime_checkable
class AuthStrategy(Protocol):
    """A pluggable authentication strategy."""

    name: str

    async def authenticate(
        self, request: AuthRequest, options: Optional[Mapping[str, Any]] = None
    ) -> Outcome:
        """Run one authentication attempt and report exactly one outcome."""
        ...
