"""
Core domain models for the Google OAuth2 strategy.

These models describe configuration, tokens, the verify callback contract
and the outcome of an authentication attempt. They do not depend on any
web framework or HTTP client.
"""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


@dataclass(frozen=True)
class StrategyConfig:
    """
    Strategy configuration.

    ``client_id``, ``client_secret`` and ``redirect_url`` are required; the
    strategy validates them at construction.
    """

    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    redirect_url: Optional[str] = None
    scope: Optional[Union[str, list[str]]] = None

    # Populate VerifyContext.request with the inbound request
    pass_request_to_callback: bool = False

    # Populate VerifyContext.params with the reserved (always empty) mapping
    include_extra_params: bool = False


class TokenSet(BaseModel):
    """
    Tokens returned by the token endpoint.

    Transient: handed to the profile fetcher and the verify callback, never
    stored by the strategy.
    """

    access_token: str = Field(description="OAuth2 access token")
    refresh_token: Optional[str] = Field(
        default=None, description="OAuth2 refresh token, None when not issued"
    )
    # expires_at, scope, token_type, id_token and friends pass through untyped
    model_config = ConfigDict(extra="allow")

    @classmethod
    def from_oauth_response(cls, token_data: Mapping[str, Any]) -> "TokenSet":
        """
        Create a TokenSet from a token endpoint response.

        Args:
            token_data: Raw token mapping from the OAuth2 client

        Returns:
            TokenSet instance
        """
        return cls(
            access_token=token_data["access_token"],
            refresh_token=token_data.get("refresh_token") or None,
            **{
                key: value
                for key, value in token_data.items()
                if key not in ("access_token", "refresh_token")
            },
        )


@dataclass(frozen=True)
class VerifyContext:
    """
    Everything the verify callback gets to decide on a user.

    ``request`` is None unless the strategy passes the request through.
    ``params`` is None unless extra params are enabled, in which case it is
    an empty mapping reserved for future use.
    """

    access_token: str
    refresh_token: Optional[str]
    profile: Mapping[str, Any]
    request: Any = None
    params: Optional[dict[str, Any]] = None


@dataclass(frozen=True)
class VerifyResult:
    """Result of a verify callback. A falsy ``user`` fails the attempt."""

    user: Any = None
    info: Any = None


VerifyCallback = Callable[
    [VerifyContext], Union[VerifyResult, Any, Awaitable[Union[VerifyResult, Any]]]
]


# ============================================================================
# Outcomes
# ============================================================================


@dataclass(frozen=True)
class Success:
    """The user was authenticated."""

    user: Any
    info: Any = None


@dataclass(frozen=True)
class Fail:
    """The attempt was rejected; ``challenge`` describes why."""

    challenge: Any = None
    status: Optional[int] = None


@dataclass(frozen=True)
class Error:
    """An internal or provider error interrupted the attempt."""

    error: BaseException


@dataclass(frozen=True)
class Redirect:
    """The user agent must be sent to the provider's authorization page."""

    url: str


Outcome = Union[Success, Fail, Error, Redirect]
