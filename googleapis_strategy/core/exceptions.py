"""
Domain exceptions for the Google OAuth2 strategy.

These exceptions are carried inside ``Error`` outcomes (or raised at
construction time) and mapped to HTTP responses by the router.
"""

from typing import Optional


class StrategyError(Exception):
    """Base exception for strategy errors."""

    pass


class AuthorizationError(StrategyError):
    """
    Raised for OAuth errors reported by the provider.

    Covers both the ``error`` query parameter on the callback and errors
    parsed out of a failed token endpoint response.
    """

    def __init__(
        self,
        message: Optional[str],
        code: Optional[str] = None,
        uri: Optional[str] = None,
    ):
        self.message = message or code or "OAuth authorization failed"
        self.code = code
        self.uri = uri
        super().__init__(self.message)


class TokenExchangeError(StrategyError):
    """
    Raised when the authorization code could not be exchanged for tokens.

    The underlying failure is available as ``__cause__``.
    """

    pass


class StrategyConfigError(StrategyError, TypeError):
    """Raised when the strategy is constructed without required options."""

    pass
