"""
Normalization of token exchange failures.

Token endpoint errors come back in different shapes depending on where the
request failed. These helpers reduce them to a single error type.
"""

import json
from typing import Any, Optional

import httpx

from googleapis_strategy.core.exceptions import (
    AuthorizationError,
    TokenExchangeError,
)


def parse_error_response(body: Any, status: Optional[int]) -> Optional[AuthorizationError]:
    """
    Parse an OAuth error response body.

    Args:
        body: Raw response body (JSON text or bytes)
        status: HTTP status code of the response

    Returns:
        AuthorizationError if the body has an ``error`` field, None otherwise

    Raises:
        ValueError: If the body is not valid JSON
    """
    data = json.loads(body)
    if isinstance(data, dict) and data.get("error"):
        return AuthorizationError(
            data.get("error_description"),
            data["error"],
            data.get("error_uri"),
        )
    return None


def _status_and_data(err: BaseException) -> tuple[Optional[int], Any]:
    if isinstance(err, httpx.HTTPStatusError):
        return err.response.status_code, err.response.text
    return getattr(err, "status_code", None), getattr(err, "data", None)


def create_oauth_error(message: str, err: BaseException) -> BaseException:
    """
    Normalize a token exchange failure.

    Args:
        message: Message for the generic fallback error
        err: The original failure

    Returns:
        AuthorizationError when the failure describes an OAuth error,
        otherwise a TokenExchangeError chained to ``err``
    """
    normalized: Optional[BaseException] = None

    status_code, data = _status_and_data(err)
    if status_code and data:
        try:
            normalized = parse_error_response(data, status_code)
        except (TypeError, ValueError):
            pass

    # authlib raises OAuthError once it has parsed the error body itself
    if normalized is None and isinstance(getattr(err, "error", None), str):
        normalized = AuthorizationError(
            getattr(err, "description", None),
            err.error,
            getattr(err, "uri", None),
        )

    if normalized is None:
        normalized = TokenExchangeError(message)
        normalized.__cause__ = err

    return normalized
