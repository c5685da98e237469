"""
Tests for token exchange error normalization.
"""

import httpx
import pytest
from authlib.integrations.httpx_client import OAuthError

from googleapis_strategy.core.exceptions import AuthorizationError, TokenExchangeError
from googleapis_strategy.core.oauth_errors import create_oauth_error, parse_error_response


class TokenEndpointFailure(Exception):
    """Failure shaped like an HTTP client error with a raw body."""

    def __init__(self, status_code, data):
        super().__init__(f"HTTP {status_code}")
        self.status_code = status_code
        self.data = data


class TestParseErrorResponse:
    """Tests for parse_error_response."""

    def test_error_body(self):
        err = parse_error_response(
            '{"error": "invalid_grant", "error_description": "bad code", '
            '"error_uri": "https://example.com/err"}',
            400,
        )

        assert isinstance(err, AuthorizationError)
        assert err.message == "bad code"
        assert err.code == "invalid_grant"
        assert err.uri == "https://example.com/err"

    def test_body_without_error_returns_none(self):
        assert parse_error_response('{"access_token": "x"}', 200) is None

    def test_invalid_json_raises(self):
        with pytest.raises(ValueError):
            parse_error_response("<html>oops</html>", 500)


class TestCreateOAuthError:
    """Tests for create_oauth_error."""

    def test_status_and_json_data(self):
        failure = TokenEndpointFailure(
            400, '{"error": "invalid_grant", "error_description": "bad code"}'
        )

        err = create_oauth_error("Failed to obtain access token", failure)

        assert isinstance(err, AuthorizationError)
        assert str(err) == "bad code"
        assert err.code == "invalid_grant"

    def test_unparsable_data_falls_back(self):
        failure = TokenEndpointFailure(502, "<html>Bad Gateway</html>")

        err = create_oauth_error("Failed to obtain access token", failure)

        assert isinstance(err, TokenExchangeError)
        assert str(err) == "Failed to obtain access token"
        assert err.__cause__ is failure

    def test_json_without_error_field_falls_back(self):
        failure = TokenEndpointFailure(400, '{"message": "nope"}')

        err = create_oauth_error("Failed to obtain access token", failure)

        assert isinstance(err, TokenExchangeError)

    def test_missing_status_falls_back(self):
        failure = TokenEndpointFailure(None, '{"error": "invalid_grant"}')

        err = create_oauth_error("Failed to obtain access token", failure)

        assert isinstance(err, TokenExchangeError)

    def test_plain_exception_falls_back(self):
        failure = RuntimeError("boom")

        err = create_oauth_error("Failed to obtain access token", failure)

        assert isinstance(err, TokenExchangeError)
        assert err.__cause__ is failure

    def test_httpx_status_error(self):
        response = httpx.Response(
            400,
            json={"error": "invalid_client", "error_description": "Unauthorized client"},
            request=httpx.Request("POST", "https://oauth2.googleapis.com/token"),
        )
        failure = httpx.HTTPStatusError("400", request=response.request, response=response)

        err = create_oauth_error("Failed to obtain access token", failure)

        assert isinstance(err, AuthorizationError)
        assert str(err) == "Unauthorized client"
        assert err.code == "invalid_client"

    def test_authlib_oauth_error(self):
        failure = OAuthError(error="invalid_grant", description="Code was already redeemed.")

        err = create_oauth_error("Failed to obtain access token", failure)

        assert isinstance(err, AuthorizationError)
        assert str(err) == "Code was already redeemed."
        assert err.code == "invalid_grant"

    def test_error_without_description_uses_code(self):
        failure = TokenEndpointFailure(400, '{"error": "invalid_request"}')

        err = create_oauth_error("Failed to obtain access token", failure)

        assert str(err) == "invalid_request"

    def test_same_input_same_output(self):
        failure = TokenEndpointFailure(
            400, '{"error": "invalid_grant", "error_description": "bad code"}'
        )

        first = create_oauth_error("m", failure)
        second = create_oauth_error("m", failure)

        assert (type(first), str(first), first.code) == (
            type(second),
            str(second),
            second.code,
        )
