"""
Google OAuth2 client built on authlib's httpx integration.
"""

import logging
from contextvars import ContextVar
from typing import Any, Mapping, Optional

from authlib.integrations.httpx_client import AsyncOAuth2Client
from authlib.oauth2.rfc6749.parameters import prepare_grant_uri

logger = logging.getLogger(__name__)

GOOGLE_AUTHORIZE_URL = "https://accounts.google.com/o/oauth2/v2/auth"
GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"


class GoogleOAuth2Client:
    """
    OAuth2 client for Google's authorization and token endpoints.

    One instance is shared by every request handled by a strategy.
    Credentials applied with ``set_credentials`` live in a context variable,
    so each request task only ever sees its own tokens.
    """

    def __init__(self, client_id: str, client_secret: str, redirect_uri: str):
        self.client_id = client_id
        self._client_secret = client_secret
        self.redirect_uri = redirect_uri
        self._credentials: ContextVar[Optional[dict[str, Any]]] = ContextVar(
            f"google_oauth2_credentials_{id(self)}", default=None
        )

    def session(self) -> AsyncOAuth2Client:
        """
        Create an httpx session carrying the current credentials.

        Use as an async context manager so the connection pool is closed.
        """
        return AsyncOAuth2Client(
            client_id=self.client_id,
            client_secret=self._client_secret,
            redirect_uri=self.redirect_uri,
            token=self.credentials,
            token_endpoint_auth_method="client_secret_post",
        )

    def generate_auth_url(self, params: Mapping[str, Any]) -> str:
        """
        Build the Google authorization URL.

        Args:
            params: Extra query parameters (scope, access_type)

        Returns:
            Authorization URL including client_id and redirect_uri
        """
        extra = dict(params)
        scope = extra.pop("scope", None)
        return prepare_grant_uri(
            GOOGLE_AUTHORIZE_URL,
            self.client_id,
            "code",
            redirect_uri=self.redirect_uri,
            scope=scope,
            **extra,
        )

    async def get_token(self, code: str) -> dict[str, Any]:
        """
        Exchange an authorization code at Google's token endpoint.

        Raises:
            authlib OAuthError: If Google answers with an OAuth error body
            httpx.HTTPError: On transport errors or 5xx responses
        """
        logger.debug("Exchanging authorization code for tokens")
        async with self.session() as client:
            token = await client.fetch_token(
                GOOGLE_TOKEN_URL,
                grant_type="authorization_code",
                code=code,
            )
        return dict(token)

    def set_credentials(self, tokens: Mapping[str, Any]) -> None:
        """Apply tokens for calls made later in the current request."""
        self._credentials.set(dict(tokens))

    @property
    def credentials(self) -> Optional[dict[str, Any]]:
        return self._credentials.get()
