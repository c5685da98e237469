"""
Profile fetcher for Google's OAuth2 userinfo endpoint.
"""

import logging
from typing import Any

from googleapis_strategy.infrastructure.google_oauth_client import GoogleOAuth2Client

logger = logging.getLogger(__name__)

GOOGLE_USERINFO_URL = "https://www.googleapis.com/oauth2/v2/userinfo"


class GoogleUserinfoFetcher:
    """Fetches the signed-in user's profile with the client's credentials."""

    def __init__(self, userinfo_url: str = GOOGLE_USERINFO_URL):
        self.userinfo_url = userinfo_url

    async def get(self, auth: GoogleOAuth2Client) -> dict[str, Any]:
        """
        Retrieve the userinfo record.

        Args:
            auth: Client with credentials applied for this request

        Returns:
            The profile as returned by Google

        Raises:
            authlib MissingTokenError: If no credentials were applied
            httpx.HTTPStatusError: If Google rejects the request
        """
        async with auth.session() as client:
            response = await client.get(self.userinfo_url)
            response.raise_for_status()
            profile = response.json()

        logger.debug(f"Fetched userinfo profile: {profile.get('id')}")
        return profile
