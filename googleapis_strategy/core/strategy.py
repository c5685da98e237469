"""
Google OAuth2 authentication strategy.

Runs the authorization-code flow in three legs:

1. No ``code`` on the request: redirect to Google's authorization page.
2. ``code`` present: exchange it for tokens and fetch the user's profile.
3. Hand tokens and profile to the application's verify callback, which
   decides whether they map to a user.

Every call to ``authenticate`` returns exactly one outcome.
"""

import inspect
import logging
from dataclasses import fields
from typing import Any, Mapping, Optional, Union

from googleapis_strategy.core.domain import (
    Error,
    Fail,
    Outcome,
    Redirect,
    StrategyConfig,
    Success,
    TokenSet,
    VerifyCallback,
    VerifyContext,
    VerifyResult,
)
from googleapis_strategy.core.exceptions import (
    AuthorizationError,
    StrategyConfigError,
)
from googleapis_strategy.core.oauth_errors import create_oauth_error
from googleapis_strategy.core.ports import AuthRequest, OAuth2Client, ProfileFetcher
from googleapis_strategy.infrastructure.google_oauth_client import GoogleOAuth2Client
from googleapis_strategy.infrastructure.userinfo_fetcher import GoogleUserinfoFetcher

logger = logging.getLogger(__name__)

ACCESS_DENIED = "access_denied"


def _resolve_config(
    config: Union[StrategyConfig, Mapping[str, Any], None],
) -> StrategyConfig:
    if config is None:
        return StrategyConfig()
    if isinstance(config, StrategyConfig):
        return config
    known = {f.name for f in fields(StrategyConfig)}
    unknown = sorted(set(config) - known)
    if unknown:
        raise StrategyConfigError(
            f"GoogleAPIsStrategy got unknown option(s): {', '.join(unknown)}"
        )
    return StrategyConfig(**config)


class GoogleAPIsStrategy:
    """
    Authentication strategy for Google APIs.

    Can be built as ``GoogleAPIsStrategy(config, verify)`` or, when every
    option comes from elsewhere, ``GoogleAPIsStrategy(verify)``. The OAuth2
    client and profile fetcher default to the Google adapters and may be
    injected for testing or for a different transport.
    """

    name = "googleapis"

    def __init__(
        self,
        config: Union[StrategyConfig, Mapping[str, Any], VerifyCallback, None] = None,
        verify: Optional[VerifyCallback] = None,
        *,
        oauth_client: Optional[OAuth2Client] = None,
        profile_fetcher: Optional[ProfileFetcher] = None,
    ):
        if callable(config):
            verify = config
            config = None

        resolved = _resolve_config(config)

        if verify is None:
            raise StrategyConfigError("GoogleAPIsStrategy requires a verify callback")
        if not resolved.client_id:
            raise StrategyConfigError("GoogleAPIsStrategy requires a client_id option")
        if not resolved.client_secret:
            raise StrategyConfigError(
                "GoogleAPIsStrategy requires a client_secret option"
            )
        if not resolved.redirect_url:
            raise StrategyConfigError(
                "GoogleAPIsStrategy requires a redirect_url option"
            )

        self._config = resolved
        self._verify = verify
        self._scope = resolved.scope

        self.oauth2_client: OAuth2Client = oauth_client or GoogleOAuth2Client(
            resolved.client_id, resolved.client_secret, resolved.redirect_url
        )
        self.profile_fetcher: ProfileFetcher = profile_fetcher or GoogleUserinfoFetcher()

    @property
    def config(self) -> StrategyConfig:
        return self._config

    async def authenticate(
        self, request: AuthRequest, options: Optional[Mapping[str, Any]] = None
    ) -> Outcome:
        """
        Run one leg of the authorization-code flow.

        Args:
            request: Inbound request; only its query parameters are read
            options: Per-call options (``scope``, ``accessType``/``access_type``)

        Returns:
            Redirect when starting the flow, otherwise Success, Fail or Error
        """
        options = options or {}
        query = getattr(request, "query_params", None) or {}

        if query.get("error"):
            return self._provider_error(query)

        code = query.get("code")
        if not code:
            params = self.authorization_params(options)
            try:
                location = self.oauth2_client.generate_auth_url(params)
            except Exception as e:
                logger.error(
                    f"Building authorization URL failed: {e}",
                    extra={"strategy": self.name, "error": str(e)},
                )
                return Error(e)
            logger.info(
                "Redirecting to Google authorization page",
                extra={"strategy": self.name, "scope": params.get("scope")},
            )
            return Redirect(location)

        try:
            token_data = await self.oauth2_client.get_token(code)
            tokens = TokenSet.from_oauth_response(token_data)
        except Exception as e:
            logger.error(
                f"Token exchange failed: {e}",
                extra={"strategy": self.name, "error": str(e)},
            )
            return Error(create_oauth_error("Failed to obtain access token", e))

        try:
            self.oauth2_client.set_credentials(token_data)
            profile = await self.profile_fetcher.get(auth=self.oauth2_client)
        except Exception as e:
            logger.error(
                f"Profile fetch failed: {e}",
                extra={"strategy": self.name, "error": str(e)},
            )
            return Error(e)

        return await self._verified(request, tokens, profile)

    def authorization_params(self, options: Mapping[str, Any]) -> dict[str, Any]:
        """
        Build extra authorization URL parameters.

        ``scope`` falls back to the strategy default; both keys are omitted
        when not supplied.
        """
        params: dict[str, Any] = {}

        scope = options.get("scope") or self._scope
        if scope:
            params["scope"] = scope

        access_type = options.get("accessType") or options.get("access_type")
        if access_type:
            params["access_type"] = access_type

        return params

    def _provider_error(self, query: Mapping[str, str]) -> Outcome:
        error = query.get("error")
        description = query.get("error_description")

        if error == ACCESS_DENIED:
            logger.info(
                "User denied access", extra={"strategy": self.name, "error": error}
            )
            return Fail({"message": description})

        logger.warning(
            f"Provider returned error: {error}",
            extra={"strategy": self.name, "error": error},
        )
        return Error(AuthorizationError(description, error, query.get("error_uri")))

    async def _verified(
        self, request: AuthRequest, tokens: TokenSet, profile: Mapping[str, Any]
    ) -> Outcome:
        ctx = VerifyContext(
            access_token=tokens.access_token,
            refresh_token=tokens.refresh_token,
            profile=profile,
            request=request if self._config.pass_request_to_callback else None,
            # Reserved slot, always empty
            params={} if self._config.include_extra_params else None,
        )

        try:
            result = self._verify(ctx)
            if inspect.isawaitable(result):
                result = await result
        except Exception as e:
            logger.error(
                f"Verify callback raised: {e}",
                extra={"strategy": self.name, "error": str(e)},
            )
            return Error(e)

        if isinstance(result, VerifyResult):
            user, info = result.user, result.info
        else:
            user, info = result, None

        if not user:
            return Fail(info)

        logger.info("User authenticated", extra={"strategy": self.name})
        return Success(user, info)
