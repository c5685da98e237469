"""
Authentication API endpoints.

Exposes the strategy over HTTP:
- GET /auth/{name} - Start the OAuth2 flow
- GET /auth/{name}/callback - Complete the flow

Outcomes are translated to responses here; the strategy itself knows
nothing about HTTP.
"""

import logging

from fastapi import APIRouter, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, RedirectResponse, Response

from googleapis_strategy.core.domain import Error, Fail, Outcome, Redirect, Success
from googleapis_strategy.core.exceptions import StrategyError
from googleapis_strategy.oauth.dependencies import Settings, Strategy, ValidName


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def outcome_to_response(outcome: Outcome) -> Response:
    """
    Map a strategy outcome to an HTTP response.

    Args:
        outcome: Result of ``authenticate``

    Returns:
        302 for Redirect, 200 for Success, 401 (or the fail status hint)
        for Fail, 502 for strategy errors and 500 for anything else
    """
    if isinstance(outcome, Redirect):
        return RedirectResponse(url=outcome.url, status_code=status.HTTP_302_FOUND)

    if isinstance(outcome, Success):
        return JSONResponse(
            status_code=status.HTTP_200_OK,
            content={
                "status": "success",
                "user": jsonable_encoder(outcome.user),
                "info": jsonable_encoder(outcome.info),
            },
        )

    if isinstance(outcome, Fail):
        return JSONResponse(
            status_code=outcome.status or status.HTTP_401_UNAUTHORIZED,
            content={
                "status": "fail",
                "challenge": jsonable_encoder(outcome.challenge),
            },
        )

    if isinstance(outcome, Error):
        err = outcome.error
        logger.error(f"Authentication error: {err}", exc_info=err)
        if isinstance(err, StrategyError):
            return JSONResponse(
                status_code=status.HTTP_502_BAD_GATEWAY,
                content={"status": "error", "message": str(err)},
            )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"status": "error", "message": "Authentication failed"},
        )

    raise TypeError(f"Unknown outcome: {outcome!r}")


@router.get("/{name}")
async def login(
    name: ValidName,
    request: Request,
    strategy: Strategy,
    settings: Settings,
):
    """
    Start the OAuth2 authorization flow.

    Redirects the user to Google's authorization page.
    """
    logger.info(f"Starting OAuth flow for strategy: {name}", extra={"strategy": name})
    outcome = await strategy.authenticate(request, settings.call_options())
    return outcome_to_response(outcome)


@router.get("/{name}/callback")
async def callback(
    name: ValidName,
    request: Request,
    strategy: Strategy,
    settings: Settings,
):
    """
    Handle the OAuth2 callback from Google.

    Exchanges the code, fetches the profile and runs the verify callback.
    """
    logger.info(f"OAuth callback received for strategy: {name}", extra={"strategy": name})
    outcome = await strategy.authenticate(request, settings.call_options())
    return outcome_to_response(outcome)
