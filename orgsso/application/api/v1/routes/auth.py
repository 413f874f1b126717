"""Authentication routes for the OAuth login flow."""

import logging

from dishka import FromDishka
from dishka.integrations.fastapi import DishkaRoute
from fastapi import APIRouter, Request, Response
from fastapi.responses import JSONResponse, RedirectResponse

from orgsso.application.api.v1.cookies import (
    AUTH_COOKIE,
    ORG_HINT_COOKIE,
    SHOW_ORG_COOKIE,
    clear_session_cookie,
    client_ip,
    set_session_cookie,
)
from orgsso.config import Config
from orgsso.domain.auth.command.login import (
    CompleteCallback,
    CompleteCallbackHandler,
    InitiateLogin,
    InitiateLoginHandler,
)
from orgsso.domain.auth.command.logout import Logout, LogoutHandler

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"], route_class=DishkaRoute)


def _error_response(e: Exception) -> JSONResponse:
    message = getattr(e, "message", None) or str(e)
    return JSONResponse(status_code=500, content={"error": message})


@router.get("/{provider}/login")
async def login(
    provider: str,
    handler: FromDishka[InitiateLoginHandler],
) -> Response:
    """Redirect to the identity provider's login page."""
    try:
        result = await handler.run(InitiateLogin(provider=provider))
    except Exception as e:
        logger.exception("Login redirect failed for provider=%s: %s", provider, e)
        return _error_response(e)

    logger.info("OAuth login initiated for provider=%s, redirecting to IdP", provider)
    return RedirectResponse(url=result.authorization_url, status_code=302)


@router.get("/{provider}/callback")
async def callback(
    provider: str,
    request: Request,
    config: FromDishka[Config],
    handler: FromDishka[CompleteCallbackHandler],
    code: str = "",
) -> Response:
    """Handle the identity provider callback.

    Sets the session cookie and redirects to the frontend. The `onboarding`
    header marks a freshly provisioned user, `reload` a returning one.
    """
    try:
        result = await handler.run(
            CompleteCallback(
                provider=provider,
                code=code,
                client_ip=client_ip(request),
                client_agent=request.headers.get("User-Agent", ""),
                org_cookie=request.cookies.get(ORG_HINT_COOKIE),
            )
        )
    except Exception as e:
        logger.exception("OAuth callback failed for provider=%s: %s", provider, e)
        return _error_response(e)

    response = RedirectResponse(url=config.frontend.url, status_code=302)
    set_session_cookie(response, config.frontend, AUTH_COOKIE, result.credential)

    if result.onboarding:
        if result.show_organization_id:
            set_session_cookie(
                response, config.frontend, SHOW_ORG_COOKIE, result.show_organization_id
            )
        response.headers["onboarding"] = "true"
    else:
        response.headers["reload"] = "true"

    return response


@router.post("/{provider}/logout")
async def logout(
    provider: str,
    config: FromDishka[Config],
    handler: FromDishka[LogoutHandler],
) -> Response:
    """Clear the session cookie and end the session at the identity provider."""
    try:
        result = await handler.run(
            Logout(provider=provider, post_logout_redirect=config.frontend.url)
        )
    except Exception as e:
        logger.exception("Logout failed for provider=%s: %s", provider, e)
        return _error_response(e)

    response = RedirectResponse(url=result.logout_url, status_code=302)
    clear_session_cookie(response, config.frontend)
    return response
