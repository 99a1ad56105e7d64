# src/nethackboard/routes/auth.py

"""Login, logout and API token routes."""

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse, Response

from nethackboard.auth import AuthController, get_auth
from nethackboard.client import ApiClient, get_api_client
from nethackboard.exceptions import ApiRequestError
from nethackboard.rendering import render_template

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Auth"])


def _end_browser_session(
    request: Request, client: ApiClient, response: Response
) -> None:
    """Relay the API's Set-Cookie headers and expire any other session cookie."""
    relayed = set()
    for header in client.set_cookie_headers:
        response.headers.append("set-cookie", header)
        relayed.add(header.split("=", 1)[0].strip())
    for name in request.cookies:
        if name not in relayed:
            response.delete_cookie(name)


@router.get("/login")
async def login(client: ApiClient = Depends(get_api_client)) -> RedirectResponse:
    """Start the GitHub OAuth flow on the API."""
    return RedirectResponse(
        client.login_url, status_code=status.HTTP_307_TEMPORARY_REDIRECT
    )


@router.post("/logout")
async def logout(request: Request, auth: AuthController = Depends(get_auth)):
    """
    End the visitor's session and return to the challenge list.

    The browser's session cookies are expired on the redirect.
    """
    if not await auth.logout():
        return HTMLResponse(
            render_template(
                "error.html",
                auth=auth,
                heading="Logout failed",
                message="Could not log out. Please try again.",
            ),
            status_code=status.HTTP_502_BAD_GATEWAY,
        )
    response = RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)
    _end_browser_session(request, auth.client, response)
    return response


@router.post("/token", response_class=HTMLResponse)
async def generate_token(auth: AuthController = Depends(get_auth)) -> HTMLResponse:
    """
    Mint an API token for the game client and reveal it once.

    Anonymous visitors see a "Please log in first" notice; no request is made.
    """
    try:
        token = await auth.generate_token()
    except ApiRequestError as e:
        logger.warning("Token generation failed: %s", e.message, extra=e.details)
        return HTMLResponse(
            render_template(
                "token.html",
                auth=auth,
                token=None,
                error=f"Failed to generate token: {e.message}",
            ),
            status_code=status.HTTP_502_BAD_GATEWAY,
        )
    return HTMLResponse(render_template("token.html", auth=auth, token=token))
