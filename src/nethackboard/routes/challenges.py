# src/nethackboard/routes/challenges.py

"""Challenge download and creation."""

import logging
from urllib.parse import urlencode

import pydantic
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse

from nethackboard.auth import AuthController, get_auth
from nethackboard.client import ApiClient, get_api_client
from nethackboard.exceptions import ApiRequestError
from nethackboard.rendering import render_template
from nethackboard.schemas import ChallengeCreate

logger = logging.getLogger(__name__)

# - prefix="/challenges": All routes defined here will be prefixed with /challenges
router = APIRouter(prefix="/challenges", tags=["Challenges"])


def _validation_message(exc: pydantic.ValidationError) -> str:
    fields = sorted({str(err["loc"][0]) for err in exc.errors() if err["loc"]})
    return f"Please fill in: {', '.join(fields)}" if fields else "Invalid challenge"


@router.get("/new", response_class=HTMLResponse)
async def new_challenge_form(auth: AuthController = Depends(get_auth)) -> HTMLResponse:
    """Show the create-challenge form."""
    return HTMLResponse(render_template("challenge_form.html", auth=auth, values={}))


@router.post("/new", response_class=HTMLResponse)
async def create_challenge(
    request: Request,
    client: ApiClient = Depends(get_api_client),
    auth: AuthController = Depends(get_auth),
):
    """
    Create a challenge from the submitted form.

    Redirects to the new challenge's page on success; otherwise the form
    is shown again with the error.
    """
    form = await request.form()
    values = {key: str(value) for key, value in form.items()}

    try:
        challenge_in = ChallengeCreate.model_validate(values)
    except pydantic.ValidationError as e:
        return HTMLResponse(
            render_template(
                "challenge_form.html",
                auth=auth,
                values=values,
                error=_validation_message(e),
            ),
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        )

    try:
        challenge = await client.create_challenge(challenge_in)
    except ApiRequestError as e:
        return HTMLResponse(
            render_template(
                "challenge_form.html",
                auth=auth,
                values=values,
                error=f"Failed to create challenge: {e.message}",
            ),
            status_code=status.HTTP_502_BAD_GATEWAY,
        )

    logger.info(
        "Created challenge %s",
        challenge.challenge_id,
        extra={"challenge_id": challenge.challenge_id},
    )
    return RedirectResponse(
        f"/challenge?{urlencode({'id': challenge.challenge_id})}",
        status_code=status.HTTP_303_SEE_OTHER,
    )


@router.get("/{challenge_id}/download")
async def download_challenge(
    challenge_id: str, client: ApiClient = Depends(get_api_client)
) -> RedirectResponse:
    """Send the browser to the API's challenge file."""
    return RedirectResponse(
        client.download_url(challenge_id),
        status_code=status.HTTP_307_TEMPORARY_REDIRECT,
    )
