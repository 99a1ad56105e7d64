# src/nethackboard/routes/pages.py

"""Table pages: challenge list, global leaderboard and challenge detail."""

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import HTMLResponse

from nethackboard.auth import AuthController, get_auth
from nethackboard.client import ApiClient, get_api_client
from nethackboard.views import ChallengeDetailView, ChallengeListView, LeaderboardView

# Creates an APIRouter instance
# - tags=["Pages"]: Groups these endpoints under "Pages" in the API docs
router = APIRouter(tags=["Pages"], default_response_class=HTMLResponse)


@router.get("/")
async def challenge_list(
    request: Request,
    client: ApiClient = Depends(get_api_client),
    auth: AuthController = Depends(get_auth),
) -> HTMLResponse:
    """
    List every challenge with its best score and champion.

    - **sort**, **dir**: Sort field and direction (default: created_at desc)
    - **q**: Free-text filter over name, class, race, alignment and champion
    - **class**, **race**, **gender**: Exact-match dropdown filters
    - **expand**: Challenge IDs whose submissions are shown inline (repeatable)
    """
    state = ChallengeListView.state_from_query(request.query_params)
    view = ChallengeListView(client, state)
    await view.load()
    return HTMLResponse(view.render(auth=auth))


@router.get("/leaderboard")
async def leaderboard(
    request: Request,
    client: ApiClient = Depends(get_api_client),
    auth: AuthController = Depends(get_auth),
) -> HTMLResponse:
    """
    Ranked submissions across all challenges.

    Accepts the same sort and filter parameters as the challenge list.
    """
    state = LeaderboardView.state_from_query(request.query_params)
    view = LeaderboardView(client, state)
    await view.load()
    return HTMLResponse(view.render(auth=auth))


@router.get("/challenge")
async def challenge_detail(
    request: Request,
    client: ApiClient = Depends(get_api_client),
    auth: AuthController = Depends(get_auth),
) -> HTMLResponse:
    """
    Submissions and metadata for the challenge named by **id**.

    A missing ID is answered with 404 without contacting the API.
    """
    view = ChallengeDetailView(
        client,
        request.query_params.get("id"),
        ChallengeDetailView.state_from_query(request.query_params),
    )
    await view.load()
    status_code = (
        status.HTTP_404_NOT_FOUND if view.not_found else status.HTTP_200_OK
    )
    return HTMLResponse(view.render(auth=auth), status_code=status_code)
