# tests/test_client.py

"""Tests for the leaderboard API client."""

import json

import httpx
import pytest
from nethackboard.client import ApiClient
from nethackboard.exceptions import ApiRequestError
from nethackboard.schemas import ChallengeCreate


@pytest.mark.asyncio
async def test_get_leaderboard_parses_entries(api_client):
    response = await api_client.get_leaderboard()

    assert [e.score for e in response.leaderboard] == [1500, 800, 300]
    assert response.leaderboard[0].challenge.challenge_id == "abc"
    assert response.leaderboard[1].player.name == "Valk Queen"
    assert [c.challenge_id for c in response.unclaimed_challenges] == ["new1"]


@pytest.mark.asyncio
async def test_leaderboard_filters_map_to_query_params(api_client, upstream):
    await api_client.get_leaderboard({"class": "wizard", "race": "", "gender": "male"})

    request = upstream.requests[-1]
    assert dict(request.url.params) == {"filter_class": "wizard", "filter_gender": "male"}


@pytest.mark.asyncio
async def test_leaderboard_without_filters_sends_no_params(api_client, upstream):
    await api_client.get_leaderboard({"race": ""})

    assert upstream.requests[-1].url.query == b""


@pytest.mark.asyncio
async def test_challenge_id_is_percent_encoded(api_client, upstream):
    upstream.routes[("GET", "/leaderboard/a b/c")] = {
        "challenge": {"challenge_id": "a b/c"},
        "leaderboard": [],
    }

    await api_client.get_challenge_leaderboard("a b/c")

    assert upstream.requests[-1].url.raw_path == b"/leaderboard/a%20b%2Fc"


@pytest.mark.asyncio
async def test_requests_carry_cookies_and_json_content_type(make_client, upstream):
    async with make_client(cookies={"session": "s3cr3t"}) as client:
        await client.check_auth_status()

    request = upstream.requests[-1]
    assert request.headers["content-type"] == "application/json"
    assert request.headers["cookie"] == "session=s3cr3t"


@pytest.mark.asyncio
async def test_clear_session_drops_cookies(make_client, upstream):
    async with make_client(cookies={"session": "s3cr3t"}) as client:
        client.clear_session()
        await client.check_auth_status()

    assert "cookie" not in upstream.requests[-1].headers


@pytest.mark.asyncio
async def test_set_cookie_headers_are_kept_for_the_browser(api_client, upstream):
    upstream.routes[("POST", "/auth/logout")] = httpx.Response(
        200, json={"success": True}, headers={"set-cookie": "session=; Max-Age=0"}
    )

    await api_client.check_auth_status()
    assert api_client.set_cookie_headers == []

    await api_client.logout()
    assert api_client.set_cookie_headers == ["session=; Max-Age=0"]


# =============================================================================
# Errors
# =============================================================================


@pytest.mark.asyncio
async def test_error_field_becomes_the_message(api_client, upstream):
    upstream.fail("GET", "/leaderboard", 500, error="Database unavailable")

    with pytest.raises(ApiRequestError) as exc_info:
        await api_client.get_leaderboard()

    assert exc_info.value.message == "Database unavailable"
    assert exc_info.value.details["status_code"] == 500


@pytest.mark.asyncio
async def test_message_field_is_used_when_error_is_absent(api_client, upstream):
    upstream.fail("GET", "/leaderboard", 403, message="Forbidden")

    with pytest.raises(ApiRequestError, match="Forbidden"):
        await api_client.get_leaderboard()


@pytest.mark.asyncio
async def test_non_json_error_body_is_generic(api_client, upstream):
    upstream.routes[("GET", "/leaderboard")] = httpx.Response(
        502, text="<html>Bad Gateway</html>"
    )

    with pytest.raises(ApiRequestError) as exc_info:
        await api_client.get_leaderboard()

    assert exc_info.value.message == "Request failed"


@pytest.mark.asyncio
async def test_transport_failure_is_generic(api_client, upstream):
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    upstream.routes[("GET", "/leaderboard")] = refuse

    with pytest.raises(ApiRequestError) as exc_info:
        await api_client.get_leaderboard()

    assert exc_info.value.message == "Request failed"
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


@pytest.mark.asyncio
async def test_invalid_json_success_body(api_client, upstream):
    upstream.routes[("GET", "/auth/status")] = httpx.Response(200, text="not json")

    with pytest.raises(ApiRequestError, match="Request failed"):
        await api_client.check_auth_status()


@pytest.mark.asyncio
async def test_unexpected_response_shape(api_client, upstream):
    upstream.routes[("GET", "/leaderboard")] = {"leaderboard": "nope"}

    with pytest.raises(ApiRequestError, match="Unexpected response from server"):
        await api_client.get_leaderboard()


# =============================================================================
# Challenges and auth
# =============================================================================


@pytest.mark.asyncio
async def test_list_challenges_accepts_bare_and_wrapped_lists(api_client, upstream):
    bare = await api_client.list_challenges()

    upstream.routes[("GET", "/challenges")] = {"challenges": [{"challenge_id": "only"}]}
    wrapped = await api_client.list_challenges()

    assert [c.challenge_id for c in bare] == ["abc", "xyz", "new1"]
    assert [c.challenge_id for c in wrapped] == ["only"]


@pytest.mark.asyncio
async def test_get_challenge(api_client):
    challenge = await api_client.get_challenge("abc")

    assert challenge.name == "Speedy Wizard"
    assert challenge.seed == "12345"


@pytest.mark.asyncio
async def test_create_challenge_posts_json(api_client, upstream):
    challenge_in = ChallengeCreate(
        name="Samurai Sprint",
        role="Samurai",
        race="human",
        gender="male",
        alignment="lawful",
    )

    challenge = await api_client.create_challenge(challenge_in)

    assert challenge.challenge_id == "created1"
    request = upstream.requests[-1]
    assert request.method == "POST"
    assert json.loads(request.content)["name"] == "Samurai Sprint"


@pytest.mark.asyncio
async def test_download_and_login_urls():
    async with ApiClient("https://api.test/") as client:
        download = client.download_url("abc")
        escaped = client.download_url("a/b")
        login = client.login_url

    assert download == "https://api.test/challenges/abc/download"
    assert escaped == "https://api.test/challenges/a%2Fb/download"
    assert login == "https://api.test/auth/github"


@pytest.mark.asyncio
async def test_auth_status_and_token(api_client, upstream):
    upstream.login_as({"github_username": "wiz1"})

    status = await api_client.check_auth_status()
    token = await api_client.generate_api_token()

    assert status.authenticated
    assert status.user.github_username == "wiz1"
    assert token.token == "nhb_tok_123"
