import pytest
from httpx import AsyncClient
from sqlmodel import select

from loginflow.app.services.cookies import TEST_COOKIE, CookieNames
from loginflow.app.services.settings import LoginSettings
from loginflow.domain.entities import AuditEvent, Session
from tests.fixtures.users import seed_user
from tests.utils.http_helpers import login_request, set_cookies

NAMES = CookieNames(LoginSettings(site_url="http://test").cookie_hash)


@pytest.mark.asyncio
async def test_login_screen(client: AsyncClient):
    """A first visit renders the empty form and plants the test cookie"""
    response = await login_request(client, with_test_cookie=False)

    assert response.status_code == 200
    data = response.json()
    assert data["view"] == "login"
    assert data["errors"] == []
    assert TEST_COOKIE in set_cookies(response)


@pytest.mark.asyncio
async def test_successful_login(client: AsyncClient, db_session):
    """Correct credentials issue the cookie pair and a stored session"""
    user_id = await seed_user(db_session, "alice", "correct horse")

    response = await login_request(
        client, "POST", data={"log": "alice", "pwd": "correct horse"}
    )

    assert response.status_code == 302
    assert response.headers["location"] == "http://test/wp-admin/"
    cookies = set_cookies(response)
    assert cookies[NAMES.logged_in]["httponly"]
    assert cookies[NAMES.auth]["path"] == "/wp-admin"

    sessions = (await db_session.exec(select(Session).where(Session.user_id == user_id))).all()
    assert len(sessions) == 1
    # Only a verifier is stored, never the cookie value
    assert sessions[0].verifier not in cookies[NAMES.logged_in].value

    events = (await db_session.exec(select(AuditEvent).where(AuditEvent.user_id == user_id))).all()
    assert [e.action for e in events] == ["login"]


@pytest.mark.asyncio
async def test_login_by_email(client: AsyncClient, db_session):
    await seed_user(db_session, "alice", "correct horse")

    response = await login_request(
        client, "POST", data={"log": "alice@example.com", "pwd": "correct horse"}
    )

    assert response.status_code == 302


@pytest.mark.asyncio
async def test_invalid_credentials(client: AsyncClient, db_session):
    """Wrong password and unknown user give the same answer"""
    await seed_user(db_session, "alice", "correct horse")

    wrong = await login_request(client, "POST", data={"log": "alice", "pwd": "nope"})
    unknown = await login_request(client, "POST", data={"log": "mallory", "pwd": "nope"})

    assert wrong.status_code == unknown.status_code == 200
    assert wrong.json()["errors"] == unknown.json()["errors"]
    assert wrong.json()["errors"][0]["code"] == "invalid_credentials"
    assert NAMES.logged_in not in set_cookies(wrong)


@pytest.mark.asyncio
async def test_login_without_test_cookie(client: AsyncClient, db_session):
    await seed_user(db_session, "alice", "correct horse")

    response = await login_request(
        client, "POST", data={"log": "alice", "pwd": "correct horse"}, with_test_cookie=False
    )

    assert response.status_code == 200
    assert [e["code"] for e in response.json()["errors"]] == ["test_cookie"]
    assert NAMES.logged_in not in set_cookies(response)


@pytest.mark.asyncio
async def test_open_redirect_is_blocked(client: AsyncClient, db_session):
    await seed_user(db_session, "alice", "correct horse")

    response = await login_request(
        client,
        "POST",
        data={"log": "alice", "pwd": "correct horse", "redirect_to": "https://evil.example/"},
    )

    assert response.status_code == 302
    assert response.headers["location"] == "http://test/wp-admin/"


@pytest.mark.asyncio
async def test_unknown_action_is_login(client: AsyncClient):
    response = await login_request(client, params={"action": "../../etc/passwd"})

    assert response.status_code == 200
    assert response.json()["view"] == "login"


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
