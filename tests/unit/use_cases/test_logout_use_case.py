"""
Unit tests for LogoutUseCase
"""
import pytest

from loginflow.app.services.cookies import CookieNames
from loginflow.app.services.nonce_service import NonceService
from loginflow.app.use_cases.auth import Redirect
from loginflow.domain.errors import FatalRequestError
from tests.utils.factories import NOW, make_request, make_user, session_cookies


@pytest.fixture
def logged_in(mock_uow, settings):
    user = make_user()
    cookies, session = session_cookies(settings, user, token="tok")
    mock_uow.sessions.get_by_verifier.return_value = session
    mock_uow.users.get_by_id.return_value = user
    return user, cookies, session


@pytest.mark.asyncio
async def test_logout_without_session_is_idempotent(dispatcher, mock_uow, settings):
    first = await dispatcher.dispatch(make_request(query={"action": "logout"}))
    second = await dispatcher.dispatch(make_request(query={"action": "logout"}))

    assert first.outcome == second.outcome == Redirect("http://test/wp-login.php?loggedout=true")
    logged_in_name = CookieNames(settings.cookie_hash).logged_in
    expired = [c for c in first.cookies if c.name == logged_in_name]
    assert expired and expired[0].expires < NOW
    mock_uow.sessions.destroy.assert_not_called()


@pytest.mark.asyncio
async def test_logout_with_bad_nonce_is_rejected(dispatcher, mock_uow, logged_in):
    _, cookies, _ = logged_in

    with pytest.raises(FatalRequestError) as exc_info:
        await dispatcher.dispatch(
            make_request(query={"action": "logout", "_wpnonce": "0123456789"}, cookies=cookies)
        )

    assert exc_info.value.status_code == 403
    assert exc_info.value.base_error.code == "invalid_nonce"
    mock_uow.sessions.destroy.assert_not_called()


@pytest.mark.asyncio
async def test_logout_with_valid_nonce_destroys_session(dispatcher, mock_uow, settings, clock, logged_in):
    user, cookies, session = logged_in
    nonce = NonceService(settings.auth_secret, settings.nonce_life, clock).create("log-out", user.id, "tok")
    on_logout = []
    dispatcher.services.hooks.on_logout = on_logout.append

    result = await dispatcher.dispatch(
        make_request(query={"action": "logout", "_wpnonce": nonce}, cookies=cookies)
    )

    assert result.outcome == Redirect("http://test/wp-login.php?loggedout=true")
    mock_uow.sessions.destroy.assert_awaited_once_with(session.verifier)
    mock_uow.commit.assert_awaited_once()
    assert on_logout == [user]


@pytest.mark.asyncio
async def test_logout_redirect_to_is_validated(dispatcher):
    result = await dispatcher.dispatch(
        make_request(query={"action": "logout", "redirect_to": "https://evil.example/"})
    )

    assert result.outcome.location == "http://test/wp-admin/"


@pytest.mark.asyncio
async def test_logout_redirect_hook(dispatcher):
    dispatcher.services.hooks.logout_redirect = lambda redirect_to, requested, user: "/goodbye/"

    result = await dispatcher.dispatch(make_request(query={"action": "logout"}))

    assert result.outcome.location == "/goodbye/"
