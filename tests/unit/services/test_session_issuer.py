"""
Unit tests for SessionIssuer
"""
import pytest

from loginflow.app.services.response_builder import ResponseBuilder
from loginflow.app.services.session_issuer import SessionIssuer, token_verifier
from loginflow.domain.entities import CookieScheme
from tests.utils.factories import NOW, make_user


@pytest.fixture
def issuer(mock_uow, settings):
    return SessionIssuer(mock_uow, settings, clock=lambda: NOW)


@pytest.mark.asyncio
async def test_issue_session_writes_cookie_pair(issuer, mock_uow, settings):
    user = make_user()
    response = ResponseBuilder(now=NOW)

    token = await issuer.issue_session(user, remember=False, secure_only=False, response=response)

    stored = mock_uow.sessions.create.call_args.args[0]
    assert stored.verifier == token_verifier(token.token)
    assert stored.verifier != token.token
    assert stored.expiration == NOW + settings.session_ttl

    auth = response.cookie(issuer.names.auth)
    logged_in = response.cookie(issuer.names.logged_in)
    assert auth.path == settings.admin_cookie_path
    assert logged_in.path == settings.cookie_path
    assert auth.httponly and logged_in.httponly
    # Browser-session cookies unless "remember me"
    assert auth.expires is None and logged_in.expires is None
    assert response.cookie(issuer.names.secure_auth) is None


@pytest.mark.asyncio
async def test_remembered_secure_session(issuer, settings):
    response = ResponseBuilder(now=NOW)

    token = await issuer.issue_session(make_user(), remember=True, secure_only=True, response=response)

    assert token.expiration == NOW + settings.remember_ttl
    secure_auth = response.cookie(issuer.names.secure_auth)
    assert secure_auth.secure
    assert secure_auth.expires > token.expiration
    assert response.cookie(issuer.names.auth) is None


@pytest.mark.asyncio
async def test_current_session_resolves_logged_in_cookie(issuer, mock_uow):
    user = make_user()
    response = ResponseBuilder(now=NOW)
    token = await issuer.issue_session(user, remember=False, secure_only=False, response=response)
    stored = mock_uow.sessions.create.call_args.args[0]
    mock_uow.sessions.get_by_verifier.return_value = stored
    mock_uow.users.get_by_id.return_value = user

    current = await issuer.current_session({issuer.names.logged_in: response.cookie(issuer.names.logged_in).value})

    assert current.user is user
    assert current.token == token.token
    mock_uow.sessions.get_by_verifier.assert_awaited_once_with(token_verifier(token.token))


@pytest.mark.asyncio
async def test_current_session_rejects_wrong_scheme_and_tampering(issuer, mock_uow):
    user = make_user()
    auth_value = issuer.encode_cookie(user, "tok", CookieScheme.auth, NOW + 100)

    assert await issuer.current_session({issuer.names.logged_in: auth_value}) is None
    assert await issuer.current_session({issuer.names.logged_in: auth_value + "x"}) is None
    assert await issuer.current_session({}) is None
    mock_uow.sessions.get_by_verifier.assert_not_called()


@pytest.mark.asyncio
async def test_current_session_rejects_expired_row(issuer, mock_uow):
    user = make_user()
    response = ResponseBuilder(now=NOW)
    await issuer.issue_session(user, remember=False, secure_only=False, response=response)
    stored = mock_uow.sessions.create.call_args.args[0]
    stored.expiration = NOW - 1
    mock_uow.sessions.get_by_verifier.return_value = stored

    current = await issuer.current_session({issuer.names.logged_in: response.cookie(issuer.names.logged_in).value})

    assert current is None


def test_clear_cookies_expires_all_three(issuer):
    response = ResponseBuilder(now=NOW)

    issuer.clear_cookies(response)

    for name in (issuer.names.auth, issuer.names.secure_auth, issuer.names.logged_in):
        cookie = response.cookie(name)
        assert cookie.value == " "
        assert cookie.expires < NOW
