"""
Unit tests for LoginUseCase

Runs the login action through the dispatcher with a mocked unit of work.
"""
import pytest

from loginflow.app.services.cookies import TEST_COOKIE, TEST_COOKIE_VALUE, CookieNames
from loginflow.app.use_cases.auth import Redirect, View
from tests.utils.factories import NOW, make_request, make_user, session_cookies

TEST_COOKIES = {TEST_COOKIE: TEST_COOKIE_VALUE}


def login_form(**extra):
    form = {"log": "alice", "pwd": "secret"}
    form.update(extra)
    return form


@pytest.mark.asyncio
async def test_first_visit_shows_empty_form(dispatcher):
    result = await dispatcher.dispatch(make_request())

    view = result.outcome
    assert isinstance(view, View)
    assert view.name == "login"
    assert view.errors.codes() == []


@pytest.mark.asyncio
async def test_empty_submission_reports_both_fields(dispatcher):
    result = await dispatcher.dispatch(make_request(form={"log": "", "pwd": ""}, cookies=TEST_COOKIES))

    assert result.outcome.errors.codes() == ["empty_username", "empty_password"]


@pytest.mark.asyncio
async def test_missing_test_cookie_blocks_before_password_check(dispatcher, mock_uow, hasher):
    mock_uow.users.find_by_login.return_value = make_user()

    result = await dispatcher.dispatch(make_request(form=login_form()))

    assert result.outcome.errors.codes() == ["test_cookie"]
    hasher.verify.assert_not_called()
    mock_uow.sessions.create.assert_not_called()


@pytest.mark.asyncio
async def test_missing_test_cookie_wins_over_empty_fields(dispatcher, mock_uow):
    result = await dispatcher.dispatch(make_request(form={"log": "", "pwd": ""}))

    assert result.outcome.errors.codes() == ["test_cookie"]
    mock_uow.users.find_by_login.assert_not_called()


@pytest.mark.asyncio
async def test_unknown_user_and_wrong_password_look_the_same(dispatcher, mock_uow, hasher):
    mock_uow.users.find_by_login.return_value = None
    unknown = await dispatcher.dispatch(make_request(form=login_form(), cookies=TEST_COOKIES))
    hasher.burn.assert_called_once()

    mock_uow.users.find_by_login.return_value = make_user()
    wrong = await dispatcher.dispatch(
        make_request(form=login_form(pwd="nope"), cookies=TEST_COOKIES)
    )

    assert unknown.outcome.errors.blocking() == wrong.outcome.errors.blocking()
    assert wrong.outcome.errors.codes() == ["invalid_credentials"]
    assert wrong.outcome.data["user_login"] == "alice"
    mock_uow.sessions.create.assert_not_called()
    actions = [c.args[0].action for c in mock_uow.audit_events.create.call_args_list]
    assert actions == ["login_failed", "login_failed"]


@pytest.mark.asyncio
async def test_successful_login_issues_session_and_redirects(dispatcher, mock_uow, settings):
    user = make_user()
    mock_uow.users.find_by_login.return_value = user
    on_login = []
    dispatcher.services.hooks.on_login = on_login.append

    result = await dispatcher.dispatch(make_request(form=login_form(), cookies=TEST_COOKIES))

    assert result.outcome == Redirect("http://test/wp-admin/")
    names = CookieNames(settings.cookie_hash)
    assert {c.name for c in result.cookies} >= {names.auth, names.logged_in}
    mock_uow.sessions.create.assert_awaited_once()
    mock_uow.commit.assert_awaited_once()
    assert on_login == [user]


@pytest.mark.asyncio
async def test_login_by_email_address(dispatcher, mock_uow):
    mock_uow.users.find_by_login.return_value = None
    mock_uow.users.find_by_email.return_value = make_user()

    result = await dispatcher.dispatch(
        make_request(form=login_form(log="alice@example.com"), cookies=TEST_COOKIES)
    )

    assert result.is_redirect
    mock_uow.users.find_by_email.assert_awaited_with("alice@example.com")


@pytest.mark.asyncio
async def test_off_site_redirect_falls_back_to_admin(dispatcher, mock_uow):
    mock_uow.users.find_by_login.return_value = make_user()

    result = await dispatcher.dispatch(
        make_request(form=login_form(redirect_to="https://evil.example/"), cookies=TEST_COOKIES)
    )

    assert result.outcome.location == "http://test/wp-admin/"


@pytest.mark.asyncio
async def test_user_without_edit_posts_goes_to_profile(dispatcher, mock_uow):
    mock_uow.users.find_by_login.return_value = make_user(capabilities=["read"])

    result = await dispatcher.dispatch(make_request(form=login_form(), cookies=TEST_COOKIES))

    assert result.outcome.location == "http://test/wp-admin/profile.php"


@pytest.mark.asyncio
async def test_admin_with_due_email_check_is_sent_to_confirm(dispatcher, mock_uow):
    mock_uow.users.find_by_login.return_value = make_user(
        capabilities=["read", "edit_posts", "manage_options"]
    )

    result = await dispatcher.dispatch(make_request(form=login_form(), cookies=TEST_COOKIES))

    location = result.outcome.location
    assert location.startswith("http://test/wp-login.php?")
    assert "action=confirm_admin_email" in location


@pytest.mark.asyncio
async def test_remember_me_sets_persistent_cookies(dispatcher, mock_uow, settings):
    mock_uow.users.find_by_login.return_value = make_user()

    result = await dispatcher.dispatch(
        make_request(form=login_form(rememberme="forever"), cookies=TEST_COOKIES)
    )

    logged_in = next(c for c in result.cookies if c.name == CookieNames(settings.cookie_hash).logged_in)
    assert logged_in.expires > NOW + settings.remember_ttl - 1


@pytest.mark.asyncio
async def test_existing_session_counts_as_logged_in(dispatcher, mock_uow, settings):
    user = make_user()
    cookies, session = session_cookies(settings, user)
    mock_uow.sessions.get_by_verifier.return_value = session
    mock_uow.users.get_by_id.return_value = user

    result = await dispatcher.dispatch(make_request(cookies=cookies))

    assert result.outcome == Redirect("http://test/wp-admin/")
    mock_uow.sessions.create.assert_not_called()


@pytest.mark.asyncio
async def test_logged_out_notice(dispatcher):
    result = await dispatcher.dispatch(make_request(query={"loggedout": "true"}))

    assert result.outcome.errors.codes() == ["loggedout"]
    assert not result.outcome.errors.has_blocking()


@pytest.mark.asyncio
async def test_registration_disabled_notice(dispatcher):
    result = await dispatcher.dispatch(make_request(query={"registration": "disabled"}))

    assert result.outcome.errors.codes() == ["registerdisabled"]


@pytest.mark.asyncio
async def test_interim_login_success_renders_interim_view(dispatcher, mock_uow):
    mock_uow.users.find_by_login.return_value = make_user()

    result = await dispatcher.dispatch(
        make_request(form=login_form(**{"interim-login": "1"}), cookies=TEST_COOKIES)
    )

    assert result.outcome.name == "interim_login"
    assert result.outcome.interim_login == "success"
