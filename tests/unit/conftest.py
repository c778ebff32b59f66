from unittest.mock import AsyncMock, MagicMock

import pytest

from loginflow.app.services.settings import LoginSettings
from loginflow.app.use_cases.auth import LoginDispatcher, LoginHooks
from loginflow.domain.entities import User
from tests.utils.factories import NOW, SITE_URL


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_id = AsyncMock(return_value=None)
    uow.users.find_by_login = AsyncMock(return_value=None)
    uow.users.find_by_email = AsyncMock(return_value=None)
    uow.users.create = AsyncMock(side_effect=_assign_id)
    uow.users.update = AsyncMock(side_effect=lambda user: user)
    uow.users.get_option = AsyncMock(return_value=None)
    uow.users.set_option = AsyncMock()

    uow.options = MagicMock()
    uow.options.get = AsyncMock(side_effect=lambda name, default=None: default)
    uow.options.set = AsyncMock()

    uow.reset_keys = MagicMock()
    uow.reset_keys.upsert = AsyncMock(side_effect=lambda record: record)
    uow.reset_keys.get_by_user_id = AsyncMock(return_value=None)
    uow.reset_keys.delete_by_user_id = AsyncMock(return_value=True)

    uow.sessions = MagicMock()
    uow.sessions.create = AsyncMock(side_effect=lambda session: session)
    uow.sessions.get_by_verifier = AsyncMock(return_value=None)
    uow.sessions.destroy = AsyncMock(return_value=True)
    uow.sessions.destroy_all_by_user_id = AsyncMock(return_value=0)

    uow.user_requests = MagicMock()
    uow.user_requests.get_by_id = AsyncMock(return_value=None)
    uow.user_requests.create = AsyncMock(side_effect=lambda request: request)
    uow.user_requests.update = AsyncMock(side_effect=lambda request: request)

    uow.audit_events = MagicMock()
    uow.audit_events.create = AsyncMock(side_effect=lambda event: event)
    return uow


def _assign_id(user: User) -> User:
    user.id = 100
    return user


@pytest.fixture
def settings():
    return LoginSettings(site_url=SITE_URL, auth_secret="unit-secret")


@pytest.fixture
def hasher():
    """Deterministic stand-in for bcrypt: 'hashed:<password>'"""
    mock = MagicMock()
    mock.hash.side_effect = lambda password: f"hashed:{password}"
    mock.verify.side_effect = lambda password, password_hash: password_hash == f"hashed:{password}"
    return mock


@pytest.fixture
def hooks():
    return LoginHooks()


@pytest.fixture
def clock():
    return lambda: NOW


@pytest.fixture
def dispatcher(mock_uow, settings, hasher, hooks, clock):
    return LoginDispatcher(mock_uow, settings, hasher, hooks=hooks, clock=clock)


