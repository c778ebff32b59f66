"""
Unit tests for RecoveryModeService
"""
import pytest

from loginflow.app.services.recovery_mode_service import RECOVERY_KEYS_OPTION, RecoveryModeService
from loginflow.domain.errors import ExpiredKeyError, InvalidKeyError
from tests.utils.factories import NOW

TTL = 3600


@pytest.fixture
def option_store(mock_uow):
    store = {}

    async def get(name, default=None):
        return store.get(name, default)

    async def set_option(name, value):
        store[name] = value

    mock_uow.options.get.side_effect = get
    mock_uow.options.set.side_effect = set_option
    return store


@pytest.mark.asyncio
async def test_issued_link_validates_once(mock_uow, option_store):
    service = RecoveryModeService(mock_uow, TTL, clock=lambda: NOW)
    token, key = await service.issue()

    assert key not in str(option_store[RECOVERY_KEYS_OPTION])

    result = await service.validate(token, key)
    assert result.is_ok()

    replay = await service.validate(token, key)
    assert isinstance(replay.error, InvalidKeyError)
    assert replay.error.message == "Recovery Mode not initialized."


@pytest.mark.asyncio
async def test_wrong_key_keeps_link(mock_uow, option_store):
    service = RecoveryModeService(mock_uow, TTL, clock=lambda: NOW)
    token, key = await service.issue()

    result = await service.validate(token, "wrong")

    assert result.error.message == "Invalid recovery key."
    assert (await service.validate(token, key)).is_ok()


@pytest.mark.asyncio
async def test_expired_link_is_consumed(mock_uow, option_store):
    now = [NOW]
    service = RecoveryModeService(mock_uow, TTL, clock=lambda: now[0])
    token, key = await service.issue()

    now[0] = NOW + TTL + 1
    result = await service.validate(token, key)

    assert isinstance(result.error, ExpiredKeyError)
    assert token not in option_store[RECOVERY_KEYS_OPTION]
