from abc import ABC, abstractmethod

from loginflow.app.repositories.audit_event_repository import IAuditEventRepository
from loginflow.app.repositories.option_repository import IOptionRepository
from loginflow.app.repositories.reset_key_repository import IResetKeyRepository
from loginflow.app.repositories.session_repository import ISessionRepository
from loginflow.app.repositories.user_repository import IUserRepository
from loginflow.app.repositories.user_request_repository import IUserRequestRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    users: IUserRepository
    options: IOptionRepository
    reset_keys: IResetKeyRepository
    sessions: ISessionRepository
    user_requests: IUserRequestRepository
    audit_events: IAuditEventRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
