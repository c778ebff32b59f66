from sqlmodel.ext.asyncio.session import AsyncSession

from loginflow.adapter.repositories.audit_event_repository import AuditEventRepository
from loginflow.adapter.repositories.option_repository import OptionRepository
from loginflow.adapter.repositories.reset_key_repository import ResetKeyRepository
from loginflow.adapter.repositories.session_repository import SessionRepository
from loginflow.adapter.repositories.user_repository import UserRepository
from loginflow.adapter.repositories.user_request_repository import UserRequestRepository
from loginflow.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.users = UserRepository(self.session)
        self.options = OptionRepository(self.session)
        self.reset_keys = ResetKeyRepository(self.session)
        self.sessions = SessionRepository(self.session)
        self.user_requests = UserRequestRepository(self.session)
        self.audit_events = AuditEventRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
