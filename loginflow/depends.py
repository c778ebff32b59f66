from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from loginflow.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from loginflow.app.services.unit_of_work import UnitOfWork
from loginflow.app.use_cases.auth import LoginDispatcher

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


async def get_login_dispatcher(
    request: Request, uow: UnitOfWork = Depends(get_unit_of_work)
) -> LoginDispatcher:
    state = request.app.state
    return LoginDispatcher(
        uow,
        settings=state.login_settings,
        hasher=state.password_hasher,
        hooks=state.login_hooks,
    )
