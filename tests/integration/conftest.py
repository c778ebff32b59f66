import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from loginflow.adapter.services.bcrypt_hasher import BcryptPasswordHasher
from loginflow.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from loginflow.app.use_cases.auth import LoginHooks
from loginflow.depends import get_unit_of_work
from tests.fixtures.users import TEST_BCRYPT_ROUNDS


class IntegrationConfig(ApplicationConfig):
    API_PREFIX = ""
    LOGIN_PATH = "/wp-login.php"
    SITE_URL = "http://test"
    AUTH_SECRET = "integration-secret"
    USERS_CAN_REGISTER = False
    FORCE_SSL_ADMIN = False
    BCRYPT_ROUNDS = TEST_BCRYPT_ROUNDS


class Mailbox:
    """Captures the links the login flow would have emailed"""

    def __init__(self):
        self.reset_links = []
        self.welcome_links = []

    def send_reset_link(self, user, key, url):
        self.reset_links.append({"login": user.user_login, "key": key, "url": url})
        return True

    def send_new_user_notification(self, user, key, url):
        self.welcome_links.append({"login": user.user_login, "key": key, "url": url})
        return True


@pytest_asyncio.fixture
def mailbox():
    return Mailbox()


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test_loginflow.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
async def client(db_session, mailbox):
    from httpx import ASGITransport
    from loginflow.api.app import create_app

    hooks = LoginHooks(
        send_reset_link=mailbox.send_reset_link,
        send_new_user_notification=mailbox.send_new_user_notification,
    )
    app = create_app(
        IntegrationConfig, hooks=hooks, hasher=BcryptPasswordHasher(TEST_BCRYPT_ROUNDS)
    )

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
