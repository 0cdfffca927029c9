# conftest.py
from typing import AsyncGenerator, Dict

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from app.main import app
from app.core.config import settings
from app.core.database.db import get_session
from app.core.database.base import Base
from app.core.security import USER_ROLE, create_access_token
from catalog.routers import documentaries as documentaries_router
from catalog.services.upload_service import UploadService
from users.repositories import AdminUserRepository, UserRepository
from users.services.user_service import UserService

TEST_UPLOAD_LIMIT = 64 * 1024


# ---- Async engine + session --------------------------------------------------

@pytest_asyncio.fixture(scope="function")
async def async_engine(tmp_path):
    # file-backed so concurrent requests each get their own connection
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}", poolclass=NullPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()

@pytest_asyncio.fixture(scope="function")
async def SessionMaker(async_engine):
    return async_sessionmaker(bind=async_engine, expire_on_commit=False, class_=AsyncSession)

@pytest_asyncio.fixture(autouse=True, scope="function")
async def override_get_session(SessionMaker):
    async def _dep():
        async with SessionMaker() as s:
            yield s
    app.dependency_overrides[get_session] = _dep
    yield
    app.dependency_overrides.pop(get_session, None)

@pytest_asyncio.fixture
async def db_session(SessionMaker):
    async with SessionMaker() as s:
        yield s


# ---- Uploads -----------------------------------------------------------------

@pytest.fixture
def upload_dir(tmp_path):
    path = tmp_path / "uploads"
    path.mkdir()
    return path

@pytest.fixture(autouse=True)
def override_upload_service(upload_dir):
    app.dependency_overrides[documentaries_router.get_upload_service] = (
        lambda: UploadService(str(upload_dir), TEST_UPLOAD_LIMIT)
    )
    yield
    app.dependency_overrides.pop(documentaries_router.get_upload_service, None)


# ---- Accounts ----------------------------------------------------------------

@pytest_asyncio.fixture
async def seeded_admin(db_session) -> Dict[str, str]:
    svc = UserService(UserRepository(db_session), AdminUserRepository(db_session))
    await svc.ensure_admin(settings.admin_username, settings.admin_password)
    return {"username": settings.admin_username, "password": settings.admin_password}

@pytest_asyncio.fixture
async def seeded_user(db_session) -> Dict[str, str]:
    svc = UserService(UserRepository(db_session), AdminUserRepository(db_session))
    await svc.ensure_user(settings.demo_user_name, settings.demo_user_email, settings.demo_user_password)
    return {"email": settings.demo_user_email, "password": settings.demo_user_password}

@pytest_asyncio.fixture
async def admin_token(client: AsyncClient, seeded_admin) -> str:
    r = await client.post("/api/admin/login", json=seeded_admin)
    assert r.status_code == 200
    return r.json()["token"]

@pytest.fixture
def admin_headers(admin_token) -> Dict[str, str]:
    return {"Authorization": f"Bearer {admin_token}"}

@pytest.fixture
def user_headers() -> Dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token('42', [USER_ROLE])}"}


# ---- HTTP client -------------------------------------------------------------

@pytest_asyncio.fixture(scope="function")
async def client() -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as c:
        yield c
