import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import ADMIN_ROLE, USER_ROLE, decode_token
from users.models.admin_user import AdminUser
from users.models.user import User


# ==============================================================================
# Admin login
# ==============================================================================

@pytest.mark.asyncio
async def test_should_issue_admin_token_when_credentials_match(client: AsyncClient, seeded_admin):
    # WHEN
    r = await client.post("/api/admin/login", json={"username": "admin", "password": "admin123"})

    # THEN
    assert r.status_code == 200
    body = r.json()
    assert body["user"] == {"username": "admin", "role": "admin"}
    claims = decode_token(body["token"])
    assert claims["sub"] == "admin"
    assert claims["roles"] == [ADMIN_ROLE]
    assert claims["exp"] > claims["iat"]                 # -> tokens expire


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "creds",
    [
        {"username": "admin", "password": "wrong"},
        {"username": "root", "password": "admin123"},
    ],
)
async def test_should_reject_admin_login_with_bad_credentials(client: AsyncClient, seeded_admin, creds):
    r = await client.post("/api/admin/login", json=creds)

    assert r.status_code == 401
    assert r.json() == {"detail": "invalid_credentials"}
    assert "token" not in r.json()


@pytest.mark.asyncio
@pytest.mark.parametrize("payload", [{"username": "admin"}, {"password": "admin123"}, {"username": "", "password": ""}])
async def test_should_return_400_when_admin_login_fields_missing(client: AsyncClient, payload):
    r = await client.post("/api/admin/login", json=payload)
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_should_store_admin_password_as_hash(seeded_admin, db_session: AsyncSession):
    admin = (await db_session.execute(select(AdminUser))).scalars().one()
    assert admin.password_hash != "admin123"
    assert admin.password_hash.startswith("$2")          # -> bcrypt


# ==============================================================================
# End users
# ==============================================================================

@pytest.mark.asyncio
async def test_should_login_demo_user(client: AsyncClient, seeded_user):
    # WHEN
    r = await client.post("/api/user/login", json=seeded_user)

    # THEN
    assert r.status_code == 200
    body = r.json()
    assert body["user"]["email"] == "user@example.com"
    assert body["user"]["name"] == "Demo User"
    assert decode_token(body["token"])["roles"] == [USER_ROLE]


@pytest.mark.asyncio
async def test_should_reject_user_login_with_wrong_password(client: AsyncClient, seeded_user):
    r = await client.post("/api/user/login", json={"email": "user@example.com", "password": "nope"})
    assert r.status_code == 401
    assert r.json()["detail"] == "invalid_credentials"


@pytest.mark.asyncio
async def test_should_register_then_login_and_read_profile(client: AsyncClient, db_session: AsyncSession):
    # GIVEN
    account = {"name": "Ada", "email": "Ada@Example.com", "password": "s3cret!"}

    # WHEN
    registered = await client.post("/api/user/register", json=account)
    login = await client.post("/api/user/login", json={"email": "ada@example.com", "password": "s3cret!"})
    me = await client.get("/api/user/me", headers={"Authorization": f"Bearer {login.json()['token']}"})

    # THEN
    assert registered.status_code == 200
    assert registered.json()["user"]["email"] == "ada@example.com"   # -> emails are stored lower-cased
    assert login.status_code == 200
    assert me.status_code == 200
    assert me.json()["name"] == "Ada"

    row = (await db_session.execute(select(User).where(User.email == "ada@example.com"))).scalars().one()
    assert row.password_hash != "s3cret!"


@pytest.mark.asyncio
async def test_should_return_409_when_email_already_registered(client: AsyncClient, seeded_user):
    r = await client.post(
        "/api/user/register",
        json={"name": "Someone", "email": "user@example.com", "password": "another1"},
    )
    assert r.status_code == 409
    assert r.json()["detail"] == "email_exists"


@pytest.mark.asyncio
@pytest.mark.parametrize("missing", ["name", "email", "password"])
async def test_should_return_400_when_register_field_missing(client: AsyncClient, missing):
    payload = {"name": "Ada", "email": "ada@example.com", "password": "s3cret!"}
    payload.pop(missing)

    r = await client.post("/api/user/register", json=payload)

    assert r.status_code == 400
    assert missing in r.json()["detail"]


@pytest.mark.asyncio
async def test_should_reject_profile_without_user_token(client: AsyncClient, admin_headers):
    anonymous = await client.get("/api/user/me")
    as_admin = await client.get("/api/user/me", headers=admin_headers)

    assert anonymous.status_code == 401
    assert as_admin.status_code == 401


# ==============================================================================
# Health
# ==============================================================================

@pytest.mark.asyncio
async def test_should_report_health(client: AsyncClient):
    r = await client.get("/health")
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "OK"
    assert body["environment"]
    assert body["timestamp"]
