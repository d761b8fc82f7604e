# conftest.py
"""
Fixtures compartidas por los tests.

Cada test corre contra una base SQLite en disco (aiosqlite) que se vacía y
se vuelve a crear antes de empezar. La app usa esa base vía
dependency_overrides sobre deps.get_db.
"""

import asyncio
import os
import tempfile

_tmpdir = tempfile.mkdtemp(prefix="storedesk-tests-")
os.environ["DATABASE_URI"] = f"sqlite+aiosqlite:///{os.path.join(_tmpdir, 'test.db')}"
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["PASSWORD_BCRYPT_ROUNDS"] = "4"
for _key in ("SMTP_HOST", "SMTP_PORT", "SMTP_USER", "SMTP_PASSWORD", "SENDER_EMAIL"):
    os.environ.pop(_key, None)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from app.main import app
from app.api import deps
from app.db.database import Base
from app.db.models import client_model, purchase_model, user_model  # noqa: F401

# NullPool: cada sesión abre su propia conexión en el bucle que la usa
test_engine = create_async_engine(os.environ["DATABASE_URI"], poolclass=NullPool)
TestingSessionLocal = async_sessionmaker(
    bind=test_engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def override_get_db():
    async with TestingSessionLocal() as session:
        yield session


async def _reset_schema():
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)


@pytest.fixture(autouse=True)
def clean_db():
    asyncio.run(_reset_schema())
    yield


@pytest.fixture
def api():
    app.dependency_overrides[deps.get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def run_in_session():
    """Ejecuta `fn(session)` dentro de una sesión nueva y devuelve su resultado."""
    def runner(fn):
        async def _run():
            async with TestingSessionLocal() as session:
                return await fn(session)
        return asyncio.run(_run())
    return runner


@pytest.fixture
def auth_headers(api):
    owner = {"username": "owner", "email": "owner@store.com", "password": "s3cret-pass"}
    created = api.post("/api/v1/users/", json=owner)
    assert created.status_code == 201
    login = api.post("/api/v1/users/login", json={"email": owner["email"], "password": owner["password"]})
    assert login.status_code == 200
    return {"Authorization": f"Bearer {login.json()['access_token']}"}


@pytest.fixture
def make_client(api, auth_headers):
    def _make(name="Ana", email=None, phone=None):
        payload = {"name": name}
        if email is not None:
            payload["email"] = email
        if phone is not None:
            payload["phone"] = phone
        response = api.post("/api/v1/clients/", json=payload, headers=auth_headers)
        assert response.status_code == 201, response.text
        return response.json()
    return _make


@pytest.fixture
def make_purchase(api):
    def _make(client_id, total_amount=100, details="lentes", **extra):
        payload = {"client_id": client_id, "total_amount": total_amount, "details": details, **extra}
        response = api.post("/api/v1/purchases/", json=payload)
        assert response.status_code == 201, response.text
        return response.json()
    return _make
