"""Shared test fixtures for the lead tracker."""

from collections.abc import AsyncIterator

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from leadtrack.core.app import create_app
from leadtrack.crypto.keys import generate_rsa_keypair
from leadtrack.crypto.types import KeyPairData
from leadtrack.db.base import BaseEntity
from leadtrack.db.engine import get_session

TEST_JWT_SECRET = "test-session-secret-with-enough-length-for-hs256"


@pytest.fixture(autouse=True)
def _set_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Pin settings so the host environment cannot leak into tests."""
    monkeypatch.setenv("JWT_SECRET", TEST_JWT_SECRET)
    monkeypatch.setenv("ENABLE_DEV_ROUTES", "true")
    monkeypatch.delenv("SSO_PUBLIC_KEY", raising=False)
    monkeypatch.delenv("SSO_PRIVATE_KEY", raising=False)
    monkeypatch.delenv("CORS_ORIGINS", raising=False)


@pytest.fixture(scope="session")
def keypair() -> KeyPairData:
    """A PKCS#8 / SubjectPublicKeyInfo RSA keypair."""
    return generate_rsa_keypair()


@pytest.fixture(scope="session")
def legacy_keypair() -> KeyPairData:
    """A PKCS#1 (``RSA PRIVATE KEY`` / ``RSA PUBLIC KEY``) keypair."""
    return generate_rsa_keypair(legacy=True)


@pytest.fixture(scope="session")
def other_keypair() -> KeyPairData:
    """An unrelated keypair, for signatures that must not verify."""
    return generate_rsa_keypair()


@pytest.fixture(scope="session")
def ec_keypair() -> KeyPairData:
    """A valid P-256 keypair, which RS256 must refuse."""
    private_key = ec.generate_private_key(ec.SECP256R1())
    private_pem = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode()
    public_pem = (
        private_key.public_key()
        .public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )
        .decode()
    )
    return KeyPairData(private_key_pem=private_pem, public_key_pem=public_pem)


@pytest.fixture
async def db_session() -> AsyncIterator[AsyncSession]:
    """Create an in-memory SQLite async session for tests."""
    engine = create_async_engine("sqlite+aiosqlite://", echo=False)

    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_conn, _rec) -> None:
        # SAVEPOINT needs the driver to leave transaction control to SQLAlchemy
        dbapi_conn.isolation_level = None
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def _begin(conn) -> None:
        conn.exec_driver_sql("BEGIN")

    async with engine.begin() as conn:
        await conn.run_sync(BaseEntity.metadata.create_all)

    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session

    await engine.dispose()


@pytest.fixture
async def client(db_session: AsyncSession) -> AsyncIterator[AsyncClient]:
    """Create an httpx test client with DB session override."""
    app = create_app()

    async def _override_session() -> AsyncIterator[AsyncSession]:
        try:
            yield db_session
            await db_session.commit()
        except Exception:
            await db_session.rollback()
            raise

    app.dependency_overrides[get_session] = _override_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
