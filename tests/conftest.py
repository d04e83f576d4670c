# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from datetime import UTC, datetime, timedelta

import pytest

os.environ.setdefault("SECRET_KEY", "threadboard-test-secret")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("AUTO_CREATE_TABLES", "false")

from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from threadboard.core.security import create_access_token
from threadboard.core.settings import Settings
from threadboard.db.session import Base, configure_sqlite_engine
from threadboard.db.session import get_db as app_get_session
from threadboard.main import app as fastapi_app
from threadboard.models import Message
from threadboard.repositories.message_repo import MessageRepository
from threadboard.services.message_service import MessageService
from threadboard.services.voting import VotingService

TEST_DB_URL = "sqlite://"

_TEST_SETTINGS_INSTANCE = Settings()


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = configure_sqlite_engine(
        create_engine(
            TEST_DB_URL,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    """Session whose commits become savepoints inside a rolled-back transaction."""
    connection = engine.connect()
    transaction = connection.begin()
    session = Session(
        bind=connection,
        join_transaction_mode="create_savepoint",
        autoflush=False,
        expire_on_commit=False,
    )
    try:
        yield session
    finally:
        session.close()
        if transaction.is_active:
            transaction.rollback()
        connection.close()


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Provide a Settings instance aligned with runtime configuration."""
    return _TEST_SETTINGS_INSTANCE


@pytest.fixture()
def auth_headers() -> Callable[[str], dict[str, str]]:
    """Return a factory building bearer headers for a principal id."""

    def _headers(principal_id: str) -> dict[str, str]:
        token = create_access_token(principal_id)
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture()
def auth_token(auth_headers) -> dict[str, str]:
    """Authorization headers for the primary test principal ``u1``."""
    return auth_headers("u1")


@pytest.fixture()
def other_auth_token(auth_headers) -> dict[str, str]:
    """Authorization headers for the secondary test principal ``u2``."""
    return auth_headers("u2")


@pytest.fixture()
def message_service(db_session: Session) -> MessageService:
    return MessageService(MessageRepository(db_session))


@pytest.fixture()
def voting_service(db_session: Session) -> VotingService:
    return VotingService(MessageRepository(db_session))


@pytest.fixture()
def root_message(message_service: MessageService) -> Message:
    """A top-level message authored by ``u1``."""
    return message_service.create("hello", "u1")


@pytest.fixture()
def stamp_created_at(db_session: Session) -> Callable[[list[Message]], None]:
    """Give messages strictly increasing creation times, in list order."""

    def _stamp(messages: list[Message]) -> None:
        base = datetime(2026, 1, 1, tzinfo=UTC)
        for offset, message in enumerate(messages):
            message.created_at = base + timedelta(minutes=offset)
        db_session.commit()

    return _stamp
