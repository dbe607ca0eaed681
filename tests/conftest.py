"""Shared test fixtures.

Provides a temporary SQLite database seeded with job offers, a candidate
store bound to it, a legacy API stub built on ``httpx.MockTransport``, and a
FastAPI ``TestClient`` wired to all of them.
"""

import os
from collections.abc import Callable, Generator

# Keep the application from creating tables in the default database
os.environ["AUTO_CREATE_TABLES"] = "false"

import httpx
import pytest
import structlog
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from structlog.testing import LogCapture

from recruitment_api.config.database import build_engine, get_db, init_db
from recruitment_api.config.settings import Settings, get_settings
from recruitment_api.integrations.legacy import LegacySyncClient
from recruitment_api.models import JobOffer
from recruitment_api.services.candidate_store import CandidateStore
from recruitment_api.services.candidates import CandidateService

API_KEY = "test-api-key"
LEGACY_URL = "http://legacy.test"

LegacyHandler = Callable[[httpx.Request], httpx.Response]


class LegacyStub:
    """Records legacy API requests and answers them with a configurable handler."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.handler: LegacyHandler = lambda request: httpx.Response(200, json={"status": "ok"})

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    def respond_with(self, status_code: int, **kwargs) -> None:
        self.handler = lambda request: httpx.Response(status_code, **kwargs)

    def fail_with(self, error: Exception) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise error

        self.handler = handler

    def client(self) -> LegacySyncClient:
        return LegacySyncClient(timeout=5.0, transport=httpx.MockTransport(self))


@pytest.fixture()
def engine(tmp_path) -> Generator[Engine, None, None]:
    """Provide an engine on a fresh SQLite file with all tables created."""
    test_engine = build_engine(f"sqlite:///{tmp_path / 'recruitment.db'}")
    init_db(bind=test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture()
def session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture()
def job_offers(session_factory: sessionmaker) -> list[int]:
    """Seed job offers 1 and 2."""
    with session_factory() as session:
        session.add_all([
            JobOffer(id=1, title="Backend Developer", location="Remote"),
            JobOffer(id=2, title="Frontend Developer", location="Warsaw"),
        ])
        session.commit()
    return [1, 2]


@pytest.fixture()
def db(session_factory: sessionmaker) -> Generator[Session, None, None]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def store(db: Session) -> CandidateStore:
    return CandidateStore(db)


@pytest.fixture()
def test_settings() -> Settings:
    return Settings(
        _env_file=None,
        API_KEY=API_KEY,
        LEGACY_API_KEY=None,
        LEGACY_API_URL=LEGACY_URL,
    )


@pytest.fixture()
def legacy_stub() -> LegacyStub:
    return LegacyStub()


@pytest.fixture()
def service(store: CandidateStore, legacy_stub: LegacyStub, test_settings: Settings) -> CandidateService:
    return CandidateService(
        store=store,
        legacy_client=legacy_stub.client(),
        settings=test_settings,
    )


@pytest.fixture()
def test_client(
    session_factory: sessionmaker,
    test_settings: Settings,
    legacy_stub: LegacyStub,
) -> Generator[TestClient, None, None]:
    """Provide a FastAPI TestClient bound to the test database and legacy stub."""
    from recruitment_api.endpoints.candidates import get_legacy_client
    from recruitment_api.main import app

    def override_get_db() -> Generator[Session, None, None]:
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_legacy_client] = legacy_stub.client

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture()
def captured_logs(monkeypatch) -> Generator[list[dict], None, None]:
    """Collect the candidate workflow's log entries with the bound request context."""
    import recruitment_api.main  # noqa: F401  configures logging on import
    from recruitment_api.services import candidates as candidates_service

    capture = LogCapture()
    previous = structlog.get_config()
    structlog.configure(
        processors=[structlog.contextvars.merge_contextvars, capture],
        cache_logger_on_first_use=False,
    )
    # The module logger may already be cached with the JSON pipeline
    monkeypatch.setattr(candidates_service, "logger", structlog.get_logger())

    yield capture.entries

    structlog.configure(**previous)
