"""Pytest configuration and shared fixtures."""

import os
from collections.abc import Generator

# Settings are read at import time; point them at an in-memory database first
os.environ.setdefault("ENV", "test")
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.db.session import get_db, init_db  # noqa: E402
from app.main import create_app  # noqa: E402

SAMPLE_DOCUMENT = (
    "question,type,optionA,optionB,optionC,optionD,correctAnswers\n"
    "Is the sky blue?,true-false,True,False,,,A\n"
    "Which of these are fruits?,multiple,Apple,Car,Orange,Train,A|C"
)


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """Create a session on a fresh in-memory SQLite database."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    TestingSession = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def client(db: Session) -> Generator[TestClient, None, None]:
    """Test client whose requests use the test database session."""
    app = create_app()

    def _override_get_db() -> Generator[Session, None, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def sample_csv() -> str:
    """The two-question sample document."""
    return SAMPLE_DOCUMENT
