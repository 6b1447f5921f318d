"""Pytest configuration and fixtures."""

import os

# Settings are cached on first import, so the test environment is fixed up front
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["ENVIRONMENT"] = "test"
os.environ["SEED_QUESTION_BANK"] = "false"
os.environ["COOKIE_SECURE"] = "false"
os.environ.pop("AI_PROVIDER", None)
os.environ.pop("OPENAI_API_KEY", None)

from collections.abc import Generator
from typing import Any

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from interview_coach import models
from interview_coach.application.interview.use_cases.seed_question_bank_use_case import (
    SeedQuestionBankUseCase,
)
from interview_coach.database import Base, get_db
from interview_coach.infrastructure.identity.routers.auth import limiter
from interview_coach.infrastructure.identity.services.password_service import (
    get_password_service,
)
from interview_coach.infrastructure.identity.services.token_service import get_token_service
from interview_coach.infrastructure.interview.repositories.question_repository import (
    QuestionRepository,
)
from interview_coach.infrastructure.interview.seed.question_bank import (
    QUESTION_BANK,
)
from interview_coach.main import app

# Test database URL (in-memory SQLite)
TEST_DATABASE_URL = "sqlite:///:memory:"
TEST_PASSWORD = "correct-horse-battery"

# One shared connection so the app threads see the tables created by the tests
test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

# Create test session factory
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture(autouse=True)
def reset_rate_limits() -> Generator[None, None, None]:
    """Auth endpoints are rate limited per client address; every test starts fresh."""
    limiter.reset()
    yield
    limiter.reset()


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """Create a fresh database session for each test."""
    # Create all tables
    Base.metadata.create_all(bind=test_engine)

    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()
        # Drop all tables after test
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def client(db_session: Session) -> Generator[TestClient, Any, None]:
    """Create a test client with database session."""

    def override_get_db() -> Generator[Session, None, None]:
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


def create_test_user(
    db_session: Session,
    email: str = "candidate@example.com",
    name: str = "Test Candidate",
    role: str = "user",
    **kwargs: Any,
) -> models.User:
    """Create a local account with TEST_PASSWORD."""
    user = models.User(
        name=name,
        email=email,
        hashed_password=get_password_service().hash_password(TEST_PASSWORD),
        role=role,
        **kwargs,
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


def auth_headers_for(user: models.User) -> dict[str, str]:
    return {"Authorization": f"Bearer {get_token_service().create_access_token(user.id)}"}


@pytest.fixture
def test_user(db_session: Session) -> models.User:
    """Create a regular candidate account."""
    return create_test_user(db_session)


@pytest.fixture
def admin_user(db_session: Session) -> models.User:
    """Create an administrator account."""
    return create_test_user(db_session, email="admin@example.com", name="Admin", role="admin")


@pytest.fixture
def auth_headers(test_user: models.User) -> dict[str, str]:
    return auth_headers_for(test_user)


@pytest.fixture
def admin_headers(admin_user: models.User) -> dict[str, str]:
    return auth_headers_for(admin_user)


@pytest.fixture
def seeded_questions(db_session: Session) -> int:
    """Load the built-in question bank."""
    return SeedQuestionBankUseCase(QuestionRepository(db_session)).seed(QUESTION_BANK)


def start_session(client: TestClient, headers: dict[str, str], **overrides: Any) -> dict:
    """Start a predefined HR session through the API and return its payload."""
    body = {"category": "HR", "source": "predefined", "count": 3, **overrides}
    response = client.post("/api/v1/sessions", json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["session"]


def answer_question(
    client: TestClient,
    headers: dict[str, str],
    session_id: int,
    question_id: int,
    text: str = (
        "I led the migration of our billing service, owned the rollout plan and measured "
        "a thirty percent drop in latency. I delivered it with two engineers in six weeks."
    ),
) -> dict:
    response = client.post(
        f"/api/v1/sessions/{session_id}/answers/{question_id}",
        data={"answer_type": "text", "text_answer": text, "duration_sec": "30"},
        headers=headers,
    )
    assert response.status_code == 200, response.text
    return response.json()
