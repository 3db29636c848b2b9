"""Pytest fixtures for testing"""

import pytest
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from finhealth_gateway.api.main import create_app
from finhealth_gateway.infrastructure.database.models import Base
from finhealth_gateway.infrastructure.database.session import get_db
from finhealth_gateway.domain.models import FinancialSnapshot, Goal


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def boundary_snapshot() -> FinancialSnapshot:
    """Spending exactly at the 80% line, thin emergency fund"""
    return FinancialSnapshot(income=5000, expenses=4000, balance=1000, savings=2000)


@pytest.fixture
def boundary_goals() -> list[Goal]:
    """A single goal at exactly 25% progress"""
    return [Goal(current_amount=2500, target_amount=10000, is_completed=False)]


@pytest.fixture
def healthy_snapshot() -> FinancialSnapshot:
    """Comfortable saver: five months of cover, 40% spending"""
    return FinancialSnapshot(income=8000, expenses=3200, balance=12400, savings=16000)


@pytest.fixture
def healthy_goals() -> list[Goal]:
    return [
        Goal(current_amount=9000, target_amount=10000, goal_id="goal-1", name="Emergency Fund"),
        Goal(current_amount=3000, target_amount=3000, is_completed=True, goal_id="goal-2", name="Vacation"),
    ]
