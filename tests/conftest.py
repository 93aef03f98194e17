"""Pytest fixtures for testing"""

import pytest
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from recovery_gateway.api.main import create_app
from recovery_gateway.infrastructure.database.models import Base
from recovery_gateway.infrastructure.database.session import get_db
from recovery_gateway.domain.models import CategoryRules, FollowupRules


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
def category_rules() -> CategoryRules:
    """Tenant defaults: 5/20/40/100 day buckets, 80% partial payment, 7 grace days"""
    return CategoryRules(
        alpha_days=5,
        beta_days=20,
        gamma_days=40,
        delta_days=100,
        partial_payment_threshold_percent=80,
        grace_days=7,
    )


@pytest.fixture
def followup_rules() -> FollowupRules:
    return FollowupRules(alpha_days=7, beta_days=4, gamma_days=2, delta_days=1)
