# Test configuration
import os

# Set test environment variables BEFORE importing app modules
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-for-testing-only-32chars"
os.environ["JWT_ALGORITHM"] = "HS256"
os.environ["TOKEN_EXPIRY_SECONDS"] = "3600"
os.environ["RATE_LIMIT_REQUESTS"] = "100"
os.environ["CREATE_TABLES_ON_STARTUP"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from accounts.core.rate_limit import limiter
from accounts.core.security import JWTProvider, Sha256Hasher
from accounts.db.session import Base, get_db
from accounts.main import app
from accounts.repositories.user_repository import UserRepository
from accounts.services.user_service import UserService

engine = create_engine(
    "sqlite:///:memory:",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(autouse=True)
def reset_rate_limit():
    # Reset the sliding window between tests
    limiter.reset()
    yield
    limiter.reset()


@pytest.fixture
def db_session():
    """Fresh schema and session for each test."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def repo(db_session):
    return UserRepository(db_session)


@pytest.fixture
def token_provider():
    return JWTProvider("test-secret-key-for-testing-only-32chars")


@pytest.fixture
def service(repo, token_provider):
    return UserService(repo, Sha256Hasher(), token_provider, expiry=3600)


@pytest.fixture
def client(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
