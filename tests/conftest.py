"""
Shared fixtures: in-memory MongoDB (mongomock-motor), fast bcrypt,
test settings and a FastAPI app wired to the in-memory database.
"""

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from chatter.main import create_application
from chatter.modules.user_management.domain.services.auth_service import AuthService
from chatter.modules.user_management.domain.services.user_service import UsersService
from chatter.modules.user_management.infrastructure.database.user_repository import build_user_repository
from chatter.shared.config.settings import Settings
from chatter.shared.core.security import PasswordHasher

TEST_SECRET = "chatter-test-signing-secret"
TEST_EXPIRATION = 3600
VALID_PASSWORD = "Sup3r$ecret"


@pytest.fixture
def settings() -> Settings:
    return Settings(
        JWT_SECRET=TEST_SECRET,
        JWT_EXPIRATION=TEST_EXPIRATION,
        BCRYPT_ROUNDS=4,
        ENVIRONMENT="test",
        LOG_LEVEL="DEBUG",
        LOG_FORMAT="text",
        RUN_MIGRATIONS_ON_STARTUP=False,
        _env_file=None,
    )


@pytest.fixture
def mongo_db():
    """Fresh in-memory database per test."""
    return AsyncMongoMockClient()["chatter_test"]


@pytest.fixture
def password_hasher() -> PasswordHasher:
    return PasswordHasher(rounds=4)


@pytest.fixture
def now() -> datetime:
    return datetime.now(timezone.utc).replace(microsecond=0)


@pytest.fixture
def auth_service(now) -> AuthService:
    return AuthService(
        secret=TEST_SECRET,
        algorithm="HS256",
        expiration_seconds=TEST_EXPIRATION,
        clock=lambda: now,
    )


@pytest.fixture
def users_service(mongo_db, password_hasher) -> UsersService:
    return UsersService(build_user_repository(mongo_db), password_hasher)


@pytest.fixture
def app(settings, mongo_db, password_hasher):
    # Lifespan is not run; the in-memory database stands in for the Motor client
    application = create_application(settings)
    application.state.database = mongo_db
    application.state.password_hasher = password_hasher
    return application


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)
