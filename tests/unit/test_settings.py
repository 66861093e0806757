import pytest
from pydantic import ValidationError

from chatter.shared.config.settings import Settings


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for name in ("JWT_SECRET", "JWT_EXPIRATION", "JWT_ALGORITHM", "DB_NAME", "ENVIRONMENT"):
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = Settings(JWT_SECRET="secret", JWT_EXPIRATION=3600, _env_file=None)

    assert settings.DB_NAME == "chatter"
    assert settings.MIGRATIONS_CHANGELOG_COLLECTION == "changelog"
    assert settings.JWT_ALGORITHM == "HS256"
    assert settings.BCRYPT_ROUNDS == 10
    assert settings.RUN_MIGRATIONS_ON_STARTUP is True


def test_secret_is_masked():
    settings = Settings(JWT_SECRET="very-secret", JWT_EXPIRATION=3600, _env_file=None)

    assert "very-secret" not in repr(settings)
    assert settings.JWT_SECRET.get_secret_value() == "very-secret"


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "from-env")
    monkeypatch.setenv("JWT_EXPIRATION", "120")
    monkeypatch.setenv("DB_NAME", "chatter_staging")

    settings = Settings(_env_file=None)

    assert settings.JWT_EXPIRATION == 120
    assert settings.DB_NAME == "chatter_staging"


@pytest.mark.parametrize(
    "overrides",
    [
        {"JWT_EXPIRATION": 3600},
        {"JWT_SECRET": "secret"},
        {"JWT_SECRET": "secret", "JWT_EXPIRATION": 0},
        {"JWT_SECRET": "secret", "JWT_EXPIRATION": 3600, "JWT_ALGORITHM": "RS256"},
        {"JWT_SECRET": "secret", "JWT_EXPIRATION": 3600, "BCRYPT_ROUNDS": 3},
        {"JWT_SECRET": "secret", "JWT_EXPIRATION": 3600, "ENVIRONMENT": "qa"},
        {"JWT_SECRET": "secret", "JWT_EXPIRATION": 3600, "LOG_FORMAT": "xml"},
    ],
)
def test_rejects_invalid_configuration(overrides):
    with pytest.raises(ValidationError):
        Settings(_env_file=None, **overrides)
