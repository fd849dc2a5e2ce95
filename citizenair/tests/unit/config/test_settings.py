import pytest

from citizenair.config.settings import Settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("DATABASE_URL", "DB_HOST", "DB_PORT", "DB_USER", "DB_PASSWORD", "DB_NAME",
                 "ALLOWED_HOSTS", "CORS_ORIGINS", "CORS_ALLOW_METHODS", "CORS_ALLOW_HEADERS"):
        monkeypatch.delenv(name, raising=False)


def test_database_url_is_assembled_from_parts():
    settings = Settings(_env_file=None, DB_HOST="db", DB_PORT=6543, DB_USER="air", DB_PASSWORD="secret", DB_NAME="ideas")
    assert settings.DATABASE_URL == "postgresql+asyncpg://air:secret@db:6543/ideas"


def test_explicit_database_url_wins():
    settings = Settings(_env_file=None, DATABASE_URL="postgresql+asyncpg://air@prod-db/citizenair", DB_HOST="ignored")
    assert settings.DATABASE_URL == "postgresql+asyncpg://air@prod-db/citizenair"


def test_comma_separated_values_become_lists():
    settings = Settings(
        _env_file=None,
        ALLOWED_HOSTS="example.org, api.example.org ,",
        CORS_ORIGINS="https://example.org",
        CORS_ALLOW_METHODS="GET, POST",
    )
    assert settings.ALLOWED_HOSTS == ["example.org", "api.example.org"]
    assert settings.CORS_ORIGINS == ["https://example.org"]
    assert settings.CORS_ALLOW_METHODS == ["GET", "POST"]
    assert settings.CORS_ALLOW_HEADERS == ["*"]


def test_word_cloud_defaults():
    settings = Settings(_env_file=None)
    assert settings.WORDCLOUD_MAX_TERMS == 20
    assert settings.WORDCLOUD_WEIGHT_MULTIPLIER == 5
    assert settings.WORDCLOUD_MIN_WEIGHT == 10
    assert (settings.WORDCLOUD_MIN_TOKEN_LENGTH, settings.WORDCLOUD_MAX_TOKEN_LENGTH) == (3, 14)
    assert settings.WORDCLOUD_DEDUPE_VARIANT_MATCHES is False
