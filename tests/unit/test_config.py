from app.config import Settings
from app.infrastructure.db.database import async_database_url


def test_defaults():
    settings = Settings(_env_file=None)
    assert settings.PRICE_CACHE_TTL_SECONDS == 300
    assert settings.DIVIDEND_CACHE_TTL_SECONDS == 43_200
    assert settings.TWELVE_DATA_BASE_URL == "https://api.twelvedata.com"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("TWELVE_DATA_API_KEY", "from-env")
    monkeypatch.setenv("PRICE_CACHE_TTL_SECONDS", "60")
    settings = Settings(_env_file=None)
    assert settings.TWELVE_DATA_API_KEY == "from-env"
    assert settings.PRICE_CACHE_TTL_SECONDS == 60


def test_async_database_url():
    assert async_database_url("postgres://u:p@h/db") == "postgresql+asyncpg://u:p@h/db"
    assert async_database_url("postgresql://u:p@h/db") == "postgresql+asyncpg://u:p@h/db"
    assert async_database_url("sqlite+aiosqlite:///x.db") == "sqlite+aiosqlite:///x.db"
