from pydantic import model_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite+aiosqlite:///./infra_dashboard.db"
    TEST_DATABASE_URL: str = "sqlite+aiosqlite:///./test.db"

    # Create missing tables on startup; disable when migrations are run with alembic
    AUTO_CREATE_TABLES: bool = True

    SERVICE_NAME: str = "infra-dashboard"
    CORS_ORIGINS: str = "*"

    HISTORY_DEFAULT_LIMIT: int = 100
    SERVER_HISTORY_DEFAULT_LIMIT: int = 50

    model_config = {"env_file": ".env", "extra": "ignore"}

    @model_validator(mode="after")
    def _fix_database_url(self):
        """Hosted Postgres hands out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if self.DATABASE_URL.startswith("postgresql://"):
            self.DATABASE_URL = self.DATABASE_URL.replace(
                "postgresql://", "postgresql+asyncpg://", 1,
            )
        return self


settings = Settings()
