"""
Canteen Console — Configuration
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # ── Service ──────────────────────────────────────────────
    SERVICE_NAME: str = "canteen-console"
    SERVICE_VERSION: str = "1.0.0"
    DEBUG: bool = False
    HOST: str = "0.0.0.0"
    PORT: int = 8006
    LOG_LEVEL: str = "INFO"

    # ── Document Store ────────────────────────────────────────
    DOCUMENT_STORE: str = "redis"  # memory | redis | postgres
    STOCK_COLLECTION: str = "availableItems"
    ORDERS_COLLECTION: str = "orders"
    MENU_COLLECTION: str = "menuItems"

    # ── Redis ─────────────────────────────────────────────────
    REDIS_HOST: str = "redis"
    REDIS_PORT: int = 6379
    REDIS_DB: int = 0
    REDIS_PASSWORD: str = ""
    REDIS_KEY_PREFIX: str = "docs:"

    @property
    def redis_url(self) -> str:
        if self.REDIS_PASSWORD:
            return f"redis://:{self.REDIS_PASSWORD}@{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"
        return f"redis://{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"

    # ── PostgreSQL ────────────────────────────────────────────
    POSTGRES_HOST: str = "canteen-db"
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str = "canteen_db"
    POSTGRES_USER: str = "canteen_user"
    POSTGRES_PASSWORD: str = "canteen_pass"

    @property
    def database_url(self) -> str:
        return (
            f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )

    # ── Notifications ─────────────────────────────────────────
    NOTIFIER: str = "log"  # log | redis | http
    NOTIFICATION_CHANNEL: str = "canteen:notifications"
    NOTIFICATION_HUB_URL: str = "http://notification-hub:8005"
    HTTP_TIMEOUT_SECONDS: float = 3.0

    # ── Observability ─────────────────────────────────────────
    METRICS_ENABLED: bool = True
    HEALTH_CHECK_TIMEOUT: float = 5.0


@lru_cache()
def get_settings() -> Settings:
    return Settings()
