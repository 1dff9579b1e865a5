"""
Floor Service — Configuration
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # ── Service ──────────────────────────────────────────────
    SERVICE_NAME: str = "floor-service"
    SERVICE_VERSION: str = "1.0.0"
    DEBUG: bool = False
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    LOG_LEVEL: str = "INFO"

    # ── Catalog ──────────────────────────────────────────────
    # Empty means the built-in floor plan and menu.
    MENU_FILE: str = ""

    # ── Orders & Billing ─────────────────────────────────────
    ORDER_ID_PREFIX: str = "ORD"
    ORDER_ID_WIDTH: int = 4
    DEFAULT_TAX_RATE: float = 5.0
    DEFAULT_PAYMENT_METHOD: str = "cash"

    # ── External sync (reporting sheet) ──────────────────────
    SYNC_URL: str = ""
    HTTP_TIMEOUT_SECONDS: float = 5.0

    # ── Observability ─────────────────────────────────────────
    METRICS_ENABLED: bool = True


@lru_cache()
def get_settings() -> Settings:
    return Settings()
