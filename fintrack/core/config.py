from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App settings
    PROJECT_NAME: str = "FinTrack"
    API_PREFIX: str = "/api"
    DEBUG: bool = Field(default=False)
    LOG_LEVEL: str = Field(default="INFO")

    # Dashboard derivation
    TOTAL_BUDGET: float = Field(default=2500.0)
    BUDGET_WARNING_PERCENT: float = Field(default=80.0)
    RECENT_TRANSACTIONS_LIMIT: int = Field(default=5)
    CATEGORY_BREAKDOWN_LIMIT: int = Field(default=4)
    INSIGHT_ROTATION_SECONDS: int = 10  # auto-advance interval for the insight card

    # Currency code echoed to clients; formatting happens client side
    DEFAULT_CURRENCY: str = Field(default="USD")

    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://localhost:8000",
    ]

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")


settings = Settings()
