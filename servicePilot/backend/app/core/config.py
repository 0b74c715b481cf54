from datetime import time

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App
    ENV: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # Database
    POSTGRES_USER: str = "servicepilot"
    POSTGRES_PASSWORD: str = ""
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str = "servicepilot"

    DATABASE_URL: str = "sqlite:///./servicepilot.db"

    # Delivery scheduling
    SHARED_TIME_MAX_CONCURRENT: int = 3
    SUPPORT_REDUCTION_MIN: int = 1
    SUPPORT_REDUCTION_MAX: int = 50
    CALENDAR_MAX_DAYS: int = 3650
    WORKLOAD_FETCH_TIMEOUT_SECONDS: float = 5.0
    RECALC_DEBOUNCE_SECONDS: float = 0.3

    # Used when a technician has no configured schedule
    DEFAULT_WORK_DAYS: list[int] = [1, 2, 3, 4, 5]  # 0=Sunday
    DEFAULT_START_TIME: time = time(8, 0)
    DEFAULT_END_TIME: time = time(16, 0)
    DEFAULT_BREAK_MINUTES: int = 0

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )


settings = Settings()
