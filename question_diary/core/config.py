from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    DATABASE_URL: str = "postgresql://diary:diary@db:5432/diary"
    APP_ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    # Comma-separated allowed origins, or "*" to allow all.
    # Example: "https://myapp.com,https://api.myapp.com"
    CORS_ORIGINS: str = "*"

    # IANA zone that defines the calendar day for the whole system.
    TIMEZONE: str = "UTC"

    # Pool checkout timeout, and statement_timeout on PostgreSQL.
    STORE_TIMEOUT_SECONDS: float = 5.0

    # Default statistics windows
    MOOD_TREND_DAYS: int = 30
    MONTHLY_WINDOW_MONTHS: int = 12
    WEEKLY_WINDOW_WEEKS: int = 12

    @property
    def cors_origins_list(self) -> list[str]:
        if self.CORS_ORIGINS.strip() == "*":
            return ["*"]
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


settings = Settings()
