# Settings (Pydantic BaseSettings)
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Database settings
    DATABASE_URL: str
    DB_ECHO: bool = False
    CREATE_TABLES_ON_STARTUP: bool = True

    # API settings
    API_PREFIX: str = "/v1"

    # JWT settings
    JWT_SECRET_KEY: str
    JWT_ALGORITHM: str = "HS256"
    TOKEN_EXPIRY_SECONDS: int = 60 * 60 * 24 * 7  # 7 days

    # Password settings
    SALT_LENGTH: int = 50
    PASSWORD_MIN_LENGTH: int = 6

    # Rate limiting settings
    RATE_LIMIT_REQUESTS: int = 5
    RATE_LIMIT_WINDOW_SECONDS: int = 60  # 1 minute

    # Logging
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore"
    )


settings = Settings()
