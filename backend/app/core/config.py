from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = "sqlite:///./marketplace.db"

    # Auth tokens
    JWT_SECRET: str = "devsecret"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRES_DAYS: int = 30

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    # HTTP
    CORS_ORIGINS: list[str] = ["*"]

    # Order workflow policies
    ORDER_STRICT_TRANSITIONS: bool = False
    ORDER_REJECT_ON_INSUFFICIENT_STOCK: bool = False

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="allow"
    )


settings = Settings()
