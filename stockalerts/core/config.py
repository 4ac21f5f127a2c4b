from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    DB_URL: str
    DB_ECHO: bool = False

    LOG_LEVEL: str = "INFO"

    # Deadline for a single gateway read
    QUERY_TIMEOUT_SECONDS: float = 10.0
    DEFAULT_LOOKBACK_DAYS: int = 30

    class Config:
        env_file = ".env"

settings = Settings()
