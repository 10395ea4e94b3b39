from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    PROJECT_NAME: str = "URL Shortener"

    # Public address used to compose short URLs, e.g. https://sho.rt/abc12345
    BASE_URL: str = "http://localhost:8080"

    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_PORT: str = "5432"
    POSTGRES_DB: str = "urlshortener"
    # Overrides the composed PostgreSQL URL when set (sqlite:// in tests)
    DATABASE_URL: Optional[str] = None

    # Resolve cache is disabled when no Redis host is configured
    REDIS_HOST: Optional[str] = None
    REDIS_PORT: int = 6379
    CACHE_TTL_SECONDS: int = 86400

    SHORT_CODE_LENGTH: int = 8
    CODE_GENERATION_MAX_ATTEMPTS: int = 5

    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 1000

    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql://{self.POSTGRES_USER}:"
            f"{self.POSTGRES_PASSWORD}@{self.POSTGRES_SERVER}:"
            f"{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )


settings = Settings()
