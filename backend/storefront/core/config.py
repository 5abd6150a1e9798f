from pydantic_settings import BaseSettings
from typing import List, Optional
from datetime import timedelta
from pathlib import Path


DEFAULT_CATALOG_PATH = Path(__file__).resolve().parent.parent / "data" / "products.json"


class Settings(BaseSettings):
    ENV: str = "development"
    # No default: the app refuses to start without a signing secret
    SECRET_KEY: str
    DATABASE_URL: str = "sqlite:///./storefront.db"

    HOST: str = "127.0.0.1"
    PORT: int = 5000
    LOG_LEVEL: str = "INFO"

    # CORS
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    # JWT
    JWT_ACCESS_EXPIRES_DAYS: int = 30

    # Product catalog collaborator
    CATALOG_PATH: str = str(DEFAULT_CATALOG_PATH)

    # Admin seed
    ADMIN_EMAIL: str = "admin@estore.com"
    ADMIN_NAME: str = "Admin User"
    ADMIN_PASSWORD: Optional[str] = None

    @property
    def cors_origins_list(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def jwt_expires_delta(self) -> timedelta:
        return timedelta(days=self.JWT_ACCESS_EXPIRES_DAYS)

    class Config:
        env_file = ".env"


settings = Settings()
