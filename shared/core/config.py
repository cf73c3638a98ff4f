import os
from typing import List
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# Always load .env from root
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(__file__)))
load_dotenv(os.path.join(BASE_DIR, ".env"))


class Settings(BaseSettings):
    JWT_SECRET: str = os.getenv("JWT_SECRET", "change-me")
    JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")
    JWT_EXPIRE_MINUTES: int = int(os.getenv("JWT_EXPIRE_MINUTES", 1440))  # 24 hours default

    DB_USER: str | None = os.getenv("DB_USER")
    DB_PASS: str | None = os.getenv("DB_PASS")
    DB_HOST: str | None = os.getenv("DB_HOST")
    DB_PORT: str | None = os.getenv("DB_PORT")
    DB_NAME: str | None = os.getenv("DB_NAME")
    # Full SQLAlchemy URL, wins over the DB_* parts when set
    DATABASE_URL: str | None = os.getenv("DATABASE_URL")

    DB_POOL_SIZE: int = int(os.getenv("DB_POOL_SIZE", 2))
    DB_MAX_OVERFLOW: int = int(os.getenv("DB_MAX_OVERFLOW", 2))

    CORS_ORIGINS: List[str] = ["http://localhost:8080", "http://127.0.0.1:8002"]
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Family defaults
    DEFAULT_LOW_STOCK_THRESHOLD: int = 1
    DEFAULT_EXPIRY_WARNING_DAYS: int = 2
    INVITE_CODE_LENGTH: int = 6
    INVITE_CODE_MAX_ATTEMPTS: int = 5

    MAX_PAGE_LIMIT: int = 100

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


settings = Settings()

GROCERY_DATABASE_URL = settings.DATABASE_URL or (
    f"postgresql+psycopg2://{settings.DB_USER}:{settings.DB_PASS}@{settings.DB_HOST}:{settings.DB_PORT}/{settings.DB_NAME}"
)
