from typing import List
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEV_JWT_SECRET = "roomkeep-dev-secret-change-me"


class Settings(BaseSettings):
    # -------------------------------------------------
    # General
    # -------------------------------------------------
    PROJECT_NAME: str = "Roomkeep API"
    ENV: str = "development"
    LOG_LEVEL: str = Field("INFO", description="Level for the roomkeep logger (DEBUG, INFO, WARNING, ...)")

    # -------------------------------------------------
    # Database
    # Empty → in-memory store (demo / tests)
    # -------------------------------------------------
    DATABASE_URL: str = ""
    SEED_DEMO_DATA: bool = True

    # -------------------------------------------------
    # Auth (signed bearer tokens)
    # -------------------------------------------------
    JWT_SECRET_KEY: str = DEV_JWT_SECRET
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(
        60 * 12,
        description="Lifetime of an access token in minutes (default: 12 hours)",
    )

    # -------------------------------------------------
    # Login throttling
    # -------------------------------------------------
    LOGIN_RATE_LIMIT: int = Field(10, description="Login attempts allowed per window")
    LOGIN_RATE_WINDOW_SECONDS: int = 60

    # -------------------------------------------------
    # CORS
    # -------------------------------------------------
    BACKEND_CORS_ORIGINS: List[str] = [
        "http://localhost:5000",
        "http://localhost:5173",
    ]

    # -------------------------------------------------
    # Model Config
    # -------------------------------------------------
    model_config = SettingsConfigDict(case_sensitive=True, env_file=".env", extra="ignore")


# Instantiate settings
settings = Settings()

# Render/Neon often provide 'postgres://'. SQLAlchemy prefers 'postgresql+psycopg2://'
if settings.DATABASE_URL.startswith("postgres://"):
    settings.DATABASE_URL = settings.DATABASE_URL.replace(
        "postgres://", "postgresql+psycopg2://", 1
    )

settings.BACKEND_CORS_ORIGINS = sorted(
    {origin.rstrip("/") for origin in settings.BACKEND_CORS_ORIGINS}
)
