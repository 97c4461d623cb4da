from __future__ import annotations
import os
from pydantic import BaseModel

class Settings(BaseModel):
    environment: str = os.getenv("ENVIRONMENT", "dev")
    app_name: str = os.getenv("APP_NAME", "captionboard-api")
    app_display_name: str = os.getenv("APP_DISPLAY_NAME", "Captionboard")
    app_version: str = os.getenv("APP_VERSION", "0.1.0")
    git_sha: str = os.getenv("GIT_SHA", "dev")
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    cors_origins: list[str] = os.getenv("CORS_ORIGINS", "*").split(",")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    database_url: str = os.getenv("DATABASE_URL", "postgresql+asyncpg://postgres:postgres@db:5432/captionboard_dev")
    sql_echo: bool = os.getenv("SQL_ECHO", "0") == "1"

    # Bearer tokens are minted by the identity provider; we only verify them
    auth_jwt_secret: str = os.getenv("AUTH_JWT_SECRET", "dev-secret-change-me")
    auth_jwt_audience: str = os.getenv("AUTH_JWT_AUDIENCE", "authenticated")
    auth_jwt_algorithm: str = os.getenv("AUTH_JWT_ALGORITHM", "HS256")

    # Captioning pipeline (presigned uploads, image registration, caption generation)
    pipeline_base_url: str = os.getenv("PIPELINE_BASE_URL", "https://api.almostcrackd.ai")
    pipeline_timeout_seconds: float = float(os.getenv("PIPELINE_TIMEOUT_SECONDS", "30"))

    # Upper bounds for the fetch-then-process-in-memory paths
    random_superset_cap: int = int(os.getenv("RANDOM_SUPERSET_CAP", "1000"))
    analytics_row_cap: int = int(os.getenv("ANALYTICS_ROW_CAP", "10000"))

    default_page_limit: int = int(os.getenv("DEFAULT_PAGE_LIMIT", "20"))
    max_page_limit: int = int(os.getenv("MAX_PAGE_LIMIT", "100"))

settings = Settings()
