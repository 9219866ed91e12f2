from typing import List, Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    # -------------------------------------------------
    # General
    # -------------------------------------------------
    PROJECT_NAME: str = "Platform Admin Authorization API"
    ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    # -------------------------------------------------
    # CORS (admin dashboard origins)
    # -------------------------------------------------
    BACKEND_CORS_ORIGINS: List[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]

    # -------------------------------------------------
    # Supabase (identity lookup + content storage)
    # -------------------------------------------------
    SUPABASE_URL: Optional[str] = Field(None)
    SUPABASE_SERVICE_ROLE_KEY: Optional[str] = Field(None)

    # -------------------------------------------------
    # Authorization diagnostics
    # -------------------------------------------------
    # Log every denied decision at INFO instead of DEBUG
    AUTHZ_LOG_DECISIONS: bool = Field(False, description="Log denied authorization decisions at INFO level")

    # -------------------------------------------------
    # Model Config
    # -------------------------------------------------
    class Config:
        case_sensitive = True


# Instantiate settings
settings = Settings()

# -------------------------------------------------
# Normalize CORS origins after loading settings
# -------------------------------------------------
settings.BACKEND_CORS_ORIGINS = sorted({o.rstrip("/") for o in settings.BACKEND_CORS_ORIGINS})
