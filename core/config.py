from datetime import time
from typing import List, Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # -------------------------------------------------
    # General
    # -------------------------------------------------
    PROJECT_NAME: str = "Angaza Foundation API"
    ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    # -------------------------------------------------
    # Dashboard frontend domains
    # -------------------------------------------------
    FRONTEND_DOMAINS: List[str] = [
        "http://localhost:3000",
        "https://dashboard.angazafoundation.org",
    ]

    # -------------------------------------------------
    # CORS (auto-built below)
    # -------------------------------------------------
    BACKEND_CORS_ORIGINS: List[str] = []

    # -------------------------------------------------
    # Supabase (document store & auth)
    # -------------------------------------------------
    SUPABASE_URL: Optional[str] = None
    SUPABASE_ANON_KEY: Optional[str] = None
    SUPABASE_SERVICE_ROLE_KEY: Optional[str] = None

    # -------------------------------------------------
    # Inventory
    # -------------------------------------------------
    LOW_STOCK_THRESHOLD: int = Field(10, ge=0, description="Resources at or below this quantity count as low stock")
    DEFAULT_PAGE_LIMIT: int = Field(50, ge=0, description="Default page size for list endpoints (0 = unlimited)")
    DISTRIBUTION_MAX_ATTEMPTS: int = Field(3, ge=1, description="Compare-and-set attempts before a stock decrement gives up")
    CATEGORY_CACHE_TTL: int = Field(300, ge=0, description="Seconds the categories list is cached")

    # -------------------------------------------------
    # Attendance (office hours in local time)
    # -------------------------------------------------
    ATTENDANCE_UTC_OFFSET_HOURS: float = Field(2, ge=-12, le=14, description="Local offset from UTC (Central Africa Time)")
    WORKDAY_START: time = time(8, 0)
    WORKDAY_END: time = time(16, 30)

    # -------------------------------------------------
    # Access control
    # -------------------------------------------------
    # When True, principals whose role has no entry in the permission
    # table are rejected instead of receiving the default areas.
    STRICT_ROLES: bool = False

    # -------------------------------------------------
    # Model Config
    # -------------------------------------------------
    model_config = SettingsConfigDict(case_sensitive=True)


# Instantiate settings
settings = Settings()

# -------------------------------------------------
# Build CORS list dynamically after loading settings
# -------------------------------------------------
cors_origins = [d.rstrip("/") for d in settings.FRONTEND_DOMAINS]
cors_origins.extend(o.rstrip("/") for o in settings.BACKEND_CORS_ORIGINS)

# remove duplicates
settings.BACKEND_CORS_ORIGINS = sorted(set(cors_origins))
