import os
from pydantic import BaseModel

class Settings(BaseModel):
    # Basic
    ENV: str = os.getenv("ENV", "dev")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    CACHE_TTL_SECONDS: int = int(os.getenv("CACHE_TTL_SECONDS", "3600"))

    # Listing providers, tried in this order
    REALTYMOLE_API_KEY: str | None = os.getenv("REALTYMOLE_API_KEY")
    REALTYMOLE_BASE_URL: str = os.getenv("REALTYMOLE_BASE_URL", "https://api.realtymole.com/v1")
    RENTSPREE_API_KEY: str | None = os.getenv("RENTSPREE_API_KEY")
    RENTSPREE_BASE_URL: str = os.getenv("RENTSPREE_BASE_URL", "https://api.rentspree.com/v1")
    RENTSPREE_LIMIT: int = int(os.getenv("RENTSPREE_LIMIT", "50"))

    # Hash address/price/sqft instead of timestamp+random when a listing has no id
    STABLE_LISTING_IDS: bool = os.getenv("STABLE_LISTING_IDS", "false").lower() == "true"

    # Security
    API_KEY: str | None = os.getenv("API_KEY")
    RATE_LIMIT_RPM: int = int(os.getenv("RATE_LIMIT_RPM", "60"))

    # CORS
    ALLOW_ORIGINS: str = os.getenv("ALLOW_ORIGINS", "*")

    # Rate-limit counters (search results always stay in process)
    USE_REDIS: bool = os.getenv("USE_REDIS", "false").lower() == "true"
    REDIS_URL: str = os.getenv("REDIS_URL", "redis://localhost:6379/0")

    # Metrics
    PROMETHEUS_ENABLED: bool = os.getenv("PROMETHEUS_ENABLED", "true").lower() == "true"

settings = Settings()
