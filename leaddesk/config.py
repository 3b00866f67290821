"""Configuration management for LeadDesk."""

import os
from typing import Optional
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def _optional_int(value: Optional[str]) -> Optional[int]:
    if value is None or not value.strip():
        return None
    return int(value)


class Config:
    """Application configuration."""

    # Scoring backend (lead listing, lead creation, AI score lookup)
    SCORING_API_BASE_URL: str = os.getenv("SCORING_API_BASE_URL", "http://localhost:8000")
    SCORING_API_TIMEOUT_SECONDS: float = float(os.getenv("SCORING_API_TIMEOUT_SECONDS", "10"))

    # Lead cache behavior
    # Demo leads keep the dashboard populated on a cold start.
    SEED_DEMO_DATA: bool = os.getenv("SEED_DEMO_DATA", "True").lower() == "true"
    # Seed for synthetic scores. Unset means a fresh random sequence per process.
    LEAD_RANDOM_SEED: Optional[int] = _optional_int(os.getenv("LEAD_RANDOM_SEED"))
    # Pull /all_leads/ from the backend once when the service starts.
    SYNC_ON_STARTUP: bool = os.getenv("SYNC_ON_STARTUP", "False").lower() == "true"

    # Application Settings
    DEBUG: bool = os.getenv("DEBUG", "False").lower() == "true"
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    # "json" or "console"; empty picks console in DEBUG, json otherwise.
    LOG_FORMAT: str = os.getenv("LOG_FORMAT", "").lower()

    # Comma separated list of dashboard origins, "*" for any.
    CORS_ALLOW_ORIGINS: str = os.getenv("CORS_ALLOW_ORIGINS", "*")

    @classmethod
    def has_scoring_backend(cls) -> bool:
        """Check if a scoring backend URL is configured."""
        return bool(cls.SCORING_API_BASE_URL)

    @classmethod
    def cors_origins(cls) -> list[str]:
        return [origin.strip() for origin in cls.CORS_ALLOW_ORIGINS.split(",") if origin.strip()]


# Create a global config instance
config = Config()
