"""
Application configuration.

Settings come from environment variables, optionally loaded
from a .env file. Amounts such as the import GST rate are read
as Decimal.
"""

import os
from decimal import Decimal
from functools import lru_cache

from dotenv import load_dotenv

# Load .env file into environment variables
load_dotenv()


class Settings:
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "Ledger Engine"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"

    # Database
    DATABASE_URL: str = os.getenv(
        "DATABASE_URL",
        "sqlite:///./ledger_engine.db"
    )

    # Environment
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FILE: str = os.getenv("LOG_FILE", "")

    # Seed the sample company, masters and vouchers on first load
    SEED_SAMPLE_DATA: bool = os.getenv("SEED_SAMPLE_DATA", "true").lower() == "true"

    # GST rate assumed for extracted invoice lines whose item is not
    # in the stock registry
    DEFAULT_IMPORT_GST_RATE: Decimal = Decimal(
        os.getenv("DEFAULT_IMPORT_GST_RATE", "18")
    )

    # Invoice extraction service
    EXTRACTION_URL: str = os.getenv("EXTRACTION_URL", "")
    EXTRACTION_TIMEOUT: float = float(os.getenv("EXTRACTION_TIMEOUT", "60"))
    EXTRACTION_MAX_RETRIES: int = int(os.getenv("EXTRACTION_MAX_RETRIES", "3"))
    EXTRACTION_INITIAL_DELAY: float = float(
        os.getenv("EXTRACTION_INITIAL_DELAY", "1.0")
    )


@lru_cache()
def get_settings() -> Settings:
    """Settings are read once per process; tests set env vars before import."""
    return Settings()
