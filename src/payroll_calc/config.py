"""Configuration management for the payroll calculator."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

ALL_COMPANIES = "All Companies"


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment."""

    database_url: str
    currency_code: str
    business_name: str
    business_address: str
    export_dir: str
    log_level: str
    host: str
    port: int
    debug: bool

    @classmethod
    def from_env(cls) -> Settings:
        """Load settings from environment variables."""
        load_dotenv()

        return cls(
            database_url=os.getenv(
                "DATABASE_URL",
                "sqlite+aiosqlite:///./payroll.db",
            ),
            currency_code=os.getenv("CURRENCY_CODE", "ETB"),
            business_name=os.getenv("BUSINESS_NAME", "Payroll Calculator"),
            business_address=os.getenv(
                "BUSINESS_ADDRESS", "123 Business Rd., Business City"
            ),
            export_dir=os.getenv("EXPORT_DIR", "."),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8000")),
            debug=os.getenv("DEBUG", "false").lower() == "true",
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings.from_env()
