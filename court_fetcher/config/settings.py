"""Application settings and configuration"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional
from pydantic import model_validator, Field


class Settings(BaseSettings):
    """Application configuration settings"""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    # Application
    app_name: str = "Court Data Fetcher"
    environment: str = "development"  # development, staging, production
    debug: bool = False
    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL

    # Debug Configuration
    debug_fetch_execution: bool = True  # Log court fetch timing
    log_to_file: bool = True            # Enable file logging in debug mode

    # CORS
    cors_allow_origins: List[str] = Field(default_factory=lambda: ["*"])

    # Court source
    court_name: str = "Delhi High Court"
    court_base_url: str = "https://delhihighcourt.nic.in"

    # Simulated court round-trip (seconds)
    simulated_latency_min: float = 2.0
    simulated_latency_max: float = 3.0

    # Query validation
    min_filing_year: int = 2000

    # Case numbers advertised on the form as failing lookups
    error_test_case_numbers: List[str] = Field(default_factory=lambda: ["99999", "00000"])

    # Audit database (optional)
    # Option 1: DATABASE_URL set directly (takes precedence)
    database_url: Optional[str] = None

    # Option 2: assembled from individual parts (PostgreSQL only)
    db_host: Optional[str] = None
    db_port: int = 5432
    db_name: Optional[str] = None
    db_user: Optional[str] = None
    db_password: Optional[str] = None

    auto_create_tables: bool = False  # Create audit tables on startup

    @model_validator(mode='after')
    def assemble_database_url(self) -> 'Settings':
        # Build the URL from parts when DATABASE_URL is not given
        if not self.database_url:
            if self.db_host and self.db_user and self.db_password and self.db_name:
                self.database_url = f"postgresql://{self.db_user}:{self.db_password}@{self.db_host}:{self.db_port}/{self.db_name}"
            else:
                # No database configured: auditing is disabled
                self.database_url = None

        if self.simulated_latency_max < self.simulated_latency_min:
            self.simulated_latency_max = self.simulated_latency_min

        return self

    @property
    def audit_enabled(self) -> bool:
        return bool(self.database_url)


# Global settings instance
settings = Settings()
