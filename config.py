"""
Configuration module for the mentor booking core.
Loads environment variables and provides typed configuration.
"""

from pathlib import Path
from typing import Optional

import pytz
from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env file
env_path = Path(__file__).parent / ".env"
load_dotenv(dotenv_path=env_path)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Data store (JSON fixture)
    data_file: str = "data/database.json"

    # Scheduling
    default_timezone: str = "America/New_York"
    available_dates_weeks_ahead: int = 4

    # Booking ids: booking_01, booking_02, ...
    booking_id_prefix: str = "booking_"
    booking_id_width: int = 2

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None  # e.g. "booking.log", relative to log_dir
    log_dir: str = "logs"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    def validate_all_required(self) -> None:
        """
        Validate settings that cannot be checked by type alone.

        Raises:
            ValueError: If a setting is missing or invalid
        """
        invalid = []

        if self.default_timezone not in pytz.all_timezones_set:
            invalid.append("default_timezone")

        if self.available_dates_weeks_ahead < 1:
            invalid.append("available_dates_weeks_ahead")

        if not self.data_file:
            invalid.append("data_file")

        if invalid:
            raise ValueError(
                f"Missing or invalid configuration: "
                f"{', '.join(invalid)}. "
                f"Please check your .env file."
            )


# Global settings instance
settings = Settings()
