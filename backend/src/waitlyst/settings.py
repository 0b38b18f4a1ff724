"""Application settings and configuration."""

from datetime import datetime
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="WAITLYST_",
        case_sensitive=False,
        extra="ignore",
    )

    # Branding
    app_name: str = "waitlyst"
    product_name: str = Field(
        default="WaitLyst",
        description="Product name used in share messages",
    )
    base_url: str = Field(
        default="http://localhost:3000",
        description="Public origin that referral links point to",
    )

    # Storage
    storage_backend: Literal["memory", "file", "sql"] = Field(
        default="file",
        description="Where the waitlist slots are persisted",
    )
    data_dir: Path = Field(
        default=Path("./data"),
        description="Directory for the JSON storage file",
    )
    storage_file: str = Field(
        default="waitlyst.json",
        description="JSON storage file name inside data_dir",
    )
    database_url: str = Field(
        default="sqlite:///./waitlyst.db",
        description="Database URL for the sql storage backend",
    )
    entries_key: str = "waitlyst_entries"
    current_user_key: str = "waitlyst_current_user"

    # Referrals
    referral_code_length: int = Field(
        default=8,
        ge=6,
        description="Length of minted referral codes",
    )

    # Admin
    admin_password: str = "admin123"  # Change this!

    # Launch
    launch_date: datetime = Field(
        default=datetime(2026, 6, 1, 9, 0, 0),
        description="Launch date; naive values are local time",
    )

    # Export
    export_date_format: str = Field(
        default="%m/%d/%Y",
        description="strftime format of the Joined column",
    )
    exports_dir: Path = Field(
        default=Path("./exports"),
        description="Directory for exported files",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level",
    )
    log_format: Literal["console", "json"] = Field(
        default="console",
        description="Log output format",
    )


# Global settings instance
settings = Settings()
