"""
Configuration management for the VIN lookup backend.
Uses pydantic-settings for environment variable handling.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore")

    # API Configuration
    api_title: str = "VIN Lookup API"
    api_version: str = "1.0.0"
    debug: bool = False
    cors_origins: list[str] = ["*"]

    # NHTSA vPIC decode service ({vin} is substituted into the path)
    decode_api_url: str = "https://vpic.nhtsa.dot.gov/api/vehicles/DecodeVin/{vin}?format=json"

    # NHTSA recall service. Point both at the local proxy (/api/recalls) and set
    # recall_year_param="year" when running behind it.
    recall_by_vin_url: str = "https://api.nhtsa.gov/recalls/recallsByVin"
    recall_by_vehicle_url: str = "https://api.nhtsa.gov/recalls/recallsByVehicle"
    recall_year_param: str = "modelYear"

    # Upstream request configuration
    request_timeout: float = 10.0  # seconds, per upstream call

    # Bulk (CSV) configuration
    batch_max_vins: int = 50  # tokens considered per submission
    batch_concurrency: int = 5  # decode requests in flight at once
    batch_invalid_examples: int = 5  # invalid tokens echoed back in the summary


# Global settings instance
settings = Settings()
