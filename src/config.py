"""Centralised application settings loaded from environment / .env file."""

from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_env: str = "local"
    log_level: str = "INFO"

    # Google Distance Matrix provider
    google_maps_api_key: Optional[str] = None
    distance_matrix_url: str = "https://maps.googleapis.com/maps/api/distancematrix/json"
    distance_matrix_timeout_seconds: float = 10.0

    # Backend proxy as seen by the client-side services
    api_base_url: str = "http://localhost:8000/api/v1"
    api_timeout_seconds: float = 10.0

    # Delivery pricing (FCFA)
    pricing_range_0_1km: float = 375.0
    pricing_range_1_5km: float = 500.0
    pricing_range_5_6km: float = 600.0
    pricing_additional_per_km: float = 100.0

    rate_limit: str = "100/minute"

    model_config = {"env_file": ".env", "extra": "ignore"}

    @property
    def is_production(self) -> bool:
        return self.app_env.lower() == "production"


settings = Settings()
