"""All settings, loaded from the environment / .env file."""
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # App
    app_env: str = "development"
    log_level: str = "INFO"

    # Outreach SLA defaults (hours)
    sla_queued_max_hours: float = 4
    sla_sent_no_reply_max_hours: float = 48
    sla_error_always_needs_action: bool = True

    # Capability match weights (diagnostic score, 0-100)
    weight_capability_processes: int = 60
    weight_capability_materials: int = 20
    weight_capability_geo: int = 20

    # Eligibility reason weights (ranking only)
    weight_process_match: int = 4
    weight_geo_match: int = 3
    weight_known_contact: int = 2
    weight_verified_active: int = 1

    # Optional override for the state/country lookup tables
    geo_maps_path: str | None = None

    @property
    def is_production(self) -> bool:
        return self.app_env.strip().lower() == "production"


@lru_cache
def get_settings() -> Settings:
    return Settings()
