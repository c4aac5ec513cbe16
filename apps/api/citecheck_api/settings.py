from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        extra="ignore",
        env_file=(".env", "apps/api/.env"),
        env_file_encoding="utf-8",
    )

    courtlistener_token: str | None = None
    courtlistener_base_url: str = "https://www.courtlistener.com"
    courtlistener_timeout_seconds: float = 10.0
    # CourtListener expects at least this much spacing between requests.
    min_request_interval_seconds: float = Field(default=0.5, ge=0.5)
    max_upload_bytes: int = 10 * 1024 * 1024
    log_level: str = "INFO"


settings = Settings()
