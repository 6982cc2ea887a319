"""Application settings powered by Pydantic BaseSettings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from outage_sync.api.client import ApiConfig
from outage_sync.api.constants import (
    API_BASE_URL,
    API_KEY,
    DEFAULT_SITE_ID,
    DEFAULT_TIMEOUT_SECONDS,
)


class AppSettings(BaseSettings):
    """Environment overrides for the CLI.

    Defaults are the fixed API constants; retry behavior is not
    configurable from the environment.
    """

    model_config = SettingsConfigDict(
        env_prefix="", case_sensitive=False, env_file=".env", env_file_encoding="utf-8"
    )

    api_base_url: str = Field(
        default=API_BASE_URL, validation_alias="OUTAGE_API_BASE_URL"
    )
    api_key: str = Field(default=API_KEY, validation_alias="OUTAGE_API_KEY")
    site_id: str = Field(default=DEFAULT_SITE_ID, validation_alias="OUTAGE_SITE_ID")
    request_timeout_seconds: float = Field(
        default=DEFAULT_TIMEOUT_SECONDS,
        validation_alias="OUTAGE_REQUEST_TIMEOUT_SECONDS",
    )

    def api_config(self) -> ApiConfig:
        """Build the API connection settings."""
        return ApiConfig(
            base_url=self.api_base_url,
            api_key=self.api_key,
            timeout_seconds=self.request_timeout_seconds,
        )


def get_settings() -> AppSettings:
    """Get a settings instance."""
    return AppSettings()
