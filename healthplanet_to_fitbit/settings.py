from __future__ import annotations

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .credentials.application.ports import CredentialStore


class ConfigError(RuntimeError):
    """Raised when required configuration is missing or invalid."""


class Settings(BaseSettings):
    """Application settings loaded from the credential store and environment."""

    # Variables are conventionally upper-case (``FITBIT_CLIENT_ID``) in both
    # the dotenv file and the shell, so matching ignores case. The dotenv file
    # also carries keys this tool does not use.
    model_config = SettingsConfigDict(case_sensitive=False, extra="ignore")

    fitbit_client_id: str = Field(min_length=1)
    fitbit_client_secret: str = ""
    fitbit_access_token: str = ""
    fitbit_refresh_token: str = Field(min_length=1)
    fitbit_api_url: str = "https://api.fitbit.com"
    healthplanet_access_token: str = Field(min_length=1)
    healthplanet_api_url: str = "https://www.healthplanet.jp"
    healthplanet_lookback_days: int = 30


def load_settings(store: CredentialStore) -> Settings:
    """Build settings from ``store``, falling back to environment variables.

    Stored values take precedence: the store holds the most recently rotated
    refresh token, which an exported shell variable may predate.
    """

    values = {key.lower(): value for key, value in store.read_all().items()}
    try:
        return Settings(_env_file=None, **values)
    except ValidationError as exc:
        missing = [
            str(error["loc"][0]).upper()
            for error in exc.errors()
            if error["type"] in ("missing", "string_too_short") and error["loc"]
        ]
        if missing:
            raise ConfigError(
                f"Missing required configuration: {', '.join(missing)}"
            ) from exc
        raise ConfigError(f"Invalid configuration: {exc}") from exc
