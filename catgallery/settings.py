"""Application settings loaded from the environment and an optional ``.env``."""

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .catapi import CAT_API_URL, ConfigError


class Settings(BaseSettings):
    # Upstream
    cat_api_key: str
    cat_api_base_url: str = CAT_API_URL
    cat_api_timeout: float = Field(default=10.0, gt=0)
    gallery_limit: int = Field(default=20, ge=1)

    # Server / network
    host: str = "0.0.0.0"
    port: int = 3000
    debug: bool = Field(default=False, validation_alias="FLASK_DEBUG")

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    @field_validator("cat_api_key")
    @classmethod
    def _require_key(cls, value):
        value = value.strip()
        if not value:
            raise ValueError("API key is not set in the environment variables")
        return value

    @field_validator("cat_api_base_url")
    @classmethod
    def _strip_slash(cls, value):
        return value.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def _upper(cls, value):
        return value.upper()


def load_settings(env_file=".env"):
    """Read settings from the process environment.

    ``env_file`` is resolved against the current working directory and is
    skipped when it does not exist; variables already set in the environment
    win over it. Pass ``None`` to ignore ``.env`` files entirely.

    Raises:
        ConfigError: CAT_API_KEY is missing or blank, or a value fails validation.
    """
    try:
        return Settings(_env_file=env_file)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc']).upper()}: {err['msg']}"
            for err in e.errors()
        )
        raise ConfigError(f"Invalid configuration: {problems}") from None
