"""Environment-backed settings primitives for :mod:`carbon_bytes`."""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from carbon_bytes.types import ModelType

__all__ = ["CarbonBytesSettings", "get_settings"]


class CarbonBytesSettings(BaseSettings):
    """Expose environment-derived configuration knobs for carbon-bytes.

    Attributes:
        default_model: Model selected on plugin construction. When unset the
            plugin starts unconfigured and waits for ``configure`` or a
            per-input ``type``.
        log_level: Logging level name applied by the CLI.
        log_json: Emit JSON log lines from the CLI instead of plain text.
    """

    default_model: ModelType | None = Field(
        default=None, alias="CARBON_BYTES_DEFAULT_MODEL"
    )
    log_level: str = Field(default="WARNING", alias="CARBON_BYTES_LOG_LEVEL")
    log_json: bool = Field(default=False, alias="CARBON_BYTES_LOG_JSON")

    model_config = SettingsConfigDict(env_file=None, extra="ignore")

    @field_validator("default_model", mode="before")
    @classmethod
    def _parse_optional_model(cls, value: object) -> ModelType | None:
        """Parse the default model while tolerating malformed input.

        Args:
            value: Raw environment value.

        Returns:
            Parsed model type, or ``None`` when unset or unrecognised.
        """

        if value in (None, ""):
            return None
        if isinstance(value, ModelType):
            return value
        try:
            return ModelType(str(value).strip().lower())
        except ValueError:
            return None

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalise_level(cls, value: object) -> str:
        if not isinstance(value, str) or not value.strip():
            return "WARNING"
        return value.strip().upper()


def get_settings() -> CarbonBytesSettings:
    """Return a :class:`CarbonBytesSettings` instance.

    Returns:
        Settings parsed from environment variables.
    """

    return CarbonBytesSettings()
