"""Trace option parsing for the Sustainable Web Design model."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

LOGGER = logging.getLogger(__name__)

__all__ = ["GridIntensityOptions", "TraceOptions"]


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class GridIntensityOptions(BaseModel):
    """Per-segment grid intensity overrides in gCO2e/kWh.

    Unset segments fall back to the model's global intensity.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    device: float | None = None
    data_center: float | None = Field(default=None, alias="dataCenter")
    network: float | None = None

    @field_validator("device", "data_center", "network", mode="before")
    @classmethod
    def _parse_intensity(cls, value: object, info: ValidationInfo) -> float | None:
        """Accept non-negative numbers; warn and drop everything else."""

        if value is None:
            return None
        if isinstance(value, Mapping) and "country" in value:
            LOGGER.warning(
                "Country grid intensity lookups are not supported for %s; "
                "using the global average",
                info.field_name,
                extra={"country": value.get("country")},
            )
            return None
        if _is_number(value) and value >= 0:
            return float(value)
        LOGGER.warning(
            "Ignoring invalid grid intensity for %s: %r", info.field_name, value
        )
        return None


class TraceOptions(BaseModel):
    """Optional adjustments accepted by the trace operations.

    Keys follow the camelCase names used in pipeline manifests
    (``gridIntensity``, ``dataReloadRatio``, ``firstVisitPercentage``,
    ``returnVisitPercentage``); snake_case field names are accepted too.
    Invalid values are logged and replaced by the model defaults.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    grid_intensity: GridIntensityOptions = Field(
        default_factory=GridIntensityOptions, alias="gridIntensity"
    )
    data_reload_ratio: float | None = Field(default=None, alias="dataReloadRatio")
    first_visit_percentage: float | None = Field(
        default=None, alias="firstVisitPercentage"
    )
    return_visit_percentage: float | None = Field(
        default=None, alias="returnVisitPercentage"
    )

    @field_validator("grid_intensity", mode="before")
    @classmethod
    def _parse_grid_intensity(cls, value: object) -> object:
        if value is None:
            return {}
        if isinstance(value, (Mapping, GridIntensityOptions)):
            return value
        LOGGER.warning("Ignoring gridIntensity option that is not a mapping: %r", value)
        return {}

    @field_validator(
        "data_reload_ratio",
        "first_visit_percentage",
        "return_visit_percentage",
        mode="before",
    )
    @classmethod
    def _parse_ratio(cls, value: object, info: ValidationInfo) -> float | None:
        """Accept ratios in the closed interval [0, 1]."""

        if value is None:
            return None
        if _is_number(value) and 0 <= value <= 1:
            return float(value)
        LOGGER.warning(
            "Ignoring %s=%r; expected a number between 0 and 1",
            info.field_name,
            value,
        )
        return None

    @classmethod
    def parse(cls, options: object) -> TraceOptions:
        """Coerce raw ``options`` into a :class:`TraceOptions` instance.

        Args:
            options: ``None``, an existing instance, or a mapping of option
                values as found on an input record.

        Returns:
            Parsed options; an empty instance when ``options`` is unusable.
        """

        if options is None:
            return cls()
        if isinstance(options, TraceOptions):
            return options
        if not isinstance(options, Mapping):
            LOGGER.warning("Ignoring trace options that are not a mapping: %r", options)
            return cls()
        return cls.model_validate(dict(options))
