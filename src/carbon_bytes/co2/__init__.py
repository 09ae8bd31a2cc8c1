"""Bundled emission estimation backend.

:class:`CO2` binds one estimation model (``"1byte"`` or ``"swd"``) and exposes
the operations the plugin dispatches to. Any object matching
:class:`EstimationBackend` can stand in for it.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from carbon_bytes.co2.base import EstimationBackend, EstimationModel, TraceResult
from carbon_bytes.co2.onebyte import OneByteModel
from carbon_bytes.co2.options import GridIntensityOptions, TraceOptions
from carbon_bytes.co2.sustainable_web_design import SustainableWebDesignModel
from carbon_bytes.errors import ModelCapabilityError
from carbon_bytes.types import ModelType, SegmentedCO2

LOGGER = logging.getLogger(__name__)

__all__ = [
    "CO2",
    "EstimationBackend",
    "EstimationModel",
    "GridIntensityOptions",
    "OneByteModel",
    "SustainableWebDesignModel",
    "TraceOptions",
    "TraceResult",
    "create_backend",
]


def _build_model(model_type: ModelType) -> EstimationModel:
    match model_type:
        case ModelType.ONE_BYTE:
            return OneByteModel()
        case ModelType.SWD:
            return SustainableWebDesignModel()


class CO2:
    """Emission estimator bound to a single model.

    Args:
        model: Model identifier; defaults to the Sustainable Web Design model.
        segment: Return per-segment breakdowns instead of plain totals where
            the model supports them.

    Raises:
        ValueError: If ``model`` is not a known identifier.
    """

    def __init__(
        self, model: ModelType | str = ModelType.SWD, *, segment: bool = False
    ) -> None:
        self.model_type = ModelType(model)
        self.segment = segment
        self._model = _build_model(self.model_type)

    @property
    def model(self) -> EstimationModel:
        """Return the underlying estimation model."""

        return self._model

    def per_byte(self, byte_count: float, green: bool = False) -> float | SegmentedCO2:
        """Return grams of CO2e for transferring ``byte_count`` bytes."""

        return self._model.per_byte(byte_count, green, self.segment)

    def per_visit(
        self, byte_count: float, green: bool = False
    ) -> float | SegmentedCO2:
        """Return grams of CO2e for one visit to a page of ``byte_count`` bytes.

        Raises:
            ModelCapabilityError: If the bound model has no per-visit figures.
        """

        self._require_per_visit("per_visit")
        return self._model.per_visit(byte_count, green, self.segment)

    def per_byte_trace(
        self,
        byte_count: float,
        green: bool = False,
        options: Mapping[str, Any] | TraceOptions | None = None,
    ) -> TraceResult:
        """Return :meth:`per_byte` along with the variables that produced it."""

        parsed = TraceOptions.parse(options)
        co2 = self._model.per_byte(byte_count, green, self.segment, parsed)
        return TraceResult(
            co2=co2,
            green=green,
            variables={
                "description": self._model.description,
                "bytes": byte_count,
                "grid_intensity": self._model.grid_intensities(green, parsed),
            },
        )

    def per_visit_trace(
        self,
        byte_count: float,
        green: bool = False,
        options: Mapping[str, Any] | TraceOptions | None = None,
    ) -> TraceResult:
        """Return :meth:`per_visit` along with the variables that produced it.

        Raises:
            ModelCapabilityError: If the bound model has no per-visit figures.
        """

        self._require_per_visit("per_visit_trace")
        parsed = TraceOptions.parse(options)
        co2 = self._model.per_visit(byte_count, green, self.segment, parsed)
        variables: dict[str, Any] = {
            "description": self._model.description,
            "bytes": byte_count,
            "grid_intensity": self._model.grid_intensities(green, parsed),
        }
        variables.update(self._model.visit_ratios(parsed))
        return TraceResult(co2=co2, green=green, variables=variables)

    def _require_per_visit(self, operation: str) -> None:
        if not self._model.supports_per_visit:
            raise ModelCapabilityError(
                f"{operation}() is not supported by the {self.model_type.value} "
                "model; use per_byte() instead"
            )


def create_backend(model_type: ModelType) -> EstimationBackend:
    """Build the bundled backend bound to ``model_type``."""

    LOGGER.debug("Creating estimation backend", extra={"model_type": str(model_type)})
    return CO2(model=model_type)
