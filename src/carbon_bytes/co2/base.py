"""Base types shared by the bundled emission estimation models."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from carbon_bytes.co2.options import TraceOptions
from carbon_bytes.errors import ModelCapabilityError
from carbon_bytes.types import ModelType, SegmentedCO2

__all__ = ["EstimationBackend", "EstimationModel", "TraceResult"]


@dataclass(frozen=True, slots=True)
class TraceResult:
    """Emission figure together with the variables used to compute it."""

    co2: float | SegmentedCO2
    green: bool
    variables: dict[str, Any] = field(default_factory=dict)

    def __getitem__(self, key: str) -> Any:
        """Provide mapping-style access (``result["co2"]``)."""

        if key == "co2":
            return self.co2
        if key == "green":
            return self.green
        if key == "variables":
            return self.variables
        raise KeyError(key)

    def to_dict(self) -> dict[str, Any]:
        """Return the trace as a plain dictionary."""

        return {"co2": self.co2, "green": self.green, "variables": self.variables}


@runtime_checkable
class EstimationBackend(Protocol):
    """Capability the plugin dispatches to; bound to one model identifier."""

    def per_byte(self, byte_count: float, green: bool = False) -> Any:
        """Return grams of CO2e for transferring ``byte_count`` bytes."""

    def per_visit(self, byte_count: float, green: bool = False) -> Any:
        """Return grams of CO2e for one page visit of ``byte_count`` bytes."""

    def per_visit_trace(
        self,
        byte_count: float,
        green: bool = False,
        options: Mapping[str, Any] | None = None,
    ) -> Mapping[str, Any] | TraceResult:
        """Return a trace whose ``co2`` entry holds the per-visit grams."""


class EstimationModel(ABC):
    """Abstract emission model implementing the numeric formulas."""

    model_type: ModelType
    description: str = ""
    supports_per_visit: bool = False

    @abstractmethod
    def per_byte(
        self,
        byte_count: float,
        green: bool = False,
        segment: bool = False,
        options: TraceOptions | None = None,
    ) -> float | SegmentedCO2:
        """Return grams of CO2e for ``byte_count`` transferred bytes."""

    def per_visit(
        self,
        byte_count: float,
        green: bool = False,
        segment: bool = False,
        options: TraceOptions | None = None,
    ) -> float | SegmentedCO2:
        """Return grams of CO2e for a single visit; unsupported by default."""

        raise ModelCapabilityError(
            f"per_visit() is not supported by the {self.model_type.value} model"
        )

    def visit_ratios(self, options: TraceOptions | None = None) -> dict[str, float]:
        """Return the effective visit ratios; unsupported by default."""

        raise ModelCapabilityError(
            f"Visit ratios are not defined for the {self.model_type.value} model"
        )

    @abstractmethod
    def grid_intensities(
        self, green: bool, options: TraceOptions | None = None
    ) -> dict[str, float]:
        """Return the grid intensities applied per segment."""
