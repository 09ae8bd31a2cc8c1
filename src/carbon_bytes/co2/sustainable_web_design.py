"""The Sustainable Web Design per-visit emission model."""

from __future__ import annotations

from typing import Final

from carbon_bytes.co2.base import EstimationModel
from carbon_bytes.co2.constants import (
    DATACENTER_ENERGY,
    END_USER_DEVICE_ENERGY,
    FIRST_TIME_VIEWING_PERCENTAGE,
    GIGABYTE,
    GLOBAL_GRID_INTENSITY,
    KWH_PER_GB,
    NETWORK_ENERGY,
    PERCENTAGE_OF_DATA_LOADED_ON_SUBSEQUENT_LOAD,
    PRODUCTION_ENERGY,
    RENEWABLES_GRID_INTENSITY,
    RETURNING_VISITOR_PERCENTAGE,
)
from carbon_bytes.co2.options import TraceOptions
from carbon_bytes.types import ModelType, SegmentedCO2

__all__ = ["SEGMENT_SHARES", "SustainableWebDesignModel"]

SEGMENT_SHARES: Final[dict[str, float]] = {
    "consumer_device": END_USER_DEVICE_ENERGY,
    "network": NETWORK_ENERGY,
    "production": PRODUCTION_ENERGY,
    "data_center": DATACENTER_ENERGY,
}

_FIRST: Final[str] = "first"
_SUBSEQUENT: Final[str] = "subsequent"


def _segment_of(key: str) -> str:
    """Return the segment name of a plain or ``segment:view`` energy key."""

    return key.split(":", 1)[0]


class SustainableWebDesignModel(EstimationModel):
    """Split transfer energy across device, network, production and data centre.

    Energy is derived from the transferred gigabytes and then charged at a
    grid intensity per segment. Visits weight the energy of first-time and
    returning visitors, the latter reloading only a fraction of the bytes.
    """

    model_type = ModelType.SWD
    description = "Sustainable Web Design model: page-weight energy by segment"
    supports_per_visit = True

    def energy_per_byte_by_component(self, byte_count: float) -> dict[str, float]:
        """Return kWh attributed to each segment for ``byte_count`` bytes."""

        energy_kwh = (byte_count / GIGABYTE) * KWH_PER_GB
        return {
            segment: energy_kwh * share for segment, share in SEGMENT_SHARES.items()
        }

    def energy_per_visit_by_component(
        self,
        byte_count: float,
        first_view: float = FIRST_TIME_VIEWING_PERCENTAGE,
        return_view: float = RETURNING_VISITOR_PERCENTAGE,
        data_reload_ratio: float = PERCENTAGE_OF_DATA_LOADED_ON_SUBSEQUENT_LOAD,
    ) -> dict[str, float]:
        """Return kWh per segment split into first and subsequent views.

        Keys take the form ``"<segment>:first"`` and ``"<segment>:subsequent"``.
        """

        adjusted: dict[str, float] = {}
        for segment, energy in self.energy_per_byte_by_component(byte_count).items():
            adjusted[f"{segment}:{_FIRST}"] = energy * first_view
            adjusted[f"{segment}:{_SUBSEQUENT}"] = (
                energy * return_view * data_reload_ratio
            )
        return adjusted

    def visit_ratios(self, options: TraceOptions | None = None) -> dict[str, float]:
        """Return the visit weighting in effect, falling back to model defaults."""

        opts = options or TraceOptions()
        return {
            "first_visit_percentage": _or_default(
                opts.first_visit_percentage, FIRST_TIME_VIEWING_PERCENTAGE
            ),
            "return_visit_percentage": _or_default(
                opts.return_visit_percentage, RETURNING_VISITOR_PERCENTAGE
            ),
            "data_reload_ratio": _or_default(
                opts.data_reload_ratio, PERCENTAGE_OF_DATA_LOADED_ON_SUBSEQUENT_LOAD
            ),
        }

    def grid_intensities(
        self, green: bool, options: TraceOptions | None = None
    ) -> dict[str, float]:
        grid = (options or TraceOptions()).grid_intensity
        device = grid.device if grid.device is not None else GLOBAL_GRID_INTENSITY
        network = grid.network if grid.network is not None else GLOBAL_GRID_INTENSITY
        if green:
            data_center = RENEWABLES_GRID_INTENSITY
        elif grid.data_center is not None:
            data_center = grid.data_center
        else:
            data_center = GLOBAL_GRID_INTENSITY
        return {
            "consumer_device": device,
            "network": network,
            "production": GLOBAL_GRID_INTENSITY,
            "data_center": data_center,
        }

    def co2_by_component(
        self,
        energy_by_component: dict[str, float],
        green: bool = False,
        options: TraceOptions | None = None,
    ) -> dict[str, float]:
        """Convert per-segment kWh into grams of CO2e.

        Args:
            energy_by_component: Output of one of the ``energy_*`` helpers.
            green: Whether the data centre runs on verified green energy.
            options: Optional grid intensity overrides.

        Returns:
            Mapping with the same keys where ``segment`` is renamed to
            ``segment_co2``.
        """

        intensities = self.grid_intensities(green, options)
        co2: dict[str, float] = {}
        for key, energy in energy_by_component.items():
            segment = _segment_of(key)
            co2[key.replace(segment, f"{segment}_co2", 1)] = (
                energy * intensities[segment]
            )
        return co2

    def per_byte(
        self,
        byte_count: float,
        green: bool = False,
        segment: bool = False,
        options: TraceOptions | None = None,
    ) -> float | SegmentedCO2:
        _require_bool(green)
        energy = self.energy_per_byte_by_component(byte_count)
        by_component = self.co2_by_component(energy, green, options)
        total = sum(by_component.values())
        if segment:
            return SegmentedCO2(**by_component, total=total)  # type: ignore[typeddict-item]
        return total

    def per_visit(
        self,
        byte_count: float,
        green: bool = False,
        segment: bool = False,
        options: TraceOptions | None = None,
    ) -> float | SegmentedCO2:
        _require_bool(green)
        opts = options or TraceOptions()
        ratios = self.visit_ratios(opts)
        energy = self.energy_per_visit_by_component(
            byte_count,
            first_view=ratios["first_visit_percentage"],
            return_view=ratios["return_visit_percentage"],
            data_reload_ratio=ratios["data_reload_ratio"],
        )
        by_component = self.co2_by_component(energy, green, opts)
        total = sum(by_component.values())
        if not segment:
            return total

        merged: dict[str, float] = {}
        for key, value in by_component.items():
            name = _segment_of(key)
            merged[name] = merged.get(name, 0.0) + value
        return SegmentedCO2(**merged, total=total)  # type: ignore[typeddict-item]


def _require_bool(green: object) -> None:
    if not isinstance(green, bool):
        raise TypeError(f"green must be a boolean, got {type(green).__name__}")


def _or_default(value: float | None, default: float) -> float:
    return default if value is None else value
