"""The 1byte linear per-byte emission model."""

from __future__ import annotations

from carbon_bytes.co2.base import EstimationModel
from carbon_bytes.co2.constants import (
    CO2_PER_KWH_IN_DC_GREEN,
    CO2_PER_KWH_IN_DC_GREY,
    CO2_PER_KWH_NETWORK_GREY,
    KWH_PER_BYTE_FOR_NETWORK,
    KWH_PER_BYTE_IN_DC,
)
from carbon_bytes.co2.options import TraceOptions
from carbon_bytes.types import ModelType

__all__ = ["OneByteModel"]


class OneByteModel(EstimationModel):
    """Charge data-centre and network energy per transferred byte.

    The model has no notion of segments, visits or trace adjustments;
    ``segment`` and ``options`` are accepted for interface parity and ignored.
    """

    model_type = ModelType.ONE_BYTE
    description = "1byte model: linear data-centre and network energy per byte"

    def per_byte(
        self,
        byte_count: float,
        green: bool = False,
        segment: bool = False,
        options: TraceOptions | None = None,
    ) -> float:
        if byte_count < 1:
            return 0.0

        if green:
            co2_for_dc = byte_count * KWH_PER_BYTE_IN_DC * CO2_PER_KWH_IN_DC_GREEN
            co2_for_network = (
                byte_count * KWH_PER_BYTE_FOR_NETWORK * CO2_PER_KWH_NETWORK_GREY
            )
            return co2_for_dc + co2_for_network

        kwh_per_byte = KWH_PER_BYTE_IN_DC + KWH_PER_BYTE_FOR_NETWORK
        return byte_count * kwh_per_byte * CO2_PER_KWH_IN_DC_GREY

    def grid_intensities(
        self, green: bool, options: TraceOptions | None = None
    ) -> dict[str, float]:
        if green:
            return {
                "data_center": CO2_PER_KWH_IN_DC_GREEN,
                "network": CO2_PER_KWH_NETWORK_GREY,
            }
        return {
            "data_center": CO2_PER_KWH_IN_DC_GREY,
            "network": CO2_PER_KWH_IN_DC_GREY,
        }
