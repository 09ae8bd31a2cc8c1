"""Type definitions for carbon-bytes."""

from __future__ import annotations

from enum import Enum
from typing import Any, MutableMapping, TypedDict

__all__ = ["InputRecord", "ModelType", "SegmentedCO2"]

InputRecord = MutableMapping[str, Any]


class ModelType(str, Enum):
    """Identifiers of the supported emission estimation strategies."""

    ONE_BYTE = "1byte"
    SWD = "swd"

    def __str__(self) -> str:
        return self.value


class SegmentedCO2(TypedDict, total=False):
    """Per-segment gram breakdown returned when segmented results are requested."""

    consumer_device_co2: float
    network_co2: float
    production_co2: float
    data_center_co2: float
    total: float
