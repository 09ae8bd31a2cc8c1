"""Numeric constants for the bundled emission estimation models.

All intensities are grams of CO2e per kilowatt hour; energy figures are
kilowatt hours.
"""

from __future__ import annotations

from typing import Final

# Shared
GIGABYTE: Final[int] = 1000 * 1000 * 1000
GLOBAL_GRID_INTENSITY: Final[float] = 442.0
RENEWABLES_GRID_INTENSITY: Final[float] = 50.0

# 1byte
KWH_PER_BYTE_IN_DC: Final[float] = 0.00000000072
FIXED_NETWORK_WIRED: Final[float] = 0.00000000043
FIXED_NETWORK_WIFI: Final[float] = 0.00000000152
FOUR_G_MOBILE: Final[float] = 0.00000000884
KWH_PER_BYTE_FOR_NETWORK: Final[float] = (
    FIXED_NETWORK_WIRED + FIXED_NETWORK_WIFI + FOUR_G_MOBILE
) / 3
CO2_PER_KWH_IN_DC_GREY: Final[float] = 519.0
CO2_PER_KWH_NETWORK_GREY: Final[float] = 475.0
CO2_PER_KWH_IN_DC_GREEN: Final[float] = 0.0

# Sustainable Web Design
KWH_PER_GB: Final[float] = 0.81
END_USER_DEVICE_ENERGY: Final[float] = 0.52
NETWORK_ENERGY: Final[float] = 0.14
DATACENTER_ENERGY: Final[float] = 0.15
PRODUCTION_ENERGY: Final[float] = 0.19
FIRST_TIME_VIEWING_PERCENTAGE: Final[float] = 0.75
RETURNING_VISITOR_PERCENTAGE: Final[float] = 0.25
PERCENTAGE_OF_DATA_LOADED_ON_SUBSEQUENT_LOAD: Final[float] = 0.02
