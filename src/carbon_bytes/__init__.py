"""Carbon Bytes - operational carbon estimates for data transfers."""

from __future__ import annotations

from importlib import import_module
from typing import Any, TYPE_CHECKING

__all__ = [
    "CO2",
    "InputValidationError",
    "ModelType",
    "OperationalCarbonPlugin",
    "UnsupportedModelError",
]

if TYPE_CHECKING:
    from .co2 import CO2
    from .errors import InputValidationError, UnsupportedModelError
    from .plugin import OperationalCarbonPlugin
    from .types import ModelType


def __getattr__(name: str) -> Any:
    """Lazily import submodules on first attribute access."""

    module_map = {
        "CO2": "co2",
        "InputValidationError": "errors",
        "ModelType": "types",
        "OperationalCarbonPlugin": "plugin",
        "UnsupportedModelError": "errors",
    }

    if name not in module_map:
        raise AttributeError(name)

    module = import_module(f".{module_map[name]}", __name__)
    return getattr(module, name)
