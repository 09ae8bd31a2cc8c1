"""Exception types raised by carbon-bytes."""

from __future__ import annotations

from collections.abc import Callable

__all__ = [
    "InputValidationError",
    "ModelCapabilityError",
    "UnsupportedModelError",
    "build_error_message",
]


def build_error_message(plugin_name: str) -> Callable[..., str]:
    """Return a formatter that prefixes messages with ``plugin_name``.

    Args:
        plugin_name: Identifying name of the plugin raising the error.

    Returns:
        Callable accepting ``message`` and an optional ``scope`` keyword.
    """

    def _build(*, message: str, scope: str | None = None) -> str:
        scoped = f"{scope}: {message}" if scope else message
        return f"{plugin_name}: {scoped}"

    return _build


class InputValidationError(ValueError):
    """Raised when static parameters or input records fail validation."""

    def __init__(self, plugin_name: str, message: str, *, scope: str | None = None):
        self.plugin_name = plugin_name
        self.message = message
        self.scope = scope
        super().__init__(build_error_message(plugin_name)(message=message, scope=scope))


class UnsupportedModelError(RuntimeError):
    """Raised when a calculation runs without a configured model type."""


class ModelCapabilityError(RuntimeError):
    """Raised when an estimation model does not offer the requested operation."""
