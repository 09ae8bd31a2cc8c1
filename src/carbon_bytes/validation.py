"""Validation helpers turning schema failures into plugin errors."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from carbon_bytes.errors import InputValidationError

LOGGER = logging.getLogger(__name__)

__all__ = ["all_defined", "format_validation_error", "validate"]

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def all_defined(params: Mapping[str, Any]) -> bool:
    """Return ``True`` when no value in ``params`` is ``None``."""

    return all(value is not None for value in params.values())


def format_validation_error(error: ValidationError) -> str:
    """Render a pydantic error as ``"field: message"`` pairs joined by ``;``."""

    parts: list[str] = []
    for detail in error.errors():
        location = ".".join(str(item) for item in detail.get("loc", ())) or "input"
        parts.append(f"{location}: {detail.get('msg', 'invalid value')}")
    return "; ".join(parts)


def validate(
    schema: type[SchemaT], params: Mapping[str, Any], *, plugin_name: str
) -> SchemaT:
    """Validate ``params`` against ``schema``.

    Every key the schema declares must be present with a defined value;
    undeclared keys are ignored.

    Args:
        schema: Pydantic model describing the accepted parameters.
        params: Raw parameter mapping.
        plugin_name: Name reported in raised errors.

    Returns:
        The validated schema instance.

    Raises:
        InputValidationError: If validation fails.
    """

    declared = {key: params.get(key) for key in schema.model_fields}
    if not all_defined(declared):
        missing = sorted(key for key, value in declared.items() if value is None)
        message = f"All parameters should be defined: {', '.join(missing)}"
        LOGGER.warning("%s", message, extra={"plugin": plugin_name})
        raise InputValidationError(plugin_name, message)

    try:
        return schema.model_validate(dict(params))
    except ValidationError as exc:
        message = format_validation_error(exc)
        LOGGER.warning(
            "Parameter validation failed: %s", message, extra={"plugin": plugin_name}
        )
        raise InputValidationError(plugin_name, message) from exc
