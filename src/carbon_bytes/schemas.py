"""Pydantic models describing plugin parameters."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from carbon_bytes.types import ModelType

__all__ = ["StaticParams"]


class StaticParams(BaseModel):
    """Plugin-level static parameters.

    Unknown keys are ignored so that full input records can be validated
    against this schema when they carry a ``type`` override.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    type: ModelType = Field(
        ...,
        description="Emission estimation model identifier ('1byte' or 'swd').",
    )
