"""Operational carbon plugin for byte transfers.

The host pipeline constructs :class:`OperationalCarbonPlugin`, calls
:meth:`~OperationalCarbonPlugin.configure` once with static parameters and
then :meth:`~OperationalCarbonPlugin.execute` with lists of input records.
Each record needs ``bytes``; ``green-web-host``, ``options`` and a ``type``
override are optional. Results are written to ``operational-carbon``.

A ``type`` carried by an input record rebinds the model for that record and
for every following record, including later ``execute`` calls, until another
``type`` is seen.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Self

from carbon_bytes.co2 import EstimationBackend, create_backend
from carbon_bytes.errors import InputValidationError, UnsupportedModelError
from carbon_bytes.schemas import StaticParams
from carbon_bytes.settings import CarbonBytesSettings, get_settings
from carbon_bytes.types import InputRecord, ModelType
from carbon_bytes.validation import validate

LOGGER = logging.getLogger(__name__)

__all__ = ["BackendFactory", "BatchSelection", "OperationalCarbonPlugin"]

BackendFactory = Callable[[ModelType], EstimationBackend]

BYTES_KEY = "bytes"
GREEN_HOST_KEY = "green-web-host"
OPTIONS_KEY = "options"
TYPE_KEY = "type"
OUTPUT_KEY = "operational-carbon"


def _options_given(options: object) -> bool:
    """Return whether ``options`` selects the trace path.

    Containers count even when empty; scalars count when truthy.
    """

    if isinstance(options, (Mapping, list, tuple)):
        return True
    if isinstance(options, float) and options != options:
        return False
    return bool(options)


@dataclass(frozen=True, slots=True)
class BatchSelection:
    """Model selection carried from one input record to the next."""

    model_type: ModelType | None = None
    backend: EstimationBackend | None = None


class OperationalCarbonPlugin:
    """Estimate operational carbon of data transfers.

    Args:
        backend_factory: Builds the estimation backend for a model type.
        settings: Environment settings; ``default_model`` preselects a model.
    """

    def __init__(
        self,
        *,
        backend_factory: BackendFactory = create_backend,
        settings: CarbonBytesSettings | None = None,
    ) -> None:
        self._backend_factory = backend_factory
        self.static_params: dict[str, Any] = {}
        self._backend: EstimationBackend | None = None

        settings_obj = settings or get_settings()
        if settings_obj.default_model is not None:
            self._commit(self._bind(settings_obj.default_model))

    @property
    def name(self) -> str:
        """Identifying name reported in errors and logs."""

        return type(self).__name__

    @property
    def model_type(self) -> ModelType | None:
        """Currently selected model type, if any."""

        return self.static_params.get(TYPE_KEY)

    @property
    def backend(self) -> EstimationBackend | None:
        """Backend bound to the currently selected model type."""

        return self._backend

    async def configure(self, static_params: Mapping[str, Any]) -> Self:
        """Validate and store static parameters.

        Parameters without a ``type`` key leave the current selection as is.

        Raises:
            InputValidationError: If ``type`` is not a supported identifier.
        """

        selection = self._resolve_selection(static_params, self._selection())
        self._commit(selection)
        LOGGER.debug(
            "Plugin configured",
            extra={"plugin": self.name, "model_type": str(selection.model_type)},
        )
        return self

    async def execute(self, inputs: Sequence[InputRecord]) -> list[InputRecord]:
        """Calculate ``operational-carbon`` for each input record in order.

        Records are updated in place and returned in the same order.

        Raises:
            InputValidationError: On the first record with an invalid ``type``
                or without ``bytes``; later records are not processed.
            UnsupportedModelError: If no model type was ever selected.
        """

        selection = self._selection()
        outputs: list[InputRecord] = []
        for index, record in enumerate(inputs):
            selection = self._resolve_selection(record, selection)
            self._commit(selection)

            if not record.get(BYTES_KEY):
                LOGGER.warning(
                    "Input record without bytes",
                    extra={"plugin": self.name, "index": index},
                )
                raise InputValidationError(self.name, "Bytes not provided")

            result = self._calculate(record, selection)
            if result:
                record[OUTPUT_KEY] = result
            LOGGER.debug(
                "Calculated operational carbon",
                extra={
                    "plugin": self.name,
                    "index": index,
                    "model_type": str(selection.model_type),
                    "result": result,
                },
            )
            outputs.append(record)
        return outputs

    def _selection(self) -> BatchSelection:
        return BatchSelection(model_type=self.model_type, backend=self._backend)

    def _resolve_selection(
        self, params: Mapping[str, Any], current: BatchSelection
    ) -> BatchSelection:
        """Return the selection after applying a ``type`` found in ``params``."""

        if TYPE_KEY not in params:
            return current
        validated = validate(StaticParams, params, plugin_name=self.name)
        if validated.type != current.model_type:
            LOGGER.debug(
                "Model type changed",
                extra={
                    "plugin": self.name,
                    "model_type": str(validated.type),
                    "previous_model_type": str(current.model_type),
                },
            )
        return self._bind(validated.type)

    def _bind(self, model_type: ModelType) -> BatchSelection:
        return BatchSelection(
            model_type=model_type, backend=self._backend_factory(model_type)
        )

    def _commit(self, selection: BatchSelection) -> None:
        if selection.model_type is None:
            return
        self.static_params[TYPE_KEY] = selection.model_type
        self._backend = selection.backend

    def _calculate(self, record: InputRecord, selection: BatchSelection) -> Any:
        """Dispatch ``record`` to the strategy of the selected model."""

        green = record.get(GREEN_HOST_KEY) is True
        options = record.get(OPTIONS_KEY)
        byte_count = record[BYTES_KEY]
        backend = selection.backend

        match selection.model_type:
            case ModelType.SWD if backend is not None:
                if _options_given(options):
                    return backend.per_visit_trace(byte_count, green, options)["co2"]
                return backend.per_visit(byte_count, green)
            case ModelType.ONE_BYTE if backend is not None:
                return backend.per_byte(byte_count, green)
            case _:
                raise UnsupportedModelError(
                    f"{self.name}: no estimation model configured "
                    f"(type={selection.model_type!r})"
                )
