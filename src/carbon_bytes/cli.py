"""Command-line entry point running the plugin over a list of input records."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from .errors import InputValidationError, ModelCapabilityError, UnsupportedModelError
from .logging_setup import configure_logging
from .plugin import OperationalCarbonPlugin
from .settings import CarbonBytesSettings, get_settings

LOGGER = logging.getLogger(__name__)


def _read_stdin() -> str | None:
    """Read the JSON document from stdin if one is piped in."""
    try:
        if sys.stdin and not sys.stdin.isatty():
            return sys.stdin.read()
    except OSError as e:
        print(f"Error reading stdin: {e}", file=sys.stderr)
    return None


def _load_document(path: str | None, stdin_payload: str | None) -> object:
    """Load the input document from a JSON/YAML file or stdin."""
    if path:
        file_path = Path(path)
        text = file_path.read_text(encoding="utf-8")
        if file_path.suffix.lower() in {".yml", ".yaml"}:
            return yaml.safe_load(text)
        return json.loads(text)
    if stdin_payload:
        return json.loads(stdin_payload)
    raise ValueError("No input provided. Use --input or pipe JSON via stdin.")


def _split_document(
    document: object,
) -> tuple[dict[str, Any], list[dict[str, Any]]]:
    """Return ``(config, inputs)`` from a list or ``{config, inputs}`` mapping."""

    config: object = {}
    inputs: object = document
    if isinstance(document, Mapping):
        config = document.get("config") or {}
        inputs = document.get("inputs") or []
    if not isinstance(config, Mapping):
        raise ValueError("'config' must be an object.")
    if not isinstance(inputs, list) or not all(
        isinstance(item, Mapping) for item in inputs
    ):
        raise ValueError("Inputs must be a list of objects.")
    return {str(k): v for k, v in config.items()}, [dict(item) for item in inputs]


async def _run(
    config: dict[str, Any],
    inputs: list[dict[str, Any]],
    settings: CarbonBytesSettings,
) -> list[dict[str, Any]]:
    plugin = OperationalCarbonPlugin(settings=settings)
    await plugin.configure(config)
    return await plugin.execute(inputs)  # type: ignore[return-value]


def main(argv: list[str] | None = None) -> int:
    """Estimate operational carbon for input records."""
    settings = get_settings()
    parser = argparse.ArgumentParser(
        description="Estimate operational carbon for data transfers."
    )
    parser.add_argument(
        "--input",
        "-i",
        help="Path to a JSON or YAML document. If omitted, reads JSON from stdin.",
    )
    parser.add_argument(
        "--type",
        "-t",
        help="Estimation model ('1byte' or 'swd'); overrides the document config.",
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        help="Logging level (default from CARBON_BYTES_LOG_LEVEL).",
    )
    parser.add_argument(
        "--log-json",
        action="store_true",
        default=settings.log_json,
        help="Emit JSON log lines.",
    )
    parser.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Quiet mode: suppress output, just return exit code.",
    )

    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:  # pragma: no cover - controlled via tests
        exit_code = int(exc.code) if isinstance(exc.code, int) else 1
        return 0 if exit_code == 0 else 1

    level = logging.getLevelName(str(args.log_level).upper())
    configure_logging(
        level if isinstance(level, int) else logging.WARNING,
        json_output=args.log_json,
    )

    try:
        stdin_payload = None if args.input else _read_stdin()
        document = _load_document(args.input, stdin_payload)
        config, inputs = _split_document(document)
        if args.type is not None:
            config["type"] = args.type
        outputs = asyncio.run(_run(config, inputs, settings))
    except (
        InputValidationError,
        ModelCapabilityError,
        UnsupportedModelError,
        ValueError,
        TypeError,
        OSError,
        yaml.YAMLError,
    ) as exc:
        LOGGER.debug("Run failed", exc_info=True)
        if not args.quiet:
            print(str(exc), file=sys.stderr)
        return 1

    if not args.quiet:
        print(json.dumps(outputs, separators=(",", ":"), default=str))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
