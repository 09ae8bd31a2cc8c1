"""Example script running the plugin the way a host pipeline would."""

from __future__ import annotations

import argparse
import asyncio
import json
from typing import Optional

from carbon_bytes.plugin import OperationalCarbonPlugin


async def _estimate(model_type: str, page_bytes: list[int], green: bool) -> list[dict]:
    plugin = await OperationalCarbonPlugin().configure({"type": model_type})
    inputs = [{"bytes": size, "green-web-host": green} for size in page_bytes]
    return await plugin.execute(inputs)


def main(argv: Optional[list[str]] = None) -> int:
    """Print operational carbon for a few page weights."""
    parser = argparse.ArgumentParser(
        description="Estimate operational carbon for a handful of page weights."
    )
    parser.add_argument("--type", choices=["1byte", "swd"], default="swd")
    parser.add_argument("--green", action="store_true")
    parser.add_argument(
        "bytes", nargs="*", type=int, default=[500_000, 2_000_000, 10_000_000]
    )
    args = parser.parse_args(argv)

    outputs = asyncio.run(_estimate(args.type, args.bytes, args.green))
    print(json.dumps(outputs, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
