"""Command-line interface for the pallet optimizer."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict

from .optimizer import OptimizationResult, load_request, optimize_request


def _load_input(path: str | Path) -> Dict[str, Any]:
    if path == "-":
        return json.load(sys.stdin)
    with open(path, "r", encoding="utf-8") as fh:
        return json.load(fh)


def _print_summary(result: OptimizationResult) -> None:
    box = result.box_dimensions
    print(f"Box size: {box.length:.2f} × {box.width:.2f} × {box.height:.2f} in")
    print(
        "Best orientation:"
        f" {result.orientation.length:.2f} × {result.orientation.width:.2f} in"
    )
    print(f"Boxes per layer: {result.boxes_per_layer}")
    print(f"Layers per pallet: {result.layers_per_pallet}")
    print(f"Boxes per pallet: {result.boxes_per_pallet}")
    print(f"Total pallets required: {result.total_pallets}")
    print(f"Boxes on last pallet: {result.remaining_boxes}")
    print(
        f"Stack height: {result.actual_height:.2f} in"
        f" ({result.actual_height_cm:.1f} cm)"
    )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Calculate how many boxes fit on a pallet and how many pallets are needed."
    )
    parser.add_argument(
        "input",
        type=str,
        help="Path to a JSON file describing the boxes (use '-' for stdin).",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the result as a JSON document.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        request = load_request(_load_input(args.input))
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    outcome = optimize_request(request)
    if args.json:
        print(json.dumps(outcome.to_dict(), indent=2))
    elif outcome.success:
        _print_summary(outcome)
    if not outcome.success:
        print(f"error: {outcome.message}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
