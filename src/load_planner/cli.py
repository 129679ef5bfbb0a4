from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional, Sequence

from pydantic import ValidationError

from load_planner.config import load_settings
from load_planner.delivery import audit_delivery_order
from load_planner.io.schemas import ShipmentSchema
from load_planner.metrics import format_summary
from load_planner.models import Container, Item
from load_planner.packing.packer import pack_items

logger = logging.getLogger(__name__)


def load_input(path: Path) -> tuple[Container, list[Item]]:
    """Read a shipment JSON file: container or container_preset, plus items."""
    data = json.loads(path.read_text(encoding="utf-8"))
    shipment = ShipmentSchema.model_validate(data)
    return shipment.resolve_container(), shipment.items


def write_plan(output: dict[str, Any], path: str) -> None:
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(json.dumps(output, indent=2, sort_keys=True), encoding="utf-8")


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Load Planner CLI")
    parser.add_argument("--input", required=True, help="Input shipment JSON file")
    parser.add_argument("--output", required=True, help="Output plan JSON file")
    parser.add_argument(
        "--audit-delivery",
        action="store_true",
        help="Also check the plan for LIFO unloading across delivery stops",
    )
    parser.add_argument("--verbose", action="store_true", help="Log every placement")
    args = parser.parse_args(argv)

    settings = load_settings()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        container, items = load_input(Path(args.input))
    except (OSError, json.JSONDecodeError, ValidationError, ValueError) as e:
        print(f"error: cannot load {args.input}: {e}", file=sys.stderr)
        return 2

    result = pack_items(container, items, settings)
    output: dict[str, Any] = {"result": result.model_dump(mode="json")}

    print(format_summary(result))

    if args.audit_delivery:
        report = audit_delivery_order(result.packed_items, items)
        output["delivery_order"] = report.model_dump(mode="json")
        print(f"Delivery order: {report.summary}")
        for violation in report.violations:
            print(f"  - {violation.message}")

    write_plan(output, args.output)
    logger.info("Plan written to %s", args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
