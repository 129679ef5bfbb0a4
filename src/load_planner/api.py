"""FastAPI endpoints for the load planner."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, HTTPException, Query
from pydantic import ValidationError

from load_planner.config import load_settings
from load_planner.delivery import audit_delivery_order
from load_planner.io.schemas import DeliveryOrderSchema, ShipmentSchema
from load_planner.metrics import format_summary
from load_planner.packing.packer import pack_items

logger = logging.getLogger(__name__)

SETTINGS = load_settings()

app = FastAPI(
    title="Load Planner API",
    description="Container load planning with stacking and delivery-order checks",
)


def _invalid_input(exc: Exception) -> HTTPException:
    """Friendly 422 with a flat list of what was wrong."""
    if isinstance(exc, ValidationError):
        details = [
            f"{'.'.join(str(part) for part in err['loc']) or 'body'}: {err['msg']}"
            for err in exc.errors()
        ]
    else:
        details = [str(exc)]
    return HTTPException(
        status_code=422,
        detail={
            "error": "INVALID_INPUT",
            "summary": "Invalid shipment. Please correct the listed fields and try again.",
            "details": details,
        },
    )


@app.post("/pack")
def pack(
    request: dict[str, Any],
    delivery_order: int = Query(0, description="Include delivery-order audit (1) or not (0)"),
) -> dict[str, Any]:
    """
    Pack a shipment and return the placement plan.

    Input (request body):
        {
            "container_preset": "40HC",
            "items": [
                {"id": "A", "length": 50, "width": 40, "height": 30, "weight": 18, "quantity": 10}
            ]
        }
    """
    try:
        shipment = ShipmentSchema.model_validate(request)
        container = shipment.resolve_container()
    except (ValidationError, ValueError) as e:
        raise _invalid_input(e)

    try:
        result = pack_items(container, shipment.items, SETTINGS)
        response: dict[str, Any] = {
            "result": result.model_dump(mode="json"),
            "summary": format_summary(result),
        }
        if delivery_order == 1:
            report = audit_delivery_order(result.packed_items, shipment.items)
            response["delivery_order"] = report.model_dump(mode="json")
    except Exception as e:
        logger.error(f"ERROR in /pack endpoint: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))

    logger.info(
        f"container={result.container_id}, loaded_units={result.items_packed}, "
        f"unloaded_units={result.items_unpacked}"
    )
    return response


@app.post("/delivery-order")
def delivery_order(request: dict[str, Any]) -> dict[str, Any]:
    """Audit an existing placement list for LIFO unloading."""
    try:
        payload = DeliveryOrderSchema.model_validate(request)
    except ValidationError as e:
        raise _invalid_input(e)

    report = audit_delivery_order(payload.placements, payload.items)
    return report.model_dump(mode="json")


@app.get("/health")
def health() -> dict[str, Any]:
    """Health check endpoint."""
    return {"ok": True}
