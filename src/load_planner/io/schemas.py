"""Data schemas for input/output operations."""

from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from load_planner.containers import get_container
from load_planner.models import Container, Item, PlacedItem


class ShipmentSchema(BaseModel):
    """Schema for a packing request: one container and an item catalog."""

    container: Optional[Container] = Field(default=None, description="Explicit container")
    container_preset: Optional[str] = Field(default=None, description="Preset name, e.g. 40HC")
    items: List[Item] = Field(default_factory=list, description="Items to pack")

    @model_validator(mode="after")
    def _require_container(self) -> "ShipmentSchema":
        if self.container is None and not self.container_preset:
            raise ValueError("shipment must include either 'container_preset' or 'container'")
        return self

    def resolve_container(self) -> Container:
        """Explicit container wins over the preset."""
        if self.container is not None:
            return self.container
        return get_container(self.container_preset)


class DeliveryOrderSchema(BaseModel):
    """Schema for a delivery-order audit of an existing placement list."""

    placements: List[PlacedItem] = Field(default_factory=list)
    items: List[Item] = Field(default_factory=list)
