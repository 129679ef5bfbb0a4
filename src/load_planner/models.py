from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ItemType(str, Enum):
    """Shape class of an item. Informational only."""

    CARTON = "carton"
    PALLET = "pallet"
    CRATE = "crate"
    DRUM = "drum"
    CUSTOM = "custom"


class RotationAxis(str, Enum):
    XY = "xy"
    XZ = "xz"
    YZ = "yz"


class Container(BaseModel):
    """Container model with inner dimensions and payload cap."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Container identifier")
    length: float = Field(gt=0, description="Inner length of the container")
    width: float = Field(gt=0, description="Inner width of the container")
    height: float = Field(gt=0, description="Inner height of the container")
    max_weight: float = Field(gt=0, description="Maximum total payload")
    unit: str = Field(default="cm", description="Length unit, informational")
    weight_unit: str = Field(default="kg", description="Weight unit, informational")

    @property
    def volume(self) -> float:
        return self.length * self.width * self.height


class Item(BaseModel):
    """Item type with identical instances to load."""

    id: str = Field(description="Unique identifier for the item type")
    type: ItemType = Field(default=ItemType.CARTON, description="Shape class")
    length: float = Field(gt=0, description="Intrinsic length")
    width: float = Field(gt=0, description="Intrinsic width")
    height: float = Field(gt=0, description="Intrinsic height")
    weight: float = Field(ge=0, description="Weight of a single instance")
    quantity: int = Field(default=1, ge=0, description="Number of identical instances")
    stackable: bool = Field(default=True, description="Other items may rest on top")
    max_stack_weight: float = Field(
        default=0.0,
        ge=0,
        description="Weight ceiling tolerable on top of one instance",
    )
    fragile: bool = Field(default=False, description="Nothing may ever be placed above it")
    load_bearing: bool = Field(default=True, description="May support weight above it")
    rotation_allowed: list[RotationAxis] = Field(
        default_factory=list,
        description="Allowed rotation axes; empty means fixed orientation",
    )
    priority: int = Field(default=1, description="Lower values are packed earlier and lower")
    delivery_stop: int = Field(default=1, description="Route sequence number, 1 = first stop")

    @property
    def volume(self) -> float:
        return self.length * self.width * self.height


class Position(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


class Dimensions(BaseModel):
    """Oriented dimensions (L, W, H) of a placed box."""

    model_config = ConfigDict(frozen=True)

    length: float
    width: float
    height: float

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.length, self.width, self.height)

    @property
    def volume(self) -> float:
        return self.length * self.width * self.height


class PlacedItem(BaseModel):
    """One placed instance of an item."""

    model_config = ConfigDict(frozen=True)

    item_id: str = Field(description="Identifier of the placed item type")
    instance_index: int = Field(ge=0, description="Instance number, unique per item")
    position: Position = Field(description="Minimum corner of the placed box")
    # Store the ACTUAL placed dimensions after rotation
    dimensions: Dimensions = Field(description="Oriented dimensions used for this instance")
    weight: float = Field(ge=0, description="Weight copied at placement time")


class UnpackedItem(BaseModel):
    item_id: str
    quantity: int = Field(ge=1, description="Instances that could not be placed")


class PackingResult(BaseModel):
    """Standard result returned by the packing driver."""

    container_id: str
    volume_efficiency: float = 0.0
    weight_efficiency: float = 0.0
    total_weight: float = 0.0
    items_packed: int = 0
    items_unpacked: int = 0
    unpacked_items: list[UnpackedItem] = Field(default_factory=list)
    packed_items: list[PlacedItem] = Field(default_factory=list)
    center_of_gravity: Position = Field(default_factory=Position)
    warnings: list[str] = Field(default_factory=list)
    packed_volume: float = 0.0
    container_volume: float = 0.0
    computation_time_ms: float = 0.0


class DeliveryViolation(BaseModel):
    """An earlier stop whose cargo sits lower, on average, than the next stop's."""

    earlier_stop: int
    later_stop: int
    earlier_mean_z: float
    later_mean_z: float
    message: str


class StopSummary(BaseModel):
    stop: int
    item_count: int
    total_weight: float
    min_z: float
    max_z: float
    mean_z: float
    item_ids: list[str] = Field(default_factory=list)


class DeliveryOrderReport(BaseModel):
    valid: bool
    violations: list[DeliveryViolation] = Field(default_factory=list)
    summary: str
    stops: list[StopSummary] = Field(default_factory=list)
