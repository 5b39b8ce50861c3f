"""
Cell Specification Model
========================

Defines the CellSpec dataclass that represents one physical cell type
with the electrical and dimensional data the layout engine needs.

Cell specs are reference data: they are looked up by key and never
mutated.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class ModelType(Enum):
    """Physical cell body shapes."""
    CYLINDER = "cylinder"   # 18650, 21700, AA, ...
    BOX = "box"             # Pouch, prismatic, 9V


@dataclass(frozen=True)
class CellSpec:
    """
    Specification for a battery cell type.

    Attributes:
    ----------
    name : str
        Display name (e.g., "18650 Lithium Ion")

    model_type : ModelType
        Body shape, decides which dimensions apply

    # Cylindrical cell dimensions
    diameter_mm : float | None
        Outer diameter (mm)

    length_mm : float | None
        Body length along the cell axis (mm). Box cells use it as the
        longest face edge.

    # Box cell dimensions
    width_mm : float | None
        Width (mm)

    thickness_mm : float | None
        Thickness (mm)

    # Electrical
    nominal_voltage : float
        Nominal voltage (V)

    max_voltage : float
        Full charge voltage (V)

    min_voltage : float
        Discharge cutoff voltage (V)

    typical_capacity_mah : float
        Typical capacity (mAh)

    weight_g : float
        Cell mass (g)
    """
    name: str
    model_type: ModelType
    nominal_voltage: float
    max_voltage: float
    min_voltage: float
    typical_capacity_mah: float
    weight_g: float

    length_mm: Optional[float] = None
    diameter_mm: Optional[float] = None
    width_mm: Optional[float] = None
    thickness_mm: Optional[float] = None

    def __post_init__(self):
        """Validate dimensions against the model type."""
        if self.model_type == ModelType.CYLINDER:
            required = {"diameter_mm": self.diameter_mm, "length_mm": self.length_mm}
        else:
            required = {
                "width_mm": self.width_mm,
                "length_mm": self.length_mm,
                "thickness_mm": self.thickness_mm,
            }

        missing = [key for key, value in required.items() if value is None]
        if missing:
            raise ValueError(
                f"{self.model_type.value} cell {self.name} requires {', '.join(missing)}"
            )
        if any(value <= 0 for value in required.values()):
            raise ValueError(f"Cell {self.name} dimensions must be positive")

        if not self.min_voltage <= self.nominal_voltage <= self.max_voltage:
            raise ValueError(
                f"Cell {self.name} voltages must satisfy min <= nominal <= max"
            )

    @property
    def is_cylindrical(self) -> bool:
        return self.model_type == ModelType.CYLINDER

    @property
    def capacity_ah(self) -> float:
        """Typical capacity (Ah)."""
        return self.typical_capacity_mah / 1000.0

    @property
    def energy_wh(self) -> float:
        """Nominal energy per cell (Wh)."""
        return self.capacity_ah * self.nominal_voltage

    @property
    def volume_cm3(self) -> float:
        """Cell body volume (cm³)."""
        if self.is_cylindrical:
            radius_cm = (self.diameter_mm / 2.0) / 10.0
            return math.pi * radius_cm ** 2 * (self.length_mm / 10.0)
        return (self.width_mm * self.length_mm * self.thickness_mm) / 1000.0

    @property
    def body_dims_mm(self) -> Tuple[float, float, float]:
        """Bounding box of one cell (mm) in its reference pose."""
        if self.is_cylindrical:
            return (self.diameter_mm, self.diameter_mm, self.length_mm)
        return (self.width_mm, self.length_mm, self.thickness_mm)

    def summary(self) -> str:
        """Return a formatted summary string."""
        if self.is_cylindrical:
            size = f"{self.diameter_mm}mm × {self.length_mm}mm"
        else:
            size = f"{self.width_mm} × {self.length_mm} × {self.thickness_mm}mm"
        return (
            f"{self.name} ({self.model_type.value})\n"
            f"  Size: {size}\n"
            f"  Voltage: {self.min_voltage}-{self.max_voltage}V "
            f"(nominal {self.nominal_voltage}V)\n"
            f"  Capacity: {self.typical_capacity_mah}mAh ({self.energy_wh:.1f}Wh)\n"
            f"  Mass: {self.weight_g}g"
        )
