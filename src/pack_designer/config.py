"""
Pack Designer Configuration
===========================

Contains configuration settings, packing constants, and default values
for battery pack layout generation.

All internal calculations use these units:
- Length: mm
- Area: cm² (footprint)
- Volume: cm³
- Voltage: V
- Capacity: Ah (cells are specified in mAh)
- Mass: kg (cells are specified in g)
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class InvalidInputError(ValueError):
    """Raised when generation inputs are malformed or reference unknown data."""


# =============================================================================
# Packing Constants
# =============================================================================

# Row pitch of hexagonal close packing relative to the cell pitch
HEX_PACKING_ROW_COMPRESSION = math.sin(math.radians(60.0))  # ≈ 0.866

# Odd rows shift by this fraction of the cell pitch in honeycomb packing
HEX_PACKING_ROW_OFFSET = 0.5

# Total dimensions are compared at this many decimals (mm) when deduplicating
DEDUP_DECIMALS = 1


# =============================================================================
# Electrical Estimates
# =============================================================================

# Conservative continuous discharge estimate for the exported spec (C)
MAX_DISCHARGE_C_RATE = 0.2


# =============================================================================
# Interconnect Recommendations
# =============================================================================

# Nickel strip (thickness x width, mm)
PARALLEL_STRIP_SIZE_MM = (0.15, 8.0)
SERIES_STRIP_SIZE_MM = (0.15, 10.0)


# =============================================================================
# Enclosure Defaults
# =============================================================================

DEFAULT_ENCLOSURE_WALL_MM = 2.0

# Mounting hole centers are inset this far from the outer corners (mm)
MOUNTING_HOLE_INSET_MM = 5.0
MOUNTING_HOLE_RADIUS_MM = 1.5
WIRE_EXIT_RADIUS_MM = 5.0


# =============================================================================
# Export Metadata
# =============================================================================

GENERATOR_NAME = "Battery Pack Designer"
SPEC_VERSION = "1.0"


# =============================================================================
# Input Defaults
# =============================================================================

DEFAULT_CELL_TYPE = "18650"
DEFAULT_CELL_COUNT = 24
DEFAULT_TARGET_VOLTAGE = 48.0

DEFAULT_CELL_GAP_MM = 2.0
DEFAULT_WALL_CLEARANCE_MM = 3.0
DEFAULT_NICKEL_STRIP_TOP_MM = 5.0
DEFAULT_NICKEL_STRIP_BOTTOM_MM = 5.0


class LayoutPriority(Enum):
    """What the ranking stage optimizes for."""
    MINIMIZE_Z = "MINIMIZE_Z"      # Lowest pack height first
    MINIMIZE_XY = "MINIMIZE_XY"    # Smallest footprint first
    BALANCED = "BALANCED"          # Most cube-like first
    CUSTOM = "CUSTOM"              # Smallest volume inside custom limits


class CellOrientation(Enum):
    """Which cell orientations the layout generator tries."""
    STANDING = "STANDING"
    LAYING = "LAYING"
    MIXED = "MIXED"


# camelCase keys used by the designer front end
_INPUT_KEY_MAP = {
    "batteryType": "cell_type",
    "cellType": "cell_type",
    "cellCount": "cell_count",
    "targetVoltage": "target_voltage",
    "layoutPriority": "layout_priority",
    "customMaxDimensions": "custom_max_dimensions",
    "cellOrientation": "cell_orientation",
    "useHoneycomb": "use_honeycomb",
    "cellGap": "cell_gap",
    "wallClearance": "wall_clearance",
    "nickelStripTop": "nickel_strip_top",
    "nickelStripBottom": "nickel_strip_bottom",
    "showOnlyExact": "show_only_exact",
}


# =============================================================================
# Configuration Dataclass
# =============================================================================

@dataclass(frozen=True)
class ConfigInputs:
    """
    Parameters for one layout generation run.

    Constructing an instance validates it; an invalid combination raises
    InvalidInputError listing every problem found. Instances are immutable,
    so a validated record stays valid.

    Attributes:
    ----------
    cell_type : str
        Key into the cell database (e.g. "18650", "POUCH_MEDIUM")

    cell_count : int
        Number of cells available (>= 1)

    target_voltage : float
        Desired nominal pack voltage (V)

    layout_priority : LayoutPriority
        Ranking criterion for candidate layouts

    custom_max_dimensions : tuple of float, optional
        (x, y, z) upper bound on total dimensions (mm). Candidates
        exceeding any axis are discarded.

    cell_orientation : CellOrientation
        STANDING, LAYING or MIXED

    use_honeycomb : bool
        Offset alternate rows (standing cylinders only)

    cell_gap : float
        Gap between adjacent cells (mm)

    wall_clearance : float
        Clearance between cells and enclosure wall on every side (mm)

    nickel_strip_top : float
        Z allowance for the top interconnect strips (mm)

    nickel_strip_bottom : float
        Z allowance for the bottom interconnect strips (mm)

    show_only_exact : bool
        Only keep configurations that use every cell
    """
    cell_type: str = DEFAULT_CELL_TYPE
    cell_count: int = DEFAULT_CELL_COUNT
    target_voltage: float = DEFAULT_TARGET_VOLTAGE
    layout_priority: LayoutPriority = LayoutPriority.MINIMIZE_Z
    custom_max_dimensions: Optional[Tuple[float, float, float]] = None
    cell_orientation: CellOrientation = CellOrientation.STANDING
    use_honeycomb: bool = False
    cell_gap: float = DEFAULT_CELL_GAP_MM
    wall_clearance: float = DEFAULT_WALL_CLEARANCE_MM
    nickel_strip_top: float = DEFAULT_NICKEL_STRIP_TOP_MM
    nickel_strip_bottom: float = DEFAULT_NICKEL_STRIP_BOTTOM_MM
    show_only_exact: bool = True

    def __post_init__(self):
        """Coerce enum values and reject invalid inputs."""
        errors = []

        try:
            object.__setattr__(
                self, "layout_priority", LayoutPriority(_enum_value(self.layout_priority))
            )
        except ValueError:
            errors.append(f"Unknown layout priority: {self.layout_priority}")

        try:
            object.__setattr__(
                self, "cell_orientation", CellOrientation(_enum_value(self.cell_orientation))
            )
        except ValueError:
            errors.append(f"Unknown cell orientation: {self.cell_orientation}")

        dims = self.custom_max_dimensions
        if isinstance(dims, dict):
            try:
                object.__setattr__(
                    self, "custom_max_dimensions", (dims["x"], dims["y"], dims["z"])
                )
            except KeyError:
                errors.append("Custom max dimensions need x, y and z")
        elif dims is not None:
            try:
                object.__setattr__(self, "custom_max_dimensions", tuple(dims))
            except TypeError:
                errors.append("Custom max dimensions need exactly three values (x, y, z)")

        if not errors:
            valid, message = self.validate()
            if not valid:
                errors.append(message)

        if errors:
            raise InvalidInputError("; ".join(errors))

    def validate(self) -> Tuple[bool, str]:
        """Validate configuration values."""
        errors = []

        if isinstance(self.cell_count, bool) or not isinstance(self.cell_count, int):
            errors.append(f"Cell count must be an integer, got {self.cell_count!r}")
        elif self.cell_count < 1:
            errors.append(f"Cell count must be at least 1, got {self.cell_count}")

        if not _is_finite_number(self.target_voltage) or self.target_voltage < 0:
            errors.append(f"Target voltage must be non-negative, got {self.target_voltage!r}")

        spacing = {
            "Cell gap": self.cell_gap,
            "Wall clearance": self.wall_clearance,
            "Top nickel strip": self.nickel_strip_top,
            "Bottom nickel strip": self.nickel_strip_bottom,
        }
        for label, value in spacing.items():
            if not _is_finite_number(value) or value < 0:
                errors.append(f"{label} cannot be negative, got {value!r}")

        if self.custom_max_dimensions is not None:
            if len(self.custom_max_dimensions) != 3:
                errors.append("Custom max dimensions need exactly three values (x, y, z)")
            elif not all(_is_finite_number(d) and d > 0 for d in self.custom_max_dimensions):
                errors.append(
                    f"Custom max dimensions must be positive, got {self.custom_max_dimensions}"
                )

        if errors:
            return False, "; ".join(errors)
        return True, ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ConfigInputs":
        """
        Build inputs from a dictionary using either snake_case field names
        or the camelCase keys of the designer front end.

        Unknown keys raise InvalidInputError.
        """
        kwargs = {}
        fields = set(cls.__dataclass_fields__)
        for key, value in data.items():
            name = _INPUT_KEY_MAP.get(key, key)
            if name not in fields:
                raise InvalidInputError(f"Unknown input field: {key}")
            kwargs[name] = value
        return cls(**kwargs)


def _enum_value(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def _is_finite_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)
