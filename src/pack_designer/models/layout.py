"""
Layout Models
=============

Value objects produced by the layout engine:

- ElectricalConfig: one series/parallel split of the available cells
- CellPosition: one cell slot inside a layout
- Dimensions: an axis-aligned box size (mm)
- PhysicalLayout: one candidate arrangement of a configuration

All of them are frozen; every generation run builds fresh instances.
"""

from dataclasses import dataclass
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class ElectricalConfig:
    """
    One series × parallel configuration.

    Attributes:
    ----------
    series : int
        Series group count (S)

    parallel : int
        Cells per series group (P)

    code : str
        Configuration string, e.g. "4S6P"

    cells_used : int
        series × parallel

    cells_unused : int
        Available cells left out of the pack (not tracked as spares)

    nominal_voltage, max_voltage, min_voltage : float
        Pack voltages (V)

    capacity_ah : float
        Pack capacity (Ah)

    energy_wh : float
        Nominal pack energy (Wh)

    weight_kg : float
        Cell mass of the used cells (kg)
    """
    series: int
    parallel: int
    code: str
    cells_used: int
    cells_unused: int
    nominal_voltage: float
    max_voltage: float
    min_voltage: float
    capacity_ah: float
    energy_wh: float
    weight_kg: float

    def __post_init__(self):
        if self.series < 1 or self.parallel < 1:
            raise ValueError(f"Series and parallel must be >= 1, got {self.code}")
        if self.cells_unused < 0:
            raise ValueError(f"{self.code} uses more cells than available")

    @property
    def total_cells(self) -> int:
        """Cells available when the configuration was derived."""
        return self.cells_used + self.cells_unused

    @property
    def is_exact(self) -> bool:
        return self.cells_unused == 0

    def to_dict(self) -> Dict[str, Any]:
        """Export configuration data as dictionary."""
        return {
            "code": self.code,
            "series": self.series,
            "parallel": self.parallel,
            "cells_used": self.cells_used,
            "cells_unused": self.cells_unused,
            "nominal_voltage_v": self.nominal_voltage,
            "max_voltage_v": self.max_voltage,
            "min_voltage_v": self.min_voltage,
            "capacity_ah": self.capacity_ah,
            "energy_wh": self.energy_wh,
            "weight_kg": self.weight_kg,
        }


@dataclass(frozen=True)
class CellPosition:
    """
    One cell slot in a layout.

    x and y are the cell center relative to the pack center; z is the
    cell base measured from the bottom of the pack (mm).
    """
    index: int
    col: int
    row: int
    layer: int
    x: float
    y: float
    z: float
    series_position: int
    parallel_group: int
    polarity_up: bool


@dataclass(frozen=True)
class Dimensions:
    """Axis-aligned box size (mm)."""
    x: float
    y: float
    z: float

    def as_tuple(self) -> Tuple[float, float, float]:
        """Return as (x, y, z) tuple."""
        return (self.x, self.y, self.z)

    def grown(self, margin_mm: float) -> "Dimensions":
        """Return the box grown by margin_mm on every side."""
        return Dimensions(
            self.x + 2 * margin_mm,
            self.y + 2 * margin_mm,
            self.z + 2 * margin_mm,
        )

    def fits_within(self, limits: Tuple[float, float, float]) -> bool:
        return self.x <= limits[0] and self.y <= limits[1] and self.z <= limits[2]

    def key(self, decimals: int = 1) -> str:
        """Formatted key, used to compare boxes at a fixed precision."""
        return f"{self.x:.{decimals}f}-{self.y:.{decimals}f}-{self.z:.{decimals}f}"

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y, "z": self.z}


@dataclass(frozen=True)
class PhysicalLayout:
    """
    One candidate physical arrangement.

    Attributes:
    ----------
    configuration : ElectricalConfig
        Electrical configuration being laid out

    orientation : str
        Orientation tag (standing, laying_x, laying_y, flat, edge_y, edge_x)

    cols, rows_per_layer, layers : int
        Grid shape; cols × rows_per_layer × layers == cells_used

    cell_positions : tuple of CellPosition
        Every cell slot, in placement order

    honeycomb : bool
        Whether offset (hexagonal) packing was applied

    cell_pitch_mm : tuple of float
        Per-cell (x, y, z) footprint including the cell gap on X/Y

    pack_dimensions : Dimensions
        Cell envelope before wall clearance

    total_dimensions : Dimensions
        Envelope including wall clearance

    volume_cm3, footprint_cm2, cubeness : float
        Metrics of total_dimensions; cubeness is smallest / largest axis
    """
    configuration: ElectricalConfig
    orientation: str
    cols: int
    rows_per_layer: int
    layers: int
    cell_positions: Tuple[CellPosition, ...]
    honeycomb: bool
    cell_pitch_mm: Tuple[float, float, float]
    pack_dimensions: Dimensions
    total_dimensions: Dimensions
    volume_cm3: float
    footprint_cm2: float
    cubeness: float

    @property
    def code(self) -> str:
        return self.configuration.code

    @property
    def grid_shape(self) -> Tuple[int, int, int]:
        """(cols, rows_per_layer, layers)."""
        return (self.cols, self.rows_per_layer, self.layers)

    @property
    def longest_dimension(self) -> float:
        return max(self.total_dimensions.as_tuple())

    @property
    def packing(self) -> str:
        return "honeycomb" if self.honeycomb else "rectangular"

    def summary(self) -> str:
        """Formatted one-line summary."""
        dims = self.total_dimensions
        return (
            f"{self.code} {self.orientation} "
            f"{self.cols}×{self.rows_per_layer}×{self.layers} "
            f"({self.packing}): {dims.x:.1f} × {dims.y:.1f} × {dims.z:.1f} mm, "
            f"{self.volume_cm3:.0f} cm³"
        )
