"""
Pack Specification
==================

Converts a selected layout into a manufacturing record: configuration,
electrical and physical summaries, spacing, the per-cell position table
and wiring notes.

generate_pack_spec is a pure transformation; writing the record to disk
lives in exporters.py.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from ..config import (
    ConfigInputs,
    GENERATOR_NAME,
    MAX_DISCHARGE_C_RATE,
    PARALLEL_STRIP_SIZE_MM,
    SERIES_STRIP_SIZE_MM,
    SPEC_VERSION,
)
from ..models.cell import CellSpec
from ..models.layout import CellPosition, Dimensions, ElectricalConfig, PhysicalLayout


@dataclass(frozen=True)
class BatteryPackSpec:
    """
    Manufacturing record for one pack layout.

    Attributes:
    ----------
    generated_at : datetime
        Creation timestamp (UTC)

    cell_type : str
        Cell database key

    cell : CellSpec
        Cell specification

    configuration : ElectricalConfig
        Chosen electrical configuration

    total_cells : int
        Cells available when the pack was designed

    max_discharge_a : float
        Estimated continuous discharge current (capacity × 0.2C)

    orientation, packing : str
        Layout orientation tag and "honeycomb" / "rectangular"

    columns, rows, layers : int
        Grid shape; rows counts every row over all layers

    pack_dimensions, total_dimensions : Dimensions
        Envelope without / with wall clearance (mm)

    volume_cm3 : float
        Volume of total_dimensions

    cell_gap_mm, wall_clearance_mm, nickel_strip_top_mm, nickel_strip_bottom_mm : float
        Spacing used to build the layout

    cell_positions : tuple of CellPosition
        Every cell slot

    wiring_notes : tuple of str
        Assembly notes
    """
    generated_at: datetime
    cell_type: str
    cell: CellSpec
    configuration: ElectricalConfig
    total_cells: int
    max_discharge_a: float
    orientation: str
    packing: str
    columns: int
    rows: int
    layers: int
    pack_dimensions: Dimensions
    total_dimensions: Dimensions
    volume_cm3: float
    cell_gap_mm: float
    wall_clearance_mm: float
    nickel_strip_top_mm: float
    nickel_strip_bottom_mm: float
    cell_positions: Tuple[CellPosition, ...]
    wiring_notes: Tuple[str, ...]
    generator: str = GENERATOR_NAME
    version: str = SPEC_VERSION

    def to_dict(self) -> Dict[str, Any]:
        """Export as the JSON document layout (camelCase keys)."""
        config = self.configuration
        return {
            "packSpecification": {
                "generatedDate": self.generated_at.isoformat(),
                "generator": self.generator,
                "version": self.version,
            },
            "cellType": _cell_to_dict(self.cell_type, self.cell),
            "configuration": {
                "code": config.code,
                "seriesCount": config.series,
                "parallelCount": config.parallel,
                "totalCells": self.total_cells,
                "cellsUsed": config.cells_used,
                "cellsUnused": config.cells_unused,
            },
            "electrical": {
                "nominalVoltageV": config.nominal_voltage,
                "maxVoltageV": config.max_voltage,
                "minVoltageV": config.min_voltage,
                "capacityAh": config.capacity_ah,
                "energyWh": config.energy_wh,
                "maxDischargeA": self.max_discharge_a,
            },
            "physical": {
                "totalWeightKg": config.weight_kg,
                "orientation": self.orientation,
                "packing": self.packing,
                "layout": {
                    "columns": self.columns,
                    "rows": self.rows,
                    "layers": self.layers,
                },
                "packDimensionsMm": self.pack_dimensions.to_dict(),
                "withClearanceMm": self.total_dimensions.to_dict(),
                "volumeCm3": self.volume_cm3,
            },
            "spacing": {
                "cellGapMm": self.cell_gap_mm,
                "wallClearanceMm": self.wall_clearance_mm,
                "nickelStripTopMm": self.nickel_strip_top_mm,
                "nickelStripBottomMm": self.nickel_strip_bottom_mm,
            },
            "cellPositions": [
                {
                    "index": pos.index,
                    "xMm": pos.x,
                    "yMm": pos.y,
                    "zMm": pos.z,
                    "seriesGroup": pos.series_position,
                    "parallelGroup": pos.parallel_group,
                    "polarityUp": pos.polarity_up,
                }
                for pos in self.cell_positions
            ],
            "wiringNotes": list(self.wiring_notes),
        }


def _cell_to_dict(key: str, cell: CellSpec) -> Dict[str, Any]:
    data = {
        "key": key,
        "name": cell.name,
        "modelType": cell.model_type.value,
        "nominalVoltage": cell.nominal_voltage,
        "maxVoltage": cell.max_voltage,
        "minVoltage": cell.min_voltage,
        "typicalCapacityMah": cell.typical_capacity_mah,
        "weightG": cell.weight_g,
        "lengthMm": cell.length_mm,
    }
    if cell.is_cylindrical:
        data["diameterMm"] = cell.diameter_mm
    else:
        data["widthMm"] = cell.width_mm
        data["thicknessMm"] = cell.thickness_mm
    return data


def generate_wiring_notes(configuration: ElectricalConfig) -> List[str]:
    """Assembly notes for a configuration (template text, not simulated)."""
    par_t, par_w = PARALLEL_STRIP_SIZE_MM
    ser_t, ser_w = SERIES_STRIP_SIZE_MM
    return [
        f"Each parallel group consists of {configuration.parallel} cells",
        "Series connections alternate polarity",
        f"Recommend {par_t}mm x {par_w:g}mm nickel strip for parallel connections",
        f"Recommend {ser_t}mm x {ser_w:g}mm nickel strip for series connections",
        f"Total series connections: {configuration.series - 1}",
        f"Total parallel connections: {configuration.parallel * configuration.series}",
    ]


def generate_pack_spec(
    layout: PhysicalLayout,
    cell: CellSpec,
    inputs: ConfigInputs,
    generated_at: Optional[datetime] = None
) -> BatteryPackSpec:
    """
    Build the manufacturing record for a layout.

    Parameters:
    ----------
    layout : PhysicalLayout
        Selected layout

    cell : CellSpec
        Cell the layout was generated for

    inputs : ConfigInputs
        Inputs of the generation run (spacing and cell count are echoed)

    generated_at : datetime, optional
        Timestamp to record; defaults to now (UTC)

    Returns:
    -------
    BatteryPackSpec
        Immutable pack record
    """
    if generated_at is None:
        generated_at = datetime.now(timezone.utc)

    config = layout.configuration
    return BatteryPackSpec(
        generated_at=generated_at,
        cell_type=inputs.cell_type,
        cell=cell,
        configuration=config,
        total_cells=inputs.cell_count,
        max_discharge_a=config.capacity_ah * MAX_DISCHARGE_C_RATE,
        orientation=layout.orientation,
        packing=layout.packing,
        columns=layout.cols,
        rows=layout.rows_per_layer * layout.layers,
        layers=layout.layers,
        pack_dimensions=layout.pack_dimensions,
        total_dimensions=layout.total_dimensions,
        volume_cm3=layout.volume_cm3,
        cell_gap_mm=inputs.cell_gap,
        wall_clearance_mm=inputs.wall_clearance,
        nickel_strip_top_mm=inputs.nickel_strip_top,
        nickel_strip_bottom_mm=inputs.nickel_strip_bottom,
        cell_positions=layout.cell_positions,
        wiring_notes=tuple(generate_wiring_notes(config)),
    )
