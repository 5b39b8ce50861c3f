"""
Pack Exporters
==============

File output for a selected layout:
- JSON pack specification
- CSV cell position table
- Manufacturing README
- Manufacturing package (zip of spec, wiring diagram and README)

Mesh formats (STL/OBJ/3MF) are produced by the CAD front end from the
cell position data and are not handled here.
"""

import json
import logging
import zipfile
from datetime import date
from pathlib import Path
from typing import Optional, Union

import pandas as pd

from ..config import ConfigInputs, PARALLEL_STRIP_SIZE_MM, SERIES_STRIP_SIZE_MM
from ..models.cell import CellSpec
from ..models.layout import PhysicalLayout
from .pack_spec import BatteryPackSpec, generate_pack_spec
from .wiring import generate_wiring_diagram_svg

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def default_spec_filename(code: str, on: Optional[date] = None) -> str:
    """File name for an exported spec, e.g. battery-pack-4S6P-2024-05-01.json."""
    if on is None:
        on = date.today()
    return f"battery-pack-{code}-{on.isoformat()}.json"


def export_pack_spec_json(spec: BatteryPackSpec, filepath: PathLike) -> Path:
    """
    Write a pack specification to a JSON file.

    Parameters:
    ----------
    spec : BatteryPackSpec
        Specification to write

    filepath : str or Path
        Destination file

    Returns:
    -------
    Path
        The written file
    """
    path = Path(filepath)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(spec.to_dict(), f, indent=2)
    logger.info("Wrote pack specification %s to %s", spec.configuration.code, path)
    return path


def cell_positions_to_dataframe(layout: PhysicalLayout) -> pd.DataFrame:
    """Cell position table of a layout, one row per cell."""
    return pd.DataFrame(
        [
            {
                "index": pos.index,
                "col": pos.col,
                "row": pos.row,
                "layer": pos.layer,
                "x_mm": pos.x,
                "y_mm": pos.y,
                "z_mm": pos.z,
                "series_group": pos.series_position,
                "parallel_group": pos.parallel_group,
                "polarity_up": pos.polarity_up,
            }
            for pos in layout.cell_positions
        ],
        columns=[
            "index", "col", "row", "layer", "x_mm", "y_mm", "z_mm",
            "series_group", "parallel_group", "polarity_up",
        ],
    )


def cell_positions_to_csv(layout: PhysicalLayout, filepath: PathLike) -> Path:
    """Write the cell position table of a layout to CSV."""
    path = Path(filepath)
    cell_positions_to_dataframe(layout).to_csv(path, index=False)
    logger.info("Wrote %d cell positions to %s", len(layout.cell_positions), path)
    return path


def generate_manufacturing_readme(
    layout: PhysicalLayout,
    cell: CellSpec,
    inputs: ConfigInputs
) -> str:
    """Plain-text assembly instructions for a layout."""
    config = layout.configuration
    dims = layout.total_dimensions
    code = config.code

    if cell.is_cylindrical:
        cell_size = f"{cell.diameter_mm}mm diameter × {cell.length_mm}mm length"
    else:
        cell_size = f"{cell.width_mm}mm × {cell.length_mm}mm × {cell.thickness_mm}mm"

    par_t, par_w = PARALLEL_STRIP_SIZE_MM
    ser_t, ser_w = SERIES_STRIP_SIZE_MM

    lines = [
        "BATTERY PACK MANUFACTURING INSTRUCTIONS",
        "=" * 40,
        "",
        f"Configuration: {code}",
        "",
        "CELL SPECIFICATIONS",
        "-" * 19,
        f"Type: {cell.name}",
        f"Dimensions: {cell_size}",
        f"Nominal Voltage: {cell.nominal_voltage}V",
        f"Capacity: {cell.typical_capacity_mah:g}mAh",
        f"Weight: {cell.weight_g:g}g",
        "",
        "PACK CONFIGURATION",
        "-" * 18,
        f"Series: {config.series} groups",
        f"Parallel: {config.parallel} cells per group",
        f"Total Cells: {config.cells_used}",
        f"Nominal Voltage: {config.nominal_voltage:.1f}V",
        f"Capacity: {config.capacity_ah:.2f}Ah",
        f"Energy: {config.energy_wh:.1f}Wh",
        f"Total Weight: {config.weight_kg * 1000:.0f}g",
        "",
        "PHYSICAL LAYOUT",
        "-" * 15,
        f"Dimensions: {dims.x:.1f} × {dims.y:.1f} × {dims.z:.1f} mm",
        f"Volume: {layout.volume_cm3:.1f} cm³",
        f"Layout: {layout.cols} × {layout.rows_per_layer} × {layout.layers}",
        f"Orientation: {layout.orientation}",
        f"Packing: {layout.packing.capitalize()}",
        "",
        "SPACING",
        "-" * 7,
        f"Cell Gap: {inputs.cell_gap}mm",
        f"Wall Clearance: {inputs.wall_clearance}mm",
        f"Nickel Strip Top: {inputs.nickel_strip_top}mm",
        f"Nickel Strip Bottom: {inputs.nickel_strip_bottom}mm",
        "",
        "ASSEMBLY INSTRUCTIONS",
        "-" * 21,
        "1. Arrange cells according to the layout specifications",
        f"2. Connect parallel groups with nickel strips ({par_t}mm × {par_w:g}mm recommended)",
        f"3. Connect series groups with nickel strips ({ser_t}mm × {ser_w:g}mm recommended)",
        "4. Apply spot welds at all connection points",
        "5. Test electrical continuity before enclosure",
        "6. Install BMS if required",
        "7. Place in enclosure with proper ventilation",
        "",
        "SAFETY NOTES",
        "-" * 12,
        "- Always wear appropriate PPE when working with lithium batteries",
        "- Work in a well-ventilated area",
        "- Have fire suppression equipment available",
        "- Test all connections before final assembly",
        "- Verify voltage and polarity before connecting load",
        "",
        "FILES INCLUDED",
        "-" * 14,
        f"- specs-{code}.json: Complete technical specifications",
        f"- wiring-{code}.svg: Wiring diagram",
        f"- cells-{code}.csv: Cell position table",
        "",
    ]
    return "\n".join(lines)


def write_manufacturing_package(
    filepath: PathLike,
    layout: PhysicalLayout,
    cell: CellSpec,
    inputs: ConfigInputs,
    spec: Optional[BatteryPackSpec] = None
) -> Path:
    """
    Write a zip with the pack spec, wiring diagram, cell table and README.

    Parameters:
    ----------
    filepath : str or Path
        Destination zip file

    layout : PhysicalLayout
        Selected layout

    cell : CellSpec
        Cell specification

    inputs : ConfigInputs
        Inputs of the generation run

    spec : BatteryPackSpec, optional
        Pre-built specification; generated when omitted

    Returns:
    -------
    Path
        The written archive
    """
    if spec is None:
        spec = generate_pack_spec(layout, cell, inputs)

    code = layout.configuration.code
    path = Path(filepath)
    with zipfile.ZipFile(path, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        archive.writestr(f"specs-{code}.json", json.dumps(spec.to_dict(), indent=2))
        archive.writestr(f"wiring-{code}.svg", generate_wiring_diagram_svg(layout))
        archive.writestr(
            f"cells-{code}.csv",
            cell_positions_to_dataframe(layout).to_csv(index=False),
        )
        archive.writestr("README.txt", generate_manufacturing_readme(layout, cell, inputs))

    logger.info("Wrote manufacturing package for %s to %s", code, path)
    return path
