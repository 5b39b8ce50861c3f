"""
Pack Designer Module
====================

Battery pack configuration and layout generator.
Given a cell type and cell count, enumerates the series/parallel
configurations, lays each one out as every feasible 3D grid, ranks the
candidates and exports the chosen one as a manufacturing record.

Features:
---------
- Cell table of common cylindrical and box cells
- Series/parallel enumeration with electrical figures
- Grid layouts for standing/laying cylinders and flat/edge box cells
- Optional honeycomb packing for standing cylinders
- Ranking by height, footprint, cube-likeness or volume
- JSON pack specification, wiring schematic and manufacturing package

Usage:
------
    from src.pack_designer import ConfigInputs, design_pack

    inputs = ConfigInputs(cell_type="21700", cell_count=30,
                          target_voltage=36.0, layout_priority="MINIMIZE_XY")
    result = design_pack(inputs)

    for layout in result.layouts[:5]:
        print(layout.summary())

    spec = result.pack_spec()          # top-ranked layout
    print(spec.to_dict()["electrical"])
"""

from .config import (
    ConfigInputs,
    InvalidInputError,
    LayoutPriority,
    CellOrientation,
    HEX_PACKING_ROW_COMPRESSION,
)
from .models.cell import CellSpec, ModelType
from .models.layout import ElectricalConfig, CellPosition, Dimensions, PhysicalLayout
from .data.cell_database import CELL_DATABASE, get_cell, list_cells, list_cells_by_model_type
from .calculations.electrical import enumerate_configurations, closest_configuration
from .calculations.geometry import generate_layouts, enclosure_outline
from .calculations.ranking import rank_layouts, sort_layouts, layouts_to_dataframe
from .export.pack_spec import BatteryPackSpec, generate_pack_spec
from .designer import PackDesigner, DesignResult, design_pack

__all__ = [
    # Inputs
    "ConfigInputs",
    "InvalidInputError",
    "LayoutPriority",
    "CellOrientation",
    "HEX_PACKING_ROW_COMPRESSION",
    # Models
    "CellSpec",
    "ModelType",
    "ElectricalConfig",
    "CellPosition",
    "Dimensions",
    "PhysicalLayout",
    "BatteryPackSpec",
    # Database access
    "CELL_DATABASE",
    "get_cell",
    "list_cells",
    "list_cells_by_model_type",
    # Engine stages
    "enumerate_configurations",
    "closest_configuration",
    "generate_layouts",
    "enclosure_outline",
    "rank_layouts",
    "sort_layouts",
    "layouts_to_dataframe",
    "generate_pack_spec",
    # Orchestration
    "PackDesigner",
    "DesignResult",
    "design_pack",
]
