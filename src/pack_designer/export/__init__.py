"""
Pack Designer Export Module
===========================

Pack specification record, wiring schematic and file exporters.
"""

from .pack_spec import BatteryPackSpec, generate_pack_spec, generate_wiring_notes
from .wiring import series_groups, connection_counts, generate_wiring_diagram_svg
from .exporters import (
    default_spec_filename,
    export_pack_spec_json,
    cell_positions_to_dataframe,
    cell_positions_to_csv,
    generate_manufacturing_readme,
    write_manufacturing_package,
)

__all__ = [
    "BatteryPackSpec",
    "generate_pack_spec",
    "generate_wiring_notes",
    "series_groups",
    "connection_counts",
    "generate_wiring_diagram_svg",
    "default_spec_filename",
    "export_pack_spec_json",
    "cell_positions_to_dataframe",
    "cell_positions_to_csv",
    "generate_manufacturing_readme",
    "write_manufacturing_package",
]
