"""
Pack Designer Calculations Module
=================================

Pure functions for the layout engine stages:
enumerate configurations → generate layouts → rank layouts.
"""

from .electrical import (
    configuration_code,
    make_configuration,
    enumerate_configurations,
    closest_configuration,
)

from .geometry import (
    orientation_footprints,
    grid_factorizations,
    calculate_pack_dimensions,
    calculate_cell_positions,
    generate_grid_layouts,
    generate_layouts,
    enclosure_outline,
    EnclosureOutline,
)

from .ranking import (
    rank_layouts,
    remove_duplicate_dimensions,
    sort_layouts,
    layouts_to_dataframe,
)

__all__ = [
    # Electrical
    "configuration_code",
    "make_configuration",
    "enumerate_configurations",
    "closest_configuration",
    # Geometry
    "orientation_footprints",
    "grid_factorizations",
    "calculate_pack_dimensions",
    "calculate_cell_positions",
    "generate_grid_layouts",
    "generate_layouts",
    "enclosure_outline",
    "EnclosureOutline",
    # Ranking
    "rank_layouts",
    "remove_duplicate_dimensions",
    "sort_layouts",
    "layouts_to_dataframe",
]
