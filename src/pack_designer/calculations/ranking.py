"""
Layout Ranking
==============

Orders candidate layouts by the selected priority and removes candidates
whose manufacturable envelope duplicates a better-ranked one.

Sort keys:
- MINIMIZE_Z:  (total Z, volume)
- MINIMIZE_XY: (footprint, volume)
- BALANCED:    (1 - cubeness, volume)
- CUSTOM:      (volume)   custom limits were applied during generation
"""

import logging
from typing import Callable, Dict, Iterable, List, Tuple

import pandas as pd

from ..config import DEDUP_DECIMALS, ConfigInputs, InvalidInputError, LayoutPriority
from ..models.layout import PhysicalLayout

logger = logging.getLogger(__name__)

SortKey = Callable[[PhysicalLayout], Tuple[float, ...]]

PRIORITY_SORT_KEYS: Dict[LayoutPriority, SortKey] = {
    LayoutPriority.MINIMIZE_Z: lambda l: (l.total_dimensions.z, l.volume_cm3),
    LayoutPriority.MINIMIZE_XY: lambda l: (l.footprint_cm2, l.volume_cm3),
    LayoutPriority.BALANCED: lambda l: (1.0 - l.cubeness, l.volume_cm3),
    LayoutPriority.CUSTOM: lambda l: (l.volume_cm3,),
}

# Display orderings of the results table
DISPLAY_SORT_KEYS: Dict[str, SortKey] = {
    "volume": lambda l: (l.volume_cm3,),
    "footprint": lambda l: (l.footprint_cm2,),
    "height": lambda l: (l.total_dimensions.z,),
    "longest": lambda l: (l.longest_dimension,),
}


def remove_duplicate_dimensions(
    layouts: Iterable[PhysicalLayout],
    decimals: int = DEDUP_DECIMALS
) -> List[PhysicalLayout]:
    """
    Drop layouts whose total dimensions repeat an earlier layout's.

    Dimensions are compared after formatting each axis to `decimals`
    places; the first occurrence is kept.
    """
    seen = set()
    unique = []
    for layout in layouts:
        key = layout.total_dimensions.key(decimals)
        if key in seen:
            continue
        seen.add(key)
        unique.append(layout)
    return unique


def rank_layouts(
    layouts: Iterable[PhysicalLayout],
    inputs: ConfigInputs
) -> List[PhysicalLayout]:
    """
    Rank layouts by inputs.layout_priority and deduplicate them.

    The input is not modified. The sort is stable, so equal keys keep
    their generation order and ranking a ranked list changes nothing.

    Parameters:
    ----------
    layouts : iterable of PhysicalLayout
        Candidates from any number of configurations

    inputs : ConfigInputs
        Validated inputs (only layout_priority is used)

    Returns:
    -------
    List[PhysicalLayout]
        Best-first, with no two entries sharing total dimensions
    """
    candidates = list(layouts)
    ranked = sorted(candidates, key=PRIORITY_SORT_KEYS[inputs.layout_priority])
    unique = remove_duplicate_dimensions(ranked)

    logger.debug(
        "Ranked %d layouts by %s, %d after removing duplicates",
        len(candidates), inputs.layout_priority.value, len(unique),
    )
    return unique


def sort_layouts(layouts: Iterable[PhysicalLayout], by: str = "volume") -> List[PhysicalLayout]:
    """
    Re-sort layouts for display.

    Parameters:
    ----------
    layouts : iterable of PhysicalLayout
        Usually the output of rank_layouts

    by : str
        One of: volume, footprint, height, longest

    Returns:
    -------
    List[PhysicalLayout]
        New list, ascending by the chosen metric
    """
    try:
        key = DISPLAY_SORT_KEYS[by]
    except KeyError:
        raise InvalidInputError(
            f"Unknown sort key: {by!r} (use one of {', '.join(DISPLAY_SORT_KEYS)})"
        ) from None
    return sorted(layouts, key=key)


def layouts_to_dataframe(layouts: Iterable[PhysicalLayout]) -> pd.DataFrame:
    """
    Tabulate layouts, one row per layout in the given order.

    Columns: rank, code, series, parallel, cells_used, orientation, packing,
    cols, rows_per_layer, layers, x_mm, y_mm, z_mm, volume_cm3,
    footprint_cm2, cubeness, nominal_voltage_v, capacity_ah, energy_wh,
    weight_kg.
    """
    rows = []
    for rank, layout in enumerate(layouts, start=1):
        config = layout.configuration
        dims = layout.total_dimensions
        rows.append({
            "rank": rank,
            "code": config.code,
            "series": config.series,
            "parallel": config.parallel,
            "cells_used": config.cells_used,
            "orientation": layout.orientation,
            "packing": layout.packing,
            "cols": layout.cols,
            "rows_per_layer": layout.rows_per_layer,
            "layers": layout.layers,
            "x_mm": dims.x,
            "y_mm": dims.y,
            "z_mm": dims.z,
            "volume_cm3": layout.volume_cm3,
            "footprint_cm2": layout.footprint_cm2,
            "cubeness": layout.cubeness,
            "nominal_voltage_v": config.nominal_voltage,
            "capacity_ah": config.capacity_ah,
            "energy_wh": config.energy_wh,
            "weight_kg": config.weight_kg,
        })

    columns = [
        "rank", "code", "series", "parallel", "cells_used", "orientation",
        "packing", "cols", "rows_per_layer", "layers", "x_mm", "y_mm", "z_mm",
        "volume_cm3", "footprint_cm2", "cubeness", "nominal_voltage_v",
        "capacity_ah", "energy_wh", "weight_kg",
    ]
    return pd.DataFrame(rows, columns=columns)
