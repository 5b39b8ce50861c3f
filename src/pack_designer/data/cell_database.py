"""
Cell Database
=============

Reference table of cell types available to the pack designer, keyed by
the identifiers the front end uses ("18650", "21700", "POUCH_MEDIUM", ...).

Values are typical figures for generic cells of each size, not a specific
manufacturer's datasheet.
"""

import logging
from typing import Dict, List, Optional, Tuple

from ..config import InvalidInputError
from ..models.cell import CellSpec, ModelType

logger = logging.getLogger(__name__)


# =============================================================================
# Cylindrical Cells
# =============================================================================

CYLINDRICAL_CELLS: Dict[str, CellSpec] = {
    "18650": CellSpec(
        name="18650 Lithium Ion",
        model_type=ModelType.CYLINDER,
        diameter_mm=18.6,
        length_mm=65.2,
        nominal_voltage=3.7,
        max_voltage=4.2,
        min_voltage=2.5,
        typical_capacity_mah=2600,
        weight_g=48,
    ),
    "21700": CellSpec(
        name="21700 Lithium Ion",
        model_type=ModelType.CYLINDER,
        diameter_mm=21.7,
        length_mm=70.2,
        nominal_voltage=3.7,
        max_voltage=4.2,
        min_voltage=2.5,
        typical_capacity_mah=4000,
        weight_g=68,
    ),
    "26650": CellSpec(
        name="26650 Lithium Ion",
        model_type=ModelType.CYLINDER,
        diameter_mm=26.5,
        length_mm=65.4,
        nominal_voltage=3.7,
        max_voltage=4.2,
        min_voltage=2.5,
        typical_capacity_mah=5000,
        weight_g=95,
    ),
    # LiFePO4 chemistry, lower nominal voltage
    "32650": CellSpec(
        name="32650 LiFePO4",
        model_type=ModelType.CYLINDER,
        diameter_mm=32.4,
        length_mm=67.7,
        nominal_voltage=3.2,
        max_voltage=3.65,
        min_voltage=2.0,
        typical_capacity_mah=6000,
        weight_g=145,
    ),
    "14500": CellSpec(
        name="14500 (AA Size) Lithium",
        model_type=ModelType.CYLINDER,
        diameter_mm=14.5,
        length_mm=50.5,
        nominal_voltage=3.7,
        max_voltage=4.2,
        min_voltage=2.5,
        typical_capacity_mah=800,
        weight_g=23,
    ),
    "18350": CellSpec(
        name="18350 Lithium Ion",
        model_type=ModelType.CYLINDER,
        diameter_mm=18.6,
        length_mm=35.0,
        nominal_voltage=3.7,
        max_voltage=4.2,
        min_voltage=2.5,
        typical_capacity_mah=900,
        weight_g=30,
    ),
    "AA_NIMH": CellSpec(
        name="AA NiMH Rechargeable",
        model_type=ModelType.CYLINDER,
        diameter_mm=14.5,
        length_mm=50.5,
        nominal_voltage=1.2,
        max_voltage=1.4,
        min_voltage=1.0,
        typical_capacity_mah=2000,
        weight_g=28,
    ),
    "AAA_NIMH": CellSpec(
        name="AAA NiMH Rechargeable",
        model_type=ModelType.CYLINDER,
        diameter_mm=10.5,
        length_mm=44.5,
        nominal_voltage=1.2,
        max_voltage=1.4,
        min_voltage=1.0,
        typical_capacity_mah=800,
        weight_g=12,
    ),
    "D_NIMH": CellSpec(
        name="D Cell NiMH",
        model_type=ModelType.CYLINDER,
        diameter_mm=34.2,
        length_mm=61.5,
        nominal_voltage=1.2,
        max_voltage=1.4,
        min_voltage=1.0,
        typical_capacity_mah=10000,
        weight_g=160,
    ),
}


# =============================================================================
# Box Cells (pouch, prismatic, 9V)
# =============================================================================

BOX_CELLS: Dict[str, CellSpec] = {
    "POUCH_SMALL": CellSpec(
        name="LiPo Pouch 103040",
        model_type=ModelType.BOX,
        width_mm=30,
        length_mm=40,
        thickness_mm=10,
        nominal_voltage=3.7,
        max_voltage=4.2,
        min_voltage=3.0,
        typical_capacity_mah=1200,
        weight_g=25,
    ),
    "POUCH_MEDIUM": CellSpec(
        name="LiPo Pouch 505068",
        model_type=ModelType.BOX,
        width_mm=50,
        length_mm=68,
        thickness_mm=5,
        nominal_voltage=3.7,
        max_voltage=4.2,
        min_voltage=3.0,
        typical_capacity_mah=2500,
        weight_g=45,
    ),
    "POUCH_LARGE": CellSpec(
        name="LiPo Pouch 7565121",
        model_type=ModelType.BOX,
        width_mm=65,
        length_mm=121,
        thickness_mm=7.5,
        nominal_voltage=3.7,
        max_voltage=4.2,
        min_voltage=3.0,
        typical_capacity_mah=5000,
        weight_g=95,
    ),
    "PRISMATIC_SMALL": CellSpec(
        name="Prismatic LiFePO4 10Ah",
        model_type=ModelType.BOX,
        width_mm=70,
        length_mm=130,
        thickness_mm=27,
        nominal_voltage=3.2,
        max_voltage=3.65,
        min_voltage=2.5,
        typical_capacity_mah=10000,
        weight_g=330,
    ),
    "PRISMATIC_LARGE": CellSpec(
        name="Prismatic LiFePO4 100Ah",
        model_type=ModelType.BOX,
        width_mm=130,
        length_mm=200,
        thickness_mm=50,
        nominal_voltage=3.2,
        max_voltage=3.65,
        min_voltage=2.5,
        typical_capacity_mah=100000,
        weight_g=3200,
    ),
    "9V_NIMH": CellSpec(
        name="9V NiMH Rechargeable",
        model_type=ModelType.BOX,
        width_mm=26.5,
        length_mm=48.5,
        thickness_mm=17.5,
        nominal_voltage=8.4,
        max_voltage=9.6,
        min_voltage=7.2,
        typical_capacity_mah=200,
        weight_g=45,
    ),
}


# =============================================================================
# Combined Database
# =============================================================================

CELL_DATABASE: Dict[str, CellSpec] = {
    **CYLINDRICAL_CELLS,
    **BOX_CELLS,
}


# =============================================================================
# Database Access Functions
# =============================================================================

def get_cell(key: str) -> CellSpec:
    """
    Get a cell by key.

    Parameters:
    ----------
    key : str
        Cell key (e.g., "18650", "POUCH_MEDIUM")

    Returns:
    -------
    CellSpec
        Cell specification

    Raises:
    ------
    InvalidInputError
        If the key is not in the database
    """
    cell = CELL_DATABASE.get(key)
    if cell is None:
        logger.debug("Cell lookup failed for %r", key)
        raise InvalidInputError(
            f"Unknown cell type: {key!r} (available: {', '.join(CELL_DATABASE)})"
        )
    return cell


def find_cell(key: str) -> Optional[CellSpec]:
    """Get a cell by key, or None when it is not in the database."""
    return CELL_DATABASE.get(key)


def list_cells() -> List[str]:
    """List all cell keys in database order."""
    return list(CELL_DATABASE.keys())


def list_cells_by_model_type(model_type: ModelType) -> List[str]:
    """List cell keys with the given body shape."""
    return [
        key for key, cell in CELL_DATABASE.items()
        if cell.model_type == model_type
    ]


def get_cell_options() -> List[Tuple[str, str]]:
    """(key, display name) pairs for a cell selection widget."""
    return [(key, cell.name) for key, cell in CELL_DATABASE.items()]
