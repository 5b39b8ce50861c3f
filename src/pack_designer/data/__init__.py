"""
Pack Designer Data Module
=========================

Contains the cell database and lookup functions.
"""

from .cell_database import (
    CELL_DATABASE,
    get_cell,
    find_cell,
    list_cells,
    list_cells_by_model_type,
    get_cell_options,
)

__all__ = [
    "CELL_DATABASE",
    "get_cell",
    "find_cell",
    "list_cells",
    "list_cells_by_model_type",
    "get_cell_options",
]
