"""
Pack Designer Models
====================

Value objects shared by the layout engine stages.
"""

from .cell import CellSpec, ModelType
from .layout import ElectricalConfig, CellPosition, Dimensions, PhysicalLayout

__all__ = [
    "CellSpec",
    "ModelType",
    "ElectricalConfig",
    "CellPosition",
    "Dimensions",
    "PhysicalLayout",
]
