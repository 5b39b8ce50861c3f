"""
Pack Designer
=============

Main PackDesigner class that chains the layout engine stages.
This is the primary user-facing API for pack layout generation:

    enumerate configurations → generate layouts → rank layouts
                                         (on selection) → pack spec

Each run works on its own inputs and returns fresh results, so several
runs may be in flight at once; discarding stale runs is up to the caller.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Tuple

from .calculations.electrical import closest_configuration, enumerate_configurations
from .calculations.geometry import generate_layouts
from .calculations.ranking import rank_layouts
from .config import ConfigInputs, InvalidInputError
from .data.cell_database import get_cell
from .export.pack_spec import BatteryPackSpec, generate_pack_spec
from .models.cell import CellSpec
from .models.layout import ElectricalConfig, PhysicalLayout

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DesignResult:
    """
    Output of one generation run.

    Attributes:
    ----------
    cell : CellSpec
        Cell used

    inputs : ConfigInputs
        Inputs of the run

    configurations : tuple of ElectricalConfig
        Every enumerated configuration, ascending series

    closest : ElectricalConfig or None
        Configuration nearest to the target voltage

    layouts : tuple of PhysicalLayout
        Ranked, deduplicated layouts of all configurations (may be empty)
    """
    cell: CellSpec
    inputs: ConfigInputs
    configurations: Tuple[ElectricalConfig, ...] = ()
    closest: Optional[ElectricalConfig] = None
    layouts: Tuple[PhysicalLayout, ...] = ()

    @property
    def best(self) -> Optional[PhysicalLayout]:
        """Top-ranked layout, or None when nothing fits."""
        return self.layouts[0] if self.layouts else None

    @property
    def has_layouts(self) -> bool:
        return bool(self.layouts)

    def layouts_for(self, code: str) -> List[PhysicalLayout]:
        """Ranked layouts of one configuration (e.g. '4S6P')."""
        return [layout for layout in self.layouts if layout.code == code]

    def pack_spec(
        self,
        index: int = 0,
        generated_at: Optional[datetime] = None
    ) -> BatteryPackSpec:
        """
        Pack specification of the layout at `index` in ranked order.

        Raises:
        ------
        InvalidInputError
            If there is no layout at that index
        """
        if not 0 <= index < len(self.layouts):
            raise InvalidInputError(
                f"No layout at index {index} ({len(self.layouts)} available)"
            )
        return generate_pack_spec(self.layouts[index], self.cell, self.inputs, generated_at)


class PackDesigner:
    """
    Battery pack layout designer.

    Example:
    -------
        from src.pack_designer import PackDesigner, ConfigInputs

        inputs = ConfigInputs(cell_type="18650", cell_count=24, target_voltage=48.0)
        result = PackDesigner.from_inputs(inputs).design()

        print(result.closest.code)        # 12S2P, nearest to 48V
        print(result.best.summary())      # top-ranked layout
        spec = result.pack_spec()         # manufacturing record
    """

    def __init__(self, cell: CellSpec, inputs: ConfigInputs):
        self.cell = cell
        self.inputs = inputs

    @classmethod
    def from_inputs(cls, inputs: ConfigInputs) -> "PackDesigner":
        """Create a designer for the cell named by inputs.cell_type."""
        return cls(get_cell(inputs.cell_type), inputs)

    def configurations(self) -> List[ElectricalConfig]:
        """Every valid configuration of the available cells."""
        return enumerate_configurations(self.cell, self.inputs)

    def layouts_for(self, configuration: ElectricalConfig) -> List[PhysicalLayout]:
        """Ranked layouts of a single configuration."""
        return rank_layouts(generate_layouts(configuration, self.cell, self.inputs), self.inputs)

    def design(self) -> DesignResult:
        """
        Run the full pipeline over every configuration.

        Returns:
        -------
        DesignResult
            Configurations, closest configuration and ranked layouts.
            An empty layout list means nothing fits the custom limits.
        """
        configurations = self.configurations()

        candidates = []
        for configuration in configurations:
            candidates.extend(generate_layouts(configuration, self.cell, self.inputs))

        layouts = rank_layouts(candidates, self.inputs)
        if not layouts:
            logger.info(
                "No layout fits for %d × %s (custom max dimensions: %s)",
                self.inputs.cell_count, self.inputs.cell_type,
                self.inputs.custom_max_dimensions,
            )

        return DesignResult(
            cell=self.cell,
            inputs=self.inputs,
            configurations=tuple(configurations),
            closest=closest_configuration(configurations, self.inputs.target_voltage),
            layouts=tuple(layouts),
        )


def design_pack(inputs: ConfigInputs) -> DesignResult:
    """Run a complete design for the given inputs."""
    return PackDesigner.from_inputs(inputs).design()
