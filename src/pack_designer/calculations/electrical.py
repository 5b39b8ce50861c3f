"""
Electrical Configuration Calculations
=====================================

Enumerates the series/parallel splits of a cell count and derives the
pack-level electrical figures for each split.

Formulas:
- P = floor(N / S)
- V_pack = S × V_cell (nominal, max and min alike)
- C_pack = P × C_cell
- E_pack = V_nominal × C_pack
"""

import logging
from typing import List, Optional, Sequence

from ..config import ConfigInputs
from ..models.cell import CellSpec
from ..models.layout import ElectricalConfig

logger = logging.getLogger(__name__)


def configuration_code(series: int, parallel: int) -> str:
    """Configuration string (e.g., '4S6P')."""
    return f"{series}S{parallel}P"


def make_configuration(
    cell: CellSpec,
    series: int,
    parallel: int,
    cell_count: int
) -> ElectricalConfig:
    """
    Build an ElectricalConfig for a given split.

    Parameters:
    ----------
    cell : CellSpec
        Cell specification

    series : int
        Number of series groups

    parallel : int
        Number of cells per series group

    cell_count : int
        Cells available; the remainder is reported as unused

    Returns:
    -------
    ElectricalConfig
        Configuration with derived electrical metrics
    """
    cells_used = series * parallel
    nominal_voltage = series * cell.nominal_voltage
    capacity_ah = parallel * cell.typical_capacity_mah / 1000.0

    return ElectricalConfig(
        series=series,
        parallel=parallel,
        code=configuration_code(series, parallel),
        cells_used=cells_used,
        cells_unused=cell_count - cells_used,
        nominal_voltage=nominal_voltage,
        max_voltage=series * cell.max_voltage,
        min_voltage=series * cell.min_voltage,
        capacity_ah=capacity_ah,
        energy_wh=nominal_voltage * capacity_ah,
        weight_kg=cells_used * cell.weight_g / 1000.0,
    )


def enumerate_configurations(
    cell: CellSpec,
    inputs: ConfigInputs
) -> List[ElectricalConfig]:
    """
    Enumerate every series/parallel split of the available cells.

    For each series count S in 1..N the parallel count is floor(N / S).
    Splits leaving cells unused are dropped when inputs.show_only_exact is
    set. No voltage filtering happens here.

    Parameters:
    ----------
    cell : CellSpec
        Cell specification

    inputs : ConfigInputs
        Validated generation inputs

    Returns:
    -------
    List[ElectricalConfig]
        Configurations in ascending series order. Never empty: S = N,
        P = 1 always qualifies.
    """
    cell_count = inputs.cell_count
    configurations = []

    for series in range(1, cell_count + 1):
        parallel = cell_count // series
        if parallel < 1:
            continue

        cells_unused = cell_count - series * parallel
        if inputs.show_only_exact and cells_unused > 0:
            continue

        configurations.append(make_configuration(cell, series, parallel, cell_count))

    logger.debug(
        "Enumerated %d configurations for %d cells (exact only: %s)",
        len(configurations), cell_count, inputs.show_only_exact,
    )
    return configurations


def closest_configuration(
    configurations: Sequence[ElectricalConfig],
    target_voltage: float
) -> Optional[ElectricalConfig]:
    """
    Pick the configuration whose nominal voltage is nearest the target.

    The first configuration wins ties, so with ascending series order the
    lower voltage is preferred.

    Returns:
    -------
    ElectricalConfig or None
        None when no configurations are given
    """
    best = None
    best_error = None
    for config in configurations:
        error = abs(config.nominal_voltage - target_voltage)
        if best_error is None or error < best_error:
            best, best_error = config, error
    return best
