"""
Geometry Calculations
=====================

Physical layout generation for battery packs:
- Orientation footprints (per-cell pitch on each axis)
- Grid factorizations (cols × rows per layer × layers)
- Bounding box dimensions, with optional honeycomb packing
- Per-cell positions and polarity
- Enclosure outline for a chosen layout

Every feasible grid is materialized; ranking happens downstream.
"""

import logging
from dataclasses import dataclass
from typing import Iterator, List, Tuple

import numpy as np

from ..config import (
    CellOrientation,
    ConfigInputs,
    DEFAULT_ENCLOSURE_WALL_MM,
    HEX_PACKING_ROW_COMPRESSION,
    HEX_PACKING_ROW_OFFSET,
    MOUNTING_HOLE_INSET_MM,
    MOUNTING_HOLE_RADIUS_MM,
    WIRE_EXIT_RADIUS_MM,
)
from ..models.cell import CellSpec
from ..models.layout import CellPosition, Dimensions, ElectricalConfig, PhysicalLayout

logger = logging.getLogger(__name__)

# (orientation tag, pitch x, pitch y, pitch z) in mm
Footprint = Tuple[str, float, float, float]

# Orientations eligible for honeycomb packing
HONEYCOMB_ORIENTATIONS = frozenset({"standing"})


# =============================================================================
# Orientation Footprints
# =============================================================================

def orientation_footprints(cell: CellSpec, inputs: ConfigInputs) -> List[Footprint]:
    """
    Per-cell footprints for every orientation the inputs allow.

    The cell gap is added on X and Y only; Z allowances come from the
    nickel strip settings.

    Cylinders:
        standing  - axis along Z
        laying_x  - axis along X
        laying_y  - axis along Y

    Box cells (width W, length L, thickness T):
        flat      - W × L face down, T tall        (LAYING)
        edge_y    - T along Y, L tall              (STANDING)
        edge_x    - T along X, W tall              (STANDING)

    MIXED tries every orientation of the cell's shape.
    """
    gap = inputs.cell_gap
    orientation = inputs.cell_orientation
    standing = orientation in (CellOrientation.STANDING, CellOrientation.MIXED)
    laying = orientation in (CellOrientation.LAYING, CellOrientation.MIXED)
    footprints = []

    if cell.is_cylindrical:
        d, length = cell.diameter_mm, cell.length_mm
        if standing:
            footprints.append(("standing", d + gap, d + gap, length))
        if laying:
            footprints.append(("laying_x", length + gap, d + gap, d))
            footprints.append(("laying_y", d + gap, length + gap, d))
    else:
        w, length, t = cell.width_mm, cell.length_mm, cell.thickness_mm
        if laying:
            footprints.append(("flat", w + gap, length + gap, t))
        if standing:
            footprints.append(("edge_y", w + gap, t + gap, length))
            footprints.append(("edge_x", t + gap, length + gap, w))

    return footprints


# =============================================================================
# Grid Factorization
# =============================================================================

def grid_factorizations(cells: int) -> Iterator[Tuple[int, int, int]]:
    """
    Yield every (cols, rows_per_layer, layers) with product == cells.

    Order: cols ascending, then layers ascending.
    """
    for cols in range(1, cells + 1):
        if cells % cols:
            continue
        rows = cells // cols
        for layers in range(1, rows + 1):
            if rows % layers:
                continue
            yield cols, rows // layers, layers


# =============================================================================
# Dimensioning
# =============================================================================

def calculate_pack_dimensions(
    cols: int,
    rows_per_layer: int,
    layers: int,
    pitch: Tuple[float, float, float],
    honeycomb: bool,
    nickel_strip_top: float,
    nickel_strip_bottom: float
) -> Dimensions:
    """
    Cell envelope of a grid before wall clearance.

    Rectangular:
        X = cols × pitch_x
        Y = rows × pitch_y

    Honeycomb (odd rows shifted by half a pitch, rows closer together):
        X = cols × pitch_x + pitch_x / 2    (only when there is an odd row)
        Y = pitch_y + (rows - 1) × pitch_y × sin(60°)

    Z = layers × pitch_z + top strip + bottom strip

    A single-row grid has nothing to offset, so it is dimensioned (and
    reported by generate_grid_layouts) as rectangular even when honeycomb
    packing was requested.
    """
    pitch_x, pitch_y, pitch_z = pitch

    if honeycomb and rows_per_layer > 1:
        pack_x = cols * pitch_x + pitch_x * HEX_PACKING_ROW_OFFSET
        pack_y = pitch_y + (rows_per_layer - 1) * pitch_y * HEX_PACKING_ROW_COMPRESSION
    else:
        pack_x = cols * pitch_x
        pack_y = rows_per_layer * pitch_y

    pack_z = layers * pitch_z + nickel_strip_top + nickel_strip_bottom
    return Dimensions(pack_x, pack_y, pack_z)


def calculate_cubeness(dimensions: Dimensions) -> float:
    """Smallest over largest dimension (1.0 = cube)."""
    dims = np.array(dimensions.as_tuple())
    return float(dims.min() / dims.max())


# =============================================================================
# Cell Placement
# =============================================================================

def calculate_cell_positions(
    configuration: ElectricalConfig,
    grid: Tuple[int, int, int],
    pitch: Tuple[float, float, float],
    pack_dimensions: Dimensions,
    honeycomb: bool,
    nickel_strip_bottom: float
) -> Tuple[CellPosition, ...]:
    """
    Place every cell of a grid.

    Cells are numbered layer by layer, row by row, column by column. The
    placement index decides the electrical role:
        series_position = index // P
        parallel_group  = index % P
        polarity_up     = series_position is even

    X/Y are cell centers relative to the pack center; Z is the cell base
    above the bottom nickel strip allowance.
    """
    cols, rows_per_layer, layers = grid
    pitch_x, pitch_y, pitch_z = pitch
    parallel = configuration.parallel

    layer, row, col = (
        axis.ravel()
        for axis in np.meshgrid(
            np.arange(layers), np.arange(rows_per_layer), np.arange(cols),
            indexing="ij",
        )
    )
    index = np.arange(col.size)

    row_pitch = pitch_y * HEX_PACKING_ROW_COMPRESSION if honeycomb else pitch_y
    x = col * pitch_x
    if honeycomb:
        x = x + (row % 2 == 1) * pitch_x * HEX_PACKING_ROW_OFFSET
    y = row * row_pitch
    z = layer * pitch_z + nickel_strip_bottom

    x = x - pack_dimensions.x / 2.0 + pitch_x / 2.0
    y = y - pack_dimensions.y / 2.0 + pitch_y / 2.0

    series_position = index // parallel
    parallel_group = index % parallel

    return tuple(
        CellPosition(
            index=int(index[i]),
            col=int(col[i]),
            row=int(row[i]),
            layer=int(layer[i]),
            x=float(x[i]),
            y=float(y[i]),
            z=float(z[i]),
            series_position=int(series_position[i]),
            parallel_group=int(parallel_group[i]),
            polarity_up=bool(series_position[i] % 2 == 0),
        )
        for i in range(index.size)
    )


# =============================================================================
# Layout Generation
# =============================================================================

def generate_grid_layouts(
    configuration: ElectricalConfig,
    footprint: Footprint,
    inputs: ConfigInputs
) -> List[PhysicalLayout]:
    """
    Generate every grid layout of a configuration for one orientation.

    Candidates whose total dimensions exceed inputs.custom_max_dimensions
    are discarded. May return an empty list.
    """
    orientation, pitch_x, pitch_y, pitch_z = footprint
    pitch = (pitch_x, pitch_y, pitch_z)
    honeycomb = inputs.use_honeycomb and orientation in HONEYCOMB_ORIENTATIONS
    layouts = []
    discarded = 0

    for grid in grid_factorizations(configuration.cells_used):
        cols, rows_per_layer, layers = grid
        # A single row has no odd row to offset
        grid_honeycomb = honeycomb and rows_per_layer > 1

        pack_dims = calculate_pack_dimensions(
            cols, rows_per_layer, layers, pitch, grid_honeycomb,
            inputs.nickel_strip_top, inputs.nickel_strip_bottom,
        )
        total_dims = pack_dims.grown(inputs.wall_clearance)

        if (inputs.custom_max_dimensions is not None
                and not total_dims.fits_within(inputs.custom_max_dimensions)):
            discarded += 1
            continue

        positions = calculate_cell_positions(
            configuration, grid, pitch, pack_dims, grid_honeycomb,
            inputs.nickel_strip_bottom,
        )

        layouts.append(PhysicalLayout(
            configuration=configuration,
            orientation=orientation,
            cols=cols,
            rows_per_layer=rows_per_layer,
            layers=layers,
            cell_positions=positions,
            honeycomb=grid_honeycomb,
            cell_pitch_mm=pitch,
            pack_dimensions=pack_dims,
            total_dimensions=total_dims,
            volume_cm3=total_dims.x * total_dims.y * total_dims.z / 1000.0,
            footprint_cm2=total_dims.x * total_dims.y / 100.0,
            cubeness=calculate_cubeness(total_dims),
        ))

    if discarded:
        logger.debug(
            "%s %s: %d grids exceed custom max dimensions",
            configuration.code, orientation, discarded,
        )
    return layouts


def generate_layouts(
    configuration: ElectricalConfig,
    cell: CellSpec,
    inputs: ConfigInputs
) -> List[PhysicalLayout]:
    """
    Generate all candidate layouts of a configuration.

    Parameters:
    ----------
    configuration : ElectricalConfig
        Configuration to lay out

    cell : CellSpec
        Cell specification

    inputs : ConfigInputs
        Validated generation inputs

    Returns:
    -------
    List[PhysicalLayout]
        Layouts for every allowed orientation and grid, unranked
    """
    layouts = []
    for footprint in orientation_footprints(cell, inputs):
        layouts.extend(generate_grid_layouts(configuration, footprint, inputs))

    logger.debug("%s: generated %d layouts", configuration.code, len(layouts))
    return layouts


# =============================================================================
# Enclosure
# =============================================================================

@dataclass(frozen=True)
class EnclosureOutline:
    """
    Open-top enclosure around a layout.

    Coordinates are relative to the enclosure center (mm).
    """
    inner: Dimensions
    outer: Dimensions
    wall_thickness_mm: float
    mounting_holes: Tuple[Tuple[float, float], ...]
    mounting_hole_radius_mm: float
    wire_exit: Tuple[float, float, float]
    wire_exit_radius_mm: float


def enclosure_outline(
    layout: PhysicalLayout,
    wall_thickness_mm: float = DEFAULT_ENCLOSURE_WALL_MM
) -> EnclosureOutline:
    """
    Calculate the enclosure box that fits a layout.

    Walls surround X and Y on both sides; Z only gets a floor (open top).
    Four mounting holes sit near the corners of the floor and the wire
    exit is centered on the +Y wall.
    """
    inner = layout.total_dimensions
    outer = Dimensions(
        inner.x + 2 * wall_thickness_mm,
        inner.y + 2 * wall_thickness_mm,
        inner.z + wall_thickness_mm,
    )

    hx = outer.x / 2.0 - MOUNTING_HOLE_INSET_MM
    hy = outer.y / 2.0 - MOUNTING_HOLE_INSET_MM
    holes = ((-hx, -hy), (hx, -hy), (-hx, hy), (hx, hy))

    return EnclosureOutline(
        inner=inner,
        outer=outer,
        wall_thickness_mm=wall_thickness_mm,
        mounting_holes=holes,
        mounting_hole_radius_mm=MOUNTING_HOLE_RADIUS_MM,
        wire_exit=(0.0, outer.y / 2.0, outer.z / 2.0),
        wire_exit_radius_mm=WIRE_EXIT_RADIUS_MM,
    )
