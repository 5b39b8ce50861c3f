"""
Pack Layout Plotting Module
===========================

Visualization of generated pack layouts.

Plot Types Available:
--------------------
- Top view (X/Y) with cells colored by series group and polarity marks
- Side view (X/Z) showing layers and nickel strip allowances
- Candidate comparison (dimensions of the top-ranked layouts)

All plots use matplotlib and return Figure objects; showing or saving
them is left to the caller.

Usage:
-----
    from src.pack_designer import design_pack, ConfigInputs
    from src.pack_designer.plotting import LayoutPlotter

    result = design_pack(ConfigInputs())
    plotter = LayoutPlotter()
    fig = plotter.plot_layout(result.best, result.cell)
    fig.savefig("layout.png")
"""

from typing import Optional, Sequence, Tuple

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from matplotlib.figure import Figure
from matplotlib.patches import Circle, Rectangle

from .models.cell import CellSpec
from .models.layout import PhysicalLayout


class LayoutPlotter:
    """
    Pack layout visualization class.

    Example:
    -------
        plotter = LayoutPlotter()
        plotter.plot_top_view(layout, cell)
        plotter.plot_candidates(result.layouts[:10])
    """

    # =========================================================================
    # Default Plot Styling
    # =========================================================================

    DEFAULT_FIGURE_SIZE = (12, 6)
    DEFAULT_COLORMAP = 'viridis'
    ENVELOPE_COLOR = '#888888'
    POSITIVE_COLOR = '#d62728'
    NEGATIVE_COLOR = '#1f77b4'

    def __init__(self, colormap: str = DEFAULT_COLORMAP):
        self.colormap = colormap

    # =========================================================================
    # Combined View
    # =========================================================================

    def plot_layout(
        self,
        layout: PhysicalLayout,
        cell: CellSpec,
        figsize: Optional[Tuple[int, int]] = None
    ) -> Figure:
        """Top and side view of a layout side by side."""
        fig, (ax_top, ax_side) = plt.subplots(
            1, 2, figsize=figsize or self.DEFAULT_FIGURE_SIZE
        )
        self.plot_top_view(layout, cell, ax=ax_top)
        self.plot_side_view(layout, ax=ax_side)
        fig.suptitle(layout.summary())
        fig.tight_layout()
        return fig

    # =========================================================================
    # Top View
    # =========================================================================

    def plot_top_view(
        self,
        layout: PhysicalLayout,
        cell: CellSpec,
        layer: int = 0,
        ax: Optional[Axes] = None
    ) -> Figure:
        """
        Plot the cells of one layer seen from above.

        Standing cylinders are drawn as circles, everything else as the
        cell body rectangle. Cells are colored by series
        group; a red dot marks positive-up cells, a blue dot negative-up.
        """
        fig, ax = self._get_axes(ax)
        cmap = plt.get_cmap(self.colormap)
        series = layout.configuration.series

        pack = layout.pack_dimensions
        total = layout.total_dimensions
        ax.add_patch(Rectangle(
            (-total.x / 2, -total.y / 2), total.x, total.y,
            fill=False, linestyle='--', edgecolor=self.ENVELOPE_COLOR,
            label='With clearance',
        ))
        ax.add_patch(Rectangle(
            (-pack.x / 2, -pack.y / 2), pack.x, pack.y,
            fill=False, edgecolor=self.ENVELOPE_COLOR, label='Cell envelope',
        ))

        for pos in layout.cell_positions:
            if pos.layer != layer:
                continue
            color = cmap(pos.series_position / max(series - 1, 1))
            if cell.is_cylindrical and layout.orientation == "standing":
                patch = Circle((pos.x, pos.y), cell.diameter_mm / 2, facecolor=color,
                               edgecolor='black', linewidth=0.5)
            else:
                w, h = _body_extent(layout, cell)
                patch = Rectangle((pos.x - w / 2, pos.y - h / 2), w, h, facecolor=color,
                                  edgecolor='black', linewidth=0.5)
            ax.add_patch(patch)
            ax.plot(
                pos.x, pos.y, marker='o', markersize=3,
                color=self.POSITIVE_COLOR if pos.polarity_up else self.NEGATIVE_COLOR,
            )

        ax.set_xlim(-total.x / 2 - 5, total.x / 2 + 5)
        ax.set_ylim(-total.y / 2 - 5, total.y / 2 + 5)
        ax.set_aspect('equal')
        ax.set_xlabel('X (mm)')
        ax.set_ylabel('Y (mm)')
        ax.set_title(f'Top view, layer {layer + 1} of {layout.layers}')
        ax.legend(loc='upper right', fontsize=8)
        return fig

    # =========================================================================
    # Side View
    # =========================================================================

    def plot_side_view(self, layout: PhysicalLayout, ax: Optional[Axes] = None) -> Figure:
        """Plot the pack seen from the front (X/Z): layers and strip allowances."""
        fig, ax = self._get_axes(ax)
        pitch_x, _, pitch_z = layout.cell_pitch_mm
        pack = layout.pack_dimensions
        total = layout.total_dimensions
        clearance = (total.z - pack.z) / 2

        ax.add_patch(Rectangle(
            (-total.x / 2, -clearance), total.x, total.z,
            fill=False, linestyle='--', edgecolor=self.ENVELOPE_COLOR,
        ))

        # One rectangle per distinct (x, layer) column of cells
        seen = set()
        for pos in layout.cell_positions:
            key = (round(pos.x, 3), pos.layer)
            if key in seen:
                continue
            seen.add(key)
            ax.add_patch(Rectangle(
                (pos.x - pitch_x / 2, pos.z), pitch_x, pitch_z,
                facecolor='#dddddd', edgecolor='black', linewidth=0.5,
            ))

        strip_bottom = min(pos.z for pos in layout.cell_positions)
        strip_top = pack.z - strip_bottom - layout.layers * pitch_z
        ax.axhspan(0, strip_bottom, color='#c0c0c0', alpha=0.5, label='Bottom strip')
        ax.axhspan(pack.z - strip_top, pack.z, color='#a0a0a0', alpha=0.5, label='Top strip')

        ax.set_xlim(-total.x / 2 - 5, total.x / 2 + 5)
        ax.set_ylim(-clearance - 5, total.z - clearance + 5)
        ax.set_aspect('equal')
        ax.set_xlabel('X (mm)')
        ax.set_ylabel('Z (mm)')
        ax.set_title('Side view')
        ax.legend(loc='upper right', fontsize=8)
        return fig

    # =========================================================================
    # Candidate Comparison
    # =========================================================================

    def plot_candidates(
        self,
        layouts: Sequence[PhysicalLayout],
        ax: Optional[Axes] = None
    ) -> Figure:
        """Grouped bar chart of X/Y/Z total dimensions, in ranked order."""
        fig, ax = self._get_axes(ax)
        if not layouts:
            ax.set_title('No layouts')
            return fig

        dims = np.array([layout.total_dimensions.as_tuple() for layout in layouts])
        positions = np.arange(len(layouts))
        width = 0.27

        for offset, (axis, column) in zip((-width, 0.0, width), enumerate('XYZ')):
            ax.bar(positions + offset, dims[:, axis], width, label=column)

        ax.set_xticks(positions)
        ax.set_xticklabels(
            [f"{l.code}\n{l.cols}×{l.rows_per_layer}×{l.layers}" for l in layouts],
            fontsize=8,
        )
        ax.set_ylabel('Total dimension (mm)')
        ax.set_title('Ranked candidates')
        ax.legend()
        return fig

    def _get_axes(self, ax: Optional[Axes]) -> Tuple[Figure, Axes]:
        if ax is None:
            fig, ax = plt.subplots(figsize=self.DEFAULT_FIGURE_SIZE)
            return fig, ax
        return ax.figure, ax


def _body_extent(layout: PhysicalLayout, cell: CellSpec) -> Tuple[float, float]:
    """Cell body size on X/Y for the layout's orientation (mm)."""
    if cell.is_cylindrical:
        d, length = cell.diameter_mm, cell.length_mm
        return {
            "standing": (d, d),
            "laying_x": (length, d),
            "laying_y": (d, length),
        }[layout.orientation]
    w, length, t = cell.width_mm, cell.length_mm, cell.thickness_mm
    return {
        "flat": (w, length),
        "edge_y": (w, t),
        "edge_x": (t, length),
    }[layout.orientation]
