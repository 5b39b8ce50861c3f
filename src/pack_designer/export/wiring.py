"""
Wiring Diagram
==============

Series/parallel grouping of a layout and a schematic SVG of it.

The schematic only uses the grouping, never cell coordinates: one column
per series group, one circle per cell, red/black rails for the parallel
connections and a blue link from each group to the next.
"""

from typing import Dict, List

from ..models.layout import ElectricalConfig, PhysicalLayout

SVG_WIDTH = 800
SVG_MIN_HEIGHT = 600
SVG_MARGIN = 50
CELL_SPACING = 30
FIRST_CELL_Y = 80
CELL_RADIUS = 10
LEGEND_HEIGHT = 80


def series_groups(layout: PhysicalLayout) -> List[List[int]]:
    """
    Cell indices of every series group, in series order.

    Returns:
    -------
    List[List[int]]
        groups[s] lists the indices of the cells with series_position s,
        in placement order
    """
    groups: List[List[int]] = [[] for _ in range(layout.configuration.series)]
    for pos in layout.cell_positions:
        groups[pos.series_position].append(pos.index)
    return groups


def connection_counts(configuration: ElectricalConfig) -> Dict[str, int]:
    """Number of series links between groups and parallel cell connections."""
    return {
        "series": configuration.series - 1,
        "parallel": configuration.parallel * configuration.series,
    }


def generate_wiring_diagram_svg(layout: PhysicalLayout) -> str:
    """
    Render the wiring schematic of a layout.

    Parameters:
    ----------
    layout : PhysicalLayout
        Layout to draw

    Returns:
    -------
    str
        SVG document
    """
    groups = series_groups(layout)
    code = layout.configuration.code
    group_spacing = (SVG_WIDTH - 2 * SVG_MARGIN) / len(groups)
    # Tallest column plus the legend strip
    height = max(
        SVG_MIN_HEIGHT,
        FIRST_CELL_Y + layout.configuration.parallel * CELL_SPACING + LEGEND_HEIGHT,
    )

    parts = [
        f'<svg width="{SVG_WIDTH}" height="{height}" xmlns="http://www.w3.org/2000/svg">',
        f'<text x="{SVG_WIDTH / 2:g}" y="30" text-anchor="middle" font-family="Arial" '
        f'font-size="18" font-weight="bold">{code} Wiring Diagram</text>',
    ]

    for series_pos, cells in enumerate(groups):
        x = SVG_MARGIN + series_pos * group_spacing

        for i, cell_index in enumerate(cells):
            y = FIRST_CELL_Y + i * CELL_SPACING
            parts.append(
                f'<circle cx="{x:g}" cy="{y}" r="{CELL_RADIUS}" fill="#cccccc" stroke="#000000"/>'
            )
            parts.append(
                f'<text x="{x:g}" y="{y + 4}" text-anchor="middle" font-family="Arial" '
                f'font-size="10">{cell_index}</text>'
            )
            # Terminals
            parts.append(_line(x - 10, y - 10, x - 10, y - 15, "red", 2))
            parts.append(_line(x + 10, y + 10, x + 10, y + 15, "black", 2))

        for i in range(len(cells) - 1):
            y1 = FIRST_CELL_Y + i * CELL_SPACING
            y2 = FIRST_CELL_Y + (i + 1) * CELL_SPACING
            parts.append(_line(x - 10, y1 - 15, x - 10, y2 - 15, "red", 2))
            parts.append(_line(x + 10, y1 + 15, x + 10, y2 + 15, "black", 2))

        if series_pos < len(groups) - 1:
            next_x = SVG_MARGIN + (series_pos + 1) * group_spacing
            last_y = FIRST_CELL_Y + (len(cells) - 1) * CELL_SPACING
            parts.append(_line(x + 10, last_y + 15, next_x - 10, FIRST_CELL_Y - 15, "blue", 3))

    legend = [
        ("Red: Positive connections", 50),
        ("Black: Negative connections", 30),
        ("Blue: Series connections", 10),
    ]
    for text, offset in legend:
        parts.append(
            f'<text x="50" y="{height - offset}" font-family="Arial" '
            f'font-size="12">{text}</text>'
        )

    parts.append("</svg>")
    return "".join(parts)


def _line(x1: float, y1: float, x2: float, y2: float, color: str, width: int) -> str:
    return (
        f'<line x1="{x1:g}" y1="{y1:g}" x2="{x2:g}" y2="{y2:g}" '
        f'stroke="{color}" stroke-width="{width}"/>'
    )
