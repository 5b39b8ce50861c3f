#!/usr/bin/env python3
"""
Battery Pack Designer Launcher
==============================

Command-line front end for the battery pack layout engine.

Given a cell type and the number of cells available, lists the
series/parallel configurations, the configuration nearest to the target
voltage and the top-ranked physical layouts. The chosen layout can be
exported as a JSON pack specification or a manufacturing package.

Usage:
    python run_pack_designer.py --cell 18650 --count 24 --voltage 48
    python run_pack_designer.py --cell 21700 --count 30 --priority MINIMIZE_XY --honeycomb
    python run_pack_designer.py --cell POUCH_MEDIUM --count 8 --orientation MIXED \\
        --max-dims 200 150 80 --export-package pack.zip

Requirements:
    - Python 3.9+
    - numpy
    - pandas
    - matplotlib (for --plot)
"""

import argparse
import logging
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent))

import pandas as pd

from src.pack_designer import (
    ConfigInputs,
    InvalidInputError,
    LayoutPriority,
    CellOrientation,
    layouts_to_dataframe,
    design_pack,
    list_cells,
)
from src.pack_designer.config import (
    DEFAULT_CELL_TYPE,
    DEFAULT_CELL_COUNT,
    DEFAULT_TARGET_VOLTAGE,
    DEFAULT_CELL_GAP_MM,
    DEFAULT_WALL_CLEARANCE_MM,
    DEFAULT_NICKEL_STRIP_TOP_MM,
    DEFAULT_NICKEL_STRIP_BOTTOM_MM,
)
from src.pack_designer.export import export_pack_spec_json, write_manufacturing_package

logger = logging.getLogger("pack_designer")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate and rank battery pack layouts."
    )
    parser.add_argument("--cell", default=DEFAULT_CELL_TYPE, choices=list_cells(),
                        help="Cell type key (default: %(default)s)")
    parser.add_argument("--count", type=int, default=DEFAULT_CELL_COUNT,
                        help="Number of cells available (default: %(default)s)")
    parser.add_argument("--voltage", type=float, default=DEFAULT_TARGET_VOLTAGE,
                        help="Target nominal voltage in V (default: %(default)s)")
    parser.add_argument("--priority", default=LayoutPriority.MINIMIZE_Z.value,
                        choices=[p.value for p in LayoutPriority],
                        help="Ranking criterion (default: %(default)s)")
    parser.add_argument("--orientation", default=CellOrientation.STANDING.value,
                        choices=[o.value for o in CellOrientation],
                        help="Cell orientation (default: %(default)s)")
    parser.add_argument("--honeycomb", action="store_true",
                        help="Offset alternate rows of standing cylinders")
    parser.add_argument("--gap", type=float, default=DEFAULT_CELL_GAP_MM,
                        help="Gap between cells in mm (default: %(default)s)")
    parser.add_argument("--clearance", type=float, default=DEFAULT_WALL_CLEARANCE_MM,
                        help="Wall clearance in mm (default: %(default)s)")
    parser.add_argument("--strip-top", type=float, default=DEFAULT_NICKEL_STRIP_TOP_MM,
                        help="Top nickel strip allowance in mm (default: %(default)s)")
    parser.add_argument("--strip-bottom", type=float, default=DEFAULT_NICKEL_STRIP_BOTTOM_MM,
                        help="Bottom nickel strip allowance in mm (default: %(default)s)")
    parser.add_argument("--all-configs", action="store_true",
                        help="Include configurations that leave cells unused")
    parser.add_argument("--max-dims", type=float, nargs=3, metavar=("X", "Y", "Z"),
                        help="Custom maximum total dimensions in mm")
    parser.add_argument("--top", type=int, default=10,
                        help="Number of ranked layouts to print (default: %(default)s)")
    parser.add_argument("--select", type=int, default=0,
                        help="Ranked index of the layout to export (default: %(default)s)")
    parser.add_argument("--export-json", type=Path, metavar="PATH",
                        help="Write the selected layout's pack specification as JSON")
    parser.add_argument("--export-package", type=Path, metavar="PATH",
                        help="Write the selected layout's manufacturing package (zip)")
    parser.add_argument("--plot", type=Path, metavar="PATH",
                        help="Save a top/side view of the selected layout")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Enable debug logging")
    return parser


def main(argv=None) -> int:
    """Run the designer from the command line. Returns the exit code."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        inputs = ConfigInputs(
            cell_type=args.cell,
            cell_count=args.count,
            target_voltage=args.voltage,
            layout_priority=args.priority,
            custom_max_dimensions=tuple(args.max_dims) if args.max_dims else None,
            cell_orientation=args.orientation,
            use_honeycomb=args.honeycomb,
            cell_gap=args.gap,
            wall_clearance=args.clearance,
            nickel_strip_top=args.strip_top,
            nickel_strip_bottom=args.strip_bottom,
            show_only_exact=not args.all_configs,
        )
        result = design_pack(inputs)
    except InvalidInputError as e:
        logger.error("Invalid input: %s", e)
        return 1

    print("=" * 60)
    print("Battery Pack Designer")
    print("=" * 60)
    print(result.cell.summary())
    print(f"Configurations: {', '.join(c.code for c in result.configurations)}")
    if result.closest is not None:
        closest = result.closest
        print(
            f"Closest to {inputs.target_voltage:.1f}V: {closest.code} "
            f"({closest.nominal_voltage:.1f}V, {closest.capacity_ah:.2f}Ah, "
            f"{closest.energy_wh:.1f}Wh)"
        )
    print()

    if not result.has_layouts:
        logger.error("No layout fits the given constraints")
        return 1

    table = layouts_to_dataframe(result.layouts[:args.top])
    with pd.option_context("display.max_columns", None, "display.width", 200):
        print(table[[
            "rank", "code", "orientation", "packing", "cols", "rows_per_layer",
            "layers", "x_mm", "y_mm", "z_mm", "volume_cm3", "cubeness",
        ]].to_string(index=False))
    print(f"\n{len(result.layouts)} layouts in total")

    try:
        spec = result.pack_spec(args.select)
    except InvalidInputError as e:
        logger.error("%s", e)
        return 1
    layout = result.layouts[args.select]

    if args.export_json:
        path = export_pack_spec_json(spec, args.export_json)
        print(f"Pack specification written to {path}")

    if args.export_package:
        path = write_manufacturing_package(
            args.export_package, layout, result.cell, inputs, spec=spec
        )
        print(f"Manufacturing package written to {path}")

    if args.plot:
        import matplotlib
        matplotlib.use("Agg")
        from src.pack_designer.plotting import LayoutPlotter

        fig = LayoutPlotter().plot_layout(layout, result.cell)
        fig.savefig(args.plot, dpi=150)
        print(f"Layout plot written to {args.plot}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
