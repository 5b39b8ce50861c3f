"""
Layout Engine Tests
===================

Validates the configuration enumerator, layout generator and ranking.

Test Methodology:
- Verify enumerated configurations conserve cells and honor the exact filter
- Verify every grid multiplies out to the configuration's cell count
- Verify series/parallel roles form a bijection over the placed cells
- Verify dimensions against hand calculations (rectangular and honeycomb)
- Verify ranking order, idempotence and duplicate removal
"""

import itertools
import math
import sys
from pathlib import Path
import unittest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.pack_designer import (
    ConfigInputs,
    InvalidInputError,
    LayoutPriority,
    get_cell,
    enumerate_configurations,
    closest_configuration,
    generate_layouts,
    rank_layouts,
    sort_layouts,
    layouts_to_dataframe,
    enclosure_outline,
)
from src.pack_designer.calculations.electrical import make_configuration
from src.pack_designer.calculations.geometry import (
    orientation_footprints,
    grid_factorizations,
    calculate_pack_dimensions,
    calculate_cubeness,
)
from src.pack_designer.calculations.ranking import remove_duplicate_dimensions
from src.pack_designer.models.layout import Dimensions


SIN_60 = math.sin(math.radians(60))


class TestConfigurationEnumeration(unittest.TestCase):
    """Test series/parallel enumeration."""

    def setUp(self):
        self.cell = get_cell("18650")

    def test_24_cells_exact(self):
        """Exact configurations of 24 cells are the divisor splits."""
        configs = enumerate_configurations(self.cell, ConfigInputs(cell_count=24))
        codes = [c.code for c in configs]
        self.assertEqual(
            codes, ["1S24P", "2S12P", "3S8P", "4S6P", "6S4P", "8S3P", "12S2P", "24S1P"]
        )
        self.assertIn("4S6P", codes)

    def test_exact_filter(self):
        """With show_only_exact every configuration uses every cell."""
        for count in (1, 7, 12, 24, 30):
            configs = enumerate_configurations(self.cell, ConfigInputs(cell_count=count))
            for config in configs:
                self.assertEqual(config.cells_unused, 0)
                self.assertTrue(config.is_exact)

    def test_cell_conservation(self):
        """S × P + unused == N for every configuration."""
        inputs = ConfigInputs(cell_count=23, show_only_exact=False)
        configs = enumerate_configurations(self.cell, inputs)
        self.assertEqual(len(configs), 23)
        for config in configs:
            self.assertEqual(config.series * config.parallel + config.cells_unused, 23)
            self.assertGreaterEqual(config.parallel, 1)
            self.assertEqual(config.total_cells, 23)

    def test_ascending_series(self):
        inputs = ConfigInputs(cell_count=18, show_only_exact=False)
        series = [c.series for c in enumerate_configurations(self.cell, inputs)]
        self.assertEqual(series, sorted(series))

    def test_non_exact_included(self):
        inputs = ConfigInputs(cell_count=24, show_only_exact=False)
        configs = {c.code: c for c in enumerate_configurations(self.cell, inputs)}
        self.assertIn("5S4P", configs)
        self.assertEqual(configs["5S4P"].cells_unused, 4)

    def test_single_cell(self):
        """One cell yields exactly 1S1P."""
        configs = enumerate_configurations(self.cell, ConfigInputs(cell_count=1))
        self.assertEqual([c.code for c in configs], ["1S1P"])

    def test_prime_count_never_empty(self):
        """S = N, P = 1 always qualifies."""
        configs = enumerate_configurations(self.cell, ConfigInputs(cell_count=13))
        self.assertEqual([c.code for c in configs], ["1S13P", "13S1P"])

    def test_electrical_metrics(self):
        """4S6P of 18650 cells."""
        config = make_configuration(self.cell, 4, 6, 24)
        self.assertAlmostEqual(config.nominal_voltage, 14.8)
        self.assertAlmostEqual(config.max_voltage, 16.8)
        self.assertAlmostEqual(config.min_voltage, 10.0)
        self.assertAlmostEqual(config.capacity_ah, 15.6)
        self.assertAlmostEqual(config.energy_wh, 14.8 * 15.6)
        self.assertAlmostEqual(config.weight_kg, 1.152)

    def test_invalid_configuration_rejected(self):
        with self.assertRaises(ValueError):
            make_configuration(self.cell, 5, 5, 24)

    def test_closest_configuration(self):
        exact = enumerate_configurations(self.cell, ConfigInputs(cell_count=24))
        self.assertEqual(closest_configuration(exact, 48.0).code, "12S2P")

        inputs = ConfigInputs(cell_count=24, show_only_exact=False)
        everything = enumerate_configurations(self.cell, inputs)
        self.assertEqual(closest_configuration(everything, 48.0).code, "13S1P")

        self.assertIsNone(closest_configuration([], 48.0))


class TestGridFactorizations(unittest.TestCase):
    """Test grid enumeration."""

    def test_every_grid_conserves_cells(self):
        for n in (1, 2, 12, 16, 24, 36):
            for cols, rows, layers in grid_factorizations(n):
                self.assertEqual(cols * rows * layers, n)

    def test_all_ordered_triples(self):
        """Every ordered factorization appears exactly once."""
        for n in (12, 16, 30):
            grids = list(grid_factorizations(n))
            expected = [
                t for t in itertools.product(range(1, n + 1), repeat=3)
                if t[0] * t[1] * t[2] == n
            ]
            self.assertEqual(sorted(grids), sorted(expected))
            self.assertEqual(len(grids), len(set(grids)))

    def test_multi_layer_grids_present(self):
        grids = list(grid_factorizations(16))
        self.assertIn((4, 4, 1), grids)
        self.assertIn((2, 2, 4), grids)
        self.assertIn((1, 1, 16), grids)

    def test_single_cell(self):
        self.assertEqual(list(grid_factorizations(1)), [(1, 1, 1)])


class TestOrientationFootprints(unittest.TestCase):
    """Test which orientations are tried."""

    def test_cylinder_orientations(self):
        cell = get_cell("18650")
        standing = orientation_footprints(cell, ConfigInputs(cell_orientation="STANDING"))
        self.assertEqual(standing, [("standing", 20.6, 20.6, 65.2)])

        laying = [f[0] for f in orientation_footprints(cell, ConfigInputs(cell_orientation="LAYING"))]
        self.assertEqual(laying, ["laying_x", "laying_y"])

        mixed = [f[0] for f in orientation_footprints(cell, ConfigInputs(cell_orientation="MIXED"))]
        self.assertEqual(mixed, ["standing", "laying_x", "laying_y"])

    def test_box_orientations(self):
        cell = get_cell("POUCH_MEDIUM")
        laying = orientation_footprints(cell, ConfigInputs(cell_orientation="LAYING"))
        self.assertEqual(laying, [("flat", 52, 70, 5)])

        standing = orientation_footprints(cell, ConfigInputs(cell_orientation="STANDING"))
        self.assertEqual(standing, [("edge_y", 52, 7, 68), ("edge_x", 7, 70, 50)])

        mixed = [f[0] for f in orientation_footprints(cell, ConfigInputs(cell_orientation="MIXED"))]
        self.assertEqual(mixed, ["flat", "edge_y", "edge_x"])


class TestDimensions(unittest.TestCase):
    """Test envelope calculations against hand-computed values."""

    def test_rectangular(self):
        dims = calculate_pack_dimensions(4, 4, 1, (20.6, 20.6, 65.2), False, 5.0, 5.0)
        self.assertAlmostEqual(dims.x, 82.4)
        self.assertAlmostEqual(dims.y, 82.4)
        self.assertAlmostEqual(dims.z, 75.2)

    def test_honeycomb(self):
        dims = calculate_pack_dimensions(4, 4, 1, (20.6, 20.6, 65.2), True, 5.0, 5.0)
        self.assertAlmostEqual(dims.x, 4 * 20.6 + 10.3)
        self.assertAlmostEqual(dims.y, 20.6 + 3 * 20.6 * SIN_60)
        self.assertAlmostEqual(dims.z, 75.2)

    def test_honeycomb_single_row_is_rectangular(self):
        plain = calculate_pack_dimensions(6, 1, 1, (20.6, 20.6, 65.2), False, 5.0, 5.0)
        honey = calculate_pack_dimensions(6, 1, 1, (20.6, 20.6, 65.2), True, 5.0, 5.0)
        self.assertEqual(plain, honey)

    def test_grown(self):
        grown = Dimensions(10, 20, 30).grown(3)
        self.assertEqual(grown.as_tuple(), (16, 26, 36))

    def test_cubeness(self):
        self.assertAlmostEqual(calculate_cubeness(Dimensions(50, 50, 50)), 1.0)
        self.assertAlmostEqual(calculate_cubeness(Dimensions(100, 50, 25)), 0.25)


class TestLayoutGeneration(unittest.TestCase):
    """Test generated layouts and cell placement."""

    def setUp(self):
        self.cell = get_cell("18650")
        self.inputs = ConfigInputs(cell_count=16)
        self.config = make_configuration(self.cell, 4, 4, 16)
        self.layouts = generate_layouts(self.config, self.cell, self.inputs)

    def _find(self, layouts, grid):
        for layout in layouts:
            if layout.grid_shape == grid:
                return layout
        self.fail(f"No layout with grid {grid}")

    def test_expected_grids(self):
        """4S4P standing includes the single-layer square and a 4-layer stack."""
        flat = self._find(self.layouts, (4, 4, 1))
        self.assertAlmostEqual(flat.total_dimensions.x, 88.4)
        self.assertAlmostEqual(flat.total_dimensions.y, 88.4)
        self.assertAlmostEqual(flat.total_dimensions.z, 81.2)

        stacked = self._find(self.layouts, (2, 2, 4))
        self.assertAlmostEqual(stacked.total_dimensions.z, 4 * 65.2 + 10 + 6)

    def test_grid_conservation(self):
        for layout in self.layouts:
            self.assertEqual(layout.cols * layout.rows_per_layer * layout.layers, 16)
            self.assertEqual(len(layout.cell_positions), 16)

    def test_series_parallel_bijection(self):
        """Every (series, parallel) slot is filled exactly once."""
        for layout in self.layouts:
            slots = {(p.series_position, p.parallel_group) for p in layout.cell_positions}
            expected = {(s, g) for s in range(4) for g in range(4)}
            self.assertEqual(slots, expected)
            self.assertEqual(
                [p.index for p in layout.cell_positions], list(range(16))
            )

    def test_polarity_alternates(self):
        for layout in self.layouts:
            for pos in layout.cell_positions:
                self.assertEqual(pos.polarity_up, pos.series_position % 2 == 0)

    def test_dimension_monotonicity(self):
        """Total dimensions exceed the cell envelope by the clearance."""
        for layout in self.layouts:
            pack, total = layout.pack_dimensions, layout.total_dimensions
            for p, t in zip(pack.as_tuple(), total.as_tuple()):
                self.assertAlmostEqual(t - p, 6.0)

        no_clearance = ConfigInputs(cell_count=16, wall_clearance=0)
        for layout in generate_layouts(self.config, self.cell, no_clearance):
            self.assertEqual(layout.pack_dimensions, layout.total_dimensions)

    def test_metrics(self):
        for layout in self.layouts:
            dims = layout.total_dimensions
            self.assertAlmostEqual(layout.volume_cm3, dims.x * dims.y * dims.z / 1000)
            self.assertAlmostEqual(layout.footprint_cm2, dims.x * dims.y / 100)
            self.assertGreater(layout.cubeness, 0)
            self.assertLessEqual(layout.cubeness, 1)

    def test_positions_centered(self):
        layout = self._find(self.layouts, (4, 4, 1))
        xs = sorted({round(p.x, 6) for p in layout.cell_positions})
        self.assertEqual(xs, [-30.9, -10.3, 10.3, 30.9])
        self.assertAlmostEqual(sum(p.y for p in layout.cell_positions), 0.0)
        for pos in layout.cell_positions:
            self.assertAlmostEqual(pos.z, 5.0)

    def test_layer_heights(self):
        layout = self._find(self.layouts, (2, 2, 4))
        for pos in layout.cell_positions:
            self.assertAlmostEqual(pos.z, 5.0 + pos.layer * 65.2)

    def test_positions_inside_envelope(self):
        for inputs in (self.inputs, ConfigInputs(cell_count=16, use_honeycomb=True)):
            for layout in generate_layouts(self.config, self.cell, inputs):
                pitch_x, pitch_y, _ = layout.cell_pitch_mm
                pack = layout.pack_dimensions
                for pos in layout.cell_positions:
                    self.assertLessEqual(abs(pos.x), pack.x / 2 - pitch_x / 2 + 1e-9)
                    self.assertLessEqual(abs(pos.y), pack.y / 2 - pitch_y / 2 + 1e-9)

    def test_cells_do_not_overlap(self):
        """Centers in a layer are at least one pitch apart."""
        inputs = ConfigInputs(cell_count=16, use_honeycomb=True)
        for layout in generate_layouts(self.config, self.cell, inputs):
            pitch = layout.cell_pitch_mm[0]
            for layer in range(layout.layers):
                cells = [p for p in layout.cell_positions if p.layer == layer]
                for a, b in itertools.combinations(cells, 2):
                    self.assertGreaterEqual(
                        math.hypot(a.x - b.x, a.y - b.y), pitch - 1e-9
                    )

    def test_honeycomb_standing_only(self):
        inputs = ConfigInputs(cell_count=16, use_honeycomb=True, cell_orientation="MIXED")
        layouts = generate_layouts(self.config, self.cell, inputs)
        honeycomb = [l for l in layouts if l.honeycomb]
        self.assertTrue(honeycomb)
        for layout in honeycomb:
            self.assertEqual(layout.orientation, "standing")
            self.assertGreater(layout.rows_per_layer, 1)
            self.assertEqual(layout.packing, "honeycomb")
        for layout in layouts:
            if layout.orientation != "standing" or layout.rows_per_layer == 1:
                self.assertFalse(layout.honeycomb)

    def test_honeycomb_offsets_odd_rows(self):
        inputs = ConfigInputs(cell_count=16, use_honeycomb=True)
        layout = self._find(generate_layouts(self.config, self.cell, inputs), (4, 4, 1))
        row0 = min(p.x for p in layout.cell_positions if p.row == 0)
        row1 = min(p.x for p in layout.cell_positions if p.row == 1)
        self.assertAlmostEqual(row1 - row0, 10.3)

    def test_box_cells_never_honeycomb(self):
        cell = get_cell("POUCH_MEDIUM")
        config = make_configuration(cell, 2, 4, 8)
        inputs = ConfigInputs(cell_type="POUCH_MEDIUM", cell_count=8,
                              use_honeycomb=True, cell_orientation="MIXED")
        layouts = generate_layouts(config, cell, inputs)
        self.assertTrue(layouts)
        self.assertFalse(any(l.honeycomb for l in layouts))
        self.assertEqual({l.orientation for l in layouts}, {"flat", "edge_y", "edge_x"})

    def test_custom_max_filters(self):
        inputs = ConfigInputs(cell_count=16, custom_max_dimensions=(100, 100, 100))
        layouts = generate_layouts(self.config, self.cell, inputs)
        self.assertTrue(layouts)
        for layout in layouts:
            self.assertTrue(layout.total_dimensions.fits_within((100, 100, 100)))

        tiny = ConfigInputs(cell_count=16, custom_max_dimensions=(10, 10, 10))
        self.assertEqual(generate_layouts(self.config, self.cell, tiny), [])

    def test_completeness_floor(self):
        """Without limits every configuration gets at least one layout."""
        inputs = ConfigInputs(cell_count=24)
        for config in enumerate_configurations(self.cell, inputs):
            self.assertGreaterEqual(len(generate_layouts(config, self.cell, inputs)), 1)

    def test_single_cell_layout(self):
        inputs = ConfigInputs(cell_count=1)
        config = enumerate_configurations(self.cell, inputs)[0]
        layouts = generate_layouts(config, self.cell, inputs)
        self.assertEqual(len(layouts), 1)
        pos = layouts[0].cell_positions[0]
        self.assertAlmostEqual(pos.x, 0.0)
        self.assertAlmostEqual(pos.y, 0.0)
        self.assertTrue(pos.polarity_up)

    def test_enclosure_outline(self):
        layout = self._find(self.layouts, (4, 4, 1))
        outline = enclosure_outline(layout)
        self.assertAlmostEqual(outline.outer.x, 92.4)
        self.assertAlmostEqual(outline.outer.y, 92.4)
        self.assertAlmostEqual(outline.outer.z, 83.2)
        self.assertEqual(len(outline.mounting_holes), 4)
        self.assertIn((41.2, 41.2), [(round(x, 6), round(y, 6)) for x, y in outline.mounting_holes])
        self.assertAlmostEqual(outline.wire_exit[1], 46.2)


class TestRanking(unittest.TestCase):
    """Test ranking and duplicate removal."""

    def setUp(self):
        self.cell = get_cell("18650")

    def _candidates(self, inputs):
        layouts = []
        for config in enumerate_configurations(self.cell, inputs):
            layouts.extend(generate_layouts(config, self.cell, inputs))
        return layouts

    def test_minimize_z_first_is_lowest(self):
        inputs = ConfigInputs(cell_count=24, cell_orientation="MIXED")
        candidates = self._candidates(inputs)
        ranked = rank_layouts(candidates, inputs)
        lowest = min(l.total_dimensions.z for l in candidates)
        self.assertAlmostEqual(ranked[0].total_dimensions.z, lowest)
        zs = [l.total_dimensions.z for l in ranked]
        self.assertEqual(zs, sorted(zs))

    def test_minimize_xy_order(self):
        inputs = ConfigInputs(cell_count=24, layout_priority="MINIMIZE_XY")
        ranked = rank_layouts(self._candidates(inputs), inputs)
        footprints = [l.footprint_cm2 for l in ranked]
        self.assertEqual(footprints, sorted(footprints))

    def test_balanced_order(self):
        inputs = ConfigInputs(cell_count=24, layout_priority=LayoutPriority.BALANCED)
        ranked = rank_layouts(self._candidates(inputs), inputs)
        for better, worse in zip(ranked, ranked[1:]):
            self.assertGreaterEqual(better.cubeness, worse.cubeness - 1e-12)

    def test_custom_order_by_volume(self):
        inputs = ConfigInputs(cell_count=24, layout_priority="CUSTOM",
                              custom_max_dimensions=(400, 400, 400))
        ranked = rank_layouts(self._candidates(inputs), inputs)
        volumes = [l.volume_cm3 for l in ranked]
        self.assertEqual(volumes, sorted(volumes))

    def test_no_duplicate_dimensions(self):
        inputs = ConfigInputs(cell_count=24)
        candidates = self._candidates(inputs)
        ranked = rank_layouts(candidates, inputs)
        keys = [l.total_dimensions.key(1) for l in ranked]
        self.assertEqual(len(keys), len(set(keys)))
        # Configurations of the same cell count share grids
        self.assertLess(len(ranked), len(candidates))

    def test_idempotent(self):
        inputs = ConfigInputs(cell_count=24, cell_orientation="MIXED")
        ranked = rank_layouts(self._candidates(inputs), inputs)
        self.assertEqual(rank_layouts(ranked, inputs), ranked)

    def test_input_not_modified(self):
        inputs = ConfigInputs(cell_count=12)
        candidates = self._candidates(inputs)
        snapshot = list(candidates)
        rank_layouts(candidates, inputs)
        self.assertEqual(candidates, snapshot)

    def test_empty(self):
        self.assertEqual(rank_layouts([], ConfigInputs()), [])

    def test_remove_duplicates_keeps_first(self):
        """Same grid under another configuration is a duplicate."""
        inputs = ConfigInputs(cell_count=4)
        first = generate_layouts(make_configuration(self.cell, 2, 2, 4), self.cell, inputs)
        second = generate_layouts(make_configuration(self.cell, 4, 1, 4), self.cell, inputs)
        unique = remove_duplicate_dimensions(first + second)
        self.assertEqual(unique, first)
        self.assertTrue(all(l.code == "2S2P" for l in unique))

    def test_sort_layouts(self):
        inputs = ConfigInputs(cell_count=24)
        ranked = rank_layouts(self._candidates(inputs), inputs)
        for key, metric in (
            ("volume", lambda l: l.volume_cm3),
            ("footprint", lambda l: l.footprint_cm2),
            ("height", lambda l: l.total_dimensions.z),
            ("longest", lambda l: l.longest_dimension),
        ):
            values = [metric(l) for l in sort_layouts(ranked, key)]
            self.assertEqual(values, sorted(values), key)

        with self.assertRaises(InvalidInputError):
            sort_layouts(ranked, "weight")

    def test_dataframe(self):
        inputs = ConfigInputs(cell_count=24)
        ranked = rank_layouts(self._candidates(inputs), inputs)
        df = layouts_to_dataframe(ranked[:5])
        self.assertEqual(len(df), 5)
        self.assertEqual(list(df["rank"]), [1, 2, 3, 4, 5])
        self.assertEqual(df.iloc[0]["code"], ranked[0].code)
        self.assertAlmostEqual(df.iloc[0]["z_mm"], ranked[0].total_dimensions.z)

        empty = layouts_to_dataframe([])
        self.assertTrue(empty.empty)
        self.assertIn("volume_cm3", empty.columns)


if __name__ == "__main__":
    unittest.main()
