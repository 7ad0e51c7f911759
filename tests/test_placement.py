"""
Tests for the random and column-aligned placement strategies
"""

import unittest
import sys
from pathlib import Path

import numpy as np

# Add parent directory to path
sys.path.append(str(Path(__file__).parent.parent))

from site_layout.data_models import SiteConfig, Strategy, Typology
from site_layout.geometry import overlaps_zone, rectangle_gap, within_bounds
from site_layout.placement import (
    COLUMN_Y_ATTEMPTS,
    build_typology_sequence,
    column_x_positions,
    generate_random_layout,
    generate_column_aligned_layout,
    get_strategy,
    RANDOM_PLACEMENT_ATTEMPTS,
)


class PlacementAssertions:
    """Shared checks on layouts returned by a strategy"""

    def assert_layout_respects_rules(self, layout, site):
        for building in layout:
            rect = building.footprint
            self.assertTrue(within_bounds(rect, site.site_rect, site.boundary_clearance),
                            f"{building} breaks the boundary clearance")
            self.assertFalse(overlaps_zone(rect, site.plaza_rect), f"{building} overlaps the plaza")

        for i, b1 in enumerate(layout):
            for b2 in layout[i + 1:]:
                self.assertGreaterEqual(rectangle_gap(b1.footprint, b2.footprint), site.min_spacing)


class TestTypologySequence(unittest.TestCase):
    """Test the shuffled typology sequence"""

    def setUp(self):
        self.site = SiteConfig()
        self.rng = np.random.default_rng(42)

    def test_type_a_share(self):
        for target, expected_a in [(6, 3), (8, 4), (10, 4), (12, 5)]:
            sequence = build_typology_sequence(self.site, target, self.rng)
            self.assertEqual(len(sequence), target)
            self.assertEqual(sequence.count(Typology.A), expected_a)
            self.assertEqual(sequence.count(Typology.B), target - expected_a)

    def test_empty_sequence(self):
        self.assertEqual(build_typology_sequence(self.site, 0, self.rng), [])

    def test_order_is_shuffled(self):
        orders = {tuple(build_typology_sequence(self.site, 10, self.rng)) for _ in range(20)}
        self.assertGreater(len(orders), 1)


class TestRandomPlacement(unittest.TestCase, PlacementAssertions):
    """Test random placement"""

    def setUp(self):
        self.site = SiteConfig()

    def test_layout_respects_rules(self):
        rng = np.random.default_rng(7)
        for _ in range(10):
            layout = generate_random_layout(self.site, 8, rng)
            self.assertLessEqual(len(layout), 8)
            self.assert_layout_respects_rules(layout, self.site)

    def test_reproducible_results(self):
        layout1 = generate_random_layout(self.site, 8, np.random.default_rng(123))
        layout2 = generate_random_layout(self.site, 8, np.random.default_rng(123))
        self.assertEqual(layout1, layout2)

    def test_partial_layout_when_site_is_full(self):
        """Placement stops early instead of failing when the site runs out of room"""
        site = SiteConfig(width=100, height=60, plaza_width=10, plaza_height=10)
        layout = generate_random_layout(site, 6, np.random.default_rng(0))
        self.assertLessEqual(len(layout), 2)
        self.assert_layout_respects_rules(layout, site)

    def test_zero_target(self):
        self.assertEqual(generate_random_layout(self.site, 0, np.random.default_rng(0)), [])

    def test_attempt_budget(self):
        self.assertEqual(RANDOM_PLACEMENT_ATTEMPTS, 100)


class TestColumnAlignedPlacement(unittest.TestCase, PlacementAssertions):
    """Test column-aligned placement"""

    def setUp(self):
        self.site = SiteConfig()

    def test_reference_columns(self):
        # Four evenly spaced columns at 10, 60, 110, 160; the middle two cross the plaza
        self.assertEqual(column_x_positions(self.site), [10, 160])

    def test_buildings_share_column_offsets(self):
        rng = np.random.default_rng(11)
        columns = column_x_positions(self.site)
        for _ in range(10):
            layout = generate_column_aligned_layout(self.site, 6, rng)
            self.assertLessEqual(len(layout), 6)
            for building in layout:
                self.assertIn(building.x, columns)
            self.assert_layout_respects_rules(layout, self.site)

    def test_no_usable_columns(self):
        site = SiteConfig(width=60, height=140)
        self.assertEqual(column_x_positions(site), [])
        self.assertEqual(generate_column_aligned_layout(site, 6, np.random.default_rng(0)), [])

    def test_reproducible_results(self):
        layout1 = generate_column_aligned_layout(self.site, 6, np.random.default_rng(5))
        layout2 = generate_column_aligned_layout(self.site, 6, np.random.default_rng(5))
        self.assertEqual(layout1, layout2)


class ScriptedGenerator:
    """Stand-in generator that replays fixed draws and keeps typology order"""

    def __init__(self, values):
        self.values = list(values)

    def random(self):
        return self.values.pop(0)

    def permutation(self, n):
        return np.arange(n)


class TestColumnCursor(unittest.TestCase, PlacementAssertions):
    """Test round-robin column order and early stopping"""

    def setUp(self):
        self.site = SiteConfig()

    def test_cursor_advances_after_success(self):
        # The first two buildings always fit, so they land in different columns
        for seed in range(20):
            layout = generate_column_aligned_layout(self.site, 6, np.random.default_rng(seed))
            self.assertEqual([b.x for b in layout[:2]], [10, 160])

    def test_cursor_advances_after_failed_column(self):
        # Sequence A, A, B. y draws of 0 put every building at y=10, so the
        # B cannot fit under the first A and moves on to the 160 column.
        rng = ScriptedGenerator([0, 0] + [0] * COLUMN_Y_ATTEMPTS + [0.5])
        layout = generate_column_aligned_layout(self.site, 3, rng)

        self.assertEqual([(b.typology, b.x, b.y) for b in layout], [
            (Typology.A, 10, 10),
            (Typology.A, 160, 10),
            (Typology.B, 160, 60),
        ])
        self.assertEqual(rng.values, [])

    def test_stops_when_building_cannot_be_placed(self):
        # Third building exhausts 2 x 2 column attempts of COLUMN_Y_ATTEMPTS draws
        rng = ScriptedGenerator([0, 0] + [0] * (4 * COLUMN_Y_ATTEMPTS) + [0.5] * 10)
        layout = generate_column_aligned_layout(self.site, 3, rng)

        self.assertEqual(len(layout), 2)
        # No draws are spent on buildings after the one that failed
        self.assertEqual(rng.values, [0.5] * 10)

    def test_partial_layout_on_reference_site(self):
        # Two usable columns hold at most three buildings each
        rng = np.random.default_rng(77)
        for _ in range(20):
            layout = generate_column_aligned_layout(self.site, 8, rng)
            self.assertLessEqual(len(layout), 6)
            self.assertTrue(all(b.x in (10, 160) for b in layout))
            self.assert_layout_respects_rules(layout, self.site)


class TestStrategyLookup(unittest.TestCase):
    """Test strategy resolution"""

    def test_lookup_by_name(self):
        self.assertIs(get_strategy("random"), generate_random_layout)
        self.assertIs(get_strategy("column-aligned"), generate_column_aligned_layout)
        self.assertIs(get_strategy("aligned"), generate_column_aligned_layout)
        self.assertIs(get_strategy(Strategy.RANDOM), generate_random_layout)

    def test_unknown_strategy(self):
        with self.assertRaises(ValueError):
            get_strategy("spiral")


if __name__ == '__main__':
    unittest.main()
