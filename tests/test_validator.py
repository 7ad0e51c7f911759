"""
Tests for layout validation
"""

import unittest
import sys
from pathlib import Path

# Add parent directory to path
sys.path.append(str(Path(__file__).parent.parent))

from site_layout.data_models import (
    SiteConfig, PlacedBuilding, ViolationType, Violation, TYPE_A_TEMPLATE, TYPE_B_TEMPLATE
)
from site_layout.validator import validate_layout, is_layout_valid


def tower_a(x, y):
    return PlacedBuilding(TYPE_A_TEMPLATE, x, y)


def tower_b(x, y):
    return PlacedBuilding(TYPE_B_TEMPLATE, x, y)


class TestValidateLayout(unittest.TestCase):
    """Test validate_layout on the reference site"""

    def setUp(self):
        self.site = SiteConfig()

    def test_empty_layout_is_valid(self):
        self.assertEqual(validate_layout([], self.site), [])

    def test_valid_pair(self):
        layout = [tower_a(10, 10), tower_b(60, 10)]
        self.assertEqual(validate_layout(layout, self.site), [])
        self.assertTrue(is_layout_valid(layout, self.site))

    def test_boundary_violation(self):
        violations = validate_layout([tower_b(5, 10)], self.site)
        self.assertEqual(violations, [Violation(ViolationType.BOUNDARY, (0,))])

    def test_plaza_violation(self):
        violations = validate_layout([tower_b(90, 60)], self.site)
        self.assertEqual(violations, [Violation(ViolationType.PLAZA, (0,))])

    def test_spacing_violation_records_rounded_gap(self):
        violations = validate_layout([tower_a(10, 10), tower_b(43, 33.5)], self.site)
        self.assertEqual(len(violations), 1)
        violation = violations[0]
        self.assertEqual(violation.kind, ViolationType.SPACING)
        self.assertEqual(violation.buildings, (0, 1))
        self.assertEqual(violation.distance, 4.6)

    def test_spacing_at_minimum_is_allowed(self):
        layout = [tower_a(10, 10), tower_b(55, 10)]
        self.assertEqual(validate_layout(layout, self.site), [])

    def test_neighbor_violation_without_type_b(self):
        violations = validate_layout([tower_a(10, 10)], self.site)
        self.assertEqual(violations, [Violation(ViolationType.NEIGHBOR, (0,))])

    def test_neighbor_violation_when_type_b_too_far(self):
        layout = [tower_a(10, 10), tower_b(170, 110)]
        violations = validate_layout(layout, self.site)
        self.assertEqual(violations, [Violation(ViolationType.NEIGHBOR, (0,))])

    def test_neighbor_at_exact_distance_is_allowed(self):
        # A spans x 10..40, B starts 60 units further right
        layout = [tower_a(10, 10), tower_b(100, 10)]
        self.assertEqual(validate_layout(layout, self.site), [])

    def test_type_a_does_not_satisfy_neighbor(self):
        layout = [tower_a(10, 10), tower_a(60, 10)]
        kinds = [v.kind for v in validate_layout(layout, self.site)]
        self.assertEqual(kinds, [ViolationType.NEIGHBOR, ViolationType.NEIGHBOR])

    def test_violation_order(self):
        """Per building: boundary, plaza, spacing, then neighbour"""
        layout = [tower_a(5, 5), tower_b(90, 60), tower_b(95, 65)]
        violations = validate_layout(layout, self.site)
        self.assertEqual(
            [(v.kind, v.buildings) for v in violations],
            [
                (ViolationType.BOUNDARY, (0,)),
                (ViolationType.NEIGHBOR, (0,)),
                (ViolationType.PLAZA, (1,)),
                (ViolationType.SPACING, (1, 2)),
                (ViolationType.PLAZA, (2,)),
            ]
        )
        self.assertEqual(violations[3].distance, 0.0)

    def test_input_not_mutated(self):
        layout = [tower_a(10, 10), tower_b(43, 33.5)]
        snapshot = list(layout)
        validate_layout(layout, self.site)
        self.assertEqual(layout, snapshot)


class TestViolation(unittest.TestCase):
    """Test Violation helpers"""

    def test_describe(self):
        self.assertIn("plaza", Violation(ViolationType.PLAZA, (3,)).describe())
        self.assertIn("4.6", Violation(ViolationType.SPACING, (0, 1), 4.6).describe())

    def test_to_dict(self):
        self.assertEqual(Violation(ViolationType.BOUNDARY, (2,)).to_dict(),
                         {"type": "boundary", "building": 2})
        self.assertEqual(Violation(ViolationType.SPACING, (0, 1), 4.6).to_dict(),
                         {"type": "spacing", "buildings": [0, 1], "distance": 4.6})


if __name__ == '__main__':
    unittest.main()
