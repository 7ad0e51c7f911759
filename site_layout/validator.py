"""
Layout validation.

Checks a complete candidate layout against the site rules and reports
every violation found, in a fixed order so results are reproducible.
"""

from typing import List, Sequence

from .data_models import PlacedBuilding, SiteConfig, Typology, Violation, ViolationType
from .geometry import overlaps_zone, rectangle_gap, within_bounds


def validate_layout(buildings: Sequence[PlacedBuilding], site: SiteConfig) -> List[Violation]:
    """
    Find all rule violations in a layout

    For each building in order: boundary clearance, plaza overlap, spacing
    against every later building, then (Type A only) the Type B neighbour
    requirement.

    Args:
        buildings: Placed buildings of one layout
        site: Site configuration providing the rules

    Returns:
        Violations in detection order (empty if the layout is valid)
    """
    violations: List[Violation] = []
    site_rect = site.site_rect
    plaza = site.plaza_rect
    footprints = [b.footprint for b in buildings]

    for i, building in enumerate(buildings):
        rect = footprints[i]

        if not within_bounds(rect, site_rect, site.boundary_clearance):
            violations.append(Violation(ViolationType.BOUNDARY, (i,)))

        if overlaps_zone(rect, plaza):
            violations.append(Violation(ViolationType.PLAZA, (i,)))

        for j in range(i + 1, len(buildings)):
            gap = rectangle_gap(rect, footprints[j])
            if gap < site.min_spacing:
                violations.append(Violation(ViolationType.SPACING, (i, j), round(gap, 1)))

        if building.typology is Typology.A and not _has_type_b_neighbor(i, buildings, footprints, site):
            violations.append(Violation(ViolationType.NEIGHBOR, (i,)))

    return violations


def _has_type_b_neighbor(index, buildings, footprints, site: SiteConfig) -> bool:
    for j, other in enumerate(buildings):
        if j == index or other.typology is not Typology.B:
            continue
        if rectangle_gap(footprints[index], footprints[j]) <= site.neighbor_distance:
            return True
    return False


def is_layout_valid(buildings: Sequence[PlacedBuilding], site: SiteConfig) -> bool:
    """True iff the layout has no violations"""
    return not validate_layout(buildings, site)
