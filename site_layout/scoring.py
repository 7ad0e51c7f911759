"""
Layout scoring and summary statistics.

The score rewards built footprint and building count and penalises each
violation heavily, so valid layouts rank above invalid ones of similar
size while equally invalid layouts remain comparable.
"""

from typing import Sequence

from .data_models import LayoutStats, PlacedBuilding, Typology, Violation

AREA_WEIGHT = 100
VIOLATION_PENALTY = 10000
BUILDING_BONUS = 500


def total_footprint_area(buildings: Sequence[PlacedBuilding]) -> float:
    return sum(b.area for b in buildings)


def score_layout(buildings: Sequence[PlacedBuilding], violations: Sequence[Violation]) -> float:
    """100 x footprint area - 10000 x violations + 500 x buildings"""
    score = AREA_WEIGHT * total_footprint_area(buildings)
    score -= VIOLATION_PENALTY * len(violations)
    score += BUILDING_BONUS * len(buildings)
    return score


def compute_stats(buildings: Sequence[PlacedBuilding], violations: Sequence[Violation]) -> LayoutStats:
    count_a = sum(1 for b in buildings if b.typology is Typology.A)
    count_b = sum(1 for b in buildings if b.typology is Typology.B)
    return LayoutStats(
        type_a_count=count_a,
        type_b_count=count_b,
        total_buildings=count_a + count_b,
        total_area=total_footprint_area(buildings),
        is_valid=len(violations) == 0
    )
