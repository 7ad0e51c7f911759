"""
Placement strategies for candidate layouts.

Two greedy, non-backtracking generators: random placement anywhere in the
clearance-inset site, and column-aligned placement where buildings share
a small set of precomputed x offsets. Both draw from an injected
numpy Generator and keep no state between calls.
"""

import logging
import math
from typing import Callable, Dict, List, Sequence

import numpy as np

from .data_models import PlacedBuilding, SiteConfig, Strategy, Typology
from .geometry import overlaps_zone, rectangle_gap, within_bounds

logger = logging.getLogger(__name__)

RANDOM_PLACEMENT_ATTEMPTS = 100  # position draws per building
COLUMN_Y_ATTEMPTS = 20  # y draws per column attempt


def build_typology_sequence(site: SiteConfig,
                            target_count: int,
                            rng: np.random.Generator) -> List[Typology]:
    """
    Typologies to place, in a uniformly shuffled attempt order

    ceil(type_a_ratio * target_count) Type A buildings, the rest Type B.
    """
    num_a = min(target_count, math.ceil(target_count * site.type_a_ratio))
    num_b = target_count - num_a
    sequence = [Typology.A] * num_a + [Typology.B] * num_b
    order = rng.permutation(len(sequence))
    return [sequence[i] for i in order]


def is_acceptable(candidate: PlacedBuilding,
                  placed: Sequence[PlacedBuilding],
                  site: SiteConfig) -> bool:
    """Check a candidate position against the plaza, the boundary and placed buildings"""
    rect = candidate.footprint
    if overlaps_zone(rect, site.plaza_rect):
        return False
    if not within_bounds(rect, site.site_rect, site.boundary_clearance):
        return False
    for existing in placed:
        if rectangle_gap(rect, existing.footprint) < site.min_spacing:
            return False
    return True


def generate_random_layout(site: SiteConfig,
                           target_count: int,
                           rng: np.random.Generator) -> List[PlacedBuilding]:
    """
    Place buildings at uniformly random positions

    Each building gets RANDOM_PLACEMENT_ATTEMPTS draws inside the
    clearance-inset site. The first building that cannot be placed ends
    generation and the partial layout is returned.

    Args:
        site: Site configuration
        target_count: Number of buildings requested
        rng: Random number generator

    Returns:
        Placed buildings, possibly fewer than target_count
    """
    buildings: List[PlacedBuilding] = []
    clearance = site.boundary_clearance

    for typology in build_typology_sequence(site, target_count, rng):
        template = site.template(typology)
        placed = False

        for _ in range(RANDOM_PLACEMENT_ATTEMPTS):
            candidate = PlacedBuilding(
                template=template,
                x=float(rng.random() * (site.width - template.width - 2 * clearance) + clearance),
                y=float(rng.random() * (site.height - template.height - 2 * clearance) + clearance)
            )
            if is_acceptable(candidate, buildings, site):
                buildings.append(candidate)
                placed = True
                break

        if not placed:
            logger.debug("Random placement stopped at %d/%d buildings: no room for Type %s",
                         len(buildings), target_count, typology.value)
            break

    return buildings


def column_x_positions(site: SiteConfig) -> List[float]:
    """
    X offsets of the usable placement columns

    Columns are spread evenly across the clearance-inset width, their
    count set by the mean template width plus the minimum spacing.
    Columns whose Type A footprint would cross the plaza horizontally
    are dropped.
    """
    min_x = site.boundary_clearance
    max_x = site.width - site.boundary_clearance - max(site.type_a.width, site.type_b.width)

    avg_width = (site.type_a.width + site.type_b.width) / 2
    num_columns = math.floor((max_x - min_x) / (avg_width + site.min_spacing)) + 1
    column_spacing = (max_x - min_x) / max(1, num_columns - 1)

    plaza = site.plaza_rect
    columns = []
    for i in range(num_columns):
        x = min_x + i * column_spacing
        if x < plaza.right and x + site.type_a.width > plaza.left:
            continue
        columns.append(x)
    return columns


def generate_column_aligned_layout(site: SiteConfig,
                                   target_count: int,
                                   rng: np.random.Generator) -> List[PlacedBuilding]:
    """
    Place buildings in shared vertical columns

    Columns are visited round-robin; the cursor carries over from one
    building to the next and advances after every column attempt. Each
    building gets up to 2 * len(columns) column attempts of
    COLUMN_Y_ATTEMPTS random y offsets each. The first building that
    cannot be placed ends generation and the partial layout is returned.

    Args:
        site: Site configuration
        target_count: Number of buildings requested
        rng: Random number generator

    Returns:
        Placed buildings, possibly fewer than target_count
    """
    buildings: List[PlacedBuilding] = []
    columns = column_x_positions(site)
    if not columns:
        logger.debug("Column-aligned placement has no usable columns")
        return buildings

    sequence = build_typology_sequence(site, target_count, rng)
    current_column = 0

    for typology in sequence:
        template = site.template(typology)
        min_y = site.boundary_clearance
        max_y = site.height - site.boundary_clearance - template.height
        placed = False
        column_attempts = 0

        while not placed and column_attempts < len(columns) * 2:
            x = columns[current_column % len(columns)]

            for _ in range(COLUMN_Y_ATTEMPTS):
                candidate = PlacedBuilding(
                    template=template,
                    x=x,
                    y=float(min_y + rng.random() * (max_y - min_y))
                )
                if is_acceptable(candidate, buildings, site):
                    buildings.append(candidate)
                    placed = True
                    break

            current_column += 1
            column_attempts += 1

        if not placed:
            logger.debug("Column-aligned placement stopped at %d/%d buildings: no room for Type %s",
                         len(buildings), target_count, typology.value)
            break

    return buildings


LayoutGenerator = Callable[[SiteConfig, int, np.random.Generator], List[PlacedBuilding]]

STRATEGIES: Dict[Strategy, LayoutGenerator] = {
    Strategy.RANDOM: generate_random_layout,
    Strategy.COLUMN_ALIGNED: generate_column_aligned_layout,
}


def get_strategy(strategy) -> LayoutGenerator:
    """Look up a layout generator by Strategy or strategy name"""
    return STRATEGIES[Strategy.parse(strategy)]
