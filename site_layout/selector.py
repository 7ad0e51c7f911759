"""
Best-of-N candidate selection.

Runs a placement strategy many times, validates and scores every raw
attempt, and keeps the highest scoring layouts in rank order. Over-
generation stands in for backtracking: the strategies are greedy, and
scoring filters their output for quality.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .data_models import GenerationConfig, PlacedBuilding, RankedLayout, SiteConfig, Violation
from .placement import get_strategy
from .scoring import compute_stats, score_layout
from .validator import validate_layout

logger = logging.getLogger(__name__)


class SelectorState(Enum):
    IDLE = "idle"
    GENERATING = "generating"
    READY = "ready"


class SelectorBusyError(RuntimeError):
    """Raised when a generation run is requested while one is in flight"""
    pass


@dataclass(frozen=True)
class _ScoredAttempt:
    attempt: int
    buildings: Tuple[PlacedBuilding, ...]
    violations: Tuple[Violation, ...]
    score: float


class CandidateSelector:
    """Generates, ranks and holds the current pool of candidate layouts"""

    def __init__(self,
                 site: Optional[SiteConfig] = None,
                 rng: Optional[np.random.Generator] = None):
        """
        Initialize candidate selector

        Args:
            site: Site configuration (defaults to the reference site)
            rng: Random number generator shared by all runs. When omitted,
                each run uses a generator seeded from its GenerationConfig,
                or a fresh unseeded one if no seed is given.
        """
        self.site = site if site is not None else SiteConfig()
        self.rng = rng
        self.state = SelectorState.IDLE
        self.layouts: List[RankedLayout] = []
        self.selected_index = 0

    @property
    def busy(self) -> bool:
        return self.state is SelectorState.GENERATING

    @property
    def selected(self) -> Optional[RankedLayout]:
        if not self.layouts:
            return None
        return self.layouts[self.selected_index]

    def generate(self, config: GenerationConfig) -> List[RankedLayout]:
        """
        Run a full generation and replace the current candidate pool

        Args:
            config: Strategy, target count and candidate counts for this run

        Returns:
            Up to config.num_candidates layouts, best first
        """
        if self.busy:
            raise SelectorBusyError("A generation run is already in progress")

        previous_state = self.state
        self.state = SelectorState.GENERATING
        try:
            layouts = self._run(config)
        except Exception:
            self.state = previous_state
            raise

        self.layouts = layouts
        self.selected_index = 0
        self.state = SelectorState.READY
        return layouts

    def select(self, index: int) -> RankedLayout:
        """Mark an already generated layout as the current one"""
        layout = select_candidate(self.layouts, index)
        self.selected_index = index if index >= 0 else len(self.layouts) + index
        return layout

    def _generator_for(self, config: GenerationConfig) -> np.random.Generator:
        if self.rng is not None:
            return self.rng
        return np.random.default_rng(config.random_seed)

    def _run(self, config: GenerationConfig) -> List[RankedLayout]:
        rng = self._generator_for(config)
        strategy = get_strategy(config.strategy)

        attempts: List[_ScoredAttempt] = []
        for attempt in range(config.total_attempts):
            buildings = strategy(self.site, config.target_building_count, rng)
            violations = validate_layout(buildings, self.site)
            attempts.append(_ScoredAttempt(
                attempt=attempt,
                buildings=tuple(buildings),
                violations=tuple(violations),
                score=score_layout(buildings, violations)
            ))
            logger.debug("Attempt %d: %d buildings, %d violations, score %.0f",
                         attempt, len(buildings), len(violations), attempts[-1].score)

        # sorted() is stable, so equal scores keep generation order
        ranked = sorted(attempts, key=lambda a: a.score, reverse=True)[:config.num_candidates]

        layouts = [
            RankedLayout(
                buildings=a.buildings,
                violations=a.violations,
                score=a.score,
                stats=compute_stats(a.buildings, a.violations),
                display_rank=rank,
                attempt=a.attempt
            )
            for rank, a in enumerate(ranked, start=1)
        ]

        logger.info("Generated %d %s attempts for %d buildings, kept %d (%d valid)",
                    len(attempts), config.strategy.value, config.target_building_count,
                    len(layouts), sum(1 for layout in layouts if layout.is_valid))
        return layouts


def generate(config: GenerationConfig,
             site: Optional[SiteConfig] = None,
             rng: Optional[np.random.Generator] = None) -> List[RankedLayout]:
    """Generate ranked candidate layouts with a one-off selector"""
    return CandidateSelector(site, rng).generate(config)


def select_candidate(layouts: Sequence[RankedLayout], index: int) -> RankedLayout:
    """Pure lookup of a generated layout; raises IndexError when out of range"""
    return layouts[index]
