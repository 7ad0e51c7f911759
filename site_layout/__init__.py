"""
Site Layout Generator

Stochastic placement of two building typologies around a central plaza,
with rule validation and best-of-N candidate ranking.
"""

__version__ = "1.0.0"
__author__ = "Site Layout Team"

# Export main classes for easy importing
from .geometry import Rect, rectangle_gap, overlaps_zone, within_bounds
from .data_models import (
    Typology,
    Strategy,
    ViolationType,
    BuildingTemplate,
    SiteConfig,
    PlacedBuilding,
    Violation,
    LayoutStats,
    RankedLayout,
    GenerationConfig
)
from .validator import validate_layout, is_layout_valid
from .placement import (
    generate_random_layout,
    generate_column_aligned_layout,
    column_x_positions,
    get_strategy
)
from .scoring import score_layout, compute_stats
from .selector import CandidateSelector, SelectorBusyError, SelectorState, generate, select_candidate
from .config_loader import ConfigurationError, load_config, create_site_config, create_generation_config
from .layout_report import summarize_candidates, format_layout_report

__all__ = [
    'Rect',
    'rectangle_gap',
    'overlaps_zone',
    'within_bounds',
    'Typology',
    'Strategy',
    'ViolationType',
    'BuildingTemplate',
    'SiteConfig',
    'PlacedBuilding',
    'Violation',
    'LayoutStats',
    'RankedLayout',
    'GenerationConfig',
    'validate_layout',
    'is_layout_valid',
    'generate_random_layout',
    'generate_column_aligned_layout',
    'column_x_positions',
    'get_strategy',
    'score_layout',
    'compute_stats',
    'CandidateSelector',
    'SelectorBusyError',
    'SelectorState',
    'generate',
    'select_candidate',
    'ConfigurationError',
    'load_config',
    'create_site_config',
    'create_generation_config',
    'summarize_candidates',
    'format_layout_report'
]
