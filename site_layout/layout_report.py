"""
Candidate Layout Reporting

Summary statistics over a ranked candidate pool and a plain text report
of the ranking and the selected layout's violations.
"""

import statistics
from typing import Any, Dict, Sequence

from .data_models import RankedLayout


def summarize_candidates(layouts: Sequence[RankedLayout]) -> Dict[str, Any]:
    """
    Summary statistics of a ranked candidate pool

    Returns:
        Dictionary with candidate and valid counts, best/worst/mean score
        and mean building count
    """
    if not layouts:
        return {
            'candidates': 0,
            'valid_candidates': 0,
            'best_score': None,
            'worst_score': None,
            'mean_score': None,
            'mean_buildings': 0.0
        }

    scores = [layout.score for layout in layouts]
    return {
        'candidates': len(layouts),
        'valid_candidates': sum(1 for layout in layouts if layout.is_valid),
        'best_score': max(scores),
        'worst_score': min(scores),
        'mean_score': statistics.mean(scores),
        'mean_buildings': statistics.mean(layout.building_count for layout in layouts)
    }


def format_layout_report(layouts: Sequence[RankedLayout], selected: int = 0, detailed: bool = True) -> str:
    """Generate a human-readable report of the ranked candidates"""
    lines = []
    lines.append("=" * 60)
    lines.append("SITE LAYOUT CANDIDATES")
    lines.append("=" * 60)

    if not layouts:
        lines.append("No layouts generated")
        lines.append("=" * 60)
        return "\n".join(lines)

    lines.append("Rank | A  | B  | Total | Area    | Score     | Valid")
    lines.append("-----|----|----|-------|---------|-----------|------")
    for index, layout in enumerate(layouts):
        stats = layout.stats
        marker = "*" if index == selected else " "
        lines.append(
            f"{marker}{layout.display_rank:3} | {stats.type_a_count:2} | {stats.type_b_count:2} | "
            f"{stats.total_buildings:5} | {stats.total_area:7.0f} | {layout.score:9.0f} | "
            f"{'yes' if stats.is_valid else 'no'}"
        )
    lines.append("")

    summary = summarize_candidates(layouts)
    lines.append(f"Valid candidates: {summary['valid_candidates']}/{summary['candidates']}")
    lines.append(f"Score range: {summary['worst_score']:.0f} - {summary['best_score']:.0f}")
    lines.append("")

    current = layouts[selected]
    lines.append(f"LAYOUT {current.display_rank} (attempt {current.attempt}):")
    if detailed:
        for index, building in enumerate(current.buildings):
            lines.append(
                f"  [{index}] Type {building.typology.value} at "
                f"({building.x:6.1f}, {building.y:6.1f}) {building.width:g}x{building.height:g}"
            )
        lines.append("")

    if current.violations:
        lines.append(f"VIOLATIONS ({len(current.violations)}):")
        for violation in current.violations:
            lines.append(f"  - {violation.describe()}")
    else:
        lines.append("VIOLATIONS: All constraints satisfied")

    lines.append("=" * 60)
    return "\n".join(lines)
