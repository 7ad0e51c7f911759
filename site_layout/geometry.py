"""
Rectangle Geometry Utilities

Axis-aligned rectangle primitives used by the placement strategies and
the layout validator: gap distance, exclusion-zone overlap and clearance
containment.
"""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle with its top-left corner at (x, y)"""
    x: float
    y: float
    width: float
    height: float

    @property
    def left(self) -> float:
        return self.x

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def top(self) -> float:
        return self.y

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def area(self) -> float:
        return self.width * self.height

    def inset(self, margin: float) -> 'Rect':
        """Shrink the rectangle inward by margin on all four sides"""
        return Rect(
            x=self.x + margin,
            y=self.y + margin,
            width=self.width - 2 * margin,
            height=self.height - 2 * margin
        )


def rectangle_gap(r1: Rect, r2: Rect) -> float:
    """
    Euclidean gap between two axis-aligned rectangles

    Returns 0.0 when the rectangles overlap or touch, otherwise the
    straight-line distance between their nearest edges or corners.
    """
    dx = max(0.0, r1.left - r2.right, r2.left - r1.right)
    dy = max(0.0, r1.top - r2.bottom, r2.top - r1.bottom)
    return math.sqrt(dx * dx + dy * dy)


def overlaps_zone(rect: Rect, zone: Rect) -> bool:
    """True iff rect and zone share a region of non-zero area"""
    return not (rect.right <= zone.left or
                rect.left >= zone.right or
                rect.bottom <= zone.top or
                rect.top >= zone.bottom)


def within_bounds(rect: Rect, site: Rect, clearance: float = 0.0) -> bool:
    """True iff rect lies inside site shrunk inward by clearance"""
    inner = site.inset(clearance)
    return (rect.left >= inner.left and
            rect.top >= inner.top and
            rect.right <= inner.right and
            rect.bottom <= inner.bottom)
