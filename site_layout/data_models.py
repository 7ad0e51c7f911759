"""
Data models for site layout generation.

Immutable records shared by the placement strategies, the validator, the
scorer and the candidate selector: the site configuration, the two
building templates, placed buildings, violations and ranked layouts.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from .geometry import Rect

# Share of the usable area assumed to be buildable when estimating capacity
MAX_BUILDINGS_SAFETY_FACTOR = 0.6


class Typology(Enum):
    """Building typologies"""
    A = "A"
    B = "B"


class Strategy(Enum):
    """Placement strategies available to the candidate selector"""
    RANDOM = "random"
    COLUMN_ALIGNED = "column-aligned"

    @classmethod
    def parse(cls, value: Any) -> 'Strategy':
        """Resolve a strategy from an enum member or its name"""
        if isinstance(value, cls):
            return value
        name = str(value).strip().lower()
        if name == "aligned":
            name = cls.COLUMN_ALIGNED.value
        try:
            return cls(name)
        except ValueError:
            valid = ", ".join(s.value for s in cls)
            raise ValueError(f"Unknown strategy: {value!r}. Must be one of: {valid}")


class ViolationType(Enum):
    """Kinds of layout rule violations"""
    BOUNDARY = "boundary"
    PLAZA = "plaza"
    SPACING = "spacing"
    NEIGHBOR = "neighbor"


@dataclass(frozen=True)
class BuildingTemplate:
    """Footprint template for one typology"""
    typology: Typology
    width: float
    height: float
    color: str = "gray"  # For rendering only

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Template {self.typology.value} must have positive dimensions, "
                f"got {self.width} x {self.height}"
            )

    @property
    def area(self) -> float:
        return self.width * self.height


TYPE_A_TEMPLATE = BuildingTemplate(Typology.A, 30, 20, "#2563eb")
TYPE_B_TEMPLATE = BuildingTemplate(Typology.B, 20, 20, "#059669")


@dataclass(frozen=True)
class SiteConfig:
    """
    Site, plaza, templates and placement rules as one immutable value

    Every core operation receives its SiteConfig explicitly, so several
    site configurations can be used side by side.

    Attributes:
        width: Site width
        height: Site height
        plaza_width: Width of the exclusion zone centred on the site
        plaza_height: Height of the exclusion zone centred on the site
        boundary_clearance: Minimum distance between a building and the site edge
        min_spacing: Minimum gap between any two buildings
        neighbor_distance: Maximum gap from a Type A to its nearest Type B
        type_a_ratio: Share of Type A buildings in a requested layout
        min_buildings: Lower bound of the requested building count
        type_a: Type A footprint template
        type_b: Type B footprint template
    """
    width: float = 200
    height: float = 140
    plaza_width: float = 40
    plaza_height: float = 40
    boundary_clearance: float = 10
    min_spacing: float = 15
    neighbor_distance: float = 60
    type_a_ratio: float = 0.4
    min_buildings: int = 6
    type_a: BuildingTemplate = TYPE_A_TEMPLATE
    type_b: BuildingTemplate = TYPE_B_TEMPLATE

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Site dimensions must be positive, got {self.width} x {self.height}")
        if not (0 <= self.plaza_width <= self.width and 0 <= self.plaza_height <= self.height):
            raise ValueError(
                f"Plaza ({self.plaza_width} x {self.plaza_height}) must fit inside "
                f"the site ({self.width} x {self.height})"
            )
        for name in ("boundary_clearance", "min_spacing", "neighbor_distance"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative")
        if not 0 <= self.type_a_ratio <= 1:
            raise ValueError(f"type_a_ratio must be within [0, 1], got {self.type_a_ratio}")
        if self.min_buildings < 0:
            raise ValueError("min_buildings must be non-negative")
        if self.type_a.typology is not Typology.A or self.type_b.typology is not Typology.B:
            raise ValueError("type_a and type_b templates must carry typologies A and B")

    @property
    def site_rect(self) -> Rect:
        return Rect(0, 0, self.width, self.height)

    @property
    def plaza_rect(self) -> Rect:
        """Exclusion zone, always centred on the site"""
        return Rect(
            x=(self.width - self.plaza_width) / 2,
            y=(self.height - self.plaza_height) / 2,
            width=self.plaza_width,
            height=self.plaza_height
        )

    @property
    def templates(self) -> Dict[Typology, BuildingTemplate]:
        return {Typology.A: self.type_a, Typology.B: self.type_b}

    def template(self, typology: Typology) -> BuildingTemplate:
        return self.templates[typology]

    @property
    def max_buildings(self) -> int:
        """
        Conservative capacity estimate for the site

        Usable area (clearance-inset site minus plaza) divided by the mean
        template footprint grown by the minimum spacing, scaled by a safety
        factor and floored.
        """
        clearance = self.boundary_clearance
        usable_area = ((self.width - 2 * clearance) * (self.height - 2 * clearance)
                       - self.plaza_width * self.plaza_height)
        spacing = self.min_spacing
        avg_building_area = ((self.type_a.width + spacing) * (self.type_a.height + spacing) +
                             (self.type_b.width + spacing) * (self.type_b.height + spacing)) / 2
        return max(0, math.floor(usable_area / avg_building_area * MAX_BUILDINGS_SAFETY_FACTOR))

    @property
    def building_count_range(self) -> Tuple[int, int]:
        """Inclusive range of building counts a caller may request"""
        return self.min_buildings, self.max_buildings


@dataclass(frozen=True)
class PlacedBuilding:
    """A template instantiated at top-left position (x, y)"""
    template: BuildingTemplate
    x: float
    y: float

    @property
    def typology(self) -> Typology:
        return self.template.typology

    @property
    def width(self) -> float:
        return self.template.width

    @property
    def height(self) -> float:
        return self.template.height

    @property
    def area(self) -> float:
        return self.template.area

    @property
    def footprint(self) -> Rect:
        return Rect(self.x, self.y, self.template.width, self.template.height)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.typology.value,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "color": self.template.color,
        }


@dataclass(frozen=True)
class Violation:
    """
    A single rule violation found in a layout.

    Attributes:
        kind: Which rule was broken
        buildings: Offending building index, or index pair for spacing
        distance: Measured gap rounded to one decimal (spacing only)
    """
    kind: ViolationType
    buildings: Tuple[int, ...]
    distance: Optional[float] = None

    def describe(self) -> str:
        """Human readable one-line description"""
        if self.kind is ViolationType.SPACING:
            i, j = self.buildings
            return f"Buildings {i} and {j} are {self.distance} apart (too close)"
        index = self.buildings[0]
        if self.kind is ViolationType.BOUNDARY:
            return f"Building {index} breaks the boundary clearance"
        if self.kind is ViolationType.PLAZA:
            return f"Building {index} overlaps the plaza"
        return f"Building {index} (Type A) has no Type B neighbour in range"

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"type": self.kind.value}
        if len(self.buildings) == 1:
            data["building"] = self.buildings[0]
        else:
            data["buildings"] = list(self.buildings)
        if self.distance is not None:
            data["distance"] = self.distance
        return data


@dataclass(frozen=True)
class LayoutStats:
    """Summary figures derived from a layout and its violations"""
    type_a_count: int
    type_b_count: int
    total_buildings: int
    total_area: float
    is_valid: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tower_a": self.type_a_count,
            "tower_b": self.type_b_count,
            "total_buildings": self.total_buildings,
            "total_area": self.total_area,
            "is_valid": self.is_valid,
        }


@dataclass(frozen=True)
class RankedLayout:
    """
    A scored candidate layout kept by the selector.

    Attributes:
        buildings: Placed buildings in placement order
        violations: Violations found by the validator
        score: Fitness score (higher is better)
        stats: Derived summary figures
        display_rank: 1-based position in the ranked list
        attempt: 0-based index of the generation attempt that produced it
    """
    buildings: Tuple[PlacedBuilding, ...]
    violations: Tuple[Violation, ...]
    score: float
    stats: LayoutStats
    display_rank: int
    attempt: int

    @property
    def is_valid(self) -> bool:
        return self.stats.is_valid

    @property
    def building_count(self) -> int:
        return len(self.buildings)

    def to_dict(self) -> Dict[str, Any]:
        """Plain data view for rendering or JSON output"""
        return {
            "id": self.attempt,
            "display_id": self.display_rank,
            "score": self.score,
            "buildings": [b.to_dict() for b in self.buildings],
            "violations": [v.to_dict() for v in self.violations],
            "stats": self.stats.to_dict(),
        }


@dataclass(frozen=True)
class GenerationConfig:
    """
    Parameters of one generation run.

    Attributes:
        strategy: Placement strategy (enum or name)
        target_building_count: Number of buildings each attempt aims for
        num_candidates: Number of ranked layouts returned
        attempts_per_candidate: Raw attempts generated per returned layout
        random_seed: Seed for a fresh generator when none is injected
    """
    strategy: Strategy = Strategy.RANDOM
    target_building_count: int = 6
    num_candidates: int = 6
    attempts_per_candidate: int = 3
    random_seed: Optional[int] = None

    def __post_init__(self):
        object.__setattr__(self, "strategy", Strategy.parse(self.strategy))
        if self.target_building_count < 0:
            raise ValueError("target_building_count must be non-negative")
        if self.num_candidates <= 0:
            raise ValueError("num_candidates must be positive")
        if self.attempts_per_candidate <= 0:
            raise ValueError("attempts_per_candidate must be positive")

    @property
    def total_attempts(self) -> int:
        return self.num_candidates * self.attempts_per_candidate
