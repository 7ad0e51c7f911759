"""
Configuration Loading System

Loads YAML configuration files and converts them to the site and
generation configuration objects used by the layout generator.
"""

import time
from typing import Any, Dict, List, Optional

import yaml

from .data_models import BuildingTemplate, GenerationConfig, SiteConfig, Strategy, Typology

DEFAULT_SITE = SiteConfig()


class ConfigurationError(Exception):
    """Raised when configuration is invalid"""
    pass


def load_config(config_path: str = "config.yaml") -> Dict[str, Any]:
    """Load configuration from YAML file"""
    try:
        with open(config_path, 'r') as f:
            config = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigurationError(f"Configuration file not found: {config_path}")
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in configuration file: {e}")

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigurationError("Configuration root must be a mapping")
    return config


def _create_template(typology: Typology, template_config: Dict[str, Any],
                     default: BuildingTemplate) -> BuildingTemplate:
    return BuildingTemplate(
        typology=typology,
        width=template_config.get("width", default.width),
        height=template_config.get("height", default.height),
        color=template_config.get("color", default.color)
    )


def create_site_config(config: Dict[str, Any]) -> SiteConfig:
    """
    Create the site configuration from a loaded config dictionary

    Missing sections and keys fall back to the reference site.
    """
    site_config = config.get("site", {}) or {}
    plaza_config = config.get("plaza", {}) or {}
    constraint_config = config.get("constraints", {}) or {}
    template_config = config.get("templates", {}) or {}

    try:
        return SiteConfig(
            width=site_config.get("width", DEFAULT_SITE.width),
            height=site_config.get("height", DEFAULT_SITE.height),
            boundary_clearance=site_config.get("boundary_clearance", DEFAULT_SITE.boundary_clearance),
            plaza_width=plaza_config.get("width", DEFAULT_SITE.plaza_width),
            plaza_height=plaza_config.get("height", DEFAULT_SITE.plaza_height),
            min_spacing=constraint_config.get("min_spacing", DEFAULT_SITE.min_spacing),
            neighbor_distance=constraint_config.get("neighbor_distance", DEFAULT_SITE.neighbor_distance),
            type_a_ratio=constraint_config.get("type_a_ratio", DEFAULT_SITE.type_a_ratio),
            min_buildings=constraint_config.get("min_buildings", DEFAULT_SITE.min_buildings),
            type_a=_create_template(Typology.A, template_config.get("A", {}) or {}, DEFAULT_SITE.type_a),
            type_b=_create_template(Typology.B, template_config.get("B", {}) or {}, DEFAULT_SITE.type_b)
        )
    except (ValueError, TypeError) as e:
        raise ConfigurationError(f"Invalid site configuration: {e}")


def resolve_random_seed(seed: Any) -> Optional[int]:
    """
    Normalise the configured random seed

    None stays None (fresh generator per run); "random" draws a seed from
    the clock so it can be reported and reused.
    """
    if seed is None:
        return None
    if seed == "random":
        return int(time.time() * 1000000) % 2147483647
    if isinstance(seed, str) and seed.isdigit():
        return int(seed)
    if isinstance(seed, int) and not isinstance(seed, bool):
        return seed
    raise ConfigurationError(f"Invalid random_seed: {seed!r}")


def create_generation_config(config: Dict[str, Any],
                             site: Optional[SiteConfig] = None,
                             strategy: Optional[str] = None,
                             target_buildings: Optional[int] = None,
                             random_seed: Any = None) -> GenerationConfig:
    """
    Create the generation configuration from a loaded config dictionary

    Args:
        config: Loaded configuration
        site: Site used to bound the building count (created from config if omitted)
        strategy: Override for generation.strategy
        target_buildings: Override for generation.target_buildings
        random_seed: Override for generation.random_seed

    Returns:
        GenerationConfig ready for the candidate selector
    """
    if site is None:
        site = create_site_config(config)
    generation_config = config.get("generation", {}) or {}

    strategy_name = strategy if strategy is not None else generation_config.get("strategy", "random")
    count = target_buildings if target_buildings is not None else generation_config.get(
        "target_buildings", site.min_buildings)
    seed = random_seed if random_seed is not None else generation_config.get("random_seed")

    min_count, max_count = site.building_count_range
    if not isinstance(count, int) or not min_count <= count <= max_count:
        raise ConfigurationError(
            f"target_buildings ({count}) must be an integer in [{min_count}, {max_count}]"
        )

    try:
        return GenerationConfig(
            strategy=Strategy.parse(strategy_name),
            target_building_count=count,
            num_candidates=generation_config.get("num_candidates", 6),
            attempts_per_candidate=generation_config.get("attempts_per_candidate", 3),
            random_seed=resolve_random_seed(seed)
        )
    except (ValueError, TypeError) as e:
        raise ConfigurationError(f"Invalid generation configuration: {e}")


def validate_config(config: Dict[str, Any]) -> List[str]:
    """
    Validate configuration and return list of issues

    Returns:
        List of validation error messages (empty if valid)
    """
    issues = []

    try:
        site = create_site_config(config)
    except ConfigurationError as e:
        issues.append(str(e))
        site = None

    generation_config = config.get("generation", {}) or {}

    strategy = generation_config.get("strategy", "random")
    try:
        Strategy.parse(strategy)
    except ValueError:
        issues.append(f"Unknown strategy: {strategy}")

    for key in ("num_candidates", "attempts_per_candidate"):
        value = generation_config.get(key, 1)
        if not isinstance(value, int) or value <= 0:
            issues.append(f"{key} must be a positive integer")

    if site is not None:
        count = generation_config.get("target_buildings", site.min_buildings)
        min_count, max_count = site.building_count_range
        if max_count < min_count:
            issues.append(f"Site capacity ({max_count}) is below the minimum building count ({min_count})")
        elif not isinstance(count, int) or not min_count <= count <= max_count:
            issues.append(f"target_buildings ({count}) must be in [{min_count}, {max_count}]")

    return issues


def print_config_summary(config_path: str = "config.yaml"):
    """Print a summary of the configuration"""
    try:
        config = load_config(config_path)
        site = create_site_config(config)
    except ConfigurationError as e:
        print(f"Configuration Error: {e}")
        return

    generation_config = config.get("generation", {}) or {}

    print("=" * 50)
    print("CONFIGURATION SUMMARY")
    print("=" * 50)
    print(f"Site Size: {site.width:g} x {site.height:g} (clearance {site.boundary_clearance:g})")
    plaza = site.plaza_rect
    print(f"Plaza: {plaza.width:g} x {plaza.height:g} at ({plaza.x:g}, {plaza.y:g})")
    print(f"Min spacing: {site.min_spacing:g}, neighbour distance: {site.neighbor_distance:g}")

    print("\nTemplates:")
    for typology, template in site.templates.items():
        print(f"  Type {typology.value}: {template.width:g} x {template.height:g} ({template.color})")

    min_count, max_count = site.building_count_range
    print(f"\nBuilding count range: {min_count} - {max_count}")
    print(f"Strategy: {generation_config.get('strategy', 'random')}")
    print(f"Target buildings: {generation_config.get('target_buildings', site.min_buildings)}")

    issues = validate_config(config)
    if issues:
        print(f"\nValidation Issues ({len(issues)}):")
        for issue in issues:
            print(f"  - {issue}")
    else:
        print("\nConfiguration is valid ✓")

    print("=" * 50)
