#!/usr/bin/env python3
"""
Site Layout Generator

Main entry point for generating and ranking candidate site layouts.
Prints the ranked candidates and the selected layout's violations.
"""

import sys
import json
import argparse
import logging
import time

from site_layout.config_loader import (
    ConfigurationError,
    load_config,
    create_site_config,
    create_generation_config,
    print_config_summary,
    resolve_random_seed
)
from site_layout.layout_report import format_layout_report, summarize_candidates
from site_layout.selector import CandidateSelector


def run_generation(config_path="config.yaml", strategy=None, buildings=None, seed=None,
                   select=None, detailed=False, as_json=False, show_summary=True):
    """
    Run one generation and print the ranked candidates

    With as_json, all layouts are printed unless select names one of them.
    """
    config = load_config(config_path)
    site = create_site_config(config)
    generation = create_generation_config(config, site, strategy, buildings, seed)

    if show_summary and not as_json:
        print_config_summary(config_path)

    if not as_json:
        print(f"\nGenerating {generation.total_attempts} {generation.strategy.value} layouts "
              f"with {generation.target_building_count} buildings...")
        if generation.random_seed is not None:
            print(f"Using random seed: {generation.random_seed}")

    start_time = time.time()
    selector = CandidateSelector(site)
    layouts = selector.generate(generation)
    elapsed_time = time.time() - start_time

    if layouts:
        selector.select(select or 0)

    if as_json:
        if select is None:
            print(json.dumps([layout.to_dict() for layout in layouts], indent=2))
        else:
            print(json.dumps(selector.selected.to_dict(), indent=2))
    else:
        print(f"Generation completed in {elapsed_time:.3f} seconds\n")
        print(format_layout_report(layouts, selector.selected_index, detailed=detailed))

    return selector


def run_multiple_trials(num_trials=5, config_path="config.yaml", strategy=None, buildings=None):
    """Run multiple generations with different random seeds for comparison"""
    print("=" * 60)
    print(f"RUNNING {num_trials} RANDOM TRIALS")
    print("=" * 60)

    base_seed = resolve_random_seed("random")

    config = load_config(config_path)
    site = create_site_config(config)
    results = []

    for trial in range(num_trials):
        random_seed = base_seed + trial
        generation = create_generation_config(config, site, strategy, buildings, random_seed)

        layouts = CandidateSelector(site).generate(generation)
        summary = summarize_candidates(layouts)
        summary['trial'] = trial + 1
        summary['seed'] = random_seed
        results.append(summary)

    print("Trial | Seed       | Valid | Best score | Mean buildings")
    print("------|------------|-------|------------|---------------")
    for r in results:
        best = r['best_score'] if r['best_score'] is not None else 0
        print(f"{r['trial']:5} | {r['seed']:10} | {r['valid_candidates']:2}/{r['candidates']:<2} | "
              f"{best:10.0f} | {r['mean_buildings']:14.2f}")

    best_scores = [r['best_score'] for r in results if r['best_score'] is not None]
    if best_scores:
        mean_best = sum(best_scores) / len(best_scores)
        print(f"\nBest Score Statistics:")
        print(f"  Average: {mean_best:.0f}")
        print(f"  Range: {min(best_scores):.0f} - {max(best_scores):.0f}")

    return results


def main():
    """Main entry point with command-line argument parsing"""
    parser = argparse.ArgumentParser(
        description="Site Layout Generator - best-of-N candidate layouts",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python3 main.py                               # Generate with config.yaml settings
  python3 main.py --strategy column-aligned     # Column-aligned placement
  python3 main.py --buildings 8 --seed 42       # Reproducible run with 8 buildings
  python3 main.py --select 2 --detailed         # Show the third-ranked layout in full
  python3 main.py --json                        # Print layouts as JSON
  python3 main.py --trials 10                   # Compare 10 runs with different seeds
        """
    )

    parser.add_argument('--config', '-c', default='config.yaml',
                        help='Configuration file path (default: config.yaml)')
    parser.add_argument('--strategy', '-s', choices=['random', 'column-aligned', 'aligned'],
                        help='Placement strategy (overrides config)')
    parser.add_argument('--buildings', '-b', type=int, metavar='N',
                        help='Target building count (overrides config)')
    parser.add_argument('--seed', type=int, help='Random seed (overrides config)')
    parser.add_argument('--select', type=int, metavar='INDEX',
                        help='0-based index of the layout to show (default: 0, the best); '
                             'with --json, print only this layout')
    parser.add_argument('--detailed', '-d', action='store_true',
                        help='List every building of the selected layout')
    parser.add_argument('--json', action='store_true', help='Print layouts as JSON')
    parser.add_argument('--trials', '-t', type=int, metavar='N',
                        help='Run N generations with different seeds for comparison')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')

    args = parser.parse_args()

    if args.trials and args.seed is not None:
        parser.error("--seed cannot be combined with --trials; each trial draws its own seed")

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s %(levelname)s: %(message)s")

    try:
        if args.trials:
            run_multiple_trials(args.trials, args.config, args.strategy, args.buildings)
        else:
            run_generation(args.config, args.strategy, args.buildings, args.seed,
                           select=args.select, detailed=args.detailed, as_json=args.json)

    except ConfigurationError as e:
        print(f"Configuration Error: {e}")
        sys.exit(1)
    except IndexError:
        print(f"Error: no layout at index {args.select}")
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nOperation cancelled by user.")
        sys.exit(1)
    except Exception as e:
        print(f"Error: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
