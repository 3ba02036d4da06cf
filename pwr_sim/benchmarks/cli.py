"""
Benchmark Command Line

Runs one or all benchmark scenarios and prints a summary table, or writes
the full results as JSON.
"""

import argparse
import logging
import sys
from typing import List, Optional

from rich.console import Console
from rich.table import Table

from ..exceptions import ReactorKernelError
from ..reactor.params import DEFAULT_PARAMS, load_params
from ..reactor.state import IntegrationMethod, SimulationConfig
from .scenarios import SCENARIOS, BenchmarkResult, format_benchmarks_json, run_all_benchmarks

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='PWR reactor kernel benchmarks')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--scenario', choices=sorted(SCENARIOS),
                       help='Run a single scenario')
    group.add_argument('--all', action='store_true',
                       help='Run the standard benchmark set (default)')
    parser.add_argument('--method', choices=[m.value for m in IntegrationMethod],
                        default=IntegrationMethod.RK4.value,
                        help='Integration method (default: rk4)')
    parser.add_argument('--dt', type=float,
                        help='Override the scenario timestep in seconds')
    parser.add_argument('--params', metavar='FILE',
                        help='YAML file with reactor parameter overrides')
    parser.add_argument('--json', action='store_true',
                        help='Print results as JSON instead of a table')
    parser.add_argument('--output', metavar='FILE',
                        help='Write JSON results to a file')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Verbose output')
    return parser


def summary_table(results: List[BenchmarkResult]) -> Table:
    """Build a rich table of benchmark metrics"""
    table = Table(title='Reactor Benchmarks')
    table.add_column('Scenario', style='cyan')
    table.add_column('Points', justify='right')
    table.add_column('P initial', justify='right')
    table.add_column('P final', justify='right')
    table.add_column('P peak', justify='right')
    table.add_column('P min', justify='right')
    table.add_column('Tf final (K)', justify='right')
    table.add_column('Tc final (K)', justify='right')

    for result in results:
        m = result.metrics
        table.add_row(
            result.name,
            str(len(result.time_series)),
            f"{m.power_initial:.4f}",
            f"{m.power_final:.4f}",
            f"{m.power_peak:.4f}",
            f"{m.power_min:.4f}",
            f"{m.fuel_temperature_final:.1f}",
            f"{m.coolant_temperature_final:.1f}",
        )
    return table


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point"""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    console = Console()
    try:
        params = load_params(args.params) if args.params else DEFAULT_PARAMS
        config = SimulationConfig(method=args.method)
        if args.scenario:
            overrides = {} if args.dt is None else {'dt': args.dt}
            results = [SCENARIOS[args.scenario](params=params, config=config, **overrides)]
        else:
            results = run_all_benchmarks(params, config, dt=args.dt)
    except ReactorKernelError as e:
        logger.error(f"Benchmark failed: {e}")
        return 1

    output = format_benchmarks_json(results)
    if args.output:
        try:
            with open(args.output, 'w', encoding='utf-8') as fh:
                fh.write(output)
        except OSError as e:
            logger.error(f"Cannot write benchmark results: {e}")
            return 1
        logger.info(f"Wrote {len(results)} benchmark results to {args.output}")

    if args.json:
        print(output)
    else:
        console.print(summary_table(results))
    return 0


if __name__ == '__main__':
    sys.exit(main())
