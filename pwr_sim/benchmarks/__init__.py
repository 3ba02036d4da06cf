"""
Benchmark Harness

Standard reactor transients for validation and time-series generation.
"""

from .scenarios import (
    SCENARIOS,
    BenchmarkMetrics,
    BenchmarkResult,
    compute_metrics,
    format_benchmarks_json,
    run_all_benchmarks,
    run_pump_trip,
    run_rod_insertion,
    run_rod_ramp,
    run_rod_withdrawal,
    run_scram,
    run_startup,
    run_steady_hold,
)

__all__ = [
    'SCENARIOS', 'BenchmarkMetrics', 'BenchmarkResult', 'compute_metrics',
    'format_benchmarks_json', 'run_all_benchmarks', 'run_steady_hold', 'run_rod_insertion',
    'run_rod_withdrawal', 'run_scram', 'run_pump_trip', 'run_rod_ramp', 'run_startup',
]
