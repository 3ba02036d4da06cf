"""
Benchmark Scenarios

Standard transients exercising the reactor kernel: steady hold, rod steps,
scram, pump trip, rod ramp and a low-power startup. Each scenario returns
the recorded time series and summary metrics, exportable as JSON.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from dataclass_wizard import JSONWizard

from ..reactor.params import DEFAULT_PARAMS, ReactorParams
from ..reactor.reactor_physics import ReactorModel
from ..reactor.state import ControlInputs, SimulationConfig, SimulationRecord
from ..reactor.steady_state import create_critical_steady_state, create_steady_state

logger = logging.getLogger(__name__)

STEP_TIME = 5.0                 # s, rod steps, ramps and scram start here
PUMP_TRIP_TIME = 10.0           # s


@dataclass
class BenchmarkMetrics(JSONWizard):
    """Summary of a benchmark time series"""

    class _(JSONWizard.Meta):
        key_transform_with_dump = 'SNAKE'

    power_initial: float
    power_final: float
    power_peak: float
    power_min: float
    fuel_temperature_final: float
    coolant_temperature_final: float


@dataclass
class BenchmarkResult(JSONWizard):
    """One benchmark run"""

    class _(JSONWizard.Meta):
        key_transform_with_dump = 'SNAKE'

    name: str
    duration: float
    dt: float
    time_series: List[SimulationRecord]
    metrics: BenchmarkMetrics


def compute_metrics(time_series: List[SimulationRecord]) -> BenchmarkMetrics:
    """Summarize a time series; all zeros when it is empty"""
    if not time_series:
        return BenchmarkMetrics(0.0, 0.0, 0.0, 0.0, 0.0, 0.0)

    powers = [record.power for record in time_series]
    first, last = time_series[0], time_series[-1]
    return BenchmarkMetrics(
        power_initial=first.power,
        power_final=last.power,
        power_peak=max(powers),
        power_min=min(powers),
        fuel_temperature_final=last.fuel_temperature,
        coolant_temperature_final=last.coolant_temperature,
    )


def _run(name: str, model: ReactorModel, duration: float, dt: float,
         controls: Callable[[float], ControlInputs], record_interval: float) -> BenchmarkResult:
    logger.info(f"Running benchmark '{name}' ({duration}s, dt={dt}s)")
    time_series = model.run(duration, dt, controls, record_interval)
    result = BenchmarkResult(
        name=name,
        duration=duration,
        dt=dt,
        time_series=time_series,
        metrics=compute_metrics(time_series),
    )
    logger.debug(f"Benchmark '{name}' finished with P_final={result.metrics.power_final:.4f}")
    return result


def _critical_model(params: ReactorParams, config: Optional[SimulationConfig]):
    critical = create_critical_steady_state(1.0, params, pump_on=True)
    return ReactorModel(critical.state, params, config), critical.rod_position


def run_steady_hold(duration: float = 60.0, dt: float = 0.05,
                    params: ReactorParams = DEFAULT_PARAMS,
                    config: Optional[SimulationConfig] = None) -> BenchmarkResult:
    """Hold the critical rod position at full power; power should not drift"""
    model, rod = _critical_model(params, config)
    controls = ControlInputs(rod=rod)
    return _run('Steady Hold', model, duration, dt, lambda t: controls, 0.5)


def run_rod_insertion(step_size: float = 0.1, duration: float = 60.0, dt: float = 0.05,
                      params: ReactorParams = DEFAULT_PARAMS,
                      config: Optional[SimulationConfig] = None) -> BenchmarkResult:
    """Step the rods in at 5 s; power settles lower"""
    model, rod = _critical_model(params, config)
    new_rod = max(0.0, rod - step_size)

    def controls(t: float) -> ControlInputs:
        return ControlInputs(rod=rod if t < STEP_TIME else new_rod)

    return _run(f'Rod Insertion (step={step_size:.2f})', model, duration, dt, controls, 0.5)


def run_rod_withdrawal(step_size: float = 0.05, duration: float = 60.0, dt: float = 0.05,
                       params: ReactorParams = DEFAULT_PARAMS,
                       config: Optional[SimulationConfig] = None) -> BenchmarkResult:
    """Step the rods out at 5 s; feedback caps the power rise"""
    model, rod = _critical_model(params, config)
    new_rod = min(1.0, rod + step_size)

    def controls(t: float) -> ControlInputs:
        return ControlInputs(rod=rod if t < STEP_TIME else new_rod)

    return _run(f'Rod Withdrawal (step={step_size:.2f})', model, duration, dt, controls, 0.5)


def run_scram(duration: float = 60.0, dt: float = 0.05,
              params: ReactorParams = DEFAULT_PARAMS,
              config: Optional[SimulationConfig] = None) -> BenchmarkResult:
    """Trip the reactor at 5 s; power falls below 20% within seconds"""
    model, rod = _critical_model(params, config)

    def controls(t: float) -> ControlInputs:
        return ControlInputs(rod=rod, scram=t >= STEP_TIME)

    return _run('Scram', model, duration, dt, controls, 0.2)


def run_pump_trip(duration: float = 120.0, dt: float = 0.05,
                  params: ReactorParams = DEFAULT_PARAMS,
                  config: Optional[SimulationConfig] = None) -> BenchmarkResult:
    """Lose forced circulation at 10 s; moderator feedback pulls power down"""
    model, rod = _critical_model(params, config)

    def controls(t: float) -> ControlInputs:
        return ControlInputs(rod=rod, pump_on=t < PUMP_TRIP_TIME)

    return _run('Pump Trip', model, duration, dt, controls, 1.0)


def run_rod_ramp(ramp_rate: float = 0.01, ramp_duration: float = 10.0,
                 duration: float = 60.0, dt: float = 0.05,
                 params: ReactorParams = DEFAULT_PARAMS,
                 config: Optional[SimulationConfig] = None) -> BenchmarkResult:
    """Withdraw the rods at a constant rate starting at 5 s"""
    model, rod = _critical_model(params, config)
    ramp_end = STEP_TIME + ramp_duration

    def controls(t: float) -> ControlInputs:
        position = rod
        if STEP_TIME <= t < ramp_end:
            position = rod + (t - STEP_TIME) * ramp_rate
        elif t >= ramp_end:
            position = rod + ramp_duration * ramp_rate
        return ControlInputs(rod=min(1.0, max(0.0, position)))

    name = f'Rod Ramp (rate={ramp_rate}/s, duration={ramp_duration}s)'
    return _run(name, model, duration, dt, controls, 0.5)


def run_startup(initial_power: float = 0.001, duration: float = 300.0, dt: float = 0.1,
                params: ReactorParams = DEFAULT_PARAMS,
                config: Optional[SimulationConfig] = None) -> BenchmarkResult:
    """Pull rods from 0.3 to 0.7 between 10 s and 200 s starting at low power"""
    model = ReactorModel(create_steady_state(initial_power, params, pump_on=True), params, config)
    initial_rod, final_rod = 0.3, 0.7
    ramp_start, ramp_end = 10.0, 200.0

    def controls(t: float) -> ControlInputs:
        if t < ramp_start:
            position = initial_rod
        elif t < ramp_end:
            progress = (t - ramp_start) / (ramp_end - ramp_start)
            position = initial_rod + progress * (final_rod - initial_rod)
        else:
            position = final_rod
        return ControlInputs(rod=position)

    return _run('Startup Sequence', model, duration, dt, controls, 2.0)


SCENARIOS: Dict[str, Callable[..., BenchmarkResult]] = {
    'steady_hold': run_steady_hold,
    'rod_insertion': run_rod_insertion,
    'rod_withdrawal': run_rod_withdrawal,
    'scram': run_scram,
    'pump_trip': run_pump_trip,
    'rod_ramp': run_rod_ramp,
    'startup': run_startup,
}

# Scenarios included in run_all_benchmarks; startup is run on request only
STANDARD_SCENARIOS = (
    'steady_hold', 'rod_insertion', 'rod_withdrawal', 'scram', 'pump_trip', 'rod_ramp',
)


def run_all_benchmarks(params: ReactorParams = DEFAULT_PARAMS,
                       config: Optional[SimulationConfig] = None,
                       dt: Optional[float] = None) -> List[BenchmarkResult]:
    """Run the standard benchmark set, optionally overriding every timestep"""
    overrides = {} if dt is None else {"dt": dt}
    return [SCENARIOS[name](params=params, config=config, **overrides)
            for name in STANDARD_SCENARIOS]


def format_benchmarks_json(results: List[BenchmarkResult], indent: int = 2) -> str:
    """Serialize benchmark results to a JSON array"""
    return BenchmarkResult.list_to_json(results, indent=indent)
