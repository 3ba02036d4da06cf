"""
Benchmark scenario tests.

Each scenario is checked against the qualitative behavior of the transient
it models.
"""

import json

import numpy as np
import pytest

from pwr_sim.benchmarks import (
    SCENARIOS,
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
from pwr_sim.benchmarks.cli import main
from pwr_sim.reactor.params import DEFAULT_PARAMS, create_params, save_params
from pwr_sim.reactor.safety.warning_sinks import CollectingWarningSink
from pwr_sim.reactor.state import SimulationConfig


class TestScenarios:
    """Test the standard transients."""

    def test_steady_hold(self):
        result = run_steady_hold()
        assert result.name == 'Steady Hold'
        assert all(abs(r.power - 1.0) < 1e-3 for r in result.time_series)
        assert result.metrics.coolant_temperature_final == pytest.approx(350.0, abs=0.1)

    def test_rod_insertion(self):
        result = run_rod_insertion()
        metrics = result.metrics
        assert metrics.power_initial == pytest.approx(1.0)
        assert 0.3 < metrics.power_final < 0.9
        assert metrics.power_peak == pytest.approx(1.0, abs=1e-6)

    def test_rod_withdrawal(self):
        metrics = run_rod_withdrawal().metrics
        assert 1.0 < metrics.power_final < 1.5
        assert metrics.power_peak > 1.0

    def test_scram(self):
        result = run_scram()
        after_trip = [r for r in result.time_series if r.t >= 5.0]
        assert all(r.power <= 1.0 + 1e-6 for r in after_trip)
        assert all(r.power < 0.2 for r in result.time_series if r.t >= 7.0)
        assert result.metrics.power_final < 0.1
        assert all(r.scram for r in after_trip)

    def test_scram_record_cadence(self):
        result = run_scram(duration=10.0)
        assert len(result.time_series) == 51

    def test_scram_at_max_rk4_timestep(self):
        sink = CollectingWarningSink()
        config = SimulationConfig(warn_on_clamp=True, warning_sink=sink)
        result = run_scram(duration=20.0, dt=DEFAULT_PARAMS.dt_max_rk4, config=config)
        powers = np.array([r.power for r in result.time_series])
        assert np.all(np.isfinite(powers))
        assert np.all(powers > 0)
        assert result.metrics.power_final < 0.2
        assert len(sink) == 0

    def test_pump_trip(self):
        metrics = run_pump_trip().metrics
        assert metrics.power_final < 0.6
        assert metrics.coolant_temperature_final > 350.0

    def test_rod_ramp(self):
        result = run_rod_ramp()
        assert result.metrics.power_final > 1.0
        assert result.time_series[-1].rod == pytest.approx(result.time_series[0].rod + 0.1)

    def test_startup(self):
        result = run_startup()
        metrics = result.metrics
        assert metrics.power_initial == pytest.approx(0.001)
        assert metrics.power_final > 10 * metrics.power_initial
        assert metrics.power_peak <= DEFAULT_PARAMS.power_max
        assert result.time_series[-1].rod == pytest.approx(0.7)

    def test_custom_params(self):
        params = create_params(alpha_coolant=-3.0e-4)
        result = run_rod_insertion(duration=10.0, params=params)
        assert result.metrics.power_final < 1.0


class TestHarness:
    """Test the scenario registry, metrics and export."""

    def test_registry(self):
        assert set(SCENARIOS) == {
            'steady_hold', 'rod_insertion', 'rod_withdrawal', 'scram',
            'pump_trip', 'rod_ramp', 'startup',
        }

    def test_run_all(self):
        results = run_all_benchmarks(dt=0.1)
        assert len(results) == 6
        assert results[0].name == 'Steady Hold'
        assert all(r.dt == 0.1 for r in results)

    def test_empty_metrics(self):
        metrics = compute_metrics([])
        assert metrics.power_initial == 0.0
        assert metrics.power_peak == 0.0
        assert metrics.coolant_temperature_final == 0.0

    def test_json_export(self):
        result = run_steady_hold(duration=1.0)
        data = json.loads(format_benchmarks_json([result]))
        assert len(data) == 1
        assert data[0]['name'] == 'Steady Hold'
        assert data[0]['metrics']['power_final'] == pytest.approx(1.0)
        assert data[0]['time_series'][0]['fuel_temperature'] == pytest.approx(470.0)
        assert isinstance(result, BenchmarkResult)


class TestCli:
    """Test the benchmark command line."""

    def test_json_output(self, capsys):
        assert main(['--scenario', 'steady_hold', '--json']) == 0
        data = json.loads(capsys.readouterr().out)
        assert data[0]['name'] == 'Steady Hold'

    def test_table_output(self, capsys):
        assert main(['--scenario', 'scram', '--dt', '0.1']) == 0
        assert 'Reactor Benchmarks' in capsys.readouterr().out

    def test_output_file(self, tmp_path):
        path = tmp_path / 'results.json'
        assert main(['--scenario', 'steady_hold', '--output', str(path), '--json']) == 0
        assert json.loads(path.read_text())[0]['dt'] == 0.05

    def test_params_file(self, tmp_path, capsys):
        path = tmp_path / 'params.yaml'
        save_params(create_params(scram_tau=0.5), path)
        assert main(['--scenario', 'scram', '--params', str(path), '--json']) == 0
        assert json.loads(capsys.readouterr().out)[0]['name'] == 'Scram'

    def test_euler_timestep_rejected(self):
        assert main(['--scenario', 'steady_hold', '--method', 'euler']) == 1

    def test_missing_params_file(self, tmp_path, caplog):
        path = tmp_path / 'missing.yaml'
        assert main(['--scenario', 'steady_hold', '--params', str(path)]) == 1
        assert 'missing.yaml' in caplog.text

    def test_malformed_params_file(self, tmp_path):
        path = tmp_path / 'broken.yaml'
        path.write_text('scram_tau: [1.0\n')
        assert main(['--scenario', 'steady_hold', '--params', str(path)]) == 1

    def test_unwritable_output(self, tmp_path):
        path = tmp_path / 'no_such_dir' / 'results.json'
        assert main(['--scenario', 'steady_hold', '--output', str(path)]) == 1
