"""
Unit tests for the Euler and RK4 integrators.
"""

import numpy as np
import pytest

from pwr_sim.exceptions import TimestepError
from pwr_sim.reactor.params import DEFAULT_PARAMS, create_params
from pwr_sim.reactor.physics import INTEGRATORS, euler_step, get_integrator, rk4_step, rk4_substeps
from pwr_sim.reactor.physics.kernel import stiffness_bound
from pwr_sim.reactor.reactor_physics import ReactorModel
from pwr_sim.reactor.state import ControlInputs, IntegrationMethod, SimulationConfig
from pwr_sim.reactor.steady_state import create_critical_steady_state, create_steady_state


class TestSteps:
    """Test single integration steps."""

    @pytest.mark.parametrize('step', [euler_step, rk4_step])
    def test_equilibrium_preserved(self, step):
        state = create_steady_state(1.0)
        new = step(state, 0.0, True, 0.01, DEFAULT_PARAMS)
        assert new.t == pytest.approx(0.01)
        assert new.power == pytest.approx(1.0, abs=1e-9)
        assert new.fuel_temperature == pytest.approx(470.0)

    @pytest.mark.parametrize('step', [euler_step, rk4_step])
    def test_input_not_modified(self, step):
        state = create_steady_state(1.0)
        before = state.to_vector()
        step(state, 0.005, True, 0.05 if step is rk4_step else 0.01, DEFAULT_PARAMS)
        np.testing.assert_array_equal(state.to_vector(), before)
        assert state.t == 0.0

    def test_pump_status_held_for_step(self):
        state = create_steady_state(1.0)
        on = rk4_step(state, 0.0, True, 0.2, DEFAULT_PARAMS)
        off = rk4_step(state, 0.0, False, 0.2, DEFAULT_PARAMS)
        assert off.coolant_temperature > on.coolant_temperature


class TestSubstepping:
    """Test RK4 stability sub-stepping."""

    def test_single_step_near_critical(self):
        assert rk4_substeps(0.0, True, 0.05, DEFAULT_PARAMS) == 1

    def test_full_scram_at_max_dt(self):
        assert rk4_substeps(-0.08, True, 0.2, DEFAULT_PARAMS) == 8

    @pytest.mark.parametrize('rho', [0.005, 0.0, -0.02, -0.08, -0.1])
    @pytest.mark.parametrize('dt', [0.001, 0.05, 0.2])
    def test_substep_inside_stability_interval(self, rho, dt):
        n = rk4_substeps(rho, True, dt, DEFAULT_PARAMS)
        h = dt / n
        assert h * stiffness_bound(rho, True, DEFAULT_PARAMS) <= DEFAULT_PARAMS.stability_limit + 1e-12

    def test_substep_cap(self):
        params = create_params(max_rk4_substeps=4)
        state = create_steady_state(1.0, params)
        with pytest.raises(TimestepError) as exc_info:
            rk4_step(state, -0.08, True, 0.2, params)
        assert exc_info.value.dt == 0.2
        rk4_step(state, -0.08, True, 0.05, params)

    def test_rk4_stable_where_euler_diverges(self):
        state = create_steady_state(1.0)
        rk4 = rk4_step(state, -0.08, True, 0.2, DEFAULT_PARAMS)
        assert 0.0 < rk4.power < 1.0
        assert np.all(rk4.precursors > 0)


class TestEulerInstability:
    """Forward Euler blows up on the prompt mode at large dt."""

    def test_unphysical_after_one_step(self):
        state = create_steady_state(1.0)
        new = euler_step(state, -0.08, True, 0.2, DEFAULT_PARAMS)
        assert new.power < 0

    def test_grows_without_bound(self):
        state = create_steady_state(1.0)
        for _ in range(3):
            state = euler_step(state, -0.08, True, 0.2, DEFAULT_PARAMS)
        assert abs(state.power) > 100.0


class TestAgreement:
    """Euler at a fine step and RK4 at a coarse step describe the same transient."""

    def test_small_step_one_second(self):
        critical = create_critical_steady_state(1.0)
        controls = ControlInputs(rod=critical.rod_position + 0.01)

        euler = ReactorModel(critical.state, config=SimulationConfig(method='euler'))
        rk4 = ReactorModel(critical.state, config=SimulationConfig(method='rk4'))
        euler_power = euler.run(1.0, 0.001, controls, record_interval=1.0)[-1].power
        rk4_power = rk4.run(1.0, 0.001, controls, record_interval=1.0)[-1].power

        assert euler_power == pytest.approx(rk4_power, rel=0.01)
        assert rk4_power > 1.0

    def test_rod_insertion(self):
        critical = create_critical_steady_state(1.0)
        controls = ControlInputs(rod=critical.rod_position - 0.05)

        euler = ReactorModel(critical.state, config=SimulationConfig(method='euler'))
        rk4 = ReactorModel(critical.state, config=SimulationConfig(method='rk4'))
        euler_records = euler.run(5.0, 0.002, controls, record_interval=1.0)
        rk4_records = rk4.run(5.0, 0.02, controls, record_interval=1.0)

        assert euler_records[-1].power == pytest.approx(rk4_records[-1].power, rel=0.02)
        assert euler_records[-1].fuel_temperature == pytest.approx(
            rk4_records[-1].fuel_temperature, rel=0.01
        )


class TestRegistry:
    """Test integrator lookup."""

    def test_lookup(self):
        assert get_integrator('rk4') is rk4_step
        assert get_integrator(IntegrationMethod.EULER) is euler_step
        assert set(INTEGRATORS) == set(IntegrationMethod)

    def test_unknown(self):
        with pytest.raises(ValueError):
            get_integrator('midpoint')
