"""
Unit tests for the derivative kernel and its physics components.
"""

import numpy as np
import pytest

from pwr_sim.reactor.params import DEFAULT_PARAMS
from pwr_sim.reactor.physics import (
    compute_derivatives,
    derivative_vector,
    equilibrium_fission_products,
    equilibrium_precursors,
    equilibrium_temperatures,
    stiffness_bound,
)
from pwr_sim.reactor.physics.fission_products import fission_product_derivatives
from pwr_sim.reactor.physics.point_kinetics import prompt_stiffness
from pwr_sim.reactor.physics.thermal_hydraulics import thermal_stiffness
from pwr_sim.reactor.steady_state import create_steady_state


class TestEquilibria:
    """Test closed-form equilibria."""

    def test_precursors(self):
        precursors = equilibrium_precursors(1.0, DEFAULT_PARAMS)
        expected = np.array(DEFAULT_PARAMS.beta_i) / (1e-3 * np.array(DEFAULT_PARAMS.lambda_i))
        np.testing.assert_allclose(precursors, expected)

    def test_temperatures_pump_on(self):
        fuel, coolant = equilibrium_temperatures(1.0, True, DEFAULT_PARAMS)
        assert coolant == pytest.approx(350.0)
        assert fuel == pytest.approx(470.0)

    def test_temperatures_pump_off(self):
        fuel, coolant = equilibrium_temperatures(1.0, False, DEFAULT_PARAMS)
        assert coolant == pytest.approx(600.0)
        assert fuel == pytest.approx(720.0)


class TestDerivatives:
    """Test the coupled derivative kernel."""

    def test_zero_at_equilibrium(self):
        state = create_steady_state(1.0)
        d = compute_derivatives(state, 0.0, True, DEFAULT_PARAMS)
        assert d.d_power == pytest.approx(0.0, abs=1e-9)
        np.testing.assert_allclose(d.d_precursors, 0.0, atol=1e-9)
        assert d.d_fuel_temperature == pytest.approx(0.0, abs=1e-9)
        assert d.d_coolant_temperature == pytest.approx(0.0, abs=1e-9)

    def test_positive_reactivity_raises_power(self):
        state = create_steady_state(1.0)
        assert compute_derivatives(state, 0.001, True, DEFAULT_PARAMS).d_power > 0
        assert compute_derivatives(state, -0.001, True, DEFAULT_PARAMS).d_power < 0

    def test_prompt_term(self):
        state = create_steady_state(1.0)
        d = compute_derivatives(state, 0.001, True, DEFAULT_PARAMS)
        assert d.d_power == pytest.approx(0.001 / 1e-3)

    def test_pump_trip_heats_coolant(self):
        state = create_steady_state(1.0, pump_on=True)
        d = compute_derivatives(state, 0.0, False, DEFAULT_PARAMS)
        assert d.d_coolant_temperature > 0
        assert d.d_fuel_temperature == pytest.approx(0.0, abs=1e-9)

    def test_xenon_derivatives_zero_by_default(self):
        # Default packs carry the poison chain inert even with inventories present
        state = create_steady_state(1.0)
        state.iodine_135 = 1e15
        state.xenon_135 = 1e15
        d = compute_derivatives(state, 0.0, True, DEFAULT_PARAMS)
        assert d.d_iodine == 0.0
        assert d.d_xenon == 0.0

    def test_vector_matches_structured(self):
        state = create_steady_state(0.7)
        d = compute_derivatives(state, 0.002, False, DEFAULT_PARAMS)
        vector = derivative_vector(state.to_vector(), 0.002, False, DEFAULT_PARAMS)
        np.testing.assert_allclose(vector, d.as_vector())
        assert len(vector) == 11


class TestFissionProducts:
    """Test the opt-in iodine/xenon chain."""

    def test_equilibrium_xenon(self, xenon_params):
        iodine, xenon = equilibrium_fission_products(1.0, xenon_params)
        assert iodine == pytest.approx(0.0639 * 3e12 / 2.87e-5)
        assert xenon == pytest.approx(1.98e15, rel=0.01)

    def test_balanced_at_equilibrium(self, xenon_params):
        iodine, xenon = equilibrium_fission_products(1.0, xenon_params)
        d_iodine, d_xenon = fission_product_derivatives(1.0, iodine, xenon, xenon_params)
        assert d_iodine == pytest.approx(0.0, abs=1.0)
        assert d_xenon == pytest.approx(0.0, abs=1.0)

    def test_disabled_returns_zero(self):
        assert equilibrium_fission_products(1.0, DEFAULT_PARAMS) == (0.0, 0.0)

    def test_xenon_builds_after_shutdown(self, xenon_params):
        iodine, xenon = equilibrium_fission_products(1.0, xenon_params)
        _, d_xenon = fission_product_derivatives(0.0, iodine, xenon, xenon_params)
        assert d_xenon > 0


class TestStiffness:
    """Test the Jacobian bound used for RK4 sub-stepping."""

    def test_prompt_stiffness(self):
        assert prompt_stiffness(0.0, DEFAULT_PARAMS) == pytest.approx(6.502)
        assert prompt_stiffness(-0.08, DEFAULT_PARAMS) == pytest.approx(86.502)

    def test_scram_dominated_by_kinetics(self):
        sigma = stiffness_bound(-0.08, True, DEFAULT_PARAMS)
        assert sigma == pytest.approx(86.502 + sum(DEFAULT_PARAMS.lambda_i))

    def test_thermal_block(self):
        assert thermal_stiffness(True, DEFAULT_PARAMS) == pytest.approx(2 * 2.5e7 / 1.05e7)
        assert stiffness_bound(0.0, True, DEFAULT_PARAMS) >= thermal_stiffness(True, DEFAULT_PARAMS)
