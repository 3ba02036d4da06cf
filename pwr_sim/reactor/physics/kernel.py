"""
Reactor Derivative Kernel

Couples point kinetics, the lumped thermal model and the poison chain into
the time derivative of the full state vector. Pure mathematics: no clamping
and no validation happen here.
"""

from dataclasses import dataclass

import numpy as np

from ..params import ReactorParams
from ..state import ReactorState
from .fission_products import fission_product_derivatives, fission_product_stiffness
from .point_kinetics import prompt_stiffness, solve_point_kinetics
from .thermal_hydraulics import calculate_thermal_hydraulics, thermal_stiffness


@dataclass
class StateDerivatives:
    """Time derivatives of every state variable"""

    d_power: float
    d_precursors: np.ndarray
    d_fuel_temperature: float
    d_coolant_temperature: float
    d_iodine: float = 0.0
    d_xenon: float = 0.0

    def as_vector(self) -> np.ndarray:
        """Pack in ReactorState.to_vector order"""
        return np.concatenate((
            [self.d_power],
            self.d_precursors,
            [self.d_fuel_temperature, self.d_coolant_temperature, self.d_iodine, self.d_xenon],
        ))


def _evaluate(power: float, precursors: np.ndarray, fuel_temperature: float,
              coolant_temperature: float, iodine_135: float, xenon_135: float,
              rho_total: float, pump_on: bool, params: ReactorParams) -> StateDerivatives:
    d_power, d_precursors = solve_point_kinetics(rho_total, power, precursors, params)
    d_fuel, d_coolant = calculate_thermal_hydraulics(
        power, fuel_temperature, coolant_temperature, pump_on, params
    )
    d_iodine, d_xenon = fission_product_derivatives(power, iodine_135, xenon_135, params)
    return StateDerivatives(
        d_power=d_power,
        d_precursors=d_precursors,
        d_fuel_temperature=d_fuel,
        d_coolant_temperature=d_coolant,
        d_iodine=d_iodine,
        d_xenon=d_xenon,
    )


def compute_derivatives(state: ReactorState, rho_total: float, pump_on: bool,
                        params: ReactorParams) -> StateDerivatives:
    """
    Compute the time derivatives of all state variables

    Args:
        state: Current reactor state
        rho_total: Total reactivity in Δk/k
        pump_on: Primary pump running
        params: Reactor parameters

    Returns:
        StateDerivatives for the state
    """
    return _evaluate(
        state.power,
        state.precursors,
        state.fuel_temperature,
        state.coolant_temperature,
        state.iodine_135,
        state.xenon_135,
        rho_total,
        pump_on,
        params,
    )


def derivative_vector(y: np.ndarray, rho_total: float, pump_on: bool,
                      params: ReactorParams) -> np.ndarray:
    """compute_derivatives on a packed state vector"""
    n = params.num_groups
    return _evaluate(
        y[0], y[1:1 + n], y[1 + n], y[2 + n], y[3 + n], y[4 + n],
        rho_total, pump_on, params,
    ).as_vector()


def stiffness_bound(rho_total: float, pump_on: bool, params: ReactorParams,
                    power: float = 1.0) -> float:
    """
    Upper bound on the spectral radius of the kernel Jacobian (1/s)

    With reactivity held fixed the Jacobian is block triangular (kinetics
    drives temperatures and poisons, nothing feeds back within a step), so
    the bound is the largest Gershgorin bound over the blocks.
    """
    kinetics = prompt_stiffness(rho_total, params) + sum(params.lambda_i)
    return max(
        kinetics,
        thermal_stiffness(pump_on, params),
        fission_product_stiffness(power, params),
    )
