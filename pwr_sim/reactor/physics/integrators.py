"""
Time Integrators

Explicit one-step methods advancing a ReactorState by dt with reactivity and
pump status held constant across all stages.

RK4 splits an outer step into equal sub-steps whenever dt times the kernel
stiffness bound would leave the real-axis stability interval, which keeps a
full scram stable at the largest allowed timestep.
"""

import math
from typing import Callable, Dict, Union

from ...exceptions import TimestepError
from ..params import ReactorParams
from ..state import IntegrationMethod, ReactorState
from .kernel import derivative_vector, stiffness_bound

StepFunction = Callable[[ReactorState, float, bool, float, ReactorParams], ReactorState]


def euler_step(state: ReactorState, rho_total: float, pump_on: bool, dt: float,
               params: ReactorParams) -> ReactorState:
    """
    Forward Euler step: y' = y + dt * f(y)

    First order; unstable for dt well above the prompt time constant.
    """
    y = state.to_vector()
    y_next = y + dt * derivative_vector(y, rho_total, pump_on, params)
    return ReactorState.from_vector(state.t + dt, y_next)


def rk4_substeps(rho_total: float, pump_on: bool, dt: float, params: ReactorParams,
                 power: float = 1.0) -> int:
    """Number of equal RK4 sub-steps needed to keep dt * stiffness in bounds"""
    sigma = stiffness_bound(rho_total, pump_on, params, power=power)
    return max(1, math.ceil(dt * sigma / params.stability_limit))


def rk4_step(state: ReactorState, rho_total: float, pump_on: bool, dt: float,
             params: ReactorParams) -> ReactorState:
    """
    Classic fourth-order Runge-Kutta step

    Args:
        state: State at time t
        rho_total: Total reactivity, fixed for the whole step
        pump_on: Pump status, fixed for the whole step
        dt: Outer timestep in seconds
        params: Reactor parameters

    Returns:
        New state at t + dt

    Raises:
        TimestepError: the step would need more than max_rk4_substeps sub-steps
    """
    n = rk4_substeps(rho_total, pump_on, dt, params, power=state.power)
    if n > params.max_rk4_substeps:
        raise TimestepError(
            f"RK4 step of {dt} s needs {n} sub-steps at reactivity {rho_total:.4g}, "
            f"more than max_rk4_substeps={params.max_rk4_substeps}",
            dt,
        )
    h = dt / n

    def f(y):
        return derivative_vector(y, rho_total, pump_on, params)

    y = state.to_vector()
    for _ in range(n):
        k1 = f(y)
        k2 = f(y + 0.5 * h * k1)
        k3 = f(y + 0.5 * h * k2)
        k4 = f(y + h * k3)
        y = y + (h / 6.0) * (k1 + 2.0 * k2 + 2.0 * k3 + k4)

    return ReactorState.from_vector(state.t + dt, y)


INTEGRATORS: Dict[IntegrationMethod, StepFunction] = {
    IntegrationMethod.EULER: euler_step,
    IntegrationMethod.RK4: rk4_step,
}


def get_integrator(method: Union[IntegrationMethod, str]) -> StepFunction:
    """Look up the step function for an integration method"""
    return INTEGRATORS[IntegrationMethod(method)]
