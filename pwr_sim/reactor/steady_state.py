"""
Steady-State Factory

Builds equilibrium reactor states and finds the rod position that makes a
given thermal condition exactly critical.
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional

from ..exceptions import InfeasibleConditionError, ValidationError
from .params import DEFAULT_PARAMS, ReactorParams
from .physics.fission_products import equilibrium_fission_products
from .physics.point_kinetics import equilibrium_precursors
from .physics.thermal_hydraulics import equilibrium_temperatures
from .reactivity_model import feedback_reactivity, rod_worth_shape
from .state import ReactorState

logger = logging.getLogger(__name__)

BISECTION_ITERATIONS = 50


def create_steady_state(power: float = 1.0, params: ReactorParams = DEFAULT_PARAMS,
                        pump_on: bool = True) -> ReactorState:
    """
    Create an equilibrium state at a constant power

    Precursors are in balance with the power, temperatures carry the power
    through to the heat sink and, when the xenon chain is enabled, iodine
    and xenon sit at their equilibrium inventories.

    Args:
        power: Normalized power (1.0 = nominal)
        params: Reactor parameters
        pump_on: Pump status selecting the sink conductance

    Returns:
        ReactorState at t = 0
    """
    if not isinstance(power, (int, float)) or not math.isfinite(power) or power < 0:
        raise ValidationError(f"Steady-state power must be finite and non-negative, got {power!r}")

    fuel_temperature, coolant_temperature = equilibrium_temperatures(power, pump_on, params)
    iodine, xenon = equilibrium_fission_products(power, params)

    logger.debug(
        f"Steady state at P={power:.4f}: Tf={fuel_temperature:.1f}K, Tc={coolant_temperature:.1f}K"
    )
    return ReactorState(
        t=0.0,
        power=float(power),
        precursors=equilibrium_precursors(power, params),
        fuel_temperature=fuel_temperature,
        coolant_temperature=coolant_temperature,
        iodine_135=iodine,
        xenon_135=xenon,
    )


def compute_critical_rod_position(fuel_temperature: float, coolant_temperature: float,
                                  params: ReactorParams = DEFAULT_PARAMS,
                                  xenon_135: float = 0.0,
                                  boron_ppm: Optional[float] = None) -> Optional[float]:
    """
    Find the rod position giving zero total reactivity

    The rods must cancel the feedback and the shutdown margin; the required
    worth is inverted through the rod worth curve by bisection.

    Returns:
        Rod position in [0, 1], or None when the required worth lies outside
        what the rods can supply
    """
    target = params.shutdown_margin - feedback_reactivity(
        fuel_temperature, coolant_temperature, params, xenon_135=xenon_135, boron_ppm=boron_ppm
    )

    if target < 0 or target > params.rod_worth_max:
        return None
    if params.rod_worth_max == 0:
        return 0.0

    normalized = target / params.rod_worth_max
    low, high = 0.0, 1.0
    for _ in range(BISECTION_ITERATIONS):
        mid = 0.5 * (low + high)
        if rod_worth_shape(mid) < normalized:
            low = mid
        else:
            high = mid
    return 0.5 * (low + high)


@dataclass(frozen=True)
class CriticalSteadyState:
    """Equilibrium state together with the rod position holding it critical"""

    state: ReactorState
    rod_position: float


def create_critical_steady_state(power: float = 1.0, params: ReactorParams = DEFAULT_PARAMS,
                                 pump_on: bool = True) -> CriticalSteadyState:
    """
    Create a steady state and the rod position that makes it critical

    Raises:
        InfeasibleConditionError: the rods cannot balance the feedback
    """
    state = create_steady_state(power, params, pump_on)
    rod = compute_critical_rod_position(
        state.fuel_temperature, state.coolant_temperature, params, xenon_135=state.xenon_135
    )
    if rod is None:
        raise InfeasibleConditionError(
            f"No critical rod position exists at P={power}",
            [
                f"required rod worth is outside [0, {params.rod_worth_max}]",
                f"Tf={state.fuel_temperature:.1f}K, Tc={state.coolant_temperature:.1f}K",
            ],
        )
    logger.debug(f"Critical rod position at P={power:.4f}: {rod:.4f}")
    return CriticalSteadyState(state=state, rod_position=rod)


__all__ = [
    'BISECTION_ITERATIONS',
    'CriticalSteadyState',
    'compute_critical_rod_position',
    'create_critical_steady_state',
    'create_steady_state',
    'equilibrium_fission_products',
]
