"""
Input Guards and Safety Clamp

Guards reject malformed timesteps, controls, states and parameter packs by
raising typed validation errors before anything is integrated. The clamp
runs after every step and pulls the state back inside its physical envelope
without ever raising.
"""

import logging
import math
import numbers
from typing import List, Tuple

import numpy as np

from ...exceptions import (
    ControlInputError,
    ParameterError,
    StateValidationError,
    TimestepError,
)
from ..params import DEFAULT_PARAMS, ReactorParams
from ..state import ControlInputs, IntegrationMethod, ReactorState, SimulationConfig

logger = logging.getLogger(__name__)


def _is_real(value) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, (bool, np.bool_))


def _is_bool(value) -> bool:
    return isinstance(value, (bool, np.bool_))


def validate_timestep(dt, method, params: ReactorParams) -> None:
    """
    Check dt against the bounds of the integration method

    Raises:
        TimestepError: dt is not a finite positive number inside
            [dt_min, dt_max] for the method
    """
    if not _is_real(dt) or not math.isfinite(dt):
        raise TimestepError(f"Timestep must be a finite number, got {dt!r}", dt=dt)
    if dt <= 0:
        raise TimestepError(f"Timestep must be positive, got {dt}", dt=dt)
    if dt < params.dt_min:
        raise TimestepError(f"Timestep {dt} is below the minimum {params.dt_min}", dt=dt)

    method = IntegrationMethod(method)
    dt_max = params.dt_max_euler if method is IntegrationMethod.EULER else params.dt_max_rk4
    if dt > dt_max:
        raise TimestepError(
            f"Timestep {dt} exceeds the {method.value} maximum {dt_max}", dt=dt
        )


def validate_controls(controls, params: ReactorParams = DEFAULT_PARAMS) -> None:
    """
    Check control inputs are well formed

    Raises:
        ControlInputError: wrong type, rod outside [0, 1] or not finite,
            non-boolean flags, or boron outside [0, boron_max_ppm]
    """
    if not isinstance(controls, ControlInputs):
        raise ControlInputError(
            f"Controls must be ControlInputs, got {type(controls).__name__}"
        )

    errors = []
    if not _is_real(controls.rod) or not math.isfinite(controls.rod):
        errors.append(f"rod must be a finite number, got {controls.rod!r}")
    elif not 0.0 <= controls.rod <= 1.0:
        errors.append(f"rod must be in [0, 1], got {controls.rod}")
    if not _is_bool(controls.pump_on):
        errors.append(f"pump_on must be a boolean, got {controls.pump_on!r}")
    if not _is_bool(controls.scram):
        errors.append(f"scram must be a boolean, got {controls.scram!r}")
    if controls.boron_ppm is not None:
        if not _is_real(controls.boron_ppm) or not math.isfinite(controls.boron_ppm):
            errors.append(f"boron_ppm must be a finite number, got {controls.boron_ppm!r}")
        elif not 0.0 <= controls.boron_ppm <= params.boron_max_ppm:
            errors.append(
                f"boron_ppm must be in [0, {params.boron_max_ppm}], got {controls.boron_ppm}"
            )

    if errors:
        raise ControlInputError("Invalid control inputs", errors)


def validate_initial_state(state, params: ReactorParams) -> None:
    """
    Check a state is structurally and physically plausible

    Raises:
        StateValidationError: listing every problem found
    """
    if not isinstance(state, ReactorState):
        raise StateValidationError(
            f"State must be a ReactorState, got {type(state).__name__}"
        )

    errors = []
    scalars = {
        't': state.t,
        'power': state.power,
        'fuel_temperature': state.fuel_temperature,
        'coolant_temperature': state.coolant_temperature,
        'iodine_135': state.iodine_135,
        'xenon_135': state.xenon_135,
    }
    for name, value in scalars.items():
        if not _is_real(value) or not math.isfinite(value):
            errors.append(f"{name} must be a finite number, got {value!r}")

    precursors = np.asarray(state.precursors)
    if precursors.ndim != 1 or len(precursors) != params.num_groups:
        errors.append(
            f"Expected {params.num_groups} precursor groups, got shape {precursors.shape}"
        )
    elif not np.all(np.isfinite(precursors)):
        errors.append("Precursor concentrations must be finite")
    elif np.any(precursors < 0):
        errors.append("Precursor concentrations must be non-negative")

    if errors:
        raise StateValidationError("Invalid reactor state", errors)

    if state.power < 0:
        errors.append(f"power must be non-negative, got {state.power}")
    if state.fuel_temperature <= 0:
        errors.append(f"fuel_temperature must be positive (K), got {state.fuel_temperature}")
    if state.coolant_temperature <= 0:
        errors.append(f"coolant_temperature must be positive (K), got {state.coolant_temperature}")
    if state.iodine_135 < 0:
        errors.append(f"iodine_135 must be non-negative, got {state.iodine_135}")
    if state.xenon_135 < 0:
        errors.append(f"xenon_135 must be non-negative, got {state.xenon_135}")

    if errors:
        raise StateValidationError("Invalid reactor state", errors)


def validate_params(params) -> None:
    """
    Check a parameter pack

    ReactorParams validates itself on construction; this re-runs the checks
    so packs built around __post_init__ are caught too.
    """
    if not isinstance(params, ReactorParams):
        raise ParameterError(f"Parameters must be ReactorParams, got {type(params).__name__}")
    errors = params.validation_errors()
    if errors:
        raise ParameterError("Reactor parameter validation failed", errors)


def _clamp(value: float, low: float, high: float) -> float:
    if math.isnan(value):
        return low
    return min(max(value, low), high)


def clamp_state(state: ReactorState, params: ReactorParams,
                config: SimulationConfig) -> Tuple[ReactorState, List[str]]:
    """
    Pull a state back inside the physical envelope

    Non-finite values are clamp events: NaN goes to the lower bound and
    infinities to the matching bound. Never raises.

    Args:
        state: Freshly integrated state
        params: Reactor parameters supplying the bounds
        config: Run configuration; the warning sink is notified only when
            warn_on_clamp is set

    Returns:
        Tuple of (clamped copy, list of clamp messages)
    """
    messages = []
    clamped = state.copy()

    bounds = (
        ('power', params.power_min, params.power_max),
        ('fuel_temperature', params.fuel_temp_min, params.fuel_temp_max),
        ('coolant_temperature', params.coolant_temp_min, params.coolant_temp_max),
    )
    for name, low, high in bounds:
        value = getattr(state, name)
        new_value = _clamp(value, low, high)
        if new_value != value:
            messages.append(f"{name} clamped from {value} to {new_value}")
            setattr(clamped, name, new_value)

    precursors = state.precursors
    bad = ~np.isfinite(precursors) | (precursors < 0)
    if np.any(bad):
        groups = [int(i) + 1 for i in np.flatnonzero(bad)]
        fixed = np.where(np.isnan(precursors), 0.0, precursors)
        fixed = np.where(fixed < 0, 0.0, fixed)
        # +inf has no upper bound to clamp to
        fixed = np.where(np.isposinf(fixed), 0.0, fixed)
        clamped.precursors = fixed
        messages.append(f"precursors clamped to non-negative in groups {groups}")

    for name in ('iodine_135', 'xenon_135'):
        value = getattr(state, name)
        if not math.isfinite(value) or value < 0:
            setattr(clamped, name, 0.0)
            messages.append(f"{name} clamped from {value} to 0.0")

    if messages and config.warn_on_clamp:
        config.warning_sink.warn(
            f"Safety clamp at t={state.t:.3f}s: " + "; ".join(messages)
        )

    return clamped, messages
