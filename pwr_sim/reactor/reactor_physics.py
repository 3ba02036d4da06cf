"""
Reactor Model

Owns one ReactorState and advances it under operator controls. Each step is
the pure ``transition`` function (validate, update scram timing, compute
reactivity, integrate, clamp); ReactorModel holds the current ModelState
and hands out copies so callers can never alias its internals.
"""

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..exceptions import ValidationError
from .control_sources import ControlsLike, as_control_source
from .params import DEFAULT_PARAMS, ReactorParams
from .physics.integrators import get_integrator
from .reactivity_model import total_reactivity
from .safety.guards import (
    clamp_state,
    validate_controls,
    validate_initial_state,
    validate_params,
    validate_timestep,
)
from .state import (
    ControlInputs,
    ReactivityComponents,
    ReactorState,
    SimulationConfig,
    SimulationRecord,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ModelState:
    """Reactor state plus the scram bookkeeping carried between steps"""

    reactor: ReactorState
    scram_start_time: Optional[float] = None
    scram_was_active: bool = False

    def __hash__(self):
        return hash((self.reactor.t, tuple(self.reactor.to_vector().tolist()),
                     self.scram_start_time, self.scram_was_active))


def update_scram_timing(model_state: ModelState,
                        controls: ControlInputs) -> Tuple[Optional[float], bool]:
    """
    Track scram edges

    A rising edge starts the insertion clock at the current time, a falling
    edge clears it, and a held signal keeps the original start.

    Returns:
        Tuple of (scram_start_time, scram_active)
    """
    start = model_state.scram_start_time
    if controls.scram and not model_state.scram_was_active:
        start = model_state.reactor.t
    elif not controls.scram and model_state.scram_was_active:
        start = None
    return start, bool(controls.scram)


def transition(model_state: ModelState, dt: float, controls: ControlInputs,
               params: ReactorParams,
               config: SimulationConfig) -> Tuple[ModelState, ReactivityComponents, List[str]]:
    """
    Advance a model state by one timestep

    Args:
        model_state: State before the step (not modified)
        dt: Timestep in seconds
        controls: Control inputs held for the step
        params: Reactor parameters
        config: Integration method and clamp reporting

    Returns:
        Tuple of (new model state, reactivity used for the step, clamp messages)

    Raises:
        TimestepError: dt outside the method's bounds
        ControlInputError: malformed controls
    """
    validate_timestep(dt, config.method, params)
    validate_controls(controls, params)

    scram_start_time, scram_active = update_scram_timing(model_state, controls)
    reactivity = total_reactivity(model_state.reactor, controls, scram_start_time, params)

    integrate = get_integrator(config.method)
    integrated = integrate(model_state.reactor, reactivity.rho_total, controls.pump_on, dt, params)
    reactor, messages = clamp_state(integrated, params, config)

    return ModelState(reactor, scram_start_time, scram_active), reactivity, messages


class ReactorModel:
    """Stateful wrapper stepping a reactor core through time"""

    def __init__(self, initial_state: ReactorState, params: ReactorParams = DEFAULT_PARAMS,
                 config: Optional[SimulationConfig] = None):
        """
        Initialize the model

        Args:
            initial_state: Starting state; copied, never aliased
            params: Reactor parameters
            config: Run configuration, defaults to RK4 without clamp warnings

        Raises:
            ParameterError: invalid parameter pack
            StateValidationError: invalid initial state
        """
        validate_params(params)
        validate_initial_state(initial_state, params)
        if config is None:
            config = SimulationConfig()
        elif not isinstance(config, SimulationConfig):
            raise ValidationError(f"config must be a SimulationConfig, got {type(config).__name__}")

        self.params = params
        self.config = config
        self._model_state = ModelState(initial_state.copy())
        self.last_clamp_messages: List[str] = []

    @property
    def model_state(self) -> ModelState:
        """Snapshot of the state and scram bookkeeping"""
        return ModelState(
            self._model_state.reactor.copy(),
            self._model_state.scram_start_time,
            self._model_state.scram_was_active,
        )

    @property
    def scram_start_time(self) -> Optional[float]:
        return self._model_state.scram_start_time

    def step(self, dt: float, controls: ControlInputs) -> ReactorState:
        """
        Advance the reactor by one timestep

        Args:
            dt: Timestep in seconds
            controls: Control inputs for the step

        Returns:
            Copy of the new state
        """
        previous = self._model_state
        self._model_state, _, self.last_clamp_messages = transition(
            previous, dt, controls, self.params, self.config
        )

        if self._model_state.scram_was_active and not previous.scram_was_active:
            logger.info(f"Reactor scram initiated at t={previous.reactor.t:.2f}s")
        elif previous.scram_was_active and not self._model_state.scram_was_active:
            logger.info(f"Reactor scram cleared at t={previous.reactor.t:.2f}s")

        return self._model_state.reactor.copy()

    def get_state(self) -> ReactorState:
        """Copy of the current state"""
        return self._model_state.reactor.copy()

    def get_params(self) -> ReactorParams:
        return self.params

    def get_reactivity(self, controls: ControlInputs) -> ReactivityComponents:
        """
        Reactivity breakdown for the current state under the given controls

        Does not modify the model. A scram demand that has not yet been
        stepped contributes nothing because its insertion clock starts now.
        """
        validate_controls(controls, self.params)
        scram_start_time, _ = update_scram_timing(self._model_state, controls)
        return total_reactivity(self._model_state.reactor, controls, scram_start_time, self.params)

    def _record(self, controls: ControlInputs) -> SimulationRecord:
        state = self._model_state.reactor
        return SimulationRecord(
            t=float(state.t),
            power=float(state.power),
            fuel_temperature=float(state.fuel_temperature),
            coolant_temperature=float(state.coolant_temperature),
            rho=float(self.get_reactivity(controls).rho_total),
            rod=float(controls.rod),
            pump_on=bool(controls.pump_on),
            scram=bool(controls.scram),
        )

    def run(self, duration: float, dt: float, controls: ControlsLike,
            record_interval: Optional[float] = None) -> List[SimulationRecord]:
        """
        Run the model for a fixed duration

        Args:
            duration: Simulated time in seconds
            dt: Timestep in seconds
            controls: ControlInputs, a ControlSource, or a callable of time
            record_interval: Seconds between records, defaults to dt

        Returns:
            Records at the requested cadence; the first and final samples are
            always present and the final one uses the controls at the end time
        """
        if not isinstance(duration, (int, float)) or not math.isfinite(duration) or duration < 0:
            raise ValidationError(f"Duration must be a finite non-negative number, got {duration!r}")
        validate_timestep(dt, self.config.method, self.params)
        if record_interval is None:
            record_interval = dt
        if not isinstance(record_interval, (int, float)) or not math.isfinite(record_interval) \
                or record_interval <= 0:
            raise ValidationError(f"Record interval must be positive, got {record_interval!r}")

        source = as_control_source(controls)
        start = self._model_state.reactor.t
        end = start + duration
        last_record = start - record_interval
        records = []

        while self._model_state.reactor.t < end - dt / 2:
            t = self._model_state.reactor.t
            step_controls = source.controls_at(t)
            if t >= last_record + record_interval - dt / 2:
                records.append(self._record(step_controls))
                last_record = t
            self.step(dt, step_controls)

        records.append(self._record(source.controls_at(self._model_state.reactor.t)))
        return records

    def reset(self, new_state: ReactorState) -> None:
        """
        Replace the state and clear scram bookkeeping; parameters are kept

        Raises:
            StateValidationError: invalid new state
        """
        validate_initial_state(new_state, self.params)
        self._model_state = ModelState(new_state.copy())
        self.last_clamp_messages = []
        logger.debug(f"Reactor model reset to t={new_state.t:.2f}s, P={new_state.power:.4f}")
