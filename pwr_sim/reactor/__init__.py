"""
Reactor Kernel Package

Point kinetics, lumped thermal-hydraulics and reactivity feedback for a
reduced-order PWR core, with input guards and a post-step safety clamp.
"""

from .params import DEFAULT_PARAMS, NUM_PRECURSOR_GROUPS, ReactorParams, create_params, load_params, save_params
from .state import (
    ControlInputs,
    IntegrationMethod,
    ReactivityComponents,
    ReactorState,
    SimulationConfig,
    SimulationRecord,
)
from .control_sources import ConstantControls, ControlSource, ScheduledControls
from .reactivity_model import rod_worth_shape, total_reactivity
from .reactor_physics import ModelState, ReactorModel, transition
from .steady_state import (
    CriticalSteadyState,
    compute_critical_rod_position,
    create_critical_steady_state,
    create_steady_state,
)

__all__ = [
    'DEFAULT_PARAMS', 'NUM_PRECURSOR_GROUPS', 'ReactorParams', 'create_params', 'load_params',
    'save_params', 'ControlInputs', 'IntegrationMethod', 'ReactivityComponents', 'ReactorState',
    'SimulationConfig', 'SimulationRecord', 'ControlSource', 'ConstantControls',
    'ScheduledControls', 'rod_worth_shape', 'total_reactivity', 'ModelState', 'ReactorModel',
    'transition', 'CriticalSteadyState', 'compute_critical_rod_position',
    'create_critical_steady_state', 'create_steady_state',
]
