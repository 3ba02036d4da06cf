"""
pwr_sim - reduced-order PWR reactor kernel for operator training

Usage:
    from pwr_sim import ControlInputs, ReactorModel, create_critical_steady_state

    critical = create_critical_steady_state(1.0)
    model = ReactorModel(critical.state)
    model.step(0.05, ControlInputs(rod=critical.rod_position))
"""

__version__ = "0.1.0"

from .exceptions import (
    ControlInputError,
    InfeasibleConditionError,
    ParameterError,
    ReactorKernelError,
    StateValidationError,
    TimestepError,
    ValidationError,
)
from .reactor import (
    DEFAULT_PARAMS,
    ConstantControls,
    ControlInputs,
    ControlSource,
    CriticalSteadyState,
    IntegrationMethod,
    ModelState,
    ReactivityComponents,
    ReactorModel,
    ReactorParams,
    ReactorState,
    ScheduledControls,
    SimulationConfig,
    SimulationRecord,
    compute_critical_rod_position,
    create_critical_steady_state,
    create_params,
    create_steady_state,
    load_params,
    save_params,
    transition,
)
from .reactor.safety import (
    CallbackWarningSink,
    CollectingWarningSink,
    LoggingWarningSink,
    NullWarningSink,
    WarningSink,
)

__all__ = [
    'ReactorKernelError', 'ValidationError', 'ParameterError', 'StateValidationError',
    'TimestepError', 'ControlInputError', 'InfeasibleConditionError',
    'DEFAULT_PARAMS', 'ReactorParams', 'create_params', 'load_params', 'save_params',
    'ReactorState', 'ControlInputs', 'ReactivityComponents', 'IntegrationMethod',
    'SimulationConfig', 'SimulationRecord', 'ControlSource', 'ConstantControls',
    'ScheduledControls', 'ModelState', 'ReactorModel', 'transition',
    'CriticalSteadyState', 'create_steady_state', 'compute_critical_rod_position',
    'create_critical_steady_state', 'WarningSink', 'LoggingWarningSink', 'NullWarningSink',
    'CollectingWarningSink', 'CallbackWarningSink',
]
