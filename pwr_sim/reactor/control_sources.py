"""
Control Sources

Supply ControlInputs as a function of simulation time for ReactorModel.run.
A source may be a fixed set of inputs or a schedule that moves rods, trips
pumps or scrams the core partway through a run.
"""

from abc import ABC, abstractmethod
from typing import Callable, Union

from ..exceptions import ControlInputError
from .state import ControlInputs


class ControlSource(ABC):
    """Abstract base class for time-dependent control inputs"""

    @abstractmethod
    def controls_at(self, t: float) -> ControlInputs:
        """
        Get the control inputs in force at a simulation time

        Args:
            t: Simulation time in seconds

        Returns:
            ControlInputs for the step starting at t
        """
        pass

    def __call__(self, t: float) -> ControlInputs:
        return self.controls_at(t)


class ConstantControls(ControlSource):
    """The same inputs at every time"""

    def __init__(self, controls: ControlInputs):
        self.controls = controls

    def controls_at(self, t: float) -> ControlInputs:
        return self.controls


class ScheduledControls(ControlSource):
    """Wrap a plain function of time"""

    def __init__(self, schedule: Callable[[float], ControlInputs]):
        self.schedule = schedule

    def controls_at(self, t: float) -> ControlInputs:
        return self.schedule(t)


ControlsLike = Union[ControlInputs, ControlSource, Callable[[float], ControlInputs]]


def as_control_source(controls: ControlsLike) -> ControlSource:
    """Coerce fixed inputs, a source or a callable into a ControlSource"""
    if isinstance(controls, ControlSource):
        return controls
    if isinstance(controls, ControlInputs):
        return ConstantControls(controls)
    if callable(controls):
        return ScheduledControls(controls)
    raise ControlInputError(
        f"Controls must be ControlInputs, a ControlSource or a callable, "
        f"got {type(controls).__name__}"
    )
