"""
Custom exceptions for the PWR reactor kernel.
"""

from typing import Iterable, List, Optional


class ReactorKernelError(Exception):
    """Base exception for all reactor kernel errors."""
    pass


class ValidationError(ReactorKernelError, ValueError):
    """Invalid parameters, state, controls or timestep."""

    def __init__(self, message: str, errors: Optional[Iterable[str]] = None):
        self.errors: List[str] = list(errors) if errors else []
        if self.errors:
            message = message + ":\n" + "\n".join(f"  - {error}" for error in self.errors)
        super().__init__(message)


class ParameterError(ValidationError):
    """Reactor parameter pack failed validation."""
    pass


class StateValidationError(ValidationError):
    """Reactor state is structurally or physically implausible."""
    pass


class TimestepError(ValidationError):
    """Timestep outside the integration method's bounds."""

    def __init__(self, message: str, dt: float = None):
        super().__init__(message)
        self.dt = dt


class ControlInputError(ValidationError):
    """Malformed control inputs."""
    pass


class InfeasibleConditionError(ValidationError):
    """No critical rod position exists for the requested conditions."""
    pass
