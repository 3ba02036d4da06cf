"""
Reactor Safety Package

Input guards, the post-step safety clamp and clamp diagnostic sinks.
The guards live in ``pwr_sim.reactor.safety.guards``.
"""

from .warning_sinks import (
    CallbackWarningSink,
    CollectingWarningSink,
    LoggingWarningSink,
    NullWarningSink,
    WarningSink,
)

__all__ = [
    'WarningSink',
    'LoggingWarningSink',
    'NullWarningSink',
    'CollectingWarningSink',
    'CallbackWarningSink',
]
