"""
Warning Sinks

Injectable receivers for safety-clamp diagnostics. The reactor model never
raises on clamping; it reports through one of these when configured to.
"""

import logging
from abc import ABC, abstractmethod
from typing import Callable, List

logger = logging.getLogger(__name__)


class WarningSink(ABC):
    """Abstract base class for clamp diagnostic receivers"""

    @abstractmethod
    def warn(self, message: str) -> None:
        """
        Receive a diagnostic message

        Args:
            message: Human-readable description of the clamp event
        """
        pass


class LoggingWarningSink(WarningSink):
    """Forward diagnostics to a logger at WARNING level"""

    def __init__(self, target: logging.Logger = None):
        self.logger = target or logger

    def warn(self, message: str) -> None:
        self.logger.warning(message)


class NullWarningSink(WarningSink):
    """Discard diagnostics"""

    def warn(self, message: str) -> None:
        pass


class CollectingWarningSink(WarningSink):
    """Keep diagnostics in memory (UI panels, tests)"""

    def __init__(self):
        self.messages: List[str] = []

    def warn(self, message: str) -> None:
        self.messages.append(message)

    def clear(self) -> None:
        self.messages.clear()

    def __len__(self) -> int:
        return len(self.messages)


class CallbackWarningSink(WarningSink):
    """Adapt a plain callable into a sink"""

    def __init__(self, callback: Callable[[str], None]):
        self.callback = callback

    def warn(self, message: str) -> None:
        self.callback(message)
