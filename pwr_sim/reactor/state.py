"""
Reactor State and Control Records

Data types exchanged with the reactor kernel: the state vector, per-step
control inputs, reactivity breakdown, run configuration and the flattened
simulation record used for logging and benchmarks.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional

import numpy as np
from dataclass_wizard import JSONWizard

from ..exceptions import ValidationError
from .safety.warning_sinks import LoggingWarningSink, WarningSink

# 1 pcm = 1e-5 dk/k
PCM = 1e-5


@dataclass(eq=False)
class ReactorState:
    """
    Complete state of the core at one instant (SI units)

    States compare by value, precursor array included. They are mutable and
    therefore unhashable.
    """

    t: float                                # s
    power: float                            # normalized, 1.0 = nominal
    precursors: np.ndarray                  # normalized delayed neutron precursors
    fuel_temperature: float                 # K
    coolant_temperature: float              # K
    iodine_135: float = 0.0                 # atoms/cm³
    xenon_135: float = 0.0                  # atoms/cm³

    def __post_init__(self):
        self.precursors = np.array(self.precursors, dtype=float)

    def __eq__(self, other):
        if not isinstance(other, ReactorState):
            return NotImplemented
        return self.t == other.t and np.array_equal(self.to_vector(), other.to_vector())

    __hash__ = None

    def copy(self) -> "ReactorState":
        """Deep copy including the precursor array"""
        return ReactorState(
            t=self.t,
            power=self.power,
            precursors=self.precursors.copy(),
            fuel_temperature=self.fuel_temperature,
            coolant_temperature=self.coolant_temperature,
            iodine_135=self.iodine_135,
            xenon_135=self.xenon_135,
        )

    def to_vector(self) -> np.ndarray:
        """Pack into [P, C_1..C_n, Tf, Tc, I, Xe]"""
        return np.concatenate((
            [self.power],
            self.precursors,
            [self.fuel_temperature, self.coolant_temperature, self.iodine_135, self.xenon_135],
        ))

    @classmethod
    def from_vector(cls, t: float, vector: np.ndarray) -> "ReactorState":
        """Inverse of to_vector"""
        n_groups = len(vector) - 5
        return cls(
            t=t,
            power=float(vector[0]),
            precursors=vector[1:1 + n_groups].copy(),
            fuel_temperature=float(vector[1 + n_groups]),
            coolant_temperature=float(vector[2 + n_groups]),
            iodine_135=float(vector[3 + n_groups]),
            xenon_135=float(vector[4 + n_groups]),
        )

    def get_state_dict(self) -> Dict[str, float]:
        """Get state as dictionary for logging"""
        return {
            't': self.t,
            'power': self.power,
            'fuel_temperature': self.fuel_temperature,
            'coolant_temperature': self.coolant_temperature,
            'iodine_135': self.iodine_135,
            'xenon_135': self.xenon_135,
            **{f'precursor_{i + 1}': float(c) for i, c in enumerate(self.precursors)},
        }


@dataclass(frozen=True)
class ControlInputs:
    """
    Operator / control-system inputs for one step.

    rod: 0 = fully inserted (shutdown), 1 = fully withdrawn
    pump_on: primary coolant pump running (forced circulation)
    scram: reactor protection system trip demand
    boron_ppm: soluble boron concentration; None leaves boron out of the balance
    """

    rod: float
    pump_on: bool = True
    scram: bool = False
    boron_ppm: Optional[float] = None


@dataclass(frozen=True)
class ReactivityComponents:
    """Reactivity breakdown in Δk/k; rho_total is always the sum of the components"""

    rho_ext: float
    rho_doppler: float
    rho_mod: float
    rho_xenon: float = 0.0
    rho_boron: float = 0.0
    rho_total: float = field(init=False)

    def __post_init__(self):
        object.__setattr__(
            self, 'rho_total',
            self.rho_ext + self.rho_doppler + self.rho_mod + self.rho_xenon + self.rho_boron,
        )

    def to_pcm(self) -> Dict[str, float]:
        """Components in pcm"""
        return {
            'external': self.rho_ext / PCM,
            'doppler': self.rho_doppler / PCM,
            'moderator': self.rho_mod / PCM,
            'xenon': self.rho_xenon / PCM,
            'boron': self.rho_boron / PCM,
            'total': self.rho_total / PCM,
        }

    def summary(self) -> str:
        """
        Generate a formatted summary of all reactivity components

        Returns:
            Formatted string with reactivity breakdown in pcm
        """
        components = self.to_pcm()
        total = components.pop('total')

        summary = "Reactivity Summary (pcm):\n"
        summary += "=" * 40 + "\n"
        for component, value in components.items():
            summary += f"{component.title():<20}: {value:>8.1f}\n"
        summary += "-" * 40 + "\n"
        summary += f"{'Total Reactivity':<20}: {total:>8.1f}\n"
        status = 'Critical' if abs(total) < 10 else 'Subcritical' if total < 0 else 'Supercritical'
        summary += f"{'Status':<20}: {status}\n"
        return summary


class IntegrationMethod(str, Enum):
    """ODE integration method"""
    RK4 = "rk4"
    EULER = "euler"


@dataclass
class SimulationConfig:
    """Run configuration for a reactor model"""

    method: IntegrationMethod = IntegrationMethod.RK4
    warn_on_clamp: bool = False
    warning_sink: WarningSink = field(default_factory=LoggingWarningSink)

    def __post_init__(self):
        try:
            self.method = IntegrationMethod(self.method)
        except ValueError:
            raise ValidationError(
                f"Unknown integration method {self.method!r}; "
                f"expected one of {[m.value for m in IntegrationMethod]}"
            ) from None
        if self.warning_sink is None:
            self.warning_sink = LoggingWarningSink()
        if not isinstance(self.warning_sink, WarningSink):
            raise ValidationError("warning_sink must be a WarningSink instance")


@dataclass
class SimulationRecord(JSONWizard):
    """Flattened snapshot used for logging and benchmarks"""

    class _(JSONWizard.Meta):
        key_transform_with_dump = 'SNAKE'

    t: float
    power: float
    fuel_temperature: float
    coolant_temperature: float
    rho: float
    rod: float
    pump_on: bool
    scram: bool
