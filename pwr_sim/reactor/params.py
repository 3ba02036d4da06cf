"""
Reactor Parameter Pack

Immutable physical constants for the reduced-order PWR core model: delayed
neutron data, reactivity feedback coefficients, lumped thermal masses, heat
transfer conductances, numeric safety limits and the optional xenon/boron
extensions.

Parameter packs can be loaded from and saved to YAML files.
"""

import dataclasses
import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple, Union

import yaml
from dataclass_wizard import YAMLWizard
from dataclass_wizard.errors import JSONWizardError

from ..exceptions import ParameterError

logger = logging.getLogger(__name__)

# Standard 6-group representation for U-235 thermal fission
NUM_PRECURSOR_GROUPS = 6

# Largest |z| on the negative real axis inside the RK4 stability region
RK4_REAL_AXIS_LIMIT = 2.785


@dataclass(frozen=True)
class ReactorParams(YAMLWizard, key_transform='SNAKE'):
    """
    Physical and numerical parameters of the reactor model (SI units).

    Instances are validated on construction and never mutated afterwards;
    use ``create_params`` to derive a customized copy.
    """

    # === NEUTRONICS ===
    # Keepin 6-group U-235 data
    beta_i: Tuple[float, ...] = (0.000215, 0.001424, 0.001274, 0.002568, 0.000748, 0.000273)
    lambda_i: Tuple[float, ...] = (0.0124, 0.0305, 0.111, 0.301, 1.14, 3.01)  # 1/s
    prompt_generation_time: float = 1e-3            # s, slowed ~10x for human reaction times

    # === REACTIVITY FEEDBACK ===
    alpha_fuel: float = -4.0e-5                     # 1/K Doppler (-4 pcm/K)
    alpha_coolant: float = -2.5e-4                  # 1/K moderator (-25 pcm/K)
    fuel_ref_temperature: float = 300.0             # K cold shutdown
    coolant_ref_temperature: float = 300.0          # K cold shutdown

    # === CONTROL RODS AND SCRAM ===
    rod_worth_max: float = 0.03                     # 3000 pcm total worth
    scram_reactivity: float = -0.08                 # -8000 pcm
    scram_tau: float = 1.0                          # s insertion time constant

    # === THERMAL-HYDRAULICS ===
    fuel_mass: float = 35000.0                      # kg
    coolant_mass: float = 18000.0                   # kg
    fuel_heat_capacity: float = 300.0               # J/kg/K UO2
    coolant_heat_capacity: float = 5500.0           # J/kg/K pressurized water
    h_fuel_coolant: float = 2.5e7                   # W/K
    h_sink_pump_on: float = 6.0e7                   # W/K forced circulation
    h_sink_pump_off: float = 1.0e7                  # W/K natural circulation
    coolant_inlet_temperature: float = 300.0        # K
    power_nominal: float = 3.0e9                    # W (3000 MWth)

    # === SAFETY ===
    shutdown_margin: float = 0.003                  # 300 pcm with all rods in

    # === NUMERICAL LIMITS ===
    dt_min: float = 1e-6                            # s
    dt_max_euler: float = 0.01                      # s
    dt_max_rk4: float = 0.2                         # s
    power_min: float = 1e-10
    power_max: float = 3.0                          # 300% nominal
    fuel_temp_min: float = 293.0                    # K
    fuel_temp_max: float = 2500.0                   # K, well below UO2 melting
    coolant_temp_min: float = 293.0                 # K
    coolant_temp_max: float = 650.0                 # K
    stability_limit: float = 2.5                    # max stiffness * substep for RK4
    max_rk4_substeps: int = 1000                    # per outer step

    # === XENON-135 CHAIN (disabled by default) ===
    xenon_enabled: bool = False
    iodine_yield: float = 0.0639                    # cumulative I-135 fission yield
    xenon_yield: float = 0.00237                    # direct Xe-135 fission yield
    iodine_decay: float = 2.87e-5                   # 1/s (6.7 h half-life)
    xenon_decay: float = 2.09e-5                    # 1/s (9.2 h half-life)
    xenon_absorption_xs: float = 2.65e-18           # cm² (2.65e6 barns)
    fission_xs: float = 0.1                         # 1/cm macroscopic fission
    core_absorption_xs: float = 1.0                 # 1/cm macroscopic absorption
    flux_nominal: float = 3.0e13                    # n/cm²/s at P = 1
    xenon_time_acceleration: float = 1.0

    # === SOLUBLE BORON (used only when controls carry boron_ppm) ===
    boron_worth: float = -1.0e-5                    # 1/ppm (-1 pcm/ppm)
    boron_max_ppm: float = 5000.0                   # ppm, accepted control range

    def __post_init__(self):
        """Normalize group data to tuples and validate"""
        object.__setattr__(self, 'beta_i', tuple(float(b) for b in self.beta_i))
        object.__setattr__(self, 'lambda_i', tuple(float(lam) for lam in self.lambda_i))
        self._validate_parameters()

    @property
    def beta_total(self) -> float:
        """Total delayed neutron fraction"""
        return sum(self.beta_i)

    @property
    def num_groups(self) -> int:
        return len(self.beta_i)

    def sink_conductance(self, pump_on: bool) -> float:
        """Coolant-to-sink heat transfer coefficient for the pump status"""
        return self.h_sink_pump_on if pump_on else self.h_sink_pump_off

    def _validate_parameters(self):
        """Validate parameters, collecting every violation"""
        errors = self.validation_errors()
        if errors:
            raise ParameterError("Reactor parameter validation failed", errors)

    def validation_errors(self) -> List[str]:
        errors = []

        for name, value in dataclasses.asdict(self).items():
            if isinstance(value, tuple):
                if not all(math.isfinite(v) for v in value):
                    errors.append(f"{name} must contain only finite values")
            elif isinstance(value, float) and not math.isfinite(value):
                errors.append(f"{name} must be finite, got {value}")

        # Delayed neutron data
        if len(self.beta_i) != len(self.lambda_i):
            errors.append(
                f"Group count mismatch: {len(self.beta_i)} fractions vs "
                f"{len(self.lambda_i)} decay constants"
            )
        if len(self.beta_i) != NUM_PRECURSOR_GROUPS:
            errors.append(f"Expected {NUM_PRECURSOR_GROUPS} delayed neutron groups, got {len(self.beta_i)}")
        if any(b < 0 for b in self.beta_i):
            errors.append("Delayed neutron fractions must be non-negative")
        if any(lam <= 0 for lam in self.lambda_i):
            errors.append("Precursor decay constants must be positive")
        if self.prompt_generation_time <= 0:
            errors.append("Prompt generation time must be positive")

        # Thermal masses and conductances
        for name in ('fuel_mass', 'coolant_mass', 'fuel_heat_capacity', 'coolant_heat_capacity'):
            if getattr(self, name) <= 0:
                errors.append(f"{name} must be positive")
        for name in ('h_fuel_coolant', 'h_sink_pump_on', 'h_sink_pump_off'):
            if getattr(self, name) <= 0:
                errors.append(f"{name} must be positive")
        if self.power_nominal <= 0:
            errors.append("Nominal power must be positive")
        if self.coolant_inlet_temperature <= 0:
            errors.append("Coolant inlet temperature must be positive (K)")

        # Rods and scram
        if self.rod_worth_max < 0:
            errors.append("Rod worth must be non-negative")
        if self.scram_reactivity > 0:
            errors.append("Scram reactivity must be non-positive")
        if self.scram_tau <= 0:
            errors.append("Scram time constant must be positive")
        if self.shutdown_margin < 0:
            errors.append("Shutdown margin must be non-negative")

        # Timestep ordering
        if not (0 < self.dt_min < self.dt_max_euler <= self.dt_max_rk4):
            errors.append(
                "Timestep limits must satisfy 0 < dt_min < dt_max_euler <= dt_max_rk4 "
                f"(got {self.dt_min}, {self.dt_max_euler}, {self.dt_max_rk4})"
            )
        if not (0 < self.stability_limit <= RK4_REAL_AXIS_LIMIT):
            errors.append(f"stability_limit must be in (0, {RK4_REAL_AXIS_LIMIT}]")
        if self.max_rk4_substeps < 1:
            errors.append("max_rk4_substeps must be at least 1")

        # Clamp ranges
        for low, high in (('power_min', 'power_max'),
                          ('fuel_temp_min', 'fuel_temp_max'),
                          ('coolant_temp_min', 'coolant_temp_max')):
            if getattr(self, low) >= getattr(self, high):
                errors.append(f"{low} must be less than {high}")
        if self.power_min < 0:
            errors.append("power_min must be non-negative")

        # Xenon chain
        for name in ('iodine_decay', 'xenon_decay', 'xenon_absorption_xs', 'fission_xs',
                     'core_absorption_xs', 'flux_nominal', 'xenon_time_acceleration'):
            if getattr(self, name) <= 0:
                errors.append(f"{name} must be positive")
        for name in ('iodine_yield', 'xenon_yield'):
            if getattr(self, name) < 0:
                errors.append(f"{name} must be non-negative")

        # Boron
        if self.boron_max_ppm <= 0:
            errors.append("boron_max_ppm must be positive")

        return errors


DEFAULT_PARAMS = ReactorParams()


def create_params(base: ReactorParams = DEFAULT_PARAMS, **overrides) -> ReactorParams:
    """
    Create a validated parameter set with custom overrides

    Args:
        base: Parameter set to copy
        **overrides: Field values to replace

    Returns:
        New ReactorParams instance
    """
    field_names = {f.name for f in dataclasses.fields(ReactorParams)}
    unknown = sorted(set(overrides) - field_names)
    if unknown:
        raise ParameterError("Unknown reactor parameters", unknown)
    return dataclasses.replace(base, **overrides)


def load_params(path: Union[str, Path]) -> ReactorParams:
    """
    Load a parameter set from a YAML file (missing keys keep their defaults)

    Raises:
        ParameterError: unreadable or malformed file, or invalid values
    """
    try:
        params = ReactorParams.from_yaml_file(str(path))
    except (OSError, yaml.YAMLError, JSONWizardError) as e:
        raise ParameterError(f"Cannot load reactor parameters from {path}: {e}") from e
    if not isinstance(params, ReactorParams):
        raise ParameterError(f"Reactor parameter file {path} must hold a single mapping")
    logger.debug(f"Loaded reactor parameters from {path}")
    return params


def _safe_yaml_encoder(data, **kwargs):
    # safe_dump has no representer for tuples
    data = {key: list(value) if isinstance(value, tuple) else value
            for key, value in data.items()}
    return yaml.safe_dump(data, **kwargs)


def save_params(params: ReactorParams, path: Union[str, Path]) -> None:
    """Write a parameter set to a YAML file"""
    params.to_yaml_file(str(path), encoder=_safe_yaml_encoder, sort_keys=False)
    logger.debug(f"Saved reactor parameters to {path}")
