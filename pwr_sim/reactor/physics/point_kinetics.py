"""
Point Kinetics Model

This module implements the point kinetics equations for the reactor core,
including the delayed neutron precursor balance:

    dP/dt   = ((ρ - β)/Λ) * P + Σ(λ_i * C_i)
    dC_i/dt = (β_i/Λ) * P - λ_i * C_i
"""

from typing import Tuple

import numpy as np

from ..params import ReactorParams


def solve_point_kinetics(reactivity: float, power: float, precursors: np.ndarray,
                         params: ReactorParams) -> Tuple[float, np.ndarray]:
    """
    Solve point kinetics equations for normalized power

    Args:
        reactivity: Total reactivity in Δk/k
        power: Normalized reactor power
        precursors: Normalized precursor concentrations
        params: Reactor parameters

    Returns:
        Tuple of (power_dot, precursor_dot)
    """
    beta_i = np.asarray(params.beta_i)
    lambda_i = np.asarray(params.lambda_i)
    generation_time = params.prompt_generation_time

    # Prompt term plus delayed neutron source
    power_dot = (reactivity - params.beta_total) / generation_time * power
    power_dot += float(np.dot(lambda_i, precursors))

    precursor_dot = beta_i / generation_time * power - lambda_i * precursors

    return power_dot, precursor_dot


def equilibrium_precursors(power: float, params: ReactorParams) -> np.ndarray:
    """
    Precursor concentrations in equilibrium with a constant power

    C_i = (β_i / (Λ * λ_i)) * P
    """
    beta_i = np.asarray(params.beta_i)
    lambda_i = np.asarray(params.lambda_i)
    return beta_i / (params.prompt_generation_time * lambda_i) * power


def prompt_stiffness(reactivity: float, params: ReactorParams) -> float:
    """Magnitude of the prompt neutron eigenvalue |ρ - β| / Λ (1/s)"""
    return abs(reactivity - params.beta_total) / params.prompt_generation_time
