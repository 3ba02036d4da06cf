"""
Fission Product Poisons

Iodine-135 / xenon-135 balance driven by the normalized power. Only active
when ``xenon_enabled`` is set on the parameter pack; otherwise both
inventories are frozen.

    dI/dt  = a * (γ_I Σ_f φ - λ_I I)
    dXe/dt = a * (γ_Xe Σ_f φ + λ_I I - λ_Xe Xe - σ_Xe φ Xe)

with φ = P * φ_nominal and ``a`` the training time acceleration.
"""

from typing import Tuple

from ..params import ReactorParams


def fission_product_derivatives(power: float, iodine_135: float, xenon_135: float,
                                params: ReactorParams) -> Tuple[float, float]:
    """
    Calculate iodine and xenon rates of change

    Args:
        power: Normalized reactor power
        iodine_135: I-135 concentration in atoms/cm³
        xenon_135: Xe-135 concentration in atoms/cm³
        params: Reactor parameters

    Returns:
        Tuple of (iodine_dot, xenon_dot) in atoms/cm³/s
    """
    if not params.xenon_enabled:
        return 0.0, 0.0

    flux = power * params.flux_nominal
    fission_rate = params.fission_xs * flux
    acceleration = params.xenon_time_acceleration

    iodine_decay = params.iodine_decay * iodine_135
    iodine_dot = params.iodine_yield * fission_rate - iodine_decay

    xenon_dot = (
        params.xenon_yield * fission_rate
        + iodine_decay
        - params.xenon_decay * xenon_135
        - params.xenon_absorption_xs * flux * xenon_135
    )

    return acceleration * iodine_dot, acceleration * xenon_dot


def equilibrium_fission_products(power: float, params: ReactorParams) -> Tuple[float, float]:
    """
    Calculate equilibrium I-135 and Xe-135 concentrations for a constant power

    Returns:
        Tuple of (iodine_135, xenon_135); zeros when the chain is disabled
    """
    if not params.xenon_enabled:
        return 0.0, 0.0

    flux = power * params.flux_nominal
    fission_rate = params.fission_xs * flux
    iodine = params.iodine_yield * fission_rate / params.iodine_decay
    xenon = (params.iodine_yield + params.xenon_yield) * fission_rate / (
        params.xenon_decay + params.xenon_absorption_xs * flux
    )
    return iodine, xenon


def fission_product_stiffness(power: float, params: ReactorParams) -> float:
    """Fastest poison rate constant (1/s)"""
    if not params.xenon_enabled:
        return 0.0
    flux = abs(power) * params.flux_nominal
    return params.xenon_time_acceleration * (
        params.iodine_decay
        + params.xenon_decay
        + params.xenon_absorption_xs * flux
    )
