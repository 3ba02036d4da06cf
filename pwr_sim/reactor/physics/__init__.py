"""
Reactor Physics Package

Derivative kernel (point kinetics, lumped thermal model, poison chain) and
the time integrators built on it.
"""

from .fission_products import equilibrium_fission_products, fission_product_derivatives
from .integrators import INTEGRATORS, euler_step, get_integrator, rk4_step, rk4_substeps
from .kernel import StateDerivatives, compute_derivatives, derivative_vector, stiffness_bound
from .point_kinetics import equilibrium_precursors, solve_point_kinetics
from .thermal_hydraulics import calculate_thermal_hydraulics, equilibrium_temperatures

__all__ = [
    'StateDerivatives',
    'compute_derivatives',
    'derivative_vector',
    'stiffness_bound',
    'euler_step',
    'rk4_step',
    'rk4_substeps',
    'INTEGRATORS',
    'get_integrator',
    'solve_point_kinetics',
    'equilibrium_precursors',
    'calculate_thermal_hydraulics',
    'equilibrium_temperatures',
    'fission_product_derivatives',
    'equilibrium_fission_products',
]
