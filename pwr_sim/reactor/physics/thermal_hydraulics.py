"""
Thermal Hydraulics Model

Lumped two-node energy balance for the core: fuel heated by fission and
cooled by the coolant, coolant cooled by the ultimate heat sink (steam
generators) with a conductance that depends on the primary pump status.
"""

from typing import Tuple

from ..params import ReactorParams


def calculate_thermal_hydraulics(power: float, fuel_temperature: float,
                                 coolant_temperature: float, pump_on: bool,
                                 params: ReactorParams) -> Tuple[float, float]:
    """
    Calculate fuel and coolant temperature derivatives

    Args:
        power: Normalized reactor power
        fuel_temperature: Lumped fuel temperature in K
        coolant_temperature: Lumped coolant temperature in K
        pump_on: Primary pump running
        params: Reactor parameters

    Returns:
        Tuple of (fuel_temp_dot, coolant_temp_dot) in K/s
    """
    heat_generation = power * params.power_nominal
    heat_to_coolant = params.h_fuel_coolant * (fuel_temperature - coolant_temperature)
    heat_to_sink = params.sink_conductance(pump_on) * (
        coolant_temperature - params.coolant_inlet_temperature
    )

    fuel_temp_dot = (heat_generation - heat_to_coolant) / (
        params.fuel_mass * params.fuel_heat_capacity
    )
    coolant_temp_dot = (heat_to_coolant - heat_to_sink) / (
        params.coolant_mass * params.coolant_heat_capacity
    )

    return fuel_temp_dot, coolant_temp_dot


def equilibrium_temperatures(power: float, pump_on: bool,
                             params: ReactorParams) -> Tuple[float, float]:
    """
    Steady-state temperatures for a constant power

    Walks the heat path back from the sink:
        Tc = Tc_in + Q / h_cool
        Tf = Tc + Q / h_fc

    Returns:
        Tuple of (fuel_temperature, coolant_temperature) in K
    """
    heat = power * params.power_nominal
    coolant_temperature = params.coolant_inlet_temperature + heat / params.sink_conductance(pump_on)
    fuel_temperature = coolant_temperature + heat / params.h_fuel_coolant
    return fuel_temperature, coolant_temperature


def thermal_stiffness(pump_on: bool, params: ReactorParams) -> float:
    """Row-sum bound on the thermal Jacobian (1/s)"""
    fuel_rate = params.h_fuel_coolant / (params.fuel_mass * params.fuel_heat_capacity)
    coolant_rate = (params.h_fuel_coolant + params.sink_conductance(pump_on)) / (
        params.coolant_mass * params.coolant_heat_capacity
    )
    return 2.0 * max(fuel_rate, coolant_rate)
