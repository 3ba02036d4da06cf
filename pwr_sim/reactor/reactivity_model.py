"""
PWR Reactivity Model

Pure functions mapping plant conditions and control inputs to reactivity
components: control rod worth and scram insertion, Doppler and moderator
temperature feedback, and the optional xenon and soluble boron terms.

All reactivities are in Δk/k; 1 pcm = 1e-5 Δk/k.
"""

import math
from typing import Optional

import numpy as np

from .params import ReactorParams
from .state import PCM, ControlInputs, ReactivityComponents, ReactorState


def pcm(rho: float) -> float:
    """Convert Δk/k to pcm"""
    return rho / PCM


def from_pcm(value: float) -> float:
    """Convert pcm to Δk/k"""
    return value * PCM


def rod_worth_shape(position: float) -> float:
    """
    Normalized integral rod worth curve

    Integral of sin²(πx), normalized to 1 at full withdrawal: flat at both
    ends, steepest at mid travel.

    Args:
        position: Rod position (0 = inserted, 1 = withdrawn), clipped to [0, 1]

    Returns:
        Fraction of total rod worth in [0, 1]
    """
    x = float(np.clip(position, 0.0, 1.0))
    return x - math.sin(2.0 * math.pi * x) / (2.0 * math.pi)


def scram_contribution(elapsed: float, params: ReactorParams) -> float:
    """
    Scram reactivity after ``elapsed`` seconds of insertion

    Exponential approach: ρ_scram(t) = ρ_scram_max * (1 - exp(-t/τ))
    """
    if elapsed < 0:
        return 0.0
    return params.scram_reactivity * (1.0 - math.exp(-elapsed / params.scram_tau))


def external_reactivity(rod: float, scram: bool, scram_start_time: Optional[float],
                        now: float, params: ReactorParams) -> float:
    """
    Calculate external reactivity from control rods and scram

    Args:
        rod: Rod position (0 = inserted, 1 = withdrawn)
        scram: Scram signal active
        scram_start_time: Simulation time the scram began, None if not scrammed
        now: Current simulation time
        params: Reactor parameters

    Returns:
        Reactivity in Δk/k, offset by the shutdown margin
    """
    rod_term = params.rod_worth_max * rod_worth_shape(rod)

    scram_term = 0.0
    if scram and scram_start_time is not None:
        scram_term = scram_contribution(now - scram_start_time, params)

    return rod_term + scram_term - params.shutdown_margin


def doppler_reactivity(fuel_temperature: float, params: ReactorParams) -> float:
    """
    Calculate Doppler reactivity feedback from fuel temperature

    Args:
        fuel_temperature: Lumped fuel temperature in K
        params: Reactor parameters

    Returns:
        Reactivity in Δk/k (negative above the reference temperature)
    """
    return params.alpha_fuel * (fuel_temperature - params.fuel_ref_temperature)


def moderator_reactivity(coolant_temperature: float, params: ReactorParams) -> float:
    """
    Calculate moderator temperature reactivity feedback

    Args:
        coolant_temperature: Lumped coolant temperature in K
        params: Reactor parameters

    Returns:
        Reactivity in Δk/k
    """
    return params.alpha_coolant * (coolant_temperature - params.coolant_ref_temperature)


def xenon_reactivity(xenon_135: float, params: ReactorParams) -> float:
    """
    Calculate xenon poisoning reactivity

    Zero unless the xenon chain is enabled in the parameter pack.

    Args:
        xenon_135: Xe-135 concentration in atoms/cm³
        params: Reactor parameters

    Returns:
        Reactivity in Δk/k
    """
    if not params.xenon_enabled:
        return 0.0
    return -params.xenon_absorption_xs * xenon_135 / params.core_absorption_xs


def boron_reactivity(boron_ppm: Optional[float], params: ReactorParams) -> float:
    """Soluble boron reactivity; zero when no concentration is supplied"""
    if boron_ppm is None:
        return 0.0
    return params.boron_worth * boron_ppm


def feedback_reactivity(fuel_temperature: float, coolant_temperature: float,
                        params: ReactorParams, xenon_135: float = 0.0,
                        boron_ppm: Optional[float] = None) -> float:
    """Sum of all non-rod reactivity terms"""
    return (
        doppler_reactivity(fuel_temperature, params)
        + moderator_reactivity(coolant_temperature, params)
        + xenon_reactivity(xenon_135, params)
        + boron_reactivity(boron_ppm, params)
    )


def total_reactivity(state: ReactorState, controls: ControlInputs,
                     scram_start_time: Optional[float],
                     params: ReactorParams) -> ReactivityComponents:
    """
    Calculate total reactivity from all sources

    Args:
        state: Current reactor state
        controls: Control inputs
        scram_start_time: Time the scram was initiated, None if inactive
        params: Reactor parameters

    Returns:
        ReactivityComponents whose rho_total is the sum of the components
    """
    rho_ext = external_reactivity(controls.rod, controls.scram, scram_start_time, state.t, params)
    rho_doppler = doppler_reactivity(state.fuel_temperature, params)
    rho_mod = moderator_reactivity(state.coolant_temperature, params)
    rho_xenon = xenon_reactivity(state.xenon_135, params)
    rho_boron = boron_reactivity(controls.boron_ppm, params)

    return ReactivityComponents(
        rho_ext=rho_ext,
        rho_doppler=rho_doppler,
        rho_mod=rho_mod,
        rho_xenon=rho_xenon,
        rho_boron=rho_boron,
    )
