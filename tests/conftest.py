"""
Shared fixtures for the reactor kernel test suite.
"""

import sys
from pathlib import Path

import pytest

# Add project root to path for imports
sys.path.append(str(Path(__file__).parent.parent))

from pwr_sim.reactor.params import DEFAULT_PARAMS, create_params
from pwr_sim.reactor.reactor_physics import ReactorModel
from pwr_sim.reactor.safety.warning_sinks import CollectingWarningSink
from pwr_sim.reactor.state import ControlInputs
from pwr_sim.reactor.steady_state import create_critical_steady_state


@pytest.fixture
def params():
    return DEFAULT_PARAMS


@pytest.fixture
def xenon_params():
    return create_params(xenon_enabled=True)


@pytest.fixture
def critical():
    """Full-power critical steady state with its rod position"""
    return create_critical_steady_state(1.0)


@pytest.fixture
def hold_controls(critical):
    return ControlInputs(rod=critical.rod_position)


@pytest.fixture
def sink():
    return CollectingWarningSink()


@pytest.fixture
def model(critical):
    return ReactorModel(critical.state)

