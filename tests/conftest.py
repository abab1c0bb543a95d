import pytest

from wavearena.configs import make_config
from wavearena.simulation import Simulation


@pytest.fixture
def ranged_sim():
    return Simulation(make_config("ranged", autopilot_start_enabled=False), seed=7)


@pytest.fixture
def melee_sim():
    return Simulation(make_config("melee"), seed=7)


def start_combat(sim, wave=1):
    """Skip the break and open `wave` directly"""
    sim.state.wave = wave
    sim.director.start_wave(wave)
    return sim
