"""WaveArena - top-down wave survival game with a frame-stepped simulation core"""

from .configs import GameConfig, make_config
from .simulation import Simulation, RenderSnapshot, StatusView
from .env import WaveArenaEnv

__all__ = ['GameConfig', 'make_config', 'Simulation', 'RenderSnapshot', 'StatusView', 'WaveArenaEnv']
