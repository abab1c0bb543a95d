"""Game and environment configuration"""

from .arena_config import (
    BASE_CONFIG, PROFILES, REWARD_CONFIGS, ENV_CONFIG, EVAL_CONFIG,
    GameConfig, make_config,
)

__all__ = [
    'BASE_CONFIG', 'PROFILES', 'REWARD_CONFIGS', 'ENV_CONFIG', 'EVAL_CONFIG',
    'GameConfig', 'make_config',
]
