"""
Shop / upgrade ledger
"""

import math
from typing import Dict

from .configs.arena_config import GameConfig
from .state import GameState

UPGRADE_KINDS = ("damage", "speed", "heal")


class Shop:
    """Sells permanent damage/speed boosts and instant heals for coins"""

    def __init__(self, cfg: GameConfig, state: GameState):
        self.cfg = cfg
        self.state = state
        self.price_mult: Dict[str, float] = {
            "damage": cfg.damage_cost_mult,
            "speed": cfg.speed_cost_mult,
            "heal": cfg.heal_cost_mult,
        }

    def price(self, kind: str) -> int:
        return self.state.prices[kind]

    def can_buy(self, kind: str) -> bool:
        if kind not in UPGRADE_KINDS:
            return False
        if self.state.coins < self.price(kind):
            return False
        if kind == "heal" and self.state.player.hp <= 0:
            return False
        return True

    def purchase(self, kind: str) -> bool:
        """Buy one upgrade. Returns False (and changes nothing) when rejected."""
        if not self.can_buy(kind):
            return False

        cfg = self.cfg
        s = self.state
        p = s.player
        cost = self.price(kind)
        s.coins -= cost

        if kind == "damage":
            p.damage += cfg.damage_upgrade
        elif kind == "speed":
            p.speed += cfg.speed_upgrade
        else:
            p.hp = min(p.hp_max, p.hp + cfg.heal_kit_amount)

        s.prices[kind] = int(math.floor(cost * self.price_mult[kind]))
        return True
