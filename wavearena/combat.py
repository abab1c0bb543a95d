"""
Combat resolution: enemy pursuit and contact damage, kill credit and the two
player attack models (instant arc sweep, travelling projectiles).
"""

from __future__ import annotations

import math
from typing import List

from .configs.arena_config import GameConfig
from .entities import Enemy, Bullet, CoinDrop
from .state import GameState
from .utils import dist, angle_to, wrap_angle, circle_collide


def credit_kill(cfg: GameConfig, state: GameState, enemy: Enemy):
    """Bookkeeping for a dead enemy. Caller removes it from the live list."""
    state.kos += 1
    state.coins += cfg.coin_per_kill
    state.coin_drops.append(CoinDrop(x=enemy.x, y=enemy.y, ttl=cfg.coin_drop_ticks))


def damage_enemy(cfg: GameConfig, state: GameState, enemy: Enemy, amount: float) -> bool:
    """Apply damage; removes and credits the enemy if it died. Returns True on kill."""
    enemy.hp -= amount
    if enemy.hp <= 0:
        # by identity: twin enemies compare equal
        for i, other in enumerate(state.enemies):
            if other is enemy:
                del state.enemies[i]
                break
        credit_kill(cfg, state, enemy)
        return True
    return False


def update_enemies(cfg: GameConfig, state: GameState) -> float:
    """Move every enemy toward the player and resolve contact damage. Returns hp lost."""
    p = state.player
    lost = 0.0

    for e in state.enemies:
        a = angle_to(e.x, e.y, p.x, p.y)
        e.x += math.cos(a) * e.speed
        e.y += math.sin(a) * e.speed

        if e.hit_cooldown > 0:
            e.hit_cooldown -= 1

        # The player is briefly immune to everyone; the enemy that landed the
        # hit is throttled separately for longer.
        d = dist(e.x, e.y, p.x, p.y)
        if d <= e.radius + p.radius + cfg.contact_margin and e.hit_cooldown == 0 and p.invuln == 0:
            before = p.hp
            p.hp = max(0.0, p.hp - cfg.enemy_damage)
            lost += before - p.hp
            p.invuln = cfg.invuln_ticks
            e.hit_cooldown = cfg.enemy_hit_cooldown
            state.shake = cfg.hit_shake

    return lost


def update_coin_drops(cfg: GameConfig, state: GameState):
    for c in state.coin_drops:
        c.ttl -= 1
        c.y -= cfg.coin_drop_drift
    state.coin_drops = [c for c in state.coin_drops if c.ttl > 0]


class CombatModel:
    """Player attack strategy"""

    name = "base"

    def __init__(self, cfg: GameConfig):
        self.cfg = cfg

    def attack(self, state: GameState) -> bool:
        """Attack toward the pointer. Returns False when rejected (cooldown)."""
        p = state.player
        if p.attack_cooldown > 0:
            return False
        self._fire(state)
        p.attack_cooldown = self.cfg.attack_cooldown
        return True

    def _fire(self, state: GameState):
        raise NotImplementedError

    def update(self, state: GameState):
        """Per combat tick work (nothing for instant models)"""


class ArcSweepCombat(CombatModel):
    """Instant melee swing hitting every enemy inside a range-and-angle cone"""

    name = "arc"

    def enemies_in_arc(self, state: GameState) -> List[Enemy]:
        p = state.player
        aim = angle_to(p.x, p.y, state.pointer.x, state.pointer.y)
        half = self.cfg.attack_arc / 2
        hit = []
        for e in state.enemies:
            if dist(p.x, p.y, e.x, e.y) > self.cfg.attack_range + e.radius:
                continue
            if abs(wrap_angle(angle_to(p.x, p.y, e.x, e.y) - aim)) <= half:
                hit.append(e)
        return hit

    def _fire(self, state: GameState):
        for e in self.enemies_in_arc(state):
            damage_enemy(self.cfg, state, e, state.player.damage)
        state.swing = self.cfg.swing_ticks


class ProjectileCombat(CombatModel):
    """Bullets travel along the aim line and hit the first enemy they touch"""

    name = "projectile"

    def _fire(self, state: GameState):
        cfg = self.cfg
        p = state.player
        a = angle_to(p.x, p.y, state.pointer.x, state.pointer.y)
        state.bullets.append(Bullet(
            x=p.x,
            y=p.y,
            vx=math.cos(a) * cfg.bullet_speed,
            vy=math.sin(a) * cfg.bullet_speed,
            damage=p.damage,
            life=cfg.bullet_range,
            radius=cfg.bullet_radius,
        ))
        state.muzzle_flash = self.cfg.muzzle_flash_ticks

    def update(self, state: GameState):
        alive = []
        for b in state.bullets:
            b.x += b.vx
            b.y += b.vy
            b.life -= math.hypot(b.vx, b.vy)

            hit = False
            for e in state.enemies:
                if circle_collide(b.x, b.y, b.radius, e.x, e.y, e.radius):
                    damage_enemy(self.cfg, state, e, b.damage)
                    state.shake = self.cfg.bullet_hit_shake
                    hit = True
                    break

            if not hit and b.life > 0:
                alive.append(b)
        state.bullets = alive


COMBAT_MODELS = {
    ArcSweepCombat.name: ArcSweepCombat,
    ProjectileCombat.name: ProjectileCombat,
}


def make_combat_model(cfg: GameConfig) -> CombatModel:
    return COMBAT_MODELS[cfg.combat_model](cfg)
