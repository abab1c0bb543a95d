"""
Simulation - frame-stepped core of the wave arena
-------------------------------------------------
One Simulation owns one GameState and every component that mutates it.
`step()` advances exactly one tick:

1. drain queued one-shot commands (attack, dash, teleport, toggles, shop)
2. stop here if paused, dead or completed (state stays frozen)
3. read the active input source (autopilot or manual)
4. move the player, cool down timers
5. break: countdown + regen / combat: spawns, enemies, projectiles, then
   actions from a second read of the input source
6. notify status listeners

Presentation code only reads `snapshot()` / `status()` and calls the command
methods; it never touches the state directly.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, replace
from typing import Callable, Deque, Dict, List, Optional, Tuple

from .combat import make_combat_model, update_enemies, update_coin_drops
from .configs.arena_config import GameConfig, make_config, TICKS_PER_SECOND
from .economy import Shop, UPGRADE_KINDS
from .entities import Player, Enemy, Bullet, CoinDrop
from .inputs import InputSource, ManualInput, AutopilotPolicy
from .player import PlayerController
from .state import GameState, initial_state
from .utils import seed_everything
from .waves import WaveDirector

COMMANDS = ("attack", "dash", "teleport", "pause", "autopilot", "purchase")


@dataclass(frozen=True)
class RenderSnapshot:
    """Read-only view consumed by the renderer once per tick"""
    player: Player
    enemies: Tuple[Enemy, ...]
    bullets: Tuple[Bullet, ...]
    coin_drops: Tuple[CoinDrop, ...]
    pointer: Tuple[float, float]
    wave: int
    in_break: bool
    paused: bool
    completed: bool
    game_over: bool
    break_seconds: int
    coin_per_kill: int
    shake: int
    muzzle_flash: int
    swing: int
    combat_model: str


@dataclass(frozen=True)
class StatusView:
    """HUD readouts"""
    hp: int
    coins: int
    kos: int
    damage_cost: int
    speed_cost: int
    heal_cost: int
    in_break: bool
    autopilot: bool
    teleport_charges: int
    wave: int


def _empty_events() -> Dict[str, float]:
    return {"kills": 0.0, "coins": 0.0, "damage": 0.0, "shots": 0.0, "waves": 0.0}


class Simulation:
    """Owns the game state and advances it one tick at a time"""

    def __init__(
        self,
        cfg: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        manual: Optional[ManualInput] = None,
        verbose: int = 0,
    ):
        self.cfg = cfg if cfg is not None else make_config()
        self.seed = seed
        self.verbose = verbose
        self.rng = seed_everything(seed)

        self.state: GameState = initial_state(self.cfg)
        self.manual = manual if manual is not None else ManualInput()
        self.autopilot: Optional[AutopilotPolicy] = (
            AutopilotPolicy(self.cfg) if self.cfg.autopilot_available else None
        )

        self.director = WaveDirector(self.cfg, self.state, self.rng, verbose=verbose)
        self.controller = PlayerController(self.cfg, self.state, self.rng)
        self.combat = make_combat_model(self.cfg)
        self.shop = Shop(self.cfg, self.state)

        self._commands: Deque[Tuple[str, Optional[str]]] = deque()
        self._status_listeners: List[Callable[[StatusView], None]] = []

        # Per-tick event counters (reset at the start of every step)
        self.events: Dict[str, float] = _empty_events()

    # ----------------------------
    # Input / command API
    # ----------------------------

    def queue_command(self, name: str, arg: Optional[str] = None):
        """Queue a one-shot command; it runs at the start of the next step()"""
        if name not in COMMANDS:
            raise ValueError(f"Unknown command: {name}")
        if name == "purchase" and arg not in UPGRADE_KINDS:
            raise ValueError(f"Unknown upgrade kind: {arg}")
        self._commands.append((name, arg))

    def active_input(self) -> InputSource:
        if self.state.autopilot and self.autopilot is not None:
            return self.autopilot
        return self.manual

    def attack(self) -> bool:
        s = self.state
        if s.frozen or s.in_break:
            return False
        if not self.combat.attack(s):
            return False
        self.events["shots"] += 1
        return True

    def dash(self, direction: Optional[Tuple[float, float]] = None) -> bool:
        """Dash along `direction`, or along the held movement keys when omitted"""
        if self.state.frozen:
            return False
        if direction is None:
            direction = self.manual.direction()
        return self.controller.dash(direction)

    def teleport(self) -> bool:
        if self.state.frozen:
            return False
        return self.controller.teleport()

    def purchase(self, kind: str) -> bool:
        if self.state.completed:
            return False
        return self.shop.purchase(kind)

    def toggle_pause(self) -> bool:
        self.state.paused = not self.state.paused
        return True

    def toggle_autopilot(self) -> bool:
        if self.autopilot is None:
            return False
        self.state.autopilot = not self.state.autopilot
        return True

    def _run_command(self, name: str, arg: Optional[str]) -> bool:
        if name == "attack":
            return self.attack()
        if name == "dash":
            return self.dash()
        if name == "teleport":
            return self.teleport()
        if name == "pause":
            return self.toggle_pause()
        if name == "autopilot":
            return self.toggle_autopilot()
        return self.purchase(arg)

    def _drain_commands(self) -> bool:
        if self.active_input() is self.manual:
            self.state.pointer.x, self.state.pointer.y = self.manual.pointer

        changed = False
        while self._commands:
            name, arg = self._commands.popleft()
            changed = self._run_command(name, arg) or changed
        return changed

    # ----------------------------
    # Tick
    # ----------------------------

    def step(self) -> bool:
        """Advance one tick. Returns True if any state changed."""
        self.events = _empty_events()
        changed = self._drain_commands()

        s = self.state
        if s.frozen:
            if changed:
                self._notify_status()
            return changed

        frame = self.active_input().frame(s)
        if frame.aim is not None:
            s.pointer.x, s.pointer.y = frame.aim

        self.controller.move(frame.move)
        if s.teleport_cooldown > 0:
            s.teleport_cooldown -= 1
        if s.muzzle_flash > 0:
            s.muzzle_flash -= 1
        if s.swing > 0:
            s.swing -= 1
        if s.shake > 0:
            s.shake -= 1

        if s.in_break:
            self.director.update_break()
        else:
            self._combat_tick()

        s.tick += 1
        self._notify_status()
        return True

    def _combat_tick(self):
        s = self.state
        kos, coins = s.kos, s.coins

        self.director.update_spawns()
        self.events["damage"] += update_enemies(self.cfg, s)
        update_coin_drops(self.cfg, s)
        self.combat.update(s)

        if not s.game_over:
            # actions see the world after enemies and projectiles moved
            frame = self.active_input().frame(s)
            if frame.aim is not None:
                s.pointer.x, s.pointer.y = frame.aim
            if frame.attack:
                self.attack()
            if frame.dash is not None:
                self.controller.dash(frame.dash)
            if frame.teleport:
                self.controller.teleport()

        self.events["kills"] += s.kos - kos
        self.events["coins"] += s.coins - coins

        if not s.game_over and self.director.check_wave_clear():
            self.events["waves"] += 1

        if s.game_over and self.verbose > 0:
            print(f"[Simulation] Game over on wave {s.wave} (kos={s.kos}, coins={s.coins})")

    def run(self, ticks: int) -> int:
        """Step up to `ticks` times, stopping early once the run is over. Returns ticks stepped."""
        for i in range(ticks):
            if self.is_over:
                return i
            self.step()
        return ticks

    # ----------------------------
    # Projections
    # ----------------------------

    @property
    def is_over(self) -> bool:
        return self.state.game_over or self.state.completed

    def snapshot(self) -> RenderSnapshot:
        s = self.state
        return RenderSnapshot(
            player=replace(s.player),
            enemies=tuple(replace(e) for e in s.enemies),
            bullets=tuple(replace(b) for b in s.bullets),
            coin_drops=tuple(replace(c) for c in s.coin_drops),
            pointer=(s.pointer.x, s.pointer.y),
            wave=s.wave,
            in_break=s.in_break,
            paused=s.paused,
            completed=s.completed,
            game_over=s.game_over,
            break_seconds=-(-s.break_timer // TICKS_PER_SECOND),
            coin_per_kill=self.cfg.coin_per_kill,
            shake=s.shake,
            muzzle_flash=s.muzzle_flash,
            swing=s.swing,
            combat_model=self.combat.name,
        )

    def status(self) -> StatusView:
        s = self.state
        return StatusView(
            hp=max(0, int(s.player.hp)),
            coins=s.coins,
            kos=s.kos,
            damage_cost=s.prices["damage"],
            speed_cost=s.prices["speed"],
            heal_cost=s.prices["heal"],
            in_break=s.in_break,
            autopilot=s.autopilot,
            teleport_charges=s.teleport_charges,
            wave=s.wave,
        )

    def add_status_listener(self, listener: Callable[[StatusView], None]):
        self._status_listeners.append(listener)

    def _notify_status(self):
        if not self._status_listeners:
            return
        view = self.status()
        for listener in self._status_listeners:
            listener(view)
