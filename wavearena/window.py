"""
Arcade front-end: draws simulation snapshots, shows the HUD and turns
keyboard/mouse events into held keys, pointer updates and queued commands.

Controls:
    WASD / arrows   move            space   dash
    click           attack          t       teleport
    p               pause           o       autopilot on/off
    1 / 2 / 3       buy damage / speed / heal
"""

from __future__ import annotations

import math
import random
from typing import Optional

import arcade

from .configs.arena_config import TICKS_PER_SECOND
from .simulation import Simulation, RenderSnapshot, StatusView

KEY_NAMES = {
    arcade.key.W: "w",
    arcade.key.A: "a",
    arcade.key.S: "s",
    arcade.key.D: "d",
    arcade.key.UP: "up",
    arcade.key.DOWN: "down",
    arcade.key.LEFT: "left",
    arcade.key.RIGHT: "right",
}

SHOP_KEYS = {
    arcade.key.KEY_1: "damage",
    arcade.key.KEY_2: "speed",
    arcade.key.KEY_3: "heal",
}

MAX_STEPS_PER_UPDATE = 5


class ArenaWindow(arcade.Window):
    """Arcade window bound to one Simulation"""

    def __init__(self, sim: Simulation, drive: bool = True, title: str = "WaveArena"):
        super().__init__(sim.cfg.width, sim.cfg.height, title, update_rate=1 / TICKS_PER_SECOND)
        self.drive = drive
        self._accum = 0.0
        self._shake_rng = random.Random()
        self.status: Optional[StatusView] = None

        # Colors
        self.BG = (43, 157, 244)
        self.BG_SPOT_A = (255, 246, 166, 50)
        self.BG_SPOT_B = (184, 243, 255, 50)
        self.PLAYER_C = (255, 143, 184)
        self.PLAYER_GLOW_C = (255, 255, 255, 90)
        self.ENEMY_C = (255, 127, 163)
        self.ENEMY_OUTLINE_C = (47, 61, 155)
        self.BULLET_C = (255, 255, 255, 230)
        self.COIN_C = (255, 215, 120, 240)
        self.FLASH_C = (255, 214, 99, 230)
        self.SWING_C = (255, 255, 255, 90)
        self.AIM_C = (255, 255, 255, 40)
        self.OVERLAY_C = (0, 0, 0, 140)
        self.HUD_C = (255, 255, 255)

        self.attach(sim)

    def attach(self, sim: Simulation):
        self.sim = sim
        sim.add_status_listener(self._on_status)
        self.status = sim.status()

    def _on_status(self, view: StatusView):
        self.status = view

    # ----------------------------
    # Coordinates (simulation is y-down)
    # ----------------------------

    def sy(self, y: float) -> float:
        return self.height - y

    # ----------------------------
    # Loop
    # ----------------------------

    def on_update(self, delta_time: float):
        if not self.drive:
            return
        self._accum += delta_time
        steps = 0
        while self._accum >= 1 / TICKS_PER_SECOND and steps < MAX_STEPS_PER_UPDATE:
            self.sim.step()
            self._accum -= 1 / TICKS_PER_SECOND
            steps += 1
        if steps == MAX_STEPS_PER_UPDATE:
            self._accum = 0.0

    def on_draw(self):
        """Draw the current game state"""
        self.clear()
        snap = self.sim.snapshot()

        ox, oy = 0.0, 0.0
        if snap.shake > 0:
            ox = (self._shake_rng.random() - 0.5) * snap.shake
            oy = (self._shake_rng.random() - 0.5) * snap.shake

        self._draw_background()
        self._draw_world(snap, ox, oy)
        self._draw_hud(snap)
        self._draw_overlays(snap)

    def _draw_background(self):
        arcade.draw_lrbt_rectangle_filled(0, self.width, 0, self.height, self.BG)
        for i in range(45):
            x = (i * 97) % self.width
            y = (i * 53) % self.height
            color = self.BG_SPOT_A if i % 2 == 0 else self.BG_SPOT_B
            arcade.draw_circle_filled(x, self.sy(y), 90, color)

    def _draw_world(self, snap: RenderSnapshot, ox: float, oy: float):
        p = snap.player
        px, py = p.x + ox, self.sy(p.y) + oy

        # aim line
        arcade.draw_line(px, py, snap.pointer[0] + ox, self.sy(snap.pointer[1]) + oy, self.AIM_C, 1)

        if snap.swing > 0:
            aim = math.degrees(math.atan2(-(snap.pointer[1] - p.y), snap.pointer[0] - p.x))
            half = math.degrees(self.sim.cfg.attack_arc) / 2
            reach = 2 * (self.sim.cfg.attack_range + self.sim.cfg.enemy_radius)
            arcade.draw_arc_filled(px, py, reach, reach, self.SWING_C, aim - half, aim + half)

        # enemies + hp bars
        for e in snap.enemies:
            ex, ey = e.x + ox, self.sy(e.y) + oy
            arcade.draw_circle_filled(ex, ey, e.radius, self.ENEMY_C)
            arcade.draw_circle_outline(ex, ey, e.radius, self.ENEMY_OUTLINE_C, 2)
            w, h = 28, 4
            left, top = ex - w / 2, ey + e.radius + 12
            arcade.draw_lrbt_rectangle_filled(left, left + w, top - h, top, (0, 0, 0, 90))
            fill = w * max(0.0, e.hp / e.hp_max)
            if fill > 0:
                arcade.draw_lrbt_rectangle_filled(left, left + fill, top - h, top, (255, 255, 255, 190))

        # coin popups
        for c in snap.coin_drops:
            arcade.draw_text(f"+{snap.coin_per_kill}", c.x - 10 + ox, self.sy(c.y) + oy, self.COIN_C, 14)

        # bullets
        for b in snap.bullets:
            arcade.draw_circle_filled(b.x + ox, self.sy(b.y) + oy, 3, self.BULLET_C)

        # player
        if p.invuln > 0:
            arcade.draw_circle_filled(px, py, p.radius + 8, self.PLAYER_GLOW_C)
        arcade.draw_circle_filled(px, py, p.radius, self.PLAYER_C)
        if snap.muzzle_flash > 0:
            a = math.atan2(snap.pointer[1] - p.y, snap.pointer[0] - p.x)
            fx = px + math.cos(a) * (p.radius + 6)
            fy = py - math.sin(a) * (p.radius + 6)
            arcade.draw_circle_filled(fx, fy, 4, self.FLASH_C)

    def _draw_hud(self, snap: RenderSnapshot):
        st = self.status
        if st is None:
            return
        txt = (f"HP: {st.hp}  Coins: {st.coins}  KOs: {st.kos}  "
               f"[1] Damage {st.damage_cost}  [2] Speed {st.speed_cost}  [3] Heal {st.heal_cost}  "
               f"Regen: {'ON' if st.in_break else 'OFF'}")
        if self.sim.autopilot is not None:
            txt += f"  Autopilot: {'ON' if st.autopilot else 'OFF'}"
        if self.sim.cfg.teleport_enabled:
            txt += f"  Teleports: {st.teleport_charges}"
        arcade.draw_text(txt, 12, self.height - 22, self.HUD_C, 12)
        arcade.draw_text(f"Level: {snap.wave}", 16, 16, self.HUD_C, 14)

    def _overlay(self, title: str, subtitle: str = ""):
        arcade.draw_lrbt_rectangle_filled(0, self.width, 0, self.height, self.OVERLAY_C)
        arcade.draw_text(title, self.width / 2, self.height / 2, self.HUD_C, 28,
                         anchor_x="center")
        if subtitle:
            arcade.draw_text(subtitle, self.width / 2, self.height / 2 - 34, self.HUD_C, 14,
                             anchor_x="center")

    def _draw_overlays(self, snap: RenderSnapshot):
        if snap.completed:
            self._overlay(f"Level {snap.wave} Cleared!", "Congrats! Restart to play again.")
        elif snap.game_over:
            self._overlay("Game Over", f"You reached Level {snap.wave}. Restart to play again.")
        elif snap.paused:
            self._overlay("Paused")
        elif snap.in_break:
            self._overlay(f"Level {snap.wave} starts in {snap.break_seconds}",
                          "Use the shop now. Click to attack when it starts.")

    # ----------------------------
    # Input
    # ----------------------------

    def on_key_press(self, symbol: int, modifiers: int):
        if symbol in KEY_NAMES:
            self.sim.manual.key_down(KEY_NAMES[symbol])
        elif symbol == arcade.key.SPACE:
            self.sim.queue_command("dash")
        elif symbol == arcade.key.T:
            self.sim.queue_command("teleport")
        elif symbol == arcade.key.P:
            self.sim.queue_command("pause")
        elif symbol == arcade.key.O:
            self.sim.queue_command("autopilot")
        elif symbol in SHOP_KEYS:
            self.sim.queue_command("purchase", SHOP_KEYS[symbol])
        elif symbol == arcade.key.ESCAPE:
            self.close()

    def on_key_release(self, symbol: int, modifiers: int):
        if symbol in KEY_NAMES:
            self.sim.manual.key_up(KEY_NAMES[symbol])

    def on_mouse_motion(self, x: int, y: int, dx: int, dy: int):
        self.sim.manual.move_pointer(x, self.sy(y))

    def on_mouse_press(self, x: int, y: int, button: int, modifiers: int):
        self.sim.manual.move_pointer(x, self.sy(y))
        self.sim.manual.set_pointer_held(True)
        self.sim.queue_command("attack")

    def on_mouse_release(self, x: int, y: int, button: int, modifiers: int):
        self.sim.manual.set_pointer_held(False)


def play(sim: Simulation):
    """Open a window and run the game until it is closed"""
    window = ArenaWindow(sim)
    arcade.run()
    return window
