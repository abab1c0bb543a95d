import math

from wavearena.configs import make_config
from wavearena.waves import wave_enemy_count, wave_enemy_hp, wave_enemy_speed

from .conftest import start_combat


def test_wave_scaling_formulas():
    cfg = make_config("melee")
    for n in range(1, 20):
        assert wave_enemy_count(cfg, n) == 4 + (n - 1) * 3
        assert wave_enemy_hp(cfg, n) == math.floor(25 * 1.12 ** (n - 1))
        assert math.isclose(wave_enemy_speed(cfg, n), 1.2 * 1.03 ** (n - 1))


def test_wave_scaling_is_monotonic():
    cfg = make_config("ranged")
    for n in range(1, 50):
        assert wave_enemy_count(cfg, n + 1) > wave_enemy_count(cfg, n)
        assert wave_enemy_hp(cfg, n + 1) >= wave_enemy_hp(cfg, n)
        assert wave_enemy_speed(cfg, n + 1) >= wave_enemy_speed(cfg, n)


def test_melee_wave_spawns_everything_at_once(melee_sim):
    start_combat(melee_sim, wave=3)
    s = melee_sim.state
    assert not s.in_break
    assert s.pending_spawns == 0
    assert len(s.enemies) == 10
    for e in s.enemies:
        assert e.hp == e.hp_max == 31
        assert math.isclose(e.speed, 1.2 * 1.03 ** 2)


def test_ranged_wave_spawns_on_a_timer(ranged_sim):
    start_combat(ranged_sim, wave=1)
    s = ranged_sim.state
    d = ranged_sim.director
    assert s.pending_spawns == 4
    assert s.enemies == []

    d.update_spawns()
    assert len(s.enemies) == 1
    assert s.pending_spawns == 3

    for _ in range(38):
        d.update_spawns()
    assert len(s.enemies) == 1

    d.update_spawns()
    assert len(s.enemies) == 2


def test_start_wave_refills_teleports(ranged_sim):
    ranged_sim.state.teleport_charges = 0
    start_combat(ranged_sim, wave=2)
    assert ranged_sim.state.teleport_charges == 3


def test_spawns_start_just_outside_the_arena(melee_sim):
    cfg = melee_sim.cfg
    start_combat(melee_sim, wave=20)
    for e in melee_sim.state.enemies:
        outside_x = e.x == -cfg.spawn_padding or e.x == cfg.width + cfg.spawn_padding
        outside_y = e.y == -cfg.spawn_padding or e.y == cfg.height + cfg.spawn_padding
        assert outside_x or outside_y


def test_game_starts_in_break_and_opens_wave_one(melee_sim):
    s = melee_sim.state
    assert s.in_break and s.wave == 1
    for _ in range(179):
        melee_sim.step()
    assert s.in_break
    melee_sim.step()
    assert not s.in_break
    assert len(s.enemies) == 4


def test_break_regenerates_up_to_max(melee_sim):
    p = melee_sim.state.player
    p.hp = 50.0
    melee_sim.step()
    assert math.isclose(p.hp, 50.0 + 10 / 60)

    p.hp = p.hp_max - 0.01
    melee_sim.step()
    assert p.hp == p.hp_max


def test_wave_clear_grants_level_rewards(melee_sim):
    s = melee_sim.state
    s.in_break = False
    s.player.hp = 50.0

    assert melee_sim.director.check_wave_clear()
    assert s.wave == 2
    assert s.in_break
    assert s.break_timer == 180
    assert s.player.damage == 11
    assert math.isclose(s.player.speed, 2.25)
    assert s.player.hp_max == 102
    assert s.player.hp == 60


def test_wave_not_cleared_while_spawns_pending(ranged_sim):
    start_combat(ranged_sim, wave=1)
    assert not ranged_sim.director.check_wave_clear()
    assert ranged_sim.state.wave == 1


def test_ranged_run_completes_after_the_last_wave(ranged_sim):
    s = ranged_sim.state
    s.wave = 50
    s.in_break = False
    assert ranged_sim.director.check_wave_clear()
    assert s.completed
    assert s.wave == 50
    assert ranged_sim.is_over


def test_melee_run_never_completes(melee_sim):
    s = melee_sim.state
    s.wave = 50
    s.in_break = False
    melee_sim.director.check_wave_clear()
    assert not s.completed
    assert s.wave == 51
    assert s.in_break
