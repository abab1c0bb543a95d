import math

import pytest

from wavearena.configs import make_config, PROFILES, BASE_CONFIG


def test_profiles_build():
    for name in PROFILES:
        cfg = make_config(name)
        assert cfg.width == BASE_CONFIG["width"]


def test_ranged_profile_is_the_capped_superset():
    cfg = make_config("ranged")
    assert cfg.combat_model == "projectile"
    assert cfg.spawn_mode == "throttled"
    assert cfg.max_wave == 50
    assert cfg.teleport_enabled and cfg.autopilot_available


def test_melee_profile_is_endless():
    cfg = make_config("melee")
    assert cfg.combat_model == "arc"
    assert cfg.spawn_mode == "instant"
    assert cfg.max_wave is None
    assert not cfg.teleport_enabled and not cfg.autopilot_available


def test_overrides_apply():
    cfg = make_config("ranged", coin_per_kill=5, max_wave=3)
    assert cfg.coin_per_kill == 5
    assert cfg.max_wave == 3


def test_unknown_profile_raises():
    with pytest.raises(ValueError):
        make_config("sniper")


def test_unknown_key_raises():
    with pytest.raises(KeyError):
        make_config("ranged", not_a_setting=1)


def test_bad_combat_model_raises():
    with pytest.raises(ValueError):
        make_config("ranged", combat_model="laser")


def test_derived_timings():
    cfg = make_config("ranged")
    assert cfg.break_ticks == 180
    assert math.isclose(cfg.break_heal_per_tick, 10 / 60)
