import math

from wavearena.combat import update_enemies, update_coin_drops, damage_enemy
from wavearena.entities import Enemy, Bullet

from .conftest import start_combat


def _enemy(x, y, hp=25.0, speed=0.0):
    return Enemy(x=x, y=y, hp=hp, hp_max=hp, speed=speed)


# ----------------------------
# Enemy pursuit / contact damage
# ----------------------------

def test_enemies_walk_straight_at_the_player(ranged_sim):
    s = ranged_sim.state
    s.player.x, s.player.y = 400.0, 100.0
    e = _enemy(100.0, 100.0, speed=1.5)
    s.enemies = [e]
    update_enemies(ranged_sim.cfg, s)
    assert math.isclose(e.x, 101.5)
    assert math.isclose(e.y, 100.0)


def test_contact_damage_sets_both_cooldowns(ranged_sim):
    cfg = ranged_sim.cfg
    s = ranged_sim.state
    p = s.player
    e = _enemy(p.x + 20, p.y)
    s.enemies = [e]

    lost = update_enemies(cfg, s)
    assert lost == 8
    assert p.hp == 92
    assert p.invuln == 18
    assert e.hit_cooldown == 30


def test_invulnerability_protects_from_every_enemy(ranged_sim):
    s = ranged_sim.state
    p = s.player
    s.enemies = [_enemy(p.x + 20, p.y), _enemy(p.x - 20, p.y)]
    update_enemies(ranged_sim.cfg, s)
    assert p.hp == 92
    assert s.enemies[1].hit_cooldown == 0


def test_hitting_enemy_is_throttled_separately(ranged_sim):
    s = ranged_sim.state
    p = s.player
    a = _enemy(p.x + 20, p.y)
    s.enemies = [a]
    update_enemies(ranged_sim.cfg, s)
    assert p.hp == 92

    # player immunity over, but the same enemy is still cooling down
    p.invuln = 0
    update_enemies(ranged_sim.cfg, s)
    assert p.hp == 92

    b = _enemy(p.x - 20, p.y)
    s.enemies.append(b)
    update_enemies(ranged_sim.cfg, s)
    assert p.hp == 84
    assert b.hit_cooldown == 30


def test_no_contact_outside_radius_sum(ranged_sim):
    s = ranged_sim.state
    p = s.player
    s.enemies = [_enemy(p.x + 13 + 14 + 2.5, p.y)]
    update_enemies(ranged_sim.cfg, s)
    assert p.hp == 100


def test_player_hp_never_goes_negative(ranged_sim):
    s = ranged_sim.state
    p = s.player
    p.hp = 3.0
    s.enemies = [_enemy(p.x + 20, p.y)]
    update_enemies(ranged_sim.cfg, s)
    assert p.hp == 0
    assert s.game_over


# ----------------------------
# Kills
# ----------------------------

def test_kill_credit_ignores_overkill(ranged_sim):
    cfg = ranged_sim.cfg
    s = ranged_sim.state
    e = _enemy(50.0, 60.0, hp=5.0)
    s.enemies = [e]
    assert damage_enemy(cfg, s, e, 500.0)
    assert s.enemies == []
    assert s.kos == 1
    assert s.coins == 3
    assert len(s.coin_drops) == 1
    assert (s.coin_drops[0].x, s.coin_drops[0].y) == (50.0, 60.0)


def test_coin_drops_drift_up_and_expire(ranged_sim):
    cfg = ranged_sim.cfg
    s = ranged_sim.state
    e = _enemy(50.0, 60.0, hp=1.0)
    s.enemies = [e]
    damage_enemy(cfg, s, e, 1.0)

    update_coin_drops(cfg, s)
    assert math.isclose(s.coin_drops[0].y, 60.0 - 0.35)
    for _ in range(38):
        update_coin_drops(cfg, s)
    assert len(s.coin_drops) == 1
    update_coin_drops(cfg, s)
    assert s.coin_drops == []


# ----------------------------
# Projectile model
# ----------------------------

def _aim(sim, x, y):
    sim.state.pointer.x = x
    sim.state.pointer.y = y


def test_attack_spawns_bullet_toward_pointer(ranged_sim):
    start_combat(ranged_sim)
    s = ranged_sim.state
    s.player.x, s.player.y = 100.0, 100.0
    _aim(ranged_sim, 100.0, 300.0)

    assert ranged_sim.attack()
    assert len(s.bullets) == 1
    b = s.bullets[0]
    assert (b.x, b.y) == (100.0, 100.0)
    assert math.isclose(b.vx, 0.0, abs_tol=1e-9)
    assert math.isclose(b.vy, 7.5)
    assert b.life == 320
    assert b.damage == s.player.damage
    assert s.player.attack_cooldown == 14


def test_attack_on_cooldown_changes_nothing(ranged_sim):
    start_combat(ranged_sim)
    s = ranged_sim.state
    s.player.attack_cooldown = 3
    before = (s.coins, s.kos, len(s.bullets))
    assert not ranged_sim.attack()
    assert (s.coins, s.kos, len(s.bullets)) == before
    assert s.player.attack_cooldown == 3


def test_attack_rejected_during_break(ranged_sim):
    assert ranged_sim.state.in_break
    assert not ranged_sim.attack()
    assert ranged_sim.state.bullets == []


def test_bullet_range_is_a_distance_budget(ranged_sim):
    start_combat(ranged_sim)
    s = ranged_sim.state
    s.player.x, s.player.y = 100.0, 100.0
    _aim(ranged_sim, 900.0, 100.0)
    ranged_sim.attack()

    for _ in range(42):
        ranged_sim.combat.update(s)
    assert len(s.bullets) == 1
    assert math.isclose(s.bullets[0].life, 320 - 42 * 7.5)
    ranged_sim.combat.update(s)
    assert s.bullets == []


def test_bullet_hits_only_the_first_enemy(ranged_sim):
    start_combat(ranged_sim)
    s = ranged_sim.state
    s.player.x, s.player.y = 100.0, 100.0
    _aim(ranged_sim, 200.0, 100.0)
    first, second = _enemy(110.0, 100.0), _enemy(110.0, 100.0)
    s.enemies = [first, second]

    ranged_sim.attack()
    ranged_sim.combat.update(s)
    assert first.hp == 15
    assert second.hp == 25
    assert s.bullets == []


def test_bullet_hits_at_exact_radius_sum(ranged_sim):
    start_combat(ranged_sim)
    s = ranged_sim.state
    e = _enemy(300.0, 300.0)
    s.enemies = [e]
    # 13 + 4 apart after one move
    s.bullets = [Bullet(x=280.0, y=300.0, vx=3.0, vy=0.0, damage=10, life=100)]

    ranged_sim.combat.update(s)
    assert e.hp == 15
    assert s.bullets == []


def test_bullet_kill_credits_coins(ranged_sim):
    start_combat(ranged_sim)
    s = ranged_sim.state
    s.player.x, s.player.y = 100.0, 100.0
    _aim(ranged_sim, 200.0, 100.0)
    s.enemies = [_enemy(110.0, 100.0, hp=10.0)]

    ranged_sim.attack()
    ranged_sim.combat.update(s)
    assert s.enemies == []
    assert s.kos == 1
    assert s.coins == 3


# ----------------------------
# Arc sweep model
# ----------------------------

def test_arc_sweep_hits_every_enemy_in_the_cone(melee_sim):
    start_combat(melee_sim)
    s = melee_sim.state
    s.player.x, s.player.y = 200.0, 200.0
    _aim(melee_sim, 300.0, 200.0)

    def polar(r, deg):
        a = math.radians(deg)
        return _enemy(200.0 + r * math.cos(a), 200.0 + r * math.sin(a))

    front = polar(40, 0)
    inside_edge = polar(50, 40)
    outside_angle = polar(50, 60)
    behind = polar(40, 180)
    too_far = polar(100, 0)
    s.enemies = [front, inside_edge, outside_angle, behind, too_far]

    assert melee_sim.attack()
    assert front.hp == 15
    assert inside_edge.hp == 15
    assert outside_angle.hp == 25
    assert behind.hp == 25
    assert too_far.hp == 25
    assert s.player.attack_cooldown == 14


def test_arc_sweep_resets_cooldown_on_a_miss(melee_sim):
    start_combat(melee_sim)
    melee_sim.state.enemies = []
    assert melee_sim.attack()
    assert melee_sim.state.player.attack_cooldown == 14
    assert not melee_sim.attack()


def test_arc_sweep_removes_killed_enemies(melee_sim):
    start_combat(melee_sim)
    s = melee_sim.state
    s.player.x, s.player.y = 200.0, 200.0
    _aim(melee_sim, 300.0, 200.0)
    s.enemies = [_enemy(230.0, 200.0, hp=4.0), _enemy(230.0, 210.0, hp=9.0)]

    melee_sim.attack()
    assert s.enemies == []
    assert s.kos == 2
    assert s.coins == 6
