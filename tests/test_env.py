import numpy as np

from wavearena.env import WaveArenaEnv


def test_reset_observation_matches_space():
    env = WaveArenaEnv(k_enemies=3)
    obs, info = env.reset(seed=0)
    assert obs.shape == env.observation_space.shape
    assert env.observation_space.contains(obs)
    assert info["wave"] == 1
    assert info["in_break"]
    env.close()


def test_random_steps_stay_in_bounds():
    env = WaveArenaEnv(max_steps=200, frame_skip=2)
    env.action_space.seed(0)
    obs, info = env.reset(seed=1)
    truncated = terminated = False
    steps = 0
    while not (terminated or truncated):
        obs, reward, terminated, truncated, info = env.step(env.action_space.sample())
        assert env.observation_space.contains(obs)
        assert isinstance(reward, float)
        steps += 1
    assert truncated
    assert steps == 200
    env.close()


def test_autopilot_is_off_for_agents():
    env = WaveArenaEnv()
    env.reset(seed=0)
    assert not env.sim.state.autopilot
    env.close()


def test_movement_action_moves_player():
    env = WaveArenaEnv()
    env.reset(seed=0)
    x0 = env.sim.state.player.x
    env.step(np.array([4, 0, 0, 0, 0]))
    assert np.isclose(env.sim.state.player.x, x0 + env.cfg.player_speed)
    env.close()


def test_death_terminates_with_penalty():
    env = WaveArenaEnv(reward_config="baseline")
    env.reset(seed=0)
    env.sim.state.player.hp = 0.0
    obs, reward, terminated, truncated, info = env.step(np.array([0, 0, 0, 0, 0]))
    assert terminated
    assert reward < -9.0
    env.close()


def test_melee_profile_env():
    env = WaveArenaEnv(profile="melee")
    obs, info = env.reset(seed=3)
    assert env.cfg.combat_model == "arc"
    assert env.observation_space.contains(obs)
    env.close()


def test_rgb_array_render():
    env = WaveArenaEnv(render_mode="rgb_array")
    env.reset(seed=0)
    frame = env.render()
    assert frame.shape == (env.cfg.height, env.cfg.width, 3)
    assert frame.dtype == np.uint8
    env.close()
