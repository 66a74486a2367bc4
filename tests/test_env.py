import gymnasium as gym
import numpy as np

import falling_blocks.env  # noqa: F401
from falling_blocks.env.falling_blocks_env import FallingBlocksEnv
from falling_blocks.game import Action


def test_reset_observation_matches_space():
    env = FallingBlocksEnv()
    obs, info = env.reset(seed=5)
    assert env.observation_space.contains(obs)
    assert obs["board"].shape == (20, 10)
    assert np.count_nonzero(obs["board"]) == 4
    assert info["score"] == 0 and info["level"] == 1


def test_gravity_follows_virtual_clock():
    env = FallingBlocksEnv(step_ms=100)
    env.reset(seed=5)
    y0 = env.game.state.current.y
    ticks = 0
    for _ in range(10):
        _, reward, terminated, truncated, info = env.step(int(Action.NONE))
        ticks += info["gravity_ticks"]
        assert reward == 0.0
        assert not terminated and not truncated
    assert ticks == 1
    assert env.game.state.current.y == y0 + 1


def test_hard_drops_eventually_terminate():
    env = FallingBlocksEnv()
    env.reset(seed=11)
    terminated = False
    for _ in range(500):
        _, _, terminated, truncated, _ = env.step(int(Action.HARD_DROP))
        if terminated:
            break
    assert terminated
    assert env.game.over


def test_truncates_after_max_steps():
    env = FallingBlocksEnv(max_episode_steps=3)
    env.reset(seed=1)
    results = [env.step(int(Action.NONE))[3] for _ in range(3)]
    assert results == [False, False, True]


def test_rgb_render():
    env = FallingBlocksEnv(render_mode="rgb_array")
    env.reset(seed=2)
    img = env.render()
    assert img.shape == (240, 120, 3)
    assert img.dtype == np.uint8


def test_registered_env_runs():
    env = gym.make("FallingBlocks-v0")
    obs, _ = env.reset(seed=3)
    obs, reward, terminated, truncated, info = env.step(env.action_space.sample())
    assert "score" in info
    env.close()


def test_env_package_supports_star_import():
    namespace = {}
    exec("from falling_blocks.env import *", namespace)
    assert "FallingBlocks-v0" in gym.registry
