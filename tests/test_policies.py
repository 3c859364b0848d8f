"""Tests for scripted policies."""

import numpy as np
import pytest

from endless_runner.env import RunnerEnv
from endless_runner.policies import POLICIES, BasePolicy, RandomPolicy, ReactivePolicy


def make_obs(airborne=0.0, gap=800.0):
    obs = np.zeros(8, dtype=np.float32)
    obs[2] = airborne
    obs[3] = gap
    return obs


def play(policy, seed, max_steps=1500):
    env = RunnerEnv(max_episode_steps=max_steps)
    obs, _ = env.reset(seed=seed)
    policy.reset()
    steps = 0
    while True:
        obs, _, terminated, truncated, info = env.step(policy(obs))
        steps += 1
        if terminated or truncated:
            break
    env.close()
    return steps, terminated, info["distance"]


class TestBasePolicy:
    def test_act_not_implemented(self):
        with pytest.raises(NotImplementedError):
            BasePolicy()(make_obs())


class TestRandomPolicy:
    def test_returns_valid_action(self):
        policy = RandomPolicy(rng=np.random.default_rng(0))
        assert all(policy(make_obs()) in (0, 1) for _ in range(50))

    def test_jump_probability_extremes(self):
        assert RandomPolicy(jump_prob=0.0)(make_obs()) == 0
        assert RandomPolicy(jump_prob=1.0)(make_obs()) == 1

    def test_invalid_probability(self):
        with pytest.raises(ValueError):
            RandomPolicy(jump_prob=1.5)

    def test_varies_actions(self):
        policy = RandomPolicy(rng=np.random.default_rng(0), jump_prob=0.5)
        assert len({policy(make_obs()) for _ in range(50)}) == 2


class TestReactivePolicy:
    def test_waits_when_clear(self):
        assert ReactivePolicy()(make_obs(gap=800.0)) == 0

    def test_jumps_when_close(self):
        assert ReactivePolicy(trigger_distance=30.0)(make_obs(gap=25.0)) == 1

    def test_no_jump_while_airborne(self):
        assert ReactivePolicy()(make_obs(airborne=1.0, gap=10.0)) == 0

    def test_no_jump_once_obstacle_reached(self):
        assert ReactivePolicy()(make_obs(gap=-5.0)) == 0

    def test_clears_obstacles_in_env(self):
        steps, terminated, distance = play(ReactivePolicy(), seed=0)
        never_steps, never_terminated, never_distance = play(RandomPolicy(jump_prob=0.0), seed=0)
        assert never_terminated
        assert distance > never_distance
        assert steps > never_steps


class TestRegistry:
    def test_all_registered(self):
        assert set(POLICIES) == {"random", "reactive"}

    @pytest.mark.parametrize("name", sorted(POLICIES))
    def test_constructible_with_defaults(self, name):
        policy = POLICIES[name]()
        assert policy.name == name
        assert policy(make_obs()) in (0, 1)
