"""Scripted policies for automated play.

Each policy takes a RunnerEnv observation vector and returns a
Discrete(2) action: 0 keeps running, 1 jumps.
"""

import numpy as np
from typing import Optional


# Observation indices (see RunnerEnv)
_AIRBORNE = 2
_GAP = 3


class BasePolicy:
    """Base class for scripted policies."""

    name: str = "base"

    def __call__(self, obs: np.ndarray) -> int:
        return self.act(obs)

    def act(self, obs: np.ndarray) -> int:
        raise NotImplementedError

    def reset(self):
        """Called at the start of each episode."""
        pass


class RandomPolicy(BasePolicy):
    """Jumps at random. Broad state coverage, many deaths."""

    name = "random"

    def __init__(self, rng: Optional[np.random.Generator] = None, jump_prob: float = 0.05):
        if not 0.0 <= jump_prob <= 1.0:
            raise ValueError(f"jump_prob must be in [0, 1], got {jump_prob}")
        self.rng = rng or np.random.default_rng()
        self.jump_prob = jump_prob

    def act(self, obs):
        return int(self.rng.random() < self.jump_prob)


class ReactivePolicy(BasePolicy):
    """Jump when grounded and the next obstacle comes within reach.

    The default window suits the default preset: at 70 km/h a jump started
    20-30 px before an obstacle clears even the tallest rock.
    """

    name = "reactive"

    def __init__(self, trigger_distance: float = 30.0):
        self.trigger_distance = trigger_distance

    def act(self, obs):
        grounded = obs[_AIRBORNE] < 0.5
        gap = obs[_GAP]
        return int(grounded and 0.0 <= gap <= self.trigger_distance)


POLICIES = {
    "random": RandomPolicy,
    "reactive": ReactivePolicy,
}
