import random

import pytest

from config import EngineConfig
from engine import RunController
from sequence import Sequence


ALL_ALGORITHMS = ["bubble", "selection", "insertion", "merge", "quick", "heap", "counting", "radix"]
COMPARISON_ALGORITHMS = ["bubble", "selection", "insertion", "merge", "quick", "heap"]
STABLE_ALGORITHMS = ["bubble", "insertion", "merge", "counting", "radix"]


@pytest.fixture
def make_controller():
    """Controller with no pacing, preloaded with the given values."""
    def _make(values, on_step=None):
        return RunController(EngineConfig.instant(), on_step=on_step, sequence=Sequence(values))
    return _make


@pytest.fixture
def random_values():
    rng = random.Random(1234)
    return [rng.randint(0, 500) for _ in range(40)]
