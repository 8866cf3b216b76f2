import asyncio

import pytest

from config import EngineConfig, MAX_SPEED, MIN_SPEED
from engine import Pacer, RunState


class FakeClock:
    """Records every requested sleep; optionally runs a hook on each one."""

    def __init__(self, on_sleep=None):
        self.sleeps = []
        self.on_sleep = on_sleep

    async def sleep(self, seconds):
        self.sleeps.append(seconds)
        if self.on_sleep is not None:
            self.on_sleep(len(self.sleeps))


def test_delay_shrinks_with_speed_and_has_a_floor():
    cfg = EngineConfig()
    delays = [cfg.delay_for(s) for s in range(MIN_SPEED, MAX_SPEED + 1)]
    assert all(a >= b for a, b in zip(delays, delays[1:]))
    assert delays[0] == pytest.approx(0.109)
    assert delays[-1] == pytest.approx(0.01)

    short = EngineConfig(base_delay_ms=50.0)
    assert short.delay_for(MAX_SPEED) == pytest.approx(short.min_delay_ms / 1000.0)


def test_running_step_sleeps_once_for_the_speed_delay():
    cfg = EngineConfig()
    clock = FakeClock()
    state = RunState(running=True, speed=40)

    asyncio.run(Pacer(cfg, sleep=clock.sleep).pace(state, lambda: True))
    assert clock.sleeps == [pytest.approx(0.07)]


def test_paused_step_polls_until_resumed_then_delays():
    cfg = EngineConfig(poll_interval=0.1)
    state = RunState(running=True, paused=True, speed=100)

    def resume_after_three(count):
        if count == 3:
            state.paused = False

    clock = FakeClock(resume_after_three)
    asyncio.run(Pacer(cfg, sleep=clock.sleep).pace(state, lambda: True))
    assert clock.sleeps[:3] == [0.1, 0.1, 0.1]
    assert clock.sleeps[3:] == [pytest.approx(0.01)]


def test_stop_while_paused_returns_without_the_delay():
    cfg = EngineConfig(poll_interval=0.1)
    state = RunState(running=True, paused=True)

    def stop_after_two(count):
        if count == 2:
            state.running = False

    clock = FakeClock(stop_after_two)
    asyncio.run(Pacer(cfg, sleep=clock.sleep).pace(state, lambda: state.running))
    assert clock.sleeps == [0.1, 0.1]


def test_from_env_overrides(monkeypatch):
    monkeypatch.setenv("SORTVIZ_BASE_DELAY_MS", "60")
    monkeypatch.setenv("SORTVIZ_DEFAULT_SIZE", "12")
    cfg = EngineConfig.from_env()
    assert cfg.base_delay_ms == 60.0
    assert cfg.default_size == 12
    assert cfg.poll_interval == 0.1
