"""
pacer.py — Observe-and-Pace Suspension Point
=============================================
The Pacer is where a running algorithm gives the event loop back.
SortContext.step() calls pace() once per visualised step:

    1. while paused → poll every `poll_interval` seconds (no pacing delay consumed)
    2. once resumed → sleep delay_for(speed)
    3. return       → the caller re-checks liveness straight away

It never touches counters or tags.  The sleep function is injectable so
the headless runner and tests can swap the wall clock for something
faster without changing a single algorithm.
"""

import asyncio
from typing import Awaitable, Callable

from config import EngineConfig


class Pacer:
    def __init__(
        self,
        config: EngineConfig,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.config = config
        self._sleep = sleep

    async def pace(self, state, alive: Callable[[], bool]) -> None:
        while state.paused and alive():
            await self._sleep(self.config.poll_interval)
        if not alive():
            return
        await self._sleep(self.config.delay_for(state.speed))
