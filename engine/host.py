"""
host.py — Event-Loop Host for the Web Layer
============================================
Flask serves each request on its own worker thread, but the engine must
stay single-threaded.  EngineHost runs one asyncio loop in a daemon
thread and marshals every controller call onto it:

    host = EngineHost(EngineConfig.from_env())
    host.call(lambda c: c.start("merge"))     # runs on the loop thread
    step = host.call(lambda c: c.snapshot())
    metrics = host.submit(measure("quick", values))

Exceptions raised on the loop (InvalidInputError, …) are re-raised in
the calling thread, so the web layer handles them like any local error.
"""

import asyncio
import threading
from typing import Any, Awaitable, Callable, Optional, TypeVar

from config import EngineConfig
from engine.controller import RunController
from logging_config import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class EngineHost:
    """
    Attributes:
        controller : The one RunController, only ever touched from the loop thread.
        timeout    : Seconds a request waits for its call to be served.
    """

    def __init__(self, config: Optional[EngineConfig] = None, timeout: float = 30.0):
        self.controller = RunController(config or EngineConfig())
        self.timeout    = timeout
        self._loop:   Optional[asyncio.AbstractEventLoop] = None
        self._thread: Optional[threading.Thread]          = None
        self._lock    = threading.Lock()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self) -> None:
        with self._lock:
            if self._thread is not None and self._thread.is_alive():
                return
            self._loop = asyncio.new_event_loop()
            self._thread = threading.Thread(target=self._serve, name="sort-engine", daemon=True)
            self._thread.start()
            logger.info("Engine loop started.")

    def shutdown(self) -> None:
        with self._lock:
            if self._loop is None:
                return
            self._loop.call_soon_threadsafe(self._loop.stop)
            if self._thread is not None:
                self._thread.join(timeout=self.timeout)
            self._loop.close()
            self._loop = None
            self._thread = None
            logger.info("Engine loop stopped.")

    # ------------------------------------------------------------------
    # Marshalling
    # ------------------------------------------------------------------
    def call(self, fn: Callable[[RunController], T]) -> T:
        """Run fn(controller) on the loop thread and return its result."""
        async def _invoke():
            return fn(self.controller)
        return self.submit(_invoke())

    def submit(self, coro: Awaitable[T]) -> T:
        """Run a coroutine on the loop thread and block until it completes."""
        self.start()
        future = asyncio.run_coroutine_threadsafe(coro, self._loop)
        return future.result(self.timeout)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _serve(self) -> None:
        asyncio.set_event_loop(self._loop)
        self._loop.run_forever()
