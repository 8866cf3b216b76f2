"""
controller.py — Run Controller
===============================
The RunController is the ONLY object the outside world talks to.  It
owns the working Sequence and the RunState, dispatches to the selected
algorithm, and exposes generate / custom / start / pause / resume /
stop / reset / speed.

State machine:
    IDLE      →  start()           →  RUNNING
    RUNNING   →  pause()           →  PAUSED
    PAUSED    →  resume()          →  RUNNING
    RUNNING   →  (algorithm done)  →  FINISHED   (every bar SORTED)
    RUNNING / PAUSED  →  stop()    →  STOPPED    (partial order kept)
    any idle state  →  generate() / set_custom_sequence()  →  IDLE

Concurrency:
  Everything runs on one asyncio event loop.  The algorithm task only
  suspends inside SortContext.step(), and lifecycle calls are plain
  synchronous methods invoked from the same loop, so they can never
  interleave with half a swap.  The web layer reaches this object
  through EngineHost, which marshals every call onto the loop thread.
"""

import asyncio
from enum import Enum
from typing import Callable, Iterable, Optional, Tuple, Union

from algorithms import AlgoInfo, SortContext, Step, get_algorithm, require_non_negative_integers
from config import MAX_ARRAY_SIZE, MIN_ARRAY_SIZE, MIN_CUSTOM_LENGTH, VALUE_RANGE, EngineConfig, clamp_speed
from engine.pacer import Pacer
from engine.state import RunMetrics, RunState
from errors import InvalidInputError, InvalidOperationError, UnknownAlgorithmError
from logging_config import get_logger
from sequence import ElementTag, Number, PRESETS, Sequence

logger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Status
# ---------------------------------------------------------------------------
class RunStatus(Enum):
    IDLE     = "idle"
    RUNNING  = "running"
    PAUSED   = "paused"
    FINISHED = "finished"
    STOPPED  = "stopped"


# ---------------------------------------------------------------------------
# RunController
# ---------------------------------------------------------------------------
class RunController:
    """
    Attributes:
        config       : EngineConfig (pacing policy, defaults).
        sequence     : The working Sequence.  Replaced wholesale by generate / custom input.
        state        : The shared RunState.
        size         : Size used by reset().
        preset       : Preset used by reset().
        value_range  : (lo, hi) used by reset().
        on_step      : Optional callback(Step) fired after every visualised step
                       and every lifecycle change.  The renderer hooks in here.
        last_metrics : RunMetrics of the most recent finished or stopped run.
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        on_step: Optional[Callable[[Step], None]] = None,
        sequence: Optional[Sequence] = None,
        seed: Optional[int] = None,
    ):
        self.config:  EngineConfig = config or EngineConfig()
        self.state:   RunState     = RunState(speed=clamp_speed(self.config.default_speed))
        self.on_step: Optional[Callable[[Step], None]] = on_step
        self.preset:  str          = "random"
        self.value_range: Tuple[int, int] = VALUE_RANGE
        self.last_metrics: Optional[RunMetrics] = None

        if sequence is None:
            sequence = Sequence.generate(self.config.default_size, value_range=VALUE_RANGE, seed=seed)
        self.sequence: Sequence = sequence
        self.size:     int      = len(sequence)

        self._pacer:       Pacer                  = Pacer(self.config)
        self._task:        Optional[asyncio.Task] = None
        self._status:      RunStatus              = RunStatus.IDLE
        self._explanation: str                    = ""

    # ------------------------------------------------------------------
    # Array lifecycle
    # ------------------------------------------------------------------
    def generate(
        self,
        size: Optional[int] = None,
        value_range: Optional[Tuple[int, int]] = None,
        preset: Optional[str] = None,
        seed: Optional[int] = None,
    ) -> Sequence:
        """
        Replace the working sequence with a freshly generated one.  Not allowed mid-run.

        With no `size` the current size is reused, clamped into the allowed
        range (a long custom array regenerates at MAX_ARRAY_SIZE).  With no
        `value_range` or `preset` the previous ones are reused.
        """
        if self.state.running:
            raise InvalidOperationError("Stop the running sort before generating a new array")

        if size is None:
            size = min(max(self.size, MIN_ARRAY_SIZE), MAX_ARRAY_SIZE)
        else:
            try:
                size = int(size)
            except (TypeError, ValueError):
                raise InvalidInputError(f"Array size must be an integer, got {size!r}") from None
        if not MIN_ARRAY_SIZE <= size <= MAX_ARRAY_SIZE:
            raise InvalidInputError(f"Array size must be between {MIN_ARRAY_SIZE} and {MAX_ARRAY_SIZE}, got {size}")
        value_range = self.value_range if value_range is None else _check_value_range(value_range)
        preset = preset or self.preset
        if preset not in PRESETS:
            raise InvalidInputError(f"Unknown preset '{preset}'. Expected one of: {', '.join(PRESETS)}")

        self.sequence    = Sequence.generate(size, preset=preset, value_range=value_range, seed=seed)
        self.size        = size
        self.value_range = value_range
        self.preset      = preset
        self._clear_run()
        logger.info(f"Generated {preset} array of {size} values in {value_range}.")
        self._publish(f"New {preset} array of {size} values")
        return self.sequence

    def set_custom_sequence(self, values: Union[str, Iterable[Number]]) -> Sequence:
        """
        Load user-supplied values (comma-separated text or an iterable of numbers).

        Validation happens first; on failure InvalidInputError is raised and the
        current sequence and run are left exactly as they were.  On success any
        running sort is stopped before the sequence is replaced.
        """
        try:
            if isinstance(values, str):
                seq = Sequence.parse(values, min_length=MIN_CUSTOM_LENGTH)
            else:
                seq = Sequence.from_values(values, min_length=MIN_CUSTOM_LENGTH)
        except InvalidInputError as e:
            logger.warning(f"Rejected custom array: {e}")
            raise

        if self.state.running:
            self.stop()
        self.sequence = seq
        self.size     = len(seq)
        self._clear_run()
        logger.info(f"Loaded custom array of {len(seq)} values.")
        self._publish(f"Custom array of {len(seq)} values")
        return self.sequence

    def reset(self) -> Sequence:
        """stop() followed by generate() at the current size, value range and preset."""
        self.stop()
        return self.generate()

    # ------------------------------------------------------------------
    # Run lifecycle
    # ------------------------------------------------------------------
    def start(self, algo_key: str) -> "asyncio.Task[Optional[RunMetrics]]":
        """
        Launch `algo_key` as a task on the running event loop and return it.

        Raises:
            UnknownAlgorithmError – key not in the registry (no state change)
            InvalidOperationError – a sort is already running
            InvalidInputError     – counting / radix on negative or non-integer values,
                                    or counting above MAX_COUNTING_VALUE
        """
        info = get_algorithm(algo_key)
        if info is None:
            raise UnknownAlgorithmError(algo_key)
        if self.state.running:
            raise InvalidOperationError("A sort is already running")
        if info.non_negative_only:
            require_non_negative_integers(self.sequence, info.label, info.max_value)

        loop = asyncio.get_running_loop()
        self.sequence.reset_tags()
        generation = self.state.begin(info.key)
        self._status = RunStatus.RUNNING
        ctx = SortContext(self.sequence, self.state, self._pacer, generation, on_step=self._emit)

        logger.info(f"Starting {info.label} on {len(self.sequence)} values.")
        self._publish(f"Start {info.label}")
        self._task = loop.create_task(self._run(info, ctx))
        self._task.add_done_callback(_log_task_failure)
        return self._task

    async def run(self, algo_key: str) -> Optional[RunMetrics]:
        """start() and wait for the run to finish or be stopped."""
        return await self.start(algo_key)

    def pause(self) -> bool:
        if not self.state.running or self.state.paused:
            logger.debug("pause() ignored: no running sort to pause.")
            return False
        self.state.set_paused(True)
        self._status = RunStatus.PAUSED
        logger.info("Paused.")
        self._publish("Paused")
        return True

    def resume(self) -> bool:
        if not self.state.running or not self.state.paused:
            logger.debug("resume() ignored: nothing is paused.")
            return False
        self.state.set_paused(False)
        self._status = RunStatus.RUNNING
        logger.info("Resumed.")
        self._publish("Resumed")
        return True

    def toggle_pause(self) -> bool:
        """Single pause button: pause if running, resume if paused.  Returns the new paused flag."""
        if self.state.paused:
            self.resume()
        else:
            self.pause()
        return self.state.paused

    def stop(self) -> bool:
        """Cancel the run at its next checkpoint.  The partial order is kept."""
        if not self.state.running:
            logger.debug("stop() ignored: no running sort.")
            return False
        self._finish(completed=False, explanation="Stopped")
        logger.info(f"Stopped after {self.state.comparisons} comparisons, {self.state.swaps} swaps.")
        return True

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_speed(self, speed: int) -> int:
        """Clamp to 1..100.  A live run picks it up on its next step."""
        self.state.speed = clamp_speed(speed)
        return self.state.speed

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def status(self) -> RunStatus:
        return self._status

    def snapshot(self) -> Step:
        """Fresh Step for polling renderers (elapsed time is live)."""
        return Step.capture(
            self.sequence, self.state, self._explanation,
            is_final=self._status == RunStatus.FINISHED,
        )

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    async def _run(self, info: AlgoInfo, ctx: SortContext) -> Optional[RunMetrics]:
        try:
            await info.fn(ctx)
        except Exception:
            if not ctx.cancelled:
                self._finish(completed=False, explanation=f"{info.label} failed")
            raise

        if ctx.generation != self.state.generation:
            # superseded by a newer run; its metrics are not ours
            return None
        if not ctx.cancelled:
            self._finish(completed=True, explanation=f"{info.label} done")
            logger.info(
                f"{info.label} finished: {self.state.comparisons} comparisons, "
                f"{self.state.swaps} swaps, {self.state.elapsed_ms:.0f} ms."
            )
        return self.last_metrics

    def _finish(self, completed: bool, explanation: str) -> None:
        info = get_algorithm(self.state.algorithm or "")
        if completed:
            self.sequence.mark_all(ElementTag.SORTED)
        self.state.finish()
        self._status = RunStatus.FINISHED if completed else RunStatus.STOPPED
        self.last_metrics = RunMetrics.from_state(
            self.state, info.label if info else "", len(self.sequence), completed,
        )
        self._publish(explanation, is_final=completed)

    def _clear_run(self) -> None:
        self.state.reset_counters()
        self.state.algorithm = None
        self._status = RunStatus.IDLE

    def _publish(self, explanation: str, is_final: bool = False) -> None:
        self._emit(Step.capture(self.sequence, self.state, explanation, is_final=is_final))

    def _emit(self, step: Step) -> None:
        self._explanation = step.explanation
        if self.on_step is not None:
            self.on_step(step)


def _log_task_failure(task: asyncio.Task) -> None:
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.error(f"Sort task failed: {exc!r}")


def _check_value_range(value_range) -> Tuple[int, int]:
    """Normalise a (lo, hi) pair, e.g. a JSON list, into a tuple of ints with lo <= hi."""
    try:
        lo, hi = value_range
    except (TypeError, ValueError):
        raise InvalidInputError(f"Value range must be a (low, high) pair, got {value_range!r}") from None
    if not all(isinstance(v, int) and not isinstance(v, bool) for v in (lo, hi)):
        raise InvalidInputError(f"Value range bounds must be integers, got {value_range!r}")
    if lo > hi:
        raise InvalidInputError(f"Value range low bound {lo} is above high bound {hi}")
    return lo, hi
