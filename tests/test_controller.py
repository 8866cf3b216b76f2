import asyncio

import pytest

from config import EngineConfig, MAX_SPEED, MIN_SPEED
from engine import RunController, RunStatus
from errors import InvalidInputError, InvalidOperationError, UnknownAlgorithmError
from sequence import Sequence

from conftest import ALL_ALGORITHMS


async def _until_steps(ctl: RunController, n: int) -> None:
    while ctl.state.running and ctl.state.step_number < n:
        await asyncio.sleep(0)


# ---------------------------------------------------------------------------
# start()
# ---------------------------------------------------------------------------
def test_unknown_algorithm_is_rejected_without_state_change(make_controller):
    ctl = make_controller([3, 1, 2, 5, 4])
    with pytest.raises(UnknownAlgorithmError):
        asyncio.run(ctl.run("bogo"))
    assert ctl.status is RunStatus.IDLE
    assert ctl.state.generation == 0
    assert ctl.sequence.values() == [3, 1, 2, 5, 4]


def test_start_while_running_is_rejected(make_controller):
    async def scenario():
        ctl = make_controller(list(range(30, 0, -1)))
        task = ctl.start("bubble")
        with pytest.raises(InvalidOperationError):
            ctl.start("merge")
        ctl.stop()
        await task

    asyncio.run(scenario())


def test_start_needs_a_running_loop(make_controller):
    ctl = make_controller([3, 1, 2, 5, 4])
    with pytest.raises(RuntimeError):
        ctl.start("bubble")
    assert not ctl.state.running


def test_start_resets_counters_and_tags(make_controller):
    ctl = make_controller([5, 4, 3, 2, 1])
    asyncio.run(ctl.run("bubble"))
    first = ctl.last_metrics

    asyncio.run(ctl.run("selection"))
    second = ctl.last_metrics
    assert second.algo_key == "selection"
    assert second.comparisons == 10     # counters did not carry over from bubble
    assert first.algo_key == "bubble"


def test_completed_run_reports_metrics_and_final_step(make_controller):
    steps = []
    ctl = make_controller([4, 3, 2, 1, 0], on_step=steps.append)
    metrics = asyncio.run(ctl.run("quick"))

    assert ctl.status is RunStatus.FINISHED
    assert metrics.algo_label == "Quick Sort"
    assert metrics.size == 5
    assert metrics.total_steps == ctl.state.step_number
    assert steps[0].running and steps[0].step_number == 0
    assert steps[-1].is_final and not steps[-1].running
    assert ctl.snapshot().is_final


# ---------------------------------------------------------------------------
# stop()
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("key", ALL_ALGORITHMS)
def test_stop_mid_run_freezes_sequence_and_counters(make_controller, key):
    frozen = {}
    ctl = make_controller(list(range(40, 0, -1)))

    def on_step(step):
        if step.running and step.step_number == 15:
            ctl.stop()
            frozen["values"] = ctl.sequence.values()
            frozen["counters"] = (ctl.state.comparisons, ctl.state.swaps)

    ctl.on_step = on_step
    metrics = asyncio.run(ctl.run(key))

    assert frozen, "run ended before the stop point"
    assert not metrics.completed
    assert ctl.status is RunStatus.STOPPED
    assert not ctl.state.running and not ctl.state.paused
    assert ctl.sequence.values() == frozen["values"]
    assert (ctl.state.comparisons, ctl.state.swaps) == frozen["counters"]
    assert ctl.sequence.values() != sorted(ctl.sequence.values())


def test_stop_outside_a_run_is_a_no_op(make_controller):
    ctl = make_controller([1, 2, 3, 4, 5])
    assert ctl.stop() is False
    assert ctl.status is RunStatus.IDLE


def test_stale_task_cannot_leak_into_a_newer_run(make_controller):
    async def scenario():
        ctl = make_controller(list(range(25, 0, -1)))
        first = ctl.start("bubble")
        await _until_steps(ctl, 3)
        ctl.stop()
        second = ctl.start("merge")
        return ctl, await first, await second

    ctl, first, second = asyncio.run(scenario())
    assert first is None
    assert second.completed and second.algo_key == "merge"
    assert ctl.sequence.values() == list(range(1, 26))


# ---------------------------------------------------------------------------
# pause() / resume()
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("key", ALL_ALGORITHMS)
def test_pause_blocks_progress_and_resume_matches_uninterrupted_run(make_controller, random_values, key):
    baseline = asyncio.run(make_controller(random_values).run(key))

    async def scenario():
        ctl = make_controller(random_values)
        task = ctl.start(key)
        await _until_steps(ctl, 10)
        assert ctl.pause()
        assert ctl.status is RunStatus.PAUSED
        # the task may still finish the step it was pacing; let it reach the next checkpoint
        await asyncio.sleep(0.01)
        before = (ctl.state.comparisons, ctl.state.swaps, ctl.state.step_number, ctl.sequence.values())
        await asyncio.sleep(0.05)
        after = (ctl.state.comparisons, ctl.state.swaps, ctl.state.step_number, ctl.sequence.values())
        assert before == after
        assert ctl.resume()
        return ctl, await task

    ctl, metrics = asyncio.run(scenario())
    assert ctl.sequence.values() == sorted(random_values)
    assert (metrics.comparisons, metrics.swaps) == (baseline.comparisons, baseline.swaps)


def test_pause_and_resume_are_no_ops_outside_a_run(make_controller):
    ctl = make_controller([1, 2, 3, 4, 5])
    assert ctl.pause() is False
    assert ctl.resume() is False
    assert not ctl.state.paused


def test_stop_while_paused_ends_the_run(make_controller):
    async def scenario():
        ctl = make_controller(list(range(20, 0, -1)))
        task = ctl.start("heap")
        await _until_steps(ctl, 5)
        ctl.pause()
        await asyncio.sleep(0.01)
        ctl.stop()
        return ctl, await asyncio.wait_for(task, timeout=1.0)

    ctl, metrics = asyncio.run(scenario())
    assert not metrics.completed
    assert not ctl.state.paused


def test_toggle_pause(make_controller):
    async def scenario():
        ctl = make_controller(list(range(20, 0, -1)))
        task = ctl.start("insertion")
        await _until_steps(ctl, 2)
        assert ctl.toggle_pause() is True
        assert ctl.toggle_pause() is False
        await task

    asyncio.run(scenario())


def test_paused_time_is_excluded_from_elapsed(make_controller):
    async def scenario():
        ctl = make_controller(list(range(30, 0, -1)))
        task = ctl.start("bubble")
        await _until_steps(ctl, 2)
        ctl.pause()
        await asyncio.sleep(0.2)
        ctl.resume()
        return await task

    metrics = asyncio.run(scenario())
    assert metrics.elapsed_ms < 200


# ---------------------------------------------------------------------------
# generate() / set_custom_sequence() / reset()
# ---------------------------------------------------------------------------
def test_generate_replaces_sequence_and_resets_counters(make_controller):
    ctl = make_controller([5, 4, 3, 2, 1])
    asyncio.run(ctl.run("bubble"))
    ctl.generate(size=12, preset="reversed")

    assert len(ctl.sequence) == 12
    assert ctl.sequence.values() == sorted(ctl.sequence.values(), reverse=True)
    assert ctl.state.comparisons == 0 and ctl.state.swaps == 0
    assert ctl.status is RunStatus.IDLE
    assert ctl.snapshot().tags == ["default"] * 12


def test_generate_is_forbidden_while_running(make_controller):
    async def scenario():
        ctl = make_controller(list(range(30, 0, -1)))
        task = ctl.start("bubble")
        with pytest.raises(InvalidOperationError):
            ctl.generate(size=10)
        ctl.stop()
        await task

    asyncio.run(scenario())


@pytest.mark.parametrize("size", [0, 4, 101])
def test_generate_rejects_out_of_range_sizes(make_controller, size):
    ctl = make_controller([1, 2, 3, 4, 5])
    with pytest.raises(InvalidInputError):
        ctl.generate(size=size)
    assert ctl.sequence.values() == [1, 2, 3, 4, 5]


def test_generate_draws_from_the_requested_value_range(make_controller):
    ctl = make_controller([1, 2, 3, 4, 5])
    ctl.generate(size=40, value_range=(0, 5), seed=11)
    assert all(0 <= v <= 5 for v in ctl.sequence.values())

    ctl.generate(size=6, value_range=[-3, -3])
    assert ctl.sequence.values() == [-3] * 6

    ctl.generate(size=10, preset="sorted")
    assert ctl.sequence.values()[0] == -3     # range is kept for later calls
    assert ctl.value_range == (-3, -3)


@pytest.mark.parametrize("value_range", [(9, 2), (1,), "ab", (0, 2.5), (True, 4)])
def test_generate_rejects_bad_value_ranges(make_controller, value_range):
    ctl = make_controller([1, 2, 3, 4, 5])
    with pytest.raises(InvalidInputError):
        ctl.generate(size=10, value_range=value_range)
    assert ctl.sequence.values() == [1, 2, 3, 4, 5]


def test_reset_keeps_the_value_range(make_controller):
    ctl = make_controller([1, 2, 3, 4, 5])
    ctl.generate(size=8, value_range=(100, 120))
    ctl.reset()
    assert len(ctl.sequence) == 8
    assert all(100 <= v <= 120 for v in ctl.sequence.values())


def test_generate_without_size_clamps_a_long_custom_array(make_controller):
    ctl = make_controller([1, 2, 3, 4, 5])
    ctl.set_custom_sequence(list(range(150)))
    ctl.generate()
    assert len(ctl.sequence) == 100


def test_custom_sequence_examples(make_controller):
    ctl = make_controller([9, 9, 9, 9, 9])

    with pytest.raises(InvalidInputError):
        ctl.set_custom_sequence("5,3,9,1")
    with pytest.raises(InvalidInputError):
        ctl.set_custom_sequence("5,a,9,1,2")
    assert ctl.sequence.values() == [9, 9, 9, 9, 9]

    ctl.set_custom_sequence("5,3,9,1,2")
    asyncio.run(ctl.run("insertion"))
    assert ctl.sequence.values() == [1, 2, 3, 5, 9]


def test_custom_sequence_accepts_a_list(make_controller):
    ctl = make_controller([1, 2, 3, 4, 5])
    ctl.set_custom_sequence([3, -1, 2.5, 0, 8])
    assert ctl.size == 5
    assert ctl.sequence.values() == [3, -1, 2.5, 0, 8]


def test_custom_sequence_stops_a_running_sort(make_controller):
    async def scenario():
        ctl = make_controller(list(range(30, 0, -1)))
        task = ctl.start("bubble")
        await _until_steps(ctl, 3)
        ctl.set_custom_sequence("5,3,9,1,2")
        return ctl, await task

    ctl, metrics = asyncio.run(scenario())
    assert not metrics.completed
    assert ctl.sequence.values() == [5, 3, 9, 1, 2]
    assert ctl.status is RunStatus.IDLE


def test_negative_values_only_block_integer_sorts(make_controller):
    for key in ALL_ALGORITHMS:
        ctl = make_controller([4, -1, 3, 0, 2])
        if key in ("counting", "radix"):
            with pytest.raises(InvalidInputError):
                asyncio.run(ctl.run(key))
        else:
            asyncio.run(ctl.run(key))
            assert ctl.sequence.values() == [-1, 0, 2, 3, 4]


def test_reset_stops_and_regenerates_at_current_size(make_controller):
    async def scenario():
        ctl = make_controller(list(range(30, 0, -1)))
        task = ctl.start("bubble")
        await _until_steps(ctl, 3)
        ctl.reset()
        return ctl, await task

    ctl, metrics = asyncio.run(scenario())
    assert not metrics.completed
    assert len(ctl.sequence) == 30
    assert ctl.state.comparisons == 0
    assert ctl.status is RunStatus.IDLE


def test_default_controller_generates_default_size():
    ctl = RunController(EngineConfig(default_size=17), seed=5)
    assert len(ctl.sequence) == 17


# ---------------------------------------------------------------------------
# Speed
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("requested, expected", [(0, MIN_SPEED), (1, 1), (55, 55), (100, 100), (250, MAX_SPEED)])
def test_set_speed_clamps(requested, expected):
    ctl = RunController(EngineConfig.instant(), sequence=Sequence([1, 2, 3, 4, 5]))
    assert ctl.set_speed(requested) == expected
    assert ctl.state.speed == expected
