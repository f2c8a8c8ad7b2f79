"""
Unit tests for the playback cursor.
"""

from engine import SPEED_PRESETS, Stepper, StepperState
from tracers import trace_shortest_path


def _loaded(steps=("s0", "s1", "s2", "s3"), **kwargs):
    stepper = Stepper(**kwargs)
    stepper.load(list(steps))
    return stepper


def test_load_positions_on_first_frame():
    stepper = _loaded()

    assert stepper.state is StepperState.PAUSED
    assert stepper.current_idx == 0
    assert stepper.current_step == "s0"
    assert stepper.total_steps == 4


def test_load_empty_trace_stays_idle():
    stepper = _loaded(steps=())

    assert stepper.state is StepperState.IDLE
    assert stepper.current_step is None
    assert stepper.next_step() is False
    assert stepper.goto_step(3) == -1


def test_next_and_prev():
    stepper = _loaded()

    assert stepper.next_step()
    assert stepper.next_step()
    assert stepper.current_step == "s2"
    assert stepper.prev_step()
    assert stepper.current_step == "s1"


def test_next_at_end_finishes():
    stepper = _loaded()
    stepper.jump_to_end()

    assert stepper.is_finished
    assert stepper.next_step() is False
    assert stepper.current_step == "s3"


def test_prev_at_start_is_noop():
    stepper = _loaded()

    assert stepper.prev_step() is False
    assert stepper.current_idx == 0


def test_goto_clamps_into_range():
    stepper = _loaded()

    assert stepper.goto_step(-5) == 0
    assert stepper.goto_step(99) == 3
    assert stepper.is_finished
    assert stepper.goto_step(1) == 1
    assert stepper.state is StepperState.PAUSED


def test_load_with_index_clamps():
    stepper = Stepper()
    stepper.load(["a", "b"], index=10)

    assert stepper.current_idx == 1
    assert stepper.is_finished


def test_rewind_after_finish():
    stepper = _loaded()
    stepper.jump_to_end()
    stepper.rewind()

    assert stepper.current_idx == 0
    assert stepper.state is StepperState.PAUSED


def test_on_step_callback_sees_every_move():
    seen = []
    stepper = _loaded(on_step=seen.append)
    stepper.next_step()
    stepper.goto_step(3)
    stepper.prev_step()

    assert seen == ["s0", "s1", "s3", "s2"]


def test_tick_advances_once_per_interval():
    stepper = _loaded(speed="fast")
    stepper.play()
    now = stepper._last_tick
    interval = SPEED_PRESETS["fast"]

    assert stepper.tick(now=now + interval / 2) is False
    now += interval * 1.5
    assert stepper.tick(now=now) is True
    assert stepper.current_idx == 1
    assert stepper.tick(now=now + interval / 2) is False
    now += interval * 1.5
    assert stepper.tick(now=now) is True
    now += interval * 1.5
    assert stepper.tick(now=now) is True
    assert stepper.is_finished
    assert stepper.tick(now=now + interval * 1.5) is False


def test_tick_ignored_when_paused():
    stepper = _loaded()
    stepper.toggle_play()
    stepper.toggle_play()

    assert stepper.state is StepperState.PAUSED
    assert stepper.tick(now=stepper._last_tick + 100) is False


def test_play_after_finish_does_nothing():
    stepper = _loaded()
    stepper.jump_to_end()
    stepper.play()

    assert not stepper.is_playing


def test_speed_settings():
    stepper = Stepper()
    stepper.set_speed("slow")
    assert stepper.speed == SPEED_PRESETS["slow"]
    stepper.set_speed("warp")
    assert stepper.speed == SPEED_PRESETS["medium"]
    stepper.set_speed_value(0.0)
    assert stepper.speed == 0.05


def test_seeking_a_real_trace_is_random_access(scenario_graph):
    steps = trace_shortest_path(scenario_graph.node_list(), scenario_graph.edge_list(), "A")
    stepper = Stepper()
    stepper.load(steps)

    stepper.goto_step(len(steps) - 1)
    assert stepper.current_step.distances["D"] == 6
    stepper.goto_step(0)
    assert stepper.current_step is steps[0]
