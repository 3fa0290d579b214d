"""Engine lifecycle and dispatch tests."""
import threading

import numpy as np
import pytest

from ball import Ball
from collision import Outcome
from errors import EngineStateError
from game_config import GameConfig
from geometry import Rect
from maze_engine import EngineState, MazeEngine


def _move_next_to_left_wall(engine):
    # center x=55 puts the box over the column 0 holes
    engine.ball.position = np.array([55.0, 300.0])


def test_build_requires_ball(config, sink):
    engine = MazeEngine(config, sink)
    with pytest.raises(EngineStateError, match="Ball not set"):
        engine.build_labyrinth(1000, 700)
    assert engine.state == EngineState.UNINITIALIZED


def test_build_binds_start_rectangle(engine):
    assert engine.state == EngineState.BUILT
    assert len(engine.tiles) == 108
    assert engine.ball.initial_rectangle == Rect(100, 100, 150, 150)
    assert engine.ball.bounding_box == Rect(115, 115, 135, 135)


def test_build_only_once(engine):
    with pytest.raises(EngineStateError, match="already built"):
        engine.build_labyrinth(1000, 700)


def test_resume_requires_map(config, sink):
    engine = MazeEngine(config, sink)
    engine.set_ball(Ball(config))
    with pytest.raises(EngineStateError, match="Map not built"):
        engine.resume()


def test_reset_requires_ball(config, sink):
    with pytest.raises(EngineStateError):
        MazeEngine(config, sink).reset()


def test_handle_accelerometer_requires_map(config, sink):
    engine = MazeEngine(config, sink)
    engine.set_ball(Ball(config))
    with pytest.raises(EngineStateError):
        engine.handle_accelerometer(1, 1)


def test_lifecycle_transitions(engine):
    engine.resume()
    assert engine.state == EngineState.RUNNING
    assert engine.accelerometer_channel.attached

    engine.resume()
    assert engine.state == EngineState.RUNNING

    engine.stop()
    assert engine.state == EngineState.STOPPED
    assert not engine.light_channel.attached

    engine.stop()
    assert engine.state == EngineState.STOPPED

    engine.resume()
    assert engine.state == EngineState.RUNNING


def test_samples_are_dropped_while_not_running(engine, sink):
    assert engine.post_accelerometer(1, 1) is False
    assert engine.post_light([0, 0, 10]) is False
    engine.resume()
    engine.step()
    assert sink.background_colors == []
    assert engine.ball.bounding_box == Rect(115, 115, 135, 135)


def test_stop_discards_pending_samples(engine, sink):
    engine.resume()
    engine.post_light([0, 0, 10])
    engine.stop()
    engine.resume()
    engine.step()
    assert sink.background_colors == []


def test_step_applies_magnetic_color(engine):
    engine.resume()
    engine.post_magnetic(25, 0, 1000)
    engine.step()
    assert engine.ball.color == (128, 0, 255)


def test_step_forwards_background_color(engine, sink):
    engine.resume()
    engine.post_light([0, 0, 55])
    engine.post_light([0, 0, 400])
    engine.step()
    assert sink.background_colors == [(200, 200, 200), (0, 0, 0)]


def test_unclamped_light_color(sink):
    config = GameConfig(None)
    config.clamp_light_color = False
    engine = MazeEngine(config, sink)
    engine.set_ball(Ball(config))
    engine.build_labyrinth(1000, 700)
    engine.resume()
    engine.post_light([0, 0, 300])
    engine.step()
    assert sink.background_colors == [(-45, -45, -45)]


def test_non_finite_light_is_ignored(engine, sink):
    engine.handle_light([0, 0, float("nan")])
    assert sink.background_colors == []


def test_step_moves_ball_without_event(engine, sink):
    engine.resume()
    engine.post_accelerometer(5, 5)
    assert engine.step() == []
    assert engine.ball.bounding_box.left > 115
    assert sink.events == []


def test_goal_box_fires_single_victory(engine, sink):
    assert engine.dispatch_collision(Rect(400, 550, 450, 600)) == Outcome.VICTORY
    assert sink.events == ["victory"]


def test_goal_fires_single_victory_through_step(engine, sink):
    engine.resume()
    # centered on the goal tile (8, 11)
    engine.ball.position = np.array([425.0, 575.0])
    engine.post_accelerometer(0, 0)
    engine.post_accelerometer(0, 0)
    engine.post_accelerometer(0, 0)

    assert engine.step() == [Outcome.VICTORY]
    assert sink.events == ["victory"]
    assert engine.state == EngineState.STOPPED

    assert engine.post_accelerometer(0, 0) is False
    assert engine.step() == []
    assert sink.events == ["victory"]


def test_defeat_pauses_engine(engine, sink):
    engine.resume()
    _move_next_to_left_wall(engine)
    engine.post_accelerometer(0, 0)
    engine.post_accelerometer(0, 0)
    engine.post_accelerometer(0, 0)

    assert engine.step() == [Outcome.DEFEAT]
    assert sink.events == ["defeat"]
    assert engine.state == EngineState.STOPPED

    # frozen until the UI resumes
    assert engine.post_accelerometer(0, 0) is False
    assert engine.step() == []
    assert sink.events == ["defeat"]


def test_reset_and_resume_after_defeat(engine, sink):
    engine.resume()
    _move_next_to_left_wall(engine)
    engine.post_accelerometer(0, 0)
    engine.step()

    engine.reset()
    assert engine.state == EngineState.STOPPED
    assert engine.ball.bounding_box == Rect(115, 115, 135, 135)

    engine.resume()
    engine.post_accelerometer(0, 0)
    assert engine.step() == []
    assert sink.events == ["defeat"]


def test_outcomes_repeat_without_pause(sink):
    config = GameConfig(None)
    config.pause_on_outcome = False
    engine = MazeEngine(config, sink)
    engine.set_ball(Ball(config))
    engine.build_labyrinth(1000, 700)
    engine.resume()
    _move_next_to_left_wall(engine)
    engine.post_accelerometer(0, 0)
    engine.post_accelerometer(0, 0)

    assert engine.step() == [Outcome.DEFEAT, Outcome.DEFEAT]
    assert engine.state == EngineState.RUNNING


def test_samples_from_several_threads(engine):
    engine.resume()

    def produce():
        for _ in range(250):
            engine.post_accelerometer(0, 0)

    threads = [threading.Thread(target=produce) for _ in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(engine.accelerometer_channel.drain()) == 1000


def test_run_steps_until_told_to_stop(engine, sink):
    engine.resume()
    engine.post_light([0, 0, 5])
    calls = []

    def should_continue():
        calls.append(1)
        return len(calls) <= 3

    engine.run(should_continue)
    assert len(calls) == 4
    assert sink.background_colors == [(250, 250, 250)]


def test_shutdown_stops_run_loop(engine):
    engine.resume()
    runner = threading.Thread(target=engine.run, daemon=True)
    runner.start()
    engine.shutdown()
    runner.join(timeout=2)
    assert not runner.is_alive()
