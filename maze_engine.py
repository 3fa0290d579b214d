import threading
import time
from enum import Enum

import numpy as np
from ball import Ball
from collision import Outcome, find_first_collision, classify
from color_mapping import LIGHT_VALUE_INDEX, light_to_background, magnetic_to_color
from errors import EngineStateError
from game_config import GameConfig
from game_map import GameMap
from geometry import Rect
from outcome_sink import OutcomeSink
from sensor_channel import SensorChannel
from tile import Tile


class EngineState(Enum):
    UNINITIALIZED = "uninitialized"
    BUILT = "built"
    RUNNING = "running"
    STOPPED = "stopped"


class MazeEngine:
    """Physics side of the maze.

    Sensor samples are posted to one channel per sensor from whatever thread
    delivers them. ``step`` (or ``run``, which calls it at a fixed rate) is
    the only consumer: it moves the ball, checks it against the tiles and
    forwards victory/defeat and the background color to the sink.
    """

    def __init__(self, config: GameConfig, sink: OutcomeSink, game_map: GameMap = None):
        self.config = config
        self.sink = sink
        self.game_map = game_map if game_map is not None else GameMap()

        self.state = EngineState.UNINITIALIZED
        self.tiles: list[Tile] = []
        self._ball: Ball | None = None

        self.accelerometer_channel = SensorChannel("accelerometer")
        self.magnetic_channel = SensorChannel("magnetic")
        self.light_channel = SensorChannel("light")
        self._channels = [self.accelerometer_channel, self.magnetic_channel, self.light_channel]

        self._lock = threading.RLock()
        self._shutdown = threading.Event()

    @property
    def ball(self) -> Ball:
        return self._ball

    def set_ball(self, ball: Ball):
        with self._lock:
            self._ball = ball

    def build_labyrinth(self, screen_width: float, screen_height: float) -> list[Tile]:
        with self._lock:
            if self._ball is None:
                raise EngineStateError("Ball not set, call set_ball() before building the map.")
            if self.state != EngineState.UNINITIALIZED:
                raise EngineStateError("Map already built for this session.")

            self.tiles = self.game_map.build(screen_width, screen_height)
            self._ball.set_initial_rectangle(GameMap.get_start_rectangle(self.tiles))
            self._ball.set_bounds(screen_width, screen_height)
            self._ball.reset_position()
            self._set_state(EngineState.BUILT)
            return self.tiles

    def resume(self):
        with self._lock:
            if self.state == EngineState.UNINITIALIZED:
                raise EngineStateError("Map not built, call build_labyrinth() before resume().")
            if self.state == EngineState.RUNNING:
                return
            for channel in self._channels:
                channel.attach()
            self._set_state(EngineState.RUNNING)

    def stop(self):
        with self._lock:
            if self.state != EngineState.RUNNING:
                return
            for channel in self._channels:
                discarded = channel.detach()
                if discarded and self.config.debug:
                    print(f"Discarded {discarded} pending {channel.name} samples")
            self._set_state(EngineState.STOPPED)

    def reset(self):
        with self._lock:
            if self._ball is None:
                raise EngineStateError("Ball not set, nothing to reset.")
            self._ball.reset_position()
            if self.config.debug:
                print("Ball reset to start position")

    def post_accelerometer(self, x: float, y: float) -> bool:
        return self.accelerometer_channel.post((x, y))

    def post_magnetic(self, x: float, y: float, z: float) -> bool:
        return self.magnetic_channel.post((x, y, z))

    def post_light(self, values) -> bool:
        return self.light_channel.post(tuple(values))

    def step(self) -> list[Outcome]:
        """Handle every pending sample once. Returns the victory/defeat outcomes raised."""
        outcomes = []
        with self._lock:
            if self.state != EngineState.RUNNING:
                return outcomes

            for values in self.magnetic_channel.drain():
                self.handle_magnetic(*values)
            for values in self.light_channel.drain():
                self.handle_light(values)

            for acc_x, acc_y in self.accelerometer_channel.drain():
                outcome = self.handle_accelerometer(acc_x, acc_y)
                if outcome in (Outcome.DEFEAT, Outcome.VICTORY):
                    outcomes.append(outcome)
                    if self.config.pause_on_outcome:
                        # Freeze until the UI resets and resumes, the rest of the samples are stale
                        self.stop()
                        break
        return outcomes

    def run(self, should_continue=None):
        """Call step() every time_step_size ms until shutdown() or should_continue() is False."""
        period = self.config.time_step_size / 1000
        next_time = time.monotonic()
        while not self._shutdown.is_set():
            if should_continue is not None and not should_continue():
                break
            self.step()
            next_time += period
            delay = next_time - time.monotonic()
            if delay > 0:
                self._shutdown.wait(delay)
            else:
                next_time = time.monotonic()

    def shutdown(self):
        self._shutdown.set()

    def handle_accelerometer(self, acc_x: float, acc_y: float) -> Outcome:
        with self._lock:
            self._require_built()
            hit_box = self._ball.update_position(acc_x, acc_y)
            return self.dispatch_collision(hit_box)

    def dispatch_collision(self, hit_box: Rect) -> Outcome:
        with self._lock:
            tile = find_first_collision(hit_box, self.tiles)
            outcome = classify(tile)
            if outcome == Outcome.DEFEAT:
                if self.config.debug:
                    print(f"Ball fell into {tile}")
                self.sink.on_defeat()
            elif outcome == Outcome.VICTORY:
                if self.config.debug:
                    print(f"Ball reached {tile}")
                self.sink.on_victory()
            return outcome

    def handle_magnetic(self, x: float, y: float, z: float):
        with self._lock:
            if self._ball is None:
                raise EngineStateError("Ball not set, cannot apply magnetic color.")
            self._ball.set_color(magnetic_to_color(x, y, z, self.config.magnetic_max_range))

    def handle_light(self, values):
        if not np.isfinite(values[LIGHT_VALUE_INDEX]):
            if self.config.debug:
                print(f"Ignoring non-finite light sample {values}")
            return
        self.sink.set_background_color(light_to_background(values, self.config.clamp_light_color))

    def _require_built(self):
        if self._ball is None:
            raise EngineStateError("Ball not set, call set_ball() first.")
        if self.state == EngineState.UNINITIALIZED:
            raise EngineStateError("Map not built, call build_labyrinth() first.")

    def _set_state(self, state: EngineState):
        if self.config.debug:
            print(f"Engine {self.state.value} -> {state.value}")
        self.state = state
