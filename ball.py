import numpy as np
from errors import EngineStateError
from game_config import GameConfig
from geometry import Rect


class Ball:
    def __init__(self, config: GameConfig):
        self.config = config
        self.radius = self.config.ball_radius
        self.position = np.array([0, 0], dtype=float)
        self.velocity = np.array([0, 0], dtype=float)
        self.color = (0, 0, 255)
        self.initial_rectangle: Rect | None = None
        self.bounds = None
        self.bounding_box = self._compute_bounding_box()

    def set_initial_rectangle(self, rectangle: Rect):
        self.initial_rectangle = rectangle

    def set_bounds(self, width: float, height: float):
        self.bounds = (float(width), float(height))

    def update_position(self, acc_x: float, acc_y: float) -> Rect:
        if not (np.isfinite(acc_x) and np.isfinite(acc_y)):
            if self.config.debug:
                print(f"Ignoring non-finite acceleration sample ({acc_x}, {acc_y})")
            return self.bounding_box

        dt = self.config.time_step_size / 1000

        self.velocity[0] += acc_x * self.config.acceleration_factor * dt
        self.velocity[1] += acc_y * self.config.acceleration_factor * dt
        self.velocity = np.clip(self.velocity, -self.config.max_speed, self.config.max_speed)

        self.position += self.velocity * dt

        # Keep the ball on screen, bouncing off the border
        if self.bounds is not None:
            low = np.array([self.radius, self.radius], dtype=float)
            high = np.maximum(np.array(self.bounds) - self.radius, low)
            for axis in range(2):
                if self.position[axis] < low[axis]:
                    self.position[axis] = low[axis]
                    self.velocity[axis] = -self.velocity[axis] * self.config.damping_factor
                elif self.position[axis] > high[axis]:
                    self.position[axis] = high[axis]
                    self.velocity[axis] = -self.velocity[axis] * self.config.damping_factor

        self.bounding_box = self._compute_bounding_box()
        return self.bounding_box

    def set_color(self, color: tuple[int, int, int]):
        self.color = color

    def reset_position(self):
        if self.initial_rectangle is None:
            raise EngineStateError("Ball has no initial rectangle, build the map first.")
        self.position = np.array([
            (self.initial_rectangle.left + self.initial_rectangle.right) / 2,
            (self.initial_rectangle.top + self.initial_rectangle.bottom) / 2
        ], dtype=float)
        self.reset_velocity()
        self.bounding_box = self._compute_bounding_box()

    def reset_velocity(self):
        self.velocity = np.array([0, 0], dtype=float)

    def _compute_bounding_box(self) -> Rect:
        x, y = float(self.position[0]), float(self.position[1])
        return Rect(x - self.radius, y - self.radius, x + self.radius, y + self.radius)
