import sys
import threading
import time
from abc import ABC, abstractmethod

from game_config import GameConfig

if sys.platform == "linux":
    try:
        from mpu6050 import mpu6050
    except ImportError:
        print("mpu6050 module not found")
        mpu6050 = None
else:
    mpu6050 = None


class SensorSource(ABC):
    """Something that delivers sensor samples to the engine channels from its own thread."""

    @abstractmethod
    def start(self, engine):
        pass

    @abstractmethod
    def stop(self):
        pass


class MPU6050Source(SensorSource):
    def __init__(self, config: GameConfig, sensor=None):
        if sensor is None:
            if mpu6050 is None:
                raise ImportError("mpu6050 module not found")
            sensor = mpu6050(0x68)
        self.config = config
        self.sensor = sensor
        self._engine = None
        self._thread: threading.Thread = None
        self._stop_event = threading.Event()

    def get_acceleration(self) -> tuple[float, float] | None:
        """Read one sample, compensating the sensor orientation.

        Returns:
            tuple[float, float] | None: (x, y) acceleration, None if the sensor failed 10 times in a row
        """
        for i in range(10):
            try:
                accel_data = self.sensor.get_accel_data()
                return (accel_data['y'], -accel_data['x'])
            except OSError as e:
                print("MPU Error count: ", i + 1, e)

        return None

    def poll(self) -> bool:
        acceleration = self.get_acceleration()
        if acceleration is None:
            return False
        return self._engine.post_accelerometer(*acceleration)

    def start(self, engine):
        if self._thread is not None:
            return
        self._engine = engine
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._poll_loop, name="mpu6050", daemon=True)
        self._thread.start()

    def stop(self):
        if self._thread is None:
            return
        self._stop_event.set()
        self._thread.join()
        self._thread = None

    def _poll_loop(self):
        period = self.config.time_step_size / 1000
        next_time = time.monotonic()
        while not self._stop_event.is_set():
            self.poll()
            next_time += period
            delay = next_time - time.monotonic()
            if delay > 0:
                self._stop_event.wait(delay)
            else:
                next_time = time.monotonic()
