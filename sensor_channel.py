import queue
import threading


class SensorChannel:
    """FIFO of samples for one sensor.

    Any thread may post; only the engine drains. While detached, posted
    samples are dropped.
    """

    def __init__(self, name: str):
        self.name = name
        self._queue = queue.Queue()
        self._attached = False
        # post and detach must not interleave, or a sample could outlive detach()
        self._lock = threading.Lock()
        self.dropped = 0

    @property
    def attached(self) -> bool:
        return self._attached

    def attach(self):
        with self._lock:
            self._attached = True

    def detach(self) -> int:
        """Stop accepting samples. Returns how many pending samples were discarded."""
        with self._lock:
            self._attached = False
            return len(self.drain())

    def post(self, sample) -> bool:
        with self._lock:
            if not self._attached:
                self.dropped += 1
                return False
            self._queue.put(sample)
            return True

    def drain(self) -> list:
        samples = []
        while True:
            try:
                samples.append(self._queue.get_nowait())
            except queue.Empty:
                return samples
