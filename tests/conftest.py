import pytest

from ball import Ball
from game_config import GameConfig
from maze_engine import MazeEngine
from outcome_sink import OutcomeSink


class RecordingSink(OutcomeSink):
    def __init__(self):
        self.events = []
        self.background_colors = []

    def on_victory(self):
        self.events.append("victory")

    def on_defeat(self):
        self.events.append("defeat")

    def set_background_color(self, color):
        self.background_colors.append(color)


class FakeMQTT:
    """Stands in for paho's Client: records publishes, never touches the network."""

    def __init__(self):
        self.published = []
        self.subscribed = []
        self.connected_to = None
        self.loop_running = False
        self.on_connect = None
        self.on_message = None

    def publish(self, topic, payload=None, qos=0, retain=False):
        self.published.append((topic, payload))

    def subscribe(self, topic):
        self.subscribed.append(topic)

    def connect(self, host, port, keepalive):
        self.connected_to = (host, port)

    def loop_start(self):
        self.loop_running = True

    def loop_stop(self):
        self.loop_running = False

    def disconnect(self):
        self.connected_to = None


@pytest.fixture
def config():
    return GameConfig(None)


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def engine(config, sink):
    """Engine built on a 1000x700 screen (50x50 tiles)."""
    engine = MazeEngine(config, sink)
    engine.set_ball(Ball(config))
    engine.build_labyrinth(1000, 700)
    return engine
