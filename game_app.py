from ball import Ball
from game_config import GameConfig
from game_map import GameMap
from input_control import MPU6050Source
from maze_engine import MazeEngine
from maze_layout import DEFAULT_LAYOUT, load_layout
from mqtt_client import MQTTClient


class GameApp:
    def __init__(self, config_file_path="config.json", mqtt_client: MQTTClient = None, sources=None):
        self.config = GameConfig(config_file_path)

        if self.config.map_file_name:
            layout = load_layout(self.config.map_file_name)
        else:
            layout = DEFAULT_LAYOUT
        self.game_map = GameMap(layout)

        # The MQTT client is the outcome sink in both control modes
        self.mqtt_client = mqtt_client if mqtt_client is not None else MQTTClient(self.config)

        self.engine = MazeEngine(self.config, self.mqtt_client, self.game_map)
        self.ball = Ball(self.config)
        self.engine.set_ball(self.ball)
        self.tiles = self.engine.build_labyrinth(self.config.screen_width, self.config.screen_height)

        if sources is not None:
            self.sources = list(sources)
        elif self.config.control_mode == "mpu6050":
            self.sources = [self.mqtt_client, MPU6050Source(self.config)]
        else:
            self.sources = [self.mqtt_client]

        self.is_running = False

    def run(self):
        self.is_running = True
        for source in self.sources:
            source.start(self.engine)
        self.engine.resume()
        try:
            self.engine.run(lambda: self.is_running)
        except KeyboardInterrupt:
            print("Interrupted, shutting down")
        finally:
            self.close_app()

    def close_app(self):
        if not self.is_running:
            return
        self.is_running = False
        self.engine.shutdown()
        self.engine.stop()
        for source in reversed(self.sources):
            source.stop()
